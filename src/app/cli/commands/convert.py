"""
Convert command: annotated ontology to OpenAPI 3.0 JSON.
"""

import argparse
import json
import logging
from pathlib import Path

from constants import ExitCode
from core.validators import InputValidator
from .base import BaseCommand, print_conversion_summary


logger = logging.getLogger(__name__)

OUTPUT_SUFFIX = ".openapi.json"


def default_output_path(input_path: Path) -> Path:
    """``<input stem>.openapi.json`` in the directory of the input."""
    return input_path.with_name(f"{input_path.stem}{OUTPUT_SUFFIX}")


class ConvertCommand(BaseCommand):
    """
    Rebuild an OpenAPI document from an annotated ontology.

    Usage:
        convert <input> [output] [options]

    Nothing is written unless the conversion and serialization both succeed.
    """

    def execute(self, args: argparse.Namespace) -> int:
        """Execute the convert command."""
        try:
            options = self.prepare(args)
        except (FileNotFoundError, PermissionError, ValueError) as e:
            print(f"✗ Configuration error: {e}")
            return ExitCode.CONFIG_ERROR

        try:
            validated_path = InputValidator.validate_input_ontology_path(args.input)
        except FileNotFoundError as e:
            print(f"✗ Input not found: {e}")
            return ExitCode.FILE_NOT_FOUND
        except PermissionError as e:
            print(f"✗ {e}")
            return ExitCode.PERMISSION_DENIED
        except (TypeError, ValueError) as e:
            print(f"✗ Invalid input path: {e}")
            return ExitCode.VALIDATION_ERROR

        output_path = Path(args.output) if args.output else default_output_path(validated_path)
        try:
            validated_output = InputValidator.validate_output_file_path(
                output_path, allowed_extensions=InputValidator.OPENAPI_EXTENSIONS
            )
        except (TypeError, ValueError, PermissionError) as e:
            print(f"✗ Invalid output path: {e}")
            return ExitCode.VALIDATION_ERROR

        print(f"✓ Converting ontology file: {validated_path}")

        converter = self._converter
        if converter is None:
            from formats.owl import OWLToOpenAPIConverter
            converter = OWLToOpenAPIConverter(
                convention=options['convention'],
                inline_references=options['inline_references'],
                base_namespace=options['base_namespace'],
            )

        try:
            result = converter.convert_file(
                validated_path,
                rdf_format=getattr(args, 'rdf_format', None),
                force_large_file=getattr(args, 'force_memory', False),
            )
            # Serialize fully before opening the output file
            payload = json.dumps(result.document.to_dict(), indent=2, ensure_ascii=False)
        except MemoryError as e:
            print(f"✗ Insufficient memory: {e}")
            print("  Use --force-memory to bypass the memory check")
            return ExitCode.ERROR
        except Exception as e:
            logger.debug("Conversion failed", exc_info=True)
            print(f"✗ Conversion failed: {e}")
            return ExitCode.ERROR

        try:
            with open(validated_output, 'w', encoding='utf-8') as f:
                f.write(payload)
        except OSError as e:
            print(f"✗ Could not write output: {e}")
            return ExitCode.ERROR

        print(f"✓ Saved OpenAPI document to: {validated_output}")
        print_conversion_summary(result, heading="CONVERSION COMPLETE")
        return ExitCode.SUCCESS
