"""
Export command for writing an OpenAPI document as annotated TTL.
"""

import argparse
import logging
from pathlib import Path

from constants import ExitCode
from core.validators import InputValidator
from .base import BaseCommand, load_openapi_document


logger = logging.getLogger(__name__)


class ExportCommand(BaseCommand):
    """
    Export an OpenAPI JSON document to the per-attribute TTL vocabulary.

    Usage:
        export <openapi.json> [output.ttl]
    """

    def execute(self, args: argparse.Namespace) -> int:
        """Execute the export command."""
        from formats.owl import OpenAPIToTTLConverter

        try:
            options = self.prepare(args)
        except (FileNotFoundError, PermissionError, ValueError) as e:
            print(f"✗ Configuration error: {e}")
            return ExitCode.CONFIG_ERROR

        try:
            document = load_openapi_document(args.input)
        except FileNotFoundError as e:
            print(f"✗ Input not found: {e}")
            return ExitCode.FILE_NOT_FOUND
        except (TypeError, ValueError, PermissionError) as e:
            print(f"✗ Invalid OpenAPI document: {e}")
            return ExitCode.VALIDATION_ERROR

        input_path = Path(args.input)
        output_path = Path(args.output) if args.output else input_path.with_suffix(".ttl")
        try:
            validated_output = InputValidator.validate_output_file_path(
                output_path, allowed_extensions=InputValidator.TTL_OUTPUT_EXTENSIONS
            )
        except (TypeError, ValueError, PermissionError) as e:
            print(f"✗ Invalid output path: {e}")
            return ExitCode.VALIDATION_ERROR

        print(f"✓ Exporting {input_path} to TTL...")

        try:
            converter = OpenAPIToTTLConverter(base_namespace=options['base_namespace'])
            ttl_content = converter.convert(document)
        except Exception as e:
            logger.debug("Export failed", exc_info=True)
            print(f"✗ Export failed: {e}")
            return ExitCode.ERROR

        try:
            with open(validated_output, 'w', encoding='utf-8') as f:
                f.write(ttl_content)
        except OSError as e:
            print(f"✗ Could not write output: {e}")
            return ExitCode.ERROR

        for warning in converter.warnings:
            print(f"  ⚠ {warning}")
        print(f"✓ Exported to: {validated_output}")
        print(f"  Triples: {len(converter.graph)}")
        return ExitCode.SUCCESS
