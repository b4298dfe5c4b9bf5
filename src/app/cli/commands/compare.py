"""
Compare command: export an OpenAPI document, rebuild it and report differences.
"""

import argparse
import logging
from typing import Any, Dict

from constants import ExitCode
from core.validators import InputValidator
from ..helpers import print_header, print_footer
from .base import BaseCommand, load_openapi_document


logger = logging.getLogger(__name__)


def _print_set_difference(label: str, comparison: Dict[str, Any]) -> None:
    if comparison["only_in_first"]:
        print(f"  {label} lost: {', '.join(comparison['only_in_first'])}")
    if comparison["only_in_second"]:
        print(f"  {label} gained: {', '.join(comparison['only_in_second'])}")


class CompareCommand(BaseCommand):
    """
    Round-trip an OpenAPI document through the TTL vocabulary.

    Usage:
        compare <openapi.json> [--verbose] [--save-export out.ttl]

    Exit code is SUCCESS only when the rebuilt document is equivalent.
    """

    def execute(self, args: argparse.Namespace) -> int:
        """Execute the compare command."""
        from formats.owl import round_trip_test

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

        result = round_trip_test(document, base_namespace=options['base_namespace'])
        if not result["success"]:
            print(f"✗ Round trip failed: {result['error']}")
            return ExitCode.ERROR

        save_export = getattr(args, 'save_export', None)
        if save_export:
            try:
                validated_output = InputValidator.validate_output_file_path(
                    save_export, allowed_extensions=InputValidator.TTL_OUTPUT_EXTENSIONS
                )
                with open(validated_output, 'w', encoding='utf-8') as f:
                    f.write(result["exported_ttl"])
                print(f"✓ Saved exported TTL to: {validated_output}")
            except (TypeError, ValueError, OSError) as e:
                print(f"✗ Could not save exported TTL: {e}")
                return ExitCode.ERROR

        comparison = result["comparison"]
        print_header("ROUND-TRIP COMPARISON")
        print(f"  Schemas: {comparison['schemas']['count1']} -> {comparison['schemas']['count2']}")
        print(f"  Operations: {comparison['operations']['count1']} -> {comparison['operations']['count2']}")

        if args.verbose:
            _print_set_difference("Schemas", comparison["schemas"])
            _print_set_difference("Operations", comparison["operations"])
            for name in comparison["schema_mismatches"]:
                print(f"  Schema differs: {name}")
            for key in comparison["operation_mismatches"]:
                print(f"  Operation differs: {key}")
            for warning in result["warnings"]:
                print(f"  ⚠ {warning}")
        print_footer()

        if comparison["is_equivalent"]:
            print("✓ ROUND-TRIP SUCCESS: Documents are equivalent")
            return ExitCode.SUCCESS

        print("✗ ROUND-TRIP FAILED: Documents differ")
        if not args.verbose:
            print("  Use --verbose to list the differences")
        return ExitCode.ERROR
