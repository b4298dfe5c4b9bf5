"""
CLI command implementations.

This package contains one module per command:
- base.py: Base command class and protocols
- convert.py: ConvertCommand (ontology -> OpenAPI JSON)
- export.py: ExportCommand (OpenAPI JSON -> TTL)
- compare.py: CompareCommand (round trip)
"""

from .base import (
    BaseCommand,
    IConverter,
    load_openapi_document,
    print_conversion_summary,
)
from .convert import ConvertCommand, default_output_path
from .export import ExportCommand
from .compare import CompareCommand


__all__ = [
    # Base
    'BaseCommand',
    'IConverter',
    'load_openapi_document',
    'print_conversion_summary',
    # Commands
    'ConvertCommand',
    'default_output_path',
    'ExportCommand',
    'CompareCommand',
]
