#!/usr/bin/env python3
"""
Annotated OWL/RDF ontology to OpenAPI 3.0 converter.

This is the main entry point of the command-line tool.

Usage:
    python main.py convert <ontology.ttl> [output.json] [--convention fine] [--no-inline]
    python main.py export <openapi.json> [output.ttl]
    python main.py compare <openapi.json> [--verbose]
"""

import sys
from typing import Dict, List, Optional, Type

from app.cli.commands import BaseCommand, CompareCommand, ConvertCommand, ExportCommand
from app.cli.parsers import create_argument_parser
from constants import ExitCode


COMMANDS: Dict[str, Type[BaseCommand]] = {
    'convert': ConvertCommand,
    'export': ExportCommand,
    'compare': CompareCommand,
}


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point. Returns the process exit code."""
    parser = create_argument_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return ExitCode.ERROR

    command = COMMANDS[args.command](config_path=getattr(args, 'config', None))
    try:
        return int(command.execute(args))
    except KeyboardInterrupt:
        print("\n✗ Interrupted")
        return ExitCode.ERROR


if __name__ == '__main__':
    sys.exit(main())
