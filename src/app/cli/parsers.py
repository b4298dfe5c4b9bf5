"""
CLI argument parser configuration.

This module defines the argument parser structure for all CLI commands.
It centralizes all argument parsing logic and provides a clean interface
for the main entry point.

Command Structure:
    - convert <input> [output]         ontology -> OpenAPI JSON
    - export  <openapi.json> [output]  OpenAPI JSON -> annotated TTL
    - compare <openapi.json>           export -> reconstruct round trip
"""

import argparse

from constants import ConventionConfig, OntologyVocabulary


# ============================================================================
# Shared Flag Group Builders
# ============================================================================

def add_config_flags(parser: argparse.ArgumentParser) -> None:
    """Add the configuration file flag."""
    parser.add_argument(
        '--config', '-c',
        help='Path to configuration file (default: config.json in the project root, if present)'
    )


def add_namespace_flag(parser: argparse.ArgumentParser) -> None:
    """Add the annotation namespace flag."""
    parser.add_argument(
        '--base-namespace',
        dest='base_namespace',
        help=(
            'Namespace of the annotation vocabulary, used when the ontology binds '
            f'no default prefix (default: {OntologyVocabulary.DEFAULT_NAMESPACE})'
        )
    )


def add_conversion_flags(parser: argparse.ArgumentParser) -> None:
    """Add ontology reading flags."""
    parser.add_argument(
        '--convention',
        choices=list(ConventionConfig.CHOICES),
        help=(
            "Annotation convention: 'coarse' (comma-separated field lists), "
            "'fine' (per-attribute annotations) or 'auto' to detect it (default: auto)"
        )
    )
    inline_group = parser.add_mutually_exclusive_group()
    inline_group.add_argument(
        '--inline',
        dest='inline',
        action='store_true',
        default=None,
        help='Inline named schema references into component schemas'
    )
    inline_group.add_argument(
        '--no-inline',
        dest='inline',
        action='store_false',
        help='Keep named schema references as $ref'
    )
    parser.add_argument(
        '--rdf-format',
        dest='rdf_format',
        help='rdflib parser name (turtle, xml, json-ld, ...); inferred from the extension by default'
    )


def add_performance_flags(parser: argparse.ArgumentParser) -> None:
    """Add memory safety flags."""
    parser.add_argument(
        '--force-memory',
        action='store_true',
        help='Skip memory safety checks for very large files (use with caution)'
    )


# ============================================================================
# Main Parser Factory
# ============================================================================

def create_argument_parser() -> argparse.ArgumentParser:
    """
    Create and configure the main argument parser.

    Returns:
        Configured ArgumentParser with all subcommands.
    """
    parser = argparse.ArgumentParser(
        prog='owl2openapi',
        description="Annotated OWL/RDF ontology to OpenAPI 3.0 converter",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
    # Rebuild an OpenAPI document from an ontology
    %(prog)s convert samples/api_ontology.ttl
    %(prog)s convert api.owl api.json --convention fine --no-inline

    # Export an OpenAPI document to the per-attribute vocabulary
    %(prog)s export openapi.json openapi.ttl

    # Check that a document survives export and reconstruction
    %(prog)s compare openapi.json --verbose
        """,
    )

    subparsers = parser.add_subparsers(dest='command', help='Available commands')

    _add_convert_parser(subparsers)
    _add_export_parser(subparsers)
    _add_compare_parser(subparsers)

    return parser


# ============================================================================
# Command Parsers
# ============================================================================

def _add_convert_parser(subparsers: argparse._SubParsersAction) -> None:
    """Add the convert command parser."""
    parser = subparsers.add_parser(
        'convert',
        help='Convert an annotated ontology to an OpenAPI 3.0 JSON document'
    )
    parser.add_argument('input', help='Path to the ontology file')
    parser.add_argument(
        'output',
        nargs='?',
        help='Output JSON path (default: <input stem>.openapi.json next to the input)'
    )
    add_conversion_flags(parser)
    add_namespace_flag(parser)
    add_performance_flags(parser)
    add_config_flags(parser)


def _add_export_parser(subparsers: argparse._SubParsersAction) -> None:
    """Add the export command parser."""
    parser = subparsers.add_parser(
        'export',
        help='Export an OpenAPI JSON document to annotated TTL'
    )
    parser.add_argument('input', help='Path to the OpenAPI JSON document')
    parser.add_argument(
        'output',
        nargs='?',
        help='Output TTL path (default: <input stem>.ttl next to the input)'
    )
    add_namespace_flag(parser)
    add_config_flags(parser)


def _add_compare_parser(subparsers: argparse._SubParsersAction) -> None:
    """Add the compare command parser."""
    parser = subparsers.add_parser(
        'compare',
        help='Export an OpenAPI document, rebuild it and report differences'
    )
    parser.add_argument('input', help='Path to the OpenAPI JSON document')
    parser.add_argument(
        '--verbose', '-v',
        action='store_true',
        help='Show detailed comparison results'
    )
    parser.add_argument(
        '--save-export', '-s',
        dest='save_export',
        help='Also write the intermediate TTL to this path'
    )
    add_namespace_flag(parser)
    add_config_flags(parser)
