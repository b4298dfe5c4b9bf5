"""
OWL package - ontology to OpenAPI 3.0 conversion components.

This package contains modular components for rebuilding OpenAPI documents
from annotated OWL/RDF ontologies, and for exporting them back.

Components:
- owl_converter: Main converter class and high-level functions
- openapi_to_ttl: Export OpenAPI documents to annotated TTL, round-trip check
- graph_loader: RDF parsing with memory management
- graph_access: Read-only graph queries by annotation local name
- schema_builder: Coarse and fine schema construction strategies
- composition_resolver: Indexed oneOf/allOf/items predicate families
- property_mapper: has* relations to object and array properties
- reference_inliner: Expansion of named schema references
- operation_assembler: Paths, parameters, request bodies and responses
- metadata_extractor: API info and servers
"""

from .graph_loader import MemoryManager, OntologyGraphLoader
from .graph_access import OntologyGraph, parse_bool_literal, parse_list_literal, uri_to_name
from .composition_resolver import CompositionSequenceResolver
from .property_mapper import PropertyRelationMapper
from .schema_builder import CoarseSchemaBuilder, FineSchemaBuilder, SchemaBuilderProtocol
from .reference_inliner import ReferenceInliner
from .operation_assembler import (
    CoarseParameterReader,
    FineParameterReader,
    OperationAssembler,
    infer_error_status_code,
)
from .metadata_extractor import MetadataExtractor
from .owl_converter import (
    OWLToOpenAPIConverter,
    detect_convention,
    parse_owl_content,
    parse_owl_file,
    convert_owl_file,
)
from .openapi_to_ttl import (
    OpenAPIToTTLConverter,
    compare_documents,
    round_trip_test,
    export_openapi_to_ttl,
)

__all__ = [
    # Loading and graph access
    'MemoryManager',
    'OntologyGraphLoader',
    'OntologyGraph',
    'parse_bool_literal',
    'parse_list_literal',
    'uri_to_name',
    # Schema reconstruction
    'CompositionSequenceResolver',
    'PropertyRelationMapper',
    'SchemaBuilderProtocol',
    'CoarseSchemaBuilder',
    'FineSchemaBuilder',
    'ReferenceInliner',
    # Operations and metadata
    'CoarseParameterReader',
    'FineParameterReader',
    'OperationAssembler',
    'infer_error_status_code',
    'MetadataExtractor',
    # Converters
    'OWLToOpenAPIConverter',
    'detect_convention',
    'parse_owl_content',
    'parse_owl_file',
    'convert_owl_file',
    'OpenAPIToTTLConverter',
    'compare_documents',
    'round_trip_test',
    'export_openapi_to_ttl',
]
