"""
Shared data models for the OWL to OpenAPI converter.

This module contains the core data classes used by the ontology readers and
the exporter to represent schemas, operations, documents and conversion
results.

Usage:
    from shared.models import SchemaNode, NamedRef, OpenAPIDocument

    # Or import specific classes
    from shared.models.schema_types import ComponentTable
    from shared.models.conversion import ConversionResult, SkippedItem
"""

from .schema_types import (
    SchemaKind,
    SchemaNode,
    SchemaRef,
    NamedRef,
    InlineRef,
    ComponentTable,
)
from .openapi_types import (
    HttpMethod,
    ParameterLocation,
    Parameter,
    RequestBody,
    Response,
    Operation,
    PathItem,
    Server,
    ApiInfo,
    OpenAPIDocument,
)
from .conversion import (
    ConversionResult,
    SkippedItem,
)
from .base import (
    ConverterProtocol,
    BaseConverter,
)

__all__ = [
    # Schema tree
    "SchemaKind",
    "SchemaNode",
    "SchemaRef",
    "NamedRef",
    "InlineRef",
    "ComponentTable",
    # Document
    "HttpMethod",
    "ParameterLocation",
    "Parameter",
    "RequestBody",
    "Response",
    "Operation",
    "PathItem",
    "Server",
    "ApiInfo",
    "OpenAPIDocument",
    # Conversion results
    "ConversionResult",
    "SkippedItem",
    # Converter protocol and base class
    "ConverterProtocol",
    "BaseConverter",
]
