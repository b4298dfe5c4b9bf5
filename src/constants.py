"""
Centralized configuration constants for the OWL to OpenAPI converter.

This module provides a single source of truth for all configuration constants,
default values, annotation vocabulary and limits used throughout the application.
"""

from enum import IntEnum
from typing import Final

# ============================================================================
# Exit Codes
# ============================================================================

class ExitCode(IntEnum):
    """Standard exit codes for CLI commands.

    Following Unix conventions:
    - 0: Success
    - 1: General error
    - 2: Validation/syntax error
    - 3+: Specific error categories
    """
    SUCCESS = 0
    ERROR = 1
    VALIDATION_ERROR = 2
    CONFIG_ERROR = 3
    FILE_NOT_FOUND = 5
    PERMISSION_DENIED = 6


# ============================================================================
# Memory Management
# ============================================================================

class MemoryLimits:
    """Memory management constants."""

    MAX_SAFE_FILE_MB: Final[int] = 500
    """Default maximum file size without explicit override (MB)."""

    MEMORY_MULTIPLIER: Final[float] = 3.5
    """RDFlib typically uses ~3-4x file size in memory."""

    MIN_AVAILABLE_MEMORY_MB: Final[int] = 512
    """Minimum available memory required before processing (MB)."""


# ============================================================================
# Processing Limits
# ============================================================================

class ProcessingLimits:
    """Processing and traversal limits."""

    MAX_INLINE_DEPTH: Final[int] = 32
    """Maximum nesting depth when building anonymous inline schemas."""

    PROGRESS_BAR_THRESHOLD: Final[int] = 10
    """Show progress bars only for collections at least this large."""


# ============================================================================
# Ontology Annotation Vocabulary
# ============================================================================

class OntologyVocabulary:
    """
    Local names of the annotation predicates and structural classes.

    Names are resolved against the ontology namespace and matched exactly
    (case-sensitive). This is the wire contract with whatever produced
    the ontology.
    """

    DEFAULT_NAMESPACE: Final[str] = "http://example.org/api#"
    """Namespace used when the graph binds no default prefix."""

    # Structural classes (members are rdfs:subClassOf these)
    PATHS: Final[str] = "paths"
    SERVERS: Final[str] = "servers"
    SCHEMA_PARENTS: Final[tuple[str, ...]] = ("schemas", "Errors", "data")

    # Metadata nodes
    INFO: Final[str] = "info"
    LIFECYCLE: Final[str] = "Lifecycle"
    OPENAPI: Final[str] = "openapi"
    TITLE: Final[str] = "title"
    VERSION: Final[str] = "version"
    DESCRIPTION: Final[str] = "description"
    DS_SERVICE: Final[str] = "x-ds-service"
    DS_COPYRIGHT: Final[str] = "x-ds-copyright"
    URL: Final[str] = "url"

    # Path nodes
    PATH: Final[str] = "path"
    METHOD: Final[str] = "method"
    SUMMARY: Final[str] = "summary"
    OPERATION_ID: Final[str] = "operationId"
    TAGS: Final[str] = "tags"
    HAS_HEADER: Final[str] = "hasHeader"
    HAS_PARAMETER: Final[str] = "hasParameter"
    HAS_REQUEST_BODY: Final[str] = "hasRequestBody"
    HAS_RESPONSE: Final[str] = "hasResponse"
    HAS_ERROR: Final[str] = "hasError"

    # Coarse (comma-separated) convention
    FIELD_STRING: Final[str] = "field_string"
    FIELD_STRING_ARRAY: Final[str] = "field_stringArray"
    FIELD_REQUIRED: Final[str] = "field_required"
    FIELD_ARRAY: Final[str] = "field_array"
    FIELD_BOOL: Final[str] = "field_bool"
    FIELD_INTEGER: Final[str] = "field_integer"
    RELATION_PREFIX: Final[str] = "has"

    # Fine (per-attribute) convention - schema nodes
    SCHEMA_TYPE: Final[str] = "schemaType"
    SCHEMA_FORMAT: Final[str] = "schemaFormat"
    SCHEMA_TITLE: Final[str] = "schemaTitle"
    SCHEMA_DESCRIPTION: Final[str] = "schemaDescription"
    SCHEMA_ENUM: Final[str] = "schemaEnum"
    SCHEMA_REQUIRED_FIELDS: Final[str] = "schemaRequiredFields"
    HAS_SCHEMA_PROPERTY: Final[str] = "hasSchemaProperty"
    ITEMS_REF: Final[str] = "itemsRef"
    ITEMS_TYPE: Final[str] = "itemsType"
    ITEMS_FORMAT: Final[str] = "itemsFormat"
    HAS_INLINE_ITEMS: Final[str] = "hasInlineSchema_items"

    # Fine convention - property nodes
    PROPERTY_NAME: Final[str] = "propertyName"
    PROPERTY_TYPE: Final[str] = "propertyType"
    PROPERTY_FORMAT: Final[str] = "propertyFormat"
    PROPERTY_REF: Final[str] = "propertyRef"
    PROPERTY_DESCRIPTION: Final[str] = "propertyDescription"
    PROPERTY_ENUM: Final[str] = "propertyEnum"
    PROPERTY_ITEMS_TYPE: Final[str] = "propertyItemsType"
    PROPERTY_ITEMS_FORMAT: Final[str] = "propertyItemsFormat"
    HAS_INLINE_SCHEMA: Final[str] = "hasInlineSchema"

    # Fine convention - parameters, request bodies, responses
    PARAMETER_NAME: Final[str] = "parameterName"
    PARAMETER_IN: Final[str] = "parameterIn"
    PARAMETER_REQUIRED: Final[str] = "parameterRequired"
    PARAMETER_TYPE: Final[str] = "parameterType"
    PARAMETER_FORMAT: Final[str] = "parameterFormat"
    PARAMETER_ENUM: Final[str] = "parameterEnum"
    PARAMETER_DESCRIPTION: Final[str] = "parameterDescription"
    REQUEST_BODY_REQUIRED: Final[str] = "requestBodyRequired"
    REQUEST_BODY_CONTENT_TYPE: Final[str] = "requestBodyContentType"
    RESPONSE_CODE: Final[str] = "responseCode"
    RESPONSE_DESCRIPTION: Final[str] = "responseDescription"
    RESPONSE_CONTENT_TYPE: Final[str] = "responseContentType"
    HAS_RESPONSE_SCHEMA: Final[str] = "hasResponseSchema"

    # Composition operators (indexed predicate families)
    COMPOSITION_OPERATORS: Final[tuple[str, ...]] = ("oneOf", "allOf")

    LIST_SEPARATOR: Final[str] = ","
    ENUM_SEPARATOR: Final[str] = ";"

    @staticmethod
    def composition_ref(operator: str, index: int) -> str:
        """Named-reference predicate for one element, e.g. ``oneOfRef_0``."""
        return f"{operator}Ref_{index}"

    @staticmethod
    def composition_inline(operator: str, index: int) -> str:
        """Inline-schema relation for one element, e.g. ``hasInlineSchema_oneOf_inline_0``."""
        return f"hasInlineSchema_{operator}_inline_{index}"

    @classmethod
    def fine_markers(cls) -> tuple[str, ...]:
        """Predicates whose presence identifies the fine convention."""
        return (
            cls.SCHEMA_TYPE,
            cls.HAS_SCHEMA_PROPERTY,
            cls.PROPERTY_NAME,
            cls.HAS_PARAMETER,
            cls.RESPONSE_CODE,
            cls.composition_ref("oneOf", 0),
            cls.composition_ref("allOf", 0),
        )


# ============================================================================
# OpenAPI Output Defaults
# ============================================================================

class OpenAPIDefaults:
    """Defaults applied while assembling the OpenAPI document."""

    OPENAPI_VERSION: Final[str] = "3.0.1"
    """Version string written to the ``openapi`` field."""

    DEFAULT_TITLE: Final[str] = "Default Title"
    DEFAULT_VERSION: Final[str] = "1.0.0"

    DEFAULT_METHOD: Final[str] = "get"
    HTTP_METHODS: Final[tuple[str, ...]] = (
        "get", "post", "put", "delete", "patch", "head", "options",
    )

    CONTENT_TYPE: Final[str] = "application/json"
    SCHEMA_REF_PREFIX: Final[str] = "#/components/schemas/"

    SUCCESS_CODE: Final[str] = "200"
    SUCCESS_DESCRIPTION: Final[str] = "Operation completed successfully."
    EMPTY_SUCCESS_DESCRIPTION: Final[str] = "No standard output found (Empty)."

    ERROR_STATUS_CODES: Final[tuple[str, ...]] = ("401", "403", "404", "500")
    """Checked in order against the error schema name."""

    DEFAULT_ERROR_CODE: Final[str] = "400"

    PARAMETER_LOCATIONS: Final[tuple[str, ...]] = ("header", "query", "path", "cookie")
    DEFAULT_PARAMETER_LOCATION: Final[str] = "query"

    PRIMITIVE_TYPES: Final[tuple[str, ...]] = ("string", "integer", "number", "boolean")


# ============================================================================
# Conversion Options
# ============================================================================

class ConventionConfig:
    """Annotation convention selection."""

    AUTO: Final[str] = "auto"
    COARSE: Final[str] = "coarse"
    FINE: Final[str] = "fine"

    CHOICES: Final[tuple[str, ...]] = ("auto", "coarse", "fine")
    DEFAULT: Final[str] = "auto"


# ============================================================================
# File Extensions
# ============================================================================

class FileExtensions:
    """Supported file extensions."""

    RDF_EXTENSIONS: Final[tuple[str, ...]] = (
        '.ttl', '.turtle', '.n3', '.nt', '.owl', '.rdf', '.xml', '.jsonld', '.trig',
    )
    """Valid RDF input file extensions."""

    OPENAPI_EXTENSIONS: Final[tuple[str, ...]] = ('.json',)
    """Valid OpenAPI document extensions."""

    TTL_OUTPUT_EXTENSIONS: Final[tuple[str, ...]] = ('.ttl',)
    """Valid exported ontology extensions."""


# ============================================================================
# Logging
# ============================================================================

class LoggingConfig:
    """Logging configuration."""

    DEFAULT_LOG_LEVEL: Final[str] = "INFO"
    """Default logging level."""

    LOG_FORMAT: Final[str] = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    """Default log format string."""

    DATE_FORMAT: Final[str] = "%Y-%m-%d %H:%M:%S"
    """Default date format for logs."""

    DEFAULT_FORMAT_STYLE: Final[str] = "text"
    """Human-readable formatter style."""

    JSON_DATE_FORMAT: Final[str] = "%Y-%m-%dT%H:%M:%S.%fZ"
    """ISO-8601 timestamp format for structured logs."""

    SUPPORTED_FORMATS: Final[tuple[str, ...]] = ("text", "json")
    """Supported formatter styles."""

    MAX_LOG_FILE_MB: Final[int] = 10
    """Maximum log file size before rotation (MB)."""

    LOG_BACKUP_COUNT: Final[int] = 5
    """Number of backup log files to keep."""

    ROTATION_ENABLED: Final[bool] = True
    """Enable log rotation by default when a file handler is configured."""
