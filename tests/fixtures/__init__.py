"""
Centralized test fixtures for the OWL to OpenAPI converter test suite.

This package provides reusable fixtures for testing, including:
- Annotated TTL ontologies (coarse and fine conventions)
- OpenAPI documents for export and round-trip tests
- Configuration fixtures

Usage:
    from fixtures import (
        COARSE_TTL,
        FINE_TTL,
        PETSTORE_DOCUMENT,
        SAMPLE_CONFIG,
    )

Or use the pytest fixtures in conftest.py which import from here.
"""

from .ttl_fixtures import (
    # Coarse convention
    COARSE_TTL,
    SCENARIO_SCHEMA_TTL,
    SCENARIO_OPERATION_TTL,
    SCENARIO_ERRORS_TTL,
    CYCLE_TTL,
    LIFECYCLE_ONLY_TTL,

    # Fine convention
    FINE_TTL,

    # Invalid content
    EMPTY_TTL,
    INVALID_TTL,

    # Large/stress test content
    generate_large_coarse_ttl,
)

from .openapi_fixtures import (
    PETSTORE_DOCUMENT,
)

from .config_fixtures import (
    SAMPLE_CONFIG,
    MINIMAL_CONFIG,
    INVALID_CONVENTION_CONFIG,
)

from .graph_fixtures import (
    build_ontology_graph,
)

__all__ = [
    # TTL fixtures
    "COARSE_TTL",
    "SCENARIO_SCHEMA_TTL",
    "SCENARIO_OPERATION_TTL",
    "SCENARIO_ERRORS_TTL",
    "CYCLE_TTL",
    "LIFECYCLE_ONLY_TTL",
    "FINE_TTL",
    "EMPTY_TTL",
    "INVALID_TTL",
    "generate_large_coarse_ttl",

    # OpenAPI fixtures
    "PETSTORE_DOCUMENT",

    # Config fixtures
    "SAMPLE_CONFIG",
    "MINIMAL_CONFIG",
    "INVALID_CONVENTION_CONFIG",

    # Graph helpers
    "build_ontology_graph",
]
