"""
Pytest configuration and fixtures for the test suite.

Defines markers for selective test execution:
    pytest -m unit          # Fast unit tests
    pytest -m integration   # Full conversions and round trips
    pytest -m cli           # Command-line interface tests

Fixtures are centralized in tests/fixtures/ for reuse across all test modules.
"""

import copy
import json
import os
import sys

import pytest

# Add src to path for imports
src_dir = os.path.join(os.path.dirname(__file__), '..', 'src')
if src_dir not in sys.path:
    sys.path.insert(0, src_dir)

# Add tests directory to path for fixtures import
tests_dir = os.path.dirname(__file__)
if tests_dir not in sys.path:
    # Ensure src directory stays ahead of tests for module resolution
    sys.path.insert(1, tests_dir)

# Import centralized fixtures
from fixtures import (
    # TTL fixtures
    COARSE_TTL,
    FINE_TTL,
    CYCLE_TTL,

    # OpenAPI fixtures
    PETSTORE_DOCUMENT,

    # Config fixtures
    SAMPLE_CONFIG,

    # Graph helpers
    build_ontology_graph,
)


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line("markers", "unit: Fast unit tests")
    config.addinivalue_line("markers", "integration: Full conversions and round trips")
    config.addinivalue_line("markers", "cli: Command-line interface tests")


# =============================================================================
# TTL/RDF Fixtures
# =============================================================================

@pytest.fixture
def coarse_ttl():
    """Coarse-convention ontology with schemas, headers, errors and servers."""
    return COARSE_TTL


@pytest.fixture
def fine_ttl():
    """Fine-convention ontology with property nodes, compositions and parameters."""
    return FINE_TTL


@pytest.fixture
def cycle_ttl():
    """Coarse ontology with mutual, self and dangling references."""
    return CYCLE_TTL


@pytest.fixture
def coarse_graph():
    """COARSE_TTL wrapped in the graph facade."""
    return build_ontology_graph(COARSE_TTL)


@pytest.fixture
def fine_graph():
    """FINE_TTL wrapped in the graph facade."""
    return build_ontology_graph(FINE_TTL)


@pytest.fixture
def temp_coarse_file(tmp_path):
    """Create a temporary coarse TTL file for testing."""
    ttl_file = tmp_path / "coarse_api.ttl"
    ttl_file.write_text(COARSE_TTL, encoding="utf-8")
    return str(ttl_file)


@pytest.fixture
def temp_fine_file(tmp_path):
    """Create a temporary fine TTL file for testing."""
    ttl_file = tmp_path / "fine_api.ttl"
    ttl_file.write_text(FINE_TTL, encoding="utf-8")
    return str(ttl_file)


# =============================================================================
# OpenAPI Fixtures
# =============================================================================

@pytest.fixture
def petstore_document():
    """Deep copy of the Pet Store OpenAPI document."""
    return copy.deepcopy(PETSTORE_DOCUMENT)


@pytest.fixture
def temp_openapi_file(tmp_path, petstore_document):
    """Create a temporary OpenAPI JSON file for testing."""
    json_file = tmp_path / "petstore.json"
    json_file.write_text(json.dumps(petstore_document, indent=2), encoding="utf-8")
    return str(json_file)


# =============================================================================
# Configuration Fixtures
# =============================================================================

@pytest.fixture
def sample_config():
    """Sample configuration dictionary."""
    return copy.deepcopy(SAMPLE_CONFIG)


@pytest.fixture
def temp_config_file(tmp_path, sample_config):
    """Create a temporary configuration file for testing."""
    config_file = tmp_path / "config.json"
    config_file.write_text(json.dumps(sample_config, indent=2), encoding="utf-8")
    return str(config_file)


# =============================================================================
# Utility Fixtures
# =============================================================================

@pytest.fixture
def owl_converter():
    """Create an OWLToOpenAPIConverter instance."""
    from formats.owl import OWLToOpenAPIConverter
    return OWLToOpenAPIConverter()


@pytest.fixture
def input_validator():
    """Get InputValidator class for path validation tests."""
    from core.validators import InputValidator
    return InputValidator
