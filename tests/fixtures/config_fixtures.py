"""
Configuration test fixtures for the test suite.

Contains configuration samples for testing config loading, logging setup
and conversion option resolution.
"""

# =============================================================================
# Configuration Fixtures
# =============================================================================

SAMPLE_CONFIG = {
    "logging": {
        "level": "DEBUG",
        "format": "text",
    },
    "conversion": {
        "convention": "fine",
        "inline_references": True,
        "base_namespace": "http://example.org/custom#",
    },
}

MINIMAL_CONFIG = {
    "logging": {
        "level": "WARNING",
    },
}

INVALID_CONVENTION_CONFIG = {
    "conversion": {
        "convention": "medium",
    },
}
