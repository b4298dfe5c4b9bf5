"""
Core utilities and cross-cutting concerns for the OWL to OpenAPI converter.

This package provides infrastructure shared by the converters and the CLI:

- Input validation (InputValidator)

Usage:
    from core import InputValidator
    from core.validators import InputValidator
"""

from .validators import InputValidator

__all__ = [
    "InputValidator",
]
