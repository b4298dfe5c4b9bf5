"""
Validation utilities for the OWL to OpenAPI converter.

Module Structure:
- input.py: InputValidator - file path and content validation with security checks

Usage:
    from core.validators import InputValidator
"""

from .input import InputValidator

__all__ = [
    'InputValidator',
]
