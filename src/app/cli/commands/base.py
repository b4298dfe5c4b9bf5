"""
Base command class and protocols.

This module contains the base command class that all CLI commands inherit from,
as well as protocol definitions for dependency injection.
"""

import argparse
import json
import logging
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Dict, Optional, Protocol

from ..helpers import (
    load_config,
    get_default_config_path,
    setup_logging,
    resolve_conversion_options,
    print_header,
    print_footer,
    format_count_summary,
)
from shared.models import ConversionResult, ConverterProtocol


logger = logging.getLogger(__name__)


# ============================================================================
# Helper Utilities
# ============================================================================

def print_conversion_summary(result: ConversionResult, heading: Optional[str] = None) -> None:
    """Print a consistent summary for any converter result."""
    if heading:
        print_header(heading)
    print(result.get_summary())
    if result.has_skipped_items:
        print("  Skipped by type:")
        print(format_count_summary(result.skipped_by_type, prefix="    "))
    if heading:
        print_footer()


# ============================================================================
# Protocols for Dependency Injection
# ============================================================================

class IConverter(ConverterProtocol, Protocol):
    """Alias for the shared converter protocol."""

    def convert_file(self, file_path: Any, rdf_format: Optional[str] = None,
                     force_large_file: bool = False) -> ConversionResult:
        """Convert an ontology file."""
        ...


# ============================================================================
# Base Command Class
# ============================================================================

class BaseCommand(ABC):
    """
    Base class for CLI commands.

    Provides common functionality like configuration loading and logging setup.
    Subclasses should implement the execute() method.
    """

    def __init__(
        self,
        config_path: Optional[str] = None,
        converter: Optional[IConverter] = None,
    ):
        """
        Initialize the command.

        Args:
            config_path: Path to configuration file. An explicit path must
                exist; the default path is optional.
            converter: Optional converter instance (for dependency injection).
        """
        self._explicit_config = config_path is not None
        self.config_path = config_path or get_default_config_path()
        self._converter = converter
        self._config: Optional[Dict[str, Any]] = None

    @property
    def config(self) -> Dict[str, Any]:
        """Lazy-load configuration; an absent default config reads as empty."""
        if self._config is None:
            if self._explicit_config or Path(self.config_path).exists():
                self._config = load_config(self.config_path)
            else:
                logger.debug(f"No configuration file at {self.config_path}, using defaults")
                self._config = {}
        return self._config

    def setup_logging_from_config(self) -> None:
        """Setup logging from the ``logging`` config section.

        Raises:
            FileNotFoundError: If an explicitly given config file is missing.
            ValueError: If the config file is not valid JSON.
        """
        setup_logging(config=self.config.get('logging', {}))

    def prepare(self, args: argparse.Namespace) -> Dict[str, Any]:
        """
        Configure logging and merge config-file and command-line options.

        Returns:
            Conversion options (see resolve_conversion_options).

        Raises:
            FileNotFoundError: If an explicitly given config file is missing.
            PermissionError: If the config file cannot be read.
            ValueError: If the config file or its values are invalid.
        """
        self.setup_logging_from_config()
        return resolve_conversion_options(self.config, args)

    @abstractmethod
    def execute(self, args: argparse.Namespace) -> int:
        """
        Execute the command.

        Args:
            args: Parsed command-line arguments.

        Returns:
            Exit code (0 for success, non-zero for error).
        """
        pass


def load_openapi_document(path: Any) -> Dict[str, Any]:
    """
    Read and parse an OpenAPI JSON document from disk.

    Raises:
        FileNotFoundError: If the file does not exist
        ValueError: If the path is invalid or the file is not a JSON object
    """
    from core.validators import InputValidator

    validated_path = InputValidator.validate_input_openapi_path(path)
    try:
        with open(validated_path, 'r', encoding='utf-8') as f:
            document = json.load(f)
    except json.JSONDecodeError as e:
        raise ValueError(
            f"Invalid JSON in {validated_path} at line {e.lineno}, column {e.colno}: {e.msg}"
        )
    if not isinstance(document, dict):
        raise ValueError(f"OpenAPI document must be a JSON object, got {type(document).__name__}")
    return document
