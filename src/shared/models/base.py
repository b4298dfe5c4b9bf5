"""
Base converter protocol and abstract types.

This module defines the common interface that converters in this project
implement (ontology -> OpenAPI, OpenAPI -> ontology) for consistent behavior
from the CLI.
"""

from abc import ABC, abstractmethod
from typing import Any, Protocol, runtime_checkable

from constants import OntologyVocabulary

__all__ = ['ConverterProtocol', 'BaseConverter']


@runtime_checkable
class ConverterProtocol(Protocol):
    """Structural interface shared by all converters."""

    def convert(self, content: str, **kwargs: Any) -> Any:
        """Convert source content."""
        ...

    def get_format_name(self) -> str:
        """Human-readable name of the source format."""
        ...


class BaseConverter(ABC):
    """
    Abstract base class for converters.

    Provides common functionality and enforces the converter interface.
    Subclasses must implement convert().

    Attributes:
        base_namespace: Namespace used for annotation predicates when the
            source does not declare one.
    """

    def __init__(self, base_namespace: str = OntologyVocabulary.DEFAULT_NAMESPACE) -> None:
        """
        Initialize the converter.

        Args:
            base_namespace: Namespace for annotation predicates.
        """
        self.base_namespace = base_namespace

    @abstractmethod
    def convert(self, content: str, **kwargs: Any) -> Any:
        """
        Convert content.

        Must be implemented by subclasses.
        """
        pass

    def get_format_name(self) -> str:
        """
        Get the name of the source format this converter handles.

        Returns:
            Human-readable format name (e.g., "OWL", "OpenAPI").
        """
        return self.__class__.__name__.replace("Converter", "").split("To")[0]
