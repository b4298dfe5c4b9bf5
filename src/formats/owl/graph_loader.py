"""
Ontology Graph Loader Module

This module handles RDF parsing with memory management.

Components:
- MemoryManager: Pre-flight memory checks before parsing large files
- OntologyGraphLoader: RDF parsing and graph creation with validation
"""

import logging
from pathlib import Path
from typing import Optional, Tuple, Union

import psutil
from rdflib import Graph
from rdflib.util import guess_format

from constants import MemoryLimits

logger = logging.getLogger(__name__)


class MemoryManager:
    """
    Manage memory usage during RDF parsing to prevent out-of-memory crashes.

    Provides pre-flight memory checks before loading large ontology files
    to fail gracefully with helpful error messages instead of crashing.
    """

    MIN_AVAILABLE_MB = MemoryLimits.MIN_AVAILABLE_MEMORY_MB // 2
    MAX_SAFE_FILE_MB = MemoryLimits.MAX_SAFE_FILE_MB
    MEMORY_MULTIPLIER = MemoryLimits.MEMORY_MULTIPLIER

    LOAD_FACTOR = 0.7  # Only use 70% of available memory as safe threshold

    @staticmethod
    def get_available_memory_mb() -> float:
        """
        Get available system memory in MB.

        Returns:
            Available memory in MB, or infinity if detection fails.
        """
        try:
            return psutil.virtual_memory().available / (1024 * 1024)
        except (OSError, RuntimeError) as e:
            logger.warning(f"Could not determine available memory: {e}")
            return float('inf')

    @classmethod
    def check_memory_available(cls, file_size_mb: float, force: bool = False) -> Tuple[bool, str]:
        """
        Check if enough memory is available to parse a file.

        Args:
            file_size_mb: Size of the file in MB.
            force: If True, skip safety checks and allow large files.

        Returns:
            Tuple of (can_proceed: bool, message: str)
        """
        estimated_usage_mb = file_size_mb * cls.MEMORY_MULTIPLIER

        if not force and file_size_mb > cls.MAX_SAFE_FILE_MB:
            return False, (
                f"File size ({file_size_mb:.1f}MB) exceeds safe limit ({cls.MAX_SAFE_FILE_MB}MB). "
                f"Estimated memory required: ~{estimated_usage_mb:.0f}MB. "
                f"To process anyway, use --force-memory."
            )

        available_mb = cls.get_available_memory_mb()

        if available_mb == float('inf'):
            return True, f"Memory check unavailable. Proceeding with {file_size_mb:.1f}MB file."

        if available_mb < cls.MIN_AVAILABLE_MB and not force:
            return False, (
                f"Insufficient free memory. "
                f"Available: {available_mb:.0f}MB, "
                f"Minimum required: {cls.MIN_AVAILABLE_MB}MB."
            )

        safe_threshold_mb = available_mb * cls.LOAD_FACTOR
        if estimated_usage_mb > safe_threshold_mb and not force:
            return False, (
                f"Ontology may be too large for available memory. "
                f"File size: {file_size_mb:.1f}MB, "
                f"Estimated parsing memory: ~{estimated_usage_mb:.0f}MB, "
                f"Safe threshold: {safe_threshold_mb:.0f}MB "
                f"(Available: {available_mb:.0f}MB)."
            )

        return True, (
            f"Memory OK: File {file_size_mb:.1f}MB, "
            f"estimated usage ~{estimated_usage_mb:.0f}MB of {available_mb:.0f}MB available"
        )


class OntologyGraphLoader:
    """
    Handles RDF parsing with memory management and validation.

    Turtle is assumed unless a format is given or can be guessed from the
    file extension.
    """

    DEFAULT_FORMAT = "turtle"

    @staticmethod
    def infer_format_from_path(path: Union[str, Path]) -> str:
        """Guess the rdflib parser name from a file extension."""
        return guess_format(str(path)) or OntologyGraphLoader.DEFAULT_FORMAT

    @staticmethod
    def _check_memory(size_mb: float, force_large_file: bool) -> None:
        can_proceed, memory_message = MemoryManager.check_memory_available(
            size_mb,
            force=force_large_file
        )
        if not can_proceed:
            logger.error(f"Memory check failed: {memory_message}")
            raise MemoryError(memory_message)
        logger.debug(f"Memory check: {memory_message}")

    @staticmethod
    def _parse_into_graph(graph: Graph, source_label: str, **parse_kwargs) -> None:
        try:
            graph.parse(**parse_kwargs)
        except MemoryError as e:
            raise MemoryError(
                f"Insufficient memory while parsing {source_label}. "
                f"Original error: {e}"
            ) from e
        except Exception as e:
            logger.error(f"Failed to parse {source_label}: {e}")
            raise ValueError(f"Invalid RDF syntax: {e}") from e

    @classmethod
    def parse_content(
        cls,
        content: str,
        rdf_format: Optional[str] = None,
        force_large_file: bool = False,
    ) -> Tuple[Graph, int]:
        """
        Parse RDF content into a graph.

        Args:
            content: Serialized RDF
            rdf_format: rdflib parser name (default: turtle)
            force_large_file: If True, skip memory safety checks

        Returns:
            Tuple of (parsed Graph, triple count)

        Raises:
            ValueError: If the content is empty, has invalid syntax or holds no triples
            MemoryError: If insufficient memory is available
        """
        if not content or not content.strip():
            raise ValueError("Empty RDF content provided")

        content_size_mb = len(content.encode('utf-8')) / (1024 * 1024)
        cls._check_memory(content_size_mb, force_large_file)

        graph = Graph()
        cls._parse_into_graph(
            graph,
            "RDF content",
            data=content,
            format=rdf_format or cls.DEFAULT_FORMAT,
        )

        triple_count = len(graph)
        if triple_count == 0:
            raise ValueError("No RDF triples found in the provided content")

        logger.info(f"Successfully parsed {triple_count} triples ({content_size_mb:.2f} MB)")
        return graph, triple_count

    @classmethod
    def parse_file(
        cls,
        file_path: Union[str, Path],
        rdf_format: Optional[str] = None,
        force_large_file: bool = False,
    ) -> Tuple[Graph, int]:
        """
        Parse an RDF file into a graph.

        Args:
            file_path: Path to the ontology file
            rdf_format: rdflib parser name; guessed from the extension when omitted
            force_large_file: If True, skip memory safety checks

        Returns:
            Tuple of (parsed Graph, triple count)

        Raises:
            FileNotFoundError: If file doesn't exist
            ValueError: If file has invalid syntax
            MemoryError: If insufficient memory is available
        """
        path = Path(file_path)
        if not path.exists():
            raise FileNotFoundError(f"File not found: {file_path}")

        file_size_mb = path.stat().st_size / (1024 * 1024)
        logger.info(f"File size: {file_size_mb:.2f} MB")
        cls._check_memory(file_size_mb, force_large_file)

        format_name = rdf_format or cls.infer_format_from_path(path)
        graph = Graph()
        cls._parse_into_graph(
            graph,
            f"file {path.name}",
            source=str(path),
            format=format_name,
        )

        triple_count = len(graph)
        if triple_count == 0:
            raise ValueError(f"No RDF triples found in {path}")

        logger.info(f"Successfully parsed {triple_count} triples from {path.name}")
        return graph, triple_count
