"""
Input validation utilities for the OWL to OpenAPI converter.

This module provides centralized input validation with consistent error messages for:
- Ontology content validation
- File path validation with security checks (ontology, OpenAPI, config, output)

Security features:
- Path traversal detection (../ sequences)
- Symlink detection
- Extension validation
- Directory boundary awareness

Usage:
    from core.validators.input import InputValidator

    validated_path = InputValidator.validate_input_ontology_path(path)
    content = InputValidator.validate_rdf_content(content)
"""

import os
import logging
from pathlib import Path
from typing import Any, List, Optional, Sequence

from constants import FileExtensions

logger = logging.getLogger(__name__)


class InputValidator:
    """
    Centralized input validation for converter entry points.

    All path validators return a resolved absolute Path and raise
    TypeError, ValueError, FileNotFoundError or PermissionError.
    """

    RDF_EXTENSIONS: List[str] = list(FileExtensions.RDF_EXTENSIONS)
    OPENAPI_EXTENSIONS: List[str] = list(FileExtensions.OPENAPI_EXTENSIONS)
    TTL_OUTPUT_EXTENSIONS: List[str] = list(FileExtensions.TTL_OUTPUT_EXTENSIONS)
    CONFIG_EXTENSIONS: List[str] = ['.json']

    TRAVERSAL_PATTERNS = ('../', '..\\', '/..', '\\..')

    @staticmethod
    def validate_rdf_content(content: Any) -> str:
        """
        Validate serialized ontology content.

        Raises:
            ValueError: If content is None or empty
            TypeError: If content is not a string
        """
        if content is None:
            raise ValueError("RDF content cannot be None")

        if not isinstance(content, str):
            raise TypeError(f"RDF content must be string, got {type(content).__name__}")

        if not content.strip():
            raise ValueError("RDF content cannot be empty or whitespace-only")

        return content

    @classmethod
    def _check_path_traversal(cls, path_str: str) -> None:
        """
        Reject paths containing '..' components.

        Raises:
            ValueError: If path traversal detected
        """
        normalized = path_str.replace('\\', '/')
        for pattern in cls.TRAVERSAL_PATTERNS:
            if pattern in path_str or pattern in normalized:
                raise ValueError(
                    f"Path traversal detected in path: {path_str}. "
                    f"Paths containing '..' are not allowed for security reasons."
                )
        if '..' in Path(path_str).parts:
            raise ValueError(
                f"Path traversal detected in path: {path_str}. "
                f"Paths containing '..' components are not allowed."
            )

    @staticmethod
    def _check_symlink(path_obj: Path, strict: bool = False) -> None:
        """
        Check if path is a symlink.

        Args:
            path_obj: Path object to check
            strict: If True, raise exception on symlink; if False, log warning
        """
        try:
            is_link = path_obj.is_symlink()
        except OSError:
            if strict:
                raise ValueError(f"Cannot verify symlink status for: {path_obj}")
            return

        if is_link:
            msg = (
                f"Security error: Symlink detected: {path_obj}. "
                f"Symlinks are not allowed for security reasons. "
                f"Please use the actual file path instead."
            )
            if strict:
                raise ValueError(msg)
            logger.warning(msg)

    @staticmethod
    def _check_directory_boundary(path_obj: Path, warn_only: bool = True) -> None:
        """Check if path is outside the current working directory."""
        try:
            path_obj.relative_to(Path.cwd().resolve())
        except ValueError:
            msg = f"Path is outside current directory: {path_obj}"
            if not warn_only:
                raise ValueError(msg + ". Access to paths outside working directory is restricted.")
            logger.debug(msg + " (this may be intentional for absolute paths)")

    @staticmethod
    def _check_extension(path_obj: Path, allowed_extensions: Optional[Sequence[str]]) -> None:
        if not allowed_extensions:
            return
        normalized_extensions = [
            ext.lower() if ext.startswith('.') else f'.{ext.lower()}'
            for ext in allowed_extensions
        ]
        if path_obj.suffix.lower() not in normalized_extensions:
            raise ValueError(
                f"Invalid file extension: '{path_obj.suffix}'. "
                f"Expected one of: {', '.join(normalized_extensions)}"
            )

    @classmethod
    def _normalize_path_argument(cls, path: Any) -> str:
        if isinstance(path, Path):
            path = str(path)
        if not isinstance(path, str):
            raise TypeError(f"File path must be string, got {type(path).__name__}")
        if not path.strip():
            raise ValueError("File path cannot be empty")
        path = path.strip()
        cls._check_path_traversal(path)
        return path

    @classmethod
    def validate_file_path(
        cls,
        path: Any,
        allowed_extensions: Optional[Sequence[str]] = None,
        check_exists: bool = True,
        check_readable: bool = True,
        restrict_to_cwd: bool = False,
        reject_symlinks: bool = True,
    ) -> Path:
        """
        Validate file path for security and correctness.

        Args:
            path: Path to validate (string or Path)
            allowed_extensions: Allowed extensions (e.g., ['.ttl', '.owl'])
            check_exists: Whether to verify file exists
            check_readable: Whether to verify file is readable
            restrict_to_cwd: If True, reject paths outside current directory
            reject_symlinks: If True, raise exception on symlinks; if False, warn only

        Returns:
            Validated Path object (resolved to absolute path)

        Raises:
            TypeError: If path is not a string
            ValueError: If path is empty, has invalid extension, traversal detected or symlink found
            FileNotFoundError: If file doesn't exist (when check_exists=True)
            PermissionError: If file is not readable (when check_readable=True)
        """
        path = cls._normalize_path_argument(path)

        # Symlinks are checked before resolving, resolve() would follow them
        cls._check_symlink(Path(path), strict=reject_symlinks)
        path_obj = Path(path).resolve()
        cls._check_directory_boundary(path_obj, warn_only=not restrict_to_cwd)

        if check_exists:
            if not path_obj.exists():
                raise FileNotFoundError(f"File not found: {path_obj}")
            if not path_obj.is_file():
                raise ValueError(f"Path is not a file: {path_obj}")

        cls._check_extension(path_obj, allowed_extensions)

        if check_readable and check_exists and not os.access(path_obj, os.R_OK):
            raise PermissionError(f"File is not readable: {path_obj}")

        return path_obj

    @classmethod
    def validate_input_ontology_path(cls, path: Any, restrict_to_cwd: bool = False) -> Path:
        """Validate an input ontology file (any supported RDF serialization)."""
        return cls.validate_file_path(
            path,
            allowed_extensions=cls.RDF_EXTENSIONS,
            restrict_to_cwd=restrict_to_cwd,
        )

    @classmethod
    def validate_input_openapi_path(cls, path: Any, restrict_to_cwd: bool = False) -> Path:
        """Validate an input OpenAPI JSON document."""
        return cls.validate_file_path(
            path,
            allowed_extensions=cls.OPENAPI_EXTENSIONS,
            restrict_to_cwd=restrict_to_cwd,
        )

    @classmethod
    def validate_output_file_path(
        cls,
        path: Any,
        allowed_extensions: Optional[Sequence[str]] = None,
        restrict_to_cwd: bool = False,
        reject_symlinks: bool = True,
    ) -> Path:
        """
        Validate output file path for writing.

        The file need not exist, but its parent directory must exist and be
        writable.

        Raises:
            TypeError: If path is not a string
            ValueError: If path is empty, has invalid extension, or traversal detected
            PermissionError: If parent directory is not writable
        """
        path = cls._normalize_path_argument(path)

        if Path(path).exists():
            cls._check_symlink(Path(path), strict=reject_symlinks)
        path_obj = Path(path).resolve()
        cls._check_directory_boundary(path_obj, warn_only=not restrict_to_cwd)
        cls._check_extension(path_obj, allowed_extensions)

        parent_dir = path_obj.parent
        if not parent_dir.exists():
            raise ValueError(f"Parent directory does not exist: {parent_dir}")

        if not os.access(parent_dir, os.W_OK):
            raise PermissionError(f"Cannot write to directory: {parent_dir}")

        if path_obj.exists() and not os.access(path_obj, os.W_OK):
            raise PermissionError(f"File exists but is not writable: {path_obj}")

        return path_obj

    @classmethod
    def validate_config_file_path(cls, path: Any) -> Path:
        """
        Validate configuration file path.

        Configuration files must be existing, readable JSON files; symlinks
        are rejected.
        """
        return cls.validate_file_path(
            path,
            allowed_extensions=cls.CONFIG_EXTENSIONS,
            check_exists=True,
            check_readable=True,
            reject_symlinks=True,
        )
