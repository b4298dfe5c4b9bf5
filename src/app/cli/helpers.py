"""
CLI helper utilities.

This module provides shared utilities for CLI commands including:
- Configuration loading
- Logging setup
- Conversion option resolution
- Console output formatting
"""

import io
import json
import logging
import os
import sys
import tempfile
from datetime import datetime, timezone
from logging import Handler
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional, Dict, Any, Literal, Tuple, List

from constants import ConventionConfig, LoggingConfig, OntologyVocabulary

# Type alias for log levels
LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


class JSONFormatter(logging.Formatter):
    """A lightweight JSON formatter for structured logging."""

    _RESERVED_FIELDS = {
        "name",
        "msg",
        "args",
        "levelname",
        "levelno",
        "pathname",
        "filename",
        "module",
        "exc_info",
        "exc_text",
        "stack_info",
        "lineno",
        "funcName",
        "created",
        "msecs",
        "relativeCreated",
        "thread",
        "threadName",
        "process",
        "processName",
        "taskName",
    }

    def format(self, record: logging.LogRecord) -> str:  # noqa: D401 - custom JSON body
        timestamp = datetime.fromtimestamp(record.created, tz=timezone.utc).strftime(
            LoggingConfig.JSON_DATE_FORMAT
        )
        payload: Dict[str, Any] = {
            "timestamp": timestamp,
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
        }

        if record.exc_info:
            payload["exception"] = self.formatException(record.exc_info)

        # Extra fields supplied via LoggerAdapter/extra
        for key, value in record.__dict__.items():
            if key in self._RESERVED_FIELDS or key.startswith("_") or key in payload:
                continue
            try:
                json.dumps(value)
                payload[key] = value
            except TypeError:
                payload[key] = str(value)

        return json.dumps(payload, ensure_ascii=False)


_MANAGED_HANDLERS: List[Handler] = []
_LOGGING_SIGNATURE: Optional[Tuple[Any, ...]] = None
_LAST_LOG_FILE: Optional[str] = None


def _ensure_utf8_stdout() -> None:
    """Ensure stdout can handle the status symbols on Windows consoles."""
    if sys.platform == 'win32':
        try:
            sys.stdout.reconfigure(encoding='utf-8', errors='replace')
        except (AttributeError, TypeError):
            try:
                sys.stdout = io.TextIOWrapper(
                    sys.stdout.buffer, encoding='utf-8', errors='replace'
                )
            except AttributeError:
                pass  # Not a TTY


_ensure_utf8_stdout()


def get_default_config_path() -> str:
    """Get the default configuration file path.

    Returns:
        Path to config.json in the project root directory.
    """
    # src/app/cli/helpers.py -> project root
    project_root = Path(__file__).parent.parent.parent.parent
    return str(project_root / "config.json")


def _clear_managed_handlers() -> None:
    """Remove handlers that were added by this module."""
    global _MANAGED_HANDLERS
    root_logger = logging.getLogger()
    for handler in _MANAGED_HANDLERS:
        root_logger.removeHandler(handler)
        handler.close()
    _MANAGED_HANDLERS = []


def _coerce_positive_int(value: Any, default: int) -> int:
    """Convert config-provided values to positive integers."""
    try:
        numeric = int(value)
        return numeric if numeric > 0 else default
    except (TypeError, ValueError):
        return default


def _create_file_handler(
    path: str,
    rotation_enabled: bool,
    max_bytes: int,
    backup_count: int
) -> Handler:
    """Create a file or rotating file handler."""
    if rotation_enabled and max_bytes > 0:
        return RotatingFileHandler(
            path,
            maxBytes=max_bytes,
            backupCount=max(backup_count, 1),
            encoding='utf-8'
        )
    return logging.FileHandler(path, encoding='utf-8')


def setup_logging(
    level: LogLevel = LoggingConfig.DEFAULT_LOG_LEVEL,
    log_file: Optional[str] = None,
    *,
    config: Optional[Dict[str, Any]] = None,
    include_console: bool = True,
) -> Optional[str]:
    """
    Setup logging configuration with fallback locations.

    If the primary log file location fails (permission denied, disk full, etc.),
    attempts to write to fallback locations in order:
    1. Requested location
    2. System temp directory
    3. User home directory
    4. Console-only (final fallback)

    Args:
        level: Log level used when the config does not set one.
        log_file: Log file override.
        config: Optional ``logging`` section of the configuration file.
        include_console: If False, skip adding a console handler.

    Returns:
        The actual log file path used, or None if logging to console only.
    """
    global _LOGGING_SIGNATURE, _LAST_LOG_FILE

    config_dict = dict(config or {})

    resolved_level = str(config_dict.get('level', level or LoggingConfig.DEFAULT_LOG_LEVEL))
    log_level = getattr(logging, resolved_level.upper(), logging.INFO)

    config_file = config_dict.get('file') or config_dict.get('log_file')
    file_path = log_file if log_file is not None else config_file

    format_style = str(config_dict.get('format', LoggingConfig.DEFAULT_FORMAT_STYLE)).lower()
    if format_style not in LoggingConfig.SUPPORTED_FORMATS:
        format_style = LoggingConfig.DEFAULT_FORMAT_STYLE
    if config_dict.get('structured'):
        format_style = 'json'

    formatter: logging.Formatter
    if format_style == 'json':
        formatter = JSONFormatter()
    else:
        formatter = logging.Formatter(
            fmt=config_dict.get('pattern') or LoggingConfig.LOG_FORMAT,
            datefmt=config_dict.get('date_format', LoggingConfig.DATE_FORMAT),
        )

    rotation_cfg = config_dict.get('rotation') if isinstance(config_dict.get('rotation'), dict) else {}
    rotation_enabled = rotation_cfg.get('enabled')
    if rotation_enabled is None:
        rotation_enabled = bool(file_path) and LoggingConfig.ROTATION_ENABLED
    max_bytes = _coerce_positive_int(
        rotation_cfg.get('max_mb', LoggingConfig.MAX_LOG_FILE_MB), LoggingConfig.MAX_LOG_FILE_MB
    ) * 1024 * 1024
    backup_count = _coerce_positive_int(
        rotation_cfg.get('backup_count', LoggingConfig.LOG_BACKUP_COUNT), LoggingConfig.LOG_BACKUP_COUNT
    )

    signature = (
        log_level,
        file_path,
        format_style,
        include_console,
        rotation_enabled,
        max_bytes,
        backup_count,
    )
    if _LOGGING_SIGNATURE == signature and _MANAGED_HANDLERS:
        return _LAST_LOG_FILE

    handlers: List[Handler] = []
    actual_log_file = None

    if include_console:
        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setFormatter(formatter)
        handlers.append(console_handler)

    if file_path:
        log_filename = os.path.basename(file_path) or "owl2openapi.log"
        fallback_locations = [
            file_path,
            os.path.join(tempfile.gettempdir(), log_filename),
            os.path.join(Path.home(), log_filename),
        ]
        file_handler = None
        for fallback_path in fallback_locations:
            try:
                log_dir = os.path.dirname(fallback_path)
                if log_dir and not os.path.exists(log_dir):
                    os.makedirs(log_dir, exist_ok=True)
                file_handler = _create_file_handler(
                    fallback_path,
                    rotation_enabled=bool(rotation_enabled),
                    max_bytes=max_bytes,
                    backup_count=backup_count,
                )
                file_handler.setFormatter(formatter)
                handlers.append(file_handler)
                actual_log_file = fallback_path
                if fallback_path != file_path:
                    print(f"Note: Using fallback log file: {fallback_path}")
                break
            except PermissionError:
                print(f"  Could not create log at {fallback_path}: Permission denied")
            except OSError as exc:
                print(f"  Could not create log at {fallback_path}: {exc}")
        if not file_handler:
            print("Warning: Could not write log file to any location")
            print(f"  Requested: {file_path}")
            print("  Logging to console only")

    if not handlers:
        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setFormatter(formatter)
        handlers.append(console_handler)

    _clear_managed_handlers()
    root_logger = logging.getLogger()
    logging.captureWarnings(True)
    root_logger.setLevel(log_level)

    for handler in handlers:
        root_logger.addHandler(handler)
        _MANAGED_HANDLERS.append(handler)

    _LOGGING_SIGNATURE = signature
    _LAST_LOG_FILE = actual_log_file

    if actual_log_file:
        logging.getLogger(__name__).info(f"Logging to: {actual_log_file}")

    return actual_log_file


def load_config(config_path: str, strict_security: bool = False) -> Dict[str, Any]:
    """
    Load configuration from a JSON file with security validation.

    Args:
        config_path: Path to the configuration file.
        strict_security: If True, enforce config file is within cwd.

    Returns:
        Dictionary containing the configuration.

    Raises:
        ValueError: If config_path is empty or file contains invalid JSON.
        FileNotFoundError: If the configuration file doesn't exist.
        PermissionError: If the file cannot be read or is a symlink.
    """
    from core.validators import InputValidator

    if not config_path:
        raise ValueError("config_path cannot be empty")

    try:
        validated_path = InputValidator.validate_file_path(
            config_path,
            allowed_extensions=InputValidator.CONFIG_EXTENSIONS,
            check_exists=True,
            check_readable=True,
            restrict_to_cwd=strict_security,
            reject_symlinks=True,
        )
    except FileNotFoundError:
        raise FileNotFoundError(
            f"Configuration file not found: {config_path}\n"
            f"Please create a config.json file or specify one with --config"
        )

    try:
        with open(validated_path, 'r', encoding='utf-8') as f:
            config = json.load(f)
    except json.JSONDecodeError as e:
        raise ValueError(
            f"Invalid JSON in configuration file {validated_path} at line {e.lineno}, column {e.colno}: {e.msg}"
        )
    except UnicodeDecodeError as e:
        raise ValueError(f"File encoding error in {validated_path}: {e}")

    if not isinstance(config, dict):
        raise ValueError(f"Configuration file must contain a JSON object, got {type(config).__name__}")

    return config


def resolve_conversion_options(config: Dict[str, Any], args: Any) -> Dict[str, Any]:
    """
    Merge the ``conversion`` config section with command-line flags.

    Flags that were given win over config values; config values win over
    defaults.

    Returns:
        Dict with ``convention``, ``inline_references`` and ``base_namespace``.

    Raises:
        ValueError: If the configured convention is unknown.
    """
    section = config.get('conversion', {}) if isinstance(config, dict) else {}
    options = {
        'convention': section.get('convention', ConventionConfig.DEFAULT),
        'inline_references': section.get('inline_references'),
        'base_namespace': section.get('base_namespace', OntologyVocabulary.DEFAULT_NAMESPACE),
    }

    if getattr(args, 'convention', None):
        options['convention'] = args.convention
    if getattr(args, 'inline', None) is not None:
        options['inline_references'] = args.inline
    if getattr(args, 'base_namespace', None):
        options['base_namespace'] = args.base_namespace

    if options['convention'] not in ConventionConfig.CHOICES:
        raise ValueError(
            f"Unknown convention '{options['convention']}' in configuration. "
            f"Expected one of: {', '.join(ConventionConfig.CHOICES)}"
        )
    return options


def print_header(title: str, width: int = 60) -> None:
    """Print a formatted header with the given title."""
    print("\n" + "=" * width)
    print(title)
    print("=" * width)


def print_footer(width: int = 60) -> None:
    """Print a footer line."""
    print("=" * width + "\n")


def format_count_summary(
    items: Dict[str, int],
    prefix: str = "  "
) -> str:
    """Format a dictionary of counts for display, largest first."""
    lines = []
    for name, count in sorted(items.items(), key=lambda x: -x[1]):
        lines.append(f"{prefix}{name}: {count}")
    return "\n".join(lines)
