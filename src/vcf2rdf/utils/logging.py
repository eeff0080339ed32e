"""Logging utilities for VCF2RDF."""

import logging
import logging.handlers
from pathlib import Path
import sys

from ..config.schemas import LoggingConfig
from ..errors import InvalidConfig

_VERBOSITY_LEVELS = ["WARNING", "INFO", "DEBUG"]


def setup_logging(config: LoggingConfig | None = None) -> logging.Logger:
    """
    Setup logging configuration for a conversion run.

    Console output goes to stderr; stdout is reserved for serialized triples.

    Args:
        config: Logging configuration

    Returns:
        logging.Logger: Configured root logger
    """
    if config is None:
        config = LoggingConfig()

    log_level = getattr(logging, config.level.upper(), logging.WARNING)

    formatter = logging.Formatter(config.format)

    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)

    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(log_level)
    console_handler.setFormatter(formatter)
    root_logger.addHandler(console_handler)

    if config.file_path:
        file_path = Path(config.file_path)
        file_path.parent.mkdir(parents=True, exist_ok=True)

        max_bytes = parse_file_size(config.max_file_size)

        file_handler = logging.handlers.RotatingFileHandler(
            filename=file_path,
            maxBytes=max_bytes,
            backupCount=config.backup_count,
            encoding="utf-8",
        )
        file_handler.setLevel(log_level)
        file_handler.setFormatter(formatter)
        root_logger.addHandler(file_handler)

    package_logger = logging.getLogger("vcf2rdf")
    package_logger.setLevel(log_level)

    return root_logger


def level_for_verbosity(verbosity: int, debug: bool = False) -> str:
    """Map a -v count to a level name: none -> WARNING, -v -> INFO, -vv -> DEBUG."""
    if debug:
        return "DEBUG"
    index = min(max(verbosity, 0), len(_VERBOSITY_LEVELS) - 1)
    return _VERBOSITY_LEVELS[index]


def parse_file_size(size_str: str) -> int:
    """
    Parse file size string to bytes.

    Args:
        size_str: Size string like "10MB", "1GB", etc.; empty means 10MB

    Returns:
        int: Size in bytes

    Raises:
        InvalidConfig: If the size cannot be parsed
    """
    if not size_str:
        return 10 * 1024 * 1024  # Default 10MB

    normalized = size_str.upper().strip()

    multipliers = {"KB": 1024, "MB": 1024**2, "GB": 1024**3, "TB": 1024**4, "B": 1}

    number, multiplier = normalized, 1
    for suffix, factor in multipliers.items():
        if normalized.endswith(suffix):
            number, multiplier = normalized[: -len(suffix)].strip(), factor
            break

    try:
        size = int(float(number) * multiplier)
    except (ValueError, OverflowError):
        raise InvalidConfig(f"Invalid log file size {size_str!r}") from None
    if size <= 0:
        raise InvalidConfig(f"Log file size must be positive, got {size_str!r}")
    return size


def configure_external_loggers(level: str | int = logging.WARNING) -> None:
    """
    Configure logging level for external libraries to reduce noise.

    Args:
        level: Log level for external libraries
    """
    external_loggers = ["rdflib", "pysam"]

    if isinstance(level, str):
        level = getattr(logging, level.upper(), logging.WARNING)

    for logger_name in external_loggers:
        logger = logging.getLogger(logger_name)
        logger.setLevel(level)
