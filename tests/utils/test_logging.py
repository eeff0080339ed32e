"""Tests for logging utilities."""

import logging
from pathlib import Path

import pytest
from vcf2rdf.config.schemas import LoggingConfig
from vcf2rdf.errors import InvalidConfig
from vcf2rdf.utils.logging import (
    configure_external_loggers,
    level_for_verbosity,
    parse_file_size,
    setup_logging,
)


@pytest.mark.parametrize(
    ("size", "expected"),
    [
        ("10MB", 10 * 1024**2),
        ("1gb", 1024**3),
        ("512KB", 512 * 1024),
        ("100B", 100),
        ("2048", 2048),
        ("1.5 KB", 1536),
        ("", 10 * 1024**2),
    ],
)
def test_parse_file_size(size: str, expected: int) -> None:
    assert parse_file_size(size) == expected


@pytest.mark.parametrize("size", ["10XB", "lots", "MB", "0", "-5MB", "infMB"])
def test_unparsable_file_size_is_invalid(size: str) -> None:
    with pytest.raises(InvalidConfig):
        parse_file_size(size)


@pytest.mark.parametrize(
    ("verbosity", "debug", "expected"),
    [
        (0, False, "WARNING"),
        (1, False, "INFO"),
        (2, False, "DEBUG"),
        (5, False, "DEBUG"),
        (0, True, "DEBUG"),
    ],
)
def test_level_for_verbosity(verbosity: int, debug: bool, expected: str) -> None:
    assert level_for_verbosity(verbosity, debug) == expected


def test_setup_logging_writes_to_file(tmp_path: Path) -> None:
    root = logging.getLogger()
    saved_handlers, saved_level = root.handlers[:], root.level
    package_logger = logging.getLogger("vcf2rdf")
    saved_package_level = package_logger.level
    log_file = tmp_path / "logs" / "run.log"

    try:
        setup_logging(LoggingConfig(level="INFO", file_path=log_file))
        logging.getLogger("vcf2rdf.test").info("hello")
        for handler in root.handlers:
            handler.flush()
    finally:
        for handler in root.handlers[:]:
            root.removeHandler(handler)
            handler.close()
        for handler in saved_handlers:
            root.addHandler(handler)
        root.setLevel(saved_level)
        package_logger.setLevel(saved_package_level)

    assert "hello" in log_file.read_text(encoding="utf-8")


def test_configure_external_loggers() -> None:
    configure_external_loggers("ERROR")

    assert logging.getLogger("rdflib").level == logging.ERROR
    assert logging.getLogger("pysam").level == logging.ERROR
