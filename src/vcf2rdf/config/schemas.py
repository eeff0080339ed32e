"""Configuration schemas for VCF2RDF."""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Literal

SubjectName = Literal[
    "blank-node",
    "by-id",
    "by-location",
    "by-reference",
    "normalized-location",
    "normalized-reference",
]


@dataclass
class SequenceConfig:
    """Display name and reference IRI for one contig."""

    name: str | None = None
    reference: str | None = None


@dataclass
class LoggingConfig:
    """Configuration for logging."""

    level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "WARNING"
    format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    file_path: str | Path | None = None
    max_file_size: str = "10MB"
    backup_count: int = 5


@dataclass
class ConversionConfig:
    """User configuration of a conversion run."""

    base: str | None = None
    namespaces: dict[str, str] = field(default_factory=dict[str, str])
    info: list[str] | None = None
    assembly: str | None = None
    reference: dict[str, SequenceConfig | None] = field(
        default_factory=dict[str, SequenceConfig | None]
    )
    subject: SubjectName | None = None
    normalize: bool = True
    best_effort: bool = False
    logging: LoggingConfig = field(default_factory=LoggingConfig)
