"""Configuration management for VCF2RDF."""

from .config import load_config, parse_config
from .generator import generate_config
from .resolver import ConfigResolver, build_run
from .schemas import ConversionConfig, LoggingConfig, SequenceConfig

__all__ = [
    "ConfigResolver",
    "ConversionConfig",
    "LoggingConfig",
    "SequenceConfig",
    "build_run",
    "generate_config",
    "load_config",
    "parse_config",
]
