"""Utility functions and classes."""

from .assembly import ASSEMBLIES, find_assembly
from .logging import configure_external_loggers, level_for_verbosity, setup_logging

__all__ = [
    "ASSEMBLIES",
    "configure_external_loggers",
    "find_assembly",
    "level_for_verbosity",
    "setup_logging",
]
