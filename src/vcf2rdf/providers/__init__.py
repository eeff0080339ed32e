"""Providers exposing the raw read capability for variant files."""

from .base import BaseProvider
from .tabix import TabixProvider
from .text import TextProvider

__all__ = [
    "BaseProvider",
    "TabixProvider",
    "TextProvider",
]
