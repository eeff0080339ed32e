"""Base provider class for reading variant files."""

from abc import ABC, abstractmethod
from collections.abc import Iterator
import logging
from pathlib import Path
from typing import Any


class BaseProvider(ABC):
    """Abstract base class for variant file providers.

    A provider is the low-level read capability: it opens a file, returns its
    raw meta-information lines and iterates its raw data lines. It performs no
    decoding of records.
    """

    def __init__(self, name: str):
        """Initialize provider.

        Args:
            name: Name of the provider
        """
        self.name = name
        self.logger = logging.getLogger(f"provider.{name}")

    @abstractmethod
    def open(self, path: str | Path) -> Any:
        """Open a variant file.

        Args:
            path: Path of the file to open

        Returns:
            Provider-specific handle

        Raises:
            IoFailure: If the file is missing, unindexed or unreadable
        """
        pass

    @abstractmethod
    def read_header(self, handle: Any) -> list[str]:
        """Return the raw header lines (``##`` lines and the ``#CHROM`` line).

        Raises:
            IoFailure: If reading fails
        """
        pass

    @abstractmethod
    def iterate(self, handle: Any) -> Iterator[str]:
        """Yield raw data lines without their line terminator.

        Raises:
            IoFailure: If reading fails
        """
        pass

    @abstractmethod
    def close(self, handle: Any) -> None:
        """Release the handle."""
        pass
