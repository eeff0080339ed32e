"""Provider for bgzip-compressed, tabix-indexed VCF files."""

from collections.abc import Iterator
from pathlib import Path

import pysam

from ..errors import IoFailure
from .base import BaseProvider

_INDEX_SUFFIXES = (".tbi", ".csi")


class TabixProvider(BaseProvider):
    """Provider backed by htslib's tabix reader through pysam."""

    def __init__(self, name: str = "tabix"):
        super().__init__(name)

    def open(self, path: str | Path) -> pysam.TabixFile:
        path = Path(path)

        if not path.exists():
            raise IoFailure(f"File not found: {path}")

        index = self.index_path(path)
        if index is None:
            raise IoFailure(f"Index file not found: {path}.tbi")

        try:
            handle = pysam.TabixFile(str(path), index=str(index), encoding="utf-8")
        except (OSError, ValueError) as e:
            raise IoFailure(f"Failed to open {path}: {e}") from e

        self.logger.debug(f"Opened {path} with index {index}")
        return handle

    def read_header(self, handle: pysam.TabixFile) -> list[str]:
        try:
            return [line.rstrip("\r\n") for line in handle.header]
        except (OSError, ValueError) as e:
            raise IoFailure(f"Failed to read header of {handle.filename}: {e}") from e

    def iterate(self, handle: pysam.TabixFile) -> Iterator[str]:
        try:
            yield from handle.fetch()
        except (OSError, ValueError) as e:
            raise IoFailure(f"Failed to read {handle.filename}: {e}") from e

    def close(self, handle: pysam.TabixFile) -> None:
        handle.close()

    @staticmethod
    def index_path(path: Path) -> Path | None:
        """Return the tabix or CSI index next to ``path``, if any."""
        for suffix in _INDEX_SUFFIXES:
            candidate = path.with_name(path.name + suffix)
            if candidate.exists():
                return candidate
        return None
