"""Provider for plain or gzip-compressed text VCF files."""

from collections.abc import Iterator
from dataclasses import dataclass
import gzip
from pathlib import Path
from typing import IO

from ..errors import IoFailure
from .base import BaseProvider

_GZIP_MAGIC = b"\x1f\x8b"


@dataclass
class TextHandle:
    """Open text stream plus the first data line seen while reading the header."""

    path: Path
    stream: IO[str]
    pending: str | None = None
    header_read: bool = False


class TextProvider(BaseProvider):
    """Provider reading VCF text sequentially, without an index."""

    def __init__(self, name: str = "text"):
        super().__init__(name)

    def open(self, path: str | Path) -> TextHandle:
        path = Path(path)

        if not path.exists():
            raise IoFailure(f"File not found: {path}")

        try:
            with open(path, "rb") as f:
                magic = f.read(2)

            if magic == _GZIP_MAGIC:
                stream = gzip.open(path, "rt", encoding="utf-8")
            else:
                stream = open(path, encoding="utf-8")
        except OSError as e:
            raise IoFailure(f"Failed to open {path}: {e}") from e

        self.logger.debug(f"Opened {path} (compressed={magic == _GZIP_MAGIC})")
        return TextHandle(path=path, stream=stream)

    def read_header(self, handle: TextHandle) -> list[str]:
        lines: list[str] = []

        try:
            for line in handle.stream:
                line = line.rstrip("\r\n")
                if line.startswith("#"):
                    lines.append(line)
                    continue
                handle.pending = line
                break
        except (OSError, EOFError, UnicodeDecodeError) as e:
            raise IoFailure(f"Failed to read header of {handle.path}: {e}") from e

        handle.header_read = True
        return lines

    def iterate(self, handle: TextHandle) -> Iterator[str]:
        if handle.pending is not None:
            pending, handle.pending = handle.pending, None
            if pending:
                yield pending

        try:
            for line in handle.stream:
                line = line.rstrip("\r\n")
                if not line or line.startswith("#"):
                    continue
                yield line
        except (OSError, EOFError, UnicodeDecodeError) as e:
            raise IoFailure(f"Failed to read {handle.path}: {e}") from e

    def close(self, handle: TextHandle) -> None:
        handle.stream.close()
