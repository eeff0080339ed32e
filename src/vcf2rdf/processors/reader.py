"""Forward-only reader producing decoded variant records."""

from __future__ import annotations

from collections.abc import Iterator
import logging
from pathlib import Path
from typing import Any

from ..config.models import HeaderModel, VariantRecord
from ..providers.base import BaseProvider
from .header import HeaderParser
from .record import RecordDecoder


class RecordStream:
    """A single pass over the records of one opened file.

    ``next()`` decodes one line per call. A line that cannot be decoded raises
    ``MalformedRecord`` without ending the stream, so the caller may choose to
    continue with the next line.
    """

    def __init__(
        self,
        provider: BaseProvider,
        handle: Any,
        decoder: RecordDecoder,
        header_lines: int = 0,
    ):
        self._provider = provider
        self._handle = handle
        self._decoder = decoder
        self._lines = provider.iterate(handle)
        self._line_number = header_lines
        self._closed = False

    def __iter__(self) -> RecordStream:
        return self

    def __next__(self) -> VariantRecord:
        if self._closed:
            raise StopIteration

        try:
            line = next(self._lines)
        except StopIteration:
            self.close()
            raise

        self._line_number += 1
        return self._decoder.decode(line, self._line_number)

    @property
    def line_number(self) -> int:
        return self._line_number

    def close(self) -> None:
        if not self._closed:
            self._closed = True
            self._provider.close(self._handle)

    def __enter__(self) -> RecordStream:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()


class RecordReader:
    """Restartable source of VariantRecord values for one variant file.

    Every call to :meth:`records` reopens the file through the provider;
    records are never held in memory beyond the one being decoded.
    """

    def __init__(self, provider: BaseProvider, path: str | Path):
        self.provider = provider
        self.path = Path(path)
        self.logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")
        self._header: HeaderModel | None = None

    @property
    def header(self) -> HeaderModel:
        """The parsed header, read once on first access."""
        if self._header is None:
            handle = self.provider.open(self.path)
            try:
                lines = self.provider.read_header(handle)
            finally:
                self.provider.close(handle)
            self._header = HeaderParser().parse(lines)
        return self._header

    def records(self) -> RecordStream:
        """Open a fresh pass over the file's records."""
        header = self.header
        handle = self.provider.open(self.path)
        try:
            header_lines = len(self.provider.read_header(handle))
        except Exception:
            self.provider.close(handle)
            raise

        self.logger.debug(f"Reading records from {self.path}")
        return RecordStream(
            self.provider, handle, RecordDecoder(header), header_lines=header_lines
        )

    def __iter__(self) -> Iterator[VariantRecord]:
        return self.records()
