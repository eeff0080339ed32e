"""Processors turning raw VCF lines into canonical records."""

from .header import HeaderParser
from .reader import RecordReader, RecordStream
from .record import RecordDecoder

__all__ = [
    "HeaderParser",
    "RecordDecoder",
    "RecordReader",
    "RecordStream",
]
