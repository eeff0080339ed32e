"""Decoder for individual VCF data lines."""

from __future__ import annotations

import logging
import math
from types import MappingProxyType
from typing import Any

from ..config.models import (
    MISSING_VALUE,
    FieldDefinition,
    FieldType,
    HeaderModel,
    VariantRecord,
)
from ..errors import MalformedRecord

logger = logging.getLogger(__name__)

FIXED_COLUMNS = 8


def _convert_scalar(value: str, field_type: FieldType) -> Any:
    if value == MISSING_VALUE or value == "":
        return None
    if field_type is FieldType.INTEGER:
        return int(value)
    if field_type is FieldType.FLOAT:
        number = float(value)
        return None if math.isnan(number) else number
    return value


def decode_info_value(raw: str | None, definition: FieldDefinition) -> Any:
    """Convert a raw INFO value according to its declaration.

    Flags decode to ``True``; scalar fields to a single value; every other
    arity to a tuple whose missing elements are ``None``.

    Raises:
        ValueError: If a value does not match the declared type
    """
    if definition.type is FieldType.FLAG:
        return True

    if raw is None:
        raise ValueError(
            f"{definition.key} is declared as {definition.type.value} but has no value"
        )

    if definition.is_scalar:
        return _convert_scalar(raw, definition.type)

    return tuple(_convert_scalar(value, definition.type) for value in raw.split(","))


class RecordDecoder:
    """Decodes raw data lines into VariantRecord values."""

    def __init__(self, header: HeaderModel):
        self.header = header
        self.logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")
        self._undeclared: set[str] = set()

    def decode(self, line: str, line_number: int | None = None) -> VariantRecord:
        """Decode one tab-separated data line.

        Raises:
            MalformedRecord: If the fixed columns cannot be decoded
        """
        columns = line.rstrip("\r\n").split("\t")

        contig = columns[0] if columns else None
        raw_position = columns[1] if len(columns) > 1 else None

        def fail(message: str) -> MalformedRecord:
            return MalformedRecord(
                message,
                line=line,
                line_number=line_number,
                contig=contig,
                position=raw_position,
            )

        if len(columns) < FIXED_COLUMNS:
            raise fail(
                f"Expected at least {FIXED_COLUMNS} columns, found {len(columns)}"
            )

        chrom, pos, identifier, ref, alt, qual, filters, info = columns[:FIXED_COLUMNS]

        if not chrom:
            raise fail("Empty CHROM column")

        try:
            position = int(pos)
        except ValueError:
            raise fail(f"Invalid POS {pos!r}") from None
        if position < 1:
            raise fail(f"POS must be positive, got {position}")

        if not ref:
            raise fail("Empty REF column")

        quality: float | None = None
        if qual != MISSING_VALUE:
            try:
                quality = float(qual)
            except ValueError:
                raise fail(f"Invalid QUAL {qual!r}") from None
            if math.isnan(quality):
                quality = None

        try:
            info_values = self._decode_info(info)
        except ValueError as e:
            raise fail(f"Invalid INFO column ({e})") from e

        return VariantRecord(
            contig=chrom,
            position=position,
            identifier=None if identifier in (MISSING_VALUE, "") else identifier,
            reference=ref,
            alternates=() if alt in (MISSING_VALUE, "") else tuple(alt.split(",")),
            quality=quality,
            filters=() if filters in (MISSING_VALUE, "") else tuple(filters.split(";")),
            info=info_values,
            samples=self._decode_samples(columns[FIXED_COLUMNS:]),
            line_number=line_number,
        )

    def _decode_info(self, column: str) -> MappingProxyType[str, Any]:
        values: dict[str, Any] = {}
        if column in (MISSING_VALUE, ""):
            return MappingProxyType(values)

        for item in column.split(";"):
            if not item:
                continue
            key, sep, raw = item.partition("=")
            definition = self.header.info.get(key)

            if definition is None:
                if key not in self._undeclared:
                    self._undeclared.add(key)
                    self.logger.debug(f"INFO key {key} is not declared in the header")
                values[key] = raw if sep else True
                continue

            values[key] = decode_info_value(raw if sep else None, definition)

        return MappingProxyType(values)

    def _decode_samples(self, columns: list[str]) -> tuple[MappingProxyType[str, str], ...]:
        if len(columns) < 2:
            return ()

        keys = columns[0].split(":")
        return tuple(
            MappingProxyType(dict(zip(keys, column.split(":"), strict=False)))
            for column in columns[1:]
        )
