"""Parser turning VCF meta-information lines into a HeaderModel."""

from __future__ import annotations

from collections.abc import Iterable
import logging
import re
from types import MappingProxyType

from ..config.models import (
    ContigDefinition,
    FieldArity,
    FieldDefinition,
    FieldType,
    HeaderModel,
)
from ..errors import MalformedHeader

logger = logging.getLogger(__name__)

_STRUCTURED_LINE = re.compile(r"^##(?P<key>[A-Za-z_][\w.-]*)=<(?P<body>.*)>\s*$")
_DECLARATIONS = ("INFO", "FORMAT", "contig", "FILTER")
_REQUIRED_FIELD_KEYS = ("ID", "Number", "Type", "Description")
_FIELD_TYPES = {field_type.value: field_type for field_type in FieldType}
_SPECIAL_ARITIES = {
    ".": FieldArity.VARIABLE,
    "A": FieldArity.PER_ALTERNATE,
    "R": FieldArity.PER_ALLELE,
    "G": FieldArity.PER_GENOTYPE,
}


def split_structured_value(body: str) -> dict[str, str]:
    """Split ``ID=AC,Number=A,Description="a, b"`` into a dict.

    Commas inside double quotes do not separate entries; surrounding quotes are
    removed from values.
    """
    parts: list[str] = []
    current = []
    in_quotes = False
    escaped = False

    for char in body:
        if escaped:
            current.append(char)
            escaped = False
        elif char == "\\" and in_quotes:
            current.append(char)
            escaped = True
        elif char == '"':
            in_quotes = not in_quotes
            current.append(char)
        elif char == "," and not in_quotes:
            parts.append("".join(current))
            current = []
        else:
            current.append(char)

    if in_quotes:
        raise ValueError("unterminated quoted value")

    if current:
        parts.append("".join(current))

    values: dict[str, str] = {}
    for part in parts:
        if "=" not in part:
            raise ValueError(f"entry without '=': {part!r}")
        key, value = part.split("=", 1)
        value = value.strip()
        if len(value) >= 2 and value.startswith('"') and value.endswith('"'):
            value = value[1:-1].replace('\\"', '"')
        values[key.strip()] = value

    return values


class HeaderParser:
    """Parser for VCF header information."""

    def parse(self, lines: Iterable[str]) -> HeaderModel:
        """Parse raw header lines into a HeaderModel.

        Raises:
            MalformedHeader: If an INFO/FORMAT declaration lacks ID, Number,
                Type or Description, has an unknown Type or Number, or a
                contig declares a non-positive length.
        """
        contigs: list[ContigDefinition] = []
        seen_contigs: set[str] = set()
        info: dict[str, FieldDefinition] = {}
        formats: dict[str, FieldDefinition] = {}
        filters: dict[str, str] = {}
        samples: tuple[str, ...] = ()
        file_format: str | None = None

        for raw_line in lines:
            line = raw_line.rstrip("\r\n")
            if not line:
                continue

            if line.startswith("#CHROM"):
                samples = tuple(line.split("\t")[9:])
                continue

            if line.startswith("##fileformat="):
                file_format = line.split("=", 1)[1].strip()
                continue

            declared = line[2:].split("=", 1)[0] if line.startswith("##") else ""
            if declared not in _DECLARATIONS:
                continue

            match = _STRUCTURED_LINE.match(line)
            if not match:
                raise MalformedHeader(f"Cannot parse {declared} declaration", line)

            key = match.group("key")

            try:
                values = split_structured_value(match.group("body"))
            except ValueError as e:
                raise MalformedHeader(f"Cannot parse {key} declaration ({e})", line) from e

            if key == "contig":
                contig = self._parse_contig(values, line)
                if contig.name in seen_contigs:
                    logger.warning(f"Contig {contig.name} declared more than once")
                    continue
                seen_contigs.add(contig.name)
                contigs.append(contig)
            elif key == "FILTER":
                if "ID" not in values:
                    raise MalformedHeader("FILTER declaration without ID", line)
                filters[values["ID"]] = values.get("Description", "")
            else:
                definition = self._parse_field(values, line)
                target = info if key == "INFO" else formats
                if definition.key in target:
                    logger.warning(
                        f"{key} field {definition.key} declared more than once, "
                        "keeping the first declaration"
                    )
                    continue
                target[definition.key] = definition

        logger.debug(
            f"Parsed header: {len(contigs)} contigs, {len(info)} INFO, "
            f"{len(formats)} FORMAT, {len(samples)} samples"
        )

        return HeaderModel(
            contigs=tuple(contigs),
            info=MappingProxyType(info),
            formats=MappingProxyType(formats),
            filters=MappingProxyType(filters),
            samples=samples,
            file_format=file_format,
        )

    def _parse_contig(self, values: dict[str, str], line: str) -> ContigDefinition:
        name = values.get("ID")
        if not name:
            raise MalformedHeader("contig declaration without ID", line)

        length: int | None = None
        raw_length = values.get("length")
        if raw_length is not None:
            try:
                length = int(raw_length)
            except ValueError as e:
                raise MalformedHeader(f"Invalid length for contig {name}", line) from e
            if length <= 0:
                raise MalformedHeader(
                    f"Contig {name} declared with non-positive length {length}", line
                )

        return ContigDefinition(name=name, length=length, assembly=values.get("assembly"))

    def _parse_field(self, values: dict[str, str], line: str) -> FieldDefinition:
        missing = [k for k in _REQUIRED_FIELD_KEYS if k not in values]
        if missing:
            raise MalformedHeader(f"Declaration is missing {', '.join(missing)}", line)

        field_type = _FIELD_TYPES.get(values["Type"])
        if field_type is None:
            raise MalformedHeader(f"Unknown Type {values['Type']!r}", line)

        number = values["Number"]
        arity = _SPECIAL_ARITIES.get(number)
        count: int | None = None
        if arity is None:
            try:
                count = int(number)
            except ValueError as e:
                raise MalformedHeader(f"Unknown Number {number!r}", line) from e
            if count < 0:
                raise MalformedHeader(f"Negative Number {number!r}", line)
            arity = FieldArity.FIXED

        return FieldDefinition(
            key=values["ID"],
            type=field_type,
            arity=arity,
            count=count,
            description=values["Description"],
        )
