"""Canonical data model for the VCF2RDF conversion engine."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Any

MISSING_VALUE = "."


def _empty_mapping() -> Mapping[str, Any]:
    """Provide an empty read-only mapping."""

    return MappingProxyType({})


class FieldType(Enum):
    """Declared value type of an INFO/FORMAT field."""

    INTEGER = "Integer"
    FLOAT = "Float"
    FLAG = "Flag"
    STRING = "String"
    CHARACTER = "Character"


class FieldArity(Enum):
    """Declared number of values of an INFO/FORMAT field."""

    FIXED = "fixed"
    VARIABLE = "."
    PER_ALTERNATE = "A"
    PER_ALLELE = "R"
    PER_GENOTYPE = "G"


class VariantType(Enum):
    """Variant classification derived from the trimmed alleles."""

    SNV = "SNV"
    MNV = "MNV"
    DELETION = "Deletion"
    INSERTION = "Insertion"
    INDEL = "Indel"


class SubjectStrategy(Enum):
    """How subjects are generated for each converted allele."""

    BLANK_NODE = "blank-node"
    BY_ID = "by-id"
    BY_LOCATION = "by-location"
    BY_REFERENCE = "by-reference"
    NORMALIZED_LOCATION = "normalized-location"
    NORMALIZED_REFERENCE = "normalized-reference"

    @property
    def uses_reference(self) -> bool:
        return self in (
            SubjectStrategy.BY_REFERENCE,
            SubjectStrategy.NORMALIZED_REFERENCE,
        )

    @property
    def is_normalized(self) -> bool:
        return self in (
            SubjectStrategy.NORMALIZED_LOCATION,
            SubjectStrategy.NORMALIZED_REFERENCE,
        )


@dataclass(frozen=True)
class ContigDefinition:
    """A ##contig declaration."""

    name: str
    length: int | None = None
    assembly: str | None = None


@dataclass(frozen=True)
class FieldDefinition:
    """An ##INFO or ##FORMAT declaration."""

    key: str
    type: FieldType
    arity: FieldArity
    count: int | None = None
    description: str = ""

    @property
    def is_scalar(self) -> bool:
        """True when the field holds at most one value per record."""

        if self.type is FieldType.FLAG:
            return True
        return self.arity is FieldArity.FIXED and (self.count or 0) <= 1

    @property
    def number(self) -> str:
        """The Number attribute as written in the header."""

        if self.arity is FieldArity.FIXED:
            return str(self.count)
        return self.arity.value


@dataclass(frozen=True)
class HeaderModel:
    """Typed schema of a VCF file's meta-information."""

    contigs: tuple[ContigDefinition, ...] = ()
    info: Mapping[str, FieldDefinition] = field(default_factory=_empty_mapping)
    formats: Mapping[str, FieldDefinition] = field(default_factory=_empty_mapping)
    filters: Mapping[str, str] = field(default_factory=_empty_mapping)
    samples: tuple[str, ...] = ()
    file_format: str | None = None

    def contig(self, name: str) -> ContigDefinition | None:
        for contig in self.contigs:
            if contig.name == name:
                return contig
        return None

    @property
    def contig_names(self) -> tuple[str, ...]:
        return tuple(contig.name for contig in self.contigs)

    @property
    def info_keys(self) -> tuple[str, ...]:
        """INFO keys in declaration order."""

        return tuple(self.info)


@dataclass(frozen=True)
class VariantRecord:
    """One decoded data line."""

    contig: str
    position: int
    identifier: str | None
    reference: str
    alternates: tuple[str, ...]
    quality: float | None = None
    filters: tuple[str, ...] = ()
    info: Mapping[str, Any] = field(default_factory=_empty_mapping)
    samples: tuple[Mapping[str, str], ...] = ()
    line_number: int | None = None

    @property
    def is_pass(self) -> bool:
        return self.filters == ("PASS",)

    def entries(self) -> list[AlleleEntry]:
        """One entry per alternate allele."""

        return [AlleleEntry(self, index) for index in range(len(self.alternates))]

    def __str__(self) -> str:
        alternates = ",".join(self.alternates) or MISSING_VALUE
        return (
            f"{self.contig}:{self.position} {self.identifier or MISSING_VALUE} "
            f"{self.reference}>{alternates}"
        )


@dataclass(frozen=True)
class AlleleEntry:
    """A record viewed through one of its alternate alleles."""

    record: VariantRecord
    allele_index: int

    @property
    def alternate(self) -> str:
        return self.record.alternates[self.allele_index]

    def __str__(self) -> str:
        record = self.record
        return (
            f"{record.contig}:{record.position} "
            f"{record.identifier or MISSING_VALUE} "
            f"{record.reference}>{self.alternate}"
        )


@dataclass(frozen=True)
class FaldoRegion:
    """Location of an allele on its reference sequence.

    ``position``, ``reference_allele`` and ``alternate_allele`` are the
    coordinates the region was computed from, after trimming when
    ``normalized`` is set. Feeding them back through the normalizer yields
    the same region.
    """

    begin: int
    end: int
    variant_type: VariantType
    position: int
    reference_allele: str
    alternate_allele: str
    normalized: bool
    reference: str | None = None
    strand: str = "forward"

    @property
    def is_point(self) -> bool:
        if self.normalized:
            return self.variant_type is VariantType.SNV
        return self.begin == self.end


@dataclass(frozen=True)
class SequenceMapping:
    """Display name and reference-sequence IRI of a contig."""

    name: str | None = None
    reference: str | None = None


@dataclass(frozen=True)
class RunConfig:
    """Immutable, validated configuration of one conversion run."""

    header: HeaderModel
    namespaces: Mapping[str, str]
    info_keys: tuple[str, ...]
    references: Mapping[str, SequenceMapping] = field(default_factory=_empty_mapping)
    base: str | None = None
    subject: SubjectStrategy = SubjectStrategy.BLANK_NODE
    normalize: bool = True
    best_effort: bool = False

    def sequence(self, contig: str) -> SequenceMapping | None:
        return self.references.get(contig)

    def reference_for(self, contig: str) -> str | None:
        mapping = self.references.get(contig)
        return mapping.reference if mapping else None
