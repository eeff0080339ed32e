"""Maps allele entries to ordered RDF statements."""

from __future__ import annotations

from collections.abc import Sequence
import logging
import re
from typing import Any

from rdflib import BNode, Literal, URIRef
from rdflib.namespace import DCTERMS, RDF, RDFS, XSD
from rdflib.term import Node

from ..config.models import (
    AlleleEntry,
    FaldoRegion,
    FieldArity,
    FieldDefinition,
    FieldType,
    RunConfig,
    VariantType,
)
from .namespaces import FALDO, GVO

Triple = tuple[Node, Node, Node]

_ALLELE = re.compile(r"^[ACGTURYKMSWBDHVN]+$", re.IGNORECASE)

PER_ALLELE_COMMENT = (
    "This field contains two values, the first is the value for the reference "
    "allele and the second is the value for the alternate allele."
)
PER_GENOTYPE_COMMENT = "The field has one value for each possible genotype."


def is_convertible_allele(allele: str) -> bool:
    """True for plain nucleotide alleles; symbolic, breakend and ``*`` fail."""
    return bool(_ALLELE.match(allele))


def unconvertible_reason(entry: AlleleEntry) -> str | None:
    """Why ``entry`` cannot be converted, or None when it can."""
    if not is_convertible_allele(entry.record.reference):
        return "reference allele contains non-nucleotide characters"
    if not is_convertible_allele(entry.alternate):
        return "alternate allele contains non-nucleotide characters"
    if entry.record.reference.upper() == entry.alternate.upper():
        return "reference and alternate alleles are identical"
    return None


class TripleEmitter:
    """Builds the statements of one allele entry at a time.

    Auxiliary blank nodes (locations, positions, INFO groups, list cells) are
    labelled from a counter owned by the emitter, so the same input always
    produces the same labels.
    """

    def __init__(self, run: RunConfig):
        self.run = run
        self.header = run.header
        self.logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")
        self._entries = 0
        self._fields: list[FieldDefinition] = [
            run.header.info[key] for key in run.info_keys
        ]

    @property
    def entries_emitted(self) -> int:
        return self._entries

    def emit(
        self, entry: AlleleEntry, subject: Node, region: FaldoRegion
    ) -> list[Triple]:
        """Statements for ``entry`` in output order.

        Type, identifier, alleles, quality and filters come first, then the
        location group, then one group per retained INFO key in header order.
        """
        self._entries += 1
        ordinal = self._entries
        record = entry.record
        triples: list[Triple] = []

        triples.append((subject, RDF.type, GVO[region.variant_type.value]))

        if record.identifier is not None:
            triples.append((subject, DCTERMS.identifier, Literal(record.identifier)))

        if region.normalized:
            reference, alternate = region.reference_allele, region.alternate_allele
        else:
            reference, alternate = record.reference, entry.alternate
        triples.append((subject, GVO.ref, Literal(reference)))
        triples.append((subject, GVO.alt, Literal(alternate)))

        if record.quality is not None:
            triples.append(
                (subject, GVO.qual, Literal(record.quality, datatype=XSD.double))
            )

        for status in record.filters:
            triples.append((subject, GVO.filter, Literal(status)))

        triples.extend(self._location(subject, region, ordinal))

        for index, definition in enumerate(self._fields):
            triples.extend(self._info(subject, entry, definition, ordinal, index))

        return triples

    def _location(
        self, subject: Node, region: FaldoRegion, ordinal: int
    ) -> list[Triple]:
        location = BNode(f"loc{ordinal}")
        triples: list[Triple] = [(subject, FALDO.location, location)]

        if region.normalized and region.variant_type is VariantType.INSERTION:
            triples.extend(
                self._in_between(location, region.begin, region.end, region)
            )
        elif region.is_point:
            triples.extend(self._exact(location, region.begin, region))
        elif region.normalized and region.variant_type in (
            VariantType.DELETION,
            VariantType.INDEL,
        ):
            begin = BNode(f"begin{ordinal}")
            end = BNode(f"end{ordinal}")
            triples.append((location, RDF.type, FALDO.Region))
            triples.append((location, FALDO.begin, begin))
            triples.extend(
                self._in_between(begin, region.begin - 1, region.begin, region)
            )
            triples.append((location, FALDO.end, end))
            triples.extend(self._in_between(end, region.end, region.end + 1, region))
        else:
            begin = BNode(f"begin{ordinal}")
            end = BNode(f"end{ordinal}")
            triples.append((location, RDF.type, FALDO.Region))
            triples.append((location, FALDO.begin, begin))
            triples.extend(self._exact(begin, region.begin, region))
            triples.append((location, FALDO.end, end))
            triples.extend(self._exact(end, region.end, region))

        return triples

    def _exact(self, node: BNode, position: int, region: FaldoRegion) -> list[Triple]:
        triples: list[Triple] = [(node, RDF.type, FALDO.ExactPosition)]
        triples.extend(self._strand(node, region))
        triples.append((node, FALDO.position, Literal(position)))
        triples.extend(self._reference(node, region))
        return triples

    def _in_between(
        self, node: BNode, after: int, before: int, region: FaldoRegion
    ) -> list[Triple]:
        triples: list[Triple] = [(node, RDF.type, FALDO.InBetweenPosition)]
        triples.extend(self._strand(node, region))
        triples.append((node, FALDO.after, Literal(after)))
        triples.append((node, FALDO.before, Literal(before)))
        triples.extend(self._reference(node, region))
        return triples

    @staticmethod
    def _strand(node: BNode, region: FaldoRegion) -> list[Triple]:
        if region.strand == "forward":
            return [(node, RDF.type, FALDO.ForwardStrandPosition)]
        if region.strand == "reverse":
            return [(node, RDF.type, FALDO.ReverseStrandPosition)]
        return []

    @staticmethod
    def _reference(node: BNode, region: FaldoRegion) -> list[Triple]:
        if region.reference is None:
            return []
        return [(node, FALDO.reference, URIRef(region.reference))]

    def _info(
        self,
        subject: Node,
        entry: AlleleEntry,
        definition: FieldDefinition,
        ordinal: int,
        index: int,
    ) -> list[Triple]:
        info = entry.record.info
        if definition.key not in info:
            return []

        value = self._select(info[definition.key], definition, entry)
        if value is None:
            return []

        group = BNode(f"info{ordinal}_{index}")
        triples: list[Triple] = [
            (subject, GVO.info, group),
            (group, RDFS.label, Literal(definition.key)),
        ]

        if isinstance(value, list):
            head, cells = self._collection(
                [self._literal(v, definition.type) for v in value],
                f"list{ordinal}_{index}",
            )
            triples.append((group, RDF.value, head))
            triples.extend(cells)
        else:
            triples.append((group, RDF.value, self._literal(value, definition.type)))

        if definition.arity is FieldArity.PER_ALLELE:
            triples.append((group, RDFS.comment, Literal(PER_ALLELE_COMMENT)))
        elif definition.arity is FieldArity.PER_GENOTYPE:
            triples.append((group, RDFS.comment, Literal(PER_GENOTYPE_COMMENT)))

        return triples

    @staticmethod
    def _select(
        value: Any, definition: FieldDefinition, entry: AlleleEntry
    ) -> Any | list[Any] | None:
        """Pick the part of an INFO value that belongs to ``entry``.

        Returns a scalar, a non-empty list of present values, or None when
        nothing is left to emit.
        """
        if definition.is_scalar:
            return value

        values: Sequence[Any] = value
        if definition.arity is FieldArity.PER_ALTERNATE:
            if entry.allele_index >= len(values):
                return None
            return values[entry.allele_index]

        if definition.arity is FieldArity.PER_ALLELE:
            values = [
                values[i]
                for i in (0, entry.allele_index + 1)
                if i < len(values)
            ]

        present = [v for v in values if v is not None]
        return present or None

    @staticmethod
    def _literal(value: Any, field_type: FieldType) -> Literal:
        if field_type is FieldType.FLAG:
            return Literal(bool(value))
        if field_type is FieldType.INTEGER:
            return Literal(int(value))
        if field_type is FieldType.FLOAT:
            return Literal(float(value), datatype=XSD.double)
        return Literal(str(value))

    @staticmethod
    def _collection(items: list[Literal], label: str) -> tuple[Node, list[Triple]]:
        """rdf:List cells for ``items`` with labels ``{label}_{i}``."""
        cells = [BNode(f"{label}_{i}") for i in range(len(items))]
        triples: list[Triple] = []
        for i, (cell, item) in enumerate(zip(cells, items, strict=True)):
            rest: Node = cells[i + 1] if i + 1 < len(cells) else RDF.nil
            triples.append((cell, RDF.first, item))
            triples.append((cell, RDF.rest, rest))
        return cells[0], triples
