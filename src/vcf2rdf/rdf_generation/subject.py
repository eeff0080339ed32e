"""Subject identity strategies for converted alleles."""

from __future__ import annotations

from collections.abc import Iterable
import logging

from rdflib import BNode, URIRef

from ..config.models import (
    AlleleEntry,
    FaldoRegion,
    RunConfig,
    SubjectStrategy,
    VariantRecord,
)
from ..errors import MissingOrDuplicateId
from .faldo import normalize
from .namespaces import NamespaceRegistry

Subject = BNode | URIRef


def local_names(record: VariantRecord) -> list[str]:
    """Names the by-id strategy mints for ``record``, one per alternate allele.

    A multi-allelic record gets ``{id}_{n}`` per allele; otherwise the
    identifier itself.
    """
    if record.identifier is None:
        raise MissingOrDuplicateId(
            f"Record {record} has no identifier but subjects are built by id"
        )
    if len(record.alternates) > 1:
        count = len(record.alternates)
        return [f"{record.identifier}_{n}" for n in range(1, count + 1)]
    return [record.identifier]


class IdentifierRegistry:
    """Run-wide set of identifiers and minted names under the by-id strategy.

    The raw identifier of every record and every ``{id}_{n}`` name minted
    from it share one set, so a suffixed name can never collide with the
    identifier of another record.
    """

    def __init__(self) -> None:
        self._seen: set[str] = set()

    def register(self, record: VariantRecord) -> None:
        """Record the identifier of ``record`` and the names minted from it.

        Raises:
            MissingOrDuplicateId: If the identifier is absent, or it or one of
                its minted names is already taken
        """
        names = local_names(record)
        claimed = list(dict.fromkeys([record.identifier, *names]))
        for name in claimed:
            if name in self._seen:
                raise MissingOrDuplicateId(
                    f"Identifier {name} appears more than once "
                    f"(again at {record.contig}:{record.position})",
                    identifier=name,
                )
        self._seen.update(claimed)

    def register_all(self, records: Iterable[VariantRecord]) -> int:
        count = 0
        for record in records:
            self.register(record)
            count += 1
        return count

    def __contains__(self, identifier: object) -> bool:
        return identifier in self._seen

    def __len__(self) -> int:
        return len(self._seen)


class SubjectResolver:
    """Computes the subject node of each allele entry.

    One resolver belongs to one run. It owns the blank node counter, so two
    resolvers never share labels and output of a run is reproducible.
    """

    def __init__(self, run: RunConfig, namespaces: NamespaceRegistry):
        self.run = run
        self.namespaces = namespaces
        self.strategy = run.subject
        self.logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")
        self._blank_nodes = 0
        self._unmapped: set[str] = set()

    @property
    def blank_nodes_issued(self) -> int:
        return self._blank_nodes

    def resolve(self, entry: AlleleEntry, region: FaldoRegion) -> Subject | None:
        """Subject for ``entry``, or None when the entry must be skipped.

        ``region`` is the location of the entry; the normalized strategies
        build their IRIs from its trimmed alleles.

        Raises:
            MissingOrDuplicateId: Under by-id when the record has no identifier
            UnresolvedNamespace: When a relative IRI is built without base IRI
        """
        match self.strategy:
            case SubjectStrategy.BLANK_NODE:
                return self._blank_node()
            case SubjectStrategy.BY_ID:
                return self._by_id(entry)
            case SubjectStrategy.BY_LOCATION:
                return self._by_location(entry.record.contig, *self._raw(entry))
            case SubjectStrategy.NORMALIZED_LOCATION:
                return self._by_location(entry.record.contig, *self._trimmed(region))
            case SubjectStrategy.BY_REFERENCE:
                return self._by_reference(entry.record.contig, *self._raw(entry))
            case SubjectStrategy.NORMALIZED_REFERENCE:
                return self._by_reference(entry.record.contig, *self._trimmed(region))
        raise ValueError(f"Unknown subject strategy {self.strategy!r}")

    def _blank_node(self) -> BNode:
        self._blank_nodes += 1
        return BNode(f"v{self._blank_nodes}")

    def _by_id(self, entry: AlleleEntry) -> URIRef:
        names = local_names(entry.record)
        return self.namespaces.relative(names[entry.allele_index])

    def _by_location(
        self, contig: str, position: int, reference: str, alternate: str
    ) -> URIRef:
        mapping = self.run.sequence(contig)
        name = mapping.name if mapping and mapping.name else contig
        return self.namespaces.relative(f"{name}-{position}-{reference}-{alternate}")

    def _by_reference(
        self, contig: str, position: int, reference: str, alternate: str
    ) -> URIRef | None:
        sequence = self.run.reference_for(contig)
        if sequence is None:
            self._warn_unmapped(contig)
            return None
        return URIRef(f"{sequence}#{position}-{reference}-{alternate}")

    def _warn_unmapped(self, contig: str) -> None:
        if contig in self._unmapped:
            self.logger.debug(f"Skipping record on unmapped contig {contig}")
            return
        self._unmapped.add(contig)
        self.logger.warning(
            f"No reference sequence mapped for contig {contig}, "
            "records on it are skipped"
        )

    @staticmethod
    def _raw(entry: AlleleEntry) -> tuple[int, str, str]:
        record = entry.record
        return record.position, record.reference, entry.alternate

    @staticmethod
    def _trimmed(region: FaldoRegion) -> tuple[int, str, str]:
        if not region.normalized:
            region = normalize(
                region.position, region.reference_allele, region.alternate_allele
            )
        return region.position, region.reference_allele, region.alternate_allele
