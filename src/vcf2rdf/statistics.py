"""Summary counters folded over a record stream."""

from __future__ import annotations

from collections import Counter
from dataclasses import asdict, dataclass, field
from typing import Any

from .config.models import MISSING_VALUE, VariantRecord


@dataclass(frozen=True)
class StatsReport:
    """Final counts of a run.

    ``contigs`` keeps first-seen order; ``filters`` and ``info_fields`` are
    sorted by key so that the report only depends on the input.
    """

    records_seen: int = 0
    records_converted: int = 0
    records_skipped: int = 0
    records_malformed: int = 0
    alleles_seen: int = 0
    alleles_skipped: int = 0
    triples_emitted: int = 0
    contigs: dict[str, int] = field(default_factory=dict)
    filters: dict[str, int] = field(default_factory=dict)
    info_fields: dict[str, int] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


class StatsAggregator:
    """Counts records without retaining them."""

    def __init__(self) -> None:
        self.records_seen = 0
        self.records_converted = 0
        self.records_skipped = 0
        self.records_malformed = 0
        self.alleles_seen = 0
        self.alleles_skipped = 0
        self.triples_emitted = 0
        self._contigs: dict[str, int] = {}
        self._filters: Counter[str] = Counter()
        self._info_fields: Counter[str] = Counter()

    def observe(self, record: VariantRecord) -> None:
        """Count a decoded record, its contig, filter status and INFO keys."""
        self.records_seen += 1
        self._contigs[record.contig] = self._contigs.get(record.contig, 0) + 1
        if record.filters:
            self._filters.update(record.filters)
        else:
            self._filters[MISSING_VALUE] += 1
        self._info_fields.update(record.info.keys())
        self.alleles_seen += len(record.alternates)

    def malformed(self) -> None:
        """Count a line that could not be decoded and was skipped."""
        self.records_seen += 1
        self.records_malformed += 1
        self.records_skipped += 1

    def converted(self, triples: int) -> None:
        self.records_converted += 1
        self.triples_emitted += triples

    def skipped(self) -> None:
        self.records_skipped += 1

    def allele_skipped(self) -> None:
        self.alleles_skipped += 1

    def report(self) -> StatsReport:
        return StatsReport(
            records_seen=self.records_seen,
            records_converted=self.records_converted,
            records_skipped=self.records_skipped,
            records_malformed=self.records_malformed,
            alleles_seen=self.alleles_seen,
            alleles_skipped=self.alleles_skipped,
            triples_emitted=self.triples_emitted,
            contigs=dict(self._contigs),
            filters=dict(sorted(self._filters.items())),
            info_fields=dict(sorted(self._info_fields.items())),
        )
