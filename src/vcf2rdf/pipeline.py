"""Conversion driver: wires reader, resolvers, emitter and sinks together."""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from dataclasses import dataclass, field
import logging
from pathlib import Path
import sys
import time
from typing import Any, Literal

from tqdm import tqdm

from .config.models import RunConfig, SubjectStrategy, VariantRecord
from .config.resolver import build_run
from .config.schemas import ConversionConfig
from .errors import MalformedRecord
from .processors.reader import RecordReader, RecordStream
from .providers.base import BaseProvider
from .providers.tabix import TabixProvider
from .providers.text import TextProvider
from .rdf_generation.emitter import Triple, TripleEmitter, unconvertible_reason
from .rdf_generation.faldo import normalize
from .rdf_generation.namespaces import NamespaceRegistry
from .rdf_generation.serializer import GraphSink, NTriplesSink, format_triple
from .rdf_generation.subject import IdentifierRegistry, SubjectResolver
from .statistics import StatsAggregator, StatsReport

logger = logging.getLogger(__name__)

InputType = Literal["auto", "tabix", "text"]

__all__ = [
    "ConversionRun",
    "RunContext",
    "build_run",
    "convert",
    "create_provider",
    "open_run",
    "stream_convert",
    "stream_stats",
]


def create_provider(path: str | Path, input_type: InputType = "auto") -> BaseProvider:
    """Provider for ``path``; ``auto`` reads ``.vcf`` as text and the rest via tabix."""
    if input_type == "text":
        return TextProvider()
    if input_type == "tabix":
        return TabixProvider()
    if input_type != "auto":
        raise ValueError(f"Unknown input type: {input_type}")
    return TextProvider() if Path(path).suffix.lower() == ".vcf" else TabixProvider()


@dataclass
class RunContext:
    """Mutable state owned by one run and shared by nothing else."""

    run: RunConfig
    namespaces: NamespaceRegistry
    subjects: SubjectResolver
    emitter: TripleEmitter
    identifiers: IdentifierRegistry = field(default_factory=IdentifierRegistry)
    stats: StatsAggregator = field(default_factory=StatsAggregator)

    @classmethod
    def create(cls, run: RunConfig) -> RunContext:
        namespaces = NamespaceRegistry(run.namespaces, run.base)
        return cls(
            run=run,
            namespaces=namespaces,
            subjects=SubjectResolver(run, namespaces),
            emitter=TripleEmitter(run),
        )


class ConversionRun:
    """One conversion of one variant file under a RunConfig.

    Iterating :meth:`triples` drives the whole run: one record is pulled,
    converted and handed out before the next one is read. The run can be
    consumed once; build a new one to convert again.
    """

    def __init__(
        self,
        reader: RecordReader,
        run: RunConfig,
        rehearsal: bool = False,
        progress: bool = False,
    ):
        self.reader = reader
        self.run = run
        self.rehearsal = rehearsal
        self.progress = progress
        self.context = RunContext.create(run)
        self.logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")

    @property
    def stats(self) -> StatsAggregator:
        return self.context.stats

    def report(self) -> StatsReport:
        return self.context.stats.report()

    def records(self, stream: RecordStream, count: bool = True) -> Iterator[VariantRecord]:
        """Decoded records of ``stream`` under the run's malformed-record policy.

        Raises:
            MalformedRecord: On the first undecodable line unless best effort
        """
        pulled = 0
        while not (self.rehearsal and pulled >= 1):
            try:
                record = next(stream)
            except StopIteration:
                return
            except MalformedRecord as e:
                if not self.run.best_effort:
                    raise
                if count:
                    self.logger.warning(f"Skipping malformed record: {e}")
                    self.context.stats.malformed()
                continue
            pulled += 1
            yield record

    def check_identifiers(self) -> int:
        """Pre-pass registering every identifier before any output is written.

        Raises:
            MissingOrDuplicateId: If a record has no identifier or a duplicate one
        """
        with self.reader.records() as stream:
            count = self.context.identifiers.register_all(
                self.records(stream, count=False)
            )
        self.logger.debug(f"Checked {count} record identifiers")
        return count

    def triples(self) -> Iterator[list[Triple]]:
        """Statements of each converted allele, one list per allele."""
        if self.run.subject is SubjectStrategy.BY_ID:
            self.check_identifiers()

        with self.reader.records() as stream:
            records: Iterator[VariantRecord] = self.records(stream)
            if self.progress:
                records = tqdm(records, unit=" records", file=sys.stderr, leave=False)
            for record in records:
                yield from self.convert_record(record)

    def convert_record(self, record: VariantRecord) -> Iterator[list[Triple]]:
        context = self.context
        context.stats.observe(record)
        emitted = 0
        converted = False

        for entry in record.entries():
            reason = unconvertible_reason(entry)
            if reason is not None:
                self.logger.warning(f"Skipping allele {entry}: {reason}")
                context.stats.allele_skipped()
                continue

            try:
                region = normalize(
                    record.position,
                    record.reference,
                    entry.alternate,
                    self.run.normalize,
                    self.run.reference_for(record.contig),
                )
            except ValueError as e:
                self.logger.warning(f"Skipping allele {entry}: {e}")
                context.stats.allele_skipped()
                continue

            subject = context.subjects.resolve(entry, region)
            if subject is None:
                context.stats.allele_skipped()
                continue

            triples = context.emitter.emit(entry, subject, region)
            emitted += len(triples)
            converted = True
            yield triples

        if converted:
            context.stats.converted(emitted)
        else:
            context.stats.skipped()


def open_run(
    path: str | Path,
    config: ConversionConfig | Mapping[str, Any] | None = None,
    input_type: InputType = "auto",
    rehearsal: bool = False,
    progress: bool = False,
    **overrides: Any,
) -> ConversionRun:
    """Read the header of ``path`` and configure a run for it.

    Raises:
        IoFailure: If the file cannot be opened
        MalformedHeader: If the header cannot be parsed
        InvalidConfig: If the configuration is unusable
    """
    reader = RecordReader(create_provider(path, input_type), path)
    run = build_run(reader.header, config, **overrides)
    return ConversionRun(reader, run, rehearsal=rehearsal, progress=progress)


def stream_convert(run: ConversionRun) -> Iterator[str]:
    """N-Triples lines of the run, produced lazily."""
    for triples in run.triples():
        for triple in triples:
            yield format_triple(triple)


def convert(run: ConversionRun, sink: NTriplesSink | GraphSink) -> StatsReport:
    """Drive ``run`` into ``sink`` and return the final counts."""
    start_time = time.time()
    for triples in run.triples():
        sink.write(triples)
    sink.close()

    report = run.report()
    logger.info(
        f"Converted {report.records_converted} of {report.records_seen} records "
        f"({report.records_skipped} skipped, {report.triples_emitted} triples) "
        f"in {time.time() - start_time:.2f} seconds"
    )
    return report


def stream_stats(run: ConversionRun) -> StatsReport:
    """Fold the records of the run into a report without converting them."""
    with run.reader.records() as records:
        for record in run.records(records):
            run.stats.observe(record)
    return run.report()
