"""Builds the immutable RunConfig of a conversion run."""

from __future__ import annotations

from collections.abc import Mapping
import logging
from types import MappingProxyType
from typing import Any

from ..errors import InvalidConfig
from ..rdf_generation.namespaces import (
    BUILTIN_NAMESPACES,
    NamespaceRegistry,
    is_absolute_iri,
    is_valid_prefix,
)
from ..utils.assembly import Assembly, find_assembly
from .config import parse_config
from .models import HeaderModel, RunConfig, SequenceMapping, SubjectStrategy
from .schemas import ConversionConfig, SequenceConfig


def normalize_base(base: str | None) -> str | None:
    """Validate the base IRI and make sure relative names append cleanly.

    Raises:
        InvalidConfig: If ``base`` is not an absolute IRI
    """
    if not base:
        return None
    if not is_absolute_iri(base):
        raise InvalidConfig(f"Base IRI must be absolute, got {base!r}")
    if not base.endswith(("/", "#")):
        base = f"{base}/"
    return base


def parse_strategy(value: str | SubjectStrategy | None) -> SubjectStrategy:
    """Subject strategy named by ``value``; blank nodes when unset.

    Raises:
        InvalidConfig: If the name is not a known strategy
    """
    if value is None:
        return SubjectStrategy.BLANK_NODE
    if isinstance(value, SubjectStrategy):
        return value
    try:
        return SubjectStrategy(value)
    except ValueError:
        choices = ", ".join(s.value for s in SubjectStrategy)
        raise InvalidConfig(
            f"Unknown subject strategy {value!r}, expected one of: {choices}"
        ) from None


class ConfigResolver:
    """Merges the user configuration with defaults derived from the header.

    References are resolved in increasing priority: the configured
    ``assembly``, then explicit ``reference`` entries.
    Entries for contigs the header does not declare are ignored.
    """

    def __init__(self, header: HeaderModel):
        self.header = header
        self.logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")

    def resolve(
        self,
        config: ConversionConfig | Mapping[str, Any] | None = None,
        subject: str | SubjectStrategy | None = None,
        normalize: bool | None = None,
        best_effort: bool | None = None,
    ) -> RunConfig:
        """Produce the RunConfig; keyword arguments override the document.

        Raises:
            InvalidConfig: If the document is malformed or cannot satisfy the
                requested subject strategy
            UnresolvedNamespace: If a reference IRI uses an undeclared prefix
        """
        if not isinstance(config, ConversionConfig):
            config = parse_config(config)

        base = normalize_base(config.base)
        namespaces = self._namespaces(config.namespaces)
        registry = NamespaceRegistry(namespaces, base)

        strategy = parse_strategy(subject if subject is not None else config.subject)
        references = self._references(config, registry)

        if strategy.uses_reference and not any(
            mapping.reference for mapping in references.values()
        ):
            raise InvalidConfig(
                f"Subject strategy {strategy.value} needs a reference sequence "
                "for at least one contig; set 'assembly' or 'reference'"
            )

        if strategy in (
            SubjectStrategy.BY_ID,
            SubjectStrategy.BY_LOCATION,
            SubjectStrategy.NORMALIZED_LOCATION,
        ) and base is None:
            raise InvalidConfig(f"Subject strategy {strategy.value} needs a base IRI")

        run = RunConfig(
            header=self.header,
            namespaces=MappingProxyType(namespaces),
            info_keys=self._info_keys(config.info),
            references=MappingProxyType(references),
            base=base,
            subject=strategy,
            normalize=config.normalize if normalize is None else normalize,
            best_effort=config.best_effort if best_effort is None else best_effort,
        )

        self.logger.debug(
            f"Run configured: subject={run.subject.value}, normalize={run.normalize}, "
            f"{len(run.info_keys)} INFO keys, {len(run.references)} mapped contigs"
        )
        return run

    def _namespaces(self, extra: Mapping[str, str]) -> dict[str, str]:
        namespaces = dict(BUILTIN_NAMESPACES)
        for prefix, iri in extra.items():
            if not is_valid_prefix(prefix):
                raise InvalidConfig(f"Invalid namespace prefix {prefix!r}")
            if not is_absolute_iri(iri):
                raise InvalidConfig(
                    f"Namespace {prefix} must be an absolute IRI, got {iri!r}"
                )
            if prefix in BUILTIN_NAMESPACES and BUILTIN_NAMESPACES[prefix] != iri:
                self.logger.info(f"Namespace prefix {prefix} overridden with {iri}")
            namespaces[prefix] = iri
        return namespaces

    def _info_keys(self, requested: list[str] | None) -> tuple[str, ...]:
        if requested is None:
            return self.header.info_keys

        wanted = set(requested)
        for key in requested:
            if key not in self.header.info:
                self.logger.debug(f"INFO key {key} is not declared, ignoring it")
        return tuple(key for key in self.header.info_keys if key in wanted)

    def _references(
        self, config: ConversionConfig, registry: NamespaceRegistry
    ) -> dict[str, SequenceMapping]:
        references: dict[str, SequenceMapping] = {}

        if config.assembly:
            assembly = find_assembly(config.assembly)
            if assembly is None:
                raise InvalidConfig(f"Unknown assembly {config.assembly!r}")
            for name in self.header.contig_names:
                mapping = self._from_assembly(assembly, name)
                if mapping is not None:
                    references[name] = mapping

        declared = set(self.header.contig_names)
        for name, entry in config.reference.items():
            if name not in declared:
                self.logger.debug(f"Contig {name} is not declared, ignoring its mapping")
                continue
            if entry is None:
                references.pop(name, None)
                continue
            references[name] = self._merge(references.get(name), entry, registry)

        return references

    @staticmethod
    def _from_assembly(assembly: Assembly | None, contig: str) -> SequenceMapping | None:
        if assembly is None:
            return None
        sequence = assembly.find_sequence(contig)
        if sequence is None:
            return None
        return SequenceMapping(name=sequence.name, reference=sequence.reference)

    @staticmethod
    def _merge(
        default: SequenceMapping | None,
        entry: SequenceConfig,
        registry: NamespaceRegistry,
    ) -> SequenceMapping:
        reference = default.reference if default else None
        if entry.reference:
            reference = str(registry.expand(entry.reference))
            # Subjects append "#pos-ref-alt" to the reference IRI.
            if "#" in reference:
                raise InvalidConfig(
                    f"Reference IRI {reference!r} must not contain a fragment"
                )
        name = entry.name or (default.name if default else None)
        return SequenceMapping(name=name, reference=reference)


def build_run(
    header: HeaderModel,
    config: ConversionConfig | Mapping[str, Any] | None = None,
    **overrides: Any,
) -> RunConfig:
    """Resolve ``config`` against ``header`` into a RunConfig."""
    return ConfigResolver(header).resolve(config, **overrides)
