"""Error taxonomy for the conversion engine."""

from __future__ import annotations


class Vcf2RdfError(Exception):
    """Base class for every error raised by the conversion engine."""


class MalformedHeader(Vcf2RdfError):
    """A meta-information line could not be parsed."""

    def __init__(self, message: str, line: str | None = None):
        self.line = line
        if line is not None:
            message = f"{message}: {line}"
        super().__init__(message)


class InvalidConfig(Vcf2RdfError):
    """The run configuration is malformed or cannot satisfy the run."""


class MalformedRecord(Vcf2RdfError):
    """A record's fixed columns could not be decoded."""

    def __init__(
        self,
        message: str,
        line: str,
        line_number: int | None = None,
        contig: str | None = None,
        position: str | None = None,
    ):
        self.line = line
        self.line_number = line_number
        self.contig = contig
        self.position = position

        context = []
        if line_number is not None:
            context.append(f"line {line_number}")
        if contig:
            context.append(f"{contig}:{position or '?'}")
        if context:
            message = f"{message} ({', '.join(context)})"
        super().__init__(message)


class MissingOrDuplicateId(Vcf2RdfError):
    """A record lacks an identifier, or shares one with an earlier record."""

    def __init__(self, message: str, identifier: str | None = None):
        self.identifier = identifier
        super().__init__(message)


class UnresolvedNamespace(Vcf2RdfError):
    """An IRI uses a prefix, or a relative form, that cannot be resolved."""

    def __init__(self, term: str, reason: str = "undeclared prefix"):
        self.term = term
        super().__init__(f"Cannot resolve IRI '{term}': {reason}")


class IoFailure(Vcf2RdfError):
    """The variant file or configuration file could not be read."""
