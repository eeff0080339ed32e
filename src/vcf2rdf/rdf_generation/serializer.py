"""Output sinks writing emitted statements in an RDF syntax."""

from __future__ import annotations

from collections.abc import Iterable
import logging
from typing import TextIO

from rdflib import BNode, Graph, Literal, Namespace, URIRef
from rdflib.term import Node

from .emitter import Triple
from .namespaces import NamespaceRegistry

logger = logging.getLogger(__name__)

STREAMING_FORMAT = "nt"

SUPPORTED_FORMATS = {
    "nt",
    "ntriples",
    "turtle",
    "ttl",
    "xml",
    "rdf",
    "pretty-xml",
    "n3",
    "json-ld",
    "jsonld",
    "trig",
    "nquads",
    "nq",
}

_FORMAT_ALIASES = {
    "ntriples": "nt",
    "ttl": "turtle",
    "rdf": "xml",
    "jsonld": "json-ld",
    "nq": "nquads",
}

_ESCAPES = str.maketrans({"\\": "\\\\", '"': '\\"', "\n": "\\n", "\r": "\\r"})


def normalize_format_name(format_name: str) -> str:
    """Canonical rdflib name of ``format_name``.

    Raises:
        ValueError: If the format is not supported
    """
    normalized = format_name.lower()
    if normalized not in SUPPORTED_FORMATS:
        raise ValueError(
            f"Unsupported format: {format_name}. "
            f"Supported formats: {sorted(SUPPORTED_FORMATS)}"
        )
    return _FORMAT_ALIASES.get(normalized, normalized)


def format_term(term: Node) -> str:
    """N-Triples form of a single term."""
    if isinstance(term, Literal):
        text = f'"{str(term).translate(_ESCAPES)}"'
        if term.language:
            return f"{text}@{term.language}"
        if term.datatype is not None:
            return f"{text}^^<{term.datatype}>"
        return text
    if isinstance(term, (URIRef, BNode)):
        return term.n3()
    raise TypeError(f"Cannot serialize {term!r} as N-Triples")


def format_triple(triple: Triple) -> str:
    subject, predicate, obj = triple
    return f"{format_term(subject)} {format_term(predicate)} {format_term(obj)} .\n"


class NTriplesSink:
    """Writes each statement as soon as it is emitted."""

    def __init__(self, stream: TextIO):
        self.stream = stream
        self.triples_written = 0

    def write(self, triples: Iterable[Triple]) -> int:
        lines = [format_triple(triple) for triple in triples]
        self.stream.write("".join(lines))
        self.triples_written += len(lines)
        return len(lines)

    def close(self) -> None:
        self.stream.flush()


class GraphSink:
    """Collects the run into an rdflib Graph and serializes it on close.

    Memory grows with the number of statements, unlike :class:`NTriplesSink`.
    """

    def __init__(self, stream: TextIO, output_format: str, namespaces: NamespaceRegistry):
        self.stream = stream
        self.output_format = output_format
        self.graph = Graph(bind_namespaces="none")
        for prefix, uri in namespaces.items():
            self.graph.bind(prefix, Namespace(uri))
        self.triples_written = 0

    def write(self, triples: Iterable[Triple]) -> int:
        count = 0
        for triple in triples:
            self.graph.add(triple)
            count += 1
        self.triples_written += count
        return count

    def close(self) -> None:
        logger.debug(
            f"Serializing {len(self.graph)} statements as {self.output_format}"
        )
        try:
            content = self.graph.serialize(format=self.output_format)
        except Exception as e:
            raise ValueError(
                f"Failed to serialize RDF as {self.output_format}: {e}"
            ) from e
        self.stream.write(content)
        self.stream.flush()


def create_sink(
    output_format: str, stream: TextIO, namespaces: NamespaceRegistry
) -> NTriplesSink | GraphSink:
    """Sink for ``output_format``; N-Triples output is streamed.

    Raises:
        ValueError: If the format is not supported
    """
    rdflib_format = normalize_format_name(output_format)
    if rdflib_format == STREAMING_FORMAT:
        return NTriplesSink(stream)
    return GraphSink(stream, rdflib_format, namespaces)
