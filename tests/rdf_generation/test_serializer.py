"""Tests for output sinks."""

import io

import pytest
from rdflib import BNode, Graph, Literal, URIRef
from rdflib.namespace import RDF, RDFS, XSD
from vcf2rdf.rdf_generation.namespaces import BUILTIN_NAMESPACES, GVO, NamespaceRegistry
from vcf2rdf.rdf_generation.serializer import (
    GraphSink,
    NTriplesSink,
    create_sink,
    format_term,
    format_triple,
    normalize_format_name,
)

TRIPLES = [
    (BNode("v1"), RDF.type, GVO.SNV),
    (BNode("v1"), GVO.ref, Literal("A")),
    (BNode("v1"), GVO.qual, Literal(29.5, datatype=XSD.double)),
]


@pytest.fixture
def namespaces() -> NamespaceRegistry:
    return NamespaceRegistry(BUILTIN_NAMESPACES)


def test_format_triple() -> None:
    assert format_triple(TRIPLES[0]) == (
        "_:v1 <http://www.w3.org/1999/02/22-rdf-syntax-ns#type> "
        "<http://genome-variation.org/resource#SNV> .\n"
    )


@pytest.mark.parametrize(
    ("term", "expected"),
    [
        (Literal("A"), '"A"'),
        (Literal(30), '"30"^^<http://www.w3.org/2001/XMLSchema#integer>'),
        (Literal(True), '"true"^^<http://www.w3.org/2001/XMLSchema#boolean>'),
        (Literal("chat", lang="fr"), '"chat"@fr'),
        (Literal('say "hi"\nnow\\'), '"say \\"hi\\"\\nnow\\\\"'),
        (URIRef("http://example.org/x"), "<http://example.org/x>"),
        (BNode("loc1"), "_:loc1"),
    ],
)
def test_format_term(term: object, expected: str) -> None:
    assert format_term(term) == expected  # type: ignore[arg-type]


def test_ntriples_sink_streams_lines() -> None:
    stream = io.StringIO()
    sink = NTriplesSink(stream)

    assert sink.write(TRIPLES[:1]) == 1
    assert stream.getvalue().count("\n") == 1
    sink.write(TRIPLES[1:])
    sink.close()

    assert sink.triples_written == 3
    graph = Graph().parse(data=stream.getvalue(), format="nt")
    assert len(graph) == 3


def test_graph_sink_serializes_on_close(namespaces: NamespaceRegistry) -> None:
    stream = io.StringIO()
    sink = GraphSink(stream, "turtle", namespaces)

    sink.write(TRIPLES)
    assert stream.getvalue() == ""
    sink.close()

    content = stream.getvalue()
    assert "@prefix gvo: <http://genome-variation.org/resource#>" in content
    graph = Graph().parse(data=content, format="turtle")
    assert len(graph) == 3
    assert (None, GVO.ref, Literal("A")) in graph


@pytest.mark.parametrize(
    ("name", "expected"),
    [
        ("nt", "nt"),
        ("ntriples", "nt"),
        ("TTL", "turtle"),
        ("rdf", "xml"),
        ("jsonld", "json-ld"),
        ("nq", "nquads"),
    ],
)
def test_normalize_format_name(name: str, expected: str) -> None:
    assert normalize_format_name(name) == expected


def test_create_sink(namespaces: NamespaceRegistry) -> None:
    assert isinstance(create_sink("nt", io.StringIO(), namespaces), NTriplesSink)
    sink = create_sink("ttl", io.StringIO(), namespaces)
    assert isinstance(sink, GraphSink)
    assert sink.output_format == "turtle"


def test_unsupported_format(namespaces: NamespaceRegistry) -> None:
    with pytest.raises(ValueError, match="Unsupported format"):
        create_sink("csv", io.StringIO(), namespaces)


def test_label_literals_round_trip_through_xml(namespaces: NamespaceRegistry) -> None:
    stream = io.StringIO()
    sink = GraphSink(stream, "xml", namespaces)
    sink.write([(BNode("g"), RDFS.label, Literal("DP"))])
    sink.close()

    graph = Graph().parse(data=stream.getvalue(), format="xml")
    assert (None, RDFS.label, Literal("DP")) in graph
