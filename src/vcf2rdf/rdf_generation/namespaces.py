"""RDF namespaces and IRI resolution."""

from __future__ import annotations

from collections.abc import Mapping
import re
from types import MappingProxyType
from typing import Final
from urllib.parse import quote

from rdflib import Namespace, URIRef
from rdflib.namespace import DCTERMS, RDF, RDFS, XSD

from ..errors import UnresolvedNamespace

FALDO: Final = Namespace("http://biohackathon.org/resource/faldo#")
GVO: Final = Namespace("http://genome-variation.org/resource#")
HCO: Final = Namespace("http://identifiers.org/hco/")
OBO: Final = Namespace("http://purl.obolibrary.org/obo/")
SIO: Final = Namespace("http://semanticscience.org/resource/")

BUILTIN_NAMESPACES: Final[Mapping[str, str]] = MappingProxyType(
    {
        "dct": str(DCTERMS),
        "faldo": str(FALDO),
        "gvo": str(GVO),
        "hco": str(HCO),
        "obo": str(OBO),
        "rdf": str(RDF),
        "rdfs": str(RDFS),
        "sio": str(SIO),
        "xsd": str(XSD),
    }
)

_ABSOLUTE_IRI = re.compile(r"^[A-Za-z][A-Za-z0-9+.-]*://|^urn:", re.IGNORECASE)
_PREFIX_NAME = re.compile(r"^[A-Za-z][\w.-]*$")
_IRI_SAFE = "-._~:;,=/#@!$&()*+"


def is_absolute_iri(value: str) -> bool:
    return bool(_ABSOLUTE_IRI.match(value))


def is_valid_prefix(prefix: str) -> bool:
    return bool(_PREFIX_NAME.match(prefix)) and not prefix.endswith(".")


class NamespaceRegistry:
    """Prefix table used to expand every IRI the emitter writes.

    Terms are resolved as absolute IRIs, ``prefix:local`` names against the
    declared prefixes, or relative references against the base IRI.
    """

    def __init__(self, namespaces: Mapping[str, str], base: str | None = None):
        self.namespaces = dict(namespaces)
        self.base = base

    def expand(self, term: str) -> URIRef:
        """Resolve a term to an absolute IRI.

        Raises:
            UnresolvedNamespace: If the prefix is undeclared, or the term is
                relative and no base IRI is configured
        """
        if is_absolute_iri(term):
            return URIRef(term)

        prefix, sep, local = term.partition(":")
        if sep:
            namespace = self.namespaces.get(prefix)
            if namespace is None:
                raise UnresolvedNamespace(term)
            return URIRef(namespace + local)

        return self.relative(term)

    def relative(self, local: str) -> URIRef:
        """Resolve ``local`` against the base IRI, percent-encoding as needed."""
        if not self.base:
            raise UnresolvedNamespace(local, "relative IRI and no base IRI configured")
        return URIRef(self.base + quote(local, safe=_IRI_SAFE))

    def term(self, prefix: str, local: str) -> URIRef:
        """IRI for ``local`` in the namespace bound to ``prefix``."""
        namespace = self.namespaces.get(prefix)
        if namespace is None:
            raise UnresolvedNamespace(f"{prefix}:{local}")
        return URIRef(namespace + local)

    def items(self) -> list[tuple[str, str]]:
        return sorted(self.namespaces.items())
