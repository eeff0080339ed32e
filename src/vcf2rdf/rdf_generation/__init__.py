"""RDF generation: subjects, FALDO locations, statements and serialization."""

from .emitter import TripleEmitter
from .faldo import normalize
from .namespaces import BUILTIN_NAMESPACES, NamespaceRegistry
from .serializer import SUPPORTED_FORMATS, create_sink
from .subject import IdentifierRegistry, SubjectResolver

__all__ = [
    "BUILTIN_NAMESPACES",
    "SUPPORTED_FORMATS",
    "IdentifierRegistry",
    "NamespaceRegistry",
    "SubjectResolver",
    "TripleEmitter",
    "create_sink",
    "normalize",
]
