"""RDF term and quad model.

Terms follow the shape used by N3.js-style libraries: every term exposes a text
``id`` and a ``term_type`` discriminator.  Terms compare by identity, so two
``NamedNode("A")`` instances are distinct terms that merely share an id.  Use a
:class:`TermFactory` to intern terms when one instance per id is wanted.
"""

from typing import ClassVar, NamedTuple

from rdflib import BNode as RDFLibBNode
from rdflib import Literal as RDFLibLiteral
from rdflib import URIRef
from rdflib.namespace import XSD

type Term = NamedNode | BlankNode | Literal

_XSD_STRING = str(XSD.string)


class _Term:
    """Immutable term carrying a text id."""

    __slots__ = ("id",)

    term_type: ClassVar[str] = ""

    id: str

    def __init__(self, id: str) -> None:
        if not isinstance(id, str):
            msg = f"{type(self).__name__} id must be str, not {type(id).__name__}"
            raise TypeError(msg)
        object.__setattr__(self, "id", id)

    def __setattr__(self, name: str, value: object) -> None:
        raise AttributeError(f"{type(self).__name__} is immutable")

    def __delattr__(self, name: str) -> None:
        raise AttributeError(f"{type(self).__name__} is immutable")

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.id!r})"


class NamedNode(_Term):
    """Globally identified resource."""

    __slots__ = ()
    term_type = "NamedNode"


class BlankNode(_Term):
    """Anonymous resource; its id only means something inside one collection."""

    __slots__ = ()
    term_type = "BlankNode"


class Literal(_Term):
    """Literal with an encoded lexical form.

    The id is ``"value"``, optionally followed by ``^^datatype`` or ``@lang``.
    """

    __slots__ = ()
    term_type = "Literal"

    def _split(self) -> tuple[str, str]:
        if not self.id.startswith('"'):
            return self.id, ""
        end = self.id.rfind('"')
        return self.id[1:end], self.id[end + 1 :]

    @property
    def value(self) -> str:
        """Lexical value between the quotes."""
        return self._split()[0]

    @property
    def datatype(self) -> str:
        """Datatype IRI, or an empty string when the literal has none."""
        suffix = self._split()[1]
        return suffix[2:] if suffix.startswith("^^") else ""

    @property
    def language(self) -> str:
        """Language tag, or an empty string when the literal has none."""
        suffix = self._split()[1]
        return suffix[1:] if suffix.startswith("@") else ""


class Quad(NamedTuple):
    """Immutable RDF statement."""

    subject: Term
    predicate: Term
    object: Term
    graph: Term


DEFAULT_GRAPH = NamedNode("")


def encode_literal(value: str, datatype: str | None = None, language: str | None = None) -> str:
    """Build the encoded lexical form of a literal."""
    if language:
        return f'"{value}"@{language}'
    if datatype and datatype != _XSD_STRING:
        return f'"{value}"^^{datatype}'
    return f'"{value}"'


class TermFactory:
    """Create terms, reusing one instance per id.

    Identity filters only make sense when every occurrence of a resource is the
    same object, so sources that build quads go through one factory per
    collection.  Blank node labels are scoped to the factory that created them.
    """

    def __init__(self) -> None:
        self._terms: dict[tuple[type[_Term], str], Term] = {(NamedNode, ""): DEFAULT_GRAPH}

    def _intern(self, cls: type[Term], id: str) -> Term:
        key = (cls, id)
        term = self._terms.get(key)
        if term is None:
            term = cls(id)
            self._terms[key] = term
        return term

    def named_node(self, iri: str) -> NamedNode:
        return self._intern(NamedNode, iri)  # type: ignore[return-value]

    def blank_node(self, label: str) -> BlankNode:
        if not label.startswith("_:"):
            label = f"_:{label}"
        return self._intern(BlankNode, label)  # type: ignore[return-value]

    def literal(
        self, value: str, datatype: str | None = None, language: str | None = None
    ) -> Literal:
        return self._intern(Literal, encode_literal(value, datatype, language))  # type: ignore[return-value]

    def quad(self, subject: Term, predicate: Term, object: Term, graph: Term | None = None) -> Quad:
        return Quad(subject, predicate, object, DEFAULT_GRAPH if graph is None else graph)

    def from_rdflib(self, term: URIRef | RDFLibBNode | RDFLibLiteral) -> Term:
        """Convert an rdflib term into an interned term."""
        match term:
            case RDFLibLiteral():
                datatype = str(term.datatype) if term.datatype is not None else None
                return self.literal(str(term), datatype, term.language)
            case RDFLibBNode():
                return self.blank_node(str(term))
            case URIRef():
                return self.named_node(str(term))
        msg = f"cannot convert {type(term).__name__} to an RDF term"
        raise TypeError(msg)

    def __len__(self) -> int:
        return len(self._terms)
