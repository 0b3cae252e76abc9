"""Convenience lookups over a quad collection."""

from collections.abc import Callable, Iterable
from typing import Any

from rdflib import RDF
from rdflib.namespace import XSD

from quad_reader.reader import QuadReader
from quad_reader.sources import fetch, parse
from quad_reader.terms import Literal, Quad

RDF_TYPE = str(RDF.type)

# Media type -> rdflib parser name
MEDIA_TYPES = {"text/turtle": "turtle"}


def _literal_datatype(literal: Literal) -> str:
    if literal.datatype:
        return literal.datatype
    if literal.language:
        return str(RDF.langString)
    return str(XSD.string)


class Graph:
    """Look up objects and literal values by subject and predicate."""

    def __init__(
        self,
        source: Iterable[Quad] | str,
        media_type: str | None = None,
        base: str | None = None,
    ) -> None:
        """Initialize graph.

        Args:
            source: Quads, or document text when media_type is given
            media_type: Media type of a text source (only text/turtle)
            base: Base IRI for resolving relative references in a text source

        Raises:
            ValueError: source is text in an unsupported media type
        """
        if isinstance(source, str):
            if media_type not in MEDIA_TYPES:
                msg = f"supported types are: {', '.join(MEDIA_TYPES)}"
                raise ValueError(msg)
            source = parse(source, format=MEDIA_TYPES[media_type], base=base)

        self._reader = source if isinstance(source, QuadReader) else QuadReader(source)

    @classmethod
    def fetch(cls, url: str) -> "Graph":
        """Create a graph from a Turtle document at a URL."""
        return cls(fetch(url, format="turtle"))

    @property
    def reader(self) -> QuadReader:
        return self._reader

    def find_objects(self, subject: Any, predicate: Any) -> list[Any]:
        """Return every object of the subject and predicate."""
        return [quad.object for quad in self._reader.filter(subject, predicate)]

    def find_only_object(self, subject: Any, predicate: Any) -> Any:
        """Return the object of the subject and predicate, or None unless there is exactly one."""
        objects = self.find_objects(subject, predicate)
        return objects[0] if len(objects) == 1 else None

    def read_literal(self, subject: Any, predicate: Any, datatype: str | None = None) -> str | None:
        """Return the lexical value of the only literal object of the subject and predicate.

        Returns None when there is no single literal object, or when datatype is
        given and the literal has a different one.
        """
        obj = self.find_only_object(subject, predicate)
        if not isinstance(obj, Literal):
            return None
        if datatype and _literal_datatype(obj) != str(datatype):
            return None
        return obj.value

    def type_filter(self, rdf_type: Any) -> Callable[[Any], bool]:
        """Return a predicate telling whether a subject has the given rdf:type."""
        typed = self._reader.filter(None, RDF_TYPE, rdf_type)

        def has_type(subject: Any) -> bool:
            return any(True for _ in typed.filter(subject))

        return has_type
