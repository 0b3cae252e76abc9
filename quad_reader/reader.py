"""Filtered, immutable views over quad collections."""

from collections.abc import Iterable, Iterator
from enum import Enum
from typing import Any

from quad_reader.errors import InvalidOptionError, InvalidQuadsError
from quad_reader.filters import AXES, compile_filter
from quad_reader.literals import literal_value, object_value, term_value
from quad_reader.terms import BlankNode, NamedNode, Quad


class Option(Enum):
    """Options accepted by :meth:`QuadReader.pojo`."""

    FLATTEN = "flatten"
    OBJECTS = "objects"


FLATTEN = Option.FLATTEN
OBJECTS = Option.OBJECTS


def accumulate(result: dict[str, Any], key: str, value: Any, flatten: bool) -> None:
    """Add a value under key, growing single values into lists.

    Without flatten every value is wrapped in a list.  With flatten a key seen
    once holds the bare value and becomes a list on its second value.
    """
    if key not in result:
        result[key] = value if flatten else [value]
    elif isinstance(result[key], list):
        result[key].append(value)
    else:
        result[key] = [result[key], value]


class QuadReader:
    """Wrap a collection of quads to support filtering and iteration.

    The reader keeps its own snapshot of the quads, so later changes to the
    source collection are not visible.  Filtering returns a new reader.
    """

    FLATTEN = Option.FLATTEN
    OBJECTS = Option.OBJECTS

    literal_value = staticmethod(literal_value)
    object_value = staticmethod(object_value)
    term_value = staticmethod(term_value)

    def __init__(
        self,
        quads: Iterable[Quad],
        subject: Any = None,
        predicate: Any = None,
        object: Any = None,
        graph: Any = None,
    ) -> None:
        """Initialize reader.

        Args:
            quads: Quads, or any objects with subject/predicate/object/graph attributes
            subject: Subject term or id to match (None for any)
            predicate: Predicate term or id to match (None for any)
            object: Object term or id to match (None for any)
            graph: Graph term or id to match (None for any)

        Raises:
            InvalidQuadsError: quads is text or not an iterable of quads
        """
        if isinstance(quads, str | bytes) or not isinstance(quads, Iterable):
            msg = "quads should be an iterable of quad objects"
            raise InvalidQuadsError(msg)

        snapshot = tuple(quads)
        for quad in snapshot:
            if not all(hasattr(quad, axis) for axis in AXES):
                msg = f"not a quad: {quad!r}"
                raise InvalidQuadsError(msg)

        self._quads = snapshot
        self._filter = compile_filter(subject, predicate, object, graph)

    def __iter__(self) -> Iterator[Quad]:
        if self._filter is None:
            return iter(self._quads)
        keep = self._filter
        return (quad for quad in self._quads if keep(quad))

    def __len__(self) -> int:
        if self._filter is None:
            return len(self._quads)
        return sum(1 for _ in self)

    def __repr__(self) -> str:
        return f"<{type(self).__name__} quads={len(self._quads)} filtered={self._filter is not None}>"

    def filter(
        self, subject: Any = None, predicate: Any = None, object: Any = None, graph: Any = None
    ) -> "QuadReader":
        """Create a new reader over the quads of this reader matching the terms."""
        return QuadReader(self, subject, predicate, object, graph)

    def subjects(self) -> list[Any]:
        """Return unique subjects, in order of first appearance."""
        return list(dict.fromkeys(quad.subject for quad in self))

    def predicates(self) -> list[Any]:
        """Return unique predicates, in order of first appearance."""
        return list(dict.fromkeys(quad.predicate for quad in self))

    def objects(self) -> list[Any]:
        """Return unique object values (literals decoded), in order of first appearance.

        Values of different types stay distinct, so ``True``, ``1`` and ``1.0``
        are three objects.
        """
        unique: dict[tuple[type, Any], Any] = {}
        for quad in self:
            value = object_value(quad.object)
            unique.setdefault((type(value), value), value)
        return list(unique.values())

    def all_po(self, flatten: bool = False) -> dict[str, Any]:
        """Map each predicate id to the values of its objects.

        Named nodes become ids, literals are decoded, and blank nodes are kept
        as nodes.  Values are lists unless flatten is set, in which case a
        predicate with a single object maps to the bare value.

        Raises:
            LiteralDecodeError: an object literal has an unsupported datatype
        """
        result: dict[str, Any] = {}
        for quad in self:
            accumulate(result, quad.predicate.id, term_value(quad.object), flatten)
        return result

    def pojo(self, subject: Any = None, *options: Option) -> dict[str, Any]:
        """Build plain Python objects from the quads.

        With a subject (a term, or the id of one of this reader's subjects) the
        result holds that subject's predicates.  Without one, the result has a
        key for each named subject id.  A subject not present in the quads gives
        an empty dict.

        Options, in any order:
            Option.FLATTEN: collapse single values out of their lists
            Option.OBJECTS: replace node values by their own nested objects;
                cycles produce shared, circular references

        Raises:
            InvalidOptionError: an option is not an Option
            LiteralDecodeError: an object literal has an unsupported datatype
        """
        for option in options:
            if not isinstance(option, Option):
                raise InvalidOptionError(f"invalid option {option!r}")

        subjects = self.subjects()
        materializer = _Materializer(
            self,
            subjects,
            flatten=Option.FLATTEN in options,
            nest=Option.OBJECTS in options,
        )

        if subject is None:
            return {s.id: materializer.build(s) for s in subjects if isinstance(s, NamedNode)}

        if isinstance(subject, str):
            subject = next((s for s in subjects if s.id == subject), None)
            if subject is None:
                return {}
        elif subject not in materializer.subjects:
            return {}

        return materializer.build(subject)


class _Materializer:
    """Turn subjects into nested dicts for a single pojo() call.

    Each subject gets one record, registered before its fields are filled, so
    repeated or circular references resolve to the same dict.  Records waiting
    to be filled sit on an explicit stack instead of the call stack.
    """

    def __init__(self, reader: QuadReader, subjects: list[Any], flatten: bool, nest: bool) -> None:
        self.reader = reader
        self.subjects = set(subjects)
        self.flatten = flatten
        self.nest = nest
        self._records: dict[Any, dict[str, Any]] = {}
        self._pending: list[tuple[Any, dict[str, Any]]] = []

    def build(self, subject: Any) -> dict[str, Any]:
        record = self._visit(subject)
        while self._pending:
            node, fields = self._pending.pop()
            for quad in self.reader.filter(node):
                value = self._embed(object_value(quad.object))
                accumulate(fields, quad.predicate.id, value, self.flatten)
        return record

    def _visit(self, subject: Any) -> dict[str, Any]:
        record = self._records.get(subject)
        if record is None:
            record = {}
            self._records[subject] = record
            self._pending.append((subject, record))
        return record

    def _embed(self, value: Any) -> Any:
        match value:
            case NamedNode() | BlankNode() if self.nest and value in self.subjects:
                return self._visit(value)
            case NamedNode():
                return value.id
            case _:
                return value
