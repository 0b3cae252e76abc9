"""Quad filter construction.

A filter constrains up to four axes (subject, predicate, object, graph).  Each
axis is independently absent, matched by identity against a term, or matched by
id against text, giving 81 possible shapes.  The shape is resolved once when the
filter is compiled; the returned predicate only performs the comparisons its
shape needs.

Shapes are named with one letter per constrained axis: upper case for identity
matches (``S``, ``P``, ``O``, ``G``) and lower case for id matches (``s``,
``p``, ``o``, ``g``).  ``"Sp"`` means "subject is this term and predicate has
this id".
"""

from collections.abc import Callable
from enum import Enum
from functools import reduce
from operator import attrgetter
from typing import Any

from quad_reader.terms import Quad

type QuadFilter = Callable[[Quad], bool]

AXES = ("subject", "predicate", "object", "graph")


class Mode(Enum):
    """How a single axis is matched."""

    ABSENT = "absent"
    IDENTITY = "identity"
    BY_ID = "by_id"


def axis_mode(value: Any) -> Mode:
    """Classify a match argument.

    Anything exposing a ``str`` id is treated as a term and matched by identity;
    any other truthy value is matched against term ids.
    """
    if isinstance(getattr(value, "id", None), str):
        return Mode.IDENTITY
    if value:
        return Mode.BY_ID
    return Mode.ABSENT


def filter_shape(subject: Any = None, predicate: Any = None, object: Any = None, graph: Any = None) -> str:
    """Return the shape name for a set of match arguments."""
    shape = ""
    for axis, value in zip(AXES, (subject, predicate, object, graph), strict=True):
        match axis_mode(value):
            case Mode.IDENTITY:
                shape += axis[0].upper()
            case Mode.BY_ID:
                shape += axis[0]
    return shape


def _identity(axis: str, term: Any) -> QuadFilter:
    get = attrgetter(axis)
    return lambda quad: get(quad) is term


def _by_id(axis: str, id: Any) -> QuadFilter:
    get = attrgetter(f"{axis}.id")
    return lambda quad: get(quad) == id


def _both(first: QuadFilter, second: QuadFilter) -> QuadFilter:
    return lambda quad: first(quad) and second(quad)


def compile_filter(
    subject: Any = None, predicate: Any = None, object: Any = None, graph: Any = None
) -> QuadFilter | None:
    """Build a predicate matching quads against the given terms or ids.

    Returns ``None`` when no axis is constrained; callers should then skip
    filtering altogether.
    """
    checks: list[QuadFilter] = []
    for axis, value in zip(AXES, (subject, predicate, object, graph), strict=True):
        match axis_mode(value):
            case Mode.IDENTITY:
                checks.append(_identity(axis, value))
            case Mode.BY_ID:
                checks.append(_by_id(axis, value))

    if not checks:
        return None
    return reduce(_both, checks)
