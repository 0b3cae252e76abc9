"""Literal decoding and term evaluation."""

import math
import re
from collections.abc import Callable
from typing import Any

from rdflib.namespace import XSD

from quad_reader.errors import LiteralDecodeError
from quad_reader.terms import Literal, NamedNode

type LiteralValue = str | bool | int | float | bytes


INTEGER_PATTERN = re.compile(r"[+-]?[0-9]+")
DECIMAL_PATTERN = re.compile(r"[+-]?(?:[0-9]+(?:\.[0-9]*)?|\.[0-9]+)")
DOUBLE_PATTERN = re.compile(r"[+-]?(?:[0-9]+(?:\.[0-9]*)?|\.[0-9]+)(?:[eE][+-]?[0-9]+)?|[+-]?INF|NaN")
HEX_BINARY_PATTERN = re.compile(r"(?:[0-9a-fA-F]{2})*")


def _boolean(data: str) -> bool:
    return data == "true"


def _integer(data: str) -> int | float:
    if not INTEGER_PATTERN.fullmatch(data):
        return math.nan
    return int(data, 10)


def _decimal(data: str) -> float:
    if not DECIMAL_PATTERN.fullmatch(data):
        return math.nan
    return float(data)


def _double(data: str) -> float:
    if not DOUBLE_PATTERN.fullmatch(data):
        return math.nan
    return float(data)


def _hex_binary(data: str) -> bytes:
    if not HEX_BINARY_PATTERN.fullmatch(data):
        raise LiteralDecodeError(str(XSD.hexBinary), f"invalid hexBinary literal: {data!r}")
    return bytes.fromhex(data)


# Datatype IRI -> decoder for the quoted payload
DATATYPE_DECODERS: dict[str, Callable[[str], LiteralValue]] = {
    str(XSD.boolean): _boolean,
    str(XSD.integer): _integer,
    str(XSD.decimal): _decimal,
    str(XSD.double): _double,
    str(XSD.hexBinary): _hex_binary,
}


def literal_value(literal: Literal) -> LiteralValue | None:
    """Decode a literal's encoded form into a Python value.

    Returns ``None`` when the encoded form does not start with a quote.  Untyped
    and language-tagged literals decode to their raw payload text.

    Raises:
        LiteralDecodeError: The datatype has no decoder.
    """
    encoded = literal.id
    if not encoded.startswith('"'):
        return None

    end = encoded.rfind('"')
    data = encoded[1:end]
    if encoded.startswith("@", end + 1):
        return data

    # Skip the closing quote and the "^^" marker
    datatype = encoded[end + 3 :]
    if not datatype:
        return data

    decoder = DATATYPE_DECODERS.get(datatype)
    if decoder is None:
        raise LiteralDecodeError(datatype)
    return decoder(data)


def object_value(term: Any) -> Any:
    """Evaluate a term for embedding as a property value.

    Literals decode to their value; named and blank nodes are returned as-is.
    """
    match term:
        case Literal():
            return literal_value(term)
        case _:
            return term


def term_value(term: Any) -> Any:
    """Evaluate a term to its value.

    Literals decode to their value, named nodes to their id, and blank nodes
    to the node itself.
    """
    match term:
        case Literal():
            return literal_value(term)
        case NamedNode():
            return term.id
        case _:
            return term
