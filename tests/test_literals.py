"""Tests for literal decoding and term evaluation."""

import math

import pytest
from rdflib.namespace import XSD

from quad_reader.errors import LiteralDecodeError
from quad_reader.literals import literal_value, object_value, term_value
from quad_reader.terms import BlankNode, Literal, NamedNode


def typed(value: str, datatype) -> Literal:
    return Literal(f'"{value}"^^{datatype}')


class TestLiteralValue:
    """Test decoding of encoded literal forms."""

    def test_untyped_literal_is_text(self):
        assert literal_value(Literal('"foo"')) == "foo"

    def test_untyped_literal_is_not_unescaped(self):
        """Payload text is returned as written, including inner quotes."""
        assert literal_value(Literal('"say "hi""')) == 'say "hi"'
        assert literal_value(Literal(r'"a\nb"')) == r"a\nb"

    def test_language_tagged_literal_is_text(self):
        assert literal_value(Literal('"chat"@fr')) == "chat"

    def test_integer(self):
        value = literal_value(typed("42", XSD.integer))
        assert value == 42
        assert isinstance(value, int)

    def test_negative_integer(self):
        assert literal_value(typed("-7", XSD.integer)) == -7

    def test_non_numeric_integer_is_nan(self):
        assert math.isnan(literal_value(typed("forty-two", XSD.integer)))

    def test_boolean(self):
        assert literal_value(typed("true", XSD.boolean)) is True
        assert literal_value(typed("false", XSD.boolean)) is False
        assert literal_value(typed("1", XSD.boolean)) is False

    def test_decimal_and_double(self):
        assert literal_value(typed("1.5", XSD.decimal)) == 1.5
        assert literal_value(typed("2.5E2", XSD.double)) == 250.0
        assert math.isnan(literal_value(typed("abc", XSD.double)))

    def test_hex_binary(self):
        assert literal_value(typed("cafe01", XSD.hexBinary)) == b"\xca\xfe\x01"

    def test_invalid_hex_binary_raises(self):
        with pytest.raises(LiteralDecodeError):
            literal_value(typed("xyz", XSD.hexBinary))

    @pytest.mark.parametrize("payload", ["ca fe", "caf", "0xca", " cafe"])
    def test_hex_binary_outside_lexical_space_raises(self, payload):
        with pytest.raises(LiteralDecodeError):
            literal_value(typed(payload, XSD.hexBinary))

    def test_empty_hex_binary(self):
        assert literal_value(typed("", XSD.hexBinary)) == b""

    @pytest.mark.parametrize(
        "payload, datatype",
        [
            ("1_000", XSD.integer),
            (" 42", XSD.integer),
            ("4.2", XSD.integer),
            ("1_000.5", XSD.decimal),
            ("1e3", XSD.decimal),
            ("inf", XSD.decimal),
            ("1_000.5", XSD.double),
            ("inf", XSD.double),
            ("nan", XSD.double),
            ("Infinity", XSD.double),
        ],
    )
    def test_numbers_outside_lexical_space_are_nan(self, payload, datatype):
        assert math.isnan(literal_value(typed(payload, datatype)))

    def test_double_lexical_forms(self):
        assert literal_value(typed("+.5", XSD.double)) == 0.5
        assert literal_value(typed("1.", XSD.double)) == 1.0
        assert literal_value(typed("-INF", XSD.double)) == -math.inf
        assert literal_value(typed("INF", XSD.double)) == math.inf
        assert math.isnan(literal_value(typed("NaN", XSD.double)))
        assert literal_value(typed("+12", XSD.integer)) == 12

    def test_unsupported_datatype_raises(self):
        with pytest.raises(LiteralDecodeError) as excinfo:
            literal_value(typed("2024-01-01", XSD.date))
        assert excinfo.value.datatype == str(XSD.date)
        assert isinstance(excinfo.value, ValueError)

    def test_unquoted_form_has_no_value(self):
        assert literal_value(Literal("foo")) is None

    def test_decoding_is_repeatable(self):
        literal = typed("42", XSD.integer)
        assert literal_value(literal) == literal_value(Literal(literal.id))


class TestTermEvaluation:
    """Test object-value and term-value evaluation modes."""

    def test_object_value(self):
        """Nodes are kept, literals are decoded."""
        named = NamedNode("A")
        blank = BlankNode("_:b1")
        assert object_value(named) is named
        assert object_value(blank) is blank
        assert object_value(typed("42", XSD.integer)) == 42
        assert object_value(None) is None

    def test_term_value(self):
        """Named nodes become ids, blank nodes are kept, literals are decoded."""
        blank = BlankNode("_:b1")
        assert term_value(NamedNode("A")) == "A"
        assert term_value(blank) is blank
        assert term_value(Literal('"foo"')) == "foo"
        assert term_value(None) is None
