"""Unit tests for engines.sql.filters."""

from decimal import Decimal

import pytest

from sqltpl.core.errors import ExpectedArray, QueryBuildError, UnsupportedValueType
from sqltpl.core.pool import StaticEscaper
from sqltpl.engines.sql.filters import (
    escape_identifier,
    escape_string,
    format_array,
    format_float,
    format_identifiers,
    format_int,
    format_value,
    get_formatter,
)

ESC = StaticEscaper()


def _unescape_identifier(quoted: str) -> str:
    assert quoted[0] == quoted[-1] == "`"
    return quoted[1:-1].replace("``", "`")


class TestEscapeIdentifier:
    def test_plain(self):
        assert escape_identifier("name") == "`name`"

    def test_backtick_doubled(self):
        assert escape_identifier("a`b") == "`a``b`"

    @pytest.mark.parametrize("name", ["id", "a`b", "`", "``x``", "", "年金计划号", "a b"])
    def test_round_trip(self, name):
        assert _unescape_identifier(escape_identifier(name)) == name

    def test_non_string(self):
        with pytest.raises(UnsupportedValueType):
            escape_identifier(5)


class TestEscapeString:
    def test_plain(self):
        assert escape_string("x", ESC) == "'x'"

    def test_quote(self):
        assert escape_string("O'Reilly", ESC) == "'O\\'Reilly'"

    def test_delegates_to_escaper(self):
        class Upper:
            def escape_string(self, value):
                return value.upper()

        assert escape_string("abc", Upper()) == "'ABC'"


class TestFormatInt:
    def test_none(self):
        assert format_int(None) == "NULL"

    def test_int(self):
        assert format_int(42) == "42"
        assert format_int(-7) == "-7"

    def test_float_truncates(self):
        assert format_int(3.9) == "3"
        assert format_int(-3.9) == "-3"

    def test_bool(self):
        assert format_int(True) == "1"
        assert format_int(False) == "0"

    def test_numeric_prefix(self):
        assert format_int("5abc") == "5"
        assert format_int(" 12") == "12"
        assert format_int("1e3") == "1000"
        assert format_int("2.7x") == "2"

    def test_non_numeric_string(self):
        assert format_int("abc") == "0"
        assert format_int("") == "0"

    def test_decimal(self):
        assert format_int(Decimal("9.99")) == "9"

    def test_unsupported(self):
        with pytest.raises(UnsupportedValueType):
            format_int(object())


class TestFormatFloat:
    def test_none(self):
        assert format_float(None) == "NULL"

    def test_integral(self):
        assert format_float(3) == "3"
        assert format_float(3.0) == "3"

    def test_fraction(self):
        assert format_float(2.5) == "2.5"
        assert format_float("2.5abc") == "2.5"

    def test_non_numeric_string(self):
        assert format_float("abc") == "0"

    def test_non_finite(self):
        with pytest.raises(UnsupportedValueType):
            format_float(float("inf"))
        with pytest.raises(UnsupportedValueType):
            format_float("1e999")

    def test_int_too_large(self):
        with pytest.raises(UnsupportedValueType, match="too large"):
            format_float(10**400)


class TestFormatValue:
    def test_none(self):
        assert format_value(None, ESC) == "NULL"

    def test_numbers(self):
        assert format_value(5, ESC) == "5"
        assert format_value(2.5, ESC) == "2.5"

    def test_bool(self):
        assert format_value(True, ESC) == "1"
        assert format_value(False, ESC) == "0"

    def test_string(self):
        assert format_value("Jack", ESC) == "'Jack'"

    def test_unsupported(self):
        with pytest.raises(UnsupportedValueType):
            format_value(object(), ESC)

    def test_nan(self):
        with pytest.raises(UnsupportedValueType):
            format_value(float("nan"), ESC)

    def test_list_unsupported(self):
        with pytest.raises(UnsupportedValueType):
            format_value([1], ESC)


class TestFormatArray:
    def test_list(self):
        assert format_array([1, 2, 3], ESC) == "1, 2, 3"

    def test_mapping(self):
        assert format_array({"a": 1, "b": "x"}, ESC) == "`a` = 1, `b` = 'x'"

    def test_mapping_with_null(self):
        assert format_array({"name": "Jack", "email": None}, ESC) == (
            "`name` = 'Jack', `email` = NULL"
        )

    def test_positional_keys(self):
        assert format_array({0: "a", "1": "b", "c": 3}, ESC) == "'a', 'b', `c` = 3"

    def test_tuple_and_generator(self):
        assert format_array((1, None, True), ESC) == "1, NULL, 1"
        assert format_array((i for i in range(2)), ESC) == "0, 1"

    def test_empty(self):
        assert format_array([], ESC) == ""

    def test_expected_array(self):
        with pytest.raises(ExpectedArray):
            format_array(5, ESC)
        with pytest.raises(ExpectedArray):
            format_array("abc", ESC)

    def test_nested_unsupported(self):
        with pytest.raises(UnsupportedValueType):
            format_array([[1]], ESC)


class TestFormatIdentifiers:
    def test_single(self):
        assert format_identifiers("name") == "`name`"

    def test_list(self):
        assert format_identifiers(["a", "b"]) == "`a`, `b`"

    def test_mapping_uses_values(self):
        assert format_identifiers({"x": "a", "y": "b"}) == "`a`, `b`"

    def test_not_iterable(self):
        with pytest.raises(ExpectedArray):
            format_identifiers(None)
        with pytest.raises(ExpectedArray):
            format_identifiers(5)

    def test_non_string_name(self):
        with pytest.raises(ExpectedArray, match="strings"):
            format_identifiers([1, "b"])


class TestGetFormatter:
    def test_dispatch(self):
        assert get_formatter("d", ESC)("7") == "7"
        assert get_formatter("f", ESC)(1.5) == "1.5"
        assert get_formatter("a", ESC)([1]) == "1"
        assert get_formatter("#", ESC)("t") == "`t`"
        assert get_formatter("", ESC)("t") == "'t'"

    def test_unknown(self):
        with pytest.raises(QueryBuildError):
            get_formatter("x", ESC)
