"""Tests for line parsing and value type inference."""

import math

import pytest

from kvconf.config.entry import Entry, ValueKind
from kvconf.config.parser import (
    LONG_MAX,
    LONG_MIN,
    classify_number,
    clean_string,
    infer_value,
    parse_line,
    parse_number,
    trim,
)
from kvconf.config.settings import ParserSettings


class TestParseNumber:
    """strtod-compatible number recognition."""

    @pytest.mark.parametrize(
        "text,expected",
        [
            ("42", 42.0),
            ("  -17 ", -17.0),
            ("+3.5", 3.5),
            ("1.", 1.0),
            (".5", 0.5),
            ("2.5e-3", 0.0025),
            ("1E+2\n", 100.0),
            ("0x1A", 26.0),
            ("-0x1.8p1", -3.0),
            ("0X.8", 0.5),
        ],
    )
    def test_numeric_text(self, text, expected):
        assert parse_number(text) == expected

    @pytest.mark.parametrize("text", ["inf", "INFINITY", "+Inf"])
    def test_positive_infinity(self, text):
        assert parse_number(text) == math.inf

    def test_negative_infinity(self):
        assert parse_number("-infinity") == -math.inf

    @pytest.mark.parametrize("text", ["nan", "NaN", "-nan", "nan(123)"])
    def test_nan(self, text):
        assert math.isnan(parse_number(text))

    def test_decimal_overflow_is_infinite(self):
        assert parse_number("1e999") == math.inf
        assert parse_number("-1e999") == -math.inf

    def test_hex_overflow_is_infinite(self):
        assert parse_number("0x1p99999") == math.inf
        assert parse_number("-0x1p99999") == -math.inf

    @pytest.mark.parametrize(
        "text",
        ["", "   ", "abc", "12abc", "1e", "0x", "1_000", ".", "-", "1.2.3", "4 5", "infinit", "٣"],
    )
    def test_non_numeric_text(self, text):
        assert parse_number(text) is None


class TestClassifyNumber:
    """Integer width selection."""

    def test_int_range(self):
        assert classify_number(2147483647.0) == (ValueKind.INTEGER, 2147483647)
        assert classify_number(-2147483648.0) == (ValueKind.INTEGER, -2147483648)

    def test_long_range(self):
        assert classify_number(2147483648.0) == (ValueKind.LONG, 2147483648)
        assert classify_number(float(LONG_MIN)) == (ValueKind.LONG, LONG_MIN)

    def test_two_to_the_63_is_double(self):
        # LONG_MAX is not representable as a double and rounds up past the range
        kind, value = classify_number(float(LONG_MAX))
        assert kind is ValueKind.DOUBLE
        assert value == 2.0 ** 63

    def test_fraction_is_double(self):
        assert classify_number(0.1) == (ValueKind.DOUBLE, 0.1)

    def test_non_finite_is_double(self):
        assert classify_number(math.inf)[0] is ValueKind.DOUBLE
        assert classify_number(math.nan)[0] is ValueKind.DOUBLE


class TestCleanString:
    """Trimming and capping of text values."""

    def test_trims_whitespace_and_leading_equals(self):
        assert clean_string(" = =  hello world \t", 256) == "hello world"

    def test_inner_equals_kept(self):
        assert clean_string("a=b", 256) == "a=b"

    def test_caps_length(self):
        assert clean_string("x" * 10, 4) == "xxxx"

    def test_cap_does_not_leave_trailing_space(self):
        assert clean_string("abc   def", 5) == "abc"

    def test_no_cap(self):
        assert clean_string("y" * 1000, None) == "y" * 1000

    def test_unicode_whitespace_not_trimmed(self):
        assert clean_string("\u00a0value\u00a0", 256) == "\u00a0value\u00a0"


class TestInferValue:
    """Kind and value inference for the text after '='."""

    def test_string_value(self):
        assert infer_value(" hello ") == (ValueKind.STRING, "hello")

    def test_empty_value_is_zero(self):
        assert infer_value("") == (ValueKind.INTEGER, 0)

    def test_whitespace_only_value_is_empty_string(self):
        assert infer_value("  ") == (ValueKind.STRING, "")

    def test_value_length_setting(self):
        settings = ParserSettings(max_value_length=3)
        assert infer_value("abcdef", settings) == (ValueKind.STRING, "abc")

    def test_numbers_ignore_value_length(self):
        settings = ParserSettings(max_value_length=1)
        assert infer_value("123456", settings) == (ValueKind.INTEGER, 123456)


class TestParseLine:
    """Single line parsing."""

    def test_key_value(self):
        assert parse_line("name = value") == Entry("name", ValueKind.STRING, "value")

    def test_splits_on_first_equals(self):
        assert parse_line("url=http://x?a=b") == Entry("url", ValueKind.STRING, "http://x?a=b")

    @pytest.mark.parametrize("line", ["# comment", "#a=b", "no equals", "", " = value", "\t=1"])
    def test_lines_without_entry(self, line):
        assert parse_line(line) is None

    def test_custom_comment_marker(self):
        settings = ParserSettings(comment_marker=";")
        assert parse_line(";a=1", settings) is None
        assert parse_line("#a=1", settings) == Entry("#a", ValueKind.INTEGER, 1)

    def test_trim_uses_ascii_whitespace_only(self):
        assert trim("\u2003key\u2003") == "\u2003key\u2003"
        assert trim(" \t\v\f\r\nkey\n") == "key"


class TestEntry:
    """Entry record invariants."""

    def test_empty_key_rejected(self):
        with pytest.raises(ValueError):
            Entry("", ValueKind.STRING, "x")

    def test_untrimmed_key_rejected(self):
        with pytest.raises(ValueError):
            Entry(" key", ValueKind.STRING, "x")

    def test_entry_is_immutable(self):
        entry = Entry("key", ValueKind.INTEGER, 1)
        with pytest.raises(AttributeError):
            entry.value = 2
