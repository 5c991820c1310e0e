"""Tests for warble.validation — built-in rules."""

import pytest

from warble.errors import BoundsError, ParseError, RuleError
from warble.fields import Input, TextInput
from warble.validation import (
    INT32_MAX,
    INT32_MIN,
    email,
    integer_bound,
    is_integer,
    matches,
    max_length,
    min_length,
    one_of,
    parse_int32,
    required,
    url,
)


def _field(value: str) -> TextInput:
    return TextInput("f", value)


# ---------------------------------------------------------------------------
# Individual rule tests
# ---------------------------------------------------------------------------


class TestRequired:
    def test_empty_string(self) -> None:
        assert isinstance(required(_field("")), RuleError)

    def test_whitespace_only(self) -> None:
        assert required(_field("   ")) is not None

    def test_valid(self) -> None:
        assert required(_field("hello")) is None


class TestMaxLength:
    def test_within_limit(self) -> None:
        assert max_length(5)(_field("hello")) is None

    def test_exceeds_limit(self) -> None:
        cause = max_length(5)(_field("123456"))
        assert cause is not None
        assert "at most 5" in str(cause)


class TestMinLength:
    def test_at_minimum(self) -> None:
        assert min_length(3)(_field("abc")) is None

    def test_below_minimum(self) -> None:
        assert min_length(3)(_field("ab")) is not None


class TestEmail:
    def test_valid(self) -> None:
        assert email(_field("user@example.com")) is None

    def test_missing_at(self) -> None:
        assert email(_field("userexample.com")) is not None

    def test_empty(self) -> None:
        assert email(_field("")) is not None

    @pytest.mark.parametrize("raw", ["a@example.com\n", "a@example.com trailing", " a@example.com"])
    def test_rejects_extra_text_around_address(self, raw: str) -> None:
        assert email(_field(raw)) is not None


class TestUrl:
    def test_valid_https(self) -> None:
        assert url(_field("https://example.com")) is None

    def test_no_scheme(self) -> None:
        assert url(_field("example.com")) is not None

    def test_trailing_newline(self) -> None:
        assert url(_field("http://x.com\n")) is not None


class TestMatches:
    def test_match(self) -> None:
        assert matches(r"^\d{3}$")(_field("123")) is None

    def test_no_match_default_message(self) -> None:
        cause = matches(r"^\d{3}$")(_field("12a"))
        assert cause is not None
        assert "Must match pattern" in str(cause)

    def test_custom_message(self) -> None:
        cause = matches(r"^\d+$", "Digits only")(_field("x"))
        assert str(cause) == "Digits only"

    def test_whole_value_must_match(self) -> None:
        assert matches(r"\d+")(_field("12abc")) is not None
        assert matches(r"\d+")(_field("12")) is None

    def test_trailing_newline_does_not_satisfy_end_anchor(self) -> None:
        assert matches(r"^\d+$")(_field("12\n")) is not None


class TestOneOf:
    def test_allowed(self) -> None:
        assert one_of("red", "green")(_field("red")) is None

    def test_not_allowed_lists_choices(self) -> None:
        cause = one_of("red", "green")(_field("blue"))
        assert str(cause) == "Must be one of: green, red"


# ---------------------------------------------------------------------------
# Integers
# ---------------------------------------------------------------------------


class TestParseInt32:
    @pytest.mark.parametrize("raw", ["0", "42", "-7", "+7", "007", str(INT32_MAX), str(INT32_MIN)])
    def test_accepts(self, raw: str) -> None:
        assert parse_int32(raw) == int(raw)

    @pytest.mark.parametrize(
        "raw",
        ["", "abc", "1.5", " 1", "1 ", "1_000", "0x10", "+", str(INT32_MAX + 1), str(INT32_MIN - 1), "٣"],
    )
    def test_rejects(self, raw: str) -> None:
        assert parse_int32(raw) is None


class TestIsInteger:
    def test_valid(self) -> None:
        assert is_integer(_field("25")) is None

    def test_invalid(self) -> None:
        cause = is_integer(_field("abc"))
        assert isinstance(cause, ParseError)
        assert "not a valid integer" in str(cause)


class TestIntegerBound:
    def _bounded(self, value: str) -> Input:
        return Input("age", value).set_bounds(0, 130)

    @pytest.mark.parametrize("value", ["0", "65", "130"])
    def test_inclusive_bounds_pass(self, value: str) -> None:
        assert integer_bound(self._bounded(value)) is None

    def test_below_min(self) -> None:
        cause = integer_bound(self._bounded("-1"))
        assert isinstance(cause, BoundsError)
        assert cause.limit == "min"
        assert str(cause) == "age is less than 0"

    def test_above_max(self) -> None:
        cause = integer_bound(self._bounded("131"))
        assert isinstance(cause, BoundsError)
        assert cause.limit == "max"
        assert "130" in str(cause)

    def test_unparseable_is_left_to_is_integer(self) -> None:
        assert integer_bound(self._bounded("abc")) is None
