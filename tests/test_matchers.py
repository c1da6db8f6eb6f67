"""Tests for the leaf matchers.

Covers the single-token truth tables, negation, empty input, labels and the
length argument.
"""

import pytest

from fsmatch import ExactTokenMatcher, Matcher, MatchResult, RangeMatcher


class TestExactTokenMatcher:
    """ExactTokenMatcher consumes one token equal to its configured token."""

    def test_match_consumes_one(self) -> None:
        assert ExactTokenMatcher("t").attempt(["t"], 1) == MatchResult(True, 1)

    def test_other_token_fails(self) -> None:
        assert ExactTokenMatcher("t").attempt(["x"], 1) == MatchResult(None, 0)

    def test_empty_input_fails(self) -> None:
        assert ExactTokenMatcher("t").attempt([], 0) == MatchResult(None, 0)

    def test_only_first_token_is_examined(self) -> None:
        assert ExactTokenMatcher("a").attempt("abc").consumed == 1
        assert ExactTokenMatcher("b").attempt("abc").consumed == 0

    def test_length_defaults_to_buffer(self) -> None:
        assert ExactTokenMatcher("a").attempt("a").matched

    def test_zero_length_hides_tokens(self) -> None:
        """A zero length means no visible input even if the buffer has tokens."""
        assert ExactTokenMatcher("a").attempt("abc", 0).consumed == 0

    def test_custom_labels(self) -> None:
        matcher = ExactTokenMatcher(7, accept_label="SEVEN", fail_label="NOPE")
        assert matcher.attempt([7]) == MatchResult("SEVEN", 1)
        assert matcher.attempt([8]) == MatchResult("NOPE", 0)

    def test_non_character_tokens(self) -> None:
        matcher = ExactTokenMatcher(("kw", "let"))
        assert matcher.attempt([("kw", "let"), ("id", "x")]).consumed == 1
        assert matcher.attempt([("id", "let")]).consumed == 0


class TestExactTokenNegation:
    """Negation flips both outcomes but never matches empty input."""

    def test_equal_token_fails(self) -> None:
        assert ExactTokenMatcher("t", negate=True).attempt(["t"], 1).consumed == 0

    def test_other_token_succeeds(self) -> None:
        assert ExactTokenMatcher("t", negate=True).attempt(["x"], 1) == MatchResult(True, 1)

    def test_empty_input_still_fails(self) -> None:
        assert ExactTokenMatcher("t", negate=True).attempt([], 0).consumed == 0


class TestRangeMatcher:
    """RangeMatcher accepts tokens inside an inclusive range."""

    @pytest.mark.parametrize("token", ["a", "m", "z"])
    def test_inside_range(self, token: str) -> None:
        assert RangeMatcher("a", "z").attempt(token) == MatchResult(True, 1)

    @pytest.mark.parametrize("token", ["A", "`", "{", "0"])
    def test_outside_range(self, token: str) -> None:
        assert RangeMatcher("a", "z").attempt(token) == MatchResult(None, 0)

    def test_bounds_are_inclusive(self) -> None:
        matcher = RangeMatcher(10, 20)
        assert matcher.attempt([10]).matched
        assert matcher.attempt([20]).matched
        assert not matcher.attempt([9]).matched
        assert not matcher.attempt([21]).matched

    def test_single_value_range(self) -> None:
        matcher = RangeMatcher(5, 5)
        assert matcher.attempt([5]).matched
        assert not matcher.attempt([4]).matched

    def test_empty_input_fails(self) -> None:
        assert RangeMatcher("a", "z").attempt("", 0) == MatchResult(None, 0)

    def test_contains(self) -> None:
        digits = RangeMatcher("0", "9")
        assert "5" in digits
        assert "x" not in digits


class TestRangeNegation:
    """Negated ranges accept tokens strictly outside the bounds."""

    @pytest.mark.parametrize("token", [0, 9, 21, 100])
    def test_outside_succeeds(self, token: int) -> None:
        assert RangeMatcher(10, 20, negate=True).attempt([token]).consumed == 1

    @pytest.mark.parametrize("token", [10, 15, 20])
    def test_inside_fails(self, token: int) -> None:
        assert RangeMatcher(10, 20, negate=True).attempt([token]).consumed == 0

    def test_empty_input_still_fails(self) -> None:
        assert RangeMatcher(10, 20, negate=True).attempt([]).consumed == 0


class TestMatcherContract:
    """Leaf matchers satisfy the Matcher protocol and are immutable."""

    def test_protocol(self) -> None:
        assert isinstance(ExactTokenMatcher("a"), Matcher)
        assert isinstance(RangeMatcher("a", "z"), Matcher)

    def test_frozen(self) -> None:
        matcher = ExactTokenMatcher("a")
        with pytest.raises(AttributeError):
            matcher.token = "b"  # type: ignore[misc]

    def test_degenerate_labels_decided_by_consumed(self) -> None:
        """Same label for success and failure: consumed alone tells them apart."""
        matcher = RangeMatcher("a", "z", accept_label="X", fail_label="X")
        ok = matcher.attempt("q")
        bad = matcher.attempt("Q")
        assert ok.label == bad.label == "X"
        assert ok.matched
        assert not bad.matched

    def test_result_unpacks(self) -> None:
        label, consumed = ExactTokenMatcher("a", accept_label="A").attempt("a")
        assert (label, consumed) == ("A", 1)

    def test_repr(self) -> None:
        assert repr(ExactTokenMatcher("a", negate=True)) == "ExactTokenMatcher(!'a')"
        assert repr(RangeMatcher(1, 9)) == "RangeMatcher(1..9)"
