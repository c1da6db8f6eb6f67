"""Error-path and malformed input tests.

Tests that exercise error construction, the exception hierarchy and the
paths where matching degrades to a plain failure instead of raising.
"""

import pytest

from fsmatch import (
    BuildError,
    ExactTokenMatcher,
    FsmatchError,
    MatchResult,
    RangeMatcher,
    ScanError,
    SerializationError,
    StateMachine,
    TopologyError,
    TopologyIssue,
)

# =========================================================================
# Error construction and formatting
# =========================================================================


class TestBuildError:
    """Verify BuildError produces well-formatted messages."""

    def test_message_only(self) -> None:
        err = BuildError("bad transition")
        assert str(err) == "bad transition"
        assert err.state is None

    def test_with_state(self) -> None:
        err = BuildError("bad transition", state=3)
        assert str(err) == "state 3: bad transition"
        assert err.message == "bad transition"

    def test_is_fsmatch_error(self) -> None:
        assert isinstance(BuildError("x"), FsmatchError)


class TestTopologyError:
    def test_lists_every_issue(self) -> None:
        issues = (
            TopologyIssue("missing_initial", "s", "initial state is in neither table"),
            TopologyIssue("unreachable_accept", "t", "no path from the initial state"),
        )
        err = TopologyError(issues)
        assert err.issues == issues
        assert str(err).startswith("2 topology issue(s): ")
        assert "missing_initial at 's'" in str(err)
        assert "unreachable_accept at 't'" in str(err)


class TestScanError:
    def test_format(self) -> None:
        err = ScanError(7, "?")
        assert err.position == 7
        assert err.token == "?"
        assert str(err) == "No match at position 7 (token '?')"


class TestHierarchy:
    @pytest.mark.parametrize(
        "error_type", [BuildError, TopologyError, ScanError, SerializationError]
    )
    def test_subclasses_base(self, error_type: type[Exception]) -> None:
        assert issubclass(error_type, FsmatchError)

    def test_serialization_error_is_value_error(self) -> None:
        assert issubclass(SerializationError, ValueError)


# =========================================================================
# Matching degrades to failure, never raises
# =========================================================================


class TestMatchingNeverRaises:
    """Malformed graphs and odd inputs produce (fail_label, 0)."""

    def test_empty_tables(self) -> None:
        assert StateMachine("s", {}, {}, fail_label="F").match("abc") == MatchResult("F", 0)

    def test_every_target_dangling(self) -> None:
        machine = StateMachine(
            "s",
            {"s": [(ExactTokenMatcher("a"), ["x", "y", "z"])]},
            {},
            fail_label="F",
        )
        assert machine.match("aaa") == MatchResult("F", 0)

    def test_incomparable_tokens_on_exact(self) -> None:
        """Equality is defined for any pair of objects."""
        machine = StateMachine("s", {"s": [(ExactTokenMatcher(1), ["t"])]}, {"t": "T"})
        assert machine.match(["1"]) == MatchResult(None, 0)

    def test_range_type_error_propagates(self) -> None:
        """Ordering mixed types is a caller error and is not swallowed."""
        machine = StateMachine("s", {"s": [(RangeMatcher(1, 5), ["t"])]}, {"t": "T"})
        with pytest.raises(TypeError):
            machine.match(["x"])

    def test_bytes_buffer(self) -> None:
        """Indexing bytes yields ints, so ranges work on byte values."""
        machine = StateMachine(
            "s", {"s": [(RangeMatcher(0x30, 0x39), ["t"])]}, {"t": "DIGIT"}
        )
        assert machine.match(b"7a") == MatchResult("DIGIT", 1)

    def test_tuple_buffer(self) -> None:
        machine = StateMachine("s", {"s": [(ExactTokenMatcher("x"), ["t"])]}, {"t": "T"})
        assert machine.match(("x", "y")) == MatchResult("T", 1)
