"""Leaf matchers: single-token equality and inclusive range tests.

Both consume exactly one token on success and nothing on failure. They are
frozen after construction, so one instance can be referenced from any number
of transitions and used from any number of threads.

Example:
    >>> lower = RangeMatcher("a", "z")
    >>> lower.attempt("q")
    MatchResult(label=True, consumed=1)
    >>> ExactTokenMatcher("a", negate=True).attempt("a")
    MatchResult(label=None, consumed=0)

Tokens only need ``==``/``!=`` (ExactTokenMatcher) or ``<``/``>``
(RangeMatcher); they are not limited to characters.

"""

from collections.abc import Sequence
from dataclasses import KW_ONLY, dataclass
from typing import Any

from fsmatch.protocols import MatchResult, visible_length


@dataclass(frozen=True, slots=True)
class ExactTokenMatcher[T, L]:
    """Matches one token equal to a configured token.

    Attributes:
        token: The token to compare against
        negate: Invert the test (match any token that is NOT ``token``)
        accept_label: Label reported on success
        fail_label: Label reported on failure

    """

    token: T
    negate: bool = False
    _: KW_ONLY
    accept_label: L = True  # type: ignore[assignment]
    fail_label: L = None  # type: ignore[assignment]

    def attempt(self, tokens: Sequence[T], length: int | None = None) -> MatchResult[L]:
        """Consume tokens[0] if it equals ``token`` (xor ``negate``)."""
        if visible_length(tokens, length) == 0 or ((self.token != tokens[0]) ^ self.negate):
            return MatchResult(self.fail_label, 0)
        return MatchResult(self.accept_label, 1)

    def __repr__(self) -> str:
        neg = "!" if self.negate else ""
        return f"ExactTokenMatcher({neg}{self.token!r})"


@dataclass(frozen=True, slots=True)
class RangeMatcher[T, L]:
    """Matches one token inside an inclusive ``[low, high]`` range.

    Attributes:
        low: Lowest accepted token (inclusive)
        high: Highest accepted token (inclusive)
        negate: Invert the test (match tokens outside the range)
        accept_label: Label reported on success
        fail_label: Label reported on failure

    """

    low: T
    high: T
    negate: bool = False
    _: KW_ONLY
    accept_label: L = True  # type: ignore[assignment]
    fail_label: L = None  # type: ignore[assignment]

    def attempt(self, tokens: Sequence[T], length: int | None = None) -> MatchResult[L]:
        """Consume tokens[0] if low <= tokens[0] <= high (xor ``negate``)."""
        if visible_length(tokens, length) == 0:
            return MatchResult(self.fail_label, 0)
        token: Any = tokens[0]
        outside = token < self.low or token > self.high
        if outside ^ self.negate:
            return MatchResult(self.fail_label, 0)
        return MatchResult(self.accept_label, 1)

    def __contains__(self, token: T) -> bool:
        """Support ``token in matcher`` for a single token."""
        return self.attempt((token,)).matched

    def __repr__(self) -> str:
        neg = "!" if self.negate else ""
        return f"RangeMatcher({neg}{self.low!r}..{self.high!r})"


__all__ = [
    "ExactTokenMatcher",
    "RangeMatcher",
]
