"""Repeated matching over one materialized token buffer.

StateMachine.match() only looks at a prefix. These helpers move the start
position along a buffer, which is what a lexer built from machines needs:

    >>> for span in tokenize(lexer, "let x = 42"):
    ...     print(span.label, span.start, span.end)

- match_at: one attempt at a given position
- search: first position where the matcher succeeds
- scan: successive non-overlapping matches, skipping unmatched tokens
- tokenize: successive matches that must cover the whole buffer

Zero-consumption results (including epsilon acceptance) count as failures
here, exactly as they do for a transition inside a machine.

Thread Safety:
    All functions are pure and safe to call from any thread.

"""

from __future__ import annotations

from collections.abc import Iterator, Sequence
from typing import Any, NamedTuple

from fsmatch.errors import ScanError
from fsmatch.protocols import Matcher, MatchResult, TokenWindow, visible_length


class Span[L](NamedTuple):
    """A successful match located in the buffer.

    Attributes:
        label: Label reported by the matcher
        start: Index of the first consumed token
        end: Index one past the last consumed token
    """

    label: L
    start: int
    end: int

    @property
    def length(self) -> int:
        return self.end - self.start


def match_at[T, L](
    matcher: Matcher[T, L], tokens: Sequence[T], start: int = 0, end: int | None = None
) -> MatchResult[L]:
    """Attempt one match with the buffer starting at ``start``.

    Args:
        matcher: Any Matcher (leaf or StateMachine)
        tokens: Token buffer
        start: Index the match starts at
        end: Exclusive upper bound (defaults to len(tokens))

    Returns:
        The matcher's result, with consumed relative to ``start``
    """
    stop = visible_length(tokens, end)
    if start == 0 and stop == len(tokens):
        return matcher.attempt(tokens, stop)
    return matcher.attempt(TokenWindow(tokens, start, stop), max(stop - start, 0))


def search[T, L](
    matcher: Matcher[T, L], tokens: Sequence[T], start: int = 0, end: int | None = None
) -> Span[L] | None:
    """Find the first position at or after ``start`` where matcher succeeds.

    Returns:
        Span of the match, or None if no position matches
    """
    stop = visible_length(tokens, end)
    for pos in range(start, stop):
        result = match_at(matcher, tokens, pos, stop)
        if result.consumed > 0:
            return Span(result.label, pos, pos + result.consumed)
    return None


def scan[T, L](
    matcher: Matcher[T, L], tokens: Sequence[T], start: int = 0, end: int | None = None
) -> Iterator[Span[L]]:
    """Generate non-overlapping matches, left to right.

    Each search resumes where the previous match ended. Tokens no match
    starts at are skipped silently.
    """
    stop = visible_length(tokens, end)
    span = search(matcher, tokens, start, stop)
    while span is not None:
        yield span
        span = search(matcher, tokens, span.end, stop)


def tokenize[T, L](
    matcher: Matcher[T, L], tokens: Sequence[T], start: int = 0, end: int | None = None
) -> Iterator[Span[L]]:
    """Split ``tokens[start:end]`` into consecutive matches.

    Raises:
        ScanError: At the first position where the matcher fails
    """
    stop = visible_length(tokens, end)
    pos = start
    while pos < stop:
        result = match_at(matcher, tokens, pos, stop)
        if result.consumed <= 0:
            token: Any = tokens[pos]
            raise ScanError(pos, token)
        yield Span(result.label, pos, pos + result.consumed)
        pos += result.consumed


__all__ = [
    "Span",
    "match_at",
    "scan",
    "search",
    "tokenize",
]
