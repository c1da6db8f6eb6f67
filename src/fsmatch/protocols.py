"""Protocols for fsmatch.

Defines the Matcher capability shared by leaf matchers and state machines,
and the MatchResult pair every matcher returns.

A matcher attempts to consume a prefix of a token buffer. It reports a label
and the number of tokens consumed. ``consumed == 0`` is the one and only
failure signal; the label is informational. Two matcher families are allowed
to coexist: one returns distinct success/fail labels, the other returns the
same label either way. Control flow never compares labels.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import NamedTuple, Protocol, overload, runtime_checkable


class MatchResult[L](NamedTuple):
    """Outcome of one matcher attempt.

    NamedTuple so callers can unpack it directly:

        >>> label, consumed = matcher.attempt("ay")

    Attributes:
        label: Success label on a match, the fail sentinel otherwise
        consumed: Number of tokens consumed (0 means failure)
    """

    label: L
    consumed: int

    @property
    def matched(self) -> bool:
        """True if at least one token was consumed."""
        return self.consumed > 0


@runtime_checkable
class Matcher[T, L](Protocol):
    """Protocol for anything that can consume a prefix of a token buffer.

    Implemented by ExactTokenMatcher, RangeMatcher and StateMachine. Because
    StateMachine satisfies it too, a whole automaton can be used as the
    matcher of a transition in an enclosing automaton.

    Thread Safety:
        Implementations must not mutate themselves while matching. The token
        buffer is read-only shared state.

    """

    def attempt(self, tokens: Sequence[T], length: int | None = None) -> MatchResult[L]:
        """Try to consume a prefix of tokens.

        Args:
            tokens: Token buffer (read-only)
            length: Number of leading tokens visible to the matcher.
                Defaults to len(tokens).

        Returns:
            MatchResult; consumed == 0 on failure
        """
        ...


def visible_length(tokens: Sequence[object], length: int | None) -> int:
    """Clamp a caller-supplied length to the buffer.

    None means the whole buffer, negative lengths count as empty.
    """
    size = len(tokens)
    if length is None or length > size:
        return size
    return max(length, 0)


class TokenWindow[T](Sequence[T]):
    """Zero-copy view of ``tokens[start:end]``.

    Handed to matchers instead of a slice so that advancing through a long
    buffer never copies it. Windows over windows are flattened, so nesting
    machines never stacks indirection.

    Example:
        >>> window = TokenWindow("abcdef", 2, 5)
        >>> len(window), window[0], window[-1]
        (3, 'c', 'e')
    """

    __slots__ = ("_base", "_start", "_end")

    def __init__(self, tokens: Sequence[T], start: int, end: int) -> None:
        if isinstance(tokens, TokenWindow):
            start += tokens._start
            end += tokens._start
            tokens = tokens._base
        self._base = tokens
        self._start = start
        self._end = max(start, end)

    def __len__(self) -> int:
        return self._end - self._start

    @overload
    def __getitem__(self, index: int) -> T: ...

    @overload
    def __getitem__(self, index: slice) -> Sequence[T]: ...

    def __getitem__(self, index: int | slice) -> T | Sequence[T]:
        if isinstance(index, slice):
            start, stop, step = index.indices(len(self))
            if step == 1:
                return self._base[self._start + start : self._start + stop]
            return [self._base[self._start + i] for i in range(start, stop, step)]
        size = self._end - self._start
        if index < 0:
            index += size
        if not 0 <= index < size:
            raise IndexError("token window index out of range")
        return self._base[self._start + index]

    def __repr__(self) -> str:
        return f"TokenWindow({self._base[self._start : self._end]!r})"


__all__ = [
    "MatchResult",
    "Matcher",
    "TokenWindow",
    "visible_length",
]
