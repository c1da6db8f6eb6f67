"""fsmatch MatchAccumulator — opt-in profiling for state machine traversal.

The engine discards everything it learns once it backtracks. This module lets
callers collect it anyway:
- Number of match calls (sub-machine calls included)
- Visited (state, position) nodes and backtracks
- Furthest position reached along any explored path

Zero overhead when disabled (get_match_accumulator() returns None).

Example:
    from fsmatch.profiling import profiled_match

    with profiled_match() as metrics:
        machine.match("a1")

    print(metrics.summary())
    # {"total_ms": 0.02, "match_calls": 1, "steps": 3, "backtracks": 2, ...}

"""

from collections.abc import Iterator
from contextlib import contextmanager
from contextvars import ContextVar, Token
from dataclasses import dataclass, field
from time import perf_counter
from typing import Any


@dataclass
class MatchAccumulator:
    """Accumulated metrics across match calls.

    Attributes:
        start_time: Profiling start timestamp.
        match_calls: Number of StateMachine match calls recorded.
        successes: Calls that consumed at least one token or accepted epsilon.
        steps: Total (state, position) nodes visited.
        backtracks: Nodes abandoned after every branch failed.
        furthest_position: Largest number of tokens consumed along any
            explored path in a single call.
        budget_exhausted: Calls cut off by MatchConfig.max_steps.

    """

    start_time: float = field(default_factory=perf_counter)
    match_calls: int = 0
    successes: int = 0
    steps: int = 0
    backtracks: int = 0
    furthest_position: int = 0
    budget_exhausted: int = 0

    def record_match(
        self,
        *,
        steps: int,
        backtracks: int,
        furthest: int,
        accepted: bool,
        exhausted: bool = False,
    ) -> None:
        """Record one match call.

        Args:
            steps: Nodes visited during the call.
            backtracks: Nodes abandoned during the call.
            furthest: Furthest position reached during the call.
            accepted: Whether the call reached an accepting state.
            exhausted: Whether the call ran out of its step budget.

        """
        self.match_calls += 1
        self.steps += steps
        self.backtracks += backtracks
        self.furthest_position = max(self.furthest_position, furthest)
        if accepted:
            self.successes += 1
        if exhausted:
            self.budget_exhausted += 1

    @property
    def total_duration_ms(self) -> float:
        """Total profiling duration in milliseconds."""
        return (perf_counter() - self.start_time) * 1000

    def summary(self) -> dict[str, Any]:
        """Get summary of match metrics."""
        return {
            "total_ms": round(self.total_duration_ms, 2),
            "match_calls": self.match_calls,
            "successes": self.successes,
            "steps": self.steps,
            "backtracks": self.backtracks,
            "furthest_position": self.furthest_position,
            "budget_exhausted": self.budget_exhausted,
        }


# Module-level ContextVar
_accumulator: ContextVar[MatchAccumulator | None] = ContextVar(
    "match_accumulator",
    default=None,
)


def get_match_accumulator() -> MatchAccumulator | None:
    """Get current accumulator (None if profiling disabled)."""
    return _accumulator.get()


@contextmanager
def profiled_match() -> Iterator[MatchAccumulator]:
    """Context manager for profiled matching.

    Creates a MatchAccumulator and makes it available via
    get_match_accumulator() for the duration of the with block.

    Yields:
        MatchAccumulator that will be populated during match calls.

    """
    acc = MatchAccumulator()
    token: Token[MatchAccumulator | None] = _accumulator.set(acc)
    try:
        yield acc
    finally:
        _accumulator.reset(token)


__all__ = [
    "MatchAccumulator",
    "get_match_accumulator",
    "profiled_match",
]
