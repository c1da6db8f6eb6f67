"""StateMachine — labelled nondeterministic finite automaton over token buffers.

A machine is a graph of named states. Each state holds an ordered tuple of
transitions; each transition pairs a Matcher with an ordered tuple of target
states. Some state names are bound to labels in the acceptance table. Unlike a
regex, one machine can therefore both recognize an input and report which of
several alternatives it recognized.

Example:
    >>> machine = StateMachine(
    ...     "start",
    ...     {
    ...         "start": [(ExactTokenMatcher("a"), ["mid"])],
    ...         "mid": [
    ...             (RangeMatcher("a", "z"), ["lower"]),
    ...             (RangeMatcher("A", "Z"), ["upper"]),
    ...         ],
    ...     },
    ...     {"lower": "matched lower case", "upper": "matched upper case"},
    ... )
    >>> machine.match("aY")
    MatchResult(label='matched upper case', consumed=2)

This is the regex ``a[a-zA-Z]``, except the label tells which class the last
token fell into.

Search Order:
    Depth-first, first success wins. Transitions are tried in declared order,
    and for each successful transition its targets are tried in declared
    order. Declaration order is the only tie-break: swapping two transitions
    can change the result. This is backtracking-regex behavior, not POSIX
    longest match.

Terminal Nodes:
    A (state, position) node stops searching when no input remains, when the
    state has an empty transition tuple, or when the state has no transition
    entry but is accepting. It then succeeds iff the state is accepting. An
    accepting state that still has transitions and input left only succeeds
    through one of its transitions.

Thread Safety:
    Tables are copied into read-only mappings and tuples at construction.
    All traversal state is local to a match call, so any number of threads
    can match against one machine without locking.

"""

from collections.abc import Iterable, Iterator, Mapping, Sequence
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any

from fsmatch.config import MatchConfig, get_match_config
from fsmatch.profiling import get_match_accumulator
from fsmatch.protocols import Matcher, MatchResult, TokenWindow, visible_length
from fsmatch.utils.logger import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True, slots=True)
class Transition[S]:
    """A matcher and the states it may lead to, in preference order.

    A bare string (or any non-iterable value) passed as ``targets`` is taken
    as a single target.

    Attributes:
        matcher: Any object implementing the Matcher protocol
        targets: Candidate next states, tried left to right

    """

    matcher: Matcher[Any, Any]
    targets: tuple[S, ...]

    def __post_init__(self) -> None:
        targets: Any = self.targets
        if isinstance(targets, (str, bytes)) or not isinstance(targets, Iterable):
            targets = (targets,)
        # Safe mutation of frozen dataclass during init
        object.__setattr__(self, "targets", tuple(targets))


type State[S] = tuple[Transition[S], ...]
"""A state is its ordered transitions."""

type TransitionSpec[S] = Transition[S] | tuple[Matcher[Any, Any], Iterable[S] | S]


def _as_transition[S](item: TransitionSpec[S]) -> Transition[S]:
    if isinstance(item, Transition):
        return item
    matcher, targets = item
    return Transition(matcher, targets)  # type: ignore[arg-type]


class StateMachine[T, S, L]:
    """Immutable labelled NFA; also a Matcher, so machines nest.

    Type parameters: ``T`` token type, ``S`` state identifier (hashable),
    ``L`` label type.

    The constructor does not check the graph. Targets that name no state,
    or an initial state missing from both tables, simply behave as dead ends
    during matching. Use StateMachineBuilder.validate() for diagnostics.

    Thread Safety:
        Immutable after creation. Safe to share across threads.
    """

    __slots__ = ("_initial", "_states", "_accepting", "_fail_label", "_config")

    def __init__(
        self,
        initial_state: S,
        states: Mapping[S, Iterable[TransitionSpec[S]]],
        accepting: Mapping[S, L],
        *,
        fail_label: L = None,  # type: ignore[assignment]
        config: MatchConfig | None = None,
    ) -> None:
        """Initialize the machine.

        Args:
            initial_state: State the search starts from
            states: State identifier -> ordered transitions. Each transition
                is a Transition or a ``(matcher, targets)`` pair.
            accepting: State identifier -> label reported when the search
                ends there. Keys need not appear in ``states``.
            fail_label: Label reported on failure. Must differ from every
                label in ``accepting``.
            config: Pin a MatchConfig for this machine instead of reading the
                context-local one on every call.
        """
        self._initial = initial_state
        self._states: Mapping[S, State[S]] = MappingProxyType(
            {name: tuple(_as_transition(t) for t in transitions) for name, transitions in states.items()}
        )
        self._accepting: Mapping[S, L] = MappingProxyType(dict(accepting))
        self._fail_label = fail_label
        self._config = config
        logger.debug(
            "Built StateMachine: initial=%r, %d states, %d accepting",
            initial_state,
            len(self._states),
            len(self._accepting),
        )

    @property
    def initial_state(self) -> S:
        return self._initial

    @property
    def states(self) -> Mapping[S, State[S]]:
        """Read-only state table."""
        return self._states

    @property
    def accepting(self) -> Mapping[S, L]:
        """Read-only acceptance table."""
        return self._accepting

    @property
    def fail_label(self) -> L:
        return self._fail_label

    @property
    def config(self) -> MatchConfig | None:
        """Pinned config, or None when the context config is used."""
        return self._config

    @property
    def state_names(self) -> frozenset[S]:
        """Every identifier in either table."""
        return frozenset(self._states) | frozenset(self._accepting)

    def match(self, tokens: Sequence[T], length: int | None = None) -> MatchResult[L]:
        """Match a prefix of tokens, starting from the initial state.

        Args:
            tokens: Token buffer (read-only; any Sequence, e.g. str or list)
            length: Number of leading tokens to consider (defaults to all)

        Returns:
            (accept_label, consumed) for the first accepting path found in
            declared order, or (fail_label, 0). An accepting initial state
            with nothing to do yields (accept_label, 0).
        """
        end = visible_length(tokens, length)
        config = self._config or get_match_config()
        acc = get_match_accumulator()

        visited: set[tuple[S, int]] | None = set() if config.memoize_failures else None
        budget = config.max_steps
        whole = end == len(tokens)
        states = self._states
        accepting = self._accepting

        stack: list[Iterator[tuple[S, int]]] = []
        state, pos = self._initial, 0
        steps = backtracks = furthest = 0

        while True:
            steps += 1
            if budget is not None and steps > budget:
                logger.warning(
                    "Match step budget of %d exhausted at state %r, position %d",
                    budget,
                    state,
                    pos,
                )
                if acc is not None:
                    acc.record_match(
                        steps=steps - 1,
                        backtracks=backtracks,
                        furthest=furthest,
                        accepted=False,
                        exhausted=True,
                    )
                return MatchResult(self._fail_label, 0)

            if pos > furthest:
                furthest = pos

            # None marks a dead end: revisited, terminal, or unknown state
            transitions: State[S] | None = None
            if visited is None or (state, pos) not in visited:
                if visited is not None:
                    visited.add((state, pos))
                transitions = states.get(state)
                is_accepting = state in accepting
                terminal = (
                    pos == end
                    or (transitions is not None and not transitions)
                    or (transitions is None and is_accepting)
                )
                if terminal and is_accepting:
                    if acc is not None:
                        acc.record_match(
                            steps=steps,
                            backtracks=backtracks,
                            furthest=furthest,
                            accepted=True,
                        )
                    return MatchResult(accepting[state], pos)
                if terminal:
                    transitions = None

            if transitions is None:
                backtracks += 1
            else:
                view = tokens if pos == 0 and whole else TokenWindow(tokens, pos, end)
                stack.append(self._branches(view, transitions, pos, end))

            # Resume the deepest frame that still has untried branches
            while stack:
                branch = next(stack[-1], None)
                if branch is not None:
                    state, pos = branch
                    break
                stack.pop()
                backtracks += 1
            else:
                if acc is not None:
                    acc.record_match(
                        steps=steps,
                        backtracks=backtracks,
                        furthest=furthest,
                        accepted=False,
                    )
                return MatchResult(self._fail_label, 0)

    @staticmethod
    def _branches(
        view: Sequence[T],
        transitions: State[S],
        pos: int,
        end: int,
    ) -> Iterator[tuple[S, int]]:
        """Yield (target, next_position) pairs lazily in declared order."""
        remaining = end - pos
        for transition in transitions:
            consumed = transition.matcher.attempt(view, remaining).consumed
            if consumed <= 0:
                continue
            nxt = min(pos + consumed, end)
            for target in transition.targets:
                yield target, nxt

    def attempt(self, tokens: Sequence[T], length: int | None = None) -> MatchResult[L]:
        """Matcher protocol entry point; identical to match()."""
        return self.match(tokens, length)

    def __call__(self, tokens: Sequence[T], length: int | None = None) -> MatchResult[L]:
        return self.match(tokens, length)

    def __repr__(self) -> str:
        return (
            f"StateMachine(initial={self._initial!r}, states={len(self._states)}, "
            f"accepting={len(self._accepting)})"
        )


__all__ = [
    "State",
    "StateMachine",
    "Transition",
]
