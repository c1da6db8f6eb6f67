"""Mutable builder for StateMachine.

StateMachine takes complete tables up front and never changes afterwards.
StateMachineBuilder is the incremental way to get there: declare states,
transitions and accepting labels one call at a time, optionally check the
graph, then call build() for an immutable machine.

Example:
    >>> builder = StateMachineBuilder("start", fail_label="none")
    >>> builder = builder.exact("start", "x", "got-x").exact("start", "y", "got-y")
    >>> builder = builder.accept("got-x", "L1").accept("got-y", "L2")
    >>> machine = builder.build()
    >>> machine.match("y")
    MatchResult(label='L2', consumed=1)

Validation:
    StateMachine treats every missing lookup as a dead end, which makes a
    typo in a target name indistinguishable from a legitimate non-match.
    validate() reports such problems. By default they are logged as
    warnings; with MatchConfig(strict_topology=True) a TopologyError is
    raised instead.
"""

from __future__ import annotations

from collections import deque
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Literal

from fsmatch.config import MatchConfig, get_match_config
from fsmatch.errors import BuildError, TopologyError
from fsmatch.machine import StateMachine, Transition
from fsmatch.matchers import ExactTokenMatcher, RangeMatcher
from fsmatch.utils.logger import get_logger

if TYPE_CHECKING:
    from fsmatch.protocols import Matcher

logger = get_logger(__name__)

IssueKind = Literal["missing_initial", "dangling_target", "unreachable_accept"]


@dataclass(frozen=True, slots=True)
class TopologyIssue:
    """One problem found by StateMachineBuilder.validate().

    Attributes:
        kind: Category of the problem
        state: State identifier the problem is about
        detail: Human-readable description
    """

    kind: IssueKind
    state: Any
    detail: str

    def __str__(self) -> str:
        return f"{self.kind} at {self.state!r}: {self.detail}"


class StateMachineBuilder[T, S, L]:
    """Mutable builder for StateMachine.

    Every mutating method returns the builder for chaining. build() takes a
    snapshot, so the builder can keep being extended afterwards without
    affecting machines already built.

    Thread Safety:
        Not thread-safe. Build on one thread, share the resulting machine.
    """

    __slots__ = ("_initial", "_fail_label", "_states", "_accepting")

    def __init__(self, initial_state: S, *, fail_label: L = None) -> None:  # type: ignore[assignment]
        """Initialize an empty builder.

        Args:
            initial_state: State the built machine starts from
            fail_label: Failure label for the machine and for leaf matchers
                created through exact() and within()
        """
        self._initial = initial_state
        self._fail_label = fail_label
        self._states: dict[S, list[Transition[S]]] = {}
        self._accepting: dict[S, L] = {}

    def state(self, name: S) -> StateMachineBuilder[T, S, L]:
        """Declare a state, with no transitions yet.

        A declared state with no transitions is a forced dead end unless it
        is also accepting.
        """
        self._states.setdefault(name, [])
        return self

    def transition(
        self, source: S, matcher: Matcher[T, Any], *targets: S
    ) -> StateMachineBuilder[T, S, L]:
        """Append a transition to ``source``.

        Args:
            source: State the transition leaves from (declared if new)
            matcher: Matcher deciding whether and how far to advance
            *targets: Candidate next states in preference order

        Raises:
            BuildError: If no targets are given
        """
        if not targets:
            raise BuildError("transition needs at least one target state", source)
        self._states.setdefault(source, []).append(Transition(matcher, targets))
        return self

    def exact(
        self, source: S, token: T, *targets: S, negate: bool = False
    ) -> StateMachineBuilder[T, S, L]:
        """Append a transition on one token equal to ``token``."""
        matcher = ExactTokenMatcher(token, negate, fail_label=self._fail_label)
        return self.transition(source, matcher, *targets)

    def within(
        self, source: S, low: T, high: T, *targets: S, negate: bool = False
    ) -> StateMachineBuilder[T, S, L]:
        """Append a transition on one token in the inclusive range [low, high]."""
        matcher = RangeMatcher(low, high, negate, fail_label=self._fail_label)
        return self.transition(source, matcher, *targets)

    def accept(self, name: S, label: L) -> StateMachineBuilder[T, S, L]:
        """Mark ``name`` as accepting with ``label``.

        The state does not need any transitions; an accepting state with
        none is a pure terminal.

        Raises:
            BuildError: If label equals the fail label, or the state is
                already accepting with a different label
        """
        if label == self._fail_label:
            msg = f"accepting label {label!r} equals the fail label"
            raise BuildError(msg, name)
        existing = self._accepting.get(name, label)
        if existing != label:
            msg = f"already accepting with label {existing!r}, cannot relabel as {label!r}"
            raise BuildError(msg, name)
        self._accepting[name] = label
        return self

    def validate(self, config: MatchConfig | None = None) -> tuple[TopologyIssue, ...]:
        """Check the graph for problems StateMachine would silently ignore.

        Reports an initial state missing from both tables, transition
        targets that name no state, and accepting states that cannot be
        reached from the initial state.

        Args:
            config: Config deciding strictness (defaults to the context config)

        Returns:
            Tuple of issues (empty when the graph is clean)

        Raises:
            TopologyError: If issues exist and config.strict_topology is set
        """
        known = self._states.keys() | self._accepting.keys()
        issues: list[TopologyIssue] = []

        if self._initial not in known:
            issues.append(
                TopologyIssue("missing_initial", self._initial, "initial state is in neither table")
            )

        for source, transitions in self._states.items():
            for index, transition in enumerate(transitions):
                for target in transition.targets:
                    if target not in known:
                        detail = f"transition #{index} from {source!r} targets unknown state"
                        issues.append(TopologyIssue("dangling_target", target, detail))

        reachable = self._reachable()
        for name in self._accepting:
            if name not in reachable:
                issues.append(
                    TopologyIssue("unreachable_accept", name, "no path from the initial state")
                )

        result = tuple(issues)
        if result:
            strict = (config or get_match_config()).strict_topology
            if strict:
                raise TopologyError(result)
            for issue in result:
                logger.warning("State machine topology issue: %s", issue)
        return result

    def _reachable(self) -> set[S]:
        """States reachable from the initial state (breadth-first)."""
        seen = {self._initial}
        queue = deque([self._initial])
        while queue:
            current = queue.popleft()
            for transition in self._states.get(current, ()):
                for target in transition.targets:
                    if target not in seen:
                        seen.add(target)
                        queue.append(target)
        return seen

    def build(
        self, *, validate: bool = False, config: MatchConfig | None = None
    ) -> StateMachine[T, S, L]:
        """Build an immutable StateMachine from the current declarations.

        Args:
            validate: Run validate() first
            config: Config pinned on the machine (and used for validation)

        Returns:
            Immutable StateMachine
        """
        if validate:
            self.validate(config)
        return StateMachine(
            self._initial,
            {name: tuple(transitions) for name, transitions in self._states.items()},
            dict(self._accepting),
            fail_label=self._fail_label,
            config=config,
        )

    def __len__(self) -> int:
        """Number of distinct state names declared so far."""
        return len(self._states.keys() | self._accepting.keys())


__all__ = [
    "IssueKind",
    "StateMachineBuilder",
    "TopologyIssue",
]
