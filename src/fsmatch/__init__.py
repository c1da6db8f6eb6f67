"""
fsmatch — Labelled NFA matching over typed token sequences

A composable nondeterministic finite-automaton engine. Tokens can be any
comparable values, not just characters. A machine may have several accepting
states, each bound to a label, so one traversal both recognizes the input and
reports which alternative it recognized.

Quick Start:
    >>> from fsmatch import ExactTokenMatcher, RangeMatcher, StateMachine
    >>> machine = StateMachine(
    ...     "S0",
    ...     {
    ...         "S0": [(ExactTokenMatcher("a"), ["S1"])],
    ...         "S1": [
    ...             (RangeMatcher("a", "z"), ["S2"]),
    ...             (RangeMatcher("A", "Z"), ["S3"]),
    ...         ],
    ...     },
    ...     {"S2": "LOWER", "S3": "UPPER"},
    ...     fail_label="FAIL",
    ... )
    >>> machine.match("ay")
    MatchResult(label='LOWER', consumed=2)
    >>> machine.match("a1")
    MatchResult(label='FAIL', consumed=0)

Composition:
    A StateMachine is itself a Matcher, so it can be the matcher of a
    transition in a larger machine ("macro token"):

    >>> from fsmatch import StateMachineBuilder
    >>> digits = StateMachineBuilder("d").within("d", "0", "9", "d", "end")
    >>> number = digits.accept("end", "NUM").build()

Zero runtime dependencies.
"""

from fsmatch.builder import StateMachineBuilder, TopologyIssue
from fsmatch.config import (
    MatchConfig,
    get_match_config,
    match_config_context,
    reset_match_config,
    set_match_config,
)
from fsmatch.errors import (
    BuildError,
    FsmatchError,
    ScanError,
    SerializationError,
    TopologyError,
)
from fsmatch.machine import State, StateMachine, Transition
from fsmatch.matchers import ExactTokenMatcher, RangeMatcher
from fsmatch.profiling import MatchAccumulator, get_match_accumulator, profiled_match
from fsmatch.protocols import Matcher, MatchResult, TokenWindow
from fsmatch.scanning import Span, match_at, scan, search, tokenize
from fsmatch.serialization import from_dict, from_json, to_dict, to_json

__version__ = "0.1.0"


__all__ = [  # noqa: RUF022 - grouped by category
    # Version
    "__version__",
    # Matcher capability
    "Matcher",
    "MatchResult",
    "TokenWindow",
    # Leaf matchers
    "ExactTokenMatcher",
    "RangeMatcher",
    # State machine
    "State",
    "StateMachine",
    "Transition",
    # Builder
    "StateMachineBuilder",
    "TopologyIssue",
    # Scanning
    "Span",
    "match_at",
    "scan",
    "search",
    "tokenize",
    # Configuration (ContextVar-based)
    "MatchConfig",
    "get_match_config",
    "set_match_config",
    "reset_match_config",
    "match_config_context",
    # Profiling
    "MatchAccumulator",
    "get_match_accumulator",
    "profiled_match",
    # Serialization
    "to_dict",
    "from_dict",
    "to_json",
    "from_json",
    # Errors
    "FsmatchError",
    "BuildError",
    "TopologyError",
    "ScanError",
    "SerializationError",
]
