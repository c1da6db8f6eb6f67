"""Exception classes for fsmatch.

Matching itself never raises: every non-match, at every level, is reported
through the ``(fail_label, 0)`` result. These exceptions cover the tooling
around the engine (builder misuse, opt-in topology validation, scanning and
serialization).
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from fsmatch.builder import TopologyIssue


class FsmatchError(Exception):
    """Base exception for all fsmatch errors.

    Subclass this for specific error categories.
    """

    pass


class BuildError(FsmatchError):
    """Error while assembling a machine with StateMachineBuilder.

    Raised for calls that can never describe a usable automaton, such as a
    transition without targets or an accepting label equal to the fail label.
    """

    def __init__(self, message: str, state: object = None) -> None:
        """Initialize build error.

        Args:
            message: Error description
            state: State identifier involved (optional)
        """
        self.message = message
        self.state = state

        location = f"state {state!r}: " if state is not None else ""
        super().__init__(f"{location}{message}")


class TopologyError(FsmatchError):
    """Transition graph failed strict validation.

    Only raised by StateMachineBuilder.validate() when strict topology
    checking is enabled in MatchConfig. StateMachine itself never validates.
    """

    def __init__(self, issues: tuple[TopologyIssue, ...]) -> None:
        """Initialize topology error.

        Args:
            issues: All problems found in the graph
        """
        self.issues = issues
        lines = "; ".join(str(issue) for issue in issues)
        super().__init__(f"{len(issues)} topology issue(s): {lines}")


class ScanError(FsmatchError):
    """No match at a position while tokenizing a buffer."""

    def __init__(self, position: int, token: object = None) -> None:
        """Initialize scan error.

        Args:
            position: Index of the first token that could not be matched
            token: The token at that position (optional)
        """
        self.position = position
        self.token = token
        super().__init__(f"No match at position {position} (token {token!r})")


class SerializationError(FsmatchError, ValueError):
    """Matcher cannot be converted to or from its dict form."""

    pass
