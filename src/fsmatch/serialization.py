"""Matcher serialization — JSON round-trip for leaf matchers and machines.

Converts ExactTokenMatcher, RangeMatcher and StateMachine (recursively) to
and from JSON-compatible dicts. Useful for:
- Shipping a prebuilt grammar as data instead of code
- Debugging and inspection (the dict mirrors the construction tables)

Tokens, labels and state identifiers must be JSON scalars (str, int, float,
bool or None). Tables are stored as lists of pairs because JSON object keys
can only be strings. A sub-machine referenced from several transitions is
written out once per reference and comes back as separate, equal machines.

All output is deterministic (sorted keys, declared order kept).

Example:
    from fsmatch.serialization import to_json, from_json

    restored = from_json(to_json(machine))
    assert restored.match("aY") == machine.match("aY")

Thread Safety:
    All functions are pure and safe to call from any thread.

"""

import json
from dataclasses import fields
from typing import Any

from fsmatch.config import MatchConfig
from fsmatch.errors import SerializationError
from fsmatch.machine import StateMachine, Transition
from fsmatch.matchers import ExactTokenMatcher, RangeMatcher

_SCALARS = (str, int, float, bool, type(None))


def _scalar(value: Any, what: str) -> Any:
    if not isinstance(value, _SCALARS):
        msg = f"{what} must be a JSON scalar, got {type(value).__name__}: {value!r}"
        raise SerializationError(msg)
    return value


def to_dict(matcher: Any) -> dict[str, Any]:
    """Convert a matcher to a JSON-compatible dict.

    Includes a ``_type`` discriminator field for deserialization.

    Args:
        matcher: ExactTokenMatcher, RangeMatcher or StateMachine.

    Returns:
        Dict with ``_type`` and the matcher's construction arguments.

    Raises:
        SerializationError: For other matcher types or non-scalar values.

    """
    if isinstance(matcher, ExactTokenMatcher):
        return {
            "_type": "ExactTokenMatcher",
            "token": _scalar(matcher.token, "token"),
            "negate": matcher.negate,
            "accept_label": _scalar(matcher.accept_label, "accept_label"),
            "fail_label": _scalar(matcher.fail_label, "fail_label"),
        }
    if isinstance(matcher, RangeMatcher):
        return {
            "_type": "RangeMatcher",
            "low": _scalar(matcher.low, "low"),
            "high": _scalar(matcher.high, "high"),
            "negate": matcher.negate,
            "accept_label": _scalar(matcher.accept_label, "accept_label"),
            "fail_label": _scalar(matcher.fail_label, "fail_label"),
        }
    if isinstance(matcher, StateMachine):
        return _machine_to_dict(matcher)
    msg = f"Cannot serialize matcher of type {type(matcher).__name__}"
    raise SerializationError(msg)


def _machine_to_dict(machine: StateMachine[Any, Any, Any]) -> dict[str, Any]:
    states = [
        [
            _scalar(name, "state identifier"),
            [
                {
                    "matcher": to_dict(t.matcher),
                    "targets": [_scalar(target, "state identifier") for target in t.targets],
                }
                for t in transitions
            ],
        ]
        for name, transitions in machine.states.items()
    ]
    accepting = [
        [_scalar(name, "state identifier"), _scalar(label, "label")]
        for name, label in machine.accepting.items()
    ]
    config = machine.config
    return {
        "_type": "StateMachine",
        "initial_state": _scalar(machine.initial_state, "state identifier"),
        "fail_label": _scalar(machine.fail_label, "fail_label"),
        "states": states,
        "accepting": accepting,
        "config": None if config is None else {f.name: getattr(config, f.name) for f in fields(config)},
    }


def from_dict(data: dict[str, Any]) -> Any:
    """Reconstruct a matcher from a dict.

    Uses the ``_type`` discriminator to determine the matcher class.

    Args:
        data: Dict as produced by to_dict.

    Returns:
        ExactTokenMatcher, RangeMatcher or StateMachine.

    Raises:
        SerializationError: If ``_type`` is missing or unknown, or a required
            field is absent.

    """
    type_name = data.get("_type")
    if type_name is None:
        raise SerializationError("Missing '_type' field in serialized matcher")

    try:
        if type_name == "ExactTokenMatcher":
            return ExactTokenMatcher(
                data["token"],
                data.get("negate", False),
                accept_label=data.get("accept_label", True),
                fail_label=data.get("fail_label"),
            )
        if type_name == "RangeMatcher":
            return RangeMatcher(
                data["low"],
                data["high"],
                data.get("negate", False),
                accept_label=data.get("accept_label", True),
                fail_label=data.get("fail_label"),
            )
        if type_name == "StateMachine":
            return _machine_from_dict(data)
    except KeyError as e:
        msg = f"Serialized {type_name} is missing field {e.args[0]!r}"
        raise SerializationError(msg) from e

    msg = f"Unknown matcher type: {type_name!r}"
    raise SerializationError(msg)


def _machine_from_dict(data: dict[str, Any]) -> StateMachine[Any, Any, Any]:
    states = {
        name: tuple(Transition(from_dict(t["matcher"]), tuple(t["targets"])) for t in transitions)
        for name, transitions in data["states"]
    }
    accepting = {name: label for name, label in data["accepting"]}
    raw_config = data.get("config")
    config = None if raw_config is None else MatchConfig.from_dict(raw_config)
    return StateMachine(
        data["initial_state"],
        states,
        accepting,
        fail_label=data.get("fail_label"),
        config=config,
    )


def to_json(matcher: Any, *, indent: int | None = None) -> str:
    """Serialize a matcher to a JSON string.

    Args:
        matcher: Matcher to serialize.
        indent: JSON indentation level (None for compact).

    Returns:
        JSON string.

    """
    return json.dumps(to_dict(matcher), sort_keys=True, indent=indent)


def from_json(data: str) -> Any:
    """Deserialize a matcher from a JSON string.

    Raises:
        SerializationError: If the JSON doesn't represent a known matcher.

    """
    raw = json.loads(data)
    if not isinstance(raw, dict):
        msg = f"Expected a JSON object, got {type(raw).__name__}"
        raise SerializationError(msg)
    return from_dict(raw)


__all__ = [
    "from_dict",
    "from_json",
    "to_dict",
    "to_json",
]
