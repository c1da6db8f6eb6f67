"""ContextVar-based traversal configuration for fsmatch.

Provides thread-local configuration using Python's ContextVars (PEP 567).
A StateMachine reads the active config once at the start of each match call,
unless it was built with an explicit ``config=``.

Thread Safety:
    ContextVars are thread-local by design. Each thread has independent storage,
    so no locks are needed and race conditions are impossible.

Usage:
    # Cap the search for one block of code
    with match_config_context(MatchConfig(max_steps=10_000)):
        result = machine.match(tokens)

    # Or pin the config on the machine itself
    machine = StateMachine("s0", states, accepting, config=MatchConfig(memoize_failures=False))

"""

from collections.abc import Iterator
from contextlib import contextmanager
from contextvars import ContextVar
from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class MatchConfig:
    """Immutable traversal configuration.

    Attributes:
        memoize_failures: Remember every (state, position) pair visited during
            a single match call and treat a revisit as a dead end. Every
            transition consumes at least one token, so a revisited node has
            already been searched and failed; skipping it keeps the result
            identical while bounding the search by states x positions.
        max_steps: Upper bound on visited (state, position) nodes per match
            call. When exhausted, the call fails with (fail_label, 0).
            None means unbounded.
        strict_topology: Make StateMachineBuilder.validate() raise
            TopologyError instead of logging warnings.

    """

    memoize_failures: bool = True
    max_steps: int | None = None
    strict_topology: bool = False

    def __post_init__(self) -> None:
        if self.max_steps is not None and self.max_steps < 1:
            msg = f"max_steps must be a positive integer or None, got {self.max_steps!r}"
            raise ValueError(msg)

    @classmethod
    def from_dict(cls, config_dict: dict) -> "MatchConfig":
        """Create MatchConfig from dictionary.

        Only includes keys that are valid MatchConfig fields; unknown keys
        are silently ignored.

        Args:
            config_dict: Dictionary with config values. Keys should match
                MatchConfig attribute names.

        Returns:
            New MatchConfig instance with values from dict.

        Example:
            >>> config = MatchConfig.from_dict({"max_steps": 500, "color": "red"})
            >>> config.max_steps
            500

        """
        valid_fields = {f.name for f in cls.__dataclass_fields__.values()}
        filtered = {k: v for k, v in config_dict.items() if k in valid_fields}
        return cls(**filtered)


# Module-level default config (reused, never recreated)
_DEFAULT_CONFIG: MatchConfig = MatchConfig()

# Thread-local configuration via ContextVar
_match_config: ContextVar[MatchConfig] = ContextVar(
    "match_config",
    default=_DEFAULT_CONFIG,
)


def get_match_config() -> MatchConfig:
    """Get current match configuration (thread-local).

    Returns:
        The active MatchConfig for this thread/context.

    """
    return _match_config.get()


def set_match_config(config: MatchConfig) -> None:
    """Set match configuration for current context.

    Args:
        config: MatchConfig instance to use for this context.

    Thread Safety:
        Only affects the current thread's context. Other threads are unaffected.

    """
    _match_config.set(config)


def reset_match_config() -> None:
    """Reset to default configuration.

    Reuses the module-level _DEFAULT_CONFIG singleton, avoiding allocation.

    """
    _match_config.set(_DEFAULT_CONFIG)


@contextmanager
def match_config_context(config: MatchConfig) -> Iterator[None]:
    """Context manager for temporary config changes.

    Args:
        config: MatchConfig to use within the context.

    Yields:
        None

    Example:
        >>> with match_config_context(MatchConfig(max_steps=100)):
        ...     result = machine.match("abc")
        >>> # Automatically reset to previous config

    Thread Safety:
        Only affects the current thread's context. Properly restores previous
        config even if an exception is raised.

    """
    previous = _match_config.get()
    _match_config.set(config)
    try:
        yield
    finally:
        _match_config.set(previous)


__all__ = [
    "MatchConfig",
    "get_match_config",
    "set_match_config",
    "reset_match_config",
    "match_config_context",
]
