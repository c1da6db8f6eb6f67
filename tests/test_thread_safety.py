"""Thread safety tests for shared StateMachine instances.

StateMachine documents that one instance can be matched from many threads
without locking. These tests verify that:
1. Concurrent matches against one machine give the same results as serial ones
2. Per-thread config and profiling do not leak between threads

These tests use real threading to catch actual concurrency bugs.
"""

from concurrent.futures import ThreadPoolExecutor

import pytest

from fsmatch import (
    MatchConfig,
    MatchResult,
    StateMachine,
    StateMachineBuilder,
    match_config_context,
    profiled_match,
    tokenize,
)

INPUTS = ["ay", "aY", "a1", "a", "", "b", "az", "aZ"] * 25


@pytest.fixture
def machine() -> StateMachine:
    number = (
        StateMachineBuilder("d", fail_label="FAIL")
        .within("d", "0", "9", "d", "end")
        .accept("end", "NUM")
        .build()
    )
    return (
        StateMachineBuilder("S0", fail_label="FAIL")
        .exact("S0", "a", "S1")
        .within("S1", "a", "z", "S2")
        .within("S1", "A", "Z", "S3")
        .transition("S1", number, "S4")
        .accept("S2", "LOWER")
        .accept("S3", "UPPER")
        .accept("S4", "NUMBER")
        .build()
    )


class TestSharedMachine:
    """One machine, many threads."""

    def test_concurrent_results_match_serial(self, machine: StateMachine) -> None:
        expected = [machine.match(text) for text in INPUTS]

        with ThreadPoolExecutor(max_workers=8) as pool:
            results = list(pool.map(machine.match, INPUTS))

        assert results == expected

    def test_concurrent_tokenize(self) -> None:
        word = (
            StateMachineBuilder("s")
            .within("s", "a", "z", "w", "end")
            .exact("s", " ", "gap")
            .within("w", "a", "z", "w", "end")
            .accept("end", "WORD")
            .accept("gap", "GAP")
            .build()
        )
        text = "the quick brown fox " * 50

        def run(_: int) -> int:
            return len(list(tokenize(word, text)))

        with ThreadPoolExecutor(max_workers=8) as pool:
            counts = list(pool.map(run, range(32)))

        # four words and four gaps per repetition
        assert counts == [400] * 32


class TestPerThreadContext:
    """Config and profiling are context-local."""

    def test_budget_in_one_thread_only(self, machine: StateMachine) -> None:
        def limited() -> MatchResult:
            with match_config_context(MatchConfig(max_steps=1)):
                return machine.match("ay")

        def unlimited() -> MatchResult:
            return machine.match("ay")

        with ThreadPoolExecutor(max_workers=2) as pool:
            limited_future = pool.submit(limited)
            unlimited_future = pool.submit(unlimited)

        assert limited_future.result() == MatchResult("FAIL", 0)
        assert unlimited_future.result() == MatchResult("LOWER", 2)

    def test_profiling_per_thread(self, machine: StateMachine) -> None:
        def profile(count: int) -> int:
            with profiled_match() as acc:
                for _ in range(count):
                    machine.match("aY")
            return acc.match_calls

        with ThreadPoolExecutor(max_workers=4) as pool:
            calls = list(pool.map(profile, [1, 2, 3, 4]))

        assert calls == [1, 2, 3, 4]
