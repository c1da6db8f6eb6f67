"""Benchmark fixtures and configuration."""

from __future__ import annotations

import random

import pytest

from fsmatch import StateMachine, StateMachineBuilder


@pytest.fixture
def identifier_machine() -> StateMachine:
    """``[A-Za-z_][A-Za-z0-9_]*`` as a labelled machine."""
    return (
        StateMachineBuilder("start", fail_label="NONE")
        .within("start", "a", "z", "body", "end")
        .within("start", "A", "Z", "body", "end")
        .exact("start", "_", "body", "end")
        .within("body", "a", "z", "body", "end")
        .within("body", "A", "Z", "body", "end")
        .within("body", "0", "9", "body", "end")
        .exact("body", "_", "body", "end")
        .accept("end", "IDENT")
        .build()
    )


@pytest.fixture
def lexer_machine(identifier_machine: StateMachine) -> StateMachine:
    """Small expression lexer that nests the identifier machine."""
    number = (
        StateMachineBuilder("d", fail_label="NONE")
        .within("d", "0", "9", "d", "end")
        .accept("end", "NUMBER")
        .build()
    )
    return (
        StateMachineBuilder("start", fail_label="NONE")
        .transition("start", identifier_machine, "ident")
        .transition("start", number, "number")
        .exact("start", " ", "space")
        .within("start", "(", "+", "op")
        .exact("start", "-", "op")
        .exact("start", "/", "op")
        .exact("start", "=", "op")
        .accept("ident", "IDENT")
        .accept("number", "NUMBER")
        .accept("space", "SPACE")
        .accept("op", "OP")
        .build()
    )


@pytest.fixture
def long_identifier() -> str:
    """A 10k-token identifier: worst case for path depth."""
    return "x" * 10_000


@pytest.fixture
def expression_source() -> str:
    """About 50KB of arithmetic assignments."""
    rng = random.Random(1234)
    lines = []
    for i in range(2000):
        a, b = rng.randint(0, 9999), rng.randint(0, 9999)
        lines.append(f"var_{i} = (alpha*{a} + beta_{i}) / {b} - gamma ")
    return "".join(lines)
