"""Match ``a[a-zA-Z]`` and report which case the second letter had."""

from fsmatch import ExactTokenMatcher, RangeMatcher, StateMachine

machine = StateMachine(
    "S0",
    {
        "S0": [(ExactTokenMatcher("a"), ["S1"])],
        "S1": [
            (RangeMatcher("a", "z"), ["S2"]),
            (RangeMatcher("A", "Z"), ["S3"]),
        ],
    },
    {"S2": "LOWER", "S3": "UPPER"},
    fail_label="FAIL",
)

for text in ["ay", "aY", "a1", "a"]:
    label, consumed = machine.match(text)
    print(f"{text!r:6} -> {label} ({consumed} tokens)")
