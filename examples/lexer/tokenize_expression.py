"""Tokenize an arithmetic expression with nested machines.

Each token class is its own machine; the lexer machine uses them as macro
tokens, so one match both consumes the lexeme and names its class.
"""

from fsmatch import ScanError, StateMachineBuilder, tokenize

number = (
    StateMachineBuilder("int", fail_label="NONE")
    .within("int", "0", "9", "int", "done")
    .exact("int", ".", "frac")
    .within("frac", "0", "9", "frac", "done")
    .accept("done", "NUMBER")
    .build()
)

name = (
    StateMachineBuilder("head", fail_label="NONE")
    .within("head", "a", "z", "tail", "done")
    .within("tail", "a", "z", "tail", "done")
    .within("tail", "0", "9", "tail", "done")
    .accept("done", "NAME")
    .build()
)

lexer = (
    StateMachineBuilder("start", fail_label="NONE")
    .transition("start", number, "number")
    .transition("start", name, "name")
    .exact("start", " ", "space")
    .within("start", "(", "+", "operator")
    .exact("start", "-", "operator")
    .exact("start", "/", "operator")
    .accept("number", "NUMBER")
    .accept("name", "NAME")
    .accept("space", "SPACE")
    .accept("operator", "OPERATOR")
    .build(validate=True)
)

source = "(rate * 12.5) - fee2 / 3"
for span in tokenize(lexer, source):
    if span.label != "SPACE":
        print(f"{span.label:9} {source[span.start : span.end]!r}")

try:
    list(tokenize(lexer, "price $ 4"))
except ScanError as e:
    print(f"error: {e}")
