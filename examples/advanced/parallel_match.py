"""Free-threading safe — share one machine across threads."""

from concurrent.futures import ThreadPoolExecutor

from fsmatch import StateMachineBuilder

hex_literal = (
    StateMachineBuilder("zero", fail_label="NONE")
    .exact("zero", "0", "x")
    .exact("x", "x", "digits")
    .within("digits", "0", "9", "digits", "done")
    .within("digits", "a", "f", "digits", "done")
    .accept("done", "HEX")
    .build()
)

inputs = [f"0x{i:x}" for i in range(10_000)] + ["0y12", "x0", "0x"]

with ThreadPoolExecutor(max_workers=8) as ex:
    results = list(ex.map(hex_literal.match, inputs))

matched = sum(1 for result in results if result.matched)
print(f"Matched {matched} of {len(inputs)} inputs in parallel")
