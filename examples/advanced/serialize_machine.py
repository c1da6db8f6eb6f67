"""Ship a machine as JSON and rebuild it elsewhere."""

from fsmatch import StateMachineBuilder, from_json, to_json

machine = (
    StateMachineBuilder(0, fail_label="none")
    .exact(0, "a", 1)
    .within(1, "a", "z", 2)
    .within(1, "A", "Z", 3)
    .accept(2, "lower")
    .accept(3, "upper")
    .build()
)

payload = to_json(machine, indent=2)
print(payload)

restored = from_json(payload)
assert restored.match("aQ") == machine.match("aQ")
print("Round-trip OK:", restored.match("aQ"))
