"""Benchmark state machine matching and tokenizing.

Covers single prefix matches, deep single paths, nested machines and a full
tokenize pass, with and without failure memoization.

Run with:
    pytest benchmarks/benchmark_match.py -v --benchmark-only
"""

try:
    import pytest

    from fsmatch import MatchConfig, match_config_context, tokenize

    @pytest.mark.benchmark(group="match")
    def test_benchmark_match_short(benchmark, identifier_machine):
        """Benchmark one short identifier match."""
        benchmark(identifier_machine.match, "counter_42 = 0")

    @pytest.mark.benchmark(group="match")
    def test_benchmark_match_long(benchmark, identifier_machine, long_identifier):
        """Benchmark a 10k-token path (explicit stack, no recursion)."""
        result = benchmark(identifier_machine.match, long_identifier)
        assert result.consumed == len(long_identifier)

    @pytest.mark.benchmark(group="match")
    def test_benchmark_match_long_no_memo(benchmark, identifier_machine, long_identifier):
        """Same path without the visited set (baseline for memoization cost)."""

        def run():
            with match_config_context(MatchConfig(memoize_failures=False)):
                return identifier_machine.match(long_identifier)

        benchmark(run)

    @pytest.mark.benchmark(group="tokenize")
    def test_benchmark_tokenize(benchmark, lexer_machine, expression_source):
        """Benchmark tokenizing ~50KB with nested sub-machines."""

        def run():
            return sum(1 for _ in tokenize(lexer_machine, expression_source))

        count = benchmark(run)
        assert count > 0

except ImportError:
    pass  # pytest not available
