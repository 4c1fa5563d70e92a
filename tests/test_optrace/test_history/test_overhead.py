"""Timing budgets for instrumented loops.

Compares a hand-written loop with the same loop driven by ``iterate``
under each run mode. Budgets are generous so that only a regression in
the per-step cost of the history fails them.
"""

import io
import time

import pytest

from optrace.history import begin_function, eval_history, summarize_history
from optrace.iteration import iterate, max_iterations

STEPS = 10_000
REPEATS = 5


def halve(x: float) -> float:
    return x * 0.5


def bare_loop(steps: int) -> float:
    """Halving loop with its own step counter and bound check."""
    x = 1.0
    count = 0
    while True:
        x = halve(x)
        count += 1
        if count >= steps:
            return x


def instrumented(steps: int) -> float:
    return begin_function(
        "halving", iterate, halve, 1.0, max_iterations(steps)
    )


def _best_of(fn, *args) -> float:
    durations = []
    for _ in range(REPEATS):
        start = time.perf_counter()
        fn(*args)
        durations.append(time.perf_counter() - start)
    return min(durations)


def test_benchmark_eval_history(benchmark):
    """Benchmark an untraced run of the halving loop."""
    result = benchmark(eval_history, lambda: instrumented(STEPS))

    assert result == bare_loop(STEPS)
    # 10k untraced steps should finish well under 100ms
    assert benchmark.stats["mean"] < 0.1


def test_benchmark_summarize_history(benchmark):
    """Benchmark a traced run that reads the clock at every step."""
    sink = io.StringIO()
    result = benchmark(
        summarize_history, lambda: instrumented(STEPS), stream=sink
    )

    assert result == bare_loop(STEPS)
    assert benchmark.stats["mean"] < 0.5


def test_eval_history_overhead_is_bounded():
    """Untraced instrumentation costs a constant factor per step."""
    bare = _best_of(bare_loop, STEPS)
    untraced = _best_of(eval_history, lambda: instrumented(STEPS))

    assert untraced < bare * 25


def test_eval_history_scales_linearly():
    """Ten times the steps costs about ten times the time."""
    small = _best_of(eval_history, lambda: instrumented(STEPS // 10))
    large = _best_of(eval_history, lambda: instrumented(STEPS))

    assert large < small * 20


if __name__ == "__main__":
    pytest.main([__file__])
