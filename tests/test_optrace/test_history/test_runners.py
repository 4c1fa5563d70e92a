"""Tests for the run modes in optrace.history.runners."""

import io

import chex
import pytest
from absl.testing import parameterized

from optrace.display import (
    LEVEL_INDENT,
    compose_displays,
    disp_iteration,
    summary_table,
)
from optrace.history import (
    DEFAULT_TRACE_DEPTH,
    begin_function,
    eval_history,
    report,
    run_history,
    summarize_history,
    trace_all_history,
    trace_history,
)
from optrace.iteration import iterate, max_iterations


def halve(x: float) -> float:
    return x / 2.0


def nested_body() -> float:
    """Two phases: the halving loop calls an inner phase at every step."""

    def step(x: float) -> float:
        return begin_function("inner", lambda: report(halve(x)))

    report("top")
    return begin_function("outer", iterate, step, 1.0, max_iterations(3))


def _depths(text: str) -> list:
    depths = []
    for line in text.splitlines():
        depth = 0
        while line.startswith(LEVEL_INDENT):
            line = line[len(LEVEL_INDENT):]
            depth += 1
        depths.append(depth)
    return depths


class TestRunModes(chex.TestCase, parameterized.TestCase):
    """Every run mode returns exactly what the body returns."""

    @parameterized.named_parameters(
        ("eval", lambda body, out: eval_history(body)),
        ("trace", lambda body, out: trace_history(body, stream=out)),
        ("trace_all", lambda body, out: trace_all_history(body, stream=out)),
        ("summary", lambda body, out: summarize_history(body, stream=out)),
        (
            "summary_trace",
            lambda body, out: summarize_history(body, stream=out, trace=True),
        ),
    )
    def test_results_identical_to_bare_loop(self, runner) -> None:
        """Instrumentation never changes the result."""
        bare = 1.0
        for _ in range(3):
            bare = halve(bare)
        self.assertEqual(runner(nested_body, io.StringIO()), bare)

    def test_eval_history_prints_nothing(self) -> None:
        """The untraced run mode has no output."""
        stream = io.StringIO()
        with pytest.MonkeyPatch.context() as patch:
            patch.setattr("sys.stdout", stream)
            eval_history(nested_body)
        self.assertEqual(stream.getvalue(), "")


class TestTraceHistory(chex.TestCase, parameterized.TestCase):
    """Test the depth-limited and full line printers."""

    def test_trace_all_prints_every_report(self) -> None:
        """One line per report, at every depth."""
        stream = io.StringIO()
        trace_all_history(nested_body, stream=stream)
        depths = _depths(stream.getvalue())
        # top, outer label, four iterates, three inner labels and values
        self.assertLen(depths, 1 + 1 + 4 + 3 * 2)
        self.assertEqual(max(depths), 4)

    @parameterized.named_parameters(
        ("top_only", 0),
        ("phase_labels", 1),
        ("default", DEFAULT_TRACE_DEPTH),
        ("inner_labels", 3),
    )
    def test_max_depth(self, max_depth: int) -> None:
        """No line deeper than max_depth is printed."""
        stream = io.StringIO()
        trace_history(nested_body, max_depth=max_depth, stream=stream)
        depths = _depths(stream.getvalue())
        self.assertTrue(depths)
        self.assertEqual(max(depths), max_depth)

    def test_line_format(self) -> None:
        """Lines carry iteration, name and elapsed time."""
        stream = io.StringIO()
        run_history(
            disp_iteration(stream),
            lambda: begin_function("p", report, 2.0),
            clock=lambda: 0.0,
        )
        self.assertEqual(
            stream.getvalue(),
            " - ; 0; p; 0.0000e+00 sec\n"
            " -  - ; 0; float; 0.0000e+00 sec\n",
        )


class TestSummarizeHistory(chex.TestCase):
    """Test the summary run mode."""

    def test_counts_and_averages(self) -> None:
        """Rows count calls per name with the average elapsed time."""
        ticks = iter(float(t) for t in range(0, 100, 2))
        stream = io.StringIO()

        def body():
            for _ in range(4):
                report("A")

        run_history(summary_table(stream), body, clock=lambda: next(ticks))
        text = stream.getvalue()
        row = [line for line in text.splitlines() if "| A " in line]
        self.assertLen(row, 1)
        self.assertIn("| 4 ", row[0])
        # elapsed 0, 2, 2, 2
        self.assertIn("1.5000e+00 sec", row[0])

    def test_table_printed_once_at_end(self) -> None:
        """Nothing is printed until the body returns."""
        stream = io.StringIO()
        seen: list = []

        def body():
            report("A")
            seen.append(stream.getvalue())

        summarize_history(body, stream=stream)
        self.assertEqual(seen, [""])
        self.assertEqual(stream.getvalue().count("report name"), 1)

    def test_trace_and_summary_together(self) -> None:
        """With trace=True lines precede the table."""
        stream = io.StringIO()
        summarize_history(nested_body, stream=stream, trace=True)
        text = stream.getvalue()
        self.assertLess(text.index("; outer;"), text.index("report name"))
        for name in ("outer", "inner", "float", "top"):
            self.assertIn(f"| {name} ", text)

    def test_composed_display_matches_summary(self) -> None:
        """compose_displays gives the same table as summarize_history."""
        stream = io.StringIO()
        display = compose_displays(
            disp_iteration(io.StringIO()), summary_table(stream)
        )
        run_history(display, nested_body)
        self.assertIn("| inner ", stream.getvalue())


if __name__ == "__main__":
    pytest.main([__file__])
