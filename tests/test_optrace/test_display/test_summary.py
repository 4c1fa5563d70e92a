"""Tests for the summary table display function."""

import io

import chex
import pytest

from optrace.display import (
    COUNTS_MONOID,
    CountInfo,
    merge_counts,
    render_summary_table,
    summary_table,
)
from optrace.types import make_report


class TestMergeCounts(chex.TestCase):
    """Test merge_counts and COUNTS_MONOID."""

    def test_shared_keys_are_summed(self) -> None:
        """Entries under the same name add up."""
        left = {"A": CountInfo(1, 2.0), "B": CountInfo(2, 1.0)}
        right = {"A": CountInfo(2, 10.0), "C": CountInfo(1, 0.5)}
        merged = merge_counts(left, right)
        self.assertEqual(
            merged,
            {
                "A": CountInfo(3, 12.0),
                "B": CountInfo(2, 1.0),
                "C": CountInfo(1, 0.5),
            },
        )

    def test_inputs_not_mutated(self) -> None:
        """Merging builds a new table."""
        left = {"A": CountInfo(1, 2.0)}
        merge_counts(left, {"A": CountInfo(1, 1.0)})
        self.assertEqual(left, {"A": CountInfo(1, 2.0)})

    def test_zero_is_identity(self) -> None:
        """The empty table is the monoid identity."""
        table = {"A": CountInfo(1, 2.0)}
        zero = COUNTS_MONOID.zero()
        self.assertEqual(COUNTS_MONOID.combine(zero, table), table)
        self.assertEqual(COUNTS_MONOID.combine(table, zero), table)


class TestSummaryTable(chex.TestCase):
    """Test summary_table and render_summary_table."""

    def test_average_of_steps(self) -> None:
        """Three steps of 2, 4 and 6 seconds average 4 seconds."""
        display = summary_table(io.StringIO())
        state = display.monoid.zero()
        for seq, elapsed in enumerate([2.0, 4.0, 6.0]):
            report = make_report(elapsed=elapsed, sequence_number=seq)
            contribution, effect = display.on_step(report, state, "A")
            self.assertIsNone(effect)
            state = display.monoid.combine(state, contribution)
        self.assertEqual(state["A"].num_calls, 3)
        self.assertAlmostEqual(state["A"].average_elapsed, 4.0)

    def test_on_stop_prints_table(self) -> None:
        """The table is printed once, at the end."""
        stream = io.StringIO()
        display = summary_table(stream)
        display.on_stop({"A": CountInfo(3, 12.0)})
        text = stream.getvalue()
        self.assertIn("| A ", text)
        self.assertIn("| 3 ", text)
        self.assertIn("4.0000e+00 sec", text)

    def test_render_layout(self) -> None:
        """Rows are sorted and framed by matching rules."""
        text = render_summary_table(
            {"b": CountInfo(1, 1.0), "a": CountInfo(2, 1.0)}
        )
        lines = text.split("\n")
        self.assertLen(lines, 6)
        self.assertEqual(lines[0], lines[2])
        self.assertEqual(lines[0], lines[5])
        self.assertEqual(lines[0].strip(), "-" * len(lines[0].strip()))
        self.assertIn("report name", lines[1])
        self.assertIn("average time per call", lines[1])
        self.assertTrue(lines[3].startswith(" | a "))
        self.assertTrue(lines[4].startswith(" | b "))
        self.assertLen({len(line.rstrip()) for line in lines[1:5]}, 1)

    def test_empty_table(self) -> None:
        """An empty table still prints its header."""
        lines = render_summary_table({}).split("\n")
        self.assertLen(lines, 4)


if __name__ == "__main__":
    pytest.main([__file__])
