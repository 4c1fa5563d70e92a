"""Tests for Report and Monoid in optrace.types.report_types."""

import chex
import pytest
from absl.testing import parameterized

from optrace.types import (
    SENTINEL_SEQUENCE,
    UNIT_MONOID,
    Monoid,
    Report,
    make_report,
)


class TestMakeReport(chex.TestCase, parameterized.TestCase):
    """Test the make_report factory."""

    def test_defaults_are_top_level_sentinel(self) -> None:
        """Default report is the sentinel at depth zero."""
        report = make_report()
        self.assertEqual(report, Report(0.0, 0.0, SENTINEL_SEQUENCE, 0))
        self.assertTrue(report.is_sentinel)

    def test_fields_are_kept(self) -> None:
        """Explicit fields appear unchanged on the report."""
        report = make_report(
            start_time=1.5, elapsed=0.5, sequence_number=3, depth=2
        )
        self.assertEqual(report.start_time, 1.5)
        self.assertEqual(report.elapsed, 0.5)
        self.assertEqual(report.sequence_number, 3)
        self.assertEqual(report.depth, 2)
        self.assertFalse(report.is_sentinel)

    def test_integer_times_are_stored_as_float(self) -> None:
        """Plain integers are accepted for the time fields."""
        report = make_report(start_time=1, elapsed=0, sequence_number=0)
        self.assertIsInstance(report.start_time, float)
        self.assertIsInstance(report.elapsed, float)
        self.assertEqual(report.start_time, 1.0)

    @parameterized.named_parameters(
        ("negative_depth", {"depth": -1}),
        ("sequence_below_sentinel", {"sequence_number": -2}),
        ("negative_elapsed", {"elapsed": -0.1}),
    )
    def test_invalid_fields_raise(self, kwargs: dict) -> None:
        """Out-of-range fields are rejected with ValueError."""
        with self.assertRaises(ValueError):
            make_report(**kwargs)

    def test_report_is_immutable(self) -> None:
        """Reports are replaced, never edited."""
        report = make_report(sequence_number=0)
        with self.assertRaises(AttributeError):
            report.depth = 3
        moved = report._replace(sequence_number=1)
        self.assertEqual(report.sequence_number, 0)
        self.assertEqual(moved.sequence_number, 1)


class TestMonoid(chex.TestCase):
    """Test the Monoid record and UNIT_MONOID."""

    def test_unit_monoid(self) -> None:
        """UNIT_MONOID builds and combines None."""
        self.assertIsNone(UNIT_MONOID.zero())
        self.assertIsNone(UNIT_MONOID.combine(None, None))
        self.assertEqual(UNIT_MONOID.name, "unit")

    def test_custom_monoid_laws(self) -> None:
        """An additive monoid satisfies identity and associativity."""
        additive = Monoid(zero=lambda: 0, combine=lambda a, b: a + b)
        self.assertEqual(additive.combine(additive.zero(), 5), 5)
        self.assertEqual(additive.combine(5, additive.zero()), 5)
        self.assertEqual(
            additive.combine(additive.combine(1, 2), 3),
            additive.combine(1, additive.combine(2, 3)),
        )
        self.assertEqual(additive.name, "monoid")


if __name__ == "__main__":
    pytest.main([__file__])
