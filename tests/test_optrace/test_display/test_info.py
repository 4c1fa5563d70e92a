"""Tests for the per-report line printer in optrace.display.info."""

import io

import chex
import pytest

from optrace.display import (
    disp_iteration,
    disp_iteration_,
    info_diff_time,
    info_itr,
    info_string,
    info_text,
    info_type,
    join_info,
)
from optrace.types import UNIT_MONOID, make_report


class TestInfoFunctions(chex.TestCase):
    """Test the individual info formatters."""

    def setUp(self) -> None:
        """Build a report shared by the tests."""
        super().setUp()
        self.report = make_report(
            start_time=10.0, elapsed=0.00125, sequence_number=4, depth=1
        )

    def test_info_itr(self) -> None:
        """Iteration number follows a separator."""
        self.assertEqual(info_itr(self.report, None), "; 4")

    def test_info_type(self) -> None:
        """Value name follows a separator."""
        self.assertEqual(info_type(self.report, 2.0), "; float")
        self.assertEqual(info_type(self.report, "newton"), "; newton")

    def test_info_diff_time(self) -> None:
        """Elapsed time is rendered in scientific notation."""
        self.assertEqual(
            info_diff_time(self.report, None), "; 1.2500e-03 sec"
        )

    def test_info_text(self) -> None:
        """Values are rendered with report_text."""
        self.assertEqual(info_text(self.report, [1, 2]), "; [1, 2]")

    def test_join_info(self) -> None:
        """Formatters are concatenated in order."""
        info = join_info(info_string(">"), info_itr, info_type)
        self.assertEqual(info(self.report, 1.0), ">; 4; float")


class TestDispIteration(chex.TestCase):
    """Test disp_iteration and disp_iteration_."""

    def test_line_is_indented_by_depth(self) -> None:
        """One indent marker is printed per nesting level."""
        stream = io.StringIO()
        display = disp_iteration(stream)
        report = make_report(elapsed=0.5, sequence_number=2, depth=2)
        contribution, effect = display.on_step(report, None, "newton")
        self.assertIsNone(contribution)
        self.assertEqual(stream.getvalue(), "")
        effect()
        self.assertEqual(
            stream.getvalue(), " -  - ; 2; newton; 5.0000e-01 sec\n"
        )

    def test_custom_info(self) -> None:
        """disp_iteration_ prints whatever the info function builds."""
        stream = io.StringIO()
        display = disp_iteration_(info_text, stream)
        _, effect = display.on_step(make_report(depth=0), None, 3.5)
        effect()
        self.assertEqual(stream.getvalue(), "; 3.5\n")
        self.assertIs(display.monoid, UNIT_MONOID)


if __name__ == "__main__":
    pytest.main([__file__])
