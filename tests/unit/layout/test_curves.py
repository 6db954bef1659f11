"""Unit tests for curved link geometry."""

import pytest

from flowlens.layout.curves import arc_radius, link_arc


class TestArcRadius:
    def test_scales_with_distance(self):
        assert arc_radius(0, 0, 30, 40) == pytest.approx(75)

    def test_coincident_endpoints_nonzero(self):
        assert arc_radius(5, 5, 5, 5) > 0


class TestLinkArc:
    def test_path_data(self):
        assert link_arc(0, 0, 30, 40) == "M0,0A75,75 0 0,1 30,40"

    def test_fractional_coordinates(self):
        assert link_arc(1.234, 0, 4.5, 0).startswith("M1.23,0A")

    def test_self_loop_no_nan(self):
        d = link_arc(10, 10, 10, 10)
        assert "nan" not in d.lower()
        assert d.startswith("M10,10A")

    def test_non_finite_input(self):
        assert "nan" not in link_arc(float("nan"), 0, 1, 1).lower()
