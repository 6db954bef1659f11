"""Unit tests for the pan/zoom viewport."""

import pytest

from flowlens.config import ViewportSettings
from flowlens.render.viewport import Viewport


class TestViewport:
    def test_identity(self):
        vp = Viewport(800, 600)
        assert vp.apply(10, 20) == (10, 20)
        assert vp.transform == "translate(0,0) scale(1)"

    def test_zoom_clamped(self):
        vp = Viewport(800, 600)
        assert vp.zoom(100) == 4.0
        assert vp.zoom(1e-6) == 0.1

    def test_custom_bounds(self):
        vp = Viewport.from_settings(800, 600, ViewportSettings(min_scale=0.5, max_scale=2))
        assert vp.zoom_to(10) == 2
        assert vp.zoom_to(0.01) == 0.5

    def test_zoom_keeps_anchor(self):
        vp = Viewport(800, 600)
        before = vp.invert(200, 100)
        vp.zoom(2.5, 200, 100)
        assert vp.invert(200, 100) == pytest.approx(before)

    def test_pan_and_invert(self):
        vp = Viewport(800, 600)
        vp.pan(50, -20)
        vp.zoom(2, 0, 0)
        sx, sy = vp.apply(10, 10)
        assert vp.invert(sx, sy) == pytest.approx((10, 10))

    def test_zoom_never_moves_nodes(self, chain_graph):
        before = [(n.x, n.y) for n in chain_graph.iter_nodes()]
        Viewport(800, 600).zoom(3)
        assert [(n.x, n.y) for n in chain_graph.iter_nodes()] == before

    def test_resize_and_reset(self):
        vp = Viewport(800, 600)
        vp.zoom(2)
        vp.resize(1024, 768)
        assert (vp.width, vp.height) == (1024, 768)
        vp.reset()
        assert (vp.x, vp.y, vp.k) == (0, 0, 1)
