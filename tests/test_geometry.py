"""Tests for scales, zoom composition and polygon membership."""

import numpy as np
import pytest

from tsne_explorer.geometry import (
    LinearScale,
    compose_transform,
    extent,
    nice_ticks,
    point_in_polygon,
    points_in_polygon,
)
from tsne_explorer.zoom import ZoomState

SQUARE = [(0, 0), (10, 0), (10, 10), (0, 10)]


class TestPointInPolygon:
    def test_inside_and_outside(self):
        assert point_in_polygon((5, 5), SQUARE)
        assert not point_in_polygon((15, 5), SQUARE)
        assert not point_in_polygon((-1, 5), SQUARE)
        assert not point_in_polygon((5, 11), SQUARE)

    def test_degenerate_polygons_contain_nothing(self):
        assert not point_in_polygon((0, 0), [])
        assert not point_in_polygon((0, 0), [(0, 0)])
        assert not point_in_polygon((1, 0), [(0, 0), (2, 0)])

    @pytest.mark.parametrize("point", [(0, 5), (10, 5), (5, 0), (5, 10), (0, 0), (10, 10)])
    def test_boundary_counts_as_outside(self, point):
        assert not point_in_polygon(point, SQUARE)

    def test_explicitly_closed_polygon_is_equivalent(self):
        closed = SQUARE + [SQUARE[0]]
        assert point_in_polygon((5, 5), closed)
        assert not point_in_polygon((15, 5), closed)

    def test_concave_polygon(self):
        # U shape: the notch between the arms is outside
        u_shape = [(0, 0), (9, 0), (9, 9), (6, 9), (6, 3), (3, 3), (3, 9), (0, 9)]
        assert point_in_polygon((1.5, 6), u_shape)
        assert point_in_polygon((7.5, 6), u_shape)
        assert not point_in_polygon((4.5, 6), u_shape)

    def test_doubly_wound_polygon_uses_even_odd(self):
        assert not point_in_polygon((5, 5), SQUARE + SQUARE)

    def test_vectorised_matches_scalar(self):
        triangle = [(0, 0), (8, 1), (3, 7)]
        xs, ys = np.meshgrid(np.linspace(-1, 9, 23), np.linspace(-1, 8, 19))
        grid = np.column_stack((xs.ravel(), ys.ravel()))
        mask = points_in_polygon(grid, triangle)
        expected = [point_in_polygon(p, triangle) for p in grid]
        assert mask.tolist() == expected
        assert mask.any() and not mask.all()

    def test_vectorised_empty_inputs(self):
        assert points_in_polygon([], SQUARE).shape == (0,)
        assert not points_in_polygon([(5, 5)], []).any()

    def test_extra_columns_are_ignored(self):
        points = np.array([[5.0, 5.0, 99.0], [15.0, 5.0, 0.0], [1.0, 9.0, -3.0]])
        assert points_in_polygon(points, SQUARE).tolist() == [True, False, True]

    def test_rejects_one_dimensional_points(self):
        with pytest.raises(ValueError):
            points_in_polygon(np.array([[1.0], [2.0]]), SQUARE)


class TestLinearScale:
    def test_maps_and_inverts(self):
        scale = LinearScale((0, 10), (40, 780))
        assert scale(0) == pytest.approx(40)
        assert scale(5) == pytest.approx(410)
        assert scale.invert(410) == pytest.approx(5)

    def test_reversed_range(self):
        scale = LinearScale((0, 10), (570, 20))
        assert scale(10) == pytest.approx(20)
        assert scale(0) == pytest.approx(570)

    def test_arrays(self):
        scale = LinearScale((0, 1), (0, 100))
        np.testing.assert_allclose(scale(np.array([0.0, 0.25, 1.0])), [0, 25, 100])

    def test_zero_width_domain_maps_to_range_midpoint(self):
        scale = LinearScale((3, 3), (40, 780))
        assert scale(3) == pytest.approx(410)
        np.testing.assert_allclose(scale(np.array([3.0, 3.0])), [410, 410])

    def test_ticks(self):
        assert LinearScale((0, 10), (0, 1)).ticks() == pytest.approx(list(range(11)))
        assert nice_ticks(0, 1) == pytest.approx([i / 10 for i in range(11)])
        assert nice_ticks(0, 100, 5) == pytest.approx([0, 20, 40, 60, 80, 100])
        assert nice_ticks(100, 0, 5) == pytest.approx([0, 20, 40, 60, 80, 100])
        assert nice_ticks(2, 2) == [2.0]

    def test_tick_format_precision(self):
        assert LinearScale((0, 1), (0, 1)).tick_format()(0.5) == "0.5"
        assert LinearScale((0, 1000), (0, 1)).tick_format()(1000) == "1,000"


class TestComposeTransform:
    base = LinearScale((0, 10), (40, 780))

    def test_identity(self):
        zoomed = compose_transform(self.base, ZoomState())
        assert zoomed.domain == pytest.approx(self.base.domain)
        assert zoomed.range == self.base.range

    def test_matches_zoom_formula(self):
        state = ZoomState(k=2.0, x=-100.0, y=30.0)
        zoomed_x = compose_transform(self.base, state, "x")
        zoomed_y = compose_transform(self.base, state, "y")
        for v in (0.0, 2.5, 7.0, 10.0):
            assert zoomed_x(v) == pytest.approx(2 * self.base(v) - 100)
            assert zoomed_y(v) == pytest.approx(2 * self.base(v) + 30)

    def test_rejects_unknown_axis(self):
        with pytest.raises(ValueError):
            compose_transform(self.base, ZoomState(), "z")


class TestExtent:
    def test_extent(self):
        assert extent([3, -1, 7]) == (-1.0, 7.0)

    def test_empty(self):
        assert extent([]) == (0.0, 1.0)
