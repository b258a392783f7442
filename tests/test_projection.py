"""Tests for PCA re-projection of selections."""

import numpy as np
import pytest

from tsne_explorer.projection import project
from tsne_explorer.selection import Selection


def _selection(points):
    points = np.asarray(points, dtype=float)
    return Selection(np.arange(len(points)), points)


def _rotation():
    # Orthonormal basis from a fixed QR decomposition
    q, _ = np.linalg.qr(np.array([[1.0, 2.0, 0.5], [0.3, -1.0, 2.0], [2.0, 0.1, -0.7]]))
    return q


def _ellipse(a=5.0, b=2.0, n=8):
    t = np.arange(n) * 2 * np.pi / n
    return np.column_stack((a * np.cos(t), b * np.sin(t), np.zeros(n)))


def _match_up_to_sign(actual, expected, atol=1e-8):
    return (np.allclose(actual, expected, atol=atol)
            or np.allclose(actual, -expected, atol=atol))


class TestSmallSelections:
    @pytest.mark.parametrize("n", [0, 1])
    def test_needs_two_points(self, n):
        assert project(_selection(np.ones((n, 3)))) is None


class TestKnownStructure:
    def test_recovers_ellipse_axes(self):
        flat = _ellipse()
        rotated = flat @ _rotation().T + np.array([10.0, -4.0, 3.0])

        result = project(_selection(rotated))

        assert result.points.shape == (8, 2)
        assert _match_up_to_sign(result.points[:, 0], flat[:, 0])
        assert _match_up_to_sign(result.points[:, 1], flat[:, 1])
        # Variance ratio of semi-axes 5 and 2
        assert result.explained_variance_ratio[0] == pytest.approx(25 / 29)
        assert result.explained_variance_ratio[1] == pytest.approx(4 / 29)

    def test_output_is_mean_centred(self):
        rng = np.random.default_rng(0)
        result = project(_selection(rng.normal(size=(50, 6)) + 7.0))
        np.testing.assert_allclose(result.points.mean(axis=0), [0.0, 0.0], atol=1e-9)

    def test_preserves_selection_order(self):
        rotated = _ellipse() @ _rotation().T
        perm = np.array([5, 2, 7, 0, 3, 6, 1, 4])

        base = project(_selection(rotated)).points
        shuffled = project(_selection(rotated[perm])).points

        for col in range(2):
            assert _match_up_to_sign(shuffled[:, col], base[perm, col])

    def test_duplicate_points_reordering(self):
        points = np.array([[0.0, 0.0, 0.0], [1.0, 2.0, 0.0], [1.0, 2.0, 0.0], [4.0, 1.0, 1.0]])
        base = project(_selection(points)).points
        swapped = project(_selection(points[[0, 2, 1, 3]])).points
        for col in range(2):
            assert _match_up_to_sign(swapped[:, col], base[:, col])

    def test_indices_follow_selection(self):
        selection = Selection(np.array([4, 9, 11]), np.array([[0.0, 0.0], [1.0, 1.0], [2.0, 0.0]]))
        assert project(selection).indices.tolist() == [4, 9, 11]


class TestDegenerateInput:
    def test_single_feature_column(self):
        result = project(_selection([[1.0], [2.0], [4.0]]))
        assert result.points.shape == (3, 2)
        np.testing.assert_allclose(result.points[:, 1], 0.0)
        assert _match_up_to_sign(result.points[:, 0], np.array([-4 / 3, -1 / 3, 5 / 3]))

    def test_identical_points(self):
        result = project(_selection([[3.0, 3.0], [3.0, 3.0], [3.0, 3.0]]))
        np.testing.assert_allclose(result.points, 0.0)

    def test_tiny_spread_is_not_collapsed(self):
        points = np.array([[0.0, 0.0], [1.0, 2.0], [3.0, 1.0], [2.0, 4.0]])

        tiny = project(_selection(points * 1e-9))
        unit = project(_selection(points))

        assert np.abs(tiny.points).max() > 0
        assert tiny.explained_variance_ratio.sum() == pytest.approx(1.0)
        for col in range(2):
            assert _match_up_to_sign(tiny.points[:, col] * 1e9, unit.points[:, col], atol=1e-6)

    def test_two_points(self):
        result = project(_selection([[0.0, 0.0], [2.0, 0.0]]))
        assert _match_up_to_sign(result.points[:, 0], np.array([-1.0, 1.0]))
        assert np.all(np.isfinite(result.points))

    def test_result_is_read_only(self):
        result = project(_selection([[0.0, 0.0], [2.0, 1.0], [3.0, 5.0]]))
        with pytest.raises(ValueError):
            result.points[0, 0] = 1.0
