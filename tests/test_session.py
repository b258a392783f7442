"""End-to-end tests of the view session: lasso, zoom, selection, projection."""

import numpy as np
import pytest

from tsne_explorer.io import Dataset
from tsne_explorer.session import ViewSession
from tsne_explorer.visualization.colors import CATEGORY10, SELECTED_COLOR
from tsne_explorer.visualization.commands import CircleCommand, PathCommand
from tsne_explorer.zoom import IDENTITY, ZoomState

# Screen positions on the default 800x600 plot:
#   [0,0] -> (40,570)  [1,1] -> (114,515)  [2,2] -> (188,460)  [10,10] -> (780,20)
EMBEDDINGS = [[0, 0], [1, 1], [2, 2], [10, 10]]
LABELS = [0, 0, 1, 1]
AROUND_FIRST_THREE = [(20, 400), (250, 400), (250, 600), (20, 600)]


@pytest.fixture
def session():
    s = ViewSession()
    s.load(Dataset(EMBEDDINGS, LABELS))
    return s


def _draw(session, vertices):
    (x0, y0), *rest = vertices
    session.pointer_down(x0, y0)
    for x, y in rest:
        session.pointer_move(x, y)
    return session.pointer_up()


class TestEndToEnd:
    def test_lasso_selects_and_projects(self, session):
        _draw(session, AROUND_FIRST_THREE)

        assert session.selection.index_set() == {0, 1, 2}
        np.testing.assert_array_equal(session.selection.points, [[0, 0], [1, 1], [2, 2]])

        projection = session.projection
        assert projection is not None
        assert projection.points.shape == (3, 2)
        assert np.all(np.isfinite(projection.points))
        np.testing.assert_allclose(projection.points.mean(axis=0), [0.0, 0.0], atol=1e-9)

    def test_lasso_cleared_after_pointer_up(self, session):
        _draw(session, AROUND_FIRST_THREE)
        assert session.lasso.path == ()
        assert not any(isinstance(c, PathCommand) for c in session.primary_commands())

    def test_selected_points_recoloured(self, session):
        _draw(session, AROUND_FIRST_THREE)
        fills = [c.fill for c in session.primary_commands() if isinstance(c, CircleCommand)]
        assert fills == [SELECTED_COLOR, SELECTED_COLOR, SELECTED_COLOR, CATEGORY10[1]]

    def test_projection_commands(self, session):
        assert session.projection_commands() == []
        _draw(session, AROUND_FIRST_THREE)
        circles = [c for c in session.projection_commands() if isinstance(c, CircleCommand)]
        assert len(circles) == 3

    def test_apply_lasso_replays_gesture(self, session):
        selection = session.apply_lasso(AROUND_FIRST_THREE)
        assert selection.index_set() == {0, 1, 2}
        assert session.lasso.path == ()

    def test_live_trace_rendered_while_dragging(self, session):
        session.pointer_down(20, 400)
        session.pointer_move(250, 400)
        paths = [c for c in session.primary_commands() if isinstance(c, PathCommand)]
        assert paths[0].d == "M 20,400 L 250,400"


class TestSmallSelections:
    def test_single_point_keeps_previous_projection(self, session):
        _draw(session, AROUND_FIRST_THREE)
        previous = session.projection

        _draw(session, [(30, 560), (50, 560), (50, 580), (30, 580)])

        assert session.selection.index_set() == {0}
        assert session.projection is previous

    def test_empty_lasso_gives_empty_selection(self, session):
        _draw(session, [(500, 100)])
        assert len(session.selection) == 0
        assert session.projection is None


class TestZoomInteraction:
    def test_selection_uses_zoomed_positions(self, session):
        session.zoom_by(2, anchor=(40, 570))
        assert session.zoom.state == ZoomState(2.0, -40.0, -570.0)

        _draw(session, AROUND_FIRST_THREE)

        assert session.selection.index_set() == {0, 1}

    def test_zoom_ignored_while_dragging(self, session):
        session.pointer_down(20, 400)
        session.zoom_by(2)
        session.wheel(-500)
        session.pan_by(10, 10)
        session.apply_viewport(200, 600, 450, 150)
        assert session.zoom.state == IDENTITY

        session.pointer_up()
        assert session.zoom_by(2).k == 2.0

    def test_rezoom_does_not_touch_results(self, session):
        _draw(session, AROUND_FIRST_THREE)
        selection = session.selection
        projection = session.projection
        points_before = projection.points.copy()

        session.zoom_by(3)
        session.pan_by(-50, 20)
        session.reset_zoom()

        assert session.selection is selection
        assert session.selection.index_set() == {0, 1, 2}
        assert session.projection is projection
        np.testing.assert_array_equal(projection.points, points_before)

    def test_zoom_moves_rendered_points(self, session):
        before = [c for c in session.primary_commands() if isinstance(c, CircleCommand)]
        session.zoom_by(2, anchor=(40, 570))
        after = [c for c in session.primary_commands() if isinstance(c, CircleCommand)]
        assert (before[1].cx, before[1].cy) == pytest.approx((114, 515))
        assert (after[1].cx, after[1].cy) == pytest.approx((188, 460))


class TestEmptySession:
    def test_not_ready_without_dataset(self):
        session = ViewSession()
        assert not session.is_ready
        assert session.primary_commands() == []
        session.pointer_down(1, 1)
        assert not session.lasso.is_dragging
        assert len(session.apply_lasso(AROUND_FIRST_THREE)) == 0

    def test_failed_load_clears_state(self, session):
        _draw(session, AROUND_FIRST_THREE)
        session.load(None)
        assert not session.is_ready
        assert len(session.selection) == 0
        assert session.projection is None
        with pytest.raises(RuntimeError):
            session.effective_scales()

    def test_failed_load_during_drag(self, session):
        session.pointer_down(20, 400)
        session.pointer_move(250, 400)
        session.load(None)
        assert not session.lasso.is_dragging
        assert session.pointer_up() is None
        assert len(session.selection) == 0

    def test_reload_during_drag_starts_clean(self, session):
        session.pointer_down(20, 400)
        session.load(Dataset(EMBEDDINGS, LABELS))
        assert not session.lasso.is_dragging
        assert session.lasso.path == ()
