import numpy as np
import pytest

from wireview.viewport import Viewport, face_segments, is_clipped, to_screen
from wireview.world import ScreenPoint


def test_viewport_rejects_empty_sizes():
    with pytest.raises(ValueError):
        Viewport.of(0, 10)
    with pytest.raises(ValueError):
        Viewport.of(10, -1)


def test_corners_and_centre():
    vp = Viewport.of(800, 600)
    assert to_screen((-1.0, -1.0, 0.0), vp)[0] == ScreenPoint(0.0, 0.0)
    assert to_screen((1.0, 1.0, 0.0), vp)[0] == ScreenPoint(800.0, 600.0)
    assert to_screen((0.0, 0.0, 0.0), vp)[0] == ScreenPoint(400.0, 300.0)


def test_mapping_scales_linearly_with_viewport_size():
    point = (0.3, -0.2, 0.5)
    small, _ = to_screen(point, Viewport.of(800, 600))
    large, _ = to_screen(point, Viewport.of(1920, 1080))
    assert small.x / 800 == pytest.approx(large.x / 1920)
    assert small.y / 600 == pytest.approx(large.y / 1080)
    assert small.x / 800 == pytest.approx(0.65)


@pytest.mark.parametrize(
    "depth, clipped",
    [(-3.0, False), (0.999, False), (1.0, True), (5.0, True), (float("nan"), True)],
)
def test_clip_threshold(depth, clipped):
    assert is_clipped(depth) is clipped


def test_fully_clipped_face_produces_no_segments():
    points = np.array([[0.0, 0.0, 1.5], [0.5, 0.0, 1.0], [0.0, 0.5, 2.0]])
    assert face_segments(points, [(0, 1, 2)], Viewport.of(100, 100)) == []


def test_partially_clipped_face_draws_all_three_edges():
    points = np.array([[0.0, 0.0, 0.5], [0.5, 0.0, 1.5], [0.0, 0.5, 2.0]])
    vp = Viewport.of(100, 100)
    segments = face_segments(points, [(0, 1, 2)], vp)
    p1 = ScreenPoint(50.0, 50.0)
    p2 = ScreenPoint(75.0, 50.0)
    p3 = ScreenPoint(50.0, 75.0)
    assert segments == [(p1, p2), (p2, p3), (p3, p1)]


def test_only_first_three_indices_are_used():
    points = np.array([[0.0, 0.0, 0.0], [0.5, 0.0, 0.0], [0.0, 0.5, 0.0], [0.9, 0.9, 0.0]])
    segments = face_segments(points, [(0, 1, 2, 3)], Viewport.of(100, 100))
    assert len(segments) == 3


def test_face_with_degenerate_vertex_is_skipped_and_reported():
    points = np.array([[np.nan, np.nan, np.nan], [0.5, 0.0, 0.0], [0.0, 0.5, 0.0]])
    reported = []
    segments = face_segments(
        points,
        [(0, 1, 2), (1, 2, 1)],
        Viewport.of(100, 100),
        on_degenerate=lambda face, vertices: reported.append((face, vertices)),
    )
    assert len(segments) == 3
    assert reported == [((0, 1, 2), [0])]
