import math

import numpy as np
import pytest

from wireview.camera import Camera
from wireview.projector import DEGENERATE_W_FRACTION, Projector
from wireview.settings import ProjectionSettings
from wireview.transforms import perspective
from wireview.viewport import Viewport, is_clipped, to_screen
from wireview.world import Mesh, Point3, Pose, Vector3, finite_rows

VIEWPORT = Viewport.of(1000, 500)


def single_point_mesh(x, y, z):
    return Mesh.from_points([(x, y, z)], [])


def test_point_straight_ahead_lands_on_screen_centre():
    projector = Projector()
    points = projector.project(single_point_mesh(0.0, 0.0, -20.0), Camera(), VIEWPORT)
    screen, clipped = to_screen(points[0], VIEWPORT)
    assert screen.x == pytest.approx(500.0)
    assert screen.y == pytest.approx(250.0)
    assert not clipped


def test_off_axis_point_scales_with_focal_length_over_depth():
    projector = Projector(ProjectionSettings(fov=math.pi / 4))
    e = 1.0 / math.tan(math.pi / 8)
    d = 20.0
    points = projector.project(single_point_mesh(3.0, -2.0, -d), Camera(), VIEWPORT)
    assert points[0, 0] == pytest.approx(e / VIEWPORT.aspect * 3.0 / d)
    assert points[0, 1] == pytest.approx(e * -2.0 / d)


def test_object_pose_offsets_the_mesh():
    projector = Projector(object_pose=Pose(Point3(0.0, 0.0, -20.0)))
    points = projector.project(single_point_mesh(0.0, 0.0, 0.0), Camera(), VIEWPORT)
    np.testing.assert_allclose(points[0, :2], [0.0, 0.0], atol=1e-12)
    assert points[0, 2] < 1.0


def test_combined_matrix_order():
    projector = Projector(object_pose=Pose(Point3(1.0, 2.0, 3.0)), object_scale=2.0)
    camera = Camera(Pose(Point3(0.0, 0.0, 5.0), Vector3(0.0, 30.0, 0.0)))
    expected = (
        perspective(math.pi / 4, VIEWPORT.aspect, 1.0, 10000.0)
        @ camera.view_matrix()
        @ projector.world_from_object()
    )
    np.testing.assert_allclose(projector.combined(camera, VIEWPORT), expected)


def test_projection_is_pure_and_preserves_vertex_order():
    mesh = Mesh.from_points([(0, 0, -5), (1, 0, -5), (0, 1, -5), (2, 2, -10)], [(0, 1, 2)])
    before = mesh.points.copy()
    camera = Camera(Pose(Point3(0.5, 0.0, 1.0), Vector3(0.0, 10.0, 0.0)))
    pose = camera.pose
    projector = Projector()
    first = projector.project(mesh, camera, VIEWPORT)
    second = projector.project(mesh, camera, VIEWPORT)
    assert first.shape == (4, 3)
    np.testing.assert_array_equal(first, second)
    np.testing.assert_array_equal(mesh.points, before)
    assert camera.pose == pose
    for i, point in enumerate(mesh.points):
        single = projector.project(Mesh.from_points([point], []), camera, VIEWPORT)
        np.testing.assert_allclose(first[i], single[0])


def test_vertex_on_the_eye_plane_is_flagged_not_propagated():
    mesh = Mesh.from_points([(1.0, 0.0, 0.0), (0.0, 0.0, -5.0)], [])
    points = Projector().project(mesh, Camera(), VIEWPORT)
    assert np.isnan(points[0]).all()
    assert np.isfinite(points[1]).all()
    np.testing.assert_array_equal(finite_rows(points), [False, True])
    assert is_clipped(points[0, 2])


def test_vertex_just_in_front_of_the_eye_is_flagged():
    # 視点直前の頂点は有限でも巨大な画面座標になるため退化扱い
    mesh = Mesh.from_points([(1.0, 0.0, -0.0005), (1.0, 0.0, -0.01)], [])
    points = Projector().project(mesh, Camera(), VIEWPORT)
    np.testing.assert_array_equal(finite_rows(points), [False, True])


def test_degenerate_threshold_follows_the_near_plane():
    projector = Projector(ProjectionSettings(near=0.01))
    assert projector.degenerate_w() == pytest.approx(0.01 * DEGENERATE_W_FRACTION)
    points = projector.project(Mesh.from_points([(1.0, 0.0, -0.0005)], []), Camera(), VIEWPORT)
    assert finite_rows(points).all()


def test_clip_flag_flips_exactly_once_when_moving_behind_the_camera():
    depths = np.arange(-50.0, 50.5, 0.5)
    mesh = Mesh.from_points([(0.0, 0.0, z) for z in depths], [])
    points = Projector().project(mesh, Camera(), VIEWPORT)
    flags = [is_clipped(z) for z in points[:, 2]]
    assert flags[0] is False
    assert flags[-1] is True
    flips = sum(1 for a, b in zip(flags, flags[1:]) if a != b)
    assert flips == 1
    # 視点より後ろ（z >= 0）はすべてクリップ
    assert all(flag == (z >= 0.0) for flag, z in zip(flags, depths))


def test_points_beyond_the_far_plane_are_clipped():
    projector = Projector(ProjectionSettings(near=1.0, far=100.0))
    points = projector.project(single_point_mesh(0.0, 0.0, -150.0), Camera(), VIEWPORT)
    assert is_clipped(points[0, 2])
