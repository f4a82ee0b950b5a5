"""Object space to normalized device coordinates."""

from __future__ import annotations

from dataclasses import dataclass, field

import numpy as np

from .camera import Camera
from .settings import ProjectionSettings
from .transforms import perspective, world_from_object
from .viewport import Viewport
from .world import Mesh, Pose

# |w| が near のこの割合未満の頂点は視点平面上とみなし、座標をNaNにする
DEGENERATE_W_FRACTION: float = 1e-3


@dataclass
class Projector:
    """モデル・ビュー・投影行列を合成してメッシュの全頂点を変換する。

    行列はフレームごとに作り直し、キャッシュしない。
    """

    projection: ProjectionSettings = field(default_factory=ProjectionSettings)
    object_pose: Pose = field(default_factory=Pose)
    object_scale: float = 1.0

    def world_from_object(self) -> np.ndarray:
        return world_from_object(self.object_pose, self.object_scale)

    def clip_from_camera(self, viewport: Viewport) -> np.ndarray:
        p = self.projection
        return perspective(p.fov, viewport.aspect, p.near, p.far)

    def combined(self, camera: Camera, viewport: Viewport) -> np.ndarray:
        return self.clip_from_camera(viewport) @ camera.view_matrix() @ self.world_from_object()

    def degenerate_w(self) -> float:
        return self.projection.near * DEGENERATE_W_FRACTION

    def project(self, mesh: Mesh, camera: Camera, viewport: Viewport) -> np.ndarray:
        """各頂点を正規化デバイス座標 (N, 3) に変換する。

        同次座標の |w| が near に比べて極端に小さい頂点は行全体がNaNになり、以降の
        クリップ判定では常にクリップ扱いとなる。
        """

        matrix = self.combined(camera, viewport)
        count = mesh.vertex_count
        homogeneous = np.empty((count, 4), dtype=np.float64)
        homogeneous[:, :3] = mesh.points
        homogeneous[:, 3] = 1.0
        clip = homogeneous @ matrix.T
        w = clip[:, 3]
        degenerate = np.abs(w) < self.degenerate_w()
        safe_w = np.where(degenerate, 1.0, w)
        ndc = clip[:, :3] / safe_w[:, None]
        ndc[degenerate] = np.nan
        return ndc


__all__ = ["DEGENERATE_W_FRACTION", "Projector"]
