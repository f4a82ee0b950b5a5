"""Per-frame orchestration of the projection pipeline."""

from __future__ import annotations

import logging
from typing import Callable, List, Optional, Set

from .camera import Camera, CameraInput
from .projector import Projector
from .viewport import Viewport, face_segments
from .world import Face, Mesh, ScreenPoint, Segment

logger = logging.getLogger(__name__)

DrawLine = Callable[[ScreenPoint, ScreenPoint], None]


class FrameLoop:
    """入力適用→投影→クリップ判定→線分描画を1フレームずつ順に実行する。

    ``step`` と ``draw`` はシーンの update/render から別々に呼べる。
    ``tick`` は両方を続けて実行する。
    """

    def __init__(
        self,
        mesh: Mesh,
        camera: Camera,
        projector: Projector,
        draw_line: Optional[DrawLine] = None,
    ) -> None:
        self.mesh = mesh
        self.camera = camera
        self.projector = projector
        self.draw_line = draw_line
        self._reported: Set[int] = set()

    def step(self, delta: CameraInput) -> None:
        self.camera.apply_input(delta)

    def draw(self, viewport: Viewport) -> List[Segment]:
        """現在のカメラで投影し、描画した線分を返す。"""

        points = self.projector.project(self.mesh, self.camera, viewport)
        segments = face_segments(points, self.mesh.faces, viewport, self._report_degenerate)
        if self.draw_line is not None:
            for p0, p1 in segments:
                self.draw_line(p0, p1)
        return segments

    def tick(self, delta: CameraInput, viewport: Viewport) -> List[Segment]:
        self.step(delta)
        return self.draw(viewport)

    def _report_degenerate(self, face: Face, vertices: List[int]) -> None:
        for index in vertices:
            if index in self._reported:
                continue
            self._reported.add(index)
            logger.warning(
                "vertex %d lies on the eye plane; skipping face %s",
                index + 1,
                tuple(i + 1 for i in face),
            )


__all__ = ["DrawLine", "FrameLoop"]
