"""Viewport mapping and the per-face clip test."""

from __future__ import annotations

from typing import Callable, List, NamedTuple, Optional, Sequence, Tuple

import numpy as np

from .world import Face, ScreenPoint, Segment, finite_rows

CLIP_DEPTH: float = 1.0


class Viewport(NamedTuple):
    width: float
    height: float

    @classmethod
    def of(cls, width: float, height: float) -> Viewport:
        if width <= 0 or height <= 0:
            raise ValueError(f"viewport must have a positive size, got {width}x{height}")
        return cls(float(width), float(height))

    @property
    def aspect(self) -> float:
        return self.width / self.height


def is_clipped(depth: float) -> bool:
    # NaN（退化頂点）もクリップ扱い
    return not depth < CLIP_DEPTH


def to_screen(point: Sequence[float], viewport: Viewport) -> Tuple[ScreenPoint, bool]:
    """正規化座標をピクセル座標へ写像し、クリップ状態を併せて返す。"""

    screen = ScreenPoint(
        float((point[0] + 1.0) / 2.0 * viewport.width),
        float((point[1] + 1.0) / 2.0 * viewport.height),
    )
    return screen, is_clipped(point[2])


def face_segments(
    points: np.ndarray,
    faces: Sequence[Face],
    viewport: Viewport,
    on_degenerate: Optional[Callable[[Face, List[int]], None]] = None,
) -> List[Segment]:
    """各三角形の3辺を画面上の線分として返す。

    3頂点すべてがクリップされた面だけを省き、それ以外は一部が
    クリップされていても3辺とも描く。退化頂点を含む面は省く。
    """

    finite = finite_rows(points)
    segments: List[Segment] = []
    for face in faces:
        a, b, c = face[0], face[1], face[2]
        if not (finite[a] and finite[b] and finite[c]):
            if on_degenerate is not None:
                on_degenerate(face, [i for i in (a, b, c) if not finite[i]])
            continue
        p1, p1_clipped = to_screen(points[a], viewport)
        p2, p2_clipped = to_screen(points[b], viewport)
        p3, p3_clipped = to_screen(points[c], viewport)
        if p1_clipped and p2_clipped and p3_clipped:
            continue
        segments.append((p1, p2))
        segments.append((p2, p3))
        segments.append((p3, p1))
    return segments


__all__ = ["CLIP_DEPTH", "Viewport", "face_segments", "is_clipped", "to_screen"]
