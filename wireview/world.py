"""Geometric value types and the immutable mesh structure."""

from __future__ import annotations

from dataclasses import dataclass
from typing import NamedTuple, Sequence, Tuple

import numpy as np


class Point3(NamedTuple):
    x: float
    y: float
    z: float


class Vector3(NamedTuple):
    """方向や差分を表す3成分ベクトル。姿勢では各軸の回転角（度）を保持する。"""

    x: float
    y: float
    z: float


class ScreenPoint(NamedTuple):
    x: float
    y: float


Face = Tuple[int, ...]
Segment = Tuple[ScreenPoint, ScreenPoint]

ORIGIN = Point3(0.0, 0.0, 0.0)
NO_ROTATION = Vector3(0.0, 0.0, 0.0)


@dataclass(frozen=True)
class Pose:
    """位置と姿勢（X→Y→Zの順に適用するオイラー角）をまとめた値型。"""

    position: Point3 = ORIGIN
    orientation: Vector3 = NO_ROTATION

    def __post_init__(self) -> None:
        object.__setattr__(self, "position", Point3(*(float(v) for v in self.position)))
        object.__setattr__(self, "orientation", Vector3(*(float(v) for v in self.orientation)))


@dataclass(frozen=True, eq=False)
class Mesh:
    """読み込み後に変更されない頂点と面のデータ。

    ``points`` は (N, 3) の読み取り専用配列、``faces`` は0始まりの
    インデックス列。インデックスの範囲はロード時に検証済みである。
    """

    points: np.ndarray
    faces: Tuple[Face, ...]
    name: str = ""

    def __post_init__(self) -> None:
        points = np.array(self.points, dtype=np.float64).reshape(-1, 3)
        points.setflags(write=False)
        object.__setattr__(self, "points", points)
        object.__setattr__(self, "faces", tuple(tuple(int(i) for i in face) for face in self.faces))

    @classmethod
    def from_points(cls, points: Sequence[Sequence[float]], faces: Sequence[Sequence[int]], name: str = "") -> Mesh:
        return cls(points=np.asarray(points, dtype=np.float64), faces=tuple(tuple(f) for f in faces), name=name)

    @property
    def vertex_count(self) -> int:
        return int(self.points.shape[0])

    @property
    def face_count(self) -> int:
        return len(self.faces)


def finite_rows(points: np.ndarray) -> np.ndarray:
    """各行の全成分が有限かどうかを (N,) の真偽配列で返す。"""

    return np.isfinite(points).all(axis=1)
