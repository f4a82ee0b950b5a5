"""4x4 homogeneous transform builders.

All matrices act on column vectors, so ``a @ b`` applies ``b`` first.
Angles passed to the rotation builders are in degrees.
"""

from __future__ import annotations

import math
from typing import Sequence

import numpy as np

from .world import Pose


def identity() -> np.ndarray:
    return np.eye(4, dtype=np.float64)


def scale(factor: float) -> np.ndarray:
    m = identity()
    m[0, 0] = factor
    m[1, 1] = factor
    m[2, 2] = factor
    return m


def translate(offset: Sequence[float]) -> np.ndarray:
    m = identity()
    m[0, 3] = offset[0]
    m[1, 3] = offset[1]
    m[2, 3] = offset[2]
    return m


def rotate_x(degrees: float) -> np.ndarray:
    rad = math.radians(degrees)
    c, s = math.cos(rad), math.sin(rad)
    m = identity()
    m[1, 1] = c
    m[1, 2] = s
    m[2, 1] = -s
    m[2, 2] = c
    return m


def rotate_y(degrees: float) -> np.ndarray:
    rad = math.radians(degrees)
    c, s = math.cos(rad), math.sin(rad)
    m = identity()
    m[0, 0] = c
    m[0, 2] = s
    m[2, 0] = -s
    m[2, 2] = c
    return m


def rotate_z(degrees: float) -> np.ndarray:
    rad = math.radians(degrees)
    c, s = math.cos(rad), math.sin(rad)
    m = identity()
    m[0, 0] = c
    m[0, 1] = s
    m[1, 0] = -s
    m[1, 1] = c
    return m


def rotate(angles: Sequence[float]) -> np.ndarray:
    """X→Y→Zの各回転を合成する（行列積としては Rx @ Ry @ Rz）。"""

    return rotate_x(angles[0]) @ rotate_y(angles[1]) @ rotate_z(angles[2])


def perspective(fov: float, aspect: float, near: float, far: float) -> np.ndarray:
    """垂直画角（ラジアン）から透視投影行列を生成する。

    カメラは -Z 方向を向き、正規化後の z が 1.0 以上になる点は
    カメラの背後か遠クリップ面より奥にある。
    """

    if not 0.0 < fov < math.pi:
        raise ValueError(f"fov must be in (0, pi), got {fov}")
    if aspect <= 0.0:
        raise ValueError(f"aspect must be positive, got {aspect}")
    if near <= 0.0:
        raise ValueError(f"near must be positive, got {near}")
    if far <= near:
        raise ValueError(f"far ({far}) must be greater than near ({near})")
    e = 1.0 / math.tan(fov / 2.0)
    m = np.zeros((4, 4), dtype=np.float64)
    m[0, 0] = e / aspect
    m[1, 1] = e
    m[2, 2] = (far + near) / (near - far)
    m[2, 3] = (2.0 * far * near) / (near - far)
    m[3, 2] = -1.0
    return m


def world_from_object(pose: Pose, factor: float = 1.0) -> np.ndarray:
    return translate(pose.position) @ scale(factor) @ rotate(pose.orientation)


def camera_from_world(pose: Pose) -> np.ndarray:
    """ワールドをカメラ位置まで平行移動してから、カメラの姿勢で回転する。"""

    return rotate(pose.orientation) @ translate([-c for c in pose.position])


__all__ = [
    "identity",
    "scale",
    "translate",
    "rotate_x",
    "rotate_y",
    "rotate_z",
    "rotate",
    "perspective",
    "world_from_object",
    "camera_from_world",
]
