"""Walk-style camera driven by per-frame input deltas."""

from __future__ import annotations

import math
from dataclasses import dataclass

import numpy as np

from .transforms import camera_from_world
from .world import ORIGIN, NO_ROTATION, Point3, Pose, Vector3


@dataclass(frozen=True)
class CameraInput:
    """1フレーム分のカメラ操作量。

    forward: 前後移動量（正で視線方向へ前進）
    turn: 旋回量（度、正で左旋回）
    look_x, look_y: ポインタ移動によるヨー／ピッチ差分（度）
    """

    forward: float = 0.0
    turn: float = 0.0
    look_x: float = 0.0
    look_y: float = 0.0


NO_INPUT = CameraInput()


class Camera:
    """ワールド空間の視点位置と姿勢を保持する。"""

    def __init__(self, pose: Pose | None = None) -> None:
        if pose is None:
            pose = Pose(ORIGIN, NO_ROTATION)
        self.position: Point3 = pose.position
        self.orientation: Vector3 = pose.orientation

    def __repr__(self) -> str:
        return f"Camera(position={tuple(self.position)}, orientation={tuple(self.orientation)})"

    @property
    def pose(self) -> Pose:
        return Pose(self.position, self.orientation)

    def apply_input(self, delta: CameraInput) -> None:
        """入力差分を現在の姿勢に積分する。移動は常に現在のヨー基準。"""

        pitch, yaw, roll = self.orientation
        pitch += delta.look_y
        yaw += delta.look_x
        yaw -= delta.turn
        x, y, z = self.position
        yaw_rad = math.radians(yaw)
        x += delta.forward * math.sin(yaw_rad)
        z -= delta.forward * math.cos(yaw_rad)
        self.orientation = Vector3(pitch, yaw, roll)
        self.position = Point3(x, y, z)

    def view_matrix(self) -> np.ndarray:
        return camera_from_world(self.pose)


__all__ = ["Camera", "CameraInput", "NO_INPUT"]
