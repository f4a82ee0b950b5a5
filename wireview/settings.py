"""Viewer configuration."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from pathlib import Path
from typing import Tuple

from .world import Point3, Pose

ColorRGB = Tuple[int, int, int]

DATA_DIR = Path(__file__).parent / "data"
DEFAULT_MESH = DATA_DIR / "diamond.obj"


@dataclass(frozen=True)
class ProjectionSettings:
    """透視投影のパラメータ。fovは垂直画角（ラジアン）。"""

    fov: float = math.pi / 4.0
    near: float = 1.0
    far: float = 10000.0

    def __post_init__(self) -> None:
        if not 0.0 < self.fov < math.pi:
            raise ValueError("fovは(0, π)の範囲でなければならない")
        if self.near <= 0.0:
            raise ValueError("nearは正でなければならない")
        if self.far <= self.near:
            raise ValueError("farはnearより大きくなければならない")


@dataclass(frozen=True)
class ViewerSettings:
    mesh_path: Path = DEFAULT_MESH
    width: int = 1920
    height: int = 1080
    window_title: str = "wireview"
    target_fps: int = 60
    object_pose: Pose = field(default_factory=lambda: Pose(Point3(0.0, 0.0, 100.0)))
    object_scale: float = 1.0
    camera_pose: Pose = field(default_factory=Pose)
    projection: ProjectionSettings = field(default_factory=ProjectionSettings)
    move_speed: float = 1.0
    turn_speed: float = 1.0
    mouse_sensitivity: float = 1.0
    line_color: ColorRGB = (0, 0, 255)
    line_width: int = 1
    background_color: ColorRGB = (255, 255, 255)
    show_debug: bool = True
    grab_mouse: bool = True

    def __post_init__(self) -> None:
        if self.width <= 0 or self.height <= 0:
            raise ValueError("widthとheightは正の整数でなければならない")
        if self.target_fps <= 0:
            raise ValueError("target_fpsは正の整数でなければならない")
        if self.object_scale == 0.0:
            raise ValueError("object_scaleに0は指定できない")
        if self.line_width < 1:
            raise ValueError("line_widthは1以上でなければならない")


def parse_size(text: str) -> Tuple[int, int]:
    """``1920x1080`` 形式の文字列を (幅, 高さ) に変換する。"""

    try:
        w_text, h_text = text.lower().split("x", 1)
        width, height = int(w_text), int(h_text)
    except ValueError:
        raise ValueError(f"invalid size {text!r}, expected WIDTHxHEIGHT") from None
    if width <= 0 or height <= 0:
        raise ValueError(f"invalid size {text!r}, both dimensions must be positive")
    return width, height


__all__ = ["ColorRGB", "ProjectionSettings", "ViewerSettings", "parse_size"]
