from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Sequence, Tuple

import pygame

from .camera import Camera
from .world import Mesh, ScreenPoint

ColorRGB = Tuple[int, int, int]


@dataclass
class RenderContext:
    screen: pygame.Surface
    line_color: ColorRGB = (0, 0, 255)
    line_width: int = 1
    text_color: ColorRGB = (0, 0, 255)
    font: Optional[pygame.font.Font] = None


def draw_line(ctx: RenderContext, p0: ScreenPoint, p1: ScreenPoint) -> None:
    pygame.draw.line(ctx.screen, ctx.line_color, p0, p1, ctx.line_width)


def debug_lines(
    camera: Camera,
    cursor: Sequence[float],
    fps: float,
    mesh: Mesh,
    segment_count: int,
) -> list[str]:
    px, py, pz = camera.position
    ox, oy, oz = camera.orientation
    return [
        f"position: ({px:.2f}, {py:.2f}, {pz:.2f}) orientation: ({ox:.1f}, {oy:.1f}, {oz:.1f})",
        f"mouse: {cursor[0]:.0f} {cursor[1]:.0f}",
        f"fps: {int(fps)} V:{mesh.vertex_count} F:{mesh.face_count} lines:{segment_count}",
    ]


def draw_debug(ctx: RenderContext, lines: Sequence[str]) -> None:
    # フォントはpygame初期化後に一度だけ生成する
    if ctx.font is None:
        ctx.font = pygame.font.SysFont("consolas", 14)
    y = 4
    for text in lines:
        surface = ctx.font.render(text, True, ctx.text_color)
        ctx.screen.blit(surface, (6, y))
        y += surface.get_height() + 2


__all__ = [
    "RenderContext",
    "debug_lines",
    "draw_debug",
    "draw_line",
]
