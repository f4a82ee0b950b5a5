from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple

import pygame

from .camera import CameraInput


@dataclass(frozen=True)
class InputBindings:
    forward: int = pygame.K_UP
    backward: int = pygame.K_DOWN
    left: int = pygame.K_LEFT
    right: int = pygame.K_RIGHT
    quit: Tuple[int, ...] = (pygame.K_ESCAPE,)


class InputState:
    """キー押下状態とポインタ移動量を保持し、1フレーム分の入力に変換する。

    押されている間は毎フレーム一定の差分を出し、離すと0に戻る。
    後から押された方向キーが優先される。
    """

    def __init__(
        self,
        bindings: InputBindings = InputBindings(),
        move_speed: float = 1.0,
        turn_speed: float = 1.0,
        mouse_sensitivity: float = 1.0,
    ) -> None:
        self.bindings = bindings
        self.move_speed = move_speed
        self.turn_speed = turn_speed
        self.mouse_sensitivity = mouse_sensitivity
        self.forward = 0.0
        self.turn = 0.0
        self.look_x = 0.0
        self.look_y = 0.0
        self.cursor: Tuple[float, float] = (0.0, 0.0)
        self.quit_requested = False

    def handle_event(self, event: pygame.event.Event) -> None:
        b = self.bindings
        if event.type == pygame.KEYDOWN:
            if event.key == b.forward:
                self.forward = self.move_speed
            elif event.key == b.backward:
                self.forward = -self.move_speed
            elif event.key == b.left:
                self.turn = self.turn_speed
            elif event.key == b.right:
                self.turn = -self.turn_speed
            elif event.key in b.quit:
                self.quit_requested = True
        elif event.type == pygame.KEYUP:
            if event.key in (b.forward, b.backward):
                self.forward = 0.0
            elif event.key in (b.left, b.right):
                self.turn = 0.0
        elif event.type == pygame.MOUSEMOTION:
            dx, dy = event.rel
            self.cursor = (float(dx), float(dy))
            self.look_x += dx * self.mouse_sensitivity
            self.look_y += dy * self.mouse_sensitivity

    def take(self) -> CameraInput:
        """現在の入力を取り出し、蓄積したポインタ移動量をリセットする。"""

        delta = CameraInput(
            forward=self.forward,
            turn=self.turn,
            look_x=self.look_x,
            look_y=self.look_y,
        )
        self.look_x = 0.0
        self.look_y = 0.0
        return delta

    def release_all(self) -> None:
        self.forward = 0.0
        self.turn = 0.0
        self.look_x = 0.0
        self.look_y = 0.0


__all__ = ["InputBindings", "InputState"]
