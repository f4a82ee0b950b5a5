"""pygame window ownership and the frame loop."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple

import pygame


@dataclass(slots=True)
class EngineConfig:
    """ウィンドウとフレームループの基本設定を保持する。"""

    width: int = 1920
    height: int = 1080
    window_title: str = "wireview"
    target_fps: int = 60
    resizable: bool = True

    def __post_init__(self) -> None:
        if self.width <= 0 or self.height <= 0:
            raise ValueError("widthとheightは正の整数でなければならない")
        if self.target_fps <= 0:
            raise ValueError("target_fpsは正の整数でなければならない")

    @property
    def size(self) -> Tuple[int, int]:
        return (self.width, self.height)

    @property
    def display_flags(self) -> int:
        return pygame.RESIZABLE if self.resizable else 0


class Scene:
    """エンジンが1フレームごとに呼び出すフック群。

    呼び出し順は load → (handle_event* → update → render)* → unload。
    カメラは1フレームに1回だけ積分するため、update は経過時間を受け取らない。
    """

    def __init__(self, engine: Engine) -> None:
        self.engine = engine

    def load(self) -> None:
        pass

    def handle_event(self, event: pygame.event.Event) -> None:
        pass

    def update(self) -> None:
        """溜まった入力を状態へ反映する。"""

    def render(self) -> None:
        """現在の状態を画面サーフェスへ描く。"""

    def unload(self) -> None:
        pass


class Engine:
    """ウィンドウを開き、イベント→update→render→flip を停止要求まで繰り返す。"""

    def __init__(self, config: EngineConfig) -> None:
        self.config = config
        self._scene: Optional[Scene] = None
        self._screen: Optional[pygame.Surface] = None
        self._running = False
        self._fps = 0.0
        self.frames = 0

    @property
    def screen(self) -> pygame.Surface:
        if self._screen is None:
            raise RuntimeError("画面サーフェスはまだ初期化されていない")
        return self._screen

    @property
    def fps(self) -> float:
        return self._fps

    def set_scene(self, scene: Scene) -> None:
        self._scene = scene

    def stop(self) -> None:
        self._running = False

    def resize(self, width: int, height: int) -> pygame.Surface:
        """ウィンドウサイズ変更後の画面サーフェスを取り直す。"""

        self._screen = pygame.display.set_mode((width, height), self.config.display_flags)
        return self._screen

    def run(self) -> None:
        scene = self._scene
        if scene is None:
            raise RuntimeError("シーンが設定されていない")
        pygame.init()
        try:
            clock = self._open_window()
            scene.load()
            self._running = True
            while self._running:
                clock.tick(self.config.target_fps)
                if not self._dispatch_events(scene):
                    break
                scene.update()
                scene.render()
                pygame.display.flip()
                self.frames += 1
                self._fps = float(clock.get_fps())
        finally:
            self._close(scene)

    def _open_window(self) -> pygame.time.Clock:
        self._screen = pygame.display.set_mode(self.config.size, self.config.display_flags)
        pygame.display.set_caption(self.config.window_title)
        return pygame.time.Clock()

    def _dispatch_events(self, scene: Scene) -> bool:
        """保留中のイベントをシーンへ渡す。停止要求が出たら False を返す。"""

        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                self.stop()
            else:
                scene.handle_event(event)
            if not self._running:
                return False
        return True

    def _close(self, scene: Scene) -> None:
        try:
            scene.unload()
        finally:
            pygame.quit()
            self._screen = None
            self._running = False
            self._fps = 0.0


__all__ = ["Engine", "EngineConfig", "Scene"]
