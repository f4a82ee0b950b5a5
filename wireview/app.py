from __future__ import annotations

import argparse
import logging
import math
import sys
from pathlib import Path
from typing import List, Optional, Sequence, Type

import pygame

from .camera import Camera
from .engine import Engine, EngineConfig, Scene
from .frame import FrameLoop
from .input import InputState
from .mesh_loader import MeshLoaderError, load_mesh
from .projector import Projector
from .render import RenderContext, debug_lines, draw_debug, draw_line
from .settings import ProjectionSettings, ViewerSettings, parse_size
from .viewport import Viewport
from .world import Mesh, Point3, Pose, Segment, Vector3

logger = logging.getLogger(__name__)


class WireframeScene(Scene):
    """メッシュのワイヤーフレームを表示し、カメラを入力で動かすシーン。"""

    def __init__(self, engine: Engine, mesh: Mesh, settings: ViewerSettings) -> None:
        super().__init__(engine)
        self.mesh = mesh
        self.settings = settings
        self.viewport = Viewport.of(settings.width, settings.height)
        self.camera = Camera(settings.camera_pose)
        self.projector = Projector(
            projection=settings.projection,
            object_pose=settings.object_pose,
            object_scale=settings.object_scale,
        )
        self.input = InputState(
            move_speed=settings.move_speed,
            turn_speed=settings.turn_speed,
            mouse_sensitivity=settings.mouse_sensitivity,
        )
        self.ctx: Optional[RenderContext] = None
        self.frame: Optional[FrameLoop] = None
        self.segments: List[Segment] = []

    def load(self) -> None:
        self.ctx = RenderContext(
            screen=self.engine.screen,
            line_color=self.settings.line_color,
            line_width=self.settings.line_width,
            text_color=self.settings.line_color,
        )
        ctx = self.ctx
        self.frame = FrameLoop(
            self.mesh,
            self.camera,
            self.projector,
            draw_line=lambda p0, p1: draw_line(ctx, p0, p1),
        )
        if self.settings.grab_mouse:
            pygame.event.set_grab(True)
            pygame.mouse.set_visible(False)

    def handle_event(self, event: pygame.event.Event) -> None:
        if event.type == pygame.VIDEORESIZE:
            self._resize(event.w, event.h)
            return
        if self._lost_focus(event):
            # フォーカスを失うとKEYUPが届かないため押下状態を解除する
            self.input.release_all()
            return
        self.input.handle_event(event)
        if self.input.quit_requested:
            self.engine.stop()

    @staticmethod
    def _lost_focus(event: pygame.event.Event) -> bool:
        if event.type == pygame.WINDOWFOCUSLOST:
            return True
        if event.type == pygame.ACTIVEEVENT:
            return bool(getattr(event, "state", 0) & 2) and not getattr(event, "gain", 1)
        return False

    def _resize(self, width: int, height: int) -> None:
        if width <= 0 or height <= 0:
            return
        self.viewport = Viewport.of(width, height)
        screen = self.engine.resize(width, height)
        if self.ctx is not None:
            self.ctx.screen = screen
        logger.debug("viewport resized to %dx%d", width, height)

    def update(self) -> None:
        if self.frame is None:
            raise RuntimeError("シーンが初期化されていない")
        self.frame.step(self.input.take())

    def render(self) -> None:
        if self.ctx is None or self.frame is None:
            raise RuntimeError("シーンが初期化されていない")
        self.ctx.screen.fill(self.settings.background_color)
        self.segments = self.frame.draw(self.viewport)
        if self.settings.show_debug:
            draw_debug(
                self.ctx,
                debug_lines(
                    self.camera,
                    self.input.cursor,
                    self.engine.fps,
                    self.mesh,
                    len(self.segments),
                ),
            )

    def unload(self) -> None:
        if self.settings.grab_mouse:
            pygame.event.set_grab(False)
            pygame.mouse.set_visible(True)
        self.ctx = None
        self.frame = None
        self.segments = []


class ViewerApplication:
    """設定からメッシュ・エンジン・シーンを組み立てて起動する。"""

    scene_class: Type[WireframeScene] = WireframeScene

    def __init__(self, settings: ViewerSettings, mesh: Optional[Mesh] = None) -> None:
        self.settings = settings
        self.mesh = mesh if mesh is not None else load_mesh(settings.mesh_path)
        self.config = self.create_config()
        self.engine = Engine(self.config)
        self.scene = self.scene_class(self.engine, self.mesh, settings)

    def create_config(self) -> EngineConfig:
        s = self.settings
        return EngineConfig(
            width=s.width,
            height=s.height,
            window_title=f"{s.window_title} - {s.mesh_path.name}",
            target_fps=s.target_fps,
        )

    def run(self) -> None:
        self.engine.set_scene(self.scene)
        self.engine.run()


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="wireview",
        description="Interactive 3D wireframe viewer. Arrow keys walk and turn, "
        "the mouse looks around, Escape quits.",
    )
    parser.add_argument("mesh", type=Path, nargs="?", default=ViewerSettings.mesh_path,
                        help="mesh file with 'v x y z' and 'f i j k' lines")
    parser.add_argument("--size", default="1920x1080", help="initial window size, WIDTHxHEIGHT")
    parser.add_argument("--fov", type=float, default=45.0, help="vertical field of view in degrees")
    parser.add_argument("--near", type=float, default=1.0, help="near clip plane distance")
    parser.add_argument("--far", type=float, default=10000.0, help="far clip plane distance")
    parser.add_argument("--object-position", type=float, nargs=3, metavar=("X", "Y", "Z"),
                        default=(0.0, 0.0, 100.0), help="world position of the mesh")
    parser.add_argument("--object-scale", type=float, default=1.0, help="uniform mesh scale")
    parser.add_argument("--camera-position", type=float, nargs=3, metavar=("X", "Y", "Z"),
                        default=(0.0, 0.0, 0.0), help="initial camera position")
    parser.add_argument("--camera-orientation", type=float, nargs=3, metavar=("PITCH", "YAW", "ROLL"),
                        default=(0.0, 0.0, 0.0), help="initial camera angles in degrees")
    parser.add_argument("--move-speed", type=float, default=1.0, help="units per frame while walking")
    parser.add_argument("--turn-speed", type=float, default=1.0, help="degrees per frame while turning")
    parser.add_argument("--mouse-sensitivity", type=float, default=1.0, help="degrees per pixel of pointer motion")
    parser.add_argument("--no-debug", action="store_true", help="hide the text overlay")
    parser.add_argument("--no-grab", action="store_true", help="do not capture the mouse pointer")
    parser.add_argument("--log-level", default="INFO",
                        choices=["DEBUG", "INFO", "WARNING", "ERROR"], help="logging verbosity")
    return parser


def settings_from_args(args: argparse.Namespace) -> ViewerSettings:
    width, height = parse_size(args.size)
    return ViewerSettings(
        mesh_path=args.mesh,
        width=width,
        height=height,
        object_pose=Pose(Point3(*args.object_position)),
        object_scale=args.object_scale,
        camera_pose=Pose(Point3(*args.camera_position), Vector3(*args.camera_orientation)),
        projection=ProjectionSettings(
            fov=math.radians(args.fov),
            near=args.near,
            far=args.far,
        ),
        move_speed=args.move_speed,
        turn_speed=args.turn_speed,
        mouse_sensitivity=args.mouse_sensitivity,
        show_debug=not args.no_debug,
        grab_mouse=not args.no_grab,
    )


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    try:
        settings = settings_from_args(args)
        app = ViewerApplication(settings)
    except MeshLoaderError as exc:
        logger.error("cannot load mesh: %s", exc)
        return 1
    except ValueError as exc:
        logger.error("invalid configuration: %s", exc)
        return 1
    app.run()
    return 0


if __name__ == "__main__":
    sys.exit(main())
