from .app import ViewerApplication, WireframeScene, main
from .camera import Camera, CameraInput
from .engine import Engine, EngineConfig, Scene
from .frame import FrameLoop
from .input import InputBindings, InputState
from .mesh_loader import (
    MeshIntegrityError,
    MeshIOError,
    MeshLoaderError,
    MeshParseError,
    load_mesh,
)
from .projector import Projector
from .settings import ProjectionSettings, ViewerSettings
from .viewport import Viewport, face_segments, to_screen
from .world import Mesh, Point3, Pose, ScreenPoint, Vector3

__all__ = [
    "ViewerApplication",
    "WireframeScene",
    "main",
    "Camera",
    "CameraInput",
    "Engine",
    "EngineConfig",
    "Scene",
    "FrameLoop",
    "InputBindings",
    "InputState",
    "MeshLoaderError",
    "MeshIOError",
    "MeshParseError",
    "MeshIntegrityError",
    "load_mesh",
    "Projector",
    "ProjectionSettings",
    "ViewerSettings",
    "Viewport",
    "face_segments",
    "to_screen",
    "Mesh",
    "Point3",
    "Pose",
    "ScreenPoint",
    "Vector3",
]
