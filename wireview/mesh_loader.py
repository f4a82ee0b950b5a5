"""Mesh loader for the ``v``/``f`` text format."""

from __future__ import annotations

import logging
import math
from pathlib import Path
from typing import List

from .world import Face, Mesh

logger = logging.getLogger(__name__)


class MeshLoaderError(Exception):
    pass


class MeshIOError(MeshLoaderError):
    pass


class MeshParseError(MeshLoaderError):
    def __init__(self, path: Path, line_no: int, message: str) -> None:
        super().__init__(f"{path}:{line_no}: {message}")
        self.path = path
        self.line_no = line_no


class MeshIntegrityError(MeshLoaderError):
    def __init__(self, path: Path, line_no: int, message: str) -> None:
        super().__init__(f"{path}:{line_no}: {message}")
        self.path = path
        self.line_no = line_no


def load_mesh(path: str | Path) -> Mesh:
    """メッシュファイルを読み込み、面インデックスを検証したMeshを返す。"""

    file_path = Path(path)
    try:
        with file_path.open("r", encoding="utf-8") as handle:
            lines = handle.readlines()
    except (OSError, UnicodeDecodeError) as exc:
        raise MeshIOError(f"メッシュファイルを読み込めない: {file_path}: {exc}") from exc

    points: List[tuple[float, float, float]] = []
    faces: List[Face] = []
    face_lines: List[int] = []

    for line_no, raw_line in enumerate(lines, start=1):
        tokens = raw_line.split()
        if not tokens:
            continue
        head = tokens[0]
        if head == "v":
            if len(tokens) != 4:
                raise MeshParseError(file_path, line_no, f"頂点には3つの座標が必要: {raw_line.strip()!r}")
            x, y, z = (_parse_float(file_path, line_no, tok) for tok in tokens[1:])
            points.append((x, y, z))
        elif head == "f":
            faces.append(tuple(_parse_int(file_path, line_no, tok) for tok in tokens[1:]))
            face_lines.append(line_no)

    # ファイル上の1始まりの参照を0始まりに変換する
    count = len(points)
    zero_based: List[Face] = []
    for face, line_no in zip(faces, face_lines):
        if len(face) < 3:
            raise MeshIntegrityError(file_path, line_no, f"面には3つ以上の頂点が必要: {len(face)}個")
        for index in face:
            if not 1 <= index <= count:
                raise MeshIntegrityError(
                    file_path,
                    line_no,
                    f"頂点インデックス{index}が範囲外 (1..{count})",
                )
        zero_based.append(tuple(index - 1 for index in face))

    mesh = Mesh.from_points(points, zero_based, name=file_path.stem)
    logger.info("loaded mesh %s: %d vertices, %d faces", file_path, mesh.vertex_count, mesh.face_count)
    return mesh


def _parse_float(path: Path, line_no: int, token: str) -> float:
    try:
        value = float(token)
    except ValueError:
        raise MeshParseError(path, line_no, f"実数として解釈できない: {token!r}") from None
    if not math.isfinite(value):
        raise MeshParseError(path, line_no, f"有限の実数ではない: {token!r}")
    return value


def _parse_int(path: Path, line_no: int, token: str) -> int:
    try:
        return int(token)
    except ValueError:
        raise MeshParseError(path, line_no, f"整数として解釈できない: {token!r}") from None


__all__ = [
    "MeshLoaderError",
    "MeshIOError",
    "MeshParseError",
    "MeshIntegrityError",
    "load_mesh",
]
