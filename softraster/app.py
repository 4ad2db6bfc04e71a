"""Command that spins a mesh in a window."""

from __future__ import annotations

import argparse
import sys

from .engine import RenderEngine
from .models import Float3, Mesh, Triangle
from .objparser import parse_wavefront_file

WIDTH = 1280
HEIGHT = 720
TITLE = "CPU Render Engine"

_CUBE_FACES = (
    # south
    ((0, 0, 0), (0, 1, 0), (1, 1, 0)),
    ((0, 0, 0), (1, 1, 0), (1, 0, 0)),
    # east
    ((1, 0, 0), (1, 1, 0), (1, 1, 1)),
    ((1, 0, 0), (1, 1, 1), (1, 0, 1)),
    # north
    ((1, 0, 1), (1, 1, 1), (0, 1, 1)),
    ((1, 0, 1), (0, 1, 1), (0, 0, 1)),
    # west
    ((0, 0, 1), (0, 1, 1), (0, 1, 0)),
    ((0, 0, 1), (0, 1, 0), (0, 0, 0)),
    # top
    ((0, 1, 0), (0, 1, 1), (1, 1, 1)),
    ((0, 1, 0), (1, 1, 1), (1, 1, 0)),
    # bottom
    ((1, 0, 1), (0, 0, 1), (0, 0, 0)),
    ((1, 0, 1), (0, 0, 0), (1, 0, 0)),
)


def create_cube() -> Mesh:
    """Return a unit cube made of 12 triangles."""
    return Mesh(
        [
            Triangle(tuple(Float3(float(x), float(y), float(z)) for x, y, z in face))
            for face in _CUBE_FACES
        ]
    )


def _positive_int(text: str) -> int:
    value = int(text)
    if value <= 0:
        raise argparse.ArgumentTypeError(f"must be positive: {text}")
    return value


def _parse_args(argv: list[str] | None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="softraster", description="Spin a mesh in a software-rendered window."
    )
    parser.add_argument("obj", nargs="?", help="Wavefront OBJ file; a cube if omitted")
    parser.add_argument("--width", type=_positive_int, default=WIDTH)
    parser.add_argument("--height", type=_positive_int, default=HEIGHT)
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    """Open a window and spin a mesh until it is closed; return the exit status."""
    args = _parse_args(argv)
    try:
        mesh = parse_wavefront_file(args.obj) if args.obj else create_cube()
    except ValueError as exc:
        print(f"softraster: {exc}", file=sys.stderr)
        return 1

    engine = RenderEngine(args.width, args.height, TITLE)
    try:
        engine.initialize()
    except RuntimeError as exc:
        print(f"softraster: {exc}", file=sys.stderr)
        return 1

    rotation = 0.0
    try:
        while not engine.should_close():
            engine.poll_events()
            rotation += 1.0 * engine.elapsed_time
            engine.render_mesh(mesh, rotation)
    finally:
        engine.shutdown()
    return 0


if __name__ == "__main__":
    sys.exit(main())