"""Reading triangle meshes from Wavefront OBJ text."""

from __future__ import annotations

import os
import re
from typing import Iterable

from .models import Float3, Mesh, Triangle

_LEADING_INT = re.compile(r"\s*([+-]?\d+)")


def parse_vertex_index(text: str) -> int:
    """Return the vertex index of an OBJ face element such as ``"3"`` or ``"3/1/2"``.

    Only the leading integer before the first slash is used. Raises
    ``ValueError`` if there is none.
    """
    head = text.split("/", 1)[0]
    match = _LEADING_INT.match(head)
    if match is None:
        raise ValueError(f"no vertex index in {text!r}")
    return int(match.group(1))


def _parse_vertex(fields: list[str]) -> Float3:
    if len(fields) < 3:
        raise ValueError(f"vertex needs 3 coordinates, got {len(fields)}")
    x, y, z = (float(value) for value in fields[:3])
    return Float3(x, y, z)


def _lookup(vertices: list[Float3], index: int) -> Float3:
    if not 1 <= index <= len(vertices):
        raise ValueError(f"vertex index {index} out of range 1..{len(vertices)}")
    return vertices[index - 1]


def parse_wavefront_lines(lines: Iterable[str]) -> Mesh:
    """Build a mesh from OBJ lines, reading ``v`` vertices and triangular ``f`` faces.

    Faces use the first three of their vertices; every other line is ignored.
    """
    mesh = Mesh()
    vertices: list[Float3] = []
    for line in lines:
        fields = line.split()
        if not fields:
            continue
        prefix, rest = fields[0], fields[1:]
        if prefix == "v":
            vertices.append(_parse_vertex(rest))
        elif prefix == "f":
            if len(rest) < 3:
                raise ValueError(f"face needs 3 vertices, got {len(rest)}")
            indices = [parse_vertex_index(item) for item in rest[:3]]
            mesh.tris.append(Triangle(tuple(_lookup(vertices, i) for i in indices)))
    return mesh


def parse_wavefront_file(path: str | os.PathLike[str]) -> Mesh:
    """Read a mesh from an OBJ file; a file that cannot be opened gives an empty mesh."""
    try:
        handle = open(path, encoding="utf-8", errors="replace")
    except OSError:
        return Mesh()
    with handle:
        return parse_wavefront_lines(handle)