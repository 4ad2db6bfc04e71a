"""Plain value types used by the renderer: vectors, triangles, meshes and bounds."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterator


@dataclass(frozen=True)
class Float2:
    """A 2D point or vector with float components."""

    x: float = 0.0
    y: float = 0.0


@dataclass(frozen=True)
class Float3:
    """A 3D point or vector with float components."""

    x: float = 0.0
    y: float = 0.0
    z: float = 0.0

    @classmethod
    def splat(cls, value: float) -> Float3:
        """Return a vector with every component set to ``value``."""
        return cls(value, value, value)


@dataclass(frozen=True)
class Int2Vec:
    """A 2D point with integer components, used for pixel coordinates."""

    x: int = 0
    y: int = 0


@dataclass(frozen=True)
class Int3Vec:
    """A 3D point with integer components."""

    x: int = 0
    y: int = 0
    z: int = 0


@dataclass(frozen=True)
class Triangle:
    """Three corner points of a triangle."""

    p: tuple[Float3, Float3, Float3] = (Float3(), Float3(), Float3())

    def __post_init__(self) -> None:
        points = tuple(self.p)
        if len(points) != 3:
            raise ValueError(f"a triangle needs exactly 3 points, got {len(points)}")
        object.__setattr__(self, "p", points)

    def __iter__(self) -> Iterator[Float3]:
        return iter(self.p)


@dataclass
class Mesh:
    """A collection of triangles."""

    tris: list[Triangle] = field(default_factory=list)

    def __iter__(self) -> Iterator[Triangle]:
        return iter(self.tris)

    def __len__(self) -> int:
        return len(self.tris)


@dataclass
class BoundingBox:
    """Axis-aligned bounds in x, y and z."""

    min_x: float = 0.0
    max_x: float = 0.0
    min_y: float = 0.0
    max_y: float = 0.0
    min_z: float = 0.0
    max_z: float = 0.0