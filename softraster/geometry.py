"""2D geometry tests on the x and y components of points."""

from __future__ import annotations

from .models import Float3


def cross(a: Float3, b: Float3) -> float:
    """Return the z component of the cross product of ``a`` and ``b`` in the xy plane."""
    return a.x * b.y - a.y * b.x


def point_on_right_side_of_line(a: Float3, b: Float3, p: Float3) -> bool:
    """Return whether ``p`` lies strictly on the right of the line from ``a`` to ``b``."""
    ap = Float3(p.x - a.x, p.y - a.y, 0.0)
    ab = Float3(b.x - a.x, b.y - a.y, 0.0)
    return cross(ab, ap) < 0


def point_in_triangle(a: Float3, b: Float3, c: Float3, p: Float3) -> bool:
    """Return whether ``p`` is on the same side of all three edges of triangle ``abc``."""
    ab = point_on_right_side_of_line(a, b, p)
    bc = point_on_right_side_of_line(b, c, p)
    ca = point_on_right_side_of_line(c, a, p)
    return ab == bc == ca