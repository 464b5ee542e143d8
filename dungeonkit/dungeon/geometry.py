"""Plain value types shared by the layout, decoration and plan modules.

Ground plane is (x, z); y is up. Rooms and corridors live at y == 0.
"""
from __future__ import annotations

from typing import NamedTuple, Tuple

Color = Tuple[float, float, float]


class Point(NamedTuple):
    x: float
    z: float

    def midpoint(self, other: "Point") -> "Point":
        return Point((self.x + other.x) / 2, (self.z + other.z) / 2)


class Vec3(NamedTuple):
    x: float
    y: float
    z: float

    def shifted(self, dx: float = 0.0, dy: float = 0.0, dz: float = 0.0) -> "Vec3":
        return Vec3(self.x + dx, self.y + dy, self.z + dz)


class Rect(NamedTuple):
    """Axis-aligned rectangle given by its lower corner and extent."""

    x: float
    z: float
    w: float
    d: float

    @property
    def center(self) -> Point:
        return Point(self.x + self.w / 2, self.z + self.d / 2)

    def expanded(self, margin: float) -> "Rect":
        return Rect(self.x - margin, self.z - margin, self.w + margin * 2, self.d + margin * 2)

    def overlaps(self, other: "Rect") -> bool:
        # Open intervals: rectangles that only share an edge do not overlap.
        return (
            self.x < other.x + other.w
            and self.x + self.w > other.x
            and self.z < other.z + other.d
            and self.z + self.d > other.z
        )


def on_ground(p: Point, y: float = 0.0) -> Vec3:
    return Vec3(p.x, y, p.z)


__all__ = ["Color", "Point", "Vec3", "Rect", "on_ground"]
