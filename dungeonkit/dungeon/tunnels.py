from dataclasses import dataclass
from enum import Enum
from typing import Dict, List, Optional, Sequence, Tuple

from .geometry import Point
from .rooms import Room

# Legs shorter than this are slivers and are not emitted.
MIN_SEGMENT_SPAN = 0.5


class Orientation(str, Enum):
    HORIZONTAL = "horizontal"  # runs along x
    VERTICAL = "vertical"  # runs along z


@dataclass(frozen=True)
class Segment:
    """One axis-aligned corridor floor piece.

    ``span`` is the distance between the leg's endpoints; ``length`` is the
    emitted length, extended by the corridor width so the floor overlaps the
    rooms (or the other leg) it joins.
    """

    center: Point
    span: float
    length: float
    orientation: Orientation
    thickness: float

    def to_dict(self) -> Dict[str, object]:
        return {
            "center": [self.center.x, self.center.z],
            "span": self.span,
            "length": self.length,
            "orientation": self.orientation.value,
            "thickness": self.thickness,
        }


@dataclass(frozen=True)
class Corridor:
    start: Point
    end: Point
    segments: Tuple[Segment, ...]
    start_room: Optional[int] = None
    end_room: Optional[int] = None

    @property
    def corner(self) -> Point:
        return Point(self.end.x, self.start.z)

    def to_dict(self) -> Dict[str, object]:
        return {
            "start_room": self.start_room,
            "end_room": self.end_room,
            "start": [self.start.x, self.start.z],
            "end": [self.end.x, self.end.z],
            "segments": [s.to_dict() for s in self.segments],
        }


def carve_corridor_between(
    a: Point,
    b: Point,
    corridor_width: float,
    start_room: Optional[int] = None,
    end_room: Optional[int] = None,
) -> Corridor:
    """L-shaped corridor from center a to center b.

    The horizontal leg runs from a to the corner (b.x, a.z), then the vertical
    leg from the corner to b. No check is made against rooms the route passes
    through.
    """
    a = Point(*a)
    b = Point(*b)
    corner = Point(b.x, a.z)
    segments: List[Segment] = []

    h_span = abs(b.x - a.x)
    if h_span > MIN_SEGMENT_SPAN:
        segments.append(
            Segment(a.midpoint(corner), h_span, h_span + corridor_width, Orientation.HORIZONTAL, corridor_width)
        )
    v_span = abs(b.z - a.z)
    if v_span > MIN_SEGMENT_SPAN:
        segments.append(
            Segment(corner.midpoint(b), v_span, v_span + corridor_width, Orientation.VERTICAL, corridor_width)
        )
    return Corridor(a, b, tuple(segments), start_room, end_room)


def connect_rooms_with_corridors(rooms: Sequence[Room], corridor_width: float) -> List[Corridor]:
    """Chain rooms in acceptance order: 0-1, 1-2, ... (not a spanning tree)."""
    return [
        carve_corridor_between(first.center, second.center, corridor_width, first.id, second.id)
        for first, second in zip(rooms, rooms[1:])
    ]


__all__ = [
    "MIN_SEGMENT_SPAN",
    "Orientation",
    "Segment",
    "Corridor",
    "carve_corridor_between",
    "connect_rooms_with_corridors",
]
