"""Immutable output of one generation call.

A plan is declarative: rooms, corridors and decorations plus the resolved
palette. Box footprints for floors and walls are derived on demand so a scene
materializer never has to know the layout conventions (floor slab 0.5 thick
sunk below y=0, walls 0.5 thick standing on the room edges).
"""
from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Dict, Iterator, List, Mapping, Optional, Tuple

from .config import DungeonConfig
from .features import Decoration, DecorationKind
from .geometry import Color, Vec3, on_ground
from .rooms import Room
from .styles import Palette
from .tunnels import Corridor, Orientation

FLOOR_THICKNESS = 0.5
WALL_THICKNESS = 0.5


@dataclass(frozen=True)
class Footprint:
    name: str
    center: Vec3
    size: Vec3
    color: Color

    def to_dict(self) -> Dict[str, Any]:
        return {"name": self.name, "center": list(self.center), "size": list(self.size), "color": list(self.color)}


def room_footprints(room: Room, wall_height: float, palette: Palette) -> Tuple[Footprint, ...]:
    """Floor plus north/south/east/west walls for one room."""
    c = on_ground(room.center)
    hw, hd, hh = room.width / 2, room.depth / 2, wall_height / 2
    return (
        Footprint("floor", c.shifted(dy=-FLOOR_THICKNESS / 2), Vec3(room.width, FLOOR_THICKNESS, room.depth), palette.floor),
        Footprint("wall_north", c.shifted(dy=hh, dz=hd), Vec3(room.width, wall_height, WALL_THICKNESS), palette.wall),
        Footprint("wall_south", c.shifted(dy=hh, dz=-hd), Vec3(room.width, wall_height, WALL_THICKNESS), palette.wall),
        Footprint("wall_east", c.shifted(dx=hw, dy=hh), Vec3(WALL_THICKNESS, wall_height, room.depth), palette.wall),
        Footprint("wall_west", c.shifted(dx=-hw, dy=hh), Vec3(WALL_THICKNESS, wall_height, room.depth), palette.wall),
    )


def corridor_footprints(corridor: Corridor, palette: Palette) -> Tuple[Footprint, ...]:
    out = []
    for seg in corridor.segments:
        if seg.orientation is Orientation.HORIZONTAL:
            size = Vec3(seg.length, FLOOR_THICKNESS, seg.thickness)
        else:
            size = Vec3(seg.thickness, FLOOR_THICKNESS, seg.length)
        out.append(Footprint("corridor_floor", on_ground(seg.center, -FLOOR_THICKNESS / 2), size, palette.floor))
    return tuple(out)


@dataclass(frozen=True)
class DungeonPlan:
    config: DungeonConfig
    palette: Palette
    description: str = ""
    rooms: Tuple[Room, ...] = ()
    corridors: Tuple[Corridor, ...] = ()
    decorations: Tuple[Decoration, ...] = ()
    seed: Optional[int] = None
    metrics: Mapping[str, Any] = field(default_factory=dict)

    def __post_init__(self):
        # Always a read-only copy, whatever mapping the caller passed.
        object.__setattr__(self, "metrics", MappingProxyType(dict(self.metrics)))

    @property
    def rooms_requested(self) -> int:
        return int(self.metrics.get("rooms_requested", len(self.rooms)))

    @property
    def rooms_dropped(self) -> int:
        """Slots that gave up after exhausting their placement attempts."""
        return int(self.metrics.get("rooms_dropped", 0))

    @property
    def degraded(self) -> bool:
        return self.rooms_dropped > 0

    def decorations_for(self, room_id: int, kind: Optional[DecorationKind] = None) -> List[Decoration]:
        return [d for d in self.decorations if d.room_id == room_id and (kind is None or d.kind is kind)]

    def room_footprints(self, room: Room) -> Tuple[Footprint, ...]:
        return room_footprints(room, self.config.wall_height, self.palette)

    def corridor_footprints(self, corridor: Corridor) -> Tuple[Footprint, ...]:
        return corridor_footprints(corridor, self.palette)

    def iter_footprints(self) -> Iterator[Footprint]:
        for room in self.rooms:
            yield from self.room_footprints(room)
        for corridor in self.corridors:
            yield from self.corridor_footprints(corridor)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "seed": self.seed,
            "config": self.config.to_dict(),
            "style": {
                "floor": list(self.palette.floor),
                "wall": list(self.palette.wall),
                "accent": list(self.palette.accent),
                "description": self.description,
            },
            "rooms": [
                dict(room.to_dict(), footprints=[f.to_dict() for f in self.room_footprints(room)])
                for room in self.rooms
            ],
            "corridors": [
                dict(c.to_dict(), footprints=[f.to_dict() for f in self.corridor_footprints(c)])
                for c in self.corridors
            ],
            "decorations": [d.to_dict() for d in self.decorations],
            "metrics": {k: dict(v) if isinstance(v, Mapping) else v for k, v in self.metrics.items()},
        }


__all__ = [
    "FLOOR_THICKNESS",
    "WALL_THICKNESS",
    "Footprint",
    "DungeonPlan",
    "room_footprints",
    "corridor_footprints",
]
