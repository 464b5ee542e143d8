"""Decoration placement over a finished layout (pillars, torches, treasure).

Rules, per room and independent of other rooms:
  * Pillars: four, at the corners inset 1.5 from the walls, only when the
    toggle is on and the room is wider and deeper than 8. Smaller rooms get
    none rather than a partial set.
  * Torches: four on a radius-3 ring around the center at 0/90/180/270
    degrees, any room size. Light parameters are constants, not style-driven.
  * Treasure: one chest with probability 0.6, jittered up to 2 units from the
    center on each axis. A chest is always a body plus a lid.

Only treasure consumes randomness, from the rng handed in by the caller.
"""
from __future__ import annotations

import math
import random
from collections import Counter
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, List, Optional, Sequence, Tuple

from .config import DungeonConfig
from .geometry import Color, Vec3, on_ground
from .rooms import Room
from .styles import Palette

PILLAR_MIN_ROOM_EDGE = 8.0
PILLAR_INSET = 1.5
PILLAR_RADIUS_SCALE = 0.8

TORCH_RADIUS = 3.0
TORCH_ELEVATION = 2.5
TORCH_ANGLES_DEG = (0.0, 90.0, 180.0, 270.0)
TORCH_HANDLE_COLOR: Color = (0.4, 0.25, 0.1)
TORCH_HANDLE_SCALE = Vec3(0.1, 0.3, 0.1)
TORCH_LIGHT_COLOR: Color = (1.0, 0.7, 0.4)
TORCH_LIGHT_INTENSITY = 1.5
TORCH_LIGHT_RANGE = 8.0

TREASURE_CHANCE = 0.6
TREASURE_JITTER = 2.0
CHEST_BODY_COLOR: Color = (0.5, 0.35, 0.15)
CHEST_LID_COLOR: Color = (1.0, 0.85, 0.2)


class DecorationKind(str, Enum):
    PILLAR = "pillar"
    TORCH = "torch"
    TREASURE_CHEST = "treasure_chest"


@dataclass(frozen=True)
class Part:
    """A primitive relative to its decoration's position."""

    name: str
    offset: Vec3
    scale: Vec3
    color: Color


@dataclass(frozen=True)
class Light:
    color: Color
    intensity: float
    range: float


@dataclass(frozen=True)
class Decoration:
    kind: DecorationKind
    room_id: int
    position: Vec3
    parts: Tuple[Part, ...]
    light: Optional[Light] = None
    height: Optional[float] = None
    angle_deg: Optional[float] = None

    def to_dict(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {
            "kind": self.kind.value,
            "room_id": self.room_id,
            "position": list(self.position),
            "parts": [
                {"name": p.name, "offset": list(p.offset), "scale": list(p.scale), "color": list(p.color)}
                for p in self.parts
            ],
        }
        if self.light is not None:
            out["light"] = {
                "color": list(self.light.color),
                "intensity": self.light.intensity,
                "range": self.light.range,
            }
        if self.height is not None:
            out["height"] = self.height
        if self.angle_deg is not None:
            out["angle_deg"] = self.angle_deg
        return out


def pillars_for(room: Room, config: DungeonConfig, palette: Palette) -> List[Decoration]:
    if not (config.add_pillars and room.width > PILLAR_MIN_ROOM_EDGE and room.depth > PILLAR_MIN_ROOM_EDGE):
        return []
    # Half-height convention: the shaft's y scale is half the wall height and
    # it sits at that elevation, so it spans floor to wall top.
    half = config.wall_height / 2
    shaft = Part("shaft", Vec3(0.0, 0.0, 0.0), Vec3(PILLAR_RADIUS_SCALE, half, PILLAR_RADIUS_SCALE), palette.accent)
    return [
        Decoration(DecorationKind.PILLAR, room.id, on_ground(corner, half), (shaft,), height=half)
        for corner in room.corners(PILLAR_INSET)
    ]


def torches_for(room: Room, config: DungeonConfig) -> List[Decoration]:
    if not config.add_torches:
        return []
    handle = Part("handle", Vec3(0.0, 0.0, 0.0), TORCH_HANDLE_SCALE, TORCH_HANDLE_COLOR)
    light = Light(TORCH_LIGHT_COLOR, TORCH_LIGHT_INTENSITY, TORCH_LIGHT_RANGE)
    out = []
    for angle in TORCH_ANGLES_DEG:
        rad = math.radians(angle)
        pos = Vec3(
            room.center.x + math.cos(rad) * TORCH_RADIUS,
            TORCH_ELEVATION,
            room.center.z + math.sin(rad) * TORCH_RADIUS,
        )
        out.append(Decoration(DecorationKind.TORCH, room.id, pos, (handle,), light=light, angle_deg=angle))
    return out


def treasure_for(room: Room, config: DungeonConfig, rng) -> List[Decoration]:
    if not config.add_treasure:
        return []
    if rng.random() >= TREASURE_CHANCE:
        return []
    dx = rng.uniform(-TREASURE_JITTER, TREASURE_JITTER)
    dz = rng.uniform(-TREASURE_JITTER, TREASURE_JITTER)
    parts = (
        Part("body", Vec3(0.0, 0.3, 0.0), Vec3(0.8, 0.5, 0.5), CHEST_BODY_COLOR),
        Part("lid", Vec3(0.0, 0.6, 0.0), Vec3(0.85, 0.15, 0.55), CHEST_LID_COLOR),
    )
    return [Decoration(DecorationKind.TREASURE_CHEST, room.id, on_ground(room.center).shifted(dx=dx, dz=dz), parts)]


def assign_features(
    rooms: Sequence[Room],
    config: DungeonConfig,
    palette: Palette,
    rng=None,
    metrics: Optional[Dict[str, Any]] = None,
) -> List[Decoration]:
    """Decorate every room and return the flattened list, grouped by room."""
    if rng is None:
        rng = random.Random()
    decorations: List[Decoration] = []
    for room in rooms:
        decorations.extend(pillars_for(room, config, palette))
        decorations.extend(torches_for(room, config))
        decorations.extend(treasure_for(room, config, rng))
    if metrics is not None:
        counts = Counter(d.kind for d in decorations)
        metrics["pillars"] = counts[DecorationKind.PILLAR]
        metrics["torches"] = counts[DecorationKind.TORCH]
        metrics["treasure_chests"] = counts[DecorationKind.TREASURE_CHEST]
    return decorations
