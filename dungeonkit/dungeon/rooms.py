import random
from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple

from ..logging_utils import get_logger
from .config import PLACEMENT_HALF_EXTENT, DungeonConfig
from .geometry import Point, Rect

ROOM_MARGIN = 3.0
MAX_PLACEMENT_ATTEMPTS = 50

_log = get_logger("layout")


@dataclass(frozen=True)
class Room:
    id: int
    center: Point
    width: float
    depth: float

    @property
    def bounds(self) -> Rect:
        return Rect(self.center.x - self.width / 2, self.center.z - self.depth / 2, self.width, self.depth)

    def corners(self, inset: float = 0.0) -> List[Point]:
        hw = self.width / 2 - inset
        hd = self.depth / 2 - inset
        cx, cz = self.center
        return [
            Point(cx + hw, cz + hd),
            Point(cx - hw, cz + hd),
            Point(cx + hw, cz - hd),
            Point(cx - hw, cz - hd),
        ]

    def to_dict(self) -> Dict[str, object]:
        return {
            "id": self.id,
            "center": [self.center.x, self.center.z],
            "width": self.width,
            "depth": self.depth,
        }


def sample_room_rect(config: DungeonConfig, rng) -> Rect:
    """Draw one candidate: size in [min, max], lower corner so the room fits the area."""
    w = rng.uniform(config.room_min_size, config.room_max_size)
    d = rng.uniform(config.room_min_size, config.room_max_size)
    x = rng.uniform(-PLACEMENT_HALF_EXTENT, PLACEMENT_HALF_EXTENT - w)
    z = rng.uniform(-PLACEMENT_HALF_EXTENT, PLACEMENT_HALF_EXTENT - d)
    return Rect(x, z, w, d)


def place_rooms(config: DungeonConfig, rng=None, metrics: Optional[Dict] = None) -> Tuple[List[Room], int, int]:
    """Pack up to ``config.room_count`` non-overlapping rooms.

    Returns (rooms, target_attempted, placed_count). A slot that exhausts its
    attempt budget is dropped and logged; the caller sees it as
    ``placed_count < target_attempted``. Room ids follow acceptance order.
    """
    if rng is None:
        rng = random.Random()
    target = config.room_count
    rooms: List[Room] = []
    padded: List[Rect] = []
    attempts_total = 0
    for slot in range(target):
        for _ in range(MAX_PLACEMENT_ATTEMPTS):
            candidate = sample_room_rect(config, rng)
            attempts_total += 1
            grown = candidate.expanded(ROOM_MARGIN)
            if _room_overlaps(grown, padded):
                continue
            rooms.append(Room(len(rooms), candidate.center, candidate.w, candidate.d))
            padded.append(grown)
            break
        else:
            _log.warn(event="room_slot_dropped", slot=slot, attempts=MAX_PLACEMENT_ATTEMPTS, placed=len(rooms))
    placed = len(rooms)
    if metrics is not None:
        metrics["rooms_requested"] = target
        metrics["rooms_placed"] = placed
        metrics["rooms_dropped"] = target - placed
        metrics["placement_attempts"] = attempts_total
    return rooms, target, placed


def _room_overlaps(grown: Rect, existing: List[Rect]) -> bool:
    return any(grown.overlaps(r) for r in existing)


def single_room(config: DungeonConfig, rng=None, center: Point = Point(0.0, 0.0)) -> Room:
    """One free-standing room of random size at ``center`` (no packing)."""
    if rng is None:
        rng = random.Random()
    w = rng.uniform(config.room_min_size, config.room_max_size)
    d = rng.uniform(config.room_min_size, config.room_max_size)
    return Room(0, Point(*center), w, d)


__all__ = ["Room", "ROOM_MARGIN", "MAX_PLACEMENT_ATTEMPTS", "place_rooms", "sample_room_rect", "single_room"]
