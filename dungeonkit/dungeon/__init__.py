"""Public dungeon package interface."""

from .config import CONFIG_RANGES, DungeonConfig  # noqa: F401
from .features import Decoration, DecorationKind, Light, Part  # noqa: F401
from .geometry import Point, Rect, Vec3  # noqa: F401
from .materializer import (  # noqa: F401
    DungeonHandle,
    InMemoryMaterializer,
    SceneMaterializer,
    SceneNode,
)
from .pipeline import (  # noqa: F401
    DungeonSession,
    corridor_plan,
    generate_dungeon,
    single_room_plan,
)
from .plan import DungeonPlan, Footprint  # noqa: F401
from .rooms import Room  # noqa: F401
from .styles import (  # noqa: F401
    DungeonStyle,
    Palette,
    catalog_snapshot,
    colors_for,
    description_for,
    register_style,
)
from .tunnels import Corridor, Orientation, Segment  # noqa: F401

__all__ = [
    "CONFIG_RANGES",
    "DungeonConfig",
    "Decoration",
    "DecorationKind",
    "Light",
    "Part",
    "Point",
    "Rect",
    "Vec3",
    "DungeonHandle",
    "InMemoryMaterializer",
    "SceneMaterializer",
    "SceneNode",
    "DungeonSession",
    "corridor_plan",
    "generate_dungeon",
    "single_room_plan",
    "DungeonPlan",
    "Footprint",
    "Room",
    "DungeonStyle",
    "Palette",
    "catalog_snapshot",
    "colors_for",
    "description_for",
    "register_style",
    "Corridor",
    "Orientation",
    "Segment",
]
