"""Style catalog: style id -> palette and description.

Lookups are case-insensitive. Unknown styles resolve to a neutral gray
palette with an empty description rather than raising.
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Dict, NamedTuple, Union

from .geometry import Color


class DungeonStyle(str, Enum):
    STONE = "stone"
    CRYPT = "crypt"
    MINE = "mine"
    TEMPLE = "temple"
    SEWER = "sewer"


class Palette(NamedTuple):
    floor: Color
    wall: Color
    accent: Color


@dataclass(frozen=True)
class StyleEntry:
    palette: Palette
    description: str


FALLBACK_PALETTE = Palette((0.5, 0.5, 0.5), (0.5, 0.5, 0.5), (1.0, 1.0, 1.0))

STYLE_CATALOG: Dict[str, StyleEntry] = {
    DungeonStyle.STONE.value: StyleEntry(
        Palette((0.3, 0.3, 0.32), (0.4, 0.4, 0.42), (0.5, 0.5, 0.5)),
        "Classic stone dungeon with cobblestone walls",
    ),
    DungeonStyle.CRYPT.value: StyleEntry(
        Palette((0.2, 0.2, 0.22), (0.25, 0.25, 0.28), (0.8, 0.8, 0.7)),
        "Dark crypt with bone decorations",
    ),
    DungeonStyle.MINE.value: StyleEntry(
        Palette((0.35, 0.25, 0.15), (0.4, 0.3, 0.2), (0.6, 0.45, 0.25)),
        "Abandoned mine with wooden supports",
    ),
    DungeonStyle.TEMPLE.value: StyleEntry(
        Palette((0.6, 0.55, 0.45), (0.5, 0.45, 0.35), (0.9, 0.75, 0.3)),
        "Ancient temple with golden accents",
    ),
    DungeonStyle.SEWER.value: StyleEntry(
        Palette((0.25, 0.3, 0.25), (0.3, 0.35, 0.3), (0.4, 0.5, 0.4)),
        "Underground sewer with water channels",
    ),
}


def _key(style: Union[str, DungeonStyle, None]) -> str:
    if isinstance(style, DungeonStyle):
        return style.value
    return str(style or "").strip().lower()


def is_known_style(style) -> bool:
    return _key(style) in STYLE_CATALOG


def colors_for(style) -> Palette:
    entry = STYLE_CATALOG.get(_key(style))
    return entry.palette if entry else FALLBACK_PALETTE


def description_for(style) -> str:
    entry = STYLE_CATALOG.get(_key(style))
    return entry.description if entry else ""


def register_style(name: str, palette: Palette, description: str = "") -> None:
    """Add or replace a catalog entry; call sites pick it up by id."""
    key = _key(name)
    if not key:
        raise ValueError("style name must be non-empty")
    STYLE_CATALOG[key] = StyleEntry(Palette(*palette), description)


def catalog_snapshot() -> Dict[str, Dict[str, object]]:
    return {
        name: {
            "floor": list(entry.palette.floor),
            "wall": list(entry.palette.wall),
            "accent": list(entry.palette.accent),
            "description": entry.description,
        }
        for name, entry in STYLE_CATALOG.items()
    }


__all__ = [
    "DungeonStyle",
    "Palette",
    "StyleEntry",
    "FALLBACK_PALETTE",
    "STYLE_CATALOG",
    "is_known_style",
    "colors_for",
    "description_for",
    "register_style",
    "catalog_snapshot",
]
