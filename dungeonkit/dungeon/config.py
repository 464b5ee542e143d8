import math
from dataclasses import asdict, dataclass, fields, replace
from typing import Any, Dict, Mapping, Tuple

from ..exceptions import InvalidConfigError
from .styles import DungeonStyle, is_known_style

# Placement happens inside [-PLACEMENT_HALF_EXTENT, PLACEMENT_HALF_EXTENT] on x and z.
PLACEMENT_HALF_EXTENT = 50.0

# Editor slider ranges, enforced by validate(ranges=True).
CONFIG_RANGES: Dict[str, Tuple[float, float]] = {
    "room_count": (3, 20),
    "room_min_size": (4, 10),
    "room_max_size": (8, 20),
    "corridor_width": (2.0, 6.0),
    "wall_height": (3.0, 8.0),
}

_INT_FIELDS = {"room_count", "room_min_size", "room_max_size"}
_FLOAT_FIELDS = {"corridor_width", "wall_height"}
_BOOL_FIELDS = {"add_torches", "add_pillars", "add_doorways", "add_treasure"}
_TRUTHY = {"1", "true", "yes", "on"}
_FALSY = {"0", "false", "no", "off", ""}


@dataclass(frozen=True)
class DungeonConfig:
    style: str = DungeonStyle.STONE.value
    room_count: int = 8
    room_min_size: int = 6
    room_max_size: int = 12
    corridor_width: float = 3.0
    wall_height: float = 4.0
    add_torches: bool = True
    add_pillars: bool = True
    add_doorways: bool = True
    add_treasure: bool = True

    def validate(self, ranges: bool = False) -> "DungeonConfig":
        """Reject configs the generator cannot honor; return self for chaining.

        The structural checks always run. ``ranges=True`` additionally applies
        the editor slider ranges and requires ``room_min_size < room_max_size``;
        HTTP and CLI callers use that mode.
        """
        if not is_known_style(self.style):
            raise InvalidConfigError("style", f"unknown style {self.style!r}")
        if self.room_count < 0:
            raise InvalidConfigError("room_count", "must be >= 0")
        if self.room_min_size <= 0:
            raise InvalidConfigError("room_min_size", "must be > 0")
        if self.room_min_size > self.room_max_size:
            raise InvalidConfigError(
                "room_min_size",
                f"min size {self.room_min_size} exceeds max size {self.room_max_size}",
            )
        if self.room_max_size > PLACEMENT_HALF_EXTENT * 2:
            raise InvalidConfigError(
                "room_max_size",
                f"rooms larger than the {PLACEMENT_HALF_EXTENT * 2:g} unit placement area cannot be placed",
            )
        for name in ("corridor_width", "wall_height"):
            if not math.isfinite(getattr(self, name)):
                raise InvalidConfigError(name, "must be a finite number")
        if self.corridor_width <= 0:
            raise InvalidConfigError("corridor_width", "must be > 0")
        if self.wall_height <= 0:
            raise InvalidConfigError("wall_height", "must be > 0")
        if ranges:
            for name, (lo, hi) in CONFIG_RANGES.items():
                value = getattr(self, name)
                if not lo <= value <= hi:
                    raise InvalidConfigError(name, f"{value} outside [{lo:g}, {hi:g}]")
            if self.room_min_size >= self.room_max_size:
                raise InvalidConfigError(
                    "room_min_size",
                    f"min size {self.room_min_size} must be below max size {self.room_max_size}",
                )
        return self

    def clamped(self) -> "DungeonConfig":
        """Clamp numeric fields into the slider ranges (style left untouched)."""
        changes = {}
        for name, (lo, hi) in CONFIG_RANGES.items():
            value = getattr(self, name)
            changes[name] = type(value)(min(max(value, lo), hi))
        return replace(self, **changes)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "DungeonConfig":
        """Build a config from loosely typed input (JSON bodies, CLI, env).

        Unknown keys are ignored; values are coerced to the field types.
        """
        known = {f.name for f in fields(cls)}
        kwargs: Dict[str, Any] = {}
        for key, raw in data.items():
            if key not in known or raw is None:
                continue
            kwargs[key] = _coerce(key, raw)
        return cls(**kwargs)


def _coerce(name: str, raw: Any) -> Any:
    try:
        if name in _INT_FIELDS:
            if isinstance(raw, bool):
                raise TypeError("bool is not a size")
            as_float = float(raw)
            if not math.isfinite(as_float):
                raise ValueError("not a finite number")
            if as_float != int(as_float):
                raise ValueError("not an integer")
            return int(as_float)
        if name in _FLOAT_FIELDS:
            if isinstance(raw, bool):
                raise TypeError("bool is not a length")
            value = float(raw)
            if not math.isfinite(value):
                raise ValueError("not a finite number")
            return value
    except (TypeError, ValueError, OverflowError) as exc:
        raise InvalidConfigError(name, f"invalid value {raw!r} ({exc})") from exc
    if name in _BOOL_FIELDS:
        if isinstance(raw, bool):
            return raw
        text = str(raw).strip().lower()
        if text in _TRUTHY:
            return True
        if text in _FALSY:
            return False
        raise InvalidConfigError(name, f"invalid boolean {raw!r}")
    if name == "style":
        return str(raw.value if isinstance(raw, DungeonStyle) else raw).strip().lower()
    return raw


__all__ = ["DungeonConfig", "CONFIG_RANGES", "PLACEMENT_HALF_EXTENT"]
