"""Pipeline orchestration for dungeon generation.

``generate_dungeon`` runs the phases in order (rooms, corridors, decorations)
as one synchronous batch and returns a fresh immutable DungeonPlan. Each call
owns its random source: pass ``seed`` for a reproducible run or ``rng`` to
drive it from an existing ``random.Random``. Process-wide random state is never
touched.

``DungeonSession`` is the single "current dungeon" slot: regenerating clears
whatever the previous call materialized before building the next plan.
"""
from __future__ import annotations

import logging
import os
import random
import secrets
import time
from dataclasses import replace
from types import MappingProxyType
from typing import Any, Callable, Dict, Optional

from ..logging_utils import get_logger
from .config import DungeonConfig
from .features import assign_features
from .geometry import Point
from .materializer import DungeonHandle, SceneMaterializer
from .metrics import init_metrics
from .plan import DungeonPlan
from .rooms import place_rooms, single_room
from .styles import colors_for, description_for
from .tunnels import carve_corridor_between, connect_rooms_with_corridors

logger = logging.getLogger(__name__)
_log = get_logger("pipeline")

# Endpoints of the stand-alone corridor preview.
PREVIEW_CORRIDOR_START = Point(0.0, 0.0)
PREVIEW_CORRIDOR_END = Point(20.0, 0.0)


def _timing_enabled(enable_timing: Optional[bool]) -> bool:
    if enable_timing is not None:
        return enable_timing
    val = os.environ.get("DUNGEONKIT_ENABLE_PHASE_TIMING", "1").lower()
    return val not in {"0", "false", "no", ""}


def _resolve_rng(seed: Optional[int], rng: Optional[random.Random]):
    if rng is not None:
        return seed, rng
    # 0 is a valid deterministic seed; only None means "pick one".
    if seed is None:
        seed = secrets.randbelow(1_000_000) + 1
    return seed, random.Random(seed)


def generate_dungeon(
    config: Optional[DungeonConfig] = None,
    seed: Optional[int] = None,
    rng: Optional[random.Random] = None,
    enable_timing: Optional[bool] = None,
) -> DungeonPlan:
    """Generate a complete dungeon plan.

    Raises InvalidConfigError before any randomness is consumed when the
    config cannot be honored. Dropped room slots are not an error; they show
    up as ``plan.rooms_dropped`` and a ``room_slot_dropped`` warning.
    """
    config = (config or DungeonConfig()).validate()
    seed, rng = _resolve_rng(seed, rng)
    metrics: Dict[str, Any] = init_metrics()

    timing = _timing_enabled(enable_timing)
    phase_times: Dict[str, int] = {}
    start = time.perf_counter()

    def _phase(label: str, fn: Callable, *a, **k):
        if not timing:
            return fn(*a, **k)
        ps = time.perf_counter()
        r = fn(*a, **k)
        phase_times[label] = int((time.perf_counter() - ps) * 1000)
        return r

    palette = colors_for(config.style)
    rooms, _target, _placed = _phase("place_rooms", place_rooms, config, rng, metrics)
    corridors = _phase("connect_rooms", connect_rooms_with_corridors, rooms, config.corridor_width)
    metrics["corridors"] = len(corridors)
    metrics["corridor_segments"] = sum(len(c.segments) for c in corridors)
    decorations = _phase("assign_features", assign_features, rooms, config, palette, rng, metrics)

    if timing:
        metrics["runtime_ms"] = int((time.perf_counter() - start) * 1000)
        metrics["phase_ms"] = MappingProxyType(phase_times)
    logger.debug("Dungeon phases seed=%s phase_ms=%s", seed, phase_times)

    plan = DungeonPlan(
        config=config,
        palette=palette,
        description=description_for(config.style),
        rooms=tuple(rooms),
        corridors=tuple(corridors),
        decorations=tuple(decorations),
        seed=seed,
        metrics=metrics,
    )
    _log.info(
        event="dungeon_generated",
        seed=seed,
        style=config.style,
        rooms=len(plan.rooms),
        requested=metrics["rooms_requested"],
        dropped=metrics["rooms_dropped"],
        corridors=metrics["corridors"],
        decorations=len(plan.decorations),
        runtime_ms=metrics["runtime_ms"],
    )
    return plan


def single_room_plan(
    config: Optional[DungeonConfig] = None,
    seed: Optional[int] = None,
    rng: Optional[random.Random] = None,
    center: Point = Point(0.0, 0.0),
) -> DungeonPlan:
    """Plan holding one room at ``center`` with its pillars only.

    Torches and treasure are dungeon-wide passes and are not applied here.
    """
    config = (config or DungeonConfig()).validate()
    seed, rng = _resolve_rng(seed, rng)
    palette = colors_for(config.style)
    metrics = init_metrics()
    room = single_room(config, rng, center)
    metrics.update(rooms_requested=1, rooms_placed=1, placement_attempts=1)
    room_only = replace(config, add_torches=False, add_treasure=False)
    decorations = assign_features([room], room_only, palette, rng, metrics)
    return DungeonPlan(
        config=config,
        palette=palette,
        description=description_for(config.style),
        rooms=(room,),
        decorations=tuple(decorations),
        seed=seed,
        metrics=metrics,
    )


def corridor_plan(
    config: Optional[DungeonConfig] = None,
    start: Point = PREVIEW_CORRIDOR_START,
    end: Point = PREVIEW_CORRIDOR_END,
) -> DungeonPlan:
    """Plan holding a single free-standing corridor (no rooms)."""
    config = (config or DungeonConfig()).validate()
    corridor = carve_corridor_between(start, end, config.corridor_width)
    metrics = init_metrics()
    metrics.update(corridors=1, corridor_segments=len(corridor.segments))
    return DungeonPlan(
        config=config,
        palette=colors_for(config.style),
        description=description_for(config.style),
        corridors=(corridor,),
        metrics=metrics,
    )


class DungeonSession:
    """Holds at most one live plan and, optionally, its materialized scene."""

    def __init__(self, materializer: Optional[SceneMaterializer] = None):
        self.materializer = materializer
        self._plan: Optional[DungeonPlan] = None
        self._handle: Optional[DungeonHandle] = None

    @property
    def plan(self) -> Optional[DungeonPlan]:
        return self._plan

    @property
    def handle(self) -> Optional[DungeonHandle]:
        return self._handle

    def clear(self) -> None:
        """Drop the current plan and its scene; a no-op when there is none."""
        if self._handle is not None and self.materializer is not None:
            self.materializer.clear(self._handle)
        self._handle = None
        self._plan = None

    def regenerate(
        self,
        config: Optional[DungeonConfig] = None,
        seed: Optional[int] = None,
        rng: Optional[random.Random] = None,
    ) -> DungeonPlan:
        """Clear the current dungeon, then generate and materialize a new one.

        A rejected config raises before anything is cleared.
        """
        config = (config or DungeonConfig()).validate()
        self.clear()
        return self.replace(generate_dungeon(config, seed=seed, rng=rng))

    def replace(self, plan: DungeonPlan) -> DungeonPlan:
        self.clear()
        if self.materializer is not None:
            self._handle = self.materializer.materialize(plan)
        self._plan = plan
        return plan
