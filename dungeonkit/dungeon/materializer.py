"""Boundary between a DungeonPlan and whatever scene host renders it.

A materializer turns a plan into scene objects and can later remove every
object it created through the handle it returned. The generator core never
talks to a scene directly; ``DungeonSession`` drives a materializer instead.

``InMemoryMaterializer`` keeps a flat list of named nodes per handle. It backs
the HTTP service and the tests, and doubles as a reference for real hosts.
"""
from __future__ import annotations

import uuid
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple

from .geometry import Color, Vec3, on_ground
from .plan import DungeonPlan


@dataclass(frozen=True)
class DungeonHandle:
    """Opaque token for one materialized dungeon."""

    id: str = field(default_factory=lambda: uuid.uuid4().hex)


@dataclass
class SceneNode:
    path: str
    kind: str
    center: Optional[Vec3] = None
    size: Optional[Vec3] = None
    color: Optional[Color] = None
    light: Optional[dict] = None


class SceneMaterializer(ABC):
    @abstractmethod
    def materialize(self, plan: DungeonPlan) -> DungeonHandle:
        """Create scene objects for ``plan`` under a single container."""

    @abstractmethod
    def clear(self, handle: Optional[DungeonHandle]) -> None:
        """Remove everything created for ``handle``.

        Must be idempotent: clearing an unknown, already cleared or ``None``
        handle is a no-op.
        """


class InMemoryMaterializer(SceneMaterializer):
    CONTAINER = "Generated Dungeon"

    def __init__(self):
        self._scenes: Dict[str, List[SceneNode]] = {}

    def materialize(self, plan: DungeonPlan) -> DungeonHandle:
        handle = DungeonHandle()
        root = self.CONTAINER
        nodes: List[SceneNode] = [SceneNode(root, "container")]

        for room in plan.rooms:
            group = f"{root}/Room_{room.id}"
            nodes.append(SceneNode(group, "group", center=on_ground(room.center)))
            for fp in plan.room_footprints(room):
                nodes.append(SceneNode(f"{group}/{fp.name}", "box", fp.center, fp.size, fp.color))

        for idx, corridor in enumerate(plan.corridors):
            group = f"{root}/Corridor_{idx}"
            nodes.append(SceneNode(group, "group"))
            for seg_idx, fp in enumerate(plan.corridor_footprints(corridor)):
                nodes.append(SceneNode(f"{group}/{fp.name}_{seg_idx}", "box", fp.center, fp.size, fp.color))

        for idx, deco in enumerate(plan.decorations):
            base = f"{root}/Room_{deco.room_id}/{deco.kind.value}_{idx}"
            light = None
            if deco.light is not None:
                light = {"color": deco.light.color, "intensity": deco.light.intensity, "range": deco.light.range}
            nodes.append(SceneNode(base, deco.kind.value, center=deco.position, light=light))
            for part in deco.parts:
                nodes.append(
                    SceneNode(f"{base}/{part.name}", "box", deco.position.shifted(*part.offset), part.scale, part.color)
                )

        self._scenes[handle.id] = nodes
        return handle

    def clear(self, handle: Optional[DungeonHandle]) -> None:
        if handle is None:
            return
        self._scenes.pop(handle.id, None)

    def nodes(self, handle: DungeonHandle) -> Tuple[SceneNode, ...]:
        return tuple(self._scenes.get(handle.id, ()))

    def handles(self) -> List[str]:
        return list(self._scenes)

    def __len__(self) -> int:
        return len(self._scenes)


__all__ = ["DungeonHandle", "SceneNode", "SceneMaterializer", "InMemoryMaterializer"]
