"""Demon bases: spawn points that keep track of their living demons."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from dotf.protocol import Vector2

DEFAULT_SPAWN_LIMIT = 3


@dataclass(eq=False)
class DemonBase:
    """A base on the map with the demons it has spawned and may still spawn."""

    map_position: Vector2
    base_number: int = 0
    sprite: Any = None
    current_targets: list[Any] = field(default_factory=list)
    current_demons: list[Any] = field(default_factory=list)
    spawn_limit: int = DEFAULT_SPAWN_LIMIT

    def reduce_spawn_limit(self, amount: int) -> None:
        self.spawn_limit -= amount

    def add_demon(self, demon: Any) -> None:
        self.current_demons.append(demon)

    def remove_demon(self, demon: Any) -> None:
        """Drop every entry that is ``demon`` itself."""
        self.current_demons = [d for d in self.current_demons if d is not demon]