"""Characters shared by robots and demons: stats, movement and status text."""

from __future__ import annotations

import enum
import math
import time
from dataclasses import dataclass, field, replace

from dotf.protocol import Vector2

Color = tuple[int, int, int]

HEAL_COLOR: Color = (15, 200, 15)
DAMAGE_COLOR: Color = (200, 15, 15)
STATUS_SECONDS = 2
INITIAL_FIRE_DELAY = 7
BASE_ARMOR = 10


def _round_half_away(value: float) -> int:
    return int(math.floor(value + 0.5)) if value >= 0 else -int(math.floor(-value + 0.5))


@dataclass
class CharacterStats:
    fire_speed: int
    fire_delay: int
    health: int
    max_health: int
    speed: int
    armor: int


@dataclass(order=True)
class StatusMessage:
    """A floating message shown until its end time; ordered by end."""

    end: float
    message: str = field(compare=False)
    color: Color | None = field(default=None, compare=False)


class AITask(enum.Enum):
    IDLE = 0
    ROAM = 1
    FOLLOW = 2
    ATTACK = 3


class ControlStatus(enum.Enum):
    P1 = 0
    P2 = 1
    AI = 2


class Character:
    """A unit on the map.

    ``position`` is the screen position (top-left) and ``path`` a list of
    screen waypoints whose last element is the next one to reach.
    """

    is_robot = False

    def __init__(self, name: str, description: str, health_point: int, speed: int,
                 map_position: Vector2, fire_speed: int,
                 position: Vector2 | None = None) -> None:
        self.name = name
        self.description = description
        self.map_position = map_position
        self.position = position if position is not None else Vector2()
        self.first_created = True
        self.cur_fire_delay = INITIAL_FIRE_DELAY
        self.task = AITask.IDLE
        self.ready = True
        self.spectating = False
        self.base_stats = CharacterStats(
            fire_speed=fire_speed,
            fire_delay=INITIAL_FIRE_DELAY,
            health=health_point,
            max_health=health_point,
            speed=speed,
            armor=BASE_ARMOR,
        )
        self.stats = replace(self.base_stats)
        self.fire_direction = Vector2(fire_speed, 0)
        self.current_targets: list[Character] = []
        self.path: list[Vector2] = []
        self.target: Character | None = None
        self.status_messages: list[StatusMessage] = []
        self.nearby_robots: list[Character] = []
        self.nearby_demons: list[Character] = []

    def heal(self, amount: int, now: float | None = None) -> None:
        healed = amount
        self.stats.health += amount
        if self.stats.health > self.stats.max_health:
            healed = self.stats.max_health - self.stats.health
            self.stats.health = self.stats.max_health
        if healed > 0:
            now = time.time() if now is None else now
            self.add_status_message(f"+{healed}", now + STATUS_SECONDS, HEAL_COLOR)

    def take_hit(self, damage: int, now: float | None = None) -> None:
        taken = max(damage - self.stats.armor, 0)
        self.stats.health -= taken
        if taken > 0:
            now = time.time() if now is None else now
            self.add_status_message(f"-{taken}", now + STATUS_SECONDS, DAMAGE_COLOR)

    def update(self) -> None:
        if self.path:
            self.move()

    def move(self) -> None:
        """Step towards the next waypoint by at most ``stats.speed``."""
        if not self.path:
            return
        target = self.path[-1]
        current = self.position
        dx = target.x - current.x
        dy = target.y - current.y
        speed = self.stats.speed
        self.ready = False

        if dx == 0 and dy == 0:
            self.position = target
            self.path.pop()
            self.ready = True
        elif dy != 0 and abs(dy) <= speed:
            self.position = Vector2(current.x, target.y)
        elif dx != 0 and abs(dx) <= speed:
            self.position = Vector2(target.x, current.y)
        elif abs(dx) > abs(dy):
            self.position = Vector2(current.x + speed * (1 if dx > 0 else -1), current.y)
        else:
            self.position = Vector2(current.x, current.y + speed * (1 if dy > 0 else -1))

    def aim_at(self, enemy: Character) -> None:
        self.fire_direction = enemy.map_position - self.map_position

    def boost_stats(self, perc: int) -> None:
        base = self.base_stats
        self.stats.armor = base.armor + _round_half_away(base.armor / 100.0 * perc)
        self.stats.max_health = base.max_health + _round_half_away(base.max_health / 100.0 * perc)
        self.stats.speed = base.speed + _round_half_away(base.speed / 100.0 * perc)

    def reset_stats_to_default(self) -> None:
        self.stats = replace(self.base_stats, health=self.stats.health)

    def add_status_message(self, message: str, end: float,
                           color: Color | None = None) -> None:
        self.status_messages.append(StatusMessage(end, message, color))
        self.status_messages.sort()

    def update_status_messages(self, now: float | None = None) -> None:
        now = time.time() if now is None else now
        self.status_messages = [m for m in self.status_messages if now - m.end < 0]

    def clear_path(self) -> None:
        self.path.clear()

    def status(self) -> StatusMessage | None:
        """The message that expires soonest, or None."""
        return self.status_messages[0] if self.status_messages else None