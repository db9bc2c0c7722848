"""Demons: the enemy units that roam around their bases and fight robots."""

from __future__ import annotations

import enum
import math
from collections import deque
from typing import Any, Callable, Optional, Protocol, Sequence

from dotf.character import AITask, Character
from dotf.protocol import Vector2

Grid = list[list[int]]
FireCallback = Callable[["Demon"], Any]

TILE_SIZE = 32
ROAM_OFFSETS = (-3, -2, -1, 0, 1, 2, 3)
BASE_RADIUS = 3
KEEP_DISTANCE = 4
ATTACK_RANGE = 5
EMPTY = 0
_PASSABLE_START = frozenset({0, 3, 4})
_VISITED = 99
_FAR_TASKS = (5, 6)


class _Rng(Protocol):
    def randint(self, a: int, b: int) -> int: ...

    def randrange(self, stop: int) -> int: ...


class DemonType(enum.Enum):
    DEMON = 0
    BOSS1 = 1


def _in_grid(grid: Grid, x: int, y: int) -> bool:
    return 0 <= y < len(grid) and 0 <= x < len(grid[y])


def _free(grid: Grid, x: int, y: int) -> bool:
    return _in_grid(grid, x, y) and grid[y][x] == EMPTY


class Demon(Character):
    """A demon tied to a base.

    ``base`` is any object with ``map_position`` and ``current_demons``.
    """

    is_robot = False

    def __init__(self, demon_id: int, name: str, description: str,
                 health_point: int, speed: int, map_position: Vector2,
                 base: Any = None, fire_speed: int = 10,
                 position: Optional[Vector2] = None) -> None:
        super().__init__(name, description, health_point, speed,
                         map_position, fire_speed, position)
        self.id = demon_id
        self.base = base
        self.demon_type = DemonType.DEMON

    def distance_to(self, position: Vector2) -> int:
        """Euclidean distance in tiles, truncated to an integer."""
        dx = self.map_position.x - position.x
        dy = self.map_position.y - position.y
        return math.isqrt(dx * dx + dy * dy)

    def outside_base_bounds(self, position: Vector2) -> bool:
        """True if ``position`` is more than three tiles from the base on an axis."""
        if self.base is None:
            return False
        home = self.base.map_position
        return abs(position.x - home.x) > BASE_RADIUS or abs(position.y - home.y) > BASE_RADIUS

    def find_path_bfs(self, src: Vector2, dst: Vector2, grid: Grid) -> list[Vector2]:
        """Breadth-first path to a tile next to ``dst``.

        Returns screen waypoints with the first step last; empty when no path
        exists or ``src`` is already within one tile of ``dst``.
        """
        work = [list(row) for row in grid]
        queue: deque[tuple[int, int, Any]] = deque([(src.x, src.y, None)])
        while queue:
            node = queue.popleft()
            x, y, _ = node
            if work[y][x] not in _PASSABLE_START:
                continue
            work[y][x] = _VISITED
            if abs(x - dst.x) + abs(y - dst.y) <= 1:
                path: list[Vector2] = []
                while node[2] is not None:
                    path.append(Vector2(node[0] * TILE_SIZE, node[1] * TILE_SIZE))
                    node = node[2]
                return path
            for nx, ny in ((x + 1, y), (x - 1, y), (x, y + 1), (x, y - 1)):
                if _free(work, nx, ny):
                    queue.append((nx, ny, node))
        return []

    def _walk_towards(self, task_number: int, target: Vector2, grid: Grid) -> None:
        if not self.ready:
            return
        if task_number in _FAR_TASKS or not self.outside_base_bounds(target):
            path = self.find_path_bfs(self.map_position, target, grid)
            if path:
                self.path = path
            else:
                self.clear_path()
                self.ready = True

    def chase(self, task_number: int, robot: Character, grid: Grid) -> None:
        """Step one tile towards ``robot`` where the way is free."""
        me, other = self.map_position, robot.map_position
        tx, ty = me.x, me.y
        if me.x > other.x:
            if _free(grid, tx - 1, ty):
                tx = me.x - 1
        elif me.x < other.x:
            if _free(grid, tx + 1, ty):
                tx = me.x + 1
        if me.y >= other.y:
            if _free(grid, tx, ty - 1):
                ty = me.y - 1
        elif _free(grid, tx, ty + 1):
            ty = me.y + 1
        self._walk_towards(task_number, Vector2(tx, ty), grid)

    def evade(self, task_number: int, robot: Character, grid: Grid) -> None:
        """Step one tile away from ``robot`` where the way is free."""
        me, other = self.map_position, robot.map_position
        tx, ty = me.x, me.y
        if me.x >= other.x:
            if _free(grid, tx + 1, ty):
                tx = me.x + 1
        elif _free(grid, tx - 1, ty):
            tx = me.x - 1
        if me.y >= other.y:
            if _free(grid, tx, ty + 1):
                ty = me.y + 1
        elif _free(grid, tx, ty - 1):
            ty = me.y - 1
        self._walk_towards(task_number, Vector2(tx, ty), grid)

    def find_closest_robot(self, robots: Sequence[Character]) -> Character:
        """The first robot at the smallest distance."""
        if not robots:
            raise ValueError("no robots to choose from")
        return min(robots, key=lambda robot: self.distance_to(robot.map_position))

    def find_closest_base(self, bases: Sequence[Any]) -> Any:
        """The nearest base other than the demon's own."""
        others = [base for base in bases if base is not self.base]
        if not others:
            raise ValueError("no other base to choose from")
        return min(others, key=lambda base: self.distance_to(base.map_position))

    def roam(self, start: Vector2, base_location: Vector2, grid: Grid,
             rng: _Rng) -> list[Vector2]:
        """Path to a random free tile near the base.

        A newly created demon also picks a random free starting tile.
        """
        offsets = ROAM_OFFSETS[:-1]
        candidates = [(base_location.x + dx, base_location.y + dy)
                      for dx in offsets for dy in offsets]
        if not any(_free(grid, x, y) for x, y in candidates):
            raise ValueError("no free tile to roam to around the base")
        needed = 2 if self.first_created else 1
        target = start
        found = 0
        while found < needed:
            x = offsets[rng.randint(0, len(offsets) - 1)] + base_location.x
            y = offsets[rng.randint(0, len(offsets) - 1)] + base_location.y
            if not _free(grid, x, y):
                continue
            if found == 0:
                target = Vector2(x, y)
            else:
                start = Vector2(x, y)
            found += 1
        return self.find_path_bfs(start, target, grid)

    def attack(self, fire: Optional[FireCallback] = None) -> bool:
        """Fire along ``fire_direction`` if reloaded; return whether a shot left."""
        if self.spectating:
            return False
        if self.cur_fire_delay < self.stats.fire_delay:
            return False
        self.cur_fire_delay = 0
        if self.fire_direction.x == 0 and self.fire_direction.y == 0:
            return False
        if fire is not None:
            fire(self)
        return True

    def attack_keeping_distance(self, task_number: int, robot: Character, grid: Grid,
                                rng: _Rng, fire: Optional[FireCallback] = None) -> None:
        """Hold about four tiles from ``robot`` and shoot when in range."""
        distance = self.distance_to(robot.map_position)
        if distance > KEEP_DISTANCE:
            self.chase(task_number, robot, grid)
        elif distance < KEEP_DISTANCE:
            self.evade(task_number, robot, grid)

        if distance > ATTACK_RANGE:
            return
        self.task = AITask.ATTACK
        if task_number in (2, 3) and self.nearby_robots:
            self.target = self.nearby_robots[0]
        elif task_number == 4 and self.nearby_robots:
            self.target = self.find_closest_robot(self.nearby_robots)
        if rng.randrange(2) == 0 and self.target is not None:
            self.aim_at(self.target)
            self.attack(fire)

    def warn_base_demon(self, task_number: int, demon: Demon, grid: Grid,
                        rng: _Rng, fire: Optional[FireCallback] = None) -> None:
        """Have ``demon`` join the fight against the robots near this demon."""
        robots = list(self.nearby_robots[:len(demon.nearby_robots)])
        for robot in robots:
            demon.attack_keeping_distance(task_number, robot, grid, rng, fire)

    def situations(self, grid: Grid, bases: Sequence[Any], rng: _Rng,
                   fire: Optional[FireCallback] = None) -> None:
        """Decide this frame's behaviour from the robots around."""
        if not self.nearby_robots:
            self.task = AITask.IDLE
            if self.ready and self.base is not None:
                home = self.base.map_position
                if self.first_created:
                    self.first_created = False
                    self.path = self.roam(home, home, grid, rng)
                else:
                    self.path = self.roam(self.map_position, home, grid, rng)
            return

        robots = list(self.nearby_robots)
        robot_count = len(robots)
        base_demons = list(self.base.current_demons) if self.base is not None else []
        demon_count = len(base_demons)

        if robot_count <= 2:
            for robot in robots:
                self.attack_keeping_distance(2, robot, grid, rng, fire)
        else:
            for demon in base_demons:
                self.warn_base_demon(3, demon, grid, rng, fire)
            others = [base for base in bases if base is not self.base]
            if demon_count < 2 * robot_count and others:
                closest = self.find_closest_base(bases)
                for demon in list(closest.current_demons):
                    self.warn_base_demon(5, demon, grid, rng, fire)

        if demon_count >= 2 * robot_count:
            for robot in robots:
                self.attack_keeping_distance(4, robot, grid, rng, fire)