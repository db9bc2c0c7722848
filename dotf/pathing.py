"""Grid path finding and position helpers used by robots on the tile map."""

from __future__ import annotations

from collections import deque
from typing import Optional

from dotf.protocol import Vector2

Grid = list[list[int]]

TILE_SIZE = 32
MAP_COLS = 32
MAP_ROWS = 24
EMPTY = 0
FOLLOW_OFFSETS = (2, 1, 0)
_PASSABLE_START = frozenset({0, 3, 4})
_VISITED = 99


def _free(grid: Grid, x: int, y: int) -> bool:
    return 0 <= y < len(grid) and 0 <= x < len(grid[y]) and grid[y][x] == EMPTY


def manhattan_distance(p1: Vector2, p2: Vector2) -> int:
    """Sum of the absolute differences of the coordinates."""
    return abs(p1.x - p2.x) + abs(p1.y - p2.y)


def _truncating_div(value: int, divisor: int) -> int:
    quotient = abs(value) // divisor
    return quotient if value >= 0 else -quotient


def screen_to_array_point(point: Vector2) -> Vector2:
    """Convert a screen position to the tile that holds it."""
    return Vector2(_truncating_div(point.x, TILE_SIZE), _truncating_div(point.y, TILE_SIZE))


def find_path_bfs(src: Vector2, dst: Vector2, grid: Grid) -> list[Vector2]:
    """Breadth-first path from ``src`` to a tile within one step of ``dst``.

    The result holds screen waypoints with the first step last, so it can be
    consumed with ``pop()``. It is empty when there is no path or when
    ``src`` is already next to ``dst``. The start tile may hold a robot or a
    demon; every other tile walked through must be empty.
    """
    work = [list(row) for row in grid]
    queue: deque[tuple[int, int, Optional[tuple]]] = deque([(src.x, src.y, None)])
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


def follow_robot(src: Vector2, dst: Vector2, grid: Grid) -> list[Vector2]:
    """Path towards a free tile beside the robot standing at ``dst``.

    Offsets of 2, 1 and 0 tiles are tried on each axis, skipping the first
    pair (two tiles right and two down). Raises ``ValueError`` if none of
    the candidate tiles is free.
    """
    for i, dx in enumerate(FOLLOW_OFFSETS):
        for j, dy in enumerate(FOLLOW_OFFSETS):
            if i == 0 and j == 0:
                continue
            x, y = dst.x + dx, dst.y + dy
            if 0 <= x < MAP_COLS and 0 <= y < MAP_ROWS and _free(grid, x, y):
                return find_path_bfs(src, Vector2(x, y), grid)
    raise ValueError(f"no free tile to follow the robot at ({dst.x}, {dst.y})")