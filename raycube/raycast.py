"""Grid ray casting (DDA) and screen-coordinate helpers."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple

from .colors import lookup_color
from .config import GameMap
from .vector import Direction, Vector

INFINITY_VALUE = 1e30
"""Stand-in for an infinite step length when a ray is parallel to an axis."""

RED = lookup_color("red")
GREEN = lookup_color("green")
ORANGE = lookup_color("orange")
YELLOW = lookup_color("yellow")
BLACK = lookup_color("black")

SIDE_NONE = -1
SIDE_X = 0
SIDE_Y = 1


@dataclass(frozen=True)
class RayHit:
    """Where a ray met a wall.

    ``side`` is 0 when a vertical grid line (x side) was crossed, 1 for a
    horizontal one, and -1 when the ray started inside a wall.
    """

    ray_dir: Vector
    map_x: int
    map_y: int
    side: int
    distance: float


def cast_ray(
    game_map: GameMap,
    pos: Vector,
    direction: Vector,
    plane: Vector,
    x: int,
    width: int,
) -> RayHit:
    """Cast the ray for screen column ``x`` of ``width`` and return its hit."""
    ray = plane * (2 * x / width - 1) + direction
    map_x, map_y = int(pos.x), int(pos.y)
    delta_x = INFINITY_VALUE if ray.x == 0 else abs(1 / ray.x)
    delta_y = INFINITY_VALUE if ray.y == 0 else abs(1 / ray.y)
    if ray.x < 0:
        step_x = -1
        side_x = (pos.x - map_x) * delta_x
    else:
        step_x = 1
        side_x = (map_x + 1.0 - pos.x) * delta_x
    if ray.y < 0:
        step_y = -1
        side_y = (pos.y - map_y) * delta_y
    else:
        step_y = 1
        side_y = (map_y + 1.0 - pos.y) * delta_y

    side = SIDE_NONE
    while not game_map.is_wall(map_x, map_y):
        if side_x < side_y:
            side_x += delta_x
            map_x += step_x
            side = SIDE_X
        else:
            side_y += delta_y
            map_y += step_y
            side = SIDE_Y

    if side == SIDE_X:
        distance = side_x - delta_x
    elif side == SIDE_Y:
        distance = side_y - delta_y
    else:
        distance = 0.0
    return RayHit(ray_dir=ray, map_x=map_x, map_y=map_y, side=side, distance=distance)


def window_bound(p: int, maximum: int) -> int:
    """Clamp ``p`` into ``0 .. maximum - 1``."""
    if p < 0:
        return 0
    if p >= maximum:
        return maximum - 1
    return p


def vector_to_screen(v: Vector, size: int, width: int, height: int) -> Tuple[int, int]:
    """Scale a map position by ``size`` into clamped screen pixel coordinates."""
    return (
        window_bound(int(v.x * size), width),
        window_bound(int(v.y * size), height),
    )


def wall_color(hit: RayHit) -> int:
    """Return a flat colour for the wall face that a ray hit."""
    if hit.side == SIDE_X and hit.ray_dir.x > 0:
        return RED
    if hit.side == SIDE_X and hit.ray_dir.x < 0:
        return GREEN
    if hit.side == SIDE_Y and hit.ray_dir.y > 0:
        return ORANGE
    if hit.side == SIDE_Y and hit.ray_dir.y < 0:
        return YELLOW
    return BLACK


def wall_side(ray_dir: Vector, side: int) -> Direction:
    """Return the direction the ray travelled when it crossed the hit side."""
    if side == SIDE_X:
        return Direction.RIGHT if ray_dir.x > 0 else Direction.LEFT
    return Direction.DOWN if ray_dir.y > 0 else Direction.UP