"""Player state and movement with wall collision."""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum

from .config import GameMap
from .vector import Direction, Vector, direction_vector

MOVE_SPEED = 0.05
"""Distance moved per update."""

ROTATION_SPEED = 0.05
"""Angle in radians turned per update."""

MIN_DISTANCE = 0.2
"""Closest the player may come to a wall."""

FOV = math.radians(66)
"""Default horizontal field of view in radians."""


class Rotation(Enum):
    """Turning state of the player."""

    NONE = 0
    LEFT = 1
    RIGHT = 2


def _is_wall_at(game_map: GameMap, point: Vector) -> bool:
    return game_map.is_wall(int(point.x), int(point.y))


def min_wall_dist(game_map: GameMap, p: Vector) -> bool:
    """Return True if ``p`` or a point MIN_DISTANCE away along an axis is in a wall."""
    probes = (
        p,
        Vector(p.x + MIN_DISTANCE, p.y),
        Vector(p.x - MIN_DISTANCE, p.y),
        Vector(p.x, p.y + MIN_DISTANCE),
        Vector(p.x, p.y - MIN_DISTANCE),
    )
    return any(_is_wall_at(game_map, probe) for probe in probes)


def check_wall(game_map: GameMap, pos: Vector, old_pos: Vector) -> Vector:
    """Return where the player ends up when moving from ``old_pos`` to ``pos``.

    A blocked move first keeps the old x, then the old y, then both.
    """
    if not min_wall_dist(game_map, pos):
        return pos
    candidate = Vector(old_pos.x, pos.y)
    if not min_wall_dist(game_map, candidate):
        return candidate
    candidate = Vector(pos.x, old_pos.y)
    if not min_wall_dist(game_map, candidate):
        return candidate
    return Vector(old_pos.x, old_pos.y)


def _clamp(value: float, limit: int) -> float:
    if value < 0:
        return 0.0
    if value >= limit:
        return float(limit)
    return value


@dataclass
class PlayerState:
    """Position, view direction, camera plane and the current input."""

    pos: Vector
    direction: Vector
    plane: Vector
    move_x: Direction = Direction.NONE
    move_y: Direction = Direction.NONE
    rot: Rotation = Rotation.NONE
    move_speed: float = MOVE_SPEED
    rot_speed: float = ROTATION_SPEED

    def update(self, game_map: GameMap) -> bool:
        """Apply one step of the current input; return True if anything changed."""
        moved = self._step(game_map)
        turned = self._turn()
        return moved or turned

    def _step(self, game_map: GameMap) -> bool:
        old = self.pos
        forward = self.direction * self.move_speed
        pos = old
        if self.move_y is Direction.UP:
            pos = pos + forward
        elif self.move_y is Direction.DOWN:
            pos = pos - forward
        sideways = forward.rotate(math.pi / 2)
        if self.move_x is Direction.RIGHT:
            pos = pos + sideways
        elif self.move_x is Direction.LEFT:
            pos = pos - sideways
        pos = Vector(_clamp(pos.x, game_map.width), _clamp(pos.y, game_map.height))
        self.pos = check_wall(game_map, pos, old)
        return self.pos != old

    def _turn(self) -> bool:
        if self.rot is Rotation.LEFT:
            angle = -self.rot_speed
        elif self.rot is Rotation.RIGHT:
            angle = self.rot_speed
        else:
            return False
        self.direction = self.direction.rotate(angle)
        self.plane = self.plane.rotate(angle)
        return True


def new_player(pos: Vector, direction: Direction, fov: float = FOV) -> PlayerState:
    """Create a player at ``pos`` facing ``direction`` with the given field of view."""
    facing = direction_vector(direction)
    plane = facing.perp() * math.tan(fov / 2)
    return PlayerState(pos=pos, direction=facing, plane=plane)