"""Drawing the first-person view and the top-down minimap into images."""

from __future__ import annotations

import math
from typing import Sequence

from .colors import lookup_color
from .config import GameMap
from .image import Image
from .movement import PlayerState
from .raycast import SIDE_NONE, SIDE_X, RayHit, cast_ray, vector_to_screen, window_bound, wall_side
from .vector import Vector

BLACK = lookup_color("black")
WHITE = lookup_color("white")
GRAY = lookup_color("gray")
GREEN = lookup_color("green")
RED = lookup_color("red")
BLUE = lookup_color("blue")
YELLOW = lookup_color("yellow")

_TOUCHING_WALL_HEIGHT_FACTOR = 1_000_000


def _trunc_div(a: int, b: int) -> int:
    """Integer division rounding towards zero."""
    quotient = abs(a) // abs(b)
    return quotient if (a >= 0) == (b > 0) else -quotient


def texture_column(hit: RayHit, pos: Vector, texture: Image) -> int:
    """Return the texture column that the ray's hit point falls on."""
    point = hit.ray_dir * hit.distance + pos
    if hit.side == SIDE_X:
        wall_x = point.y - math.floor(point.y)
        if hit.ray_dir.x < 0:
            wall_x = 1 - wall_x
    else:
        wall_x = point.x - math.floor(point.x)
        if hit.ray_dir.y > 0:
            wall_x = 1 - wall_x
    return int(wall_x * (texture.width - 1))


def _wall_height(distance: float, height: int) -> int:
    if distance <= 0:
        return height * _TOUCHING_WALL_HEIGHT_FACTOR
    return max(1, int(height / distance))


def _draw_wall(
    image: Image,
    x: int,
    top: int,
    bottom: int,
    wall_height: int,
    hit: RayHit,
    pos: Vector,
    texture: Image,
) -> None:
    column = texture_column(hit, pos, texture)
    column = min(max(column, 0), texture.width - 1)
    step = texture.height / wall_height
    text_y = (_trunc_div(wall_height - image.height, 2) + top) * step
    last_row = texture.height - 1
    for y in range(top, bottom + 1):
        row = min(max(int(text_y), 0), last_row)
        image.put_pixel(x, y, texture.get_pixel(column, row))
        text_y += step


def _draw_column(
    image: Image,
    x: int,
    hit: RayHit,
    pos: Vector,
    textures: Sequence[Image],
    floor_color: int,
    ceiling_color: int,
) -> None:
    height = image.height
    if hit.side == SIDE_NONE:
        image.draw_v_line((x, 0), (x, height - 1), BLACK)
        return
    wall_height = _wall_height(hit.distance, height)
    top = window_bound(height // 2 - wall_height // 2, height)
    bottom = window_bound(height // 2 + wall_height // 2, height)
    if top != 0:
        image.draw_v_line((x, 0), (x, top), ceiling_color)
    texture = textures[wall_side(hit.ray_dir, hit.side)]
    _draw_wall(image, x, top, bottom, wall_height, hit, pos, texture)
    if bottom != height - 1:
        image.draw_v_line((x, bottom), (x, height - 1), floor_color)


def render_view(
    image: Image,
    game_map: GameMap,
    state: PlayerState,
    textures: Sequence[Image],
    floor_color: int,
    ceiling_color: int,
) -> None:
    """Draw the player's view: ceiling, textured walls and floor, column by column.

    ``textures`` holds the north, south, west and east wall textures in that order.
    """
    for x in range(image.width):
        hit = cast_ray(game_map, state.pos, state.direction, state.plane, x, image.width)
        _draw_column(image, x, hit, state.pos, textures, floor_color, ceiling_color)


def _draw_cells(image: Image, game_map: GameMap, block: int) -> None:
    for y, row in enumerate(game_map.cells):
        for x, cell in enumerate(row):
            color = WHITE if cell == 1 else BLACK
            image.draw_square((x * block, y * block), block, color)


def _draw_grid(image: Image, game_map: GameMap, block: int) -> None:
    right = game_map.width * block
    for y in range(game_map.height):
        image.draw_h_line((0, y * block), (right, y * block), GRAY)
    bottom = game_map.height * block
    for x in range(game_map.width):
        image.draw_v_line((x * block, 0), (x * block, bottom), GRAY)


def render_minimap(image: Image, game_map: GameMap, state: PlayerState) -> None:
    """Draw a top-down map with the player, view direction, camera plane and rays."""
    if game_map.width <= 0 or game_map.height <= 0:
        raise ValueError("cannot draw an empty map")
    width, height = image.width, image.height
    block = min(width // game_map.width, height // game_map.height)

    def screen(v: Vector) -> tuple[int, int]:
        return vector_to_screen(v, block, width, height)

    _draw_cells(image, game_map, block)
    _draw_grid(image, game_map, block)

    player = screen(state.pos)
    marker = block // 4
    corner = (max(player[0] - marker // 2, 0), max(player[1] - marker // 2, 0))
    image.draw_square(corner, marker, GREEN)

    ahead = state.pos + state.direction
    image.draw_line(player, screen(ahead), RED)
    image.draw_line(screen(ahead - state.plane), screen(ahead + state.plane), BLUE)

    for x in range(width):
        hit = cast_ray(game_map, state.pos, state.direction, state.plane, x, width)
        if hit.side != SIDE_NONE:
            image.draw_line(player, screen(hit.ray_dir * hit.distance + state.pos), YELLOW)