import pytest

from raycube.colors import lookup_color
from raycube.config import GameMap
from raycube.raycast import (
    BLACK,
    cast_ray,
    vector_to_screen,
    wall_color,
    wall_side,
    window_bound,
)
from raycube.vector import Direction, Vector

BOX = ["11111", "10001", "10001", "10001", "11111"]


def make_map(rows):
    return GameMap(
        width=len(rows[0]),
        height=len(rows),
        cells=[[1 if c == "1" else 0 for c in row] for row in rows],
    )


def test_window_bound():
    maximum = 10
    assert window_bound(-5, maximum) == 0
    assert window_bound(15, maximum) == maximum - 1
    assert window_bound(5, maximum) == 5


def test_vector_to_screen_clamps():
    assert vector_to_screen(Vector(-1.0, -2.0), 10, 100, 80) == (0, 0)
    assert vector_to_screen(Vector(50.0, 50.0), 10, 100, 80) == (99, 79)


def test_vector_to_screen_scales():
    assert vector_to_screen(Vector(2.0, 3.0), 10, 100, 100) == (20, 30)


def test_centre_ray_hits_east_wall():
    game_map = make_map(BOX)
    hit = cast_ray(game_map, Vector(2.5, 2.5), Vector(1.0, 0.0), Vector(0.0, 0.66), 5, 10)
    assert hit.ray_dir == Vector(1.0, 0.0)
    assert (hit.map_x, hit.map_y) == (4, 2)
    assert hit.side == 0
    assert hit.distance == pytest.approx(1.5)
    assert wall_side(hit.ray_dir, hit.side) is Direction.RIGHT
    assert wall_color(hit) == lookup_color("red")


def test_ray_from_inside_wall():
    game_map = make_map(BOX)
    hit = cast_ray(game_map, Vector(0.5, 0.5), Vector(1.0, 0.0), Vector(0.0, 0.66), 3, 10)
    assert hit.side == -1
    assert hit.distance == 0.0
    assert wall_color(hit) == BLACK


@pytest.mark.parametrize("column", range(0, 40, 3))
def test_every_ray_ends_on_a_wall(column):
    game_map = make_map(BOX)
    hit = cast_ray(game_map, Vector(2.3, 2.7), Vector(0.0, -1.0), Vector(0.66, 0.0), column, 40)
    assert game_map.is_wall(hit.map_x, hit.map_y)
    assert hit.distance >= 0
    assert hit.side in (0, 1)


@pytest.mark.parametrize(
    "ray, side, expected",
    [
        (Vector(-1.0, 0.0), 0, Direction.LEFT),
        (Vector(1.0, 0.0), 0, Direction.RIGHT),
        (Vector(0.0, 1.0), 1, Direction.DOWN),
        (Vector(0.0, -1.0), 1, Direction.UP),
    ],
)
def test_wall_side(ray, side, expected):
    assert wall_side(ray, side) is expected


def test_wall_colors_by_face():
    game_map = make_map(BOX)
    pos = Vector(2.5, 2.5)
    plane = Vector(0.0, 0.0)
    west = cast_ray(game_map, pos, Vector(-1.0, 0.0), plane, 0, 1)
    south = cast_ray(game_map, pos, Vector(0.0, 1.0), plane, 0, 1)
    north = cast_ray(game_map, pos, Vector(0.0, -1.0), plane, 0, 1)
    assert wall_color(west) == lookup_color("green")
    assert wall_color(south) == lookup_color("orange")
    assert wall_color(north) == lookup_color("yellow")