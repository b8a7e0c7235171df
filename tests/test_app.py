import pytest

from raycube.app import Game, main
from raycube.config import ParseError, parse_color
from raycube.movement import Rotation
from raycube.vector import Direction, Vector
from raycube.window import KEY_A, KEY_D, KEY_ESCAPE, KEY_LEFT, KEY_RIGHT, KEY_S, KEY_W

ROOM = ["11111", "10001", "10N01", "10001", "11111"]
OPEN_ROOM = ["11111", "10001", "10N0 ", "10001", "11111"]
TEXTURE_COLORS = ("#ff0000", "#00ff00", "#0000ff", "#ffff00")


def _write_xpm(path, color):
    path.write_text(
        "/* XPM */\n"
        "static char *texture[] = {\n"
        '"2 2 1 1",\n'
        f'"a c {color}",\n'
        '"aa",\n'
        '"aa"\n'
        "};\n"
    )
    return path


def _write_scene(tmp_path, rows, textures=None):
    if textures is None:
        textures = [
            _write_xpm(tmp_path / f"{name}.xpm", color)
            for name, color in zip(("north", "south", "west", "east"), TEXTURE_COLORS)
        ]
    header = [
        f"NO {textures[0]}",
        f"SO {textures[1]}",
        f"WE {textures[2]}",
        f"EA {textures[3]}",
        "F 220,100,0",
        "C 225,30,0",
        "",
    ]
    scene = tmp_path / "scene.cub"
    scene.write_text("\n".join(header + rows) + "\n")
    return scene


@pytest.fixture
def game(tmp_path):
    return Game(_write_scene(tmp_path, ROOM), width=40, height=30)


def test_game_loads_scene(game):
    assert game.state.pos == Vector(2.5, 2.5)
    assert game.floor_color == parse_color("220,100,0")
    assert game.ceiling_color == parse_color("225,30,0")
    assert len(game.textures) == 4
    assert game.running is True


def test_open_map_is_rejected(tmp_path):
    with pytest.raises(ParseError):
        Game(_write_scene(tmp_path, OPEN_ROOM), width=40, height=30)


def test_missing_texture_is_an_error(tmp_path):
    missing = tmp_path / "missing.xpm"
    scene = _write_scene(tmp_path, ROOM, textures=[missing] * 4)
    with pytest.raises(OSError):
        Game(scene, width=40, height=30)


def test_key_press_and_release(game):
    game.handle_key_press(KEY_W)
    game.handle_key_press(KEY_D)
    game.handle_key_press(KEY_LEFT)
    assert game.state.move_y is Direction.UP
    assert game.state.move_x is Direction.RIGHT
    assert game.state.rot is Rotation.LEFT
    game.handle_key_release(KEY_W)
    game.handle_key_release(KEY_D)
    game.handle_key_release(KEY_LEFT)
    assert game.state.move_y is Direction.NONE
    assert game.state.move_x is Direction.NONE
    assert game.state.rot is Rotation.NONE


def test_release_of_other_key_keeps_movement(game):
    game.handle_key_press(KEY_W)
    game.handle_key_press(KEY_A)
    game.handle_key_press(KEY_RIGHT)
    game.handle_key_release(KEY_S)
    game.handle_key_release(KEY_D)
    game.handle_key_release(KEY_LEFT)
    assert game.state.move_y is Direction.UP
    assert game.state.move_x is Direction.LEFT
    assert game.state.rot is Rotation.RIGHT


def test_escape_closes(game):
    game.handle_key_press(KEY_ESCAPE)
    assert game.running is False


def test_close_is_repeatable(game):
    game.close()
    game.close()
    assert game.running is False


def test_tick_without_input_does_nothing(game):
    assert game.tick() is False
    assert game.state.pos == Vector(2.5, 2.5)


def test_tick_moves_forward(game):
    game.handle_key_press(KEY_W)
    assert game.tick() is True
    assert game.state.pos.y < 2.5
    assert game.state.pos.x == pytest.approx(2.5)


def test_render_fills_view(game):
    game.render()
    north = game.textures[Direction.UP].get_pixel(0, 0)
    assert game.view.get_pixel(20, 0) == game.ceiling_color
    assert game.view.get_pixel(20, 29) == game.floor_color
    assert game.view.get_pixel(20, 15) == north


def test_main_usage(capsys):
    assert main([]) == 1
    assert "Usage" in capsys.readouterr().err


def test_main_missing_file(tmp_path, capsys):
    assert main([str(tmp_path / "nothing.cub")]) == 1
    assert "Error" in capsys.readouterr().err