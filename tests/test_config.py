import pytest

from raycube.config import (
    GameMap,
    ParseError,
    find_player,
    is_map_enclosed,
    load_map,
    parse_color,
    read_config,
)
from raycube.vector import Direction, Vector

HEADER = (
    "NO ./textures/north.xpm\n"
    "SO ./textures/south.xpm\n"
    "WE ./textures/west.xpm\n"
    "EA ./textures/east.xpm\n"
    "F 220,100,0\n"
    "C 225,30,0\n"
    "\n"
)

MAP_ROWS = ["111111", "100001", "10N001", "111111"]


def write_scene(tmp_path, rows, header=HEADER):
    path = tmp_path / "scene.cub"
    path.write_text(header + "\n".join(rows) + "\n")
    return path


def make_map(rows):
    return GameMap(
        width=len(rows[0]),
        height=len(rows),
        cells=[[1 if c == "1" else 0 for c in row] for row in rows],
    )


def test_parse_color_channels():
    value = parse_color("220,100,0")
    assert value >> 16 == 220
    assert (value >> 8) & 0xFF == 100
    assert value & 0xFF == 0


def test_parse_color_with_newline():
    assert parse_color("225,30,0\n") == parse_color("225,30,0")


@pytest.mark.parametrize("text", ["1,2", "12", ""])
def test_parse_color_missing_comma(text):
    with pytest.raises(ParseError):
        parse_color(text)


def test_read_config(tmp_path):
    config = read_config(write_scene(tmp_path, MAP_ROWS))
    assert config.north_texture == "./textures/north.xpm"
    assert config.south_texture == "./textures/south.xpm"
    assert config.west_texture == "./textures/west.xpm"
    assert config.east_texture == "./textures/east.xpm"
    assert config.floor_color == parse_color("220,100,0")
    assert config.ceiling_color == parse_color("225,30,0")


def test_read_config_indented_lines(tmp_path):
    header = HEADER.replace("NO ", "  \tNO ")
    config = read_config(write_scene(tmp_path, MAP_ROWS, header))
    assert config.north_texture == "./textures/north.xpm"


def test_read_config_missing_entry(tmp_path):
    header = HEADER.replace("EA ./textures/east.xpm\n", "\n")
    with pytest.raises(ParseError):
        read_config(write_scene(tmp_path, MAP_ROWS, header))


def test_load_map(tmp_path):
    game_map = load_map(write_scene(tmp_path, MAP_ROWS))
    assert game_map.width == len(MAP_ROWS[0])
    assert game_map.height == len(MAP_ROWS)
    assert game_map.cells[0] == [1] * len(MAP_ROWS[0])
    assert game_map.cells[2][2] == 0
    assert game_map.cells[1][1] == 0


def test_load_map_tabs_and_padding(tmp_path):
    game_map = load_map(write_scene(tmp_path, ["1\t1", "11"]))
    assert game_map.width == 6
    assert game_map.cells[0] == [1, 0, 0, 0, 0, 1]
    assert game_map.cells[1] == [1, 1, 0, 0, 0, 0]


def test_short_file_raises(tmp_path):
    path = tmp_path / "short.cub"
    path.write_text("NO a\nSO b\n")
    with pytest.raises(ParseError):
        load_map(path)
    with pytest.raises(ParseError):
        find_player(path)


def test_find_player(tmp_path):
    pos, direction = find_player(write_scene(tmp_path, MAP_ROWS))
    assert pos == Vector(2.5, 2.5)
    assert direction is Direction.UP


@pytest.mark.parametrize(
    "char, expected",
    [("S", Direction.DOWN), ("W", Direction.LEFT), ("E", Direction.RIGHT)],
)
def test_find_player_directions(tmp_path, char, expected):
    rows = [row.replace("N", char) for row in MAP_ROWS]
    _, direction = find_player(write_scene(tmp_path, rows))
    assert direction is expected


@pytest.mark.parametrize(
    "rows",
    [
        ["111111", "100001", "111111"],
        ["111111", "1N0S01", "111111"],
    ],
)
def test_find_player_wrong_count(tmp_path, rows):
    with pytest.raises(ParseError):
        find_player(write_scene(tmp_path, rows))


def test_loaded_map_is_enclosed(tmp_path):
    path = write_scene(tmp_path, MAP_ROWS)
    game_map = load_map(path)
    pos, _ = find_player(path)
    assert is_map_enclosed(game_map, int(pos.x), int(pos.y)) is True


def test_open_map_is_not_enclosed():
    game_map = make_map(["11111", "10001", "10000", "11111"])
    assert is_map_enclosed(game_map, 1, 1) is False


def test_is_wall():
    game_map = make_map(["111", "101", "111"])
    assert game_map.is_wall(1, 1) is False
    assert game_map.is_wall(0, 1) is True
    assert game_map.is_wall(-1, 1) is True
    assert game_map.is_wall(1, 3) is True