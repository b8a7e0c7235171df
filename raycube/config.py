"""Reading scene description files: textures, colours, map and player."""

from __future__ import annotations

import os
import re
from dataclasses import dataclass
from typing import List, Tuple

from .vector import Direction, Vector

HEADER_LINES = 7
"""Number of configuration lines that come before the map grid."""

TAB_WIDTH = 4
"""Number of map columns a tab character stands for."""

_MAX_VALUE_LENGTH = 255
_CONFIG_LINE = re.compile(r"(\S{1,2})\s*(\S[^\n]*)")
_ATOI = re.compile(r"[ \t\n\v\f\r]*([+-]?[0-9]+)")
_TEXTURE_KEYS = {
    "NO": "north_texture",
    "SO": "south_texture",
    "WE": "west_texture",
    "EA": "east_texture",
}
_COLOR_KEYS = {"F": "floor_color", "C": "ceiling_color"}
_PLAYER_DIRECTIONS = {
    "N": Direction.UP,
    "S": Direction.DOWN,
    "W": Direction.LEFT,
    "E": Direction.RIGHT,
}

PathLike = "str | os.PathLike[str]"


class ParseError(ValueError):
    """Raised when a scene description file is malformed."""


@dataclass(frozen=True)
class Config:
    """Texture paths and colours read from the header of a scene file."""

    north_texture: str
    south_texture: str
    west_texture: str
    east_texture: str
    floor_color: int
    ceiling_color: int


@dataclass
class GameMap:
    """A grid of cells: 1 for a wall, 0 for free space."""

    width: int
    height: int
    cells: List[List[int]]

    def is_wall(self, x: int, y: int) -> bool:
        """Return True for walls and for every cell outside the grid."""
        if x < 0 or y < 0 or x >= self.width or y >= self.height:
            return True
        return self.cells[y][x] != 0


def _atoi(text: str) -> int:
    match = _ATOI.match(text)
    return int(match.group(1)) if match else 0


def parse_color(text: str) -> int:
    """Parse ``r,g,b`` into a 0xRRGGBB integer."""
    parts = text.split(",", 2)
    if len(parts) < 3:
        raise ParseError(f"invalid colour {text!r}: expected r,g,b")
    red, green, blue = (_atoi(part) for part in parts)
    return (red << 16) | (green << 8) | blue


def read_config(path: "str | os.PathLike[str]") -> Config:
    """Read the texture paths and the floor and ceiling colours of a scene file."""
    found: dict[str, object] = {}
    with open(path, encoding="utf-8", errors="replace") as handle:
        for line in handle:
            match = _CONFIG_LINE.match(line.lstrip(" \t"))
            if not match:
                continue
            key, value = match.groups()
            value = value[:_MAX_VALUE_LENGTH]
            if key in _TEXTURE_KEYS:
                found[_TEXTURE_KEYS[key]] = value
            elif key in _COLOR_KEYS:
                found[_COLOR_KEYS[key]] = parse_color(value)
    missing = [
        key
        for key, name in {**_TEXTURE_KEYS, **_COLOR_KEYS}.items()
        if name not in found
    ]
    if missing:
        raise ParseError(f"missing configuration entries: {', '.join(missing)}")
    return Config(**found)  # type: ignore[arg-type]


def _map_lines(path: "str | os.PathLike[str]") -> List[str]:
    with open(path, encoding="utf-8", errors="replace") as handle:
        lines = handle.readlines()
    if len(lines) < HEADER_LINES:
        raise ParseError("file ends inside the texture information")
    return lines[HEADER_LINES:]


def _row_cells(line: str) -> List[int]:
    cells: List[int] = []
    for char in line:
        if char == "\t":
            cells.extend([0] * TAB_WIDTH)
        elif char != "\n":
            cells.append(1 if char == "1" else 0)
    return cells


def load_map(path: "str | os.PathLike[str]") -> GameMap:
    """Read the map grid that follows the header lines of a scene file."""
    rows = [_row_cells(line) for line in _map_lines(path)]
    width = max((len(row) for row in rows), default=0)
    cells = [row + [0] * (width - len(row)) for row in rows]
    return GameMap(width=width, height=len(cells), cells=cells)


def find_player(path: "str | os.PathLike[str]") -> Tuple[Vector, Direction]:
    """Return the player's start position (cell centre) and facing direction.

    Exactly one of N, S, W or E must appear in the map.
    """
    found: List[Tuple[Vector, Direction]] = []
    for row, line in enumerate(_map_lines(path)):
        col = 0
        for char in line:
            if char in _PLAYER_DIRECTIONS:
                found.append((Vector(col + 0.5, row + 0.5), _PLAYER_DIRECTIONS[char]))
            col += TAB_WIDTH if char == "\t" else 1
    if len(found) != 1:
        raise ParseError(f"invalid number of players: {len(found)}")
    return found[0]


def is_map_enclosed(game_map: GameMap, x: int, y: int) -> bool:
    """Return True if no free cell reachable from (x, y) touches the map edge."""
    visited: set[Tuple[int, int]] = set()
    stack = [(x, y)]
    while stack:
        cx, cy = stack.pop()
        if cx < 0 or cy < 0 or cx >= game_map.width or cy >= game_map.height:
            return False
        if game_map.cells[cy][cx] == 1 or (cx, cy) in visited:
            continue
        visited.add((cx, cy))
        stack.extend(((cx, cy - 1), (cx, cy + 1), (cx - 1, cy), (cx + 1, cy)))
    return True