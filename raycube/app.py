"""The game: loading a scene, reacting to keys, and the main window loop."""

from __future__ import annotations

import os
import sys
from typing import Optional, Sequence

from .config import ParseError, find_player, is_map_enclosed, load_map, read_config
from .image import Image
from .movement import Rotation, new_player
from .render import render_minimap, render_view
from .vector import Direction
from .window import (
    KEY_A,
    KEY_D,
    KEY_ESCAPE,
    KEY_LEFT,
    KEY_PRESS_MASK,
    KEY_RELEASE_MASK,
    KEY_RIGHT,
    KEY_S,
    KEY_W,
    Display,
    Event,
    Window,
)
from .xpm import read_xpm_file

WIN_WIDTH = 640
WIN_HEIGHT = 480
WIN_TITLE = "raycube"

_PRESS_MOVES_Y = {KEY_W: Direction.UP, KEY_S: Direction.DOWN}
_PRESS_MOVES_X = {KEY_A: Direction.LEFT, KEY_D: Direction.RIGHT}
_PRESS_TURNS = {KEY_LEFT: Rotation.LEFT, KEY_RIGHT: Rotation.RIGHT}


class Game:
    """A loaded scene with its player, textures and the two frame buffers.

    Raises ParseError for a malformed or open map, XpmError for a bad
    texture and OSError when a file cannot be read.
    """

    def __init__(
        self,
        map_path: "str | os.PathLike[str]",
        width: int = WIN_WIDTH,
        height: int = WIN_HEIGHT,
    ) -> None:
        self.game_map = load_map(map_path)
        pos, facing = find_player(map_path)
        self.state = new_player(pos, facing)
        if not is_map_enclosed(self.game_map, int(pos.x), int(pos.y)):
            raise ParseError("Map is not enclosed")
        config = read_config(map_path)
        self.textures = tuple(
            read_xpm_file(path)
            for path in (
                config.north_texture,
                config.south_texture,
                config.west_texture,
                config.east_texture,
            )
        )
        self.floor_color = config.floor_color
        self.ceiling_color = config.ceiling_color
        self.view = Image(width, height)
        self.minimap = Image(width, height)
        self.running = True
        self.display: Optional[Display] = None

    def handle_key_press(self, keycode: int) -> None:
        """Start moving or turning; Escape closes the game."""
        if keycode == KEY_ESCAPE:
            self.close()
        elif keycode in _PRESS_MOVES_Y:
            self.state.move_y = _PRESS_MOVES_Y[keycode]
        elif keycode in _PRESS_MOVES_X:
            self.state.move_x = _PRESS_MOVES_X[keycode]
        elif keycode in _PRESS_TURNS:
            self.state.rot = _PRESS_TURNS[keycode]

    def handle_key_release(self, keycode: int) -> None:
        """Stop the movement or turn that the released key started."""
        if self.state.move_y is _PRESS_MOVES_Y.get(keycode):
            self.state.move_y = Direction.NONE
        elif self.state.move_x is _PRESS_MOVES_X.get(keycode):
            self.state.move_x = Direction.NONE
        elif self.state.rot is _PRESS_TURNS.get(keycode):
            self.state.rot = Rotation.NONE

    def tick(self) -> bool:
        """Advance the player one step; redraw and return True if it moved."""
        if not self.state.update(self.game_map):
            return False
        self.render()
        return True

    def render(self) -> None:
        """Redraw the view and the minimap from scratch."""
        self.view.clear()
        self.minimap.clear()
        render_view(
            self.view,
            self.game_map,
            self.state,
            self.textures,
            self.floor_color,
            self.ceiling_color,
        )
        render_minimap(self.minimap, self.game_map, self.state)

    def close(self) -> None:
        """Stop the game and end the display loop if one is running."""
        self.running = False
        if self.display is not None:
            self.display.loop_end()


def _show(game: Game, view: Window, minimap: Window) -> None:
    if view.alive:
        view.put_image(game.view, 0, 0)
    if minimap.alive:
        minimap.put_image(game.minimap, 0, 0)


def _run(game: Game, display: Display) -> None:
    width, height = game.view.width, game.view.height
    view = display.new_window(width, height, WIN_TITLE)
    minimap = display.new_window(width, height, f"{WIN_TITLE} map")
    game.display = display
    for window in (view, minimap):
        window.hook(Event.KEY_PRESS, KEY_PRESS_MASK, game.handle_key_press)
        window.hook(Event.KEY_RELEASE, KEY_RELEASE_MASK, game.handle_key_release)
        window.hook(Event.DESTROY_NOTIFY, 0, game.close)

    def frame() -> None:
        if game.running and game.tick():
            _show(game, view, minimap)

    display.loop_hook(frame)
    game.render()
    _show(game, view, minimap)
    display.loop()


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Run the game on the scene file named on the command line."""
    args = list(sys.argv[1:] if argv is None else argv)
    if len(args) != 1:
        print(f"Usage: {WIN_TITLE} <map_file.cub>", file=sys.stderr)
        return 1
    try:
        game = Game(args[0])
    except (OSError, ValueError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1
    try:
        display = Display()
    except RuntimeError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1
    with display:
        _run(game, display)
    return 0