"""Windows, drawing and event hooks on top of pygame.

A :class:`Display` owns windows and runs the event loop. Hooks receive X11
style arguments: key hooks get an X keysym, mouse hooks get
``(button, x, y)``, motion hooks get ``(x, y)`` and the other hooks get no
arguments. All open windows are shown side by side in one pygame window.
"""

from __future__ import annotations

import functools
import sys
from array import array
from dataclasses import dataclass
from enum import IntEnum
from typing import Callable, Dict, List, Optional, Tuple

import pygame

from .image import Image

LAST_EVENT = 36
"""Event numbers must be below this value."""

KEY_PRESS_MASK = 1 << 0
KEY_RELEASE_MASK = 1 << 1
BUTTON_PRESS_MASK = 1 << 2
BUTTON_RELEASE_MASK = 1 << 3
ENTER_WINDOW_MASK = 1 << 4
LEAVE_WINDOW_MASK = 1 << 5
POINTER_MOTION_MASK = 1 << 6
BUTTON_MOTION_MASK = 1 << 13
EXPOSURE_MASK = 1 << 15
STRUCTURE_NOTIFY_MASK = 1 << 17
FOCUS_CHANGE_MASK = 1 << 21

KEY_ESCAPE = 0xFF1B
KEY_LEFT = 0xFF51
KEY_UP = 0xFF52
KEY_RIGHT = 0xFF53
KEY_DOWN = 0xFF54
KEY_W = ord("w")
KEY_A = ord("a")
KEY_S = ord("s")
KEY_D = ord("d")

_FONT_SIZE = 16


class Event(IntEnum):
    """Event numbers that hooks are registered under."""

    KEY_PRESS = 2
    KEY_RELEASE = 3
    BUTTON_PRESS = 4
    BUTTON_RELEASE = 5
    MOTION_NOTIFY = 6
    ENTER_NOTIFY = 7
    LEAVE_NOTIFY = 8
    FOCUS_IN = 9
    FOCUS_OUT = 10
    EXPOSE = 12
    DESTROY_NOTIFY = 17
    CLIENT_MESSAGE = 33


_REQUIRED_MASK = {
    Event.KEY_PRESS: KEY_PRESS_MASK,
    Event.KEY_RELEASE: KEY_RELEASE_MASK,
    Event.BUTTON_PRESS: BUTTON_PRESS_MASK,
    Event.BUTTON_RELEASE: BUTTON_RELEASE_MASK,
    Event.MOTION_NOTIFY: POINTER_MOTION_MASK | BUTTON_MOTION_MASK,
    Event.ENTER_NOTIFY: ENTER_WINDOW_MASK,
    Event.LEAVE_NOTIFY: LEAVE_WINDOW_MASK,
    Event.FOCUS_IN: FOCUS_CHANGE_MASK,
    Event.FOCUS_OUT: FOCUS_CHANGE_MASK,
    Event.EXPOSE: EXPOSURE_MASK,
}

_KEYSYMS = {
    pygame.K_ESCAPE: KEY_ESCAPE,
    pygame.K_LEFT: KEY_LEFT,
    pygame.K_UP: KEY_UP,
    pygame.K_RIGHT: KEY_RIGHT,
    pygame.K_DOWN: KEY_DOWN,
    pygame.K_RETURN: 0xFF0D,
    pygame.K_BACKSPACE: 0xFF08,
    pygame.K_TAB: 0xFF09,
    pygame.K_DELETE: 0xFFFF,
    pygame.K_LSHIFT: 0xFFE1,
    pygame.K_RSHIFT: 0xFFE2,
    pygame.K_LCTRL: 0xFFE3,
    pygame.K_RCTRL: 0xFFE4,
}


def _keysym(key: int) -> int:
    return _KEYSYMS.get(key, key)


def _rgb(color: int) -> Tuple[int, int, int]:
    return ((color >> 16) & 0xFF, (color >> 8) & 0xFF, color & 0xFF)


@functools.lru_cache(maxsize=None)
def _font() -> "pygame.font.Font":
    pygame.font.init()
    return pygame.font.Font(None, _FONT_SIZE)


def _image_surface(image: Image) -> pygame.Surface:
    width, height = image.width, image.height
    surface = pygame.Surface((width, height), 0, 32, (0xFF0000, 0xFF00, 0xFF, 0))
    words = array("I", image.to_bytes())
    if sys.byteorder == "big":
        words.byteswap()
    data = words.tobytes()
    row = width * 4
    pitch = surface.get_pitch()
    buffer = surface.get_buffer()
    if pitch == row:
        buffer.write(data, 0)
    else:
        for y in range(height):
            buffer.write(data[y * row : (y + 1) * row], y * pitch)
    del buffer
    return surface


class _Screen:
    """The single pygame window that shows every open window side by side."""

    def __init__(self) -> None:
        self.windows: List[Window] = []

    def add(self, window: Window) -> None:
        self.windows.append(window)
        self._relayout()

    def remove(self, window: Window) -> None:
        if window in self.windows:
            self.windows.remove(window)
        if self.windows:
            self._relayout()

    def offset(self, window: Window) -> int:
        left = 0
        for other in self.windows:
            if other is window:
                return left
            left += other.width
        raise RuntimeError("window is not open")

    def locate(self, pos: Tuple[int, int]) -> Tuple[Optional[Window], int, int]:
        x, y = pos
        left = 0
        for window in self.windows:
            if left <= x < left + window.width and 0 <= y < window.height:
                return window, x - left, y
            left += window.width
        return None, x, y

    def key_target(self) -> Optional[Window]:
        if not self.windows:
            return None
        window, _, _ = self.locate(pygame.mouse.get_pos())
        return window if window is not None else self.windows[0]

    def _relayout(self) -> None:
        if not pygame.display.get_init():
            pygame.display.init()
        width = sum(window.width for window in self.windows)
        height = max(window.height for window in self.windows)
        pygame.display.set_mode((width, height))
        pygame.display.set_caption(" | ".join(window.title for window in self.windows))
        self.present()

    def present(self) -> None:
        if not self.windows or not pygame.display.get_init():
            return
        target = pygame.display.get_surface()
        if target is None:
            return
        left = 0
        for window in self.windows:
            target.blit(window.surface, (left, 0))
            left += window.width
        pygame.display.flip()


_screen = _Screen()


@dataclass
class _Hook:
    func: Callable[..., object]
    mask: int


class Window:
    """A drawable window with its own event hooks."""

    def __init__(self, display: Display, width: int, height: int, title: str) -> None:
        self._display = display
        self._width = width
        self._height = height
        self._title = title
        self._surface = pygame.Surface((width, height))
        self._surface.fill((0, 0, 0))
        self._hooks: Dict[int, _Hook] = {}
        self._alive = True

    @property
    def width(self) -> int:
        return self._width

    @property
    def height(self) -> int:
        return self._height

    @property
    def title(self) -> str:
        return self._title

    @property
    def surface(self) -> pygame.Surface:
        """The window's contents."""
        return self._surface

    @property
    def alive(self) -> bool:
        return self._alive

    @property
    def event_mask(self) -> int:
        """The union of the masks of all registered hooks."""
        mask = 0
        for hook in self._hooks.values():
            mask |= hook.mask
        return mask

    def _check_alive(self) -> None:
        if not self._alive:
            raise RuntimeError("window has been destroyed")

    def _flush(self) -> None:
        if self._display._do_flush:
            _screen.present()

    def hook(self, event: int, mask: int, func: Callable[..., object]) -> None:
        """Register ``func`` for an event number, selected by ``mask``."""
        self._check_alive()
        event = int(event)
        if not 0 <= event < LAST_EVENT:
            raise ValueError(f"event number out of range: {event}")
        self._hooks[event] = _Hook(func, mask)

    def key_hook(self, func: Callable[[int], object]) -> None:
        """Call ``func(keysym)`` when a key is released."""
        self.hook(Event.KEY_RELEASE, KEY_RELEASE_MASK, func)

    def mouse_hook(self, func: Callable[[int, int, int], object]) -> None:
        """Call ``func(button, x, y)`` when a mouse button is pressed."""
        self.hook(Event.BUTTON_PRESS, BUTTON_PRESS_MASK, func)

    def expose_hook(self, func: Callable[[], object]) -> None:
        """Call ``func()`` when the window needs redrawing."""
        self.hook(Event.EXPOSE, EXPOSURE_MASK, func)

    def _fire(self, event: int, *args: object) -> None:
        hook = self._hooks.get(event)
        if hook is None:
            return
        required = _REQUIRED_MASK.get(event)
        if required is not None and not hook.mask & required:
            return
        hook.func(*args)

    def _fire_close(self) -> None:
        for event in (Event.DESTROY_NOTIFY, Event.CLIENT_MESSAGE):
            hook = self._hooks.get(event)
            if hook is not None and self._alive:
                hook.func()

    def put_image(self, image: Image, x: int, y: int) -> None:
        """Copy an image into the window with its top-left corner at (x, y)."""
        self._check_alive()
        self._surface.blit(_image_surface(image), (x, y))
        self._flush()

    def pixel_put(self, x: int, y: int, color: int) -> None:
        """Set one pixel to a 0xRRGGBB colour."""
        self._check_alive()
        if 0 <= x < self._width and 0 <= y < self._height:
            self._surface.set_at((x, y), _rgb(color))
        self._flush()

    def string_put(self, x: int, y: int, color: int, text: str) -> None:
        """Draw text whose baseline starts at (x, y)."""
        self._check_alive()
        font = _font()
        rendered = font.render(text, False, _rgb(color))
        self._surface.blit(rendered, (x, y - font.get_ascent()))
        self._flush()

    def clear(self) -> None:
        """Fill the window with black."""
        self._check_alive()
        self._surface.fill((0, 0, 0))
        self._flush()

    def destroy(self) -> None:
        """Close the window; later calls on it raise RuntimeError."""
        self._check_alive()
        self._alive = False
        self._hooks.clear()
        self._display._windows.remove(self)
        _screen.remove(self)
        self._flush()

    def mouse_position(self) -> Tuple[int, int]:
        """Return the pointer position relative to the window's top-left corner."""
        self._check_alive()
        x, y = pygame.mouse.get_pos()
        return x - _screen.offset(self), y

    def mouse_move(self, x: int, y: int) -> None:
        """Move the pointer to (x, y) inside the window."""
        self._check_alive()
        pygame.mouse.set_pos((_screen.offset(self) + x, y))

    def mouse_hide(self) -> None:
        """Hide the pointer."""
        self._check_alive()
        pygame.mouse.set_visible(False)

    def mouse_show(self) -> None:
        """Show the pointer again."""
        self._check_alive()
        pygame.mouse.set_visible(True)


class Display:
    """A connection to the screen: owns windows and runs the event loop."""

    def __init__(self) -> None:
        try:
            if not pygame.display.get_init():
                pygame.display.init()
        except pygame.error as exc:
            raise RuntimeError(f"cannot open display: {exc}") from exc
        self._windows: List[Window] = []
        self._loop_hook: Optional[Callable[[], object]] = None
        self._do_flush = True
        self._end_loop = False
        self._alive = True

    def __enter__(self) -> Display:
        return self

    def __exit__(self, *exc_info: object) -> None:
        if self._alive:
            self.destroy()

    @property
    def windows(self) -> Tuple[Window, ...]:
        return tuple(self._windows)

    def _check_alive(self) -> None:
        if not self._alive:
            raise RuntimeError("display has been destroyed")

    def new_window(self, width: int, height: int, title: str) -> Window:
        """Open a window of the given size and title."""
        self._check_alive()
        if width <= 0 or height <= 0:
            raise ValueError(f"window size must be positive, got {width}x{height}")
        window = Window(self, width, height, title)
        self._windows.append(window)
        _screen.add(window)
        return window

    def loop_hook(self, func: Optional[Callable[[], object]]) -> None:
        """Call ``func()`` whenever no events are pending; None removes it."""
        self._check_alive()
        self._loop_hook = func

    def loop_end(self) -> None:
        """Make :meth:`loop` return."""
        self._end_loop = True

    def loop(self) -> None:
        """Dispatch events to hooks until loop_end() or until no window is left."""
        self._check_alive()
        self._do_flush = False
        while self._windows and not self._end_loop:
            while (
                self._windows
                and not self._end_loop
                and (self._loop_hook is None or pygame.event.peek())
            ):
                if self._loop_hook is None:
                    _screen.present()
                    event = pygame.event.wait()
                else:
                    event = pygame.event.poll()
                self._dispatch(event)
            _screen.present()
            if self._loop_hook is not None:
                self._loop_hook()

    def _dispatch(self, event: pygame.event.Event) -> None:
        kind = event.type
        if kind == pygame.QUIT:
            for window in list(self._windows):
                window._fire_close()
            return
        if kind in (pygame.VIDEOEXPOSE, pygame.WINDOWEXPOSED):
            broadcast: Optional[Event] = Event.EXPOSE
        elif kind == pygame.WINDOWFOCUSGAINED:
            broadcast = Event.FOCUS_IN
        elif kind == pygame.WINDOWFOCUSLOST:
            broadcast = Event.FOCUS_OUT
        elif kind == pygame.WINDOWENTER:
            broadcast = Event.ENTER_NOTIFY
        elif kind == pygame.WINDOWLEAVE:
            broadcast = Event.LEAVE_NOTIFY
        else:
            broadcast = None
        if broadcast is not None:
            for window in list(self._windows):
                window._fire(broadcast)
            return

        target: Optional[Window]
        if kind in (pygame.KEYDOWN, pygame.KEYUP):
            target = _screen.key_target()
            xevent = Event.KEY_PRESS if kind == pygame.KEYDOWN else Event.KEY_RELEASE
            args: Tuple[int, ...] = (_keysym(event.key),)
        elif kind in (pygame.MOUSEBUTTONDOWN, pygame.MOUSEBUTTONUP):
            target, x, y = _screen.locate(event.pos)
            xevent = (
                Event.BUTTON_PRESS if kind == pygame.MOUSEBUTTONDOWN else Event.BUTTON_RELEASE
            )
            args = (event.button, x, y)
        elif kind == pygame.MOUSEMOTION:
            target, x, y = _screen.locate(event.pos)
            xevent = Event.MOTION_NOTIFY
            args = (x, y)
        else:
            return
        if target is not None and target._display is self and target.alive:
            target._fire(xevent, *args)

    def screen_size(self) -> Tuple[int, int]:
        """Return the width and height of the desktop."""
        self._check_alive()
        sizes = pygame.display.get_desktop_sizes()
        if sizes:
            width, height = sizes[0]
            return int(width), int(height)
        info = pygame.display.Info()
        return int(info.current_w), int(info.current_h)

    def destroy(self) -> None:
        """Close every window of this display and release it."""
        self._check_alive()
        for window in list(self._windows):
            window.destroy()
        self._alive = False
        self._loop_hook = None
        if not _screen.windows and pygame.display.get_init():
            pygame.display.quit()