"""Reading XPM images into :class:`Image` buffers."""

from __future__ import annotations

import os
import re
from typing import Iterable, Optional, Sequence

from .colors import lookup_color
from .image import Image

TRANSPARENT = 0xFF000000
"""Pixel value written for the colour ``None``."""

_WORD_SEPARATOR = re.compile(r"[ \t]+")
_ATOI = re.compile(r"\s*([+-]?[0-9]+)")
_HEX = re.compile(r"\s*([+-]?)([0-9a-fA-F]+)")
_QUOTED = re.compile(r'"([^"]*)"')


class XpmError(ValueError):
    """Raised when XPM data cannot be parsed."""


def split_words(text: str) -> list[str]:
    """Split ``text`` into words separated by spaces and tabs."""
    return [word for word in _WORD_SEPARATOR.split(text) if word]


def _find_unquoted(text: str, needle: str) -> int:
    quoted = False
    for pos, char in enumerate(text):
        if char == '"':
            quoted = not quoted
        if not quoted and text.startswith(needle, pos):
            return pos
    return -1


def strip_comments(text: str) -> str:
    """Blank out C comments that lie outside string literals.

    Comments are replaced by spaces, so the length of the text is kept.
    """
    for opener, closer in (("/*", "*/"), ("//", "\n")):
        while (begin := _find_unquoted(text, opener)) != -1:
            end = text.find(closer, begin + len(opener))
            stop = len(text) if end == -1 else end + len(closer)
            text = text[:begin] + " " * (stop - begin) + text[stop:]
    return text


def parse_color_spec(name: str, extra: Optional[str] = None) -> int:
    """Return the 0xRRGGBB value of an XPM colour specification.

    ``#rrggbb`` is read as hexadecimal. Otherwise ``name`` (joined with
    ``extra`` by a space when given) is looked up among the named colours;
    ``None`` gives -1 and an unknown name gives 0.
    """
    if name.startswith("#"):
        match = _HEX.match(name, 1)
        if not match:
            return 0
        value = int(match.group(2), 16)
        return -value if match.group(1) == "-" else value
    if extra is not None:
        name = f"{name} {extra}"
    try:
        return lookup_color(name)
    except KeyError:
        return 0


def convert_color(color: int, depth: int, shifts: Sequence[int]) -> int:
    """Convert 0xRRGGBB to a pixel value for a visual of the given depth.

    ``shifts`` holds, for red, green and blue in turn, the offset of the
    channel's mask and its width in bits. Depths of 24 and more keep the
    colour unchanged.
    """
    if depth >= 24:
        return color
    red_off, red_len, green_off, green_len, blue_off, blue_len = shifts
    red = (color >> 8) & 0xFF00
    green = color & 0xFF00
    blue = (color << 8) & 0xFF00
    return (
        ((red >> (16 - red_len)) << red_off)
        + ((green >> (16 - green_len)) << green_off)
        + ((blue >> (16 - blue_len)) << blue_off)
    )


def _atoi(text: str) -> int:
    match = _ATOI.match(text)
    return int(match.group(1)) if match else 0


def parse_xpm(lines: Iterable[str]) -> Image:
    """Build an image from the quoted strings of an XPM document, in order."""
    rows = iter(lines)

    def next_line(what: str) -> str:
        line = next(rows, None)
        if line is None:
            raise XpmError(f"XPM data ends before the {what}")
        return line

    header = split_words(next_line("header"))
    if len(header) < 4:
        raise XpmError("XPM header needs width, height, colour count and chars per pixel")
    width, height, ncolors, cpp = (_atoi(word) for word in header[:4])
    if min(width, height, ncolors, cpp) <= 0:
        raise XpmError(f"invalid XPM header: {' '.join(header)!r}")

    direct = cpp <= 2
    palette: dict[str, int] = {}
    for _ in range(ncolors):
        line = next_line("colour table")
        words = split_words(line[cpp:])
        try:
            index = words.index("c") + 1
        except ValueError:
            raise XpmError(f"colour line without a 'c' key: {line!r}") from None
        if index >= len(words):
            raise XpmError(f"colour line without a colour: {line!r}")
        extra = words[index + 1] if index + 1 < len(words) else None
        rgb = parse_color_spec(words[index], extra)
        key = line[:cpp]
        if direct:
            palette[key] = rgb
        else:
            palette.setdefault(key, rgb)

    image = Image(width, height)
    for y in range(height):
        line = next_line("pixel rows")
        for x in range(width):
            color = palette.get(line[cpp * x : cpp * (x + 1)], 0)
            if color == -1:
                color = TRANSPARENT
            image.put_pixel(x, y, color)
    return image


def xpm_to_image(data: Sequence[str]) -> Image:
    """Build an image from XPM data given as a list of strings."""
    return parse_xpm(data)


def read_xpm_file(path: str | os.PathLike[str]) -> Image:
    """Read an XPM file and return its image."""
    with open(path, "rb") as handle:
        text = handle.read().decode("latin-1")
    return parse_xpm(_QUOTED.findall(strip_comments(text)))