"""An in-memory 32-bit pixel buffer with simple drawing primitives."""

from __future__ import annotations

import struct
from typing import Tuple

Point = Tuple[int, int]

BITS_PER_PIXEL = 32
_PIXEL_MASK = 0xFFFFFFFF


class Image:
    """A width x height image of 32-bit 0xAARRGGBB pixels, initially black.

    Pixels are stored little-endian, four bytes each, row after row.
    Writes outside the image are ignored; reads outside it raise IndexError.
    """

    def __init__(self, width: int, height: int) -> None:
        if width <= 0 or height <= 0:
            raise ValueError(f"image size must be positive, got {width}x{height}")
        self._width = width
        self._height = height
        self._pixels = [0] * (width * height)

    @property
    def width(self) -> int:
        return self._width

    @property
    def height(self) -> int:
        return self._height

    @property
    def bits_per_pixel(self) -> int:
        return BITS_PER_PIXEL

    @property
    def line_length(self) -> int:
        """Number of bytes in one row."""
        return self._width * BITS_PER_PIXEL // 8

    @property
    def endian(self) -> int:
        """Byte order of the pixel data: 0 for little endian."""
        return 0

    def __contains__(self, point: Point) -> bool:
        x, y = point
        return 0 <= x < self._width and 0 <= y < self._height

    def put_pixel(self, x: int, y: int, color: int) -> None:
        """Set one pixel; coordinates outside the image are ignored."""
        if (x, y) in self:
            self._pixels[y * self._width + x] = color & _PIXEL_MASK

    def get_pixel(self, x: int, y: int) -> int:
        """Return the 32-bit value of one pixel."""
        if (x, y) not in self:
            raise IndexError(f"pixel ({x}, {y}) outside {self._width}x{self._height} image")
        return self._pixels[y * self._width + x]

    def clear(self) -> None:
        """Reset every pixel to black."""
        self._pixels = [0] * (self._width * self._height)

    def to_bytes(self) -> bytes:
        """Return the pixel data as little-endian 32-bit words, row by row."""
        return struct.pack(f"<{len(self._pixels)}I", *self._pixels)

    def draw_line(self, start: Point, end: Point, color: int) -> None:
        """Draw a straight line between two points, both ends included."""
        x, y = start
        end_x, end_y = end
        delta_x = abs(end_x - x)
        delta_y = abs(end_y - y)
        step_x = 1 if x < end_x else -1
        step_y = 1 if y < end_y else -1
        error = delta_x - delta_y
        while x != end_x or y != end_y:
            self.put_pixel(x, y, color)
            doubled = error * 2
            if doubled > -delta_y:
                error -= delta_y
                x += step_x
            if doubled < delta_x:
                error += delta_x
                y += step_y
        self.put_pixel(end_x, end_y, color)

    def draw_v_line(self, start: Point, end: Point, color: int) -> None:
        """Draw down column start.x from start.y to end.y inclusive."""
        x, first = start
        for y in range(first, end[1] + 1):
            self.put_pixel(x, y, color)

    def draw_h_line(self, start: Point, end: Point, color: int) -> None:
        """Draw along row start.y from start.x to end.x inclusive."""
        first, y = start
        for x in range(first, end[0] + 1):
            self.put_pixel(x, y, color)

    def draw_square(self, start: Point, size: int, color: int) -> None:
        """Fill a size x size square whose top-left corner is ``start``."""
        left, top = start
        for y in range(top, top + size):
            for x in range(left, left + size):
                self.put_pixel(x, y, color)