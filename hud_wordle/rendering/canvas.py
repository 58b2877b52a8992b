"""
Monochrome Canvas

A mutable 1-bit drawing surface for the HUD display. Pixels are stored
y-major (``canvas[y][x]``) with the origin in the top-left corner; ``True``
is a lit (white) pixel and ``False`` is unlit (black).

Every drawing primitive funnels through ``set_pixel``, which silently drops
writes outside the canvas. Callers can therefore draw partially off-screen
shapes or pass degenerate sizes without any error handling of their own.
"""

from typing import Iterator, List


class Canvas:
    """Boolean pixel grid with basic raster primitives."""

    def __init__(self, width: int, height: int):
        if width < 0 or height < 0:
            raise ValueError(f"Canvas size must be non-negative, got {width}x{height}")
        self.width = width
        self.height = height
        self.pixels: List[List[bool]] = [[False] * width for _ in range(height)]

    def __getitem__(self, y: int) -> List[bool]:
        return self.pixels[y]

    def __len__(self) -> int:
        return self.height

    def __iter__(self) -> Iterator[List[bool]]:
        return iter(self.pixels)

    def in_bounds(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def set_pixel(self, x: int, y: int, value: bool = True) -> None:
        if self.in_bounds(x, y):
            self.pixels[y][x] = value

    def get_pixel(self, x: int, y: int) -> bool:
        if self.in_bounds(x, y):
            return self.pixels[y][x]
        return False

    def count_set(self) -> int:
        """Number of lit pixels on the canvas."""
        return sum(sum(1 for pixel in row if pixel) for row in self.pixels)

    def invert_region(self, x: int, y: int, width: int, height: int) -> None:
        """Flip every in-bounds pixel inside the given box."""
        for py in range(y, y + height):
            for px in range(x, x + width):
                if self.in_bounds(px, py):
                    self.pixels[py][px] = not self.pixels[py][px]

    def draw_line(self, x1: int, y1: int, x2: int, y2: int, value: bool = True) -> None:
        """
        Draws a line with Bresenham's algorithm.

        Both endpoints are drawn, and swapping them produces the same pixels.
        """
        # Always walk from the lexicographically smaller endpoint
        if (x2, y2) < (x1, y1):
            x1, y1, x2, y2 = x2, y2, x1, y1

        dx = abs(x2 - x1)
        dy = abs(y2 - y1)
        sx = 1 if x1 < x2 else -1
        sy = 1 if y1 < y2 else -1
        err = dx - dy

        x, y = x1, y1
        while True:
            self.set_pixel(x, y, value)
            if x == x2 and y == y2:
                break
            err2 = 2 * err
            if err2 > -dy:
                err -= dy
                x += sx
            if err2 < dx:
                err += dx
                y += sy

    def draw_rect(self, x: int, y: int, width: int, height: int,
                  filled: bool = False, value: bool = True) -> None:
        """
        Draws a rectangle whose top-left corner is (x, y).

        Args:
            x, y: Top-left corner
            width, height: Box size; zero or negative sizes draw nothing
            filled: Fill the whole box instead of only its 1-pixel border
            value: Pixel value to write
        """
        if width <= 0 or height <= 0:
            return

        if filled:
            for py in range(y, y + height):
                for px in range(x, x + width):
                    self.set_pixel(px, py, value)
            return

        # Top and bottom edges
        for px in range(x, x + width):
            self.set_pixel(px, y, value)
            self.set_pixel(px, y + height - 1, value)
        # Left and right edges
        for py in range(y, y + height):
            self.set_pixel(x, py, value)
            self.set_pixel(x + width - 1, py, value)

    def draw_circle(self, cx: int, cy: int, radius: int, value: bool = True) -> None:
        """Draws a circle outline with the midpoint algorithm."""
        if radius < 0:
            return

        x = radius
        y = 0
        radius_error = 1 - x

        while x >= y:
            for px, py in ((cx + x, cy + y), (cx + y, cy + x),
                           (cx - x, cy + y), (cx - y, cy + x),
                           (cx - x, cy - y), (cx - y, cy - x),
                           (cx + x, cy - y), (cx + y, cy - x)):
                self.set_pixel(px, py, value)

            y += 1
            if radius_error < 0:
                radius_error += 2 * y + 1
            else:
                x -= 1
                radius_error += 2 * (y - x) + 1
