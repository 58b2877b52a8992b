"""
Embedded Bitmap Font

A fixed-width 5x7 font covering A-Z, 0-9, space and the punctuation used by
the HUD. Each glyph is 7 rows of 5 bits, MSB on the left. Characters without
a glyph advance the cursor like a space.
"""

from types import MappingProxyType
from typing import Mapping, Tuple

from .canvas import Canvas

GLYPH_WIDTH = 5
GLYPH_HEIGHT = 7
GLYPH_SPACING = 1

_BLANK: Tuple[int, ...] = (0b00000,) * GLYPH_HEIGHT

_GLYPHS: Mapping[str, Tuple[int, ...]] = MappingProxyType({
    " ": _BLANK,
    "A": (0b01110, 0b10001, 0b10001, 0b11111, 0b10001, 0b10001, 0b10001),
    "B": (0b11110, 0b10001, 0b10001, 0b11110, 0b10001, 0b10001, 0b11110),
    "C": (0b01110, 0b10001, 0b10000, 0b10000, 0b10000, 0b10001, 0b01110),
    "D": (0b11110, 0b10001, 0b10001, 0b10001, 0b10001, 0b10001, 0b11110),
    "E": (0b11111, 0b10000, 0b10000, 0b11110, 0b10000, 0b10000, 0b11111),
    "F": (0b11111, 0b10000, 0b10000, 0b11110, 0b10000, 0b10000, 0b10000),
    "G": (0b01110, 0b10001, 0b10000, 0b10111, 0b10001, 0b10001, 0b01110),
    "H": (0b10001, 0b10001, 0b10001, 0b11111, 0b10001, 0b10001, 0b10001),
    "I": (0b01110, 0b00100, 0b00100, 0b00100, 0b00100, 0b00100, 0b01110),
    "J": (0b00111, 0b00010, 0b00010, 0b00010, 0b00010, 0b10010, 0b01100),
    "K": (0b10001, 0b10010, 0b10100, 0b11000, 0b10100, 0b10010, 0b10001),
    "L": (0b10000, 0b10000, 0b10000, 0b10000, 0b10000, 0b10000, 0b11111),
    "M": (0b10001, 0b11011, 0b10101, 0b10101, 0b10001, 0b10001, 0b10001),
    "N": (0b10001, 0b11001, 0b10101, 0b10011, 0b10001, 0b10001, 0b10001),
    "O": (0b01110, 0b10001, 0b10001, 0b10001, 0b10001, 0b10001, 0b01110),
    "P": (0b11110, 0b10001, 0b10001, 0b11110, 0b10000, 0b10000, 0b10000),
    "Q": (0b01110, 0b10001, 0b10001, 0b10001, 0b10101, 0b10010, 0b01101),
    "R": (0b11110, 0b10001, 0b10001, 0b11110, 0b10100, 0b10010, 0b10001),
    "S": (0b01111, 0b10000, 0b10000, 0b01110, 0b00001, 0b00001, 0b11110),
    "T": (0b11111, 0b00100, 0b00100, 0b00100, 0b00100, 0b00100, 0b00100),
    "U": (0b10001, 0b10001, 0b10001, 0b10001, 0b10001, 0b10001, 0b01110),
    "V": (0b10001, 0b10001, 0b10001, 0b10001, 0b10001, 0b01010, 0b00100),
    "W": (0b10001, 0b10001, 0b10001, 0b10101, 0b10101, 0b10101, 0b01010),
    "X": (0b10001, 0b10001, 0b01010, 0b00100, 0b01010, 0b10001, 0b10001),
    "Y": (0b10001, 0b10001, 0b01010, 0b00100, 0b00100, 0b00100, 0b00100),
    "Z": (0b11111, 0b00001, 0b00010, 0b00100, 0b01000, 0b10000, 0b11111),
    "0": (0b01110, 0b10001, 0b10011, 0b10101, 0b11001, 0b10001, 0b01110),
    "1": (0b00100, 0b01100, 0b00100, 0b00100, 0b00100, 0b00100, 0b01110),
    "2": (0b01110, 0b10001, 0b00001, 0b00010, 0b00100, 0b01000, 0b11111),
    "3": (0b11110, 0b00001, 0b00001, 0b01110, 0b00001, 0b00001, 0b11110),
    "4": (0b00010, 0b00110, 0b01010, 0b10010, 0b11111, 0b00010, 0b00010),
    "5": (0b11111, 0b10000, 0b10000, 0b11110, 0b00001, 0b00001, 0b11110),
    "6": (0b01110, 0b10000, 0b10000, 0b11110, 0b10001, 0b10001, 0b01110),
    "7": (0b11111, 0b00001, 0b00010, 0b00100, 0b01000, 0b01000, 0b01000),
    "8": (0b01110, 0b10001, 0b10001, 0b01110, 0b10001, 0b10001, 0b01110),
    "9": (0b01110, 0b10001, 0b10001, 0b01111, 0b00001, 0b00001, 0b01110),
    ".": (0b00000, 0b00000, 0b00000, 0b00000, 0b00000, 0b01100, 0b01100),
    ",": (0b00000, 0b00000, 0b00000, 0b00000, 0b01100, 0b00100, 0b01000),
    "!": (0b00100, 0b00100, 0b00100, 0b00100, 0b00100, 0b00000, 0b00100),
    "?": (0b01110, 0b10001, 0b00001, 0b00010, 0b00100, 0b00000, 0b00100),
    ":": (0b00000, 0b01100, 0b01100, 0b00000, 0b01100, 0b01100, 0b00000),
    '"': (0b01010, 0b01010, 0b01010, 0b00000, 0b00000, 0b00000, 0b00000),
    "'": (0b00100, 0b00100, 0b01000, 0b00000, 0b00000, 0b00000, 0b00000),
    "-": (0b00000, 0b00000, 0b00000, 0b11111, 0b00000, 0b00000, 0b00000),
    "/": (0b00000, 0b00001, 0b00010, 0b00100, 0b01000, 0b10000, 0b00000),
    "(": (0b00010, 0b00100, 0b01000, 0b01000, 0b01000, 0b00100, 0b00010),
    ")": (0b01000, 0b00100, 0b00010, 0b00010, 0b00010, 0b00100, 0b01000),
    "+": (0b00000, 0b00100, 0b00100, 0b11111, 0b00100, 0b00100, 0b00000),
    "=": (0b00000, 0b00000, 0b11111, 0b00000, 0b11111, 0b00000, 0b00000),
    "*": (0b00000, 0b00100, 0b10101, 0b01110, 0b10101, 0b00100, 0b00000),
})


def glyph_for(ch: str) -> Tuple[int, ...]:
    return _GLYPHS.get(ch.upper(), _BLANK)


def has_glyph(ch: str) -> bool:
    return ch.upper() in _GLYPHS


def char_advance(scale: int = 1) -> int:
    """Horizontal distance between the origins of two adjacent characters."""
    return (GLYPH_WIDTH + GLYPH_SPACING) * scale


def get_text_width(text: str, scale: int = 1) -> int:
    """
    Returns how far ``draw_text`` moves the cursor for ``text``.

    Every character, including the last, contributes a full advance, so the
    width of a string is always ``len(text)`` times the width of one character.
    """
    _check_scale(scale)
    return len(text) * char_advance(scale)


def draw_text(canvas: Canvas, text: str, x: int, y: int, scale: int = 1, value: bool = True) -> int:
    """
    Stamps ``text`` onto the canvas with its top-left corner at (x, y).

    Args:
        canvas: Target canvas
        text: Text to draw; lowercase letters are drawn as uppercase
        x, y: Top-left corner of the first glyph
        scale: Each font pixel becomes a scale x scale block
        value: Pixel value for glyph foreground

    Returns:
        int: x coordinate just past the last character's advance
    """
    _check_scale(scale)
    cursor = x
    for ch in text:
        _draw_glyph(canvas, glyph_for(ch), cursor, y, scale, value)
        cursor += char_advance(scale)
    return cursor


def _draw_glyph(canvas: Canvas, rows: Tuple[int, ...], x: int, y: int, scale: int, value: bool) -> None:
    for row_index, bits in enumerate(rows):
        if not bits:
            continue
        for col in range(GLYPH_WIDTH):
            if bits & (1 << (GLYPH_WIDTH - 1 - col)):
                canvas.draw_rect(x + col * scale, y + row_index * scale, scale, scale, True, value)


def _check_scale(scale: int) -> None:
    if scale < 1:
        raise ValueError(f"Text scale must be a positive integer, got {scale}")
