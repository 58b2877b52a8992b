"""
Rendering Package

Monochrome raster primitives, the embedded bitmap font and the 1-bit BMP
encoder used to build HUD frames.
"""

from .bmp import decode_1bit, encode_1bit, encode_base64
from .canvas import Canvas
from .font import GLYPH_HEIGHT, GLYPH_WIDTH, draw_text, get_text_width

__all__ = [
    'Canvas',
    'draw_text', 'get_text_width', 'GLYPH_WIDTH', 'GLYPH_HEIGHT',
    'encode_1bit', 'encode_base64', 'decode_1bit'
]
