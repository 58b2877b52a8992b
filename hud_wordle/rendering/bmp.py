"""
1-bit BMP Encoder

Serializes a monochrome canvas into a Windows bitmap file:

    BITMAPFILEHEADER   14 bytes  "BM", file size, reserved, pixel offset
    BITMAPINFOHEADER   40 bytes  size, width, height, planes, bpp, ...
    colour table        8 bytes  index 0 black, index 1 white (B, G, R, 0)
    pixel data                   rows bottom-up, MSB = leftmost pixel,
                                 each row zero-padded to 4 bytes

All integers are little-endian. A set (True) pixel is palette index 1.
"""

import base64
import struct
from typing import Sequence

from .canvas import Canvas

FILE_HEADER_SIZE = 14
INFO_HEADER_SIZE = 40
COLOR_TABLE_SIZE = 8  # 2 colours * 4 bytes each
PIXEL_DATA_OFFSET = FILE_HEADER_SIZE + INFO_HEADER_SIZE + COLOR_TABLE_SIZE

_FILE_HEADER = struct.Struct('<2sIHHI')
_INFO_HEADER = struct.Struct('<IiiHHIIiiII')

_BLACK = b'\x00\x00\x00\x00'
_WHITE = b'\xff\xff\xff\x00'


def row_size(width: int) -> int:
    """Unpadded bytes needed for one row of ``width`` 1-bit pixels."""
    return (width + 7) // 8


def padded_row_size(width: int) -> int:
    return (row_size(width) + 3) // 4 * 4


def encode_1bit(width: int, height: int, canvas: Sequence[Sequence[bool]]) -> bytes:
    """
    Encodes a y-major boolean grid as a 1-bit BMP file.

    Args:
        width: Image width in pixels
        height: Image height in pixels
        canvas: A Canvas or any ``canvas[y][x]`` grid at least width x height

    Returns:
        bytes: The complete bitmap file
    """
    stride = padded_row_size(width)
    pixel_data_size = stride * height
    file_size = PIXEL_DATA_OFFSET + pixel_data_size

    out = bytearray()
    out += _FILE_HEADER.pack(b'BM', file_size, 0, 0, PIXEL_DATA_OFFSET)
    out += _INFO_HEADER.pack(
        INFO_HEADER_SIZE,
        width,
        height,
        1,                # planes
        1,                # bits per pixel
        0,                # BI_RGB, no compression
        pixel_data_size,
        0,                # x pixels per metre
        0,                # y pixels per metre
        2,                # colours used
        2,                # important colours
    )
    out += _BLACK + _WHITE

    padding = bytes(stride - row_size(width))
    for y in range(height - 1, -1, -1):
        out += _pack_row(canvas[y], width)
        out += padding

    return bytes(out)


def _pack_row(row: Sequence[bool], width: int) -> bytes:
    packed = bytearray(row_size(width))
    for x in range(width):
        if row[x]:
            packed[x >> 3] |= 0x80 >> (x & 7)
    return bytes(packed)


def encode_base64(canvas: Canvas) -> str:
    """Encodes a canvas as a BMP and returns it as base64 text for transport."""
    bitmap = encode_1bit(canvas.width, canvas.height, canvas)
    return base64.b64encode(bitmap).decode('ascii')


def decode_1bit(data: bytes) -> Canvas:
    """
    Reads a 1-bit uncompressed BMP back into a Canvas.

    Nothing on the serving path decodes; this exists to inspect encoded frames.
    Palette index 1 maps to True. Bottom-up and top-down (negative height)
    files are both accepted.

    Raises:
        ValueError: If the data is not an uncompressed 1-bit BMP
    """
    if len(data) < PIXEL_DATA_OFFSET or data[:2] != b'BM':
        raise ValueError("Not a BMP file")

    _, file_size, _, _, offset = _FILE_HEADER.unpack_from(data, 0)
    (header_size, width, height, planes, bpp, compression,
     _, _, _, _, _) = _INFO_HEADER.unpack_from(data, FILE_HEADER_SIZE)

    if header_size < INFO_HEADER_SIZE or planes != 1 or bpp != 1 or compression != 0:
        raise ValueError("Only uncompressed 1-bit bitmaps are supported")

    top_down = height < 0
    height = abs(height)
    stride = padded_row_size(width)
    if len(data) < offset + stride * height or file_size > len(data):
        raise ValueError("Bitmap pixel data is truncated")

    canvas = Canvas(width, height)
    for stored_row in range(height):
        y = stored_row if top_down else height - 1 - stored_row
        start = offset + stored_row * stride
        for x in range(width):
            if data[start + (x >> 3)] & (0x80 >> (x & 7)):
                canvas.pixels[y][x] = True
    return canvas
