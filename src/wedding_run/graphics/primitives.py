"""Basic drawing primitives for numpy frame buffers."""

from typing import Tuple, Optional
import numpy as np
from numpy.typing import NDArray

# Type aliases
Color = Tuple[int, int, int]
Buffer = NDArray[np.uint8]

GLYPH_WIDTH = 3
GLYPH_HEIGHT = 5


def new_buffer(width: int, height: int) -> Buffer:
    """Allocate a black (height, width, 3) frame buffer."""
    return np.zeros((height, width, 3), dtype=np.uint8)


def fill(buffer: Buffer, color: Color) -> None:
    """Fill entire buffer with color."""
    buffer[:, :] = color


def draw_rect(
    buffer: Buffer,
    x: int,
    y: int,
    width: int,
    height: int,
    color: Color,
    filled: bool = True,
) -> None:
    """Draw a rectangle, clipped to the buffer.

    Args:
        buffer: Target numpy array (height, width, 3)
        x: Left edge x coordinate
        y: Top edge y coordinate
        width: Rectangle width
        height: Rectangle height
        color: RGB color tuple
        filled: If False, draw a one pixel outline only
    """
    h, w = buffer.shape[:2]
    x1 = max(0, min(x, w))
    y1 = max(0, min(y, h))
    x2 = max(0, min(x + width, w))
    y2 = max(0, min(y + height, h))
    if x2 <= x1 or y2 <= y1:
        return

    if filled:
        buffer[y1:y2, x1:x2] = color
        return

    buffer[y1, x1:x2] = color
    buffer[y2 - 1, x1:x2] = color
    buffer[y1:y2, x1] = color
    buffer[y1:y2, x2 - 1] = color


def draw_image(buffer: Buffer, image: Buffer, x: int, y: int) -> None:
    """Blit an RGB or RGBA image at (x, y), clipped to the buffer.

    RGBA images are alpha blended per pixel.
    """
    buf_h, buf_w = buffer.shape[:2]
    img_h, img_w = image.shape[:2]

    src_x1 = max(0, -x)
    src_y1 = max(0, -y)
    src_x2 = min(img_w, buf_w - x)
    src_y2 = min(img_h, buf_h - y)
    if src_x2 <= src_x1 or src_y2 <= src_y1:
        return

    dst_x1 = max(0, x)
    dst_y1 = max(0, y)
    dst_x2 = dst_x1 + (src_x2 - src_x1)
    dst_y2 = dst_y1 + (src_y2 - src_y1)

    src = image[src_y1:src_y2, src_x1:src_x2]
    if image.shape[2] == 3:
        buffer[dst_y1:dst_y2, dst_x1:dst_x2] = src
        return

    dst = buffer[dst_y1:dst_y2, dst_x1:dst_x2]
    alpha = src[:, :, 3:4] / 255.0
    buffer[dst_y1:dst_y2, dst_x1:dst_x2] = (
        src[:, :, :3] * alpha + dst * (1 - alpha)
    ).astype(np.uint8)


def draw_tiled(buffer: Buffer, image: Buffer, offset: float, y: int) -> None:
    """Draw a horizontally repeating strip scrolled left by ``offset``."""
    buf_w = buffer.shape[1]
    tile_w = image.shape[1]
    if tile_w <= 0:
        return
    x = -int(offset % tile_w)
    while x < buf_w:
        draw_image(buffer, image, x, y)
        x += tile_w


def measure_text(text: str, scale: int = 1) -> Tuple[int, int]:
    """Width and height in pixels of ``text`` drawn with the built-in font."""
    if not text:
        return 0, GLYPH_HEIGHT * scale
    width = 0
    for char in text:
        width += (4 if char == " " else GLYPH_WIDTH + 1) * scale
    return width - scale, GLYPH_HEIGHT * scale


def draw_text(
    buffer: Buffer,
    text: str,
    x: int,
    y: int,
    color: Color,
    scale: int = 1,
    font: Optional[dict] = None,
) -> Tuple[int, int]:
    """Draw text using a bitmap font.

    Args:
        buffer: Target numpy array (height, width, 3)
        text: Text string to draw (upper-cased for lookup)
        x: Starting x coordinate
        y: Starting y coordinate
        color: RGB color tuple
        scale: Integer pixel scale factor
        font: Bitmap font dictionary (char -> rows). Uses built-in if None.

    Returns:
        Tuple of (width, height) of rendered text in pixels
    """
    if font is None:
        font = DEFAULT_FONT

    cursor_x = x
    for char in text:
        if char == " ":
            cursor_x += 4 * scale
            continue

        glyph = font.get(char.upper(), font["?"])
        glyph_w = len(glyph[0])
        for row_idx, row in enumerate(glyph):
            for col_idx, pixel in enumerate(row):
                if pixel:
                    draw_rect(
                        buffer,
                        cursor_x + col_idx * scale,
                        y + row_idx * scale,
                        scale,
                        scale,
                        color,
                    )
        cursor_x += (glyph_w + 1) * scale

    return cursor_x - x, GLYPH_HEIGHT * scale


def draw_centered_text(
    buffer: Buffer, text: str, y: int, color: Color, scale: int = 1
) -> None:
    """Draw text horizontally centered on the buffer."""
    width, _ = measure_text(text, scale)
    draw_text(buffer, text, (buffer.shape[1] - width) // 2, y, color, scale)


# 3x5 bitmap font; rows top to bottom
DEFAULT_FONT = {
    'A': [[0,1,0], [1,0,1], [1,1,1], [1,0,1], [1,0,1]],
    'B': [[1,1,0], [1,0,1], [1,1,0], [1,0,1], [1,1,0]],
    'C': [[0,1,1], [1,0,0], [1,0,0], [1,0,0], [0,1,1]],
    'D': [[1,1,0], [1,0,1], [1,0,1], [1,0,1], [1,1,0]],
    'E': [[1,1,1], [1,0,0], [1,1,0], [1,0,0], [1,1,1]],
    'F': [[1,1,1], [1,0,0], [1,1,0], [1,0,0], [1,0,0]],
    'G': [[0,1,1], [1,0,0], [1,0,1], [1,0,1], [0,1,1]],
    'H': [[1,0,1], [1,0,1], [1,1,1], [1,0,1], [1,0,1]],
    'I': [[1,1,1], [0,1,0], [0,1,0], [0,1,0], [1,1,1]],
    'J': [[0,0,1], [0,0,1], [0,0,1], [1,0,1], [0,1,0]],
    'K': [[1,0,1], [1,0,1], [1,1,0], [1,0,1], [1,0,1]],
    'L': [[1,0,0], [1,0,0], [1,0,0], [1,0,0], [1,1,1]],
    'M': [[1,0,1], [1,1,1], [1,0,1], [1,0,1], [1,0,1]],
    'N': [[1,0,1], [1,1,1], [1,1,1], [1,0,1], [1,0,1]],
    'O': [[0,1,0], [1,0,1], [1,0,1], [1,0,1], [0,1,0]],
    'P': [[1,1,0], [1,0,1], [1,1,0], [1,0,0], [1,0,0]],
    'Q': [[0,1,0], [1,0,1], [1,0,1], [1,1,1], [0,1,1]],
    'R': [[1,1,0], [1,0,1], [1,1,0], [1,0,1], [1,0,1]],
    'S': [[0,1,1], [1,0,0], [0,1,0], [0,0,1], [1,1,0]],
    'T': [[1,1,1], [0,1,0], [0,1,0], [0,1,0], [0,1,0]],
    'U': [[1,0,1], [1,0,1], [1,0,1], [1,0,1], [0,1,0]],
    'V': [[1,0,1], [1,0,1], [1,0,1], [0,1,0], [0,1,0]],
    'W': [[1,0,1], [1,0,1], [1,0,1], [1,1,1], [1,0,1]],
    'X': [[1,0,1], [1,0,1], [0,1,0], [1,0,1], [1,0,1]],
    'Y': [[1,0,1], [1,0,1], [0,1,0], [0,1,0], [0,1,0]],
    'Z': [[1,1,1], [0,0,1], [0,1,0], [1,0,0], [1,1,1]],
    '0': [[0,1,0], [1,0,1], [1,0,1], [1,0,1], [0,1,0]],
    '1': [[0,1,0], [1,1,0], [0,1,0], [0,1,0], [1,1,1]],
    '2': [[0,1,0], [1,0,1], [0,0,1], [0,1,0], [1,1,1]],
    '3': [[1,1,0], [0,0,1], [0,1,0], [0,0,1], [1,1,0]],
    '4': [[1,0,1], [1,0,1], [1,1,1], [0,0,1], [0,0,1]],
    '5': [[1,1,1], [1,0,0], [1,1,0], [0,0,1], [1,1,0]],
    '6': [[0,1,1], [1,0,0], [1,1,0], [1,0,1], [0,1,0]],
    '7': [[1,1,1], [0,0,1], [0,1,0], [0,1,0], [0,1,0]],
    '8': [[0,1,0], [1,0,1], [0,1,0], [1,0,1], [0,1,0]],
    '9': [[0,1,0], [1,0,1], [0,1,1], [0,0,1], [1,1,0]],
    '?': [[0,1,0], [1,0,1], [0,0,1], [0,0,0], [0,1,0]],
    '!': [[0,1,0], [0,1,0], [0,1,0], [0,0,0], [0,1,0]],
    '.': [[0,0,0], [0,0,0], [0,0,0], [0,0,0], [0,1,0]],
    ':': [[0,0,0], [0,1,0], [0,0,0], [0,1,0], [0,0,0]],
    '-': [[0,0,0], [0,0,0], [1,1,1], [0,0,0], [0,0,0]],
    '_': [[0,0,0], [0,0,0], [0,0,0], [0,0,0], [1,1,1]],
    '#': [[1,0,1], [1,1,1], [1,0,1], [1,1,1], [1,0,1]],
    '*': [[0,0,0], [1,0,1], [0,1,0], [1,0,1], [0,0,0]],
    '<': [[0,0,1], [0,1,0], [1,0,0], [0,1,0], [0,0,1]],
    '>': [[1,0,0], [0,1,0], [0,0,1], [0,1,0], [1,0,0]],
}
