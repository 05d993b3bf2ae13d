"""Frame buffer drawing."""

from .primitives import draw_centered_text, draw_rect, draw_text, fill, new_buffer
from .scene import SceneRenderer

__all__ = [
    "SceneRenderer",
    "draw_centered_text",
    "draw_rect",
    "draw_text",
    "fill",
    "new_buffer",
]
