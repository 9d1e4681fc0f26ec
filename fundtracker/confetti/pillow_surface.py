"""
Pillow Rendering Surface

Draws confetti into an RGBA image. The host decides what to do with
the frame (the Streamlit app pushes it into an image placeholder).
"""

import math

from PIL import Image, ImageDraw

from fundtracker.confetti.interface import RenderingSurface, ResizeCallback


TRANSPARENT = (0, 0, 0, 0)


class PillowSurface(RenderingSurface):
    """RenderingSurface backed by a PIL image."""

    def __init__(
        self,
        width: int,
        height: int,
        background: tuple[int, int, int, int] = TRANSPARENT,
    ):
        if width <= 0 or height <= 0:
            raise ValueError(f"Surface size must be positive, got {width}x{height}")
        self._background = background
        self._image = Image.new("RGBA", (width, height), background)
        self._draw = ImageDraw.Draw(self._image)
        self._visible = False
        self._resize_listeners: list[ResizeCallback] = []

    @property
    def width(self) -> int:
        return self._image.width

    @property
    def height(self) -> int:
        return self._image.height

    @property
    def visible(self) -> bool:
        return self._visible

    @property
    def image(self) -> Image.Image:
        """Current frame."""
        return self._image

    def snapshot(self) -> Image.Image:
        """Copy of the current frame that later draws won't touch."""
        return self._image.copy()

    def resize(self, width: int, height: int) -> None:
        """Replace the backing image and notify resize listeners."""
        if width <= 0 or height <= 0:
            raise ValueError(f"Surface size must be positive, got {width}x{height}")
        self._image = Image.new("RGBA", (width, height), self._background)
        self._draw = ImageDraw.Draw(self._image)
        for callback in list(self._resize_listeners):
            callback()

    def clear(self) -> None:
        self._image.paste(self._background, (0, 0, self.width, self.height))

    def fill_rotated_rect(
        self,
        cx: float,
        cy: float,
        width: float,
        height: float,
        angle: float,
        color: str,
    ) -> None:
        hw, hh = width / 2, height / 2
        cos_a, sin_a = math.cos(angle), math.sin(angle)
        corners = [(-hw, -hh), (hw, -hh), (hw, hh), (-hw, hh)]
        points = [
            (cx + x * cos_a - y * sin_a, cy + x * sin_a + y * cos_a)
            for x, y in corners
        ]
        self._draw.polygon(points, fill=color)

    def set_visible(self, visible: bool) -> None:
        self._visible = visible

    def subscribe_resize(self, callback: ResizeCallback) -> None:
        self._resize_listeners.append(callback)

    def unsubscribe_resize(self, callback: ResizeCallback) -> None:
        try:
            self._resize_listeners.remove(callback)
        except ValueError:
            pass

    @property
    def resize_listener_count(self) -> int:
        return len(self._resize_listeners)
