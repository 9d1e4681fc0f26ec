"""
Rendering and Frame Driver Interfaces

The simulator owns particle state and nothing else. Pixels go to a
RenderingSurface, time comes from a FrameDriver: the host calls the
provided callback once before its next repaint, passing the current
timestamp in milliseconds.
"""

from abc import ABC, abstractmethod
from typing import Callable, Protocol


FrameCallback = Callable[[float], None]
ResizeCallback = Callable[[], None]


class RandomSource(Protocol):
    """Anything with random() -> float in [0, 1). random.Random qualifies."""

    def random(self) -> float:
        ...


class RenderingSurface(ABC):
    """
    A 2D drawing target whose size the host may change at any time.
    """

    @property
    @abstractmethod
    def width(self) -> int:
        pass

    @property
    @abstractmethod
    def height(self) -> int:
        pass

    @abstractmethod
    def clear(self) -> None:
        """Erase the whole surface."""
        pass

    @abstractmethod
    def fill_rotated_rect(
        self,
        cx: float,
        cy: float,
        width: float,
        height: float,
        angle: float,
        color: str,
    ) -> None:
        """
        Fill a rectangle centred on (cx, cy), rotated by `angle` radians.
        """
        pass

    @abstractmethod
    def set_visible(self, visible: bool) -> None:
        pass

    @abstractmethod
    def subscribe_resize(self, callback: ResizeCallback) -> None:
        """Call `callback` after every size change."""
        pass

    @abstractmethod
    def unsubscribe_resize(self, callback: ResizeCallback) -> None:
        """Stop calling `callback`. Unknown callbacks are ignored."""
        pass


class FrameDriver(ABC):
    """Host primitive for cooperative per-frame callbacks."""

    @abstractmethod
    def request_frame(self, callback: FrameCallback) -> None:
        """
        Invoke `callback(now_ms)` once, before the next repaint.

        A step requests the following frame itself, so steps never overlap.
        """
        pass
