"""
Frame Loop

A blocking, cooperative stand-in for a browser's animation frames.
At most one callback is pending; run() keeps delivering frames until
nobody asks for another one.
"""

import time
from typing import Callable, Optional

from fundtracker.confetti.interface import FrameCallback, FrameDriver


class LoopFrameDriver(FrameDriver):
    """Delivers frames at a fixed interval from a plain loop."""

    def __init__(
        self,
        frame_interval_ms: int = 16,
        clock: Optional[Callable[[], float]] = None,
        sleep: Optional[Callable[[float], None]] = None,
        after_frame: Optional[Callable[[float], None]] = None,
    ):
        """
        Args:
            frame_interval_ms: Pause before each frame
            clock: Returns the current time in ms
            sleep: Sleeps for a number of seconds
            after_frame: Called with the frame timestamp after every
                         callback, e.g. to present the frame
        """
        self._frame_interval_ms = frame_interval_ms
        self._clock = clock or (lambda: time.monotonic() * 1000.0)
        self._sleep = sleep or time.sleep
        self.after_frame = after_frame
        self._pending: Optional[FrameCallback] = None

    @property
    def has_pending(self) -> bool:
        return self._pending is not None

    def request_frame(self, callback: FrameCallback) -> None:
        self._pending = callback

    def run(self, max_frames: Optional[int] = None) -> int:
        """
        Deliver frames until no callback is pending.

        Returns:
            Number of frames delivered
        """
        frames = 0
        while self._pending is not None:
            if max_frames is not None and frames >= max_frames:
                break
            callback, self._pending = self._pending, None
            self._sleep(self._frame_interval_ms / 1000.0)
            now = self._clock()
            callback(now)
            frames += 1
            if self.after_frame:
                self.after_frame(now)
        return frames
