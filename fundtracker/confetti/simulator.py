"""
Confetti Particle Simulator

State machine with two states:

    IDLE --start()--> RUNNING --step() past duration--> IDLE

DESIGN DECISION: The simulator never runs on its own timer. Each step
is a callback handed to the host's FrameDriver and requests the next
frame itself, so two steps can never overlap. Once started, a batch
always runs its full duration; there is no cancel.

A second start() while RUNNING is ignored. The running batch keeps
its particles, its start time and its single resize subscription.
"""

import math
import random
import time
from typing import Callable, Optional

from fundtracker.audit import AuditLogger
from fundtracker.config import ConfettiSettings, get_settings
from fundtracker.confetti.interface import FrameDriver, RandomSource, RenderingSurface
from fundtracker.models.particle import Particle, SimulatorState


class ParticleSimulator:
    """
    Owns one batch of confetti particles at a time.

    Every frame the surface is cleared and fully redrawn; there are no
    partial updates and no trails.
    """

    def __init__(
        self,
        surface: RenderingSurface,
        frame_driver: FrameDriver,
        settings: Optional[ConfettiSettings] = None,
        rng: Optional[RandomSource] = None,
        clock: Optional[Callable[[], float]] = None,
        audit_logger: Optional[AuditLogger] = None,
    ):
        """
        Args:
            surface: Where particles are drawn
            frame_driver: Host loop that calls step() once per frame
            settings: Batch size, gravity, palette and default duration
            rng: Random source for particle initialisation
            clock: Returns the current time in ms, used for the start stamp
            audit_logger: Optional audit trail for runs
        """
        self._surface = surface
        self._frame_driver = frame_driver
        self._settings = settings or get_settings().confetti
        self._rng = rng or random.Random()
        self._clock = clock or (lambda: time.monotonic() * 1000.0)
        self._audit_logger = audit_logger

        self._state = SimulatorState.IDLE
        self._particles: list[Particle] = []
        self._width = 0
        self._height = 0
        self._start_ms: Optional[float] = None
        self._duration_ms = 0

    @property
    def state(self) -> SimulatorState:
        return self._state

    @property
    def is_running(self) -> bool:
        return self._state == SimulatorState.RUNNING

    @property
    def particles(self) -> tuple[Particle, ...]:
        return tuple(self._particles)

    @property
    def dimensions(self) -> tuple[int, int]:
        """Working (width, height) of the current run."""
        return self._width, self._height

    def batch_size(self, width: float) -> int:
        """Particle count for a surface width, clamped to the configured bounds."""
        s = self._settings
        return int(math.floor(
            max(s.min_particles, min(s.max_particles, width / s.width_per_particle))
        ))

    def start(self, duration_ms: Optional[int] = None) -> bool:
        """
        Allocate a batch and start animating.

        Only valid from IDLE.

        Returns:
            True if a new batch started, False if one was already running
        """
        if self._state == SimulatorState.RUNNING:
            if self._audit_logger:
                self._audit_logger.log_confetti_trigger_ignored()
            return False

        duration = duration_ms if duration_ms is not None else self._settings.duration_ms
        if duration <= 0:
            raise ValueError("duration_ms must be positive")

        self._width = self._surface.width
        self._height = self._surface.height
        self._duration_ms = duration
        self._particles = self._spawn(self.batch_size(self._width), duration)

        self._surface.set_visible(True)
        self._surface.subscribe_resize(self.handle_resize)
        self._start_ms = self._clock()
        self._state = SimulatorState.RUNNING

        if self._audit_logger:
            self._audit_logger.log_confetti_started(
                particle_count=len(self._particles),
                duration_ms=duration,
            )

        self._frame_driver.request_frame(self.step)
        return True

    def step(self, now_ms: float) -> None:
        """
        Advance and redraw every particle, then either request the next
        frame or terminate the run. A no-op while IDLE.
        """
        if self._state != SimulatorState.RUNNING:
            return

        gravity = self._settings.gravity
        self._surface.clear()
        for p in self._particles:
            p.advance(gravity)
            self._surface.fill_rotated_rect(
                p.x, p.y, p.size, p.size * 0.6, p.rotation, p.color
            )

        elapsed = now_ms - self._start_ms
        if elapsed < self._duration_ms:
            self._frame_driver.request_frame(self.step)
        else:
            self._finish(elapsed)

    def handle_resize(self) -> None:
        """Pick up new surface dimensions without restarting the batch."""
        if self._state != SimulatorState.RUNNING:
            return
        self._width = self._surface.width
        self._height = self._surface.height

    def _spawn(self, count: int, duration_ms: int) -> list[Particle]:
        # Draw order per particle is fixed so a seeded source gives exact trajectories
        r = self._rng.random
        palette = self._settings.palette
        w, h = self._width, self._height
        particles = []
        for _ in range(count):
            x = r() * w
            y = r() * -h * 0.5
            vx = (r() - 0.5) * 6
            vy = r() * 6 + 2
            size = r() * 8 + 6
            color = palette[min(len(palette) - 1, int(math.floor(r() * len(palette))))]
            rotation = r() * math.pi * 2
            spin = (r() - 0.5) * 0.2
            ttl = r() * duration_ms
            particles.append(Particle(
                x=x,
                y=y,
                vx=vx,
                vy=vy,
                size=size,
                color=color,
                rotation=rotation,
                spin=spin,
                ttl=ttl,
            ))
        return particles

    def _finish(self, elapsed_ms: float) -> None:
        particle_count = len(self._particles)
        self._surface.clear()
        self._surface.set_visible(False)
        self._surface.unsubscribe_resize(self.handle_resize)
        self._particles = []
        self._start_ms = None
        self._state = SimulatorState.IDLE

        if self._audit_logger:
            self._audit_logger.log_confetti_finished(
                particle_count=particle_count,
                elapsed_ms=elapsed_ms,
            )
