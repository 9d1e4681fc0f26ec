"""
Confetti Particle Models

A particle is ephemeral kinematic state owned by the simulator for
one animation run. Particles are mutated in place every frame, so the
model validates on construction only.
"""

import math
from enum import Enum

from pydantic import BaseModel, Field


class SimulatorState(str, Enum):
    """Particle simulator lifecycle."""
    IDLE = "idle"
    RUNNING = "running"


class Particle(BaseModel):
    """
    A single confetti piece.

    Rotation is in radians, velocities in pixels per frame.
    """

    x: float
    y: float
    vx: float
    vy: float
    size: float = Field(..., gt=0)
    color: str = Field(..., min_length=1)
    rotation: float = Field(default=0.0, ge=0.0, le=2 * math.pi)
    spin: float = 0.0
    ttl: float = Field(
        default=0.0,
        ge=0.0,
        description="Per-particle lifetime budget in ms (not used for culling)"
    )

    def advance(self, gravity: float) -> None:
        """Move one frame: position by velocity, gravity into vy, spin into rotation."""
        self.x += self.vx
        self.y += self.vy
        self.vy += gravity
        self.rotation += self.spin
