"""Confetti particle simulation and its rendering collaborators."""

from fundtracker.confetti.drivers import LoopFrameDriver
from fundtracker.confetti.interface import FrameDriver, RandomSource, RenderingSurface
from fundtracker.confetti.pillow_surface import PillowSurface
from fundtracker.confetti.simulator import ParticleSimulator

__all__ = [
    "FrameDriver",
    "LoopFrameDriver",
    "ParticleSimulator",
    "PillowSurface",
    "RandomSource",
    "RenderingSurface",
]
