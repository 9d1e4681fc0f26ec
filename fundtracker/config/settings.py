"""
Configuration Management for Fund Tracker

Uses pydantic-settings for type-safe configuration from environment variables.

DESIGN DECISION: All configuration is centralized here.
The target, the milestone set and the confetti tuning are fixed at
startup and validated once, so the rest of the code can treat them
as constants.
"""

from decimal import Decimal
from functools import lru_cache

from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


DEFAULT_PALETTE = [
    "#ef4444",
    "#f59e0b",
    "#f97316",
    "#06b6d4",
    "#10b981",
    "#8b5cf6",
    "#f43f5e",
]


class TrackerSettings(BaseSettings):
    """Funding target, milestones and notification timing."""

    model_config = SettingsConfigDict(
        env_prefix="TRACKER_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    target: Decimal = Field(
        default=Decimal("185380.00"),
        gt=0,
        decimal_places=2,
        description="Total monetary goal"
    )
    milestones: list[int] = Field(
        default_factory=lambda: [10, 20, 30, 40, 50, 60, 70, 80, 90],
        description="Ascending percentages that trigger a celebration"
    )
    currency_symbol: str = Field(
        default="€",
        max_length=5,
        description="Symbol appended to formatted amounts"
    )
    toast_duration_ms: int = Field(
        default=3500,
        ge=500,
        description="How long a notification stays visible"
    )
    milestone_interval_ms: int = Field(
        default=900,
        ge=100,
        description="Spacing between staggered milestone announcements"
    )
    notify_on_save_failure: bool = Field(
        default=False,
        description="Tell the user when contributions could not be saved"
    )

    @field_validator('milestones')
    @classmethod
    def validate_milestones(cls, v: list[int]) -> list[int]:
        """Milestones must be strictly ascending percentages in 1..100."""
        for m in v:
            if m < 1 or m > 100:
                raise ValueError(f"Milestone {m}% is outside 1..100")
        if any(b <= a for a, b in zip(v, v[1:])):
            raise ValueError("Milestones must be strictly ascending")
        return v


class ConfettiSettings(BaseSettings):
    """Particle simulator tuning."""

    model_config = SettingsConfigDict(
        env_prefix="CONFETTI_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    duration_ms: int = Field(
        default=3000,
        gt=0,
        description="Wall-clock length of one confetti run"
    )
    min_particles: int = Field(
        default=60,
        ge=1,
        description="Smallest batch size"
    )
    max_particles: int = Field(
        default=140,
        ge=1,
        description="Largest batch size"
    )
    width_per_particle: float = Field(
        default=8.0,
        gt=0,
        description="Surface pixels per particle before clamping"
    )
    gravity: float = Field(
        default=0.08,
        ge=0.0,
        description="Downward acceleration added to vy every frame"
    )
    palette: list[str] = Field(
        default_factory=lambda: list(DEFAULT_PALETTE),
        min_length=1,
        description="Colors particles are drawn from"
    )
    frame_interval_ms: int = Field(
        default=16,
        ge=1,
        le=1000,
        description="Frame spacing for the built-in frame loop"
    )
    canvas_width: int = Field(
        default=900,
        ge=1,
        description="Width of the rendered confetti frame"
    )
    canvas_height: int = Field(
        default=420,
        ge=1,
        description="Height of the rendered confetti frame"
    )

    @model_validator(mode='after')
    def validate_particle_bounds(self) -> 'ConfettiSettings':
        """Batch bounds must not be inverted."""
        if self.min_particles > self.max_particles:
            raise ValueError("min_particles cannot be greater than max_particles")
        return self


class StorageSettings(BaseSettings):
    """Local persistence configuration."""

    model_config = SettingsConfigDict(
        env_prefix="STORAGE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    path: str = Field(
        default="fundtracker_data.json",
        description="JSON file used as the key-value blob"
    )
    key: str = Field(
        default="fundtracker:contributions",
        min_length=1,
        description="Key the contribution list is stored under"
    )


class Settings(BaseSettings):
    """
    Root settings container.

    Aggregates all sub-settings for easy access.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    @property
    def tracker(self) -> TrackerSettings:
        return TrackerSettings()

    @property
    def confetti(self) -> ConfettiSettings:
        return ConfettiSettings()

    @property
    def storage(self) -> StorageSettings:
        return StorageSettings()


@lru_cache()
def get_settings() -> Settings:
    """
    Get application settings (cached).

    Call get_settings.cache_clear() to reload if needed.
    """
    return Settings()


def validate_all_settings() -> dict[str, bool]:
    """
    Validate all settings are properly configured.

    Returns a dict of {setting_name: is_valid}, with an
    "<name>_error" entry for every section that failed.
    """
    results = {}

    settings = get_settings()

    for name in ("tracker", "confetti", "storage"):
        try:
            _ = getattr(settings, name)
            results[name] = True
        except Exception as e:
            results[name] = False
            results[f"{name}_error"] = str(e)

    return results
