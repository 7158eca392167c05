"""World configuration with sensible defaults."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class WorldConfig:
    """Immutable configuration for a game session."""

    # World generation
    world_seed: int = 0
    cell_size: float = 1e-4            # cell side length in degrees
    coin_rate_mod: int = 100           # coins per cache = floor(draw * coin_rate_mod)
    spawn_probability: float = 0.1     # share of cells that are cache sites

    # Player start (Merrill College classroom)
    start_lat: float = 36.9995
    start_lng: float = -122.0533

    # Viewport
    neighborhood_size: int = 8

    # Sensor follow
    sensor_poll_seconds: float = 1.0

    # Persistence (None = in-memory only)
    state_dir: str | None = None

    # Logging
    log_level: str = "INFO"
