# sentinel/config.py
# ------------------------------------------------------------
# Central configuration using pydantic-settings.
#
# All values can be overridden via environment variables.
# ------------------------------------------------------------

from pydantic_settings import BaseSettings
from typing import List


class Settings(BaseSettings):
    """
    Runtime configuration for the monitoring backend.
    """

    # --------------------------------------------------------
    # Infrastructure
    # --------------------------------------------------------
    redis_url: str = "redis://localhost:6379/0"
    redis_enabled: bool = True      # live update bus for /api/stream
    stream_max_len: int = 500       # bus messages kept in Redis

    log_level: str = "INFO"

    # --------------------------------------------------------
    # CORS / Frontend integration
    # --------------------------------------------------------
    api_cors_origins: str = (
        "http://localhost:5173,"
        "http://localhost:3000"
    )

    # --------------------------------------------------------
    # Simulation toggles
    # --------------------------------------------------------
    simulation_enabled: bool = True
    tick_interval_ms: int = 100
    asset_count: int = 8

    # --------------------------------------------------------
    # Simulated area (flat-plane degrees)
    # --------------------------------------------------------
    map_center_lat: float = 38.9072
    map_center_lng: float = -77.0369
    spawn_radius_deg: float = 0.04
    heading_change_chance: float = 0.03

    # --------------------------------------------------------
    # Alert display
    # --------------------------------------------------------
    recent_alerts_limit: int = 50

    # --------------------------------------------------------
    # Helpers
    # --------------------------------------------------------
    def cors_list(self) -> List[str]:
        """
        Parse comma-separated CORS origins into a clean list.
        """
        return [
            x.strip()
            for x in self.api_cors_origins.split(",")
            if x.strip()
        ]

    @property
    def tick_interval_sec(self) -> float:
        return max(1, self.tick_interval_ms) / 1000.0


# Singleton settings object
settings = Settings()
