"""
Centralized configuration management for geofacade.

All configuration is loaded from environment variables with sensible defaults.
Use the `settings` singleton for accessing configuration values.

Usage:
    from geofacade.core.config import settings

    # Access configuration
    print(settings.BING_MAPS_API_KEY)
    print(settings.HTTP_TIMEOUT)
"""

import os
from pathlib import Path
from dataclasses import dataclass, field
from typing import Optional
from dotenv import load_dotenv

# Load environment variables from .env file
# Search in common locations
_env_paths = [
    Path(__file__).parent.parent.parent / ".env",  # project root
    Path.cwd() / ".env",  # Current working directory
]

for env_path in _env_paths:
    if env_path.exists():
        load_dotenv(env_path)
        break


def _optional_env(name: str) -> Optional[str]:
    value = os.getenv(name, "").strip()
    return value or None


@dataclass
class Settings:
    """Application settings loaded from environment variables."""

    # ==========================================================================
    # Provider API Keys
    # ==========================================================================
    BING_MAPS_API_KEY: Optional[str] = field(
        default_factory=lambda: _optional_env("BING_MAPS_API_KEY")
    )
    TOMTOM_API_KEY: Optional[str] = field(
        default_factory=lambda: _optional_env("TOMTOM_API_KEY")
    )

    # ==========================================================================
    # Query Defaults
    # ==========================================================================
    GEOCODER_LOCALE: Optional[str] = field(
        default_factory=lambda: _optional_env("GEOCODER_LOCALE")
    )
    GEOCODER_LIMIT: int = field(
        default_factory=lambda: int(os.getenv("GEOCODER_LIMIT", "5"))
    )

    # ==========================================================================
    # HTTP Transport
    # ==========================================================================
    HTTP_TIMEOUT: float = field(
        default_factory=lambda: float(os.getenv("HTTP_TIMEOUT", "10"))
    )
    USER_AGENT: str = field(
        default_factory=lambda: os.getenv("USER_AGENT", "geofacade/1.0")
    )

    def validate_bing_maps(self) -> bool:
        """Check if the Bing Maps API key is configured."""
        return bool(self.BING_MAPS_API_KEY)

    def validate_tomtom(self) -> bool:
        """Check if the TomTom API key is configured."""
        return bool(self.TOMTOM_API_KEY)


# Singleton settings instance
settings = Settings()
