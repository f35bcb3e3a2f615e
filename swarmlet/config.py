"""Environment-driven configuration for swarmlet."""

import logging
import os
from dataclasses import dataclass
from typing import Optional

from swarmlet.utils.constants import DEFAULT_LOG_LEVEL, DEFAULT_MODEL


@dataclass(frozen=True)
class Settings:
    """Settings read from the process environment."""
    api_key: Optional[str] = None
    base_url: Optional[str] = None
    model: str = DEFAULT_MODEL
    log_level: str = DEFAULT_LOG_LEVEL

    @classmethod
    def from_env(cls) -> "Settings":
        """
        Build settings from environment variables.

        Reads OPENAI_API_KEY, OPENAI_BASE_URL, SWARMLET_MODEL and SWARMLET_LOG_LEVEL.
        """
        return cls(
            api_key=os.getenv("OPENAI_API_KEY") or None,
            base_url=os.getenv("OPENAI_BASE_URL") or None,
            model=os.getenv("SWARMLET_MODEL") or DEFAULT_MODEL,
            log_level=(os.getenv("SWARMLET_LOG_LEVEL") or DEFAULT_LOG_LEVEL).upper(),
        )


def get_settings() -> Settings:
    """Get settings for the current environment."""
    return Settings.from_env()


def configure_logging(level: Optional[str] = None) -> None:
    """Configure root logging for scripts and examples. The library itself never calls this."""
    level_name = (level or get_settings().log_level).upper()
    logging.basicConfig(
        level=getattr(logging, level_name, logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
