"""
KV-Helpers Configuration Settings

This module contains the default configuration for the Redis access layer.
Values are read from the environment once, at import time.
"""

import os
from dataclasses import dataclass
from typing import Any, Dict, Optional


@dataclass
class Settings:
    """Access layer configuration settings."""

    # Connection settings
    HOST: str = os.environ.get("REDIS_HOST", "localhost")
    PORT: int = int(os.environ.get("REDIS_PORT", "6379"))
    URL: Optional[str] = os.environ.get("REDIS_URL") or None

    # Every data key is stored as <DATA_PREFIX><key>
    DATA_PREFIX: str = os.environ.get("KV_HELPERS_PREFIX", "lb_")

    # Reconnect settings (milliseconds)
    MAX_RECONNECT_ATTEMPT_TIMEOUT: int = 3000
    MAX_RECONNECT_TIMEOUT: int = 60 * 60 * 1000

    # Key scan settings
    SCAN_COUNT: int = 10000

    # Logging settings
    DEBUG: bool = os.environ.get("KV_HELPERS_DEBUG", "false").lower() == "true"
    LOG_LEVEL: str = os.environ.get("KV_HELPERS_LOG_LEVEL", "INFO")

    def as_config(self) -> Dict[str, Any]:
        """Return the store configuration mapping built from these settings."""
        return {
            "host": self.HOST,
            "port": self.PORT,
            "url": self.URL,
            "data_prefix": self.DATA_PREFIX,
            "max_reconnect_attempt_timeout": self.MAX_RECONNECT_ATTEMPT_TIMEOUT,
            "max_reconnect_timeout": self.MAX_RECONNECT_TIMEOUT,
        }


# Global settings instance
settings = Settings()
