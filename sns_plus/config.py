"""
Configuration for the SNS Plus plugin
=====================================
Centralizes plugin defaults with environment variable support so the same
plugin build can run against dev/staging/prod accounts.
"""

import os
import logging
from dataclasses import dataclass
from typing import Tuple


# =============================================================================
# LOGGING CONFIGURATION
# =============================================================================

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def get_logger(name: str) -> logging.Logger:
    """
    Get a configured logger instance.

    Args:
        name: Logger name (typically __name__)

    Returns:
        Configured logging.Logger instance
    """
    logger = logging.getLogger(name)
    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.addHandler(handler)
    logger.setLevel(get_env("SNS_PLUS_LOG_LEVEL", "INFO").upper())
    return logger


# =============================================================================
# ENVIRONMENT VARIABLE HELPERS
# =============================================================================

def get_env(key: str, default: str = "") -> str:
    """Get environment variable with default."""
    return os.environ.get(key, default)


def get_env_bool(key: str, default: bool = False) -> bool:
    """Get boolean from environment variable."""
    val = os.environ.get(key, "").lower()
    if val in ("true", "1", "yes", "on"):
        return True
    if val in ("false", "0", "no", "off"):
        return False
    return default


def parse_version(version: str) -> Tuple[int, ...]:
    """
    Parse a dotted semver string into a comparable tuple.

    Pre-release and build suffixes are ignored ("1.13.0-rc.1" -> (1, 13, 0)).
    Non-numeric components count as 0.
    """
    core = str(version).split("-", 1)[0].split("+", 1)[0]
    parts = []
    for piece in core.split("."):
        try:
            parts.append(int(piece))
        except ValueError:
            parts.append(0)
    return tuple(parts)


# =============================================================================
# CONFIG DATACLASS
# =============================================================================

@dataclass(frozen=True)
class Config:
    """
    Immutable plugin configuration.

    Example:
        config = Config.from_env()
        config = Config.from_env(default_region="eu-west-1")
    """
    default_region: str = "us-east-1"
    default_stage: str = "dev"
    min_host_version: str = "1.13.0"

    # Cleanup setting used when the service has no custom.snsPlusClean
    clean_by_default: bool = False

    @classmethod
    def from_env(cls, **overrides) -> "Config":
        """
        Create Config from environment variables with optional overrides.

        Environment variables:
            SNS_PLUS_DEFAULT_REGION, SNS_PLUS_DEFAULT_STAGE,
            SNS_PLUS_MIN_HOST_VERSION, SNS_PLUS_CLEAN
        """
        defaults = {
            "default_region": get_env("SNS_PLUS_DEFAULT_REGION", "us-east-1"),
            "default_stage": get_env("SNS_PLUS_DEFAULT_STAGE", "dev"),
            "min_host_version": get_env("SNS_PLUS_MIN_HOST_VERSION", "1.13.0"),
            "clean_by_default": get_env_bool("SNS_PLUS_CLEAN", False),
        }
        defaults.update(overrides)
        return cls(**defaults)

    @property
    def min_host_version_tuple(self) -> Tuple[int, ...]:
        return parse_version(self.min_host_version)


# Service-level switch that enables post-deploy topic cleanup
CLEAN_FLAG = "snsPlusClean"

# Event key for the custom subscription type
EVENT_KEY = "snsPlus"
