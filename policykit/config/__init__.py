"""
PolicyKit Config - Public API
=============================
"""

from policykit.config.settings import (
    DEFAULT_LOGGER_NAME,
    DEFAULT_SET_HINT,
    ENV_PREFIX,
    EngineSettings,
    parse_bool,
)

__all__ = [
    "EngineSettings",
    "DEFAULT_SET_HINT",
    "DEFAULT_LOGGER_NAME",
    "ENV_PREFIX",
    "parse_bool",
]
