"""
Configuration module for VoteArena.
"""

from votearena.config.settings import (
    Settings,
    get_settings,
    configure,
    reset_settings,
    resolve_env,
)

__all__ = [
    "Settings",
    "get_settings",
    "configure",
    "reset_settings",
    "resolve_env",
]
