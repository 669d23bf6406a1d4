"""
Utility module for VoteArena.
"""

from votearena.utils.logger_config import (
    setup_logging,
    get_logger,
)

__all__ = [
    "setup_logging",
    "get_logger",
]
