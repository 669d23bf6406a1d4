"""
VoteArena REST API.

FastAPI application exposing vote recording and matchup selection.
"""

from votearena.api.main import app, create_app

__all__ = ["app", "create_app"]
