"""HTTP API for the story service."""

from ai_adventure.server.app import create_app

__all__ = ["create_app"]
