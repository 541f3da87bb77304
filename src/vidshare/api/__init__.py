"""HTTP API for vidshare built on FastAPI."""

from vidshare.api.app import create_app

__all__ = ["create_app"]
