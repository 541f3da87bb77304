"""Utility helpers shared across vidshare modules."""

from enum import Enum


class Environment(str, Enum):
    """Deployment environment selected with ``APP_ENV``."""

    DEVELOPMENT = "development"
    TEST = "test"
    PRODUCTION = "production"

    @property
    def exposes_docs(self) -> bool:
        """Interactive API docs are served everywhere except production."""

        return self is not Environment.PRODUCTION


__all__ = ["Environment"]
