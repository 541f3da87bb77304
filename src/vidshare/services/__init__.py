"""Service layer for the vidshare application."""

from typing import Protocol


class SupportsClose(Protocol):
    """Protocol describing resources that can be closed."""

    def close(self) -> None:
        """Release any acquired resources."""


__all__ = ["SupportsClose"]
