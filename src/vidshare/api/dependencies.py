"""FastAPI dependencies resolving services and the calling user."""

from __future__ import annotations

from typing import Optional

from fastapi import Depends, Header, Request

from vidshare.services.auth import AuthenticatedUser, InvalidTokenError
from vidshare.services.container import ServiceContainer


def get_container(request: Request) -> ServiceContainer:
    """Return the service container attached to the running application."""

    return request.app.state.container


def get_current_user(
    authorization: Optional[str] = Header(default=None),
    container: ServiceContainer = Depends(get_container),
) -> AuthenticatedUser:
    """Resolve the ``Authorization: Bearer <token>`` header into a user."""

    if not authorization:
        raise InvalidTokenError("No token provided")

    parts = authorization.split(" ")
    if len(parts) != 2 or parts[0] != "Bearer":
        raise InvalidTokenError("Invalid Authorization format")

    return container.auth.verify_token(parts[1])


__all__ = ["get_container", "get_current_user"]
