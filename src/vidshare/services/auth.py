"""Registration, login and bearer-token handling."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Callable, Mapping, Optional

import bcrypt
import jwt

from vidshare.config.settings import Settings, get_settings
from vidshare.db import UserStore
from vidshare.db.repositories import DuplicateRecordError
from vidshare.models.api import RegisterRequest
from vidshare.models.base import utc_now
from vidshare.models.user import User

logger = logging.getLogger(__name__)

BCRYPT_ROUNDS = 10
# bcrypt only considers the first 72 bytes of a password.
BCRYPT_MAX_BYTES = 72


class AuthError(RuntimeError):
    """Base exception raised by the authentication service."""


class EmailAlreadyRegisteredError(AuthError):
    """Raised when registering an e-mail address that is already in use."""


class UserNotFoundError(AuthError):
    """Raised when no account matches the supplied identity."""


class InvalidCredentialsError(AuthError):
    """Raised when a password does not match the stored hash."""


class InvalidTokenError(AuthError):
    """Raised when a bearer token is malformed, forged or expired."""


@dataclass(frozen=True, slots=True)
class AuthenticatedUser:
    """Identity extracted from a verified bearer token."""

    user_id: str
    username: str
    email: str


@dataclass(slots=True)
class AuthResult:
    """Account returned together with a freshly issued token."""

    user: User
    token: str


def hash_password(password: str) -> str:
    """Return a bcrypt digest for ``password``."""

    encoded = password.encode("utf-8")[:BCRYPT_MAX_BYTES]
    return bcrypt.hashpw(encoded, bcrypt.gensalt(rounds=BCRYPT_ROUNDS)).decode("utf-8")


def check_password(password: str, password_hash: str) -> bool:
    """Return ``True`` when ``password`` matches the stored digest."""

    encoded = password.encode("utf-8")[:BCRYPT_MAX_BYTES]
    try:
        return bcrypt.checkpw(encoded, password_hash.encode("utf-8"))
    except ValueError:
        return False


class AuthService:
    """Create accounts, check credentials and issue or verify JWTs."""

    def __init__(
        self,
        users: UserStore,
        *,
        settings: Optional[Settings] = None,
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        self._users = users
        self._settings = settings or get_settings()
        self._clock = clock

    def register(self, request: RegisterRequest) -> AuthResult:
        """Create a new account and return it with a session token.

        Raises
        ------
        EmailAlreadyRegisteredError
            If another account already uses the e-mail address.
        """

        email = str(request.email)
        if self._users.find_by_email(email) is not None:
            raise EmailAlreadyRegisteredError("Email already exists")

        model = User(
            username=request.username,
            email=email,
            password_hash=hash_password(request.password),
            avatar=request.avatar or self._settings.default_avatar_url,
        )
        try:
            user = self._users.insert(model)
        except DuplicateRecordError as exc:
            raise EmailAlreadyRegisteredError("Email already exists") from exc

        logger.info("Registered user %s (%s)", user.id, user.username)
        return AuthResult(user=user, token=self.issue_token(user))

    def login(self, email: str, password: str) -> AuthResult:
        """Check credentials and return the account with a new token."""

        user = self._users.find_by_email(email)
        if user is None:
            raise UserNotFoundError("User not found")
        if not check_password(password, user.password_hash):
            logger.info("Rejected login for user %s: password mismatch", user.id)
            raise InvalidCredentialsError("Invalid password")
        return AuthResult(user=user, token=self.issue_token(user))

    def issue_token(self, user: User) -> str:
        """Sign a token identifying ``user``."""

        if user.id is None:
            raise AuthError("Cannot issue a token for an unsaved user.")

        issued_at = self._clock()
        payload = {
            "sub": str(user.id),
            "username": user.username,
            "email": user.email,
            "iat": issued_at,
            "exp": issued_at + timedelta(days=self._settings.jwt_expires_days),
        }
        return jwt.encode(
            payload,
            self._settings.jwt_secret.get_secret_value(),
            algorithm=self._settings.jwt_algorithm,
        )

    def verify_token(self, token: str) -> AuthenticatedUser:
        """Decode ``token`` and return the identity it carries."""

        try:
            payload: Mapping[str, object] = jwt.decode(
                token,
                self._settings.jwt_secret.get_secret_value(),
                algorithms=[self._settings.jwt_algorithm],
                options={"require": ["sub", "exp"]},
            )
        except jwt.PyJWTError as exc:
            raise InvalidTokenError("Invalid Token") from exc

        return AuthenticatedUser(
            user_id=str(payload["sub"]),
            username=str(payload.get("username", "")),
            email=str(payload.get("email", "")),
        )


__all__ = [
    "AuthError",
    "AuthResult",
    "AuthService",
    "AuthenticatedUser",
    "EmailAlreadyRegisteredError",
    "InvalidCredentialsError",
    "InvalidTokenError",
    "UserNotFoundError",
    "check_password",
    "hash_password",
]
