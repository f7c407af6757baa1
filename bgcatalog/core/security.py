"""Password hashing and signed identity tokens."""

from datetime import UTC, datetime, timedelta
from typing import TYPE_CHECKING, Any

import bcrypt
import jwt
from pydantic import ValidationError

from bgcatalog.core.config import settings
from bgcatalog.core.errors import InvalidToken, MissingToken
from bgcatalog.schemas.account import Identity, RoleOut

if TYPE_CHECKING:
    from bgcatalog.core.config import Settings


def hash_password(plain_password: str, rounds: int | None = None) -> str:
    """Hash a plain-text password for storage. Do not store plain passwords."""
    # bcrypt has a 72-byte limit; truncate to avoid errors.
    pw_bytes = plain_password.encode("utf-8")[:72]
    salt = bcrypt.gensalt(rounds=rounds or settings.BCRYPT_ROUNDS)
    return bcrypt.hashpw(pw_bytes, salt).decode("utf-8")


def verify_password(plain_password: str, hashed: str) -> bool:
    """Verify a plain password against a stored hash (salt and cost are read from the hash)."""
    pw_bytes = plain_password.encode("utf-8")[:72]
    try:
        return bcrypt.checkpw(pw_bytes, hashed.encode("utf-8"))
    except (ValueError, TypeError):
        return False


class TokenCodec:
    """
    Issues and parses signed identity tokens.

    The secret is passed in at construction. With expire_minutes=None the token
    carries no exp claim and stays valid until the secret rotates.
    """

    def __init__(
        self,
        secret: str,
        algorithm: str = "HS256",
        expire_minutes: int | None = None,
    ) -> None:
        if not secret:
            raise ValueError("Token secret must be non-empty")
        self._secret = secret
        self.algorithm = algorithm
        self.expire_minutes = expire_minutes

    @classmethod
    def from_settings(cls, app_settings: "Settings") -> "TokenCodec":
        return cls(
            app_settings.JWT_SECRET.get_secret_value(),
            algorithm=app_settings.JWT_ALGORITHM,
            expire_minutes=app_settings.JWT_EXPIRE_MINUTES,
        )

    def issue(self, identity: Identity) -> str:
        """Encode account id, email and role into a signed token."""
        now = datetime.now(UTC)
        payload: dict[str, Any] = {
            "sub": str(identity.id),
            "email": identity.email,
            "role": {"id": identity.role.id, "name": identity.role.name},
            "iat": now,
        }
        if self.expire_minutes is not None:
            payload["exp"] = now + timedelta(minutes=self.expire_minutes)
        return jwt.encode(payload, self._secret, algorithm=self.algorithm)

    def parse(self, token: str | None) -> Identity:
        """
        Verify the signature and return the embedded identity. No store lookup.
        Raises MissingToken for an absent token and InvalidToken for anything unusable.
        """
        if token is None or not token.strip():
            raise MissingToken("Access denied: no token provided")
        try:
            payload = jwt.decode(token.strip(), self._secret, algorithms=[self.algorithm])
        except jwt.PyJWTError as e:
            raise InvalidToken("Access denied: invalid token") from e
        try:
            return Identity(
                id=int(payload["sub"]),
                email=payload["email"],
                role=RoleOut.model_validate(payload["role"]),
            )
        except (KeyError, TypeError, ValueError, ValidationError) as e:
            raise InvalidToken("Access denied: invalid token") from e
