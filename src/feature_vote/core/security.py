"""Access-token helpers built on signed JWTs."""
from __future__ import annotations

from datetime import UTC, datetime, timedelta

from jose import JWTError, jwt

from feature_vote.core.settings import settings


class InvalidTokenError(ValueError):
    """Raised when a bearer token cannot be decoded into a user identifier."""


def create_access_token(user_id: int, extra_claims: dict[str, str] | None = None) -> str:
    """Create a JWT access token for an authenticated user.

    Args:
        user_id: Primary key of the user the token is issued to.
        extra_claims: Optional additional claims merged into the payload.

    Returns:
        The encoded token string.
    """
    to_encode: dict[str, object] = {"sub": str(user_id)}
    if extra_claims:
        to_encode.update(extra_claims)
    expire = datetime.now(UTC) + timedelta(minutes=settings.access_token_expire_minutes)
    to_encode["exp"] = expire
    encoded_jwt: str = jwt.encode(
        to_encode,
        settings.secret_key,
        algorithm=settings.jwt_algorithm,
    )
    return encoded_jwt


def decode_access_token(token: str) -> int:
    """Return the user identifier carried by ``token``.

    Raises:
        InvalidTokenError: If the signature, expiry, or subject is invalid.
    """
    try:
        payload = jwt.decode(
            token,
            settings.secret_key,
            algorithms=[settings.jwt_algorithm],
        )
    except JWTError as err:
        raise InvalidTokenError("Could not validate credentials") from err

    subject = payload.get("sub")
    if subject is None:
        raise InvalidTokenError("Could not validate credentials")
    try:
        return int(subject)
    except (TypeError, ValueError) as err:
        raise InvalidTokenError("Could not validate credentials") from err
