"""JWT token creation and verification (HS256, shared JWT_SECRET).

Tokens carry only the user id ("sub") and the token type. The role is
never put in the token: it is read from the users row on every request,
so a role change by an admin takes effect immediately.

No revocation list: a token stays valid until it expires.
"""

from datetime import UTC, datetime, timedelta

from jose import JWTError, jwt

from config.settings import settings
from src.cp_common.errors import InvalidCredentialsError, InvalidRefreshTokenError

_ALGORITHM = settings.JWT_ALGORITHM
_LIFETIMES: dict[str, timedelta] = {
    "access": timedelta(minutes=settings.JWT_EXPIRE_MINUTES),
    "refresh": timedelta(days=settings.JWT_REFRESH_EXPIRE_DAYS),
}


def _issue(user_id: str, token_type: str) -> str:
    now = datetime.now(UTC)
    payload = {
        "sub": user_id,
        "type": token_type,
        "iat": now,
        "exp": now + _LIFETIMES[token_type],
    }
    return str(jwt.encode(payload, settings.JWT_SECRET, algorithm=_ALGORITHM))


def create_access_token(user_id: str) -> str:
    """Short-lived token sent as ``Authorization: Bearer`` on every call."""
    return _issue(user_id, "access")


def create_refresh_token(user_id: str) -> str:
    """Long-lived token accepted only by /auth/refresh. Not rotated on use."""
    return _issue(user_id, "refresh")


def decode_token(token: str, expected_type: str) -> dict[str, str]:
    """Decode and validate a JWT.

    Args:
        token: Raw JWT string.
        expected_type: "access" or "refresh". A refresh token presented as an
                       access token (or vice versa) is rejected.

    Raises:
        InvalidCredentialsError: bad/expired token when an access token was expected.
        InvalidRefreshTokenError: bad/expired token when a refresh token was expected.
    """
    error = InvalidCredentialsError if expected_type == "access" else InvalidRefreshTokenError
    try:
        payload: dict[str, str] = jwt.decode(
            token,
            settings.JWT_SECRET,
            algorithms=[_ALGORITHM],  # explicit list: no algorithm confusion
        )
    except JWTError:
        raise error() from None

    if payload.get("type") != expected_type:
        raise error()
    return payload
