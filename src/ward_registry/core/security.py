"""JWT access-token handling.

Tokens are issued by the external authentication service; this module
verifies them with PyJWT. ``create_access_token`` mirrors the issuer's
claim layout and is used by the CLI and tests.
"""

from datetime import UTC, datetime, timedelta
from typing import Any

import jwt


def create_access_token(
    subject: str,
    role: str,
    secret_key: str,
    algorithm: str = "HS256",
    expires_minutes: int = 30,
) -> str:
    """Create a JWT access token.

    Args:
        subject: The token subject (username).
        role: The user's role.
        secret_key: Secret key for signing.
        algorithm: JWT signing algorithm.
        expires_minutes: Token expiration in minutes.

    Returns:
        The encoded JWT string.
    """
    expire = datetime.now(UTC) + timedelta(minutes=expires_minutes)
    payload = {
        "sub": subject,
        "role": role,
        "exp": expire,
        "type": "access",
    }
    return jwt.encode(payload, secret_key, algorithm=algorithm)


def decode_token(token: str, secret_key: str, algorithm: str = "HS256") -> dict[str, Any]:
    """Decode and validate an access token.

    Raises:
        jwt.InvalidTokenError: If the token is expired, malformed, or not an access token.
    """
    payload = jwt.decode(token, secret_key, algorithms=[algorithm])
    if payload.get("type", "access") != "access":
        msg = "Not an access token"
        raise jwt.InvalidTokenError(msg)
    return payload
