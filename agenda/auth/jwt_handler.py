from datetime import datetime, timedelta, timezone

import jwt

from agenda.core import config


def create_access_token(email: str, expires_minutes: int | None = None) -> str:
    """Issue a bearer token for a user email; used by the external login flow and by tests."""
    issued_at = datetime.now(timezone.utc)
    expire = issued_at + timedelta(minutes=expires_minutes or config.JWT_EXPIRES_MINUTES)
    payload = {"sub": email, "exp": expire, "iat": issued_at}
    return jwt.encode(payload, config.JWT_SECRET_KEY, algorithm=config.JWT_ALGORITHM)


def decode_access_token(token: str) -> dict:
    """Return the token claims; raises ``jwt.PyJWTError`` for bad or expired tokens."""
    return jwt.decode(token, config.JWT_SECRET_KEY, algorithms=[config.JWT_ALGORITHM])
