# charging_backend/auth/security.py
from datetime import datetime, timedelta, timezone

import jwt

from charging_backend.core.settings import settings


def issue_token(uid: str, expires_minutes: int | None = None) -> str:
    """Sign a bearer token whose ``sub`` is the caller identity."""
    minutes = settings.JWT_EXPIRES_MINUTES if expires_minutes is None else expires_minutes
    now = datetime.now(timezone.utc)
    payload = {"sub": uid, "iat": now, "exp": now + timedelta(minutes=minutes)}
    return jwt.encode(payload, settings.JWT_SECRET, algorithm=settings.JWT_ALGORITHM)


def decode_token(token: str) -> dict:
    # raises jwt.PyJWTError on bad signature / expiry
    return jwt.decode(token, settings.JWT_SECRET, algorithms=[settings.JWT_ALGORITHM])
