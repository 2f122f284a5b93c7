from fastapi import Depends, Header
from sqlalchemy.ext.asyncio import AsyncSession

from charging_backend.auth.identity import JWTIdentityProvider
from charging_backend.core.errors import Unauthenticated
from charging_backend.db.session import get_db


def get_identity_provider(db: AsyncSession = Depends(get_db)) -> JWTIdentityProvider:
    return JWTIdentityProvider(db)


async def get_caller_identity(
    authorization: str = Header(default=""),
    identity: JWTIdentityProvider = Depends(get_identity_provider),
) -> str | None:
    """Caller identity from the bearer token, or None.

    Whether a missing identity is fatal is decided per operation by the gate.
    """
    if not authorization.startswith("Bearer "):
        return None
    token = authorization.removeprefix("Bearer ").strip()
    return await identity.resolve(token)


def require_identity(uid: str | None) -> str:
    """Identity gate: presence only, never permissions."""
    if not uid:
        raise Unauthenticated()
    return uid
