from __future__ import annotations

import logging

import jwt
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from charging_backend.auth.security import decode_token
from charging_backend.core.errors import StoreFailure
from charging_backend.db.models.profiles import RevokedIdentity

logger = logging.getLogger(__name__)


class JWTIdentityProvider:
    """Bearer-token identity provider backed by the revoked_identities table.

    Only verifies tokens and revokes identities; issuing accounts is the
    upstream provider's job.
    """

    def __init__(self, db: AsyncSession):
        self.db = db

    async def resolve(self, token: str | None) -> str | None:
        if not token:
            return None
        try:
            payload = decode_token(token)
        except jwt.PyJWTError:
            logger.info("Rejected bearer token")
            return None

        uid = payload.get("sub")
        if not uid or not isinstance(uid, str):
            return None

        try:
            revoked = await self.db.get(RevokedIdentity, uid)
        except SQLAlchemyError as exc:
            raise StoreFailure("Failed to resolve caller identity") from exc
        if revoked is not None:
            logger.info("Token for revoked identity", extra={"uid": uid})
            return None
        return uid

    async def revoke(self, uid: str) -> None:
        try:
            if await self.db.get(RevokedIdentity, uid) is None:
                self.db.add(RevokedIdentity(uid=uid))
                await self.db.commit()
        except SQLAlchemyError as exc:
            await self.db.rollback()
            raise StoreFailure("Failed to revoke identity") from exc
