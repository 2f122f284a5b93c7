"""Profile operations: upsert, fetch and delete the caller's own profile.

upsert_profile answers with a numeric status instead of raising:

    0  saved (``{"status": 0, "uid": ...}``)
    1  username already taken by another identity
    3  username or phone fails its pattern
    4  first name fails its pattern
    5  last name fails its pattern
    6  the store rejected the write
"""
from __future__ import annotations

import logging

from charging_backend.core.errors import ChargingError, ConflictFailure, StoreFailure, ValidationFailure
from charging_backend.services.validation import validate_profile
from charging_backend.stores.ports import IdentityProvider, ProfileStore

logger = logging.getLogger(__name__)

STATUS_OK = 0
STATUS_USERNAME_EXISTS = 1
STATUS_WRITE_FAILED = 6


class ProfileService:
    def __init__(self, store: ProfileStore, identity: IdentityProvider):
        self.store = store
        self.identity = identity

    async def upsert_profile(self, payload, uid: str) -> dict:
        try:
            profile = validate_profile(payload)
        except ValidationFailure as exc:
            logger.info("Profile rejected", extra={"uid": uid, "status": exc.status})
            return {"status": exc.status, "message": exc.message}

        try:
            existing = await self.store.find_by_username(profile.username)
            if existing is not None and existing["uid"] != uid:
                raise ConflictFailure()

            doc = {"uid": uid, **profile.model_dump()}
            # awaited, so the status reflects the real write outcome
            await self.store.set(uid, doc)
        except ConflictFailure as exc:
            logger.info("Username already taken", extra={"uid": uid, "status": STATUS_USERNAME_EXISTS})
            return {"status": STATUS_USERNAME_EXISTS, "message": exc.message}
        except StoreFailure:
            logger.error("Profile write failed", exc_info=True, extra={"uid": uid, "status": STATUS_WRITE_FAILED})
            return {"status": STATUS_WRITE_FAILED, "message": "Failed to save profile"}

        return {"status": STATUS_OK, "uid": uid}

    async def fetch_profile(self, uid: str) -> dict:
        try:
            return {"result": await self.store.get(uid)}
        except ChargingError as exc:
            logger.error("Profile read failed", exc_info=True, extra={"uid": uid})
            return {"result": None, "error": True, "message": exc.message}

    async def delete_profile(self, uid: str) -> dict:
        """Delete the profile, then revoke the identity. Both steps always run."""
        failed = False
        try:
            await self.store.delete(uid)
        except ChargingError:
            logger.error("Profile delete failed", exc_info=True, extra={"uid": uid})
            failed = True

        try:
            await self.identity.revoke(uid)
        except ChargingError:
            logger.error("Identity revoke failed", exc_info=True, extra={"uid": uid})
            failed = True

        if failed:
            return {"error": True, "message": "Failed to delete account"}
        return {}
