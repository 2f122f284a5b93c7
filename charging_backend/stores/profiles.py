from __future__ import annotations

from sqlalchemy import select, delete
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from charging_backend.core.errors import ConflictFailure, StoreFailure
from charging_backend.db.models.profiles import Profile


def _to_doc(row: Profile) -> dict:
    return {
        "uid": row.uid,
        "username": row.username,
        "firstName": row.first_name,
        "lastName": row.last_name,
        "phone": row.phone,
        "country": row.country,
    }


class SqlProfileStore:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def get(self, uid: str) -> dict | None:
        try:
            row = await self.db.get(Profile, uid)
        except SQLAlchemyError as exc:
            raise StoreFailure("Failed to read profile") from exc
        return _to_doc(row) if row else None

    async def find_by_username(self, username: str) -> dict | None:
        try:
            q = await self.db.execute(select(Profile).where(Profile.username == username))
            row = q.scalars().first()
        except SQLAlchemyError as exc:
            raise StoreFailure("Failed to read profile") from exc
        return _to_doc(row) if row else None

    async def set(self, uid: str, profile: dict) -> None:
        try:
            row = await self.db.get(Profile, uid)
            if row is None:
                row = Profile(uid=uid)
                self.db.add(row)
            row.username = profile["username"]
            row.first_name = profile["firstName"]
            row.last_name = profile["lastName"]
            row.phone = profile["phone"]
            row.country = profile.get("country")
            await self.db.commit()
        except IntegrityError as exc:
            await self.db.rollback()
            # the UNIQUE index caught a concurrent writer that passed the lookup
            try:
                q = await self.db.execute(select(Profile.uid).where(Profile.username == profile["username"]))
                owner = q.scalar_one_or_none()
            except SQLAlchemyError:
                owner = None
            if owner is not None and owner != uid:
                raise ConflictFailure() from exc
            raise StoreFailure("Failed to save profile") from exc
        except SQLAlchemyError as exc:
            await self.db.rollback()
            raise StoreFailure("Failed to save profile") from exc

    async def delete(self, uid: str) -> None:
        try:
            await self.db.execute(delete(Profile).where(Profile.uid == uid))
            await self.db.commit()
        except SQLAlchemyError as exc:
            await self.db.rollback()
            raise StoreFailure("Failed to delete profile") from exc
