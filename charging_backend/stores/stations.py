from __future__ import annotations

from sqlalchemy import select, update, delete
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from charging_backend.core.errors import StoreFailure
from charging_backend.db.models.stations import ChargingStation

# document field -> column, for partial updates
_COLUMNS = {
    "name": "name",
    "price": "price",
    "services": "services",
    "type": "type",
    "userID": "user_id",
}


def _to_doc(row: ChargingStation) -> dict:
    return {
        "id": row.id,
        "name": row.name,
        "price": row.price,
        "services": list(row.services or []),
        "type": row.type,
        "coordinates": {"latitude": row.latitude, "longitude": row.longitude},
        "userID": row.user_id,
    }


def _to_values(doc: dict) -> dict:
    values = {_COLUMNS[k]: v for k, v in doc.items() if k in _COLUMNS}
    coords = doc.get("coordinates")
    if coords is not None:
        values["latitude"] = coords["latitude"]
        values["longitude"] = coords["longitude"]
    return values


class SqlStationStore:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def add(self, station: dict) -> str:
        row = ChargingStation(**_to_values(station))
        try:
            self.db.add(row)
            await self.db.commit()
            await self.db.refresh(row)
        except SQLAlchemyError as exc:
            await self.db.rollback()
            raise StoreFailure("Failed to create station") from exc
        return row.id

    async def get(self, station_id: str) -> dict | None:
        try:
            row = await self.db.get(ChargingStation, station_id)
        except SQLAlchemyError as exc:
            raise StoreFailure("Failed to read station") from exc
        return _to_doc(row) if row else None

    async def list_all(self) -> list[dict]:
        try:
            q = await self.db.execute(select(ChargingStation).order_by(ChargingStation.created_at))
            rows = q.scalars().all()
        except SQLAlchemyError as exc:
            raise StoreFailure("Failed to list stations") from exc
        return [_to_doc(r) for r in rows]

    async def list_by_owner(self, uid: str) -> list[dict]:
        try:
            q = await self.db.execute(
                select(ChargingStation)
                .where(ChargingStation.user_id == uid)
                .order_by(ChargingStation.created_at)
            )
            rows = q.scalars().all()
        except SQLAlchemyError as exc:
            raise StoreFailure("Failed to list stations") from exc
        return [_to_doc(r) for r in rows]

    async def update(self, station_id: str, owner: str, changes: dict) -> bool:
        values = _to_values(changes)
        try:
            result = await self.db.execute(
                update(ChargingStation)
                .where(ChargingStation.id == station_id, ChargingStation.user_id == owner)
                .values(**values)
            )
            await self.db.commit()
        except SQLAlchemyError as exc:
            await self.db.rollback()
            raise StoreFailure("Failed to update station") from exc
        return result.rowcount > 0

    async def delete(self, station_id: str) -> None:
        try:
            await self.db.execute(delete(ChargingStation).where(ChargingStation.id == station_id))
            await self.db.commit()
        except SQLAlchemyError as exc:
            await self.db.rollback()
            raise StoreFailure("Failed to delete station") from exc
