"""Station operations.

Every operation returns the envelope ``{result, error, message}`` (or a bare
``{result}`` for reads); store and validation faults never escape as exceptions.
"""
from __future__ import annotations

import logging

from charging_backend.core.errors import ChargingError, OwnershipViolation, StoreFailure
from charging_backend.services.validation import (
    StationCreateIn,
    StationIdIn,
    StationLookupIn,
    StationUpdateIn,
    validate,
)
from charging_backend.stores.ports import StationStore

logger = logging.getLogger(__name__)

UPDATE_FAILED = "Failed to update this charging station. Error: "


def ok(result=None, message: str | None = None) -> dict:
    return {"result": result, "error": False, "message": message}


def fail(message: str) -> dict:
    return {"result": None, "error": True, "message": message}


def _log_failure(action: str, exc: ChargingError, uid: str | None = None, station_id: str | None = None) -> None:
    extra = {"uid": uid, "station_id": station_id}
    if isinstance(exc, StoreFailure):
        logger.error("%s failed: %s", action, exc.message, exc_info=exc, extra=extra)
    elif isinstance(exc, OwnershipViolation):
        logger.warning("%s refused, caller does not own station", action, extra=extra)
    else:
        logger.info("%s rejected: %s", action, exc.message, extra=extra)


class StationService:
    def __init__(self, store: StationStore, enforce_delete_ownership: bool = False):
        self.store = store
        self.enforce_delete_ownership = enforce_delete_ownership

    async def create_station(self, payload, uid: str) -> dict:
        try:
            data = validate(StationCreateIn, payload)
            station = {
                "name": data.name,
                "price": float(data.price),
                "services": list(data.services),
                "type": int(data.type),
                "coordinates": data.coordinates.to_dict(),
                "userID": uid,
            }
            station_id = await self.store.add(station)
        except ChargingError as exc:
            _log_failure("Create station", exc, uid)
            return fail(exc.message)

        logger.info("Station created", extra={"uid": uid, "station_id": station_id})
        return ok(station_id, "Station created successfully")

    async def list_all_stations(self) -> dict:
        try:
            return {"result": await self.store.list_all()}
        except ChargingError as exc:
            _log_failure("List stations", exc)
            return fail(exc.message)

    async def list_owned_stations(self, uid: str) -> dict:
        try:
            return {"result": await self.store.list_by_owner(uid)}
        except ChargingError as exc:
            _log_failure("List owned stations", exc, uid)
            return fail(exc.message)

    async def fetch_station(self, payload) -> dict:
        try:
            data = validate(StationLookupIn, payload)
            return {"result": await self.store.get(data.stationID)}
        except ChargingError as exc:
            _log_failure("Fetch station", exc)
            return fail(exc.message)

    async def update_station(self, payload, uid: str) -> dict:
        station_id = None
        try:
            data = validate(StationUpdateIn, payload)
            station_id = data.id
            existing = await self.store.get(data.id)
            if existing is None:
                return fail(f"{UPDATE_FAILED}Station {data.id} not found")
            if existing["userID"] != uid:
                raise OwnershipViolation()

            changes = data.changes()
            if "price" in changes:
                changes["price"] = float(changes["price"])
            if "type" in changes:
                changes["type"] = int(changes["type"])
            changes["userID"] = uid

            # the store re-checks the owner inside the UPDATE itself
            if not await self.store.update(data.id, uid, changes):
                raise OwnershipViolation()
        except OwnershipViolation as exc:
            _log_failure("Update station", exc, uid, station_id)
            return fail(exc.message)
        except ChargingError as exc:
            _log_failure("Update station", exc, uid, station_id)
            return fail(UPDATE_FAILED + exc.message)

        return ok(None, f"Successfully modified station with id {data.id}")

    async def delete_station(self, payload, uid: str) -> dict:
        station_id = None
        try:
            data = validate(StationIdIn, payload)
            station_id = data.id
            existing = await self.store.get(data.id)
            if existing is not None and existing["userID"] != uid:
                if self.enforce_delete_ownership:
                    raise OwnershipViolation()
                logger.warning(
                    "Deleting a station owned by another identity",
                    extra={"uid": uid, "station_id": data.id},
                )
            await self.store.delete(data.id)
        except ChargingError as exc:
            _log_failure("Delete station", exc, uid, station_id)
            return fail(exc.message)

        return ok(None, f"Successfully deleted station with id '{data.id}'")
