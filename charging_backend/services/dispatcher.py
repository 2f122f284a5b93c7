"""Routes a named callable operation through the identity gate to its service.

The dispatcher holds no state between calls; its collaborators are injected,
so tests can hand it in-memory stores.
"""
from __future__ import annotations

import logging
from typing import Any, Awaitable, Callable, NamedTuple

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from charging_backend.auth.deps import get_identity_provider, require_identity
from charging_backend.core.errors import NotFound
from charging_backend.core.settings import settings
from charging_backend.db.session import get_db
from charging_backend.services.profiles import ProfileService
from charging_backend.services.stations import StationService
from charging_backend.stores.ports import IdentityProvider, ProfileStore, StationStore
from charging_backend.stores.profiles import SqlProfileStore
from charging_backend.stores.stations import SqlStationStore

logger = logging.getLogger(__name__)


class Operation(NamedTuple):
    handler: Callable[[Dispatcher, Any, str | None], Awaitable[dict]]
    requires_auth: bool


async def _hello(d: Dispatcher, payload, uid):
    return {"result": "Hello World"}


OPERATIONS: dict[str, Operation] = {
    "helloWorld": Operation(_hello, False),
    "upsertProfile": Operation(lambda d, p, uid: d.profiles.upsert_profile(p, uid), True),
    "fetchProfile": Operation(lambda d, p, uid: d.profiles.fetch_profile(uid), True),
    "deleteProfile": Operation(lambda d, p, uid: d.profiles.delete_profile(uid), True),
    "listAllStations": Operation(lambda d, p, uid: d.stations.list_all_stations(), False),
    "listOwnedStations": Operation(lambda d, p, uid: d.stations.list_owned_stations(uid), True),
    "createStation": Operation(lambda d, p, uid: d.stations.create_station(p, uid), True),
    "updateStation": Operation(lambda d, p, uid: d.stations.update_station(p, uid), True),
    "deleteStation": Operation(lambda d, p, uid: d.stations.delete_station(p, uid), True),
    "fetchStationById": Operation(lambda d, p, uid: d.stations.fetch_station(p), False),
}

# names the mobile client has shipped with
ALIASES = {
    "insertProfile": "upsertProfile",
    "getProfileData": "fetchProfile",
    "deleteAccount": "deleteProfile",
    "getAllStations": "listAllStations",
    "getAllStationsForSpecificUser": "listOwnedStations",
    "deleteStationByIDForSpecificUser": "deleteStation",
    "getStationData": "fetchStationById",
}


class Dispatcher:
    def __init__(
        self,
        profiles: ProfileStore,
        stations: StationStore,
        identity: IdentityProvider,
        enforce_delete_ownership: bool = False,
    ):
        self.profiles = ProfileService(profiles, identity)
        self.stations = StationService(stations, enforce_delete_ownership)

    async def dispatch(self, operation: str, payload: Any, uid: str | None) -> dict:
        name = ALIASES.get(operation, operation)
        op = OPERATIONS.get(name)
        if op is None:
            raise NotFound(f"Unknown operation {operation}")

        if op.requires_auth:
            uid = require_identity(uid)

        result = await op.handler(self, payload, uid)
        logger.info(
            "Dispatched %s",
            name,
            extra={"operation": name, "uid": uid, "status": _outcome(result)},
        )
        return result


def _outcome(result: dict) -> str:
    if result.get("error"):
        return "error"
    status = result.get("status")
    if status not in (None, 0):
        return f"status_{status}"
    return "ok"


def get_dispatcher(
    db: AsyncSession = Depends(get_db),
    identity: IdentityProvider = Depends(get_identity_provider),
) -> Dispatcher:
    return Dispatcher(
        SqlProfileStore(db),
        SqlStationStore(db),
        identity,
        enforce_delete_ownership=settings.ENFORCE_DELETE_OWNERSHIP,
    )
