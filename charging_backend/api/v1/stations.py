from __future__ import annotations

from fastapi import APIRouter, Body, Depends

from charging_backend.auth.deps import get_caller_identity
from charging_backend.services.dispatcher import Dispatcher, get_dispatcher

router = APIRouter(prefix="/stations", tags=["stations"])


@router.get("")
async def list_stations(dispatcher: Dispatcher = Depends(get_dispatcher)):
    return await dispatcher.dispatch("listAllStations", None, None)


@router.post("")
async def create_station(
    payload: dict | None = Body(default=None),
    uid: str | None = Depends(get_caller_identity),
    dispatcher: Dispatcher = Depends(get_dispatcher),
):
    return await dispatcher.dispatch("createStation", payload, uid)


@router.get("/{station_id}")
async def get_station(
    station_id: str,
    dispatcher: Dispatcher = Depends(get_dispatcher),
):
    return await dispatcher.dispatch("fetchStationById", {"stationID": station_id}, None)


@router.patch("/{station_id}")
async def update_station(
    station_id: str,
    payload: dict | None = Body(default=None),
    uid: str | None = Depends(get_caller_identity),
    dispatcher: Dispatcher = Depends(get_dispatcher),
):
    # path id wins over any id in the body
    data = {**(payload or {}), "id": station_id}
    return await dispatcher.dispatch("updateStation", data, uid)


@router.delete("/{station_id}")
async def delete_station(
    station_id: str,
    uid: str | None = Depends(get_caller_identity),
    dispatcher: Dispatcher = Depends(get_dispatcher),
):
    return await dispatcher.dispatch("deleteStation", {"id": station_id}, uid)
