# charging_backend/api/v1/me.py
from fastapi import APIRouter, Body, Depends

from charging_backend.auth.deps import get_caller_identity
from charging_backend.services.dispatcher import Dispatcher, get_dispatcher

router = APIRouter(prefix="/me")


@router.get("/profile")
async def get_profile(
    uid: str | None = Depends(get_caller_identity),
    dispatcher: Dispatcher = Depends(get_dispatcher),
):
    return await dispatcher.dispatch("fetchProfile", None, uid)


@router.put("/profile")
async def put_profile(
    payload: dict | None = Body(default=None),
    uid: str | None = Depends(get_caller_identity),
    dispatcher: Dispatcher = Depends(get_dispatcher),
):
    return await dispatcher.dispatch("upsertProfile", payload, uid)


@router.delete("/profile")
async def delete_profile(
    uid: str | None = Depends(get_caller_identity),
    dispatcher: Dispatcher = Depends(get_dispatcher),
):
    return await dispatcher.dispatch("deleteProfile", None, uid)


@router.get("/stations")
async def list_my_stations(
    uid: str | None = Depends(get_caller_identity),
    dispatcher: Dispatcher = Depends(get_dispatcher),
):
    return await dispatcher.dispatch("listOwnedStations", None, uid)
