from fastapi import APIRouter
from charging_backend.api.v1.health import router as health
from charging_backend.api.v1.calls import router as calls_router
from charging_backend.api.v1.me import router as me_router
from charging_backend.api.v1.stations import router as stations_router


api = APIRouter()

api.include_router(health, prefix="/v1")
api.include_router(calls_router, prefix="/v1")
api.include_router(me_router, prefix="/v1", tags=["me"])
api.include_router(stations_router, prefix="/v1")
