# charging_backend/api/v1/calls.py
from fastapi import APIRouter, Body, Depends

from charging_backend.auth.deps import get_caller_identity
from charging_backend.services.dispatcher import Dispatcher, get_dispatcher

router = APIRouter(prefix="/calls", tags=["calls"])


@router.post("/{operation}")
async def call_operation(
    operation: str,
    payload: dict | None = Body(default=None),
    uid: str | None = Depends(get_caller_identity),
    dispatcher: Dispatcher = Depends(get_dispatcher),
):
    """Callable-function endpoint: the JSON body is the payload, the bearer token the caller."""
    return await dispatcher.dispatch(operation, payload, uid)
