import pytest

from charging_backend.core.errors import NotFound, StoreFailure, Unauthenticated
from charging_backend.services.dispatcher import ALIASES, OPERATIONS, Dispatcher

STATION = {
    "name": "Copou",
    "price": 1.17,
    "services": ["coffee"],
    "type": 22,
    "coordinates": {"latitude": 47.17, "longitude": 27.58},
}

IDENTITY_SCOPED = [name for name, op in OPERATIONS.items() if op.requires_auth]


@pytest.fixture()
def dispatcher(profile_store, station_store, identity):
    return Dispatcher(profile_store, station_store, identity)


@pytest.mark.anyio
async def test_health_needs_no_identity(dispatcher):
    assert await dispatcher.dispatch("helloWorld", None, None) == {"result": "Hello World"}


@pytest.mark.anyio
@pytest.mark.parametrize("operation", IDENTITY_SCOPED)
@pytest.mark.parametrize("payload", [None, {}, STATION, {"id": "x"}, ["junk"]])
async def test_unauthenticated_calls_fail_uniformly(dispatcher, station_store, profile_store, operation, payload):
    with pytest.raises(Unauthenticated) as exc:
        await dispatcher.dispatch(operation, payload, None)
    assert exc.value.to_response() == {
        "error": {
            "status": "UNAUTHENTICATED",
            "message": "You must be authenticated to use this function",
        }
    }
    assert station_store.writes == 0
    assert profile_store.writes == 0


@pytest.mark.anyio
async def test_unknown_operation(dispatcher):
    with pytest.raises(NotFound):
        await dispatcher.dispatch("dropEverything", {}, "U1")


@pytest.mark.anyio
async def test_public_reads_need_no_identity(dispatcher):
    station_id = (await dispatcher.dispatch("createStation", STATION, "U1"))["result"]

    listed = await dispatcher.dispatch("listAllStations", None, None)
    assert [s["id"] for s in listed["result"]] == [station_id]

    fetched = await dispatcher.dispatch("fetchStationById", {"stationID": station_id}, None)
    assert fetched["result"]["userID"] == "U1"


@pytest.mark.anyio
async def test_create_then_owned_list(dispatcher):
    created = await dispatcher.dispatch("createStation", STATION, "U1")
    station_id = created["result"]

    mine = await dispatcher.dispatch("listOwnedStations", None, "U1")
    assert station_id in [s["id"] for s in mine["result"]]

    theirs = await dispatcher.dispatch("listOwnedStations", None, "U2")
    assert station_id not in [s["id"] for s in theirs["result"]]


@pytest.mark.anyio
async def test_legacy_names_resolve(dispatcher):
    for legacy, name in ALIASES.items():
        assert name in OPERATIONS, legacy

    r = await dispatcher.dispatch(
        "insertProfile",
        {"username": "ana", "firstName": "Ana", "lastName": "Pop", "phone": "0700", "country": "RO"},
        "U1",
    )
    assert r == {"status": 0, "uid": "U1"}
    profile = await dispatcher.dispatch("getProfileData", None, "U1")
    assert profile["result"]["username"] == "ana"


@pytest.mark.anyio
async def test_delete_profile_through_dispatcher(dispatcher, identity):
    assert await dispatcher.dispatch("deleteProfile", None, "U1") == {}
    assert "U1" in identity.revoked


@pytest.mark.anyio
async def test_profile_read_failure_stays_inside_envelope(dispatcher, profile_store):
    async def _broken(uid):
        raise StoreFailure("Failed to read profile")

    profile_store.get = _broken
    r = await dispatcher.dispatch("fetchProfile", None, "U1")
    assert r["error"] is True
    assert r["result"] is None
