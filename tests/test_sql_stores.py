import asyncio

import pytest

from charging_backend.auth.identity import JWTIdentityProvider
from charging_backend.services.profiles import ProfileService
from charging_backend.services.stations import StationService
from charging_backend.stores.profiles import SqlProfileStore
from charging_backend.stores.stations import SqlStationStore

STATION = {
    "name": "Tudor",
    "price": 1.17,
    "services": ["coffee"],
    "type": 43,
    "coordinates": {"latitude": 47.16, "longitude": 27.6},
}

PROFILE = {
    "username": "elena",
    "firstName": "Elena",
    "lastName": "Rusu",
    "phone": "0722000111",
    "country": "Romania",
}


@pytest.mark.anyio
async def test_concurrent_creates_and_updates(session_factory):
    # one session per call, the way concurrent requests run
    async def create(i):
        async with session_factory() as db:
            return await StationService(SqlStationStore(db)).create_station(
                {**STATION, "name": f"Station {i}"}, f"U{i % 4}"
            )

    created = await asyncio.gather(*(create(i) for i in range(30)))
    assert [r for r in created if r["error"]] == []

    async def update(i, station_id):
        async with session_factory() as db:
            return await StationService(SqlStationStore(db)).update_station(
                {"id": station_id, "price": i}, f"U{i % 4}"
            )

    updated = await asyncio.gather(*(update(i, r["result"]) for i, r in enumerate(created)))
    assert [r for r in updated if r["error"]] == []

    async with session_factory() as db:
        stations = await SqlStationStore(db).list_all()
    assert len(stations) == 30
    assert {s["id"]: s["price"] for s in stations} == {r["result"]: float(i) for i, r in enumerate(created)}


@pytest.mark.anyio
async def test_unique_username_catches_stale_lookup(session_factory):
    async with session_factory() as db:
        r = await ProfileService(SqlProfileStore(db), JWTIdentityProvider(db)).upsert_profile(PROFILE, "U1")
        assert r["status"] == 0

    async with session_factory() as db:
        store = SqlProfileStore(db)

        # the username lookup misses, as when another writer lands right after it
        async def _stale(username):
            return None

        store.find_by_username = _stale
        r = await ProfileService(store, JWTIdentityProvider(db)).upsert_profile(
            {**PROFILE, "firstName": "Other"}, "U2"
        )
        assert r == {"status": 1, "message": "Username already exists"}

    async with session_factory() as db:
        store = SqlProfileStore(db)
        assert await store.get("U2") is None
        assert (await store.get("U1"))["firstName"] == "Elena"


@pytest.mark.anyio
async def test_sql_delete_missing_station_is_quiet(session_factory):
    async with session_factory() as db:
        r = await StationService(SqlStationStore(db)).delete_station({"id": "nope"}, "U1")
    assert r["error"] is False
