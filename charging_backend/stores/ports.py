"""Store and identity ports.

Records cross these boundaries as plain documents (dicts):

- profile: ``{uid, username, firstName, lastName, phone, country}``
- station: ``{id, name, price, services, type, coordinates: {latitude, longitude}, userID}``
"""

from typing import Protocol


class ProfileStore(Protocol):
    """Profiles keyed by caller identity."""

    async def get(self, uid: str) -> dict | None:
        ...

    async def find_by_username(self, username: str) -> dict | None:
        ...

    async def set(self, uid: str, profile: dict) -> None:
        """Create or overwrite the profile for ``uid``. Raises ConflictFailure on a taken username."""
        ...

    async def delete(self, uid: str) -> None:
        ...


class StationStore(Protocol):
    """Charging station documents."""

    async def add(self, station: dict) -> str:
        """Insert a new station and return its generated id."""
        ...

    async def get(self, station_id: str) -> dict | None:
        ...

    async def list_all(self) -> list[dict]:
        ...

    async def list_by_owner(self, uid: str) -> list[dict]:
        ...

    async def update(self, station_id: str, owner: str, changes: dict) -> bool:
        """Apply ``changes`` only if the station is still owned by ``owner``."""
        ...

    async def delete(self, station_id: str) -> None:
        """Remove the station. Deleting a missing id is not an error."""
        ...


class IdentityProvider(Protocol):
    """Resolves bearer tokens to caller identities and revokes identities."""

    async def resolve(self, token: str | None) -> str | None:
        ...

    async def revoke(self, uid: str) -> None:
        ...
