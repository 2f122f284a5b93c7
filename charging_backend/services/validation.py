"""Typed request payloads and the validator that gates every store mutation.

Each callable operation gets its own pydantic model. Unknown keys are rejected.
Validation never touches a store; failures surface as ``ValidationFailure``.
"""
from __future__ import annotations

from enum import IntEnum
from typing import Any, TypeVar

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, ValidationError, field_validator

from charging_backend.core.errors import ValidationFailure

USERNAME_PATTERN = r"^[a-zA-Z0-9]+$"
PHONE_PATTERN = r"^[0-9]+$"
NAME_PATTERN = r"^[a-zA-Z '-]{2,30}$"


class StationType(IntEnum):
    TYPE_22 = 22
    TYPE_43 = 43
    TYPE_55 = 55


# profile field -> (status code, message); also the order fields are checked in
PROFILE_RULES: dict[str, tuple[int, str]] = {
    "username": (3, "Username can only contain letters and numbers"),
    "phone": (3, "Phone number can only contain numbers"),
    "firstName": (4, "First name can only contain letters"),
    "lastName": (5, "Last name can only contain letters"),
}


class _Payload(BaseModel):
    model_config = ConfigDict(extra="forbid", populate_by_name=True)


# -------------------------
# Profiles
# -------------------------
class ProfileIn(_Payload):
    username: str = Field(pattern=USERNAME_PATTERN)
    phone: str = Field(pattern=PHONE_PATTERN)
    firstName: str = Field(pattern=NAME_PATTERN)
    lastName: str = Field(pattern=NAME_PATTERN)
    country: str | None = None


# -------------------------
# Stations
# -------------------------
class GeoPoint(_Payload):
    latitude: float = Field(ge=-90, le=90, validation_alias=AliasChoices("latitude", "lat"))
    longitude: float = Field(ge=-180, le=180, validation_alias=AliasChoices("longitude", "lng"))

    def to_dict(self) -> dict:
        return {"latitude": self.latitude, "longitude": self.longitude}


def _not_bool(v: Any) -> Any:
    # lax mode would turn True into 1.0 / 1
    if isinstance(v, bool):
        raise ValueError("must be a number")
    return v


def _station_type(v: int | None) -> int | None:
    if v is None:
        return v
    try:
        return int(StationType(v))
    except ValueError:
        allowed = ", ".join(str(t.value) for t in StationType)
        raise ValueError(f"type must be one of [{allowed}]") from None


class StationCreateIn(_Payload):
    name: str = Field(min_length=1)
    price: float = Field(ge=0, allow_inf_nan=False)
    services: list[str]
    type: int
    coordinates: GeoPoint

    @field_validator("price", "type", mode="before")
    @classmethod
    def reject_bool(cls, v: Any) -> Any:
        return _not_bool(v)

    @field_validator("type")
    @classmethod
    def check_type(cls, v: int) -> int:
        return _station_type(v)


class StationUpdateIn(_Payload):
    id: str = Field(min_length=1)
    name: str | None = Field(default=None, min_length=1)
    price: float | None = Field(default=None, ge=0, allow_inf_nan=False)
    services: list[str] | None = None
    type: int | None = None
    coordinates: GeoPoint | None = None

    @field_validator("price", "type", mode="before")
    @classmethod
    def reject_bool(cls, v: Any) -> Any:
        return _not_bool(v)

    @field_validator("type")
    @classmethod
    def check_type(cls, v: int | None) -> int | None:
        return _station_type(v)

    def changes(self) -> dict:
        """Only the fields the caller actually sent (nulls dropped), minus the id."""
        data = self.model_dump(exclude_unset=True, exclude_none=True, exclude={"id"})
        if self.coordinates is not None:
            data["coordinates"] = self.coordinates.to_dict()
        return data


class StationIdIn(_Payload):
    id: str = Field(min_length=1)


class StationLookupIn(_Payload):
    stationID: str = Field(min_length=1)


# -------------------------
# Validator
# -------------------------
M = TypeVar("M", bound=BaseModel)


def _describe(exc: ValidationError) -> str:
    parts = []
    for err in exc.errors():
        loc = ".".join(str(x) for x in err["loc"]) or "payload"
        parts.append(f"{loc}: {err['msg']}")
    return "; ".join(parts)


def validate(model: type[M], payload: Any) -> M:
    if payload is None:
        payload = {}
    if not isinstance(payload, dict):
        raise ValidationFailure("payload: must be an object")
    try:
        return model.model_validate(payload)
    except ValidationError as exc:
        raise ValidationFailure(_describe(exc)) from exc


def validate_profile(payload: Any) -> ProfileIn:
    """Validate a profile submission, mapping the first bad field to its status code."""
    try:
        return validate(ProfileIn, payload)
    except ValidationFailure as exc:
        cause = exc.__cause__
        bad_fields = set()
        if isinstance(cause, ValidationError):
            bad_fields = {str(err["loc"][0]) for err in cause.errors() if err["loc"]}
        for field, (status, message) in PROFILE_RULES.items():
            if field in bad_fields:
                raise ValidationFailure(message, status=status, field=field) from cause
        # non-object payload, unknown keys or a bad country: report against the username slot
        raise ValidationFailure(exc.message, status=3) from cause
