"""Error hierarchy for the charging stations backend.

Only ``Unauthenticated`` and ``NotFound`` (unknown operation) cross the
dispatcher boundary as exceptions. Everything else is turned into the
operation's response envelope before it reaches the HTTP layer.
"""


class ChargingError(Exception):
    """Base exception. ``code`` follows the callable-function status names."""

    def __init__(self, message: str, code: str = "INTERNAL", http_status: int = 500):
        super().__init__(message)
        self.message = message
        self.code = code
        self.http_status = http_status

    def to_response(self) -> dict:
        return {"error": {"status": self.code, "message": self.message}}


class Unauthenticated(ChargingError):
    def __init__(self, message: str = "You must be authenticated to use this function"):
        super().__init__(message, "UNAUTHENTICATED", 401)


class ValidationFailure(ChargingError):
    """Payload failed a field rule.

    ``status`` is the numeric profile status code (3, 4 or 5) when the failure
    comes from the profile validator, otherwise None.
    """

    def __init__(self, message: str, status: int | None = None, field: str | None = None):
        super().__init__(message, "INVALID_ARGUMENT", 400)
        self.status = status
        self.field = field


class ConflictFailure(ChargingError):
    def __init__(self, message: str = "Username already exists"):
        super().__init__(message, "ALREADY_EXISTS", 409)


class OwnershipViolation(ChargingError):
    def __init__(self, message: str = "You are not the owner of this station"):
        super().__init__(message, "PERMISSION_DENIED", 403)


class NotFound(ChargingError):
    def __init__(self, message: str):
        super().__init__(message, "NOT_FOUND", 404)


class StoreFailure(ChargingError):
    def __init__(self, message: str = "Store operation failed"):
        super().__init__(message, "INTERNAL", 500)
