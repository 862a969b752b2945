"""Errors raised by the event sheet mapper and its storage backends."""


class SheetCalError(Exception):
    """Base class for all sheetcal errors."""


class ValidationError(SheetCalError):
    """Required input fields are missing or empty (client fault)."""

    def __init__(self, missing_fields: list[str], message: str = "Missing required fields"):
        self.missing_fields = list(missing_fields)
        self.message = message
        super().__init__(f"{message}: {', '.join(self.missing_fields)}")


class NotFound(SheetCalError):
    """The grid holds no data rows, or no row carries the requested id."""

    def __init__(self, message: str = "Event not found", event_id: str | None = None):
        self.message = message
        self.event_id = event_id
        super().__init__(message)


class BackendFailure(SheetCalError):
    """A call to the remote grid storage failed (network, auth, quota, ...)."""

    def __init__(self, operation: str, detail: str, status_code: int | None = None):
        self.operation = operation
        self.detail = detail
        self.status_code = status_code
        super().__init__(f"{operation} failed: {detail}")


__all__ = ["BackendFailure", "NotFound", "SheetCalError", "ValidationError"]
