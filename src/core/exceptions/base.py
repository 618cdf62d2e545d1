from typing import Any


class AppException(Exception):
    """Base application exception."""

    def __init__(
        self,
        message: str,
        status_code: int = 400,
        details: dict[str, Any] | None = None,
    ):
        self.message = message
        self.status_code = status_code
        self.details = details or {}
        super().__init__(self.message)


class NotFoundError(AppException):
    """Resource not found."""

    def __init__(self, resource: str, identifier: Any = None):
        message = f"{resource} not found"
        if identifier:
            message = f"{resource} with id={identifier} not found"
        super().__init__(message=message, status_code=404)


class ExportInProgressError(AppException):
    """An export is already running; overlapping runs are rejected, not queued."""

    def __init__(self, state: str):
        super().__init__(
            message="An export is already in progress",
            status_code=409,
            details={"state": state},
        )


class ExportFetchError(AppException):
    """Store unreachable or a collection query failed. No artifact is produced."""

    def __init__(self, collection: str | None = None):
        details = {"collection": collection} if collection else {}
        super().__init__(message="Failed to export data", status_code=502, details=details)


class ExportDeliveryError(AppException):
    """Workbook could not be serialized or written to storage."""

    def __init__(self, message: str | None = None):
        super().__init__(
            message=message or "Failed to export data. Please try again.",
            status_code=500,
        )
