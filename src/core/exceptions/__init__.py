from src.core.exceptions.base import (
    AppException,
    NotFoundError,
    ExportInProgressError,
    ExportFetchError,
    ExportDeliveryError,
)

__all__ = [
    "AppException",
    "NotFoundError",
    "ExportInProgressError",
    "ExportFetchError",
    "ExportDeliveryError",
]
