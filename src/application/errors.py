from __future__ import annotations

from typing import Any, Mapping


class AppError(Exception):
    code = "app_error"
    status_code = 400

    def __init__(self, message: str, *, details: Mapping[str, Any] | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details


class NotFound(AppError):
    code = "not_found"
    status_code = 404


class ValidationError(AppError):
    code = "validation_error"
    status_code = 422


class ConflictError(AppError):
    code = "conflict"
    status_code = 409


class DuplicateId(ConflictError):
    code = "duplicate_id"


class AnimalNotFound(NotFound):
    code = "animal_not_found"


class AnimalNotActive(ConflictError):
    code = "animal_not_active"


class NotReady(AppError):
    code = "not_ready"
    status_code = 503


class InfrastructureError(AppError):
    code = "infrastructure_error"
    status_code = 500


class StorageUnavailable(InfrastructureError):
    code = "storage_unavailable"
    status_code = 503


class StorageError(InfrastructureError):
    code = "storage_error"


def describe_error(exc: Exception) -> str:
    """Turn a failure at the mutation boundary into a message fit for the user."""
    if isinstance(exc, NotReady):
        return "Database not ready. Please wait a moment and try again."
    if isinstance(exc, AppError):
        return exc.message
    return "Unexpected error. Please try again."
