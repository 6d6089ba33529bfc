"""
Custom exceptions for the clinic service.
Following SOLID principles - centralized error handling.

Every failure a service can report is one of the types below. Controllers map
them to HTTP status codes in one place (see ``clinic.main``); services never
retry on their own.
"""

from typing import Any, Optional


class ClinicError(Exception):
    """Base class for all domain-level failures."""

    error_code = "clinic_error"
    status_code = 500

    def __init__(self, message: str = "", details: Optional[dict] = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details or {}


class ValidationError(ClinicError, ValueError):
    """A required field is missing or malformed.

    Raised before any store access. Subclasses ``ValueError`` so existing
    ``except ValueError`` call sites keep working.
    """

    error_code = "validation_error"
    status_code = 400


class DuplicateIdentifierError(ClinicError):
    """A patient with the same national identifier is already registered."""

    error_code = "duplicate_identifier"
    status_code = 409

    def __init__(self, national_id: str) -> None:
        super().__init__(
            "National identifier is already registered",
            details={"national_id": national_id},
        )
        self.national_id = national_id


class RoleNotAssignedError(ClinicError):
    """The identity has no (recognized) role assignment.

    Terminal for the caller: it must not fall back to any default role.
    """

    error_code = "role_not_assigned"
    status_code = 403

    def __init__(self, identity_id: Optional[str] = None) -> None:
        super().__init__(
            "No role is assigned to this identity",
            details={"identity_id": identity_id},
        )
        self.identity_id = identity_id


class PermissionDeniedError(ClinicError):
    """The resolved role does not grant the requested capability."""

    error_code = "permission_denied"
    status_code = 403


class NotFoundError(ClinicError):
    """A referenced entity does not exist."""

    error_code = "not_found"
    status_code = 404

    def __init__(self, resource: str, resource_id: Any = None) -> None:
        super().__init__(
            f"{resource} not found",
            details={"resource": resource, "id": resource_id},
        )
        self.resource = resource
        self.resource_id = resource_id


class PartialFailureError(ClinicError):
    """The visit was persisted but its prescription batch was not."""

    error_code = "partial_failure"
    status_code = 500

    def __init__(self, visit: Any, expected: int, created: int) -> None:
        super().__init__(
            "Visit was saved but its prescriptions were not",
            details={
                "visit_id": getattr(visit, "id", None),
                "expected_prescriptions": expected,
                "created_prescriptions": created,
            },
        )
        self.visit = visit
        self.expected = expected
        self.created = created


class TransientStoreError(ClinicError):
    """The store was unreachable or rejected the call for non-data reasons."""

    error_code = "store_unavailable"
    status_code = 503
