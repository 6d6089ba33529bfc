"""
Schemas package - Data Transfer Objects and validation.

This package contains DTOs that define the API contracts
and handle validation following SOLID principles.
"""

from .dtos import (
    AppointmentCreateRequest,
    AppointmentResponse,
    DoctorResponse,
    ErrorResponse,
    PatientCreateRequest,
    PatientListing,
    PatientResponse,
    PatientSummary,
    PatientUpdateRequest,
    PrescriptionItem,
    PrescriptionResponse,
    VisitCreateRequest,
    VisitRecordResult,
    VisitResponse,
)

__all__ = [
    # Patient DTOs
    "PatientCreateRequest",
    "PatientUpdateRequest",
    "PatientResponse",
    "PatientSummary",
    "PatientListing",
    # Visit DTOs
    "PrescriptionItem",
    "PrescriptionResponse",
    "VisitCreateRequest",
    "VisitRecordResult",
    "VisitResponse",
    # Appointment DTOs
    "AppointmentCreateRequest",
    "AppointmentResponse",
    "DoctorResponse",
    # Common DTOs
    "ErrorResponse",
]
