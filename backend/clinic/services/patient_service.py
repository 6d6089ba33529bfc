"""
Patient registry service following SOLID principles.

This service:
- Keeps registration rules out of controllers and repositories
- Depends on IPatientRepository, not on SQLAlchemy
- Works with domain entities, not database models
"""

import logging
from typing import Iterable, List, Optional

from clinic.core.config import get_recent_visits_limit
from clinic.core.exceptions import (
    DuplicateIdentifierError,
    NotFoundError,
    ValidationError,
)
from clinic.domain.entities import Patient as DomainPatient
from clinic.domain.interfaces import IPatientRepository
from clinic.schemas.dtos import PatientCreateRequest, PatientUpdateRequest

logger = logging.getLogger(__name__)


class PatientService:
    """Application service for patient registration and records."""

    def __init__(
        self, patient_repo: IPatientRepository, recent_visits_limit: Optional[int] = None
    ) -> None:
        self.patient_repo = patient_repo
        if recent_visits_limit is None:
            recent_visits_limit = get_recent_visits_limit()
        self.recent_visits_limit = recent_visits_limit

    def register_patient(self, request: PatientCreateRequest) -> DomainPatient:
        """Register a new patient.

        Business Rules:
        - national_id and full_name are required (checked before any store access)
        - national_id must not already be registered; a duplicate performs no write
        - Optional fields left empty are stored as absent
        """
        request.validate()
        patient = request.to_domain()

        if self.patient_repo.exists_national_id(patient.national_id):
            logger.info(
                "Registration rejected: duplicate national identifier",
                extra={"context": {"operation": "register_patient"}},
            )
            raise DuplicateIdentifierError(patient.national_id)

        # The store's unique constraint covers a concurrent registration that
        # slips between the check above and this insert.
        created = self.patient_repo.create(patient)
        logger.info(
            "Patient registered", extra={"context": {"patient_id": created.id}}
        )
        return created

    def get_all_patients(self, include_visits: bool = True) -> List[DomainPatient]:
        """Every patient ordered by full name, optionally with recent visits."""
        if include_visits:
            return self.patient_repo.get_all_with_recent_visits(self.recent_visits_limit)
        return self.patient_repo.get_all()

    def get_patient(self, patient_id: int) -> DomainPatient:
        patient = self.patient_repo.get_by_id(patient_id)
        if not patient:
            raise NotFoundError("Patient", patient_id)
        return patient

    def update_patient(
        self, patient_id: int, request: PatientUpdateRequest
    ) -> DomainPatient:
        """Amend mutable fields. The national identifier is write-once."""
        request.validate()
        patient = self.get_patient(patient_id)

        if (
            request.national_id is not None
            and str(request.national_id).strip() != patient.national_id
        ):
            raise ValidationError("National identifier cannot be changed")

        request.apply_to(patient)
        updated = self.patient_repo.update(patient)
        logger.info(
            "Patient record amended",
            extra={
                "context": {
                    "patient_id": patient_id,
                    "fields": sorted(request.changes.keys()),
                }
            },
        )
        return updated

    @staticmethod
    def find_patients(
        patients: Iterable[DomainPatient], query: Optional[str], include_phone: bool = False
    ) -> List[DomainPatient]:
        """Filter an already-fetched patient list.

        Matches a case-insensitive substring of the full name, or a substring
        of the national identifier (and of the phone number when
        ``include_phone`` is set, as on the registered-patients list).
        """
        patients = list(patients)
        term = (query or "").strip()
        if not term:
            return patients

        lowered = term.lower()
        matches = []
        for patient in patients:
            if lowered in (patient.full_name or "").lower():
                matches.append(patient)
            elif term in (patient.national_id or ""):
                matches.append(patient)
            elif include_phone and patient.phone and term in patient.phone:
                matches.append(patient)
        return matches
