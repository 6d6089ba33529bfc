"""
Visit recording service following SOLID principles.

A visit and the prescriptions entered with it form one unit of work. The
repository writes both in a single transaction; the service additionally
checks that every kept prescription came back persisted and reports a
PartialFailureError otherwise, so a non-transactional store can never pass a
half-written visit off as success.
"""

import logging
from typing import List, Optional

from clinic.core.exceptions import (
    NotFoundError,
    PartialFailureError,
    ValidationError,
)
from clinic.domain.entities import VISIT_STATUS_COMPLETED, RequestContext
from clinic.domain.entities import Visit as DomainVisit
from clinic.domain.interfaces import IPatientReader, IVisitRepository
from clinic.schemas.dtos import VisitCreateRequest, VisitRecordResult, parse_date

logger = logging.getLogger(__name__)


class VisitService:
    """Application service for recording clinical visits."""

    def __init__(
        self, visit_repo: IVisitRepository, patient_reader: IPatientReader
    ) -> None:
        self.visit_repo = visit_repo
        self.patient_reader = patient_reader

    def record_visit(
        self, context: RequestContext, request: VisitCreateRequest
    ) -> VisitRecordResult:
        """Record a visit together with its prescriptions.

        Business Rules:
        - patient_id and a non-blank chief complaint are required
        - The patient must exist
        - Status is always "completed"
        - Prescription lines missing a medication name or a dosage are dropped
        """
        request.validate()

        doctor_id = str(request.doctor_id or context.identity_id or "").strip()
        if not doctor_id:
            raise ValidationError("Doctor is required")

        patient_id = int(request.patient_id)
        if self.patient_reader.get_by_id(patient_id) is None:
            raise NotFoundError("Patient", patient_id)

        visit = DomainVisit(
            patient_id=patient_id,
            doctor_id=doctor_id,
            chief_complaint=request.chief_complaint.strip(),
            diagnosis=_clean(request.diagnosis),
            treatment_plan=_clean(request.treatment_plan),
            follow_up_date=parse_date(request.follow_up_date, "follow_up_date"),
            status=VISIT_STATUS_COMPLETED,
        )
        prescriptions = request.complete_prescriptions()
        dropped = len(request.prescriptions) - len(prescriptions)

        created = self.visit_repo.create_with_prescriptions(visit, prescriptions)

        if len(created.prescriptions) != len(prescriptions):
            logger.error(
                "Visit persisted without its full prescription batch",
                extra={
                    "context": {
                        "visit_id": created.id,
                        "expected": len(prescriptions),
                        "created": len(created.prescriptions),
                    }
                },
            )
            raise PartialFailureError(
                created, expected=len(prescriptions), created=len(created.prescriptions)
            )

        logger.info(
            "Visit recorded",
            extra={
                "context": {
                    "visit_id": created.id,
                    "patient_id": patient_id,
                    "doctor_id": doctor_id,
                    "prescriptions": len(created.prescriptions),
                    "dropped_prescriptions": dropped,
                }
            },
        )
        return VisitRecordResult(visit=created, prescriptions=list(created.prescriptions))

    def get_visit(self, visit_id: int) -> DomainVisit:
        visit = self.visit_repo.get_by_id(visit_id)
        if not visit:
            raise NotFoundError("Visit", visit_id)
        return visit

    def get_visits_for_patient(self, patient_id: int) -> List[DomainVisit]:
        if self.patient_reader.get_by_id(patient_id) is None:
            raise NotFoundError("Patient", patient_id)
        return self.visit_repo.get_by_patient_id(patient_id)


def _clean(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    return value.strip() or None
