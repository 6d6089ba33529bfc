"""Visit repository implementation following SOLID principles.

A visit and its prescriptions are written in a single transaction: either the
visit row and every prescription row are committed, or nothing is.
"""

import logging
from typing import List, Optional

from sqlalchemy import select

from clinic.db.base import Prescription as DbPrescription
from clinic.db.base import Visit as DbVisit
from clinic.domain.entities import Prescription as DomainPrescription
from clinic.domain.entities import Visit as DomainVisit
from clinic.domain.interfaces import IVisitRepository

from .base import store_operation

logger = logging.getLogger(__name__)


class VisitRepository(IVisitRepository):
    """Repository for Visit and Prescription persistence operations."""

    def __init__(self, db_session) -> None:
        self.db = db_session

    def get_by_id(self, visit_id: int) -> Optional[DomainVisit]:
        with store_operation(self.db, "visit.get_by_id"):
            db_visit = self.db.get(DbVisit, visit_id)
        return self._to_domain(db_visit) if db_visit else None

    def get_by_patient_id(self, patient_id: int) -> List[DomainVisit]:
        with store_operation(self.db, "visit.get_by_patient_id"):
            rows = self.db.scalars(
                select(DbVisit)
                .where(DbVisit.patient_id == patient_id)
                .order_by(DbVisit.visit_date.desc(), DbVisit.id.desc())
            ).all()
        return [self._to_domain(row) for row in rows]

    def create_with_prescriptions(
        self, visit: DomainVisit, prescriptions: List[DomainPrescription]
    ) -> DomainVisit:
        db_visit = DbVisit(
            patient_id=visit.patient_id,
            doctor_id=visit.doctor_id,
            chief_complaint=visit.chief_complaint,
            diagnosis=visit.diagnosis,
            treatment_plan=visit.treatment_plan,
            follow_up_date=visit.follow_up_date,
            status=visit.status,
        )
        if visit.visit_date is not None:
            db_visit.visit_date = visit.visit_date

        with store_operation(self.db, "visit.create_with_prescriptions"):
            try:
                self.db.add(db_visit)
                # Flush assigns the visit id inside the open transaction
                self.db.flush()
                for item in prescriptions:
                    db_visit.prescriptions.append(
                        DbPrescription(
                            medication_name=item.medication_name,
                            dosage=item.dosage,
                            frequency=item.frequency,
                            duration=item.duration,
                            instructions=item.instructions,
                        )
                    )
                self.db.commit()
            except Exception:
                self.db.rollback()
                raise
            self.db.refresh(db_visit)

        logger.debug(
            "Visit persisted",
            extra={
                "context": {
                    "visit_id": db_visit.id,
                    "prescriptions": len(db_visit.prescriptions),
                }
            },
        )
        return self._to_domain(db_visit)

    @staticmethod
    def _prescription_to_domain(row: DbPrescription) -> DomainPrescription:
        return DomainPrescription(
            id=row.id,
            visit_id=row.visit_id,
            medication_name=row.medication_name,
            dosage=row.dosage,
            frequency=row.frequency,
            duration=row.duration,
            instructions=row.instructions,
        )

    def _to_domain(self, db_visit: DbVisit) -> DomainVisit:
        """Convert database model to domain entity."""
        return DomainVisit(
            id=db_visit.id,
            patient_id=db_visit.patient_id,
            doctor_id=db_visit.doctor_id,
            chief_complaint=db_visit.chief_complaint,
            diagnosis=db_visit.diagnosis,
            treatment_plan=db_visit.treatment_plan,
            follow_up_date=db_visit.follow_up_date,
            status=db_visit.status,
            visit_date=db_visit.visit_date,
            created_at=db_visit.created_at,
            prescriptions=[
                self._prescription_to_domain(p) for p in db_visit.prescriptions
            ],
        )
