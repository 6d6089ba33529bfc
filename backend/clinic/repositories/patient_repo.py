"""Patient repository implementation following SOLID principles.

Maps between ``clinic.db.base.Patient`` rows and domain ``Patient`` entities.
"""

import logging
from collections import defaultdict
from typing import Dict, List, Optional

from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError

from clinic.core.exceptions import DuplicateIdentifierError, NotFoundError
from clinic.db.base import Patient as DbPatient
from clinic.db.base import Visit as DbVisit
from clinic.domain.entities import BloodType, Gender
from clinic.domain.entities import Patient as DomainPatient
from clinic.domain.entities import VisitSummary
from clinic.domain.interfaces import IPatientRepository

from .base import store_operation

logger = logging.getLogger(__name__)


class PatientRepository(IPatientRepository):
    """Repository for Patient persistence operations."""

    def __init__(self, db_session) -> None:
        self.db = db_session

    def get_by_id(self, patient_id: int) -> Optional[DomainPatient]:
        with store_operation(self.db, "patient.get_by_id"):
            db_patient = self.db.get(DbPatient, patient_id)
        return self._to_domain(db_patient) if db_patient else None

    def exists_national_id(self, national_id: str) -> bool:
        with store_operation(self.db, "patient.exists_national_id"):
            count = self.db.scalar(
                select(func.count(DbPatient.id)).where(
                    DbPatient.national_id == national_id
                )
            )
        return (count or 0) > 0

    def get_all(self) -> List[DomainPatient]:
        with store_operation(self.db, "patient.get_all"):
            rows = self.db.scalars(
                select(DbPatient).order_by(DbPatient.full_name, DbPatient.id)
            ).all()
        return [self._to_domain(row) for row in rows]

    def get_all_with_recent_visits(self, visit_limit: int) -> List[DomainPatient]:
        """All patients by name, each with its ``visit_limit`` latest visits.

        Two queries: the patients, then the top-N visits per patient using a
        ROW_NUMBER window partitioned by patient.
        """
        with store_operation(self.db, "patient.get_all_with_recent_visits"):
            rows = self.db.scalars(
                select(DbPatient).order_by(DbPatient.full_name, DbPatient.id)
            ).all()
            visits_by_patient = self._recent_visits(visit_limit) if rows else {}

        patients = []
        for row in rows:
            patient = self._to_domain(row)
            patient.recent_visits = visits_by_patient.get(row.id, [])
            patients.append(patient)
        return patients

    def get_all_newest_first(self) -> List[DomainPatient]:
        with store_operation(self.db, "patient.get_all_newest_first"):
            rows = self.db.scalars(
                select(DbPatient).order_by(
                    DbPatient.created_at.desc(), DbPatient.id.desc()
                )
            ).all()
        return [self._to_domain(row) for row in rows]

    def create(self, patient: DomainPatient) -> DomainPatient:
        db_patient = DbPatient(national_id=patient.national_id)
        self._apply(patient, db_patient)

        with store_operation(self.db, "patient.create"):
            self.db.add(db_patient)
            try:
                self.db.commit()
            except IntegrityError as exc:
                self.db.rollback()
                logger.info(
                    "Patient insert rejected by unique constraint",
                    extra={"context": {"error": type(exc.orig).__name__}},
                )
                raise DuplicateIdentifierError(patient.national_id) from exc
            self.db.refresh(db_patient)

        return self._to_domain(db_patient)

    def update(self, patient: DomainPatient) -> DomainPatient:
        if not patient.id:
            raise ValueError("Patient ID is required for update")

        with store_operation(self.db, "patient.update"):
            db_patient = self.db.get(DbPatient, patient.id)
            if not db_patient:
                raise NotFoundError("Patient", patient.id)
            # national_id is write-once and never copied back
            self._apply(patient, db_patient)
            self.db.commit()
            self.db.refresh(db_patient)

        return self._to_domain(db_patient)

    def _recent_visits(self, visit_limit: int) -> Dict[int, List[VisitSummary]]:
        if visit_limit <= 0:
            return {}

        row_number = (
            func.row_number()
            .over(
                partition_by=DbVisit.patient_id,
                order_by=(DbVisit.visit_date.desc(), DbVisit.id.desc()),
            )
            .label("rn")
        )
        ranked = (
            select(
                DbVisit.id,
                DbVisit.patient_id,
                DbVisit.visit_date,
                DbVisit.chief_complaint,
                DbVisit.diagnosis,
                DbVisit.status,
                row_number,
            ).subquery()
        )
        stmt = (
            select(ranked)
            .where(ranked.c.rn <= visit_limit)
            .order_by(ranked.c.patient_id, ranked.c.rn)
        )

        grouped: Dict[int, List[VisitSummary]] = defaultdict(list)
        for row in self.db.execute(stmt):
            grouped[row.patient_id].append(
                VisitSummary(
                    id=row.id,
                    visit_date=row.visit_date,
                    chief_complaint=row.chief_complaint,
                    diagnosis=row.diagnosis,
                    status=row.status,
                )
            )
        return grouped

    @staticmethod
    def _apply(patient: DomainPatient, db_patient: DbPatient) -> None:
        db_patient.full_name = patient.full_name
        db_patient.date_of_birth = patient.date_of_birth
        db_patient.gender = patient.gender.value if patient.gender else None
        db_patient.phone = patient.phone
        db_patient.address = patient.address
        db_patient.blood_type = patient.blood_type.value if patient.blood_type else None
        db_patient.allergies = patient.allergies
        db_patient.chronic_diseases = patient.chronic_diseases

    @staticmethod
    def _to_domain(db_patient: DbPatient) -> DomainPatient:
        """Convert database model to domain entity."""
        return DomainPatient(
            id=db_patient.id,
            national_id=db_patient.national_id,
            full_name=db_patient.full_name,
            date_of_birth=db_patient.date_of_birth,
            gender=Gender(db_patient.gender) if db_patient.gender else None,
            phone=db_patient.phone,
            address=db_patient.address,
            blood_type=BloodType(db_patient.blood_type) if db_patient.blood_type else None,
            allergies=db_patient.allergies,
            chronic_diseases=db_patient.chronic_diseases,
            created_at=db_patient.created_at,
        )
