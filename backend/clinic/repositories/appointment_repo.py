"""
Appointment repository implementation following SOLID principles.
"""

from typing import List, Optional

from sqlalchemy import select

from clinic.db.base import Appointment as DbAppointment
from clinic.domain.entities import Appointment as DomainAppointment
from clinic.domain.interfaces import IAppointmentRepository

from .base import store_operation


class AppointmentRepository(IAppointmentRepository):
    """Repository for Appointment persistence operations."""

    def __init__(self, db_session) -> None:
        self.db = db_session

    def get_by_id(self, appointment_id: int) -> Optional[DomainAppointment]:
        """Get appointment by ID."""
        with store_operation(self.db, "appointment.get_by_id"):
            db_appointment = self.db.get(DbAppointment, appointment_id)
        return self._to_domain(db_appointment) if db_appointment else None

    def get_by_doctor_id(self, doctor_id: str) -> List[DomainAppointment]:
        """Get all appointments of a doctor ordered by date."""
        with store_operation(self.db, "appointment.get_by_doctor_id"):
            rows = self.db.scalars(
                select(DbAppointment)
                .where(DbAppointment.doctor_id == doctor_id)
                .order_by(DbAppointment.appointment_date, DbAppointment.id)
            ).all()
        return [self._to_domain(row) for row in rows]

    def create(self, appointment: DomainAppointment) -> DomainAppointment:
        """Create a new appointment."""
        db_appointment = DbAppointment(
            patient_id=appointment.patient_id,
            doctor_id=appointment.doctor_id,
            appointment_date=appointment.appointment_date,
            notes=appointment.notes,
            created_by=appointment.created_by,
        )
        with store_operation(self.db, "appointment.create"):
            self.db.add(db_appointment)
            self.db.commit()
            self.db.refresh(db_appointment)
        return self._to_domain(db_appointment)

    @staticmethod
    def _to_domain(db_appointment: DbAppointment) -> DomainAppointment:
        """Convert database model to domain entity."""
        return DomainAppointment(
            id=db_appointment.id,
            patient_id=db_appointment.patient_id,
            doctor_id=db_appointment.doctor_id,
            appointment_date=db_appointment.appointment_date,
            notes=db_appointment.notes,
            created_by=db_appointment.created_by,
            created_at=db_appointment.created_at,
        )
