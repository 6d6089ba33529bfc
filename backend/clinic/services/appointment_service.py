"""
Appointment scheduling service following SOLID principles.
"""

import logging
from typing import List

from clinic.core.exceptions import NotFoundError, ValidationError
from clinic.domain.entities import Appointment as DomainAppointment
from clinic.domain.entities import DoctorIdentity, RequestContext, Role
from clinic.domain.interfaces import (
    IAppointmentRepository,
    IPatientReader,
    IRoleReader,
)
from clinic.schemas.dtos import AppointmentCreateRequest

from .directory_service import DirectoryService

logger = logging.getLogger(__name__)


class AppointmentService:
    """Application service for appointment-related use-cases.

    No conflict detection is performed: two appointments for the same doctor
    at the same instant are both accepted.
    """

    def __init__(
        self,
        appointment_repo: IAppointmentRepository,
        patient_reader: IPatientReader,
        role_reader: IRoleReader,
        directory: DirectoryService,
    ) -> None:
        self.appointment_repo = appointment_repo
        self.patient_reader = patient_reader
        self.role_reader = role_reader
        self.directory = directory

    def book_appointment(
        self, context: RequestContext, request: AppointmentCreateRequest
    ) -> DomainAppointment:
        """Book an appointment.

        Business Rules:
        - patient_id, doctor_id, date and time are required
        - Date and time are merged into a single instant
        - The patient must exist and the doctor must hold the doctor role
        - created_by is the booking identity
        """
        request.validate()

        patient_id = int(request.patient_id)
        doctor_id = str(request.doctor_id).strip()

        if self.patient_reader.get_by_id(patient_id) is None:
            raise NotFoundError("Patient", patient_id)

        assignment = self.role_reader.get_role_assignment(doctor_id)
        if assignment is None or assignment.role != Role.DOCTOR:
            raise ValidationError("Selected identity is not a doctor")

        appointment = DomainAppointment(
            patient_id=patient_id,
            doctor_id=doctor_id,
            appointment_date=request.scheduled_for(),
            notes=(request.notes or "").strip() or None,
            created_by=context.identity_id,
        )

        created = self.appointment_repo.create(appointment)
        logger.info(
            "Appointment booked",
            extra={
                "context": {
                    "appointment_id": created.id,
                    "doctor_id": doctor_id,
                    "created_by": context.identity_id,
                }
            },
        )
        return created

    def list_doctors(self) -> List[DoctorIdentity]:
        """Doctors available for booking."""
        return self.directory.list_doctors()

    def get_appointments_for_doctor(self, doctor_id: str) -> List[DomainAppointment]:
        if not doctor_id or not str(doctor_id).strip():
            raise ValidationError("Doctor is required")
        return self.appointment_repo.get_by_doctor_id(str(doctor_id).strip())
