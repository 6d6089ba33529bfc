"""
Appointment controller following SOLID principles.

This controller:
- Handles HTTP concerns only for appointments
- Delegates booking rules to AppointmentService
"""

from dataclasses import asdict

from flask import Blueprint

from clinic.core.api_utils import api_response, get_json_body, request_db
from clinic.core.auth_decorators import current_context, require_capability
from clinic.repositories.appointment_repo import AppointmentRepository
from clinic.repositories.identity_repo import IdentityRepository
from clinic.repositories.patient_repo import PatientRepository
from clinic.schemas.dtos import (
    AppointmentCreateRequest,
    AppointmentResponse,
    DoctorResponse,
)
from clinic.services.appointment_service import AppointmentService
from clinic.services.dashboard_service import Capability
from clinic.services.directory_service import DirectoryService

appointment_bp = Blueprint("appointments", __name__, url_prefix="/api/appointments")


def _appointment_service() -> AppointmentService:
    db = request_db()
    patient_repo = PatientRepository(db)
    identity_repo = IdentityRepository(db)
    return AppointmentService(
        AppointmentRepository(db),
        patient_repo,
        identity_repo,
        DirectoryService(patient_repo, identity_repo),
    )


@appointment_bp.route("", methods=["POST"])
@require_capability(Capability.BOOK_APPOINTMENT)
def book_appointment():
    """Book an appointment; the caller is recorded as its creator."""
    create_request = AppointmentCreateRequest.from_dict(get_json_body())
    appointment = _appointment_service().book_appointment(
        current_context(), create_request
    )
    return api_response(
        True,
        "Appointment booked",
        data=asdict(AppointmentResponse.from_domain(appointment)),
        status_code=201,
    )


@appointment_bp.route("/doctors", methods=["GET"])
@require_capability(Capability.DOCTOR_DIRECTORY)
def list_doctors():
    doctors = _appointment_service().list_doctors()
    return api_response(
        True,
        "Doctors retrieved",
        data=[asdict(DoctorResponse.from_domain(d)) for d in doctors],
    )


@appointment_bp.route("/doctor/<doctor_id>", methods=["GET"])
@require_capability(Capability.BOOK_APPOINTMENT)
def doctor_appointments(doctor_id: str):
    appointments = _appointment_service().get_appointments_for_doctor(doctor_id)
    return api_response(
        True,
        "Appointments retrieved",
        data=[asdict(AppointmentResponse.from_domain(a)) for a in appointments],
    )
