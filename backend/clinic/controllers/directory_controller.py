"""
Directory controller: lightweight lists used to populate selection inputs.
"""

from dataclasses import asdict

from flask import Blueprint, request

from clinic.core.api_utils import api_response, request_db
from clinic.core.auth_decorators import require_capability
from clinic.repositories.identity_repo import IdentityRepository
from clinic.repositories.patient_repo import PatientRepository
from clinic.schemas.dtos import DoctorResponse
from clinic.services.dashboard_service import Capability
from clinic.services.directory_service import DirectoryService
from clinic.services.patient_service import PatientService

directory_bp = Blueprint("directory", __name__, url_prefix="/api/directory")


def _directory_service() -> DirectoryService:
    db = request_db()
    return DirectoryService(PatientRepository(db), IdentityRepository(db))


@directory_bp.route("/patients", methods=["GET"])
@require_capability(Capability.READ_PATIENTS)
def patient_options():
    """(id, name, national id) for patient pickers, filtered by ``?q=``."""
    summaries = _directory_service().list_patients()
    summaries = PatientService.find_patients(summaries, request.args.get("q"))
    return api_response(
        True, "Patients retrieved", data=[asdict(s) for s in summaries]
    )


@directory_bp.route("/patients/registered", methods=["GET"])
@require_capability(Capability.PATIENT_DIRECTORY)
def registered_patients():
    """Registered-patients list, newest first; ``?q=`` also matches phone."""
    listings = _directory_service().list_registered_patients()
    listings = PatientService.find_patients(
        listings, request.args.get("q"), include_phone=True
    )
    return api_response(
        True, "Patients retrieved", data=[asdict(item) for item in listings]
    )


@directory_bp.route("/doctors", methods=["GET"])
@require_capability(Capability.DOCTOR_DIRECTORY)
def doctor_options():
    doctors = _directory_service().list_doctors()
    return api_response(
        True,
        "Doctors retrieved",
        data=[asdict(DoctorResponse.from_domain(d)) for d in doctors],
    )
