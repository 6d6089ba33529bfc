"""
Patient controller for handling HTTP requests following SOLID principles.

This controller:
- Handles HTTP concerns only (Single Responsibility)
- Delegates registration rules to PatientService
"""

from flask import Blueprint, request

from clinic.core.api_utils import api_response, get_json_body, request_db
from clinic.core.auth_decorators import require_capability
from clinic.repositories.patient_repo import PatientRepository
from clinic.repositories.visit_repo import VisitRepository
from clinic.schemas.dtos import (
    PatientCreateRequest,
    PatientResponse,
    PatientUpdateRequest,
    VisitResponse,
)
from clinic.services.dashboard_service import Capability
from clinic.services.patient_service import PatientService
from clinic.services.visit_service import VisitService

patient_bp = Blueprint("patients", __name__, url_prefix="/api/patients")

_FALSE_VALUES = ("0", "false", "no")


def _patient_service() -> PatientService:
    return PatientService(PatientRepository(request_db()))


@patient_bp.route("", methods=["POST"])
@require_capability(Capability.REGISTER_PATIENT)
def register_patient():
    """Register a new patient."""
    create_request = PatientCreateRequest.from_dict(get_json_body())
    patient = _patient_service().register_patient(create_request)
    return api_response(
        True,
        "Patient registered",
        data=PatientResponse.from_domain(patient).to_dict(),
        status_code=201,
    )


@patient_bp.route("", methods=["GET"])
@require_capability(Capability.READ_PATIENTS)
def list_patients():
    """Patient records ordered by name, each with its latest visits.

    ``?q=`` filters by name or national identifier,
    ``?include_visits=false`` skips the visit join.
    """
    include_visits = (
        request.args.get("include_visits", "true").lower() not in _FALSE_VALUES
    )
    service = _patient_service()
    patients = service.get_all_patients(include_visits=include_visits)
    patients = service.find_patients(patients, request.args.get("q"))
    return api_response(
        True,
        "Patients retrieved",
        data=[PatientResponse.from_domain(p).to_dict() for p in patients],
    )


@patient_bp.route("/<int:patient_id>", methods=["GET"])
@require_capability(Capability.READ_PATIENTS)
def get_patient(patient_id: int):
    patient = _patient_service().get_patient(patient_id)
    return api_response(
        True, "Patient retrieved", data=PatientResponse.from_domain(patient).to_dict()
    )


@patient_bp.route("/<int:patient_id>", methods=["PATCH"])
@require_capability(Capability.REGISTER_PATIENT)
def update_patient(patient_id: int):
    update_request = PatientUpdateRequest.from_dict(get_json_body())
    patient = _patient_service().update_patient(patient_id, update_request)
    return api_response(
        True, "Patient updated", data=PatientResponse.from_domain(patient).to_dict()
    )


@patient_bp.route("/<int:patient_id>/visits", methods=["GET"])
@require_capability(Capability.READ_PATIENTS)
def patient_visits(patient_id: int):
    db = request_db()
    service = VisitService(VisitRepository(db), PatientRepository(db))
    visits = service.get_visits_for_patient(patient_id)
    return api_response(
        True,
        "Visits retrieved",
        data=[VisitResponse.from_domain(v).to_dict() for v in visits],
    )
