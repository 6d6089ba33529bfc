"""
Visit controller following SOLID principles.

Handles HTTP concerns only; the visit + prescriptions unit of work lives in
VisitService and VisitRepository.
"""

from flask import Blueprint

from clinic.core.api_utils import api_response, get_json_body, request_db
from clinic.core.auth_decorators import current_context, require_capability
from clinic.repositories.patient_repo import PatientRepository
from clinic.repositories.visit_repo import VisitRepository
from clinic.schemas.dtos import VisitCreateRequest, VisitResponse
from clinic.services.dashboard_service import Capability
from clinic.services.visit_service import VisitService

visit_bp = Blueprint("visits", __name__, url_prefix="/api/visits")


def _visit_service() -> VisitService:
    db = request_db()
    return VisitService(VisitRepository(db), PatientRepository(db))


@visit_bp.route("", methods=["POST"])
@require_capability(Capability.RECORD_VISIT)
def record_visit():
    """Record a visit for the calling doctor."""
    context = current_context()
    create_request = VisitCreateRequest.from_dict(get_json_body())
    # The recording doctor is always the caller
    create_request.doctor_id = context.identity_id
    result = _visit_service().record_visit(context, create_request)
    return api_response(True, "Visit recorded", data=result.to_dict(), status_code=201)


@visit_bp.route("/<int:visit_id>", methods=["GET"])
@require_capability(Capability.READ_PATIENTS)
def get_visit(visit_id: int):
    visit = _visit_service().get_visit(visit_id)
    return api_response(
        True, "Visit retrieved", data=VisitResponse.from_domain(visit).to_dict()
    )
