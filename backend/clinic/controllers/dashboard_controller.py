"""
Dashboard controller: tells the front end which dashboard the caller gets.
"""

import logging

from flask import Blueprint
from flask_login import login_required

from clinic.core.api_utils import api_response
from clinic.core.auth_decorators import current_context
from clinic.services.dashboard_service import DashboardService

logger = logging.getLogger(__name__)

dashboard_bp = Blueprint("dashboard", __name__, url_prefix="/api/dashboard")


@dashboard_bp.route("", methods=["GET"])
@login_required
def get_dashboard():
    """Resolve the caller's role and return its capability set.

    A caller without a role gets 403 role_not_assigned; the session
    collaborator is expected to end that session.
    """
    context = current_context()
    dashboard = DashboardService().dispatch(context.role)
    data = dashboard.to_dict()
    data["identity_id"] = context.identity_id
    return api_response(True, "Dashboard resolved", data=data)
