"""
Authentication and authorization helpers for the HTTP surface.

Authentication belongs to an external identity provider. It issues a Bearer
JWT whose ``sub`` claim is the identity id; Flask-Login's request loader turns
that into a ``SessionIdentity``. Authorization is ours: on every request the
identity's role is resolved from the store and the Dashboard Dispatcher
decides whether the requested capability is allowed.

DECORATOR GUIDE:
- @login_required: the caller only needs to be authenticated (e.g. /api/dashboard)
- @require_capability(Capability.X): authenticated AND the resolved role grants X

Example:
    @patient_bp.route("", methods=["POST"])
    @require_capability(Capability.REGISTER_PATIENT)
    def register_patient():
        context = current_context()
        ...
"""

from functools import wraps
from typing import Optional

from flask import g
from flask_login import UserMixin, current_user, login_required

from clinic.core.api_utils import request_db
from clinic.core.security import get_identity_from_token
from clinic.domain.entities import RequestContext
from clinic.repositories.identity_repo import IdentityRepository
from clinic.services.dashboard_service import Capability, DashboardService
from clinic.services.role_service import RoleService


class SessionIdentity(UserMixin):
    """Authenticated identity supplied by the session collaborator."""

    def __init__(self, identity_id: str) -> None:
        self.id = identity_id


def load_identity_from_request(req) -> Optional[SessionIdentity]:
    """Flask-Login request loader: read the identity from a Bearer token."""
    auth_header = req.headers.get("Authorization", "")
    if not auth_header.startswith("Bearer "):
        return None

    token = auth_header.split(" ", 1)[1].strip()
    identity_id = get_identity_from_token(token)
    if not identity_id:
        return None
    return SessionIdentity(identity_id)


def resolve_request_context() -> RequestContext:
    """Resolve (and cache for the request) the caller's role context."""
    if "request_context" not in g:
        role_service = RoleService(IdentityRepository(request_db()))
        g.request_context = role_service.build_context(current_user.get_id())
    return g.request_context


def current_context() -> RequestContext:
    return resolve_request_context()


def require_capability(capability: Capability):
    """Decorator requiring an authenticated caller whose role grants ``capability``.

    RoleNotAssignedError / PermissionDeniedError / TransientStoreError raised
    here are rendered by the application error handlers.
    """

    def decorator(f):
        @wraps(f)
        @login_required
        def decorated_function(*args, **kwargs):
            context = resolve_request_context()
            DashboardService().authorize(context, capability)
            return f(*args, **kwargs)

        return decorated_function

    return decorator
