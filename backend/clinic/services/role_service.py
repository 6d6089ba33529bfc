"""
Role resolution service.

Maps an authenticated identity to exactly one role or fails closed. Store
failures surface as TransientStoreError and are never reported as "no role".
"""

import logging

from clinic.core.exceptions import RoleNotAssignedError, ValidationError
from clinic.domain.entities import RequestContext, Role
from clinic.domain.interfaces import IRoleReader

logger = logging.getLogger(__name__)


class RoleService:
    """Application service resolving identities to roles."""

    def __init__(self, role_reader: IRoleReader) -> None:
        self.role_reader = role_reader

    def resolve_role(self, identity_id: str) -> Role:
        """Return the role assigned to ``identity_id``.

        Raises:
            ValidationError: identity_id is empty
            RoleNotAssignedError: no assignment, or an unrecognized role value
            TransientStoreError: the lookup itself failed (propagated as is)
        """
        if not identity_id or not str(identity_id).strip():
            raise ValidationError("Identity id is required")

        assignment = self.role_reader.get_role_assignment(str(identity_id))
        if assignment is None or assignment.role is None:
            logger.warning(
                "Identity has no usable role assignment",
                extra={
                    "context": {
                        "identity_id": identity_id,
                        "assignment_found": assignment is not None,
                    }
                },
            )
            raise RoleNotAssignedError(str(identity_id))

        return assignment.role

    def build_context(self, identity_id: str) -> RequestContext:
        """Resolve the role and bundle it with the identity for downstream calls."""
        role = self.resolve_role(identity_id)
        return RequestContext(identity_id=str(identity_id), role=role)
