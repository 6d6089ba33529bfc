"""
Dashboard dispatch: which operations a resolved role may perform.

Two capability sets exist. Secretaries and administrators get the
administrative set, doctors get the clinical set, and anything else gets
nothing. Dispatch is a pure function of the role, so callers re-evaluate it on
every request and a changed role assignment takes effect immediately.
"""

from dataclasses import dataclass
from enum import Enum
from typing import FrozenSet, Optional

from clinic.core.exceptions import PermissionDeniedError, RoleNotAssignedError
from clinic.domain.entities import RequestContext, Role


class Capability(str, Enum):
    REGISTER_PATIENT = "register_patient"
    READ_PATIENTS = "read_patients"
    PATIENT_DIRECTORY = "patient_directory"
    DOCTOR_DIRECTORY = "doctor_directory"
    BOOK_APPOINTMENT = "book_appointment"
    RECORD_VISIT = "record_visit"


ADMINISTRATIVE_CAPABILITIES: FrozenSet[Capability] = frozenset(
    {
        Capability.REGISTER_PATIENT,
        Capability.READ_PATIENTS,
        Capability.PATIENT_DIRECTORY,
        Capability.DOCTOR_DIRECTORY,
        Capability.BOOK_APPOINTMENT,
    }
)

CLINICAL_CAPABILITIES: FrozenSet[Capability] = frozenset(
    {
        Capability.READ_PATIENTS,
        Capability.RECORD_VISIT,
    }
)


@dataclass(frozen=True)
class Dashboard:
    name: str
    role: Role
    capabilities: FrozenSet[Capability]

    def allows(self, capability: Capability) -> bool:
        return capability in self.capabilities

    def to_dict(self) -> dict:
        return {
            "dashboard": self.name,
            "role": self.role.value,
            "capabilities": sorted(c.value for c in self.capabilities),
        }


class DashboardService:
    """Routes a role to its dashboard and gates operations on it."""

    def dispatch(self, role: Optional[Role]) -> Dashboard:
        if role in (Role.SECRETARY, Role.ADMINISTRATOR):
            return Dashboard("administrative", role, ADMINISTRATIVE_CAPABILITIES)
        if role == Role.DOCTOR:
            return Dashboard("clinical", role, CLINICAL_CAPABILITIES)
        raise RoleNotAssignedError()

    def authorize(self, context: RequestContext, capability: Capability) -> Dashboard:
        """Return the caller's dashboard if it grants ``capability``."""
        if context is None or context.role is None:
            raise RoleNotAssignedError(getattr(context, "identity_id", None))

        dashboard = self.dispatch(context.role)
        if not dashboard.allows(capability):
            raise PermissionDeniedError(
                f"Role '{context.role.value}' may not perform '{capability.value}'",
                details={"role": context.role.value, "capability": capability.value},
            )
        return dashboard
