"""Read-only access to identity profiles and role assignments.

Both tables belong to the identity subsystem; the clinic core never writes
them (seeding aside, see ``clinic.db.seed``).
"""

from typing import List, Optional, Sequence

from sqlalchemy import func, select

from clinic.db.base import Profile as DbProfile
from clinic.db.base import UserRole as DbUserRole
from clinic.domain.entities import DoctorIdentity, Role, RoleAssignment
from clinic.domain.interfaces import IIdentityRepository

from .base import store_operation


class IdentityRepository(IIdentityRepository):
    def __init__(self, db_session) -> None:
        self.db = db_session

    def get_role_assignment(self, identity_id: str) -> Optional[RoleAssignment]:
        """Get the role assignment of an identity.

        An assignment row holding an unrecognized value is returned with
        ``role=None`` so callers treat it exactly like no assignment.
        """
        with store_operation(self.db, "identity.get_role_assignment"):
            row = self.db.scalars(
                select(DbUserRole).where(DbUserRole.user_id == identity_id)
            ).first()
        if row is None:
            return None
        return RoleAssignment(identity_id=row.user_id, role=Role.parse(row.role))

    def get_identity_ids_by_role(self, role: Role) -> List[str]:
        with store_operation(self.db, "identity.get_identity_ids_by_role"):
            rows = self.db.scalars(
                select(DbUserRole.user_id).where(
                    func.lower(func.trim(DbUserRole.role)) == role.value
                )
            ).all()
        return list(rows)

    def get_profiles_by_ids(self, identity_ids: Sequence[str]) -> List[DoctorIdentity]:
        if not identity_ids:
            return []
        with store_operation(self.db, "identity.get_profiles_by_ids"):
            rows = self.db.scalars(
                select(DbProfile)
                .where(DbProfile.id.in_(list(identity_ids)))
                .order_by(DbProfile.full_name, DbProfile.id)
            ).all()
        return [DoctorIdentity(id=row.id, full_name=row.full_name) for row in rows]
