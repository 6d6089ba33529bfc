"""
Database seeding for local development.

Identities and their roles normally come from the external identity provider.
For a local stack with no provider, ``ensure_demo_identities`` creates one
identity per role so every dashboard can be exercised.
"""

import logging
from typing import Optional

from clinic.db.base import Profile, UserRole
from clinic.db.session import SessionLocal

logger = logging.getLogger(__name__)

DEMO_IDENTITIES = (
    ("demo-secretary", "Demo Secretary", "secretary"),
    ("demo-doctor", "Demo Doctor", "doctor"),
    ("demo-admin", "Demo Administrator", "admin"),
)


def ensure_demo_identities() -> None:
    """
    Ensure the demo identities and role assignments exist.

    Idempotent: existing rows are left in place, a changed role is reset.
    """
    with SessionLocal() as db:
        for identity_id, full_name, role in DEMO_IDENTITIES:
            profile: Optional[Profile] = db.get(Profile, identity_id)
            if profile is None:
                db.add(Profile(id=identity_id, full_name=full_name))
                db.flush()

            assignment = db.query(UserRole).filter_by(user_id=identity_id).first()
            if assignment is None:
                db.add(UserRole(user_id=identity_id, role=role))
            elif assignment.role != role:
                assignment.role = role

        db.commit()
        logger.info(
            "Demo identities ensured",
            extra={"context": {"identities": [i[0] for i in DEMO_IDENTITIES]}},
        )
