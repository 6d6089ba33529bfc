"""
Directory lookup: read-only projections used to populate selection inputs.
"""

import logging
from typing import List

from clinic.domain.entities import DoctorIdentity, Role
from clinic.domain.interfaces import IIdentityRepository, IPatientReader
from clinic.schemas.dtos import PatientListing, PatientSummary

logger = logging.getLogger(__name__)


class DirectoryService:
    def __init__(
        self, patient_reader: IPatientReader, identity_repo: IIdentityRepository
    ) -> None:
        self.patient_reader = patient_reader
        self.identity_repo = identity_repo

    def list_patients(self) -> List[PatientSummary]:
        """(id, full name, national id) for every patient, by name."""
        return [PatientSummary.from_domain(p) for p in self.patient_reader.get_all()]

    def list_registered_patients(self) -> List[PatientListing]:
        """Registered-patients list, newest registration first."""
        return [
            PatientListing.from_domain(p)
            for p in self.patient_reader.get_all_newest_first()
        ]

    def list_doctors(self) -> List[DoctorIdentity]:
        """Every identity holding the doctor role.

        Role assignments are fetched first; the profile lookup is skipped when
        nobody holds the role.
        """
        doctor_ids = self.identity_repo.get_identity_ids_by_role(Role.DOCTOR)
        if not doctor_ids:
            logger.debug("No doctor role assignments found")
            return []
        return self.identity_repo.get_profiles_by_ids(doctor_ids)
