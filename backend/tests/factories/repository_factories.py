"""
Repository test factories following Interface Segregation Principle.

This module provides mock factories for repository interfaces, ensuring
tests only depend on the specific interfaces they need.
"""

from unittest.mock import Mock

from clinic.domain.entities import Patient, Role, RoleAssignment
from clinic.domain.interfaces import (
    IAppointmentRepository,
    IIdentityRepository,
    IPatientReader,
    IPatientRepository,
    IRoleReader,
    IVisitRepository,
)


class PatientRepositoryFactory:
    """Factory for creating Patient repository mocks."""

    @staticmethod
    def create_mock_reader() -> Mock:
        """Create mock that only implements IPatientReader operations."""
        mock_reader = Mock(spec=IPatientReader)
        mock_reader.get_by_id.return_value = None
        mock_reader.exists_national_id.return_value = False
        mock_reader.get_all.return_value = []
        mock_reader.get_all_with_recent_visits.return_value = []
        mock_reader.get_all_newest_first.return_value = []
        return mock_reader

    @staticmethod
    def create_mock_full() -> Mock:
        """Create full repository mock implementing IPatientRepository."""
        mock_repo = Mock(spec=IPatientRepository)
        mock_repo.get_by_id.return_value = None
        mock_repo.exists_national_id.return_value = False
        mock_repo.get_all.return_value = []
        mock_repo.get_all_with_recent_visits.return_value = []
        mock_repo.get_all_newest_first.return_value = []
        mock_repo.create.return_value = None
        mock_repo.update.return_value = None
        return mock_repo


class VisitRepositoryFactory:
    @staticmethod
    def create_mock_full() -> Mock:
        mock_repo = Mock(spec=IVisitRepository)
        mock_repo.get_by_id.return_value = None
        mock_repo.get_by_patient_id.return_value = []
        mock_repo.create_with_prescriptions.return_value = None
        return mock_repo


class AppointmentRepositoryFactory:
    @staticmethod
    def create_mock_full() -> Mock:
        mock_repo = Mock(spec=IAppointmentRepository)
        mock_repo.get_by_id.return_value = None
        mock_repo.get_by_doctor_id.return_value = []
        mock_repo.create.return_value = None
        return mock_repo


class IdentityRepositoryFactory:
    """Factory for role/profile lookups owned by the identity subsystem."""

    @staticmethod
    def create_mock_role_reader(role=None, identity_id: str = "identity-1") -> Mock:
        """Role reader returning ``role`` for any identity (None: unassigned)."""
        mock_reader = Mock(spec=IRoleReader)
        if role is None:
            mock_reader.get_role_assignment.return_value = None
        else:
            mock_reader.get_role_assignment.return_value = RoleAssignment(
                identity_id=identity_id, role=role
            )
        mock_reader.get_identity_ids_by_role.return_value = []
        return mock_reader

    @staticmethod
    def create_mock_full() -> Mock:
        mock_repo = Mock(spec=IIdentityRepository)
        mock_repo.get_role_assignment.return_value = None
        mock_repo.get_identity_ids_by_role.return_value = []
        mock_repo.get_profiles_by_ids.return_value = []
        return mock_repo


def make_patient(**overrides) -> Patient:
    """Build a valid domain patient, overriding any field."""
    values = {
        "id": 1,
        "national_id": "A100200",
        "full_name": "Amina Haddad",
        "phone": "0600000001",
    }
    values.update(overrides)
    return Patient(**values)


def doctor_assignment(identity_id: str = "doc-1") -> RoleAssignment:
    return RoleAssignment(identity_id=identity_id, role=Role.DOCTOR)
