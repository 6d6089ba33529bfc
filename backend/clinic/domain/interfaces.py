"""
Abstract interfaces for repositories following Interface Segregation Principle.

These interfaces define contracts without implementation details,
enabling dependency injection and easier testing.

Every method may raise ``TransientStoreError`` when the underlying store is
unreachable; data-level conditions are expressed through return values or the
specific errors documented on each method.
"""

from abc import ABC, abstractmethod
from typing import List, Optional, Sequence

from .entities import (
    Appointment,
    DoctorIdentity,
    Patient,
    Prescription,
    Role,
    RoleAssignment,
    Visit,
)


class IRoleReader(ABC):
    """Interface for role assignment lookups (owned by the identity subsystem)."""

    @abstractmethod
    def get_role_assignment(self, identity_id: str) -> Optional[RoleAssignment]:
        """Get the role assignment for an identity, None when unassigned."""
        pass

    @abstractmethod
    def get_identity_ids_by_role(self, role: Role) -> List[str]:
        """Get ids of every identity holding ``role``."""
        pass


class IProfileReader(ABC):
    """Interface for identity display records."""

    @abstractmethod
    def get_profiles_by_ids(self, identity_ids: Sequence[str]) -> List[DoctorIdentity]:
        """Get display records for the given identity ids."""
        pass


class IIdentityRepository(IRoleReader, IProfileReader):
    """Read-only identity repository combining role and profile lookups."""

    pass


class IPatientReader(ABC):
    """Interface for patient read operations."""

    @abstractmethod
    def get_by_id(self, patient_id: int) -> Optional[Patient]:
        """Get patient by ID."""
        pass

    @abstractmethod
    def exists_national_id(self, national_id: str) -> bool:
        """Check whether a patient with this national identifier exists."""
        pass

    @abstractmethod
    def get_all(self) -> List[Patient]:
        """Get all patients ordered by full name ascending."""
        pass

    @abstractmethod
    def get_all_with_recent_visits(self, visit_limit: int) -> List[Patient]:
        """Get all patients ordered by full name, each with its latest visits."""
        pass

    @abstractmethod
    def get_all_newest_first(self) -> List[Patient]:
        """Get all patients ordered by registration time, newest first."""
        pass


class IPatientWriter(ABC):
    """Interface for patient write operations."""

    @abstractmethod
    def create(self, patient: Patient) -> Patient:
        """Create a new patient.

        Raises DuplicateIdentifierError when the store rejects the national
        identifier as already taken.
        """
        pass

    @abstractmethod
    def update(self, patient: Patient) -> Patient:
        """Persist amendments to an existing patient."""
        pass


class IPatientRepository(IPatientReader, IPatientWriter):
    """Complete patient repository interface."""

    pass


class IVisitReader(ABC):
    """Interface for visit read operations."""

    @abstractmethod
    def get_by_id(self, visit_id: int) -> Optional[Visit]:
        """Get a visit with its prescriptions."""
        pass

    @abstractmethod
    def get_by_patient_id(self, patient_id: int) -> List[Visit]:
        """Get all visits of a patient, most recent first."""
        pass


class IVisitWriter(ABC):
    """Interface for visit write operations."""

    @abstractmethod
    def create_with_prescriptions(
        self, visit: Visit, prescriptions: List[Prescription]
    ) -> Visit:
        """Create a visit and its prescriptions as one unit of work.

        The returned visit carries its assigned id and the persisted
        prescriptions.
        """
        pass


class IVisitRepository(IVisitReader, IVisitWriter):
    """Complete visit repository interface."""

    pass


class IAppointmentReader(ABC):
    """Interface for appointment read operations."""

    @abstractmethod
    def get_by_id(self, appointment_id: int) -> Optional[Appointment]:
        """Get appointment by ID."""
        pass

    @abstractmethod
    def get_by_doctor_id(self, doctor_id: str) -> List[Appointment]:
        """Get all appointments of a doctor ordered by date."""
        pass


class IAppointmentWriter(ABC):
    """Interface for appointment write operations."""

    @abstractmethod
    def create(self, appointment: Appointment) -> Appointment:
        """Create a new appointment."""
        pass


class IAppointmentRepository(IAppointmentReader, IAppointmentWriter):
    """Complete appointment repository interface."""

    pass
