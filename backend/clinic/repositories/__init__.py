from .appointment_repo import AppointmentRepository
from .identity_repo import IdentityRepository
from .patient_repo import PatientRepository
from .visit_repo import VisitRepository

__all__ = [
    "AppointmentRepository",
    "IdentityRepository",
    "PatientRepository",
    "VisitRepository",
]
