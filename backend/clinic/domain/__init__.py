"""
Domain package - Pure business logic layer.

This package contains:
- entities.py: Domain entities with business rules
- interfaces.py: Repository contracts
"""

from .entities import (
    Appointment,
    BloodType,
    DoctorIdentity,
    Gender,
    Patient,
    Prescription,
    RequestContext,
    Role,
    RoleAssignment,
    Visit,
    VisitSummary,
)
from .interfaces import (
    IAppointmentReader,
    IAppointmentRepository,
    IAppointmentWriter,
    IIdentityRepository,
    IPatientReader,
    IPatientRepository,
    IPatientWriter,
    IProfileReader,
    IRoleReader,
    IVisitReader,
    IVisitRepository,
    IVisitWriter,
)

__all__ = [
    # Domain entities
    "Appointment",
    "BloodType",
    "DoctorIdentity",
    "Gender",
    "Patient",
    "Prescription",
    "RequestContext",
    "Role",
    "RoleAssignment",
    "Visit",
    "VisitSummary",
    # Repository interfaces
    "IAppointmentRepository",
    "IIdentityRepository",
    "IPatientRepository",
    "IVisitRepository",
    # Segregated interfaces
    "IAppointmentReader",
    "IAppointmentWriter",
    "IPatientReader",
    "IPatientWriter",
    "IProfileReader",
    "IRoleReader",
    "IVisitReader",
    "IVisitWriter",
]
