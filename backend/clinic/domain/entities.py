"""
Domain entities - Pure business logic, no framework dependencies.

Following SOLID principles:
- Single Responsibility: Each entity represents one clinic concept
- Open/Closed: Entities can be extended without modification
"""

from dataclasses import dataclass, field
from datetime import date, datetime
from enum import Enum
from typing import List, Optional

from clinic.core.exceptions import ValidationError

VISIT_STATUS_COMPLETED = "completed"


class Role(str, Enum):
    """Role held by an authenticated identity."""

    SECRETARY = "secretary"
    DOCTOR = "doctor"
    ADMINISTRATOR = "admin"

    @classmethod
    def parse(cls, value) -> Optional["Role"]:
        """Return the matching role, or None for missing/unknown values."""
        if isinstance(value, cls):
            return value
        if not value:
            return None
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            return None


class Gender(str, Enum):
    MALE = "male"
    FEMALE = "female"


class BloodType(str, Enum):
    A_POSITIVE = "A+"
    A_NEGATIVE = "A-"
    B_POSITIVE = "B+"
    B_NEGATIVE = "B-"
    AB_POSITIVE = "AB+"
    AB_NEGATIVE = "AB-"
    O_POSITIVE = "O+"
    O_NEGATIVE = "O-"


@dataclass(frozen=True)
class RequestContext:
    """Explicit caller context passed into every service operation.

    Replaces any process-wide "current user": the identity id comes from the
    session collaborator and the role from the Role Resolver.
    """

    identity_id: str
    role: Optional[Role] = None


@dataclass
class RoleAssignment:
    identity_id: str
    role: Optional[Role]


@dataclass
class DoctorIdentity:
    """An identity holding the doctor role, as shown in selection inputs."""

    id: str
    full_name: str = ""


@dataclass
class VisitSummary:
    """Visit projection attached to patient records."""

    id: int
    visit_date: Optional[datetime]
    chief_complaint: str
    diagnosis: Optional[str] = None
    status: str = VISIT_STATUS_COMPLETED


@dataclass
class Patient:
    """Domain entity representing a registered patient.

    national_id is write-once: it is set at registration and never amended.
    """

    id: Optional[int] = None
    national_id: str = ""
    full_name: str = ""
    date_of_birth: Optional[date] = None
    gender: Optional[Gender] = None
    phone: Optional[str] = None
    address: Optional[str] = None
    blood_type: Optional[BloodType] = None
    allergies: Optional[str] = None
    chronic_diseases: Optional[str] = None
    created_at: Optional[datetime] = None
    recent_visits: List[VisitSummary] = field(default_factory=list)

    def __post_init__(self):
        """Validate domain rules."""
        if not self.national_id or not self.national_id.strip():
            raise ValidationError("National identifier is required")
        if not self.full_name or not self.full_name.strip():
            raise ValidationError("Full name is required")


@dataclass
class Prescription:
    """One medication line item owned by exactly one visit."""

    medication_name: str = ""
    dosage: str = ""
    frequency: Optional[str] = None
    duration: Optional[str] = None
    instructions: Optional[str] = None
    id: Optional[int] = None
    visit_id: Optional[int] = None


@dataclass
class Visit:
    """Domain entity for a recorded clinical encounter."""

    id: Optional[int] = None
    patient_id: int = 0
    doctor_id: str = ""
    chief_complaint: str = ""
    diagnosis: Optional[str] = None
    treatment_plan: Optional[str] = None
    follow_up_date: Optional[date] = None
    status: str = VISIT_STATUS_COMPLETED
    visit_date: Optional[datetime] = None
    created_at: Optional[datetime] = None
    prescriptions: List[Prescription] = field(default_factory=list)

    def __post_init__(self):
        """Validate business rules."""
        if not self.patient_id:
            raise ValidationError("Patient is required")
        if not self.doctor_id:
            raise ValidationError("Doctor is required")
        if not self.chief_complaint or not self.chief_complaint.strip():
            raise ValidationError("Chief complaint is required")


@dataclass
class Appointment:
    """Domain entity for a booked appointment."""

    id: Optional[int] = None
    patient_id: int = 0
    doctor_id: str = ""
    appointment_date: Optional[datetime] = None
    notes: Optional[str] = None
    created_by: str = ""
    created_at: Optional[datetime] = None

    def __post_init__(self):
        """Validate business rules."""
        if not self.patient_id:
            raise ValidationError("Patient is required")
        if not self.doctor_id:
            raise ValidationError("Doctor is required")
        if not isinstance(self.appointment_date, datetime):
            raise ValidationError("Appointment date and time are required")
