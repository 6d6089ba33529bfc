"""
Data Transfer Objects (DTOs) and validation schemas.

Following SOLID principles:
- Single Responsibility: Each schema validates one specific data contract
- Open/Closed: Schemas can be extended without modification

Request DTOs validate before any store access and raise ``ValidationError``.
Response DTOs are built from domain entities and serialize to JSON-ready dicts.
"""

from dataclasses import dataclass, field
from datetime import date, datetime, time
from typing import Any, Dict, List, Optional

from clinic.core.exceptions import ValidationError
from clinic.domain.entities import (
    Appointment,
    BloodType,
    DoctorIdentity,
    Gender,
    Patient,
    Prescription,
    Visit,
    VisitSummary,
)


def _blank_to_none(value: Any) -> Optional[str]:
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def _is_blank(value: Any) -> bool:
    return value is None or not str(value).strip()


# Column widths of the records store; longer values are rejected up front.
MAX_LENGTHS = {
    "national_id": 64,
    "full_name": 200,
    "phone": 40,
    "address": 255,
    "medication_name": 200,
    "dosage": 100,
    "frequency": 100,
    "duration": 100,
}


def _check_length(value: Any, field_name: str) -> None:
    limit = MAX_LENGTHS[field_name]
    if value is not None and len(str(value).strip()) > limit:
        raise ValidationError(
            f"{field_name} must be at most {limit} characters",
            details={"field": field_name, "max_length": limit},
        )


def _coerce_id(value: Any, field_name: str) -> int:
    if _is_blank(value):
        raise ValidationError(f"{field_name} is required")
    try:
        coerced = int(value)
    except (TypeError, ValueError):
        raise ValidationError(f"{field_name} must be an integer")
    if coerced <= 0:
        raise ValidationError(f"{field_name} must be positive")
    return coerced


def parse_date(value: Any, field_name: str) -> Optional[date]:
    """Parse an optional ``YYYY-MM-DD`` value."""
    if _is_blank(value):
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    try:
        return date.fromisoformat(str(value).strip())
    except ValueError:
        raise ValidationError(f"{field_name} must be a date in YYYY-MM-DD format")


def parse_time(value: Any, field_name: str) -> Optional[time]:
    """Parse an optional ``HH:MM`` or ``HH:MM:SS`` value."""
    if _is_blank(value):
        return None
    if isinstance(value, time):
        return value
    text = str(value).strip()
    for fmt in ("%H:%M", "%H:%M:%S"):
        try:
            return datetime.strptime(text, fmt).time()
        except ValueError:
            continue
    raise ValidationError(f"{field_name} must be a time in HH:MM format")


def _parse_enum(enum_cls, value: Any, field_name: str):
    if _is_blank(value):
        return None
    if isinstance(value, enum_cls):
        return value
    try:
        return enum_cls(str(value).strip())
    except ValueError:
        allowed = ", ".join(member.value for member in enum_cls)
        raise ValidationError(f"{field_name} must be one of: {allowed}")


def _iso(value: Optional[Any]) -> Optional[str]:
    return value.isoformat() if value is not None else None


def _enum_value(value: Optional[Any]) -> Optional[str]:
    return value.value if value is not None else None


# =====================================================
# PATIENTS
# =====================================================


@dataclass
class PatientCreateRequest:
    """DTO for patient registration requests."""

    national_id: str
    full_name: str
    date_of_birth: Optional[Any] = None
    gender: Optional[Any] = None
    phone: Optional[str] = None
    address: Optional[str] = None
    blood_type: Optional[Any] = None
    allergies: Optional[str] = None
    chronic_diseases: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "PatientCreateRequest":
        return cls(
            national_id=data.get("national_id") or "",
            full_name=data.get("full_name") or "",
            date_of_birth=data.get("date_of_birth"),
            gender=data.get("gender"),
            phone=data.get("phone"),
            address=data.get("address"),
            blood_type=data.get("blood_type"),
            allergies=data.get("allergies"),
            chronic_diseases=data.get("chronic_diseases"),
        )

    def validate(self) -> None:
        """Validate the request data."""
        if _is_blank(self.national_id):
            raise ValidationError("National identifier is required")
        if _is_blank(self.full_name):
            raise ValidationError("Full name is required")
        for name in ("national_id", "full_name", "phone", "address"):
            _check_length(getattr(self, name), name)
        parse_date(self.date_of_birth, "date_of_birth")
        _parse_enum(Gender, self.gender, "gender")
        _parse_enum(BloodType, self.blood_type, "blood_type")

    def to_domain(self) -> Patient:
        """Build the domain entity, with empty optional fields stored as absent."""
        return Patient(
            national_id=str(self.national_id).strip(),
            full_name=str(self.full_name).strip(),
            date_of_birth=parse_date(self.date_of_birth, "date_of_birth"),
            gender=_parse_enum(Gender, self.gender, "gender"),
            phone=_blank_to_none(self.phone),
            address=_blank_to_none(self.address),
            blood_type=_parse_enum(BloodType, self.blood_type, "blood_type"),
            allergies=_blank_to_none(self.allergies),
            chronic_diseases=_blank_to_none(self.chronic_diseases),
        )


# Fields a caller may amend after registration. national_id is not among them.
PATIENT_MUTABLE_FIELDS = (
    "full_name",
    "date_of_birth",
    "gender",
    "phone",
    "address",
    "blood_type",
    "allergies",
    "chronic_diseases",
)


@dataclass
class PatientUpdateRequest:
    """DTO for patient amendment requests.

    Only the keys present in ``changes`` are applied; a present key with an
    empty value clears the optional field.
    """

    changes: Dict[str, Any] = field(default_factory=dict)
    national_id: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "PatientUpdateRequest":
        changes = {k: data[k] for k in PATIENT_MUTABLE_FIELDS if k in data}
        return cls(changes=changes, national_id=data.get("national_id"))

    def validate(self) -> None:
        """Validate the request data."""
        if "full_name" in self.changes and _is_blank(self.changes["full_name"]):
            raise ValidationError("Full name cannot be empty")
        for name in ("full_name", "phone", "address"):
            if name in self.changes:
                _check_length(self.changes[name], name)
        if "date_of_birth" in self.changes:
            parse_date(self.changes["date_of_birth"], "date_of_birth")
        if "gender" in self.changes:
            _parse_enum(Gender, self.changes["gender"], "gender")
        if "blood_type" in self.changes:
            _parse_enum(BloodType, self.changes["blood_type"], "blood_type")

    def apply_to(self, patient: Patient) -> Patient:
        for key, value in self.changes.items():
            if key == "full_name":
                patient.full_name = str(value).strip()
            elif key == "date_of_birth":
                patient.date_of_birth = parse_date(value, key)
            elif key == "gender":
                patient.gender = _parse_enum(Gender, value, key)
            elif key == "blood_type":
                patient.blood_type = _parse_enum(BloodType, value, key)
            else:
                setattr(patient, key, _blank_to_none(value))
        return patient


@dataclass
class VisitSummaryResponse:
    id: int
    visit_date: Optional[str]
    chief_complaint: str
    diagnosis: Optional[str]
    status: str

    @classmethod
    def from_domain(cls, summary: VisitSummary) -> "VisitSummaryResponse":
        return cls(
            id=summary.id,
            visit_date=_iso(summary.visit_date),
            chief_complaint=summary.chief_complaint,
            diagnosis=summary.diagnosis,
            status=summary.status,
        )


@dataclass
class PatientResponse:
    """DTO for patient API responses."""

    id: int
    national_id: str
    full_name: str
    date_of_birth: Optional[str]
    gender: Optional[str]
    phone: Optional[str]
    address: Optional[str]
    blood_type: Optional[str]
    allergies: Optional[str]
    chronic_diseases: Optional[str]
    created_at: Optional[str]
    visits: List[VisitSummaryResponse] = field(default_factory=list)

    @classmethod
    def from_domain(cls, patient: Patient) -> "PatientResponse":
        """Create response from domain entity."""
        return cls(
            id=patient.id,
            national_id=patient.national_id,
            full_name=patient.full_name,
            date_of_birth=_iso(patient.date_of_birth),
            gender=_enum_value(patient.gender),
            phone=patient.phone,
            address=patient.address,
            blood_type=_enum_value(patient.blood_type),
            allergies=patient.allergies,
            chronic_diseases=patient.chronic_diseases,
            created_at=_iso(patient.created_at),
            visits=[VisitSummaryResponse.from_domain(v) for v in patient.recent_visits],
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "national_id": self.national_id,
            "full_name": self.full_name,
            "date_of_birth": self.date_of_birth,
            "gender": self.gender,
            "phone": self.phone,
            "address": self.address,
            "blood_type": self.blood_type,
            "allergies": self.allergies,
            "chronic_diseases": self.chronic_diseases,
            "created_at": self.created_at,
            "visits": [vars(v) for v in self.visits],
        }


@dataclass
class PatientSummary:
    """Lightweight patient projection used by selection inputs."""

    id: int
    full_name: str
    national_id: str

    @classmethod
    def from_domain(cls, patient: Patient) -> "PatientSummary":
        return cls(id=patient.id, full_name=patient.full_name, national_id=patient.national_id)


@dataclass
class PatientListing:
    """Patient projection shown on the registered-patients list."""

    id: int
    national_id: str
    full_name: str
    phone: Optional[str]
    gender: Optional[str]
    blood_type: Optional[str]

    @classmethod
    def from_domain(cls, patient: Patient) -> "PatientListing":
        return cls(
            id=patient.id,
            national_id=patient.national_id,
            full_name=patient.full_name,
            phone=patient.phone,
            gender=_enum_value(patient.gender),
            blood_type=_enum_value(patient.blood_type),
        )


# =====================================================
# VISITS
# =====================================================


@dataclass
class PrescriptionItem:
    """One prescription line entered together with a visit."""

    medication_name: Optional[str] = ""
    dosage: Optional[str] = ""
    frequency: Optional[str] = ""
    duration: Optional[str] = ""
    instructions: Optional[str] = ""

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "PrescriptionItem":
        return cls(
            medication_name=data.get("medication_name"),
            dosage=data.get("dosage"),
            frequency=data.get("frequency"),
            duration=data.get("duration"),
            instructions=data.get("instructions"),
        )

    def is_complete(self) -> bool:
        """Only lines with both a medication name and a dosage are kept."""
        return not _is_blank(self.medication_name) and not _is_blank(self.dosage)

    def validate(self) -> None:
        for name in ("medication_name", "dosage", "frequency", "duration"):
            _check_length(getattr(self, name), name)

    def to_domain(self) -> Prescription:
        return Prescription(
            medication_name=str(self.medication_name).strip(),
            dosage=str(self.dosage).strip(),
            frequency=_blank_to_none(self.frequency),
            duration=_blank_to_none(self.duration),
            instructions=_blank_to_none(self.instructions),
        )


@dataclass
class VisitCreateRequest:
    """DTO for visit recording requests.

    doctor_id defaults to the recording identity when omitted.
    """

    patient_id: Any
    chief_complaint: str
    diagnosis: Optional[str] = None
    treatment_plan: Optional[str] = None
    follow_up_date: Optional[Any] = None
    prescriptions: List[PrescriptionItem] = field(default_factory=list)
    doctor_id: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "VisitCreateRequest":
        items = data.get("prescriptions") or []
        if not isinstance(items, list):
            raise ValidationError("prescriptions must be a list")
        return cls(
            patient_id=data.get("patient_id"),
            chief_complaint=data.get("chief_complaint") or "",
            diagnosis=data.get("diagnosis"),
            treatment_plan=data.get("treatment_plan"),
            follow_up_date=data.get("follow_up_date"),
            prescriptions=[
                PrescriptionItem.from_dict(item)
                for item in items
                if isinstance(item, dict)
            ],
            doctor_id=data.get("doctor_id"),
        )

    def validate(self) -> None:
        """Validate the request data."""
        _coerce_id(self.patient_id, "patient_id")
        if _is_blank(self.chief_complaint):
            raise ValidationError("Chief complaint is required")
        parse_date(self.follow_up_date, "follow_up_date")
        for item in self.prescriptions:
            if item.is_complete():
                item.validate()

    def complete_prescriptions(self) -> List[Prescription]:
        return [item.to_domain() for item in self.prescriptions if item.is_complete()]


@dataclass
class PrescriptionResponse:
    id: int
    visit_id: int
    medication_name: str
    dosage: str
    frequency: Optional[str]
    duration: Optional[str]
    instructions: Optional[str]

    @classmethod
    def from_domain(cls, prescription: Prescription) -> "PrescriptionResponse":
        return cls(
            id=prescription.id,
            visit_id=prescription.visit_id,
            medication_name=prescription.medication_name,
            dosage=prescription.dosage,
            frequency=prescription.frequency,
            duration=prescription.duration,
            instructions=prescription.instructions,
        )


@dataclass
class VisitResponse:
    """DTO for visit API responses."""

    id: int
    patient_id: int
    doctor_id: str
    chief_complaint: str
    diagnosis: Optional[str]
    treatment_plan: Optional[str]
    follow_up_date: Optional[str]
    status: str
    visit_date: Optional[str]
    created_at: Optional[str]
    prescriptions: List[PrescriptionResponse] = field(default_factory=list)

    @classmethod
    def from_domain(cls, visit: Visit) -> "VisitResponse":
        return cls(
            id=visit.id,
            patient_id=visit.patient_id,
            doctor_id=visit.doctor_id,
            chief_complaint=visit.chief_complaint,
            diagnosis=visit.diagnosis,
            treatment_plan=visit.treatment_plan,
            follow_up_date=_iso(visit.follow_up_date),
            status=visit.status,
            visit_date=_iso(visit.visit_date),
            created_at=_iso(visit.created_at),
            prescriptions=[PrescriptionResponse.from_domain(p) for p in visit.prescriptions],
        )

    def to_dict(self) -> Dict[str, Any]:
        data = dict(vars(self))
        data["prescriptions"] = [vars(p) for p in self.prescriptions]
        return data


@dataclass
class VisitRecordResult:
    """Outcome of recording a visit: the visit and the prescriptions created."""

    visit: Visit
    prescriptions: List[Prescription]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "visit": VisitResponse.from_domain(self.visit).to_dict(),
            "prescriptions": [
                vars(PrescriptionResponse.from_domain(p)) for p in self.prescriptions
            ],
        }


# =====================================================
# APPOINTMENTS
# =====================================================


@dataclass
class AppointmentCreateRequest:
    """DTO for appointment booking requests."""

    patient_id: Any
    doctor_id: Optional[str]
    appointment_date: Optional[Any]
    appointment_time: Optional[Any]
    notes: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "AppointmentCreateRequest":
        return cls(
            patient_id=data.get("patient_id"),
            doctor_id=data.get("doctor_id"),
            appointment_date=data.get("appointment_date"),
            appointment_time=data.get("appointment_time"),
            notes=data.get("notes"),
        )

    def validate(self) -> None:
        """Validate the request data."""
        _coerce_id(self.patient_id, "patient_id")
        if _is_blank(self.doctor_id):
            raise ValidationError("Doctor is required")
        if parse_date(self.appointment_date, "appointment_date") is None:
            raise ValidationError("Appointment date is required")
        if parse_time(self.appointment_time, "appointment_time") is None:
            raise ValidationError("Appointment time is required")

    def scheduled_for(self) -> datetime:
        """Combine the calendar date and time-of-day into one instant."""
        return datetime.combine(
            parse_date(self.appointment_date, "appointment_date"),
            parse_time(self.appointment_time, "appointment_time"),
        )


@dataclass
class AppointmentResponse:
    """DTO for appointment API responses."""

    id: int
    patient_id: int
    doctor_id: str
    appointment_date: str
    notes: Optional[str]
    created_by: str
    created_at: Optional[str]

    @classmethod
    def from_domain(cls, appointment: Appointment) -> "AppointmentResponse":
        """Create response from domain entity."""
        return cls(
            id=appointment.id,
            patient_id=appointment.patient_id,
            doctor_id=appointment.doctor_id,
            appointment_date=_iso(appointment.appointment_date),
            notes=appointment.notes,
            created_by=appointment.created_by,
            created_at=_iso(appointment.created_at),
        )


@dataclass
class DoctorResponse:
    id: str
    full_name: str

    @classmethod
    def from_domain(cls, doctor: DoctorIdentity) -> "DoctorResponse":
        return cls(id=doctor.id, full_name=doctor.full_name)


# =====================================================
# COMMON
# =====================================================


@dataclass
class ErrorResponse:
    """DTO for error responses."""

    error: str
    message: str
    details: Optional[dict] = None

    @classmethod
    def from_exception(cls, exc) -> "ErrorResponse":
        return cls(
            error=getattr(exc, "error_code", "server_error"),
            message=getattr(exc, "message", "") or str(exc),
            details=getattr(exc, "details", None) or None,
        )

    @classmethod
    def server_error(cls, message: str = "Internal server error") -> "ErrorResponse":
        """Create server error response."""
        return cls(error="server_error", message=message)
