from __future__ import annotations

from datetime import date, datetime
from typing import List, Optional

from sqlalchemy import (
    Date,
    DateTime,
    ForeignKey,
    Integer,
    String,
    Text,
    func,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from .session import Base


# ------------------- IDENTITY (read-only for the clinic core) -------------------
class Profile(Base):
    """Display record of an authenticated identity."""

    __tablename__ = "profiles"

    id: Mapped[str] = mapped_column(String(64), primary_key=True)
    full_name: Mapped[str] = mapped_column(String(200), nullable=False, default="")
    created_at: Mapped[Optional[datetime]] = mapped_column(
        DateTime(timezone=True), server_default=func.now()
    )

    def __repr__(self):
        return f"<Profile(id='{self.id}', full_name='{self.full_name}')>"


class UserRole(Base):
    """Role assignment: at most one role per identity."""

    __tablename__ = "user_roles"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)
    user_id: Mapped[str] = mapped_column(
        String(64), ForeignKey("profiles.id"), unique=True, nullable=False
    )
    role: Mapped[str] = mapped_column(
        String(20), nullable=False, index=True
    )  # 'secretary', 'doctor', 'admin'

    def __repr__(self):
        return f"<UserRole(user_id='{self.user_id}', role='{self.role}')>"


# ------------------- PATIENTS -------------------
class Patient(Base):
    __tablename__ = "patients"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)
    # Business key; the unique constraint closes the check-then-insert race
    national_id: Mapped[str] = mapped_column(
        String(64), unique=True, index=True, nullable=False
    )
    full_name: Mapped[str] = mapped_column(String(200), nullable=False, index=True)
    date_of_birth: Mapped[Optional[date]] = mapped_column(Date, nullable=True)
    gender: Mapped[Optional[str]] = mapped_column(String(10), nullable=True)
    phone: Mapped[Optional[str]] = mapped_column(String(40), nullable=True)
    address: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    blood_type: Mapped[Optional[str]] = mapped_column(String(3), nullable=True)
    allergies: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    chronic_diseases: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    created_at: Mapped[Optional[datetime]] = mapped_column(
        DateTime(timezone=True), server_default=func.now()
    )

    visits: Mapped[List["Visit"]] = relationship(
        "Visit", back_populates="patient", lazy="noload"
    )

    def __repr__(self):
        return f"<Patient(id={self.id}, national_id='{self.national_id}')>"


# ------------------- VISITS -------------------
class Visit(Base):
    __tablename__ = "visits"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)
    patient_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("patients.id"), nullable=False, index=True
    )
    # Identity ids are owned by the external identity subsystem
    doctor_id: Mapped[str] = mapped_column(String(64), nullable=False, index=True)
    chief_complaint: Mapped[str] = mapped_column(Text, nullable=False)
    diagnosis: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    treatment_plan: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    follow_up_date: Mapped[Optional[date]] = mapped_column(Date, nullable=True)
    status: Mapped[str] = mapped_column(String(20), nullable=False, default="completed")
    visit_date: Mapped[Optional[datetime]] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), index=True
    )
    created_at: Mapped[Optional[datetime]] = mapped_column(
        DateTime(timezone=True), server_default=func.now()
    )

    patient: Mapped["Patient"] = relationship("Patient", back_populates="visits")
    prescriptions: Mapped[List["Prescription"]] = relationship(
        "Prescription",
        back_populates="visit",
        cascade="all, delete-orphan",
        order_by="Prescription.id",
        lazy="selectin",
    )

    def __repr__(self):
        return f"<Visit(id={self.id}, patient_id={self.patient_id}, status='{self.status}')>"


class Prescription(Base):
    __tablename__ = "prescriptions"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)
    visit_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("visits.id", ondelete="CASCADE"), nullable=False, index=True
    )
    medication_name: Mapped[str] = mapped_column(String(200), nullable=False)
    dosage: Mapped[str] = mapped_column(String(100), nullable=False)
    frequency: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)
    duration: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)
    instructions: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    visit: Mapped["Visit"] = relationship("Visit", back_populates="prescriptions")

    def __repr__(self):
        return f"<Prescription(id={self.id}, visit_id={self.visit_id}, medication_name='{self.medication_name}')>"


# ------------------- APPOINTMENTS -------------------
class Appointment(Base):
    __tablename__ = "appointments"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)
    patient_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("patients.id"), nullable=False, index=True
    )
    doctor_id: Mapped[str] = mapped_column(String(64), nullable=False, index=True)
    # Local clinic wall-clock time (date + time-of-day)
    appointment_date: Mapped[datetime] = mapped_column(DateTime, nullable=False)
    notes: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    created_by: Mapped[str] = mapped_column(String(64), nullable=False)
    created_at: Mapped[Optional[datetime]] = mapped_column(
        DateTime(timezone=True), server_default=func.now()
    )

    def __repr__(self):
        return f"<Appointment(id={self.id}, doctor_id='{self.doctor_id}', appointment_date={self.appointment_date})>"
