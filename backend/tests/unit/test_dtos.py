"""
Unit tests for request/response DTOs.
"""

from datetime import date, datetime, time

import pytest

from clinic.core.exceptions import DuplicateIdentifierError, ValidationError
from clinic.domain.entities import Prescription, Visit, VisitSummary
from clinic.schemas.dtos import (
    AppointmentCreateRequest,
    ErrorResponse,
    PatientCreateRequest,
    PatientResponse,
    PatientUpdateRequest,
    PrescriptionItem,
    VisitCreateRequest,
    VisitRecordResult,
    parse_date,
    parse_time,
)
from tests.factories.repository_factories import make_patient


@pytest.mark.unit
class TestParsers:
    def test_parse_date(self):
        assert parse_date("2024-05-01", "d") == date(2024, 5, 1)
        assert parse_date("", "d") is None
        assert parse_date(datetime(2024, 5, 1, 8, 0), "d") == date(2024, 5, 1)

    def test_parse_date_rejects_other_formats(self):
        with pytest.raises(ValidationError, match="YYYY-MM-DD"):
            parse_date("01/05/2024", "appointment_date")

    def test_parse_time(self):
        assert parse_time("09:30", "t") == time(9, 30)
        assert parse_time("09:30:15", "t") == time(9, 30, 15)
        assert parse_time(None, "t") is None

    def test_parse_time_rejects_out_of_range(self):
        with pytest.raises(ValidationError):
            parse_time("25:00", "t")


@pytest.mark.unit
class TestRequestDtos:
    def test_prescription_completeness(self):
        assert PrescriptionItem("Amoxicillin", "500mg").is_complete()
        assert not PrescriptionItem("Amoxicillin", "").is_complete()
        assert not PrescriptionItem(None, "500mg").is_complete()

    def test_visit_request_ignores_non_object_lines(self):
        request = VisitCreateRequest.from_dict(
            {"patient_id": 1, "chief_complaint": "x", "prescriptions": ["junk", {}]}
        )

        assert len(request.prescriptions) == 1
        assert request.complete_prescriptions() == []

    def test_visit_request_rejects_non_list_prescriptions(self):
        with pytest.raises(ValidationError):
            VisitCreateRequest.from_dict({"prescriptions": {"medication_name": "x"}})

    def test_visit_request_rejects_bad_follow_up(self):
        request = VisitCreateRequest.from_dict(
            {"patient_id": 1, "chief_complaint": "x", "follow_up_date": "soon"}
        )

        with pytest.raises(ValidationError):
            request.validate()

    def test_patient_id_must_be_positive_integer(self):
        for value in ("abc", 0, -3):
            request = AppointmentCreateRequest.from_dict(
                {
                    "patient_id": value,
                    "doctor_id": "d",
                    "appointment_date": "2024-05-01",
                    "appointment_time": "09:30",
                }
            )
            with pytest.raises(ValidationError):
                request.validate()

    def test_update_request_only_keeps_mutable_fields(self):
        request = PatientUpdateRequest.from_dict(
            {"phone": "", "created_at": "2020-01-01", "national_id": "A1"}
        )

        assert request.changes == {"phone": ""}
        assert request.national_id == "A1"

    def test_update_clears_optional_field(self):
        patient = make_patient(address="Old street")

        PatientUpdateRequest.from_dict({"address": " "}).apply_to(patient)

        assert patient.address is None

    def test_update_rejects_blank_name(self):
        with pytest.raises(ValidationError):
            PatientUpdateRequest.from_dict({"full_name": ""}).validate()

    def test_registration_rejects_values_wider_than_columns(self):
        cases = [
            {"national_id": "9" * 65, "full_name": "Sara"},
            {"national_id": "AB1", "full_name": "x" * 201},
            {"national_id": "AB1", "full_name": "Sara", "phone": "1" * 41},
            {"national_id": "AB1", "full_name": "Sara", "address": "a" * 256},
        ]
        for payload in cases:
            with pytest.raises(ValidationError, match="at most"):
                PatientCreateRequest.from_dict(payload).validate()

    def test_registration_accepts_values_at_column_width(self):
        PatientCreateRequest.from_dict(
            {"national_id": "9" * 64, "full_name": "x" * 200, "phone": "1" * 40}
        ).validate()

    def test_update_rejects_overlong_phone(self):
        with pytest.raises(ValidationError) as exc_info:
            PatientUpdateRequest.from_dict({"phone": "1" * 41}).validate()

        assert exc_info.value.details == {"field": "phone", "max_length": 40}

    def test_overlong_prescription_line_rejects_visit(self):
        request = VisitCreateRequest.from_dict(
            {
                "patient_id": 1,
                "chief_complaint": "fever",
                "prescriptions": [{"medication_name": "m" * 201, "dosage": "1g"}],
            }
        )

        with pytest.raises(ValidationError, match="medication_name"):
            request.validate()

    def test_incomplete_prescription_line_is_not_length_checked(self):
        request = VisitCreateRequest.from_dict(
            {
                "patient_id": 1,
                "chief_complaint": "fever",
                "prescriptions": [{"medication_name": "", "frequency": "f" * 500}],
            }
        )

        request.validate()
        assert request.complete_prescriptions() == []


@pytest.mark.unit
class TestResponseDtos:
    def test_patient_response_includes_recent_visits(self):
        patient = make_patient(
            recent_visits=[
                VisitSummary(
                    id=8,
                    visit_date=datetime(2024, 3, 2, 10, 0),
                    chief_complaint="Fever",
                    diagnosis="Flu",
                )
            ]
        )

        data = PatientResponse.from_domain(patient).to_dict()

        assert data["national_id"] == "A100200"
        assert data["gender"] is None
        assert data["visits"] == [
            {
                "id": 8,
                "visit_date": "2024-03-02T10:00:00",
                "chief_complaint": "Fever",
                "diagnosis": "Flu",
                "status": "completed",
            }
        ]

    def test_visit_record_result_serializes_prescriptions(self):
        prescription = Prescription("Amoxicillin", "500mg", id=1, visit_id=2)
        visit = Visit(
            id=2,
            patient_id=1,
            doctor_id="doc-1",
            chief_complaint="fever",
            prescriptions=[prescription],
        )

        data = VisitRecordResult(visit=visit, prescriptions=[prescription]).to_dict()

        assert data["visit"]["status"] == "completed"
        assert data["visit"]["prescriptions"][0]["medication_name"] == "Amoxicillin"
        assert data["prescriptions"] == [
            {
                "id": 1,
                "visit_id": 2,
                "medication_name": "Amoxicillin",
                "dosage": "500mg",
                "frequency": None,
                "duration": None,
                "instructions": None,
            }
        ]

    def test_error_response_from_clinic_error(self):
        error = ErrorResponse.from_exception(DuplicateIdentifierError("AB1"))

        assert error.error == "duplicate_identifier"
        assert error.details == {"national_id": "AB1"}

    def test_error_response_from_plain_exception(self):
        error = ErrorResponse.from_exception(RuntimeError("boom"))

        assert error.error == "server_error"
        assert error.message == "boom"
