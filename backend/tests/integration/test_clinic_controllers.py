"""
Integration tests for the HTTP surface: authentication, role gating and the
main clinic workflows end to end through Flask, services and SQLite.
"""

import pytest
from sqlalchemy import func, select

from clinic.db.base import Patient as DbPatient
from clinic.db.base import Prescription as DbPrescription
from clinic.db.base import Visit as DbVisit
from clinic.db.session import SessionLocal
from tests.factories.model_factories import bearer


def _count(model) -> int:
    with SessionLocal() as session:
        return session.scalar(select(func.count()).select_from(model))


def _register(client, headers, **overrides):
    payload = {"national_id": "AB123", "full_name": "Sara Benali"}
    payload.update(overrides)
    return client.post("/api/patients", json=payload, headers=headers)


@pytest.mark.integration
@pytest.mark.api
@pytest.mark.auth
class TestAuthenticationAndDashboard:
    def test_unauthenticated_request_gets_401(self, client):
        response = client.get("/api/dashboard")

        assert response.status_code == 401
        assert response.get_json()["error"] == "unauthorized"

    def test_invalid_token_gets_401(self, client):
        response = client.get(
            "/api/patients", headers={"Authorization": "Bearer forged"}
        )

        assert response.status_code == 401

    def test_secretary_dashboard(self, client, secretary_headers):
        response = client.get("/api/dashboard", headers=secretary_headers)

        data = response.get_json()["data"]
        assert response.status_code == 200
        assert data["dashboard"] == "administrative"
        assert data["identity_id"] == "demo-secretary"
        assert "record_visit" not in data["capabilities"]

    def test_administrator_dashboard_matches_secretary(self, client, admin_headers):
        data = client.get("/api/dashboard", headers=admin_headers).get_json()["data"]

        assert data["dashboard"] == "administrative"
        assert data["role"] == "admin"

    def test_doctor_dashboard(self, client, doctor_headers):
        data = client.get("/api/dashboard", headers=doctor_headers).get_json()["data"]

        assert data["dashboard"] == "clinical"
        assert data["capabilities"] == ["read_patients", "record_visit"]

    def test_identity_without_role_is_refused(self, client):
        response = client.get("/api/dashboard", headers=bearer("ghost"))

        assert response.status_code == 403
        assert response.get_json()["error"] == "role_not_assigned"


@pytest.mark.integration
@pytest.mark.api
@pytest.mark.patients
class TestPatientEndpoints:
    def test_register_patient(self, client, secretary_headers):
        response = _register(client, secretary_headers, gender="female", phone="")

        body = response.get_json()
        assert response.status_code == 201
        assert body["success"] is True
        assert body["data"]["national_id"] == "AB123"
        assert body["data"]["gender"] == "female"
        assert body["data"]["phone"] is None

    def test_duplicate_registration_conflicts(self, client, secretary_headers):
        _register(client, secretary_headers)

        response = _register(client, secretary_headers, full_name="Another Name")

        assert response.status_code == 409
        assert response.get_json()["error"] == "duplicate_identifier"
        assert _count(DbPatient) == 1

    def test_missing_name_is_a_validation_error(self, client, secretary_headers):
        response = _register(client, secretary_headers, full_name=" ")

        assert response.status_code == 400
        assert response.get_json()["error"] == "validation_error"
        assert _count(DbPatient) == 0

    def test_overlong_national_id_is_a_validation_error(self, client, secretary_headers):
        response = _register(client, secretary_headers, national_id="9" * 300)

        assert response.status_code == 400
        assert response.get_json()["error"] == "validation_error"
        assert _count(DbPatient) == 0

    def test_non_object_body_rejected(self, client, secretary_headers):
        response = client.post("/api/patients", json=[1, 2], headers=secretary_headers)

        assert response.status_code == 400

    def test_doctor_may_not_register(self, client, doctor_headers):
        response = _register(client, doctor_headers)

        assert response.status_code == 403
        assert response.get_json()["error"] == "permission_denied"
        assert _count(DbPatient) == 0

    def test_doctor_reads_records_with_search(self, client, secretary_headers, doctor_headers):
        _register(client, secretary_headers)
        _register(client, secretary_headers, national_id="ZZ9", full_name="Omar Idrissi")

        everyone = client.get("/api/patients", headers=doctor_headers).get_json()["data"]
        found = client.get("/api/patients?q=omar", headers=doctor_headers).get_json()["data"]

        assert [p["full_name"] for p in everyone] == ["Omar Idrissi", "Sara Benali"]
        assert [p["national_id"] for p in found] == ["ZZ9"]
        assert everyone[0]["visits"] == []

    def test_amend_patient_keeps_national_id(self, client, secretary_headers):
        patient_id = _register(client, secretary_headers).get_json()["data"]["id"]

        ok = client.patch(
            f"/api/patients/{patient_id}",
            json={"phone": "0611"},
            headers=secretary_headers,
        )
        refused = client.patch(
            f"/api/patients/{patient_id}",
            json={"national_id": "NEW"},
            headers=secretary_headers,
        )

        assert ok.status_code == 200
        assert ok.get_json()["data"]["phone"] == "0611"
        assert refused.status_code == 400

    def test_unknown_patient_is_404(self, client, doctor_headers):
        response = client.get("/api/patients/999", headers=doctor_headers)

        assert response.status_code == 404
        assert response.get_json()["error"] == "not_found"


@pytest.mark.integration
@pytest.mark.api
@pytest.mark.visits
class TestVisitEndpoints:
    @pytest.fixture
    def patient_id(self, client, secretary_headers):
        return _register(client, secretary_headers).get_json()["data"]["id"]

    def test_doctor_records_visit(self, client, doctor_headers, patient_id):
        response = client.post(
            "/api/visits",
            json={
                "patient_id": patient_id,
                "chief_complaint": "fever",
                "prescriptions": [
                    {"medication_name": "Amoxicillin", "dosage": "500mg"},
                    {"medication_name": "", "dosage": ""},
                ],
            },
            headers=doctor_headers,
        )

        data = response.get_json()["data"]
        assert response.status_code == 201
        assert data["visit"]["doctor_id"] == "demo-doctor"
        assert data["visit"]["status"] == "completed"
        assert len(data["prescriptions"]) == 1
        assert _count(DbPrescription) == 1

    def test_recorded_visit_appears_on_patient_record(
        self, client, doctor_headers, patient_id
    ):
        client.post(
            "/api/visits",
            json={"patient_id": patient_id, "chief_complaint": "cough"},
            headers=doctor_headers,
        )

        record = client.get(
            f"/api/patients/{patient_id}/visits", headers=doctor_headers
        ).get_json()["data"]
        listing = client.get("/api/patients", headers=doctor_headers).get_json()["data"]

        assert [v["chief_complaint"] for v in record] == ["cough"]
        assert [v["chief_complaint"] for v in listing[0]["visits"]] == ["cough"]

    def test_empty_complaint_writes_nothing(self, client, doctor_headers, patient_id):
        response = client.post(
            "/api/visits",
            json={
                "patient_id": patient_id,
                "chief_complaint": "",
                "prescriptions": [{"medication_name": "Amoxicillin", "dosage": "500mg"}],
            },
            headers=doctor_headers,
        )

        assert response.status_code == 400
        assert _count(DbVisit) == 0
        assert _count(DbPrescription) == 0

    def test_secretary_may_not_record_visits(
        self, client, secretary_headers, patient_id
    ):
        response = client.post(
            "/api/visits",
            json={"patient_id": patient_id, "chief_complaint": "fever"},
            headers=secretary_headers,
        )

        assert response.status_code == 403
        assert _count(DbVisit) == 0


@pytest.mark.integration
@pytest.mark.api
@pytest.mark.appointment
class TestAppointmentAndDirectoryEndpoints:
    @pytest.fixture
    def patient_id(self, client, secretary_headers):
        return _register(client, secretary_headers).get_json()["data"]["id"]

    def _book(self, client, headers, patient_id, **overrides):
        payload = {
            "patient_id": patient_id,
            "doctor_id": "demo-doctor",
            "appointment_date": "2024-05-01",
            "appointment_time": "09:30",
        }
        payload.update(overrides)
        return client.post("/api/appointments", json=payload, headers=headers)

    def test_secretary_books_appointment(self, client, secretary_headers, patient_id):
        response = self._book(client, secretary_headers, patient_id)

        data = response.get_json()["data"]
        assert response.status_code == 201
        assert data["appointment_date"] == "2024-05-01T09:30:00"
        assert data["created_by"] == "demo-secretary"

    def test_booking_for_non_doctor_rejected(self, client, secretary_headers, patient_id):
        response = self._book(
            client, secretary_headers, patient_id, doctor_id="demo-secretary"
        )

        assert response.status_code == 400

    def test_doctor_may_not_book(self, client, doctor_headers, patient_id):
        response = self._book(client, doctor_headers, patient_id)

        assert response.status_code == 403

    def test_doctor_schedule(self, client, secretary_headers, patient_id):
        self._book(client, secretary_headers, patient_id)

        schedule = client.get(
            "/api/appointments/doctor/demo-doctor", headers=secretary_headers
        ).get_json()["data"]

        assert len(schedule) == 1
        assert schedule[0]["patient_id"] == patient_id

    def test_doctor_directory(self, client, secretary_headers):
        for path in ("/api/directory/doctors", "/api/appointments/doctors"):
            data = client.get(path, headers=secretary_headers).get_json()["data"]

            assert data == [{"id": "demo-doctor", "full_name": "Demo Doctor"}]

    def test_patient_directories(self, client, secretary_headers, doctor_headers):
        _register(client, secretary_headers)
        _register(
            client,
            secretary_headers,
            national_id="ZZ9",
            full_name="Omar Idrissi",
            phone="0655",
        )

        options = client.get(
            "/api/directory/patients", headers=doctor_headers
        ).get_json()["data"]
        registered = client.get(
            "/api/directory/patients/registered?q=0655", headers=secretary_headers
        ).get_json()["data"]
        refused = client.get(
            "/api/directory/patients/registered", headers=doctor_headers
        )

        assert [o["full_name"] for o in options] == ["Omar Idrissi", "Sara Benali"]
        assert set(options[0]) == {"id", "full_name", "national_id"}
        assert [r["national_id"] for r in registered] == ["ZZ9"]
        assert refused.status_code == 403


@pytest.mark.integration
@pytest.mark.api
class TestHealth:
    def test_health_check(self, client):
        response = client.get("/health")

        assert response.status_code == 200
        assert response.get_json()["data"]["database"] == "up"
