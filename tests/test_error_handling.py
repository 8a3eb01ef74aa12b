"""Test error handling functionality.

Verifies that custom exceptions are properly raised and handled,
returning appropriate error responses.
"""
import pytest
from fastapi.testclient import TestClient

from core.exceptions import (
    GenerationError,
    MalformedOutputError,
    NotFoundError,
    PatientNotFoundError,
    ValidationError,
)
from database import seed_catalog
from database.deps import get_db_read, get_db_write
from main import app


@pytest.fixture
def client(session_factory):
    """Test client bound to the in-memory database; lifespan is not run."""
    def _session():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    seed = session_factory()
    seed_catalog(seed)
    seed.close()

    app.dependency_overrides[get_db_read] = _session
    app.dependency_overrides[get_db_write] = _session
    yield TestClient(app)
    app.dependency_overrides.clear()


PATIENT = {
    "name": "Ravi Kumar",
    "age": 41,
    "gender": "male",
    "height_cm": 160,
    "weight_kg": 60,
    "dosha": "vata",
    "allergies": ["Peanuts"],
}


def test_unknown_patient_returns_404_envelope(client):
    response = client.get("/api/patients/missing")
    assert response.status_code == 404
    error = response.json()["error"]
    assert error["status_code"] == 404
    assert "Patient" in error["message"]
    assert error["details"]["id"] == "missing"


def test_plan_for_unknown_patient_is_404(client):
    response = client.post("/api/diet-plans/missing", json={"duration_days": 1})
    assert response.status_code == 404


def test_chart_without_patient_id_returns_400(client):
    response = client.post("/api/diet-charts", json={"meals": [{"name": "Lunch", "foods": []}]})
    assert response.status_code == 400
    assert response.json()["error"]["message"] == "patient_id is required"


def test_invalid_body_returns_422(client):
    response = client.post("/api/patients", json={"name": "No Age"})
    assert response.status_code == 422
    assert response.json()["error"]["details"]["validation_errors"]


def test_patient_and_plan_through_api(client):
    created = client.post("/api/patients", json=PATIENT)
    assert created.status_code == 201
    body = created.json()
    assert body["bmr"] == 1400
    assert body["allergies"] == ["peanuts"]

    plan = client.post(f"/api/diet-plans/{body['id']}", json={"duration_days": 2})
    assert plan.status_code == 200
    assert plan.json()["source"] == "fallback"
    assert len(plan.json()["days"]) == 2

    chart = client.post(f"/api/diet-charts/from-plan/{body['id']}", json={"day_index": 1})
    assert chart.status_code == 201
    assert client.get(f"/api/diet-charts/{chart.json()['id']}").status_code == 200
    assert len(client.get(f"/api/diet-charts/patient/{body['id']}").json()) == 1


def test_update_unknown_chart_is_404(client):
    response = client.put("/api/diet-charts/missing", json={"meals": []})
    assert response.status_code == 404


def test_health(client):
    assert client.get("/health").json()["status"] == "healthy"


def test_exception_classes_have_proper_attributes():
    """Test that custom exception classes have expected attributes."""
    exc = NotFoundError("DietChart", "abc")
    assert exc.status_code == 404
    assert "DietChart" in exc.message
    assert "abc" in exc.message

    exc = PatientNotFoundError("p-1")
    assert isinstance(exc, NotFoundError)
    assert exc.details == {"resource": "Patient", "id": "p-1"}

    exc = ValidationError("Invalid input", field="meals")
    assert exc.status_code == 400
    assert exc.message == "Invalid input"
    assert exc.details == {"field": "meals"}

    cause = TimeoutError("slow")
    exc = GenerationError("failed", cause=cause)
    assert exc.status_code == 502
    assert exc.cause is cause
    assert exc.details == {"cause": "TimeoutError"}

    exc = MalformedOutputError("bad json", raw="{oops")
    assert exc.raw == "{oops"


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
