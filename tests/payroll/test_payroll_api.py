from __future__ import annotations

from dataclasses import dataclass
from typing import Any

import pytest

from src.hr_payroll.hr_payroll.main import create_app


@dataclass
class FakeContainer:
    payroll_service: Any
    shift_registration_service: Any = None


@pytest.fixture
def client(payroll_env, monkeypatch):
    monkeypatch.setenv("APP_ENV", "testing")
    app = create_app(FakeContainer(payroll_service=payroll_env.service()))
    return app.test_client()


def test_calculate_returns_breakdown(client):
    resp = client.post("/api/payroll/e1/2025-03/calculate", json={"bonus": 1000000})

    assert resp.status_code == 200
    body = resp.get_json()
    assert body["success"] is True
    assert body["data"]["gross_salary"] == 27_000_000
    assert body["data"]["bonus"] == 1_000_000
    assert body["data"]["state"] == "draft"


def test_calculate_rejects_non_numeric_adjustment(client):
    resp = client.post("/api/payroll/e1/2025-03/calculate", json={"penalty": "nhiều"})

    assert resp.status_code == 400
    assert resp.get_json()["error"]["code"] == "VALIDATION_ERROR"


def test_calculate_unknown_employee_is_config_missing(client):
    resp = client.post("/api/payroll/e2/2025-03/calculate", json={})

    assert resp.status_code == 404
    assert resp.get_json()["error"]["code"] == "CONFIG_MISSING"


def test_calculate_bad_month(client):
    resp = client.post("/api/payroll/e1/03-2025/calculate", json={})

    assert resp.status_code == 400


def test_finalize_flow(client):
    assert client.post("/api/payroll/e1/2025-03/calculate", json={"save": True}).status_code == 200
    assert client.get("/api/payroll/e1/2025-03").get_json()["data"]["is_finalized"] is False

    first = client.post("/api/payroll/e1/2025-03/finalize", json={"finalized_by": "hr01"})
    assert first.status_code == 200
    assert first.get_json()["data"]["state"] == "finalized"

    second = client.post("/api/payroll/e1/2025-03/finalize", json={})
    assert second.status_code == 409
    assert second.get_json()["error"]["code"] == "ALREADY_FINALIZED"

    recalc = client.post("/api/payroll/e1/2025-03/calculate", json={})
    assert recalc.status_code == 409

    unlocked = client.post("/api/payroll/e1/2025-03/unlock")
    assert unlocked.get_json()["data"]["is_finalized"] is False


def test_get_missing_payslip(client):
    resp = client.get("/api/payroll/e1/2025-03")

    assert resp.status_code == 404
    assert resp.get_json()["success"] is False


def test_batch(client):
    resp = client.post("/api/payroll/batch", json={"month": "2025-03", "employee_ids": ["e1", "e2", "e3"]})

    assert resp.status_code == 200
    body = resp.get_json()
    assert [c["employee_id"] for c in body["data"]["calculations"]] == ["e1", "e3"]
    assert body["data"]["errors"] == [
        {"employee_id": "e2", "kind": "CONFIG_MISSING", "message": "Nhân viên e2 chưa có cấu hình lương"}
    ]
    assert body["meta"] == {"calculated": 2, "failed": 1}


def test_batch_requires_employee_ids(client):
    assert client.post("/api/payroll/batch", json={"month": "2025-03"}).status_code == 400


@pytest.mark.parametrize("payload", [{"bonus": "NaN"}, {"insurance_override": "inf"}, {"penalty": "1e400"}])
def test_calculate_rejects_non_finite_adjustment(client, payload):
    resp = client.post("/api/payroll/e1/2025-03/calculate", json=payload)

    assert resp.status_code == 400
    assert resp.get_json()["error"]["code"] == "VALIDATION_ERROR"


def test_calculate_with_save_reports_stored_state(client):
    resp = client.post("/api/payroll/e1/2025-03/calculate", json={"save": True})

    assert resp.get_json()["data"]["state"] == "calculated"


def test_calculate_kpi_percent(client):
    resp = client.post("/api/payroll/e1/2025-03/calculate", json={"kpi_percent": 50})

    assert resp.status_code == 200
    assert resp.get_json()["data"]["kpi_bonus"] == 0


def test_batch_save_marks_calculated(client):
    resp = client.post("/api/payroll/batch", json={"month": "2025-03", "employee_ids": ["e1"], "save": True})

    assert [c["state"] for c in resp.get_json()["data"]["calculations"]] == ["calculated"]
