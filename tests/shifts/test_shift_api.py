from __future__ import annotations

from dataclasses import dataclass
from typing import Any

import pytest

from src.hr_payroll.hr_payroll.main import create_app
from src.hr_payroll.hr_payroll.shifts.model import ShiftTime
from src.hr_payroll.hr_payroll.shifts.service import ShiftRegistrationService


class FakeShiftCatalog:
    def __init__(self, shifts):
        self._shifts = {s.id: s for s in shifts}

    def list_for_branch(self, branch_id):
        return list(self._shifts.values())

    def get_by_ids(self, shift_ids):
        return [self._shifts[str(i)] for i in shift_ids if str(i) in self._shifts]


@dataclass
class FakeContainer:
    shift_registration_service: Any
    payroll_service: Any = None


@pytest.fixture
def client(monkeypatch):
    monkeypatch.setenv("APP_ENV", "testing")
    catalog = FakeShiftCatalog(
        [
            ShiftTime("08:00", "12:00", name="Ca sáng", id="1"),
            ShiftTime("11:00", "15:00", name="Ca trưa", id="2"),
            ShiftTime("22:00", "06:00", name="Ca đêm", id="3"),
        ]
    )
    app = create_app(FakeContainer(shift_registration_service=ShiftRegistrationService(catalog)))
    return app.test_client()


def test_overlap_endpoint(client):
    resp = client.post(
        "/api/shifts/overlap",
        json={
            "shift1": {"start_time": "22:00", "end_time": "06:00"},
            "shift2": {"start_time": "05:00", "end_time": "09:00"},
        },
    )

    assert resp.status_code == 200
    assert resp.get_json()["data"] == {"overlaps": True, "range": {"start": "05:00", "end": "06:00"}}


def test_overlap_endpoint_invalid_time(client):
    resp = client.post(
        "/api/shifts/overlap",
        json={"shift1": {"start_time": "8h", "end_time": "12:00"}, "shift2": {"start_time": "09:00", "end_time": "10:00"}},
    )

    assert resp.status_code == 400
    assert resp.get_json()["error"]["code"] == "INVALID_TIME_FORMAT"


def test_validate_endpoint_groups_by_date(client):
    resp = client.post(
        "/api/shifts/validate",
        json={
            "entries": [
                {"date": "2025-03-03", "start_time": "08:00", "end_time": "12:00", "name": "Ca sáng"},
                {"date": "2025-03-03", "start_time": "11:00", "end_time": "15:00", "name": "Ca trưa"},
                {"date": "2025-03-04", "start_time": "11:00", "end_time": "15:00", "name": "Ca trưa"},
            ]
        },
    )

    data = resp.get_json()["data"]
    assert data["is_valid"] is False
    assert len(data["errors"]) == 1
    assert data["errors"][0]["date"] == "2025-03-03"
    assert data["errors"][0]["message"] == 'Ca "Ca sáng" trùng giờ với "Ca trưa" (11:00 - 12:00)'


def test_registration_endpoint(client):
    ok_resp = client.post(
        "/api/shifts/registrations/validate",
        json={"branch_id": "b1", "registrations": [{"date": "2025-03-03", "shift_id": "1"}, {"date": "2025-03-04", "shift_id": "2"}]},
    )
    bad_resp = client.post(
        "/api/shifts/registrations/validate",
        json={"branch_id": "b1", "registrations": [{"date": "2025-03-03", "shift_id": "1"}, {"date": "2025-03-03", "shift_id": "2"}]},
    )

    assert ok_resp.status_code == 200
    assert bad_resp.status_code == 400
    assert "trong ngày 2025-03-03" in bad_resp.get_json()["error"]["message"]


def test_registration_endpoint_bad_date(client):
    resp = client.post(
        "/api/shifts/registrations/validate",
        json={"branch_id": "b1", "registrations": [{"date": "03/03/2025", "shift_id": "1"}]},
    )

    assert resp.status_code == 400


@pytest.mark.parametrize(
    "url,payload",
    [
        ("/api/shifts/validate", {"entries": ["08:00-12:00"]}),
        ("/api/shifts/validate", {"entries": [{"date": "2025-03-03", "start_time": "08:00", "end_time": "12:00"}, 5]}),
        ("/api/shifts/registrations/validate", {"branch_id": "b1", "registrations": ["1"]}),
    ],
)
def test_non_object_items_are_rejected(client, url, payload):
    resp = client.post(url, json=payload)

    assert resp.status_code == 400
    assert resp.get_json()["success"] is False
