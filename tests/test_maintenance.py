"""Maintenance schedule: one active task per staff member."""
from decimal import Decimal

import pytest

from parkhub.models import Ride, StaffRole

ACTIVE_TASK_DETAIL = "This staff member already has an active (Pending or Ongoing) maintenance task."


@pytest.fixture
def maintenance_headers(headers_for):
    return headers_for(StaffRole.MAINTENANCE_MANAGER)


@pytest.fixture
def ride(add_rows, make_staff):
    operator = make_staff(StaffRole.RIDE_STAFF)
    return add_rows(Ride(name="Ferris Wheel", price=Decimal("4.00"), location="Center", staff_id=operator.staff_id))


@pytest.fixture
def mechanic(make_staff):
    return make_staff(StaffRole.MAINTENANCE_STAFF, name="Mick")


def _task(ride, staff, **extra):
    body = {
        "ride_id": ride.ride_id,
        "staff_id": staff.staff_id,
        "description": "Check brakes",
        "start_date": "2025-04-10T08:00:00",
        "end_date": "2025-04-10T12:00:00",
    }
    body.update(extra)
    return body


def test_schedule_task(client, ride, mechanic, maintenance_headers):
    r = client.post("/maintenance", json=_task(ride, mechanic), headers=maintenance_headers)
    assert r.status_code == 201, r.text
    assert r.json()["status"] == "Pending"

    tasks = client.get(f"/maintenance/staff/{mechanic.staff_id}", headers=maintenance_headers).json()
    assert [t["description"] for t in tasks] == ["Check brakes"]


def test_one_active_task_per_staff(client, ride, mechanic, maintenance_headers):
    """While a Pending or Ongoing task exists, no further task may be scheduled for that staff member."""
    r = client.post("/maintenance", json=_task(ride, mechanic, status="Completed"), headers=maintenance_headers)
    assert r.status_code == 201
    done = r.json()
    first = client.post("/maintenance", json=_task(ride, mechanic), headers=maintenance_headers).json()

    for status in ("Ongoing", "Completed", "Cancelled"):
        r = client.post("/maintenance", json=_task(ride, mechanic, status=status), headers=maintenance_headers)
        assert r.status_code == 409, status
        assert r.json()["detail"] == ACTIVE_TASK_DETAIL

    # reactivating the finished task collides with the pending one
    r = client.patch(f"/maintenance/{done['maintenance_task_id']}", json={"status": "Ongoing"}, headers=maintenance_headers)
    assert r.status_code == 409

    # the active task itself may move to Ongoing
    url = f"/maintenance/{first['maintenance_task_id']}"
    r = client.patch(url, json={"status": "Ongoing"}, headers=maintenance_headers)
    assert r.status_code == 200
    assert r.json()["status"] == "Ongoing"

    client.patch(url, json={"status": "Completed"}, headers=maintenance_headers)
    r = client.post("/maintenance", json=_task(ride, mechanic), headers=maintenance_headers)
    assert r.status_code == 201


def test_dates_are_validated(client, ride, mechanic, maintenance_headers):
    body = _task(ride, mechanic, end_date="2025-04-09T12:00:00")
    assert client.post("/maintenance", json=body, headers=maintenance_headers).status_code == 422

    task = client.post("/maintenance", json=_task(ride, mechanic), headers=maintenance_headers).json()
    r = client.patch(
        f"/maintenance/{task['maintenance_task_id']}",
        json={"end_date": "2025-04-01T00:00:00"},
        headers=maintenance_headers,
    )
    assert r.status_code == 400


def test_references_must_exist(client, ride, mechanic, maintenance_headers):
    r = client.post("/maintenance", json=_task(ride, mechanic, ride_id="gone"), headers=maintenance_headers)
    assert r.status_code == 404
    assert r.json()["detail"] == "Ride not found"
    r = client.post("/maintenance", json=_task(ride, mechanic, staff_id="gone"), headers=maintenance_headers)
    assert r.status_code == 404


def test_list_and_delete(client, ride, mechanic, make_staff, maintenance_headers):
    other = make_staff(StaffRole.MAINTENANCE_STAFF)
    client.post(
        "/maintenance",
        json=_task(ride, other, start_date="2025-04-11T08:00:00", end_date="2025-04-11T09:00:00"),
        headers=maintenance_headers,
    )
    task = client.post("/maintenance", json=_task(ride, mechanic), headers=maintenance_headers).json()
    listed = client.get("/maintenance", headers=maintenance_headers).json()
    assert [t["staff_id"] for t in listed] == [mechanic.staff_id, other.staff_id]

    url = f"/maintenance/{task['maintenance_task_id']}"
    assert client.delete(url, headers=maintenance_headers).status_code == 204
    r = client.delete(url, headers=maintenance_headers)
    assert r.status_code == 404
    assert r.json()["detail"] == "Maintenance schedule not found"


def test_requires_maintenance_role(client, headers_for):
    assert client.get("/maintenance", headers=headers_for(StaffRole.CHEF)).status_code == 403
    assert client.get("/maintenance", headers=headers_for(StaffRole.RIDE_MANAGER)).status_code == 200
