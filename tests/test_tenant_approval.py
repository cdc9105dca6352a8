from decimal import Decimal

import pytest

from models import Room, Tenant, TenantStatus
from services import tenant_service
from services.errors import (
    ConflictError,
    RoomFullError,
    RoomNotFoundError,
    TenantNotFoundError,
    ValidationError,
)


def assert_room_consistent(room):
    assert room.available_slots == room.capacity - room.current_occupancy
    assert room.available_slots >= 0
    assert (room.status == "occupied") == (room.available_slots <= 0)


def test_approve_initializes_balance_and_occupancy(db, make_room, make_tenant):
    room = make_room(rate=5000, capacity=2)
    tenant = make_tenant(room=room)

    summary = tenant_service.approve_tenant(db, tenant.id)
    db.commit()

    assert tenant.status == "approved"
    assert tenant.balance == Decimal("5000")
    assert room.current_occupancy == 1
    assert room.available_slots == 1
    assert room.status == "available"
    assert summary["current_occupancy"] == 1
    assert_room_consistent(room)


def test_approving_last_slot_marks_room_occupied(db, make_room, make_tenant):
    room = make_room(capacity=2)
    make_tenant(room=room, status="approved")
    tenant = make_tenant(room=room)

    tenant_service.approve_tenant(db, tenant.id)
    db.commit()

    assert room.current_occupancy == 2
    assert room.available_slots == 0
    assert room.status == "occupied"
    assert_room_consistent(room)


def test_approval_discards_previous_balance(db, make_room, make_tenant):
    room = make_room(rate=4500)
    tenant = make_tenant(room=room, balance=123)

    tenant_service.approve_tenant(db, tenant.id)

    assert tenant.balance == Decimal("4500")


def test_full_room_refuses_third_tenant_without_changes(db, make_room, make_tenant):
    """capacity=2 with two approved tenants: a third approval fails"""
    full = make_room(room_number="A1", capacity=2)
    empty = make_room(room_number="B1", capacity=1)
    make_tenant(room=full, status="approved")
    make_tenant(room=full, status="approved")
    third = make_tenant(room=full, balance=10)
    db.refresh(full)
    before = (full.current_occupancy, full.available_slots, full.status)

    with pytest.raises(RoomFullError) as exc_info:
        tenant_service.approve_tenant(db, third.id)
    db.rollback()

    db.refresh(third)
    db.refresh(full)
    assert third.status == "pending"
    assert third.balance == Decimal("10")
    assert (full.current_occupancy, full.available_slots, full.status) == before

    suggestions = exc_info.value.extra["availableRooms"]
    assert [r["room_number"] for r in suggestions] == ["B1"]
    assert suggestions[0]["id"] == empty.id


def test_room_full_of_pending_requests_is_still_suggested(db, make_room, make_tenant):
    full = make_room(room_number="A1", capacity=1)
    crowded = make_room(room_number="C1", capacity=1)
    make_tenant(room=full, status="approved")
    make_tenant(room=crowded)
    make_tenant(room=crowded)
    blocked = make_tenant(room=full)

    with pytest.raises(RoomFullError) as exc_info:
        tenant_service.approve_tenant(db, blocked.id)

    assert [r["room_number"] for r in exc_info.value.extra["availableRooms"]] == ["C1"]


def test_occupancy_is_recounted_not_trusted(db, make_room, make_tenant):
    """A stale stored counter does not block approval"""
    room = make_room(capacity=1)
    room.current_occupancy = 1
    room.available_slots = 0
    room.status = "occupied"
    db.commit()
    tenant = make_tenant(room=room)

    tenant_service.approve_tenant(db, tenant.id)

    assert room.current_occupancy == 1
    assert tenant.status == "approved"


def test_approve_missing_tenant(db):
    with pytest.raises(TenantNotFoundError):
        tenant_service.approve_tenant(db, 999)


def test_approve_tenant_without_room(db, make_tenant):
    tenant = make_tenant(room=None)
    with pytest.raises(ValidationError):
        tenant_service.approve_tenant(db, tenant.id)


def test_approve_tenant_with_missing_room(db, make_tenant):
    tenant = make_tenant(room=None)
    tenant.room_id = 999
    db.commit()
    with pytest.raises(RoomNotFoundError):
        tenant_service.approve_tenant(db, tenant.id)


def test_approving_twice_is_a_conflict(db, make_room, make_tenant):
    room = make_room(capacity=3)
    tenant = make_tenant(room=room)
    tenant_service.approve_tenant(db, tenant.id)
    db.commit()

    with pytest.raises(ConflictError):
        tenant_service.approve_tenant(db, tenant.id)
    assert room.current_occupancy == 1


def test_gender_policy_blocks_mixed_rooms(db, make_room, make_tenant):
    room = make_room(capacity=3)
    make_tenant(room=room, status="approved", gender="male")
    tenant = make_tenant(room=room, gender="Female")

    with pytest.raises(ConflictError):
        tenant_service.approve_tenant(db, tenant.id, enforce_gender=True)


def test_gender_policy_allows_same_gender(db, make_room, make_tenant):
    room = make_room(capacity=3)
    make_tenant(room=room, status="approved", gender="female")
    tenant = make_tenant(room=room, gender="Female")

    tenant_service.approve_tenant(db, tenant.id, enforce_gender=True)
    assert tenant.status == "approved"


def test_gender_policy_off_by_default(db, make_room, make_tenant):
    room = make_room(capacity=3)
    make_tenant(room=room, status="approved", gender="male")
    tenant = make_tenant(room=room, gender="female")

    tenant_service.approve_tenant(db, tenant.id)
    assert tenant.status == "approved"


def test_reject_pending_tenant(db, make_room, make_tenant):
    tenant = make_tenant(room=make_room())
    tenant_service.reject_tenant(db, tenant.id)
    assert tenant.status == TenantStatus.REJECTED.value


def test_reject_approved_tenant_is_refused(db, make_room, make_tenant):
    tenant = make_tenant(room=make_room(), status="approved")
    with pytest.raises(ConflictError):
        tenant_service.reject_tenant(db, tenant.id)


# ---------------------------------------------------------------------------
# HTTP surface
# ---------------------------------------------------------------------------

def test_approve_endpoint(client, db, admin_headers, make_room, make_tenant):
    room = make_room(room_number="201", rate=5000, capacity=2)
    tenant = make_tenant(room=room)

    res = client.patch(f"/api/tenants/approve/{tenant.id}", headers=admin_headers)

    assert res.status_code == 200
    body = res.json()
    assert body["success"] is True
    assert body["room"] == {
        "room_number": "201",
        "type": "Shared",
        "capacity": 2,
        "current_occupancy": 1,
        "available_slots": 1,
        "status": "available",
    }
    stored = db.get(Tenant, tenant.id)
    db.refresh(stored)
    assert stored.status == "approved"
    assert stored.balance == Decimal("5000")


def test_approve_endpoint_full_room(client, db, admin_headers, make_room, make_tenant):
    room = make_room(room_number="301", capacity=1)
    spare = make_room(room_number="302", capacity=1)
    make_tenant(room=room, status="approved")
    waiting = make_tenant(room=room)

    res = client.patch(f"/api/tenants/approve/{waiting.id}", headers=admin_headers)

    assert res.status_code == 400
    body = res.json()
    assert body["success"] is False
    assert body["message"] == "Room is already full. Please assign another room."
    assert [r["id"] for r in body["availableRooms"]] == [spare.id]

    db.refresh(waiting)
    assert waiting.status == "pending"


def test_approve_endpoint_not_found(client, admin_headers):
    res = client.patch("/api/tenants/approve/12345", headers=admin_headers)
    assert res.status_code == 404
    assert res.json()["message"] == "Tenant not found"


def test_pending_list(client, admin_headers, make_room, make_tenant):
    room = make_room(room_number="401")
    pending = make_tenant(room=room, full_name="Waiting Person")
    make_tenant(room=room, status="approved")

    res = client.get("/api/tenants/pending", headers=admin_headers)

    assert res.status_code == 200
    rows = res.json()
    assert [r["id"] for r in rows] == [pending.id]
    assert rows[0]["room_number"] == "401"


def test_reject_endpoint(client, db, admin_headers, make_room, make_tenant):
    tenant = make_tenant(room=make_room())
    res = client.patch(f"/api/tenants/reject/{tenant.id}", headers=admin_headers)
    assert res.status_code == 200
    db.refresh(tenant)
    assert tenant.status == "rejected"
