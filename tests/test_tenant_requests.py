from datetime import datetime, timedelta
from decimal import Decimal

from config import settings
from models import Tenant, TenantStatus
from services import tenant_service

ROOM_REQUEST = {
    "full_name": "Maria Santos",
    "email": "maria@example.com",
    "phone": "09171234567",
    "gender": "female",
    "address": "Cebu City",
    "emergency_contact": "Jose Santos 09181234567",
}


def test_request_room_creates_then_updates(client, db, tenant_headers, client_user, make_room):
    first = make_room(rate=4000)
    second = make_room(rate=6500)

    res = client.post("/api/tenants/request-room", headers=tenant_headers, json={**ROOM_REQUEST, "room_id": first.id})
    assert res.status_code == 200
    assert res.json()["message"] == "Room request submitted"

    res = client.post("/api/tenants/request-room", headers=tenant_headers, json={**ROOM_REQUEST, "room_id": second.id})
    assert res.json()["message"] == "Room request updated"

    tenants = db.query(Tenant).filter(Tenant.user_id == client_user.id).all()
    assert len(tenants) == 1
    assert tenants[0].room_id == second.id
    assert tenants[0].status == TenantStatus.PENDING.value
    assert tenants[0].balance == Decimal("6500")


def test_request_room_unknown_room(client, tenant_headers):
    res = client.post("/api/tenants/request-room", headers=tenant_headers, json={**ROOM_REQUEST, "room_id": 404})
    assert res.status_code == 404


def test_request_room_requires_name(client, tenant_headers, make_room):
    room = make_room()
    res = client.post("/api/tenants/request-room", headers=tenant_headers, json={"room_id": room.id})
    assert res.status_code == 400


def test_rerequest_frees_approved_room(db, client_user, make_room, make_tenant):
    old_room = make_room(capacity=1)
    new_room = make_room()
    make_tenant(room=old_room, status=TenantStatus.APPROVED.value, balance=5000, user=client_user)
    old_room.apply_occupancy(1)
    db.commit()

    tenant, created = tenant_service.request_room(
        db, client_user.id, "Maria Santos", None, None, None, None, None, new_room.id,
    )
    db.commit()

    assert created is False
    assert tenant.status == TenantStatus.PENDING.value
    db.refresh(old_room)
    assert old_room.current_occupancy == 0
    assert old_room.status == "available"


def test_my_request_and_dashboard(client, tenant_headers, client_user, make_room, make_tenant):
    assert client.get("/api/tenants/my-request", headers=tenant_headers).json() == {"message": "No request found"}
    placeholder = client.get("/api/tenants/dashboard", headers=tenant_headers).json()
    assert placeholder["tenant"]["status"] == "No Request"

    room = make_room(room_number="2B", rate=4500)
    make_tenant(room=room, user=client_user, full_name="Maria Santos")

    request = client.get("/api/tenants/my-request", headers=tenant_headers).json()
    assert request["room_number"] == "2B"
    assert request["status"] == "pending"

    dashboard = client.get("/api/tenants/dashboard", headers=tenant_headers).json()["tenant"]
    assert dashboard["tenant_name"] == "Maria Santos"
    assert dashboard["rate"] == 4500.0


def test_summary_falls_back_to_room_rate(client, tenant_headers, client_user, make_room, make_tenant):
    assert client.get("/api/tenants/summary", headers=tenant_headers).json()["success"] is False

    room = make_room(rate=3200)
    make_tenant(room=room, status=TenantStatus.APPROVED.value, balance=0, user=client_user)

    res = client.get("/api/tenants/summary", headers=tenant_headers).json()
    assert res["success"] is True
    assert res["tenant"]["balance"] == 3200.0
    assert res["tenant"]["room_rate"] == 3200.0


def test_tenant_endpoints_reject_admin(client, admin_headers):
    assert client.get("/api/tenants/my-request", headers=admin_headers).status_code == 403


def test_list_tenants_search_and_month(client, admin_headers, make_room, make_tenant):
    room = make_room()
    make_tenant(room=room, full_name="Ana Reyes", email="ana@example.com")
    make_tenant(room=room, full_name="Ben Cruz", email="ben@example.com")

    everyone = client.get("/api/tenants/all", headers=admin_headers).json()
    assert {t["full_name"] for t in everyone} == {"Ana Reyes", "Ben Cruz"}

    found = client.get("/api/tenants/all", headers=admin_headers, params={"search": "reyes"}).json()
    assert [t["full_name"] for t in found] == ["Ana Reyes"]

    this_month = client.get("/api/tenants/all", headers=admin_headers, params={"month": datetime.now().month}).json()
    assert len(this_month) == 2

    assert client.get("/api/tenants/all", headers=admin_headers, params={"month": 13}).status_code == 400


def test_list_pending_and_basic(client, admin_headers, make_room, make_tenant):
    room = make_room()
    make_tenant(room=room, full_name="Ana Reyes")
    make_tenant(room=room, full_name="Ben Cruz", status=TenantStatus.REJECTED.value)

    pending = client.get("/api/tenants/pending", headers=admin_headers).json()
    assert [t["full_name"] for t in pending] == ["Ana Reyes"]

    basic = client.get("/api/tenants/list-basic", headers=admin_headers).json()
    assert [t["full_name"] for t in basic] == ["Ana Reyes", "Ben Cruz"]


def test_upcoming_dues(db, make_room, make_tenant):
    room = make_room(room_number="3C")
    recent = make_tenant(room=room, status=TenantStatus.APPROVED.value)
    make_tenant(room=room, status=TenantStatus.PENDING.value)
    stale = make_tenant(room=room, status=TenantStatus.APPROVED.value)
    stale.created_at = datetime.now() - timedelta(days=45)
    db.commit()

    dues = tenant_service.upcoming_dues(db)

    assert [d["id"] for d in dues] == [recent.id]
    assert dues[0]["room_number"] == "3C"
    assert dues[0]["due_date"] - dues[0]["created_at"] == timedelta(days=30)


def test_notify_email_without_credentials(client, admin_headers, monkeypatch):
    monkeypatch.setattr(settings, "BREVO_API_KEY", None)
    res = client.post("/api/tenants/notify-email", headers=admin_headers, json={
        "to": "maria@example.com", "subject": "Rent", "message": "Your rent is due.",
    })
    assert res.status_code == 500
    assert res.json()["success"] is False


def test_notify_email_missing_fields(client, admin_headers):
    res = client.post("/api/tenants/notify-email", headers=admin_headers, json={"to": "maria@example.com"})
    assert res.status_code == 400


def test_notify_email_sends(client, admin_headers, monkeypatch):
    sent = {}

    class FakeResponse:
        status_code = 201
        content = b'{"messageId": "abc"}'
        text = content.decode()

        def json(self):
            return {"messageId": "abc"}

    def fake_post(url, headers, json, timeout):
        sent.update(url=url, payload=json, api_key=headers["api-key"])
        return FakeResponse()

    monkeypatch.setattr(settings, "BREVO_API_KEY", "test-key")
    monkeypatch.setattr("utils.email.requests.post", fake_post)

    res = client.post("/api/tenants/notify-email", headers=admin_headers, json={
        "to": "maria@example.com", "subject": "Rent", "message": "Your rent is due.",
    })

    assert res.status_code == 200
    assert sent["api_key"] == "test-key"
    assert sent["payload"]["to"] == [{"email": "maria@example.com"}]
    assert sent["payload"]["subject"] == "Rent"


def test_upcoming_dues_include_cycles_ending_today(db, make_room, make_tenant):
    now = datetime(2026, 10, 19, 15, 30)
    room = make_room()
    due_today = make_tenant(room=room, status=TenantStatus.APPROVED.value)
    overdue = make_tenant(room=room, status=TenantStatus.APPROVED.value)
    due_today.created_at = datetime(2026, 9, 19, 8, 0)
    overdue.created_at = datetime(2026, 9, 18, 23, 59)
    db.commit()

    dues = tenant_service.upcoming_dues(db, now=now)

    assert [d["id"] for d in dues] == [due_today.id]
    assert dues[0]["due_date"] == datetime(2026, 10, 19, 8, 0)
