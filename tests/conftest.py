import os
import tempfile
from decimal import Decimal

# Must be set before the application modules are imported
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["JWT_SECRET"] = "test-secret"
os.environ["UPLOAD_DIR"] = tempfile.mkdtemp(prefix="bh-uploads-")
os.environ.pop("ADMIN_EMAIL", None)
os.environ.pop("BREVO_API_KEY", None)

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from config import settings
from database import get_session
from dependencies import create_access_token, hash_password
from main import app
from models import Base, Payment, PaymentStatus, Room, Tenant, TenantStatus, User


@pytest.fixture
def engine(tmp_path):
    # File-backed SQLite so the test session and request sessions use separate connections
    engine = create_engine(
        f"sqlite:///{tmp_path / 'test.db'}",
        connect_args={"check_same_thread": False},
    )
    Base.metadata.create_all(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(bind=engine, autoflush=False, expire_on_commit=False)


@pytest.fixture
def db(session_factory):
    session = session_factory()
    yield session
    session.close()


@pytest.fixture
def client(session_factory, tmp_path, monkeypatch):
    monkeypatch.setattr(settings, "UPLOAD_DIR", str(tmp_path / "uploads"))

    def override_get_session():
        session = session_factory()
        try:
            yield session
        except Exception:
            session.rollback()
            raise
        finally:
            session.close()

    app.dependency_overrides[get_session] = override_get_session
    yield TestClient(app)
    app.dependency_overrides.clear()


def _make_user(db, email, role, name="Test User", status="active"):
    user = User(
        name=name,
        email=email,
        password=hash_password("secret123"),
        role=role,
        status=status,
    )
    db.add(user)
    db.commit()
    return user


@pytest.fixture
def admin_user(db):
    return _make_user(db, "admin@example.com", "admin", name="Admin")


@pytest.fixture
def client_user(db):
    return _make_user(db, "tenant@example.com", "client", name="Maria Santos")


@pytest.fixture
def admin_headers(admin_user):
    return {"Authorization": f"Bearer {create_access_token(admin_user.id, 'admin')}"}


@pytest.fixture
def tenant_headers(client_user):
    return {"Authorization": f"Bearer {create_access_token(client_user.id, 'client')}"}


@pytest.fixture
def make_user(db):
    def factory(email, role="client", **kwargs):
        return _make_user(db, email, role, **kwargs)
    return factory


@pytest.fixture
def make_room(db):
    counter = {"n": 100}

    def factory(room_number=None, rate=5000, capacity=2, type="Shared"):
        counter["n"] += 1
        room = Room(
            room_number=room_number or str(counter["n"]),
            type=type,
            rate=Decimal(str(rate)),
            capacity=capacity,
        )
        room.apply_occupancy(0)
        db.add(room)
        db.commit()
        return room
    return factory


@pytest.fixture
def make_tenant(db):
    counter = {"n": 0}

    def factory(room=None, status=TenantStatus.PENDING.value, balance=0, user=None, gender=None, **kwargs):
        counter["n"] += 1
        tenant = Tenant(
            full_name=kwargs.pop("full_name", f"Tenant {counter['n']}"),
            email=kwargs.pop("email", f"tenant{counter['n']}@example.com"),
            phone=kwargs.pop("phone", f"0917000{counter['n']:04d}"),
            gender=gender,
            room_id=room.id if room is not None else None,
            status=status,
            balance=Decimal(str(balance)),
            user_id=user.id if user is not None else None,
            **kwargs,
        )
        db.add(tenant)
        db.commit()
        return tenant
    return factory


@pytest.fixture
def make_payment(db):
    def factory(tenant, amount, status=PaymentStatus.PENDING, created_at=None):
        payment = Payment(
            tenant_id=tenant.id,
            amount=Decimal(str(amount)),
            status=status,
        )
        if created_at is not None:
            payment.created_at = created_at
        db.add(payment)
        db.commit()
        return payment
    return factory
