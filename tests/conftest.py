import os

os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("SECRET_KEY", "test-secret-key")

from datetime import datetime, date
from decimal import Decimal

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app.main import app
from app.config.database import get_db
from app.core.auth.service import AuthService
from app.core.auth.schemas import SessionInfo
from app.shared.database.models import (
    Base, User, Driver, AirportTransfer, Booking, Payment, TransactionHistory
)

DRIVER_A = "11111111-1111-1111-1111-111111111111"
DRIVER_B = "22222222-2222-2222-2222-222222222222"
PLAIN_USER = "33333333-3333-3333-3333-333333333333"


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(engine)
    yield engine
    Base.metadata.drop_all(engine)
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(bind=engine, autocommit=False, autoflush=False)


@pytest.fixture
def db(session_factory):
    session = session_factory()
    yield session
    session.close()


@pytest.fixture
def client(session_factory):
    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def seed(db):
    """Two drivers, one plain user and a handful of transfers"""
    db.add_all([
        User(id=DRIVER_A, email="andi@example.com", password_hash=AuthService.get_password_hash("driver123"),
             full_name="Andi Saputra", role="driver"),
        User(id=DRIVER_B, email="budi@example.com", password_hash=AuthService.get_password_hash("driver123"),
             full_name="Budi Santoso", role="driver"),
        User(id=PLAIN_USER, email="citra@example.com", password_hash=AuthService.get_password_hash("user1234"),
             full_name="Citra Lestari", phone="0812000333", role="staff"),
        Driver(id=DRIVER_A, name="Andi Saputra", email="Andi@Example.com", phone_number="0812000111",
               license_number="SIM-A-001", saldo=Decimal("750000"), status="active"),
        Driver(id=DRIVER_B, name="Budi Santoso", email="budi@example.com", phone_number="0812000222",
               saldo=Decimal("0"), description="Airport Shuttle", status="active"),
    ])
    db.add_all([
        AirportTransfer(id=1, booking_code="AT-001", customer_name="Dewi", pickup_location="CGK Terminal 3",
                        dropoff_location="Hotel Mulia", pickup_date=date(2026, 10, 20), pickup_time="09:00",
                        status="pending", driver_id=DRIVER_A, price=Decimal("350000")),
        AirportTransfer(id=2, booking_code="AT-002", customer_name="Eko", pickup_location="Hotel Indonesia",
                        dropoff_location="CGK Terminal 2", status="confirmed", driver_id=DRIVER_A),
        AirportTransfer(id=3, booking_code="AT-003", customer_name="Fajar", pickup_location="DPS",
                        dropoff_location="Kuta", status="completed", driver_id=DRIVER_A),
        AirportTransfer(id=4, booking_code="AT-004", customer_name="Gita", pickup_location="DPS",
                        dropoff_location="Ubud", status="canceled", driver_id=DRIVER_A),
        AirportTransfer(id=5, booking_code="AT-005", customer_name="Hadi", pickup_location="SUB",
                        dropoff_location="Malang", status="pending", driver_id=None),
    ])
    db.commit()
    return db


def make_token(user_id: str, email: str) -> str:
    return AuthService.create_access_token({"user_id": user_id, "email": email, "role": "driver"})


def auth_headers(user_id: str = DRIVER_A, email: str = "andi@example.com") -> dict:
    return {"Authorization": f"Bearer {make_token(user_id, email)}"}


def session_for(user_id: str, email: str) -> SessionInfo:
    return SessionInfo(user_id=user_id, email=email)
