"""
Shared fixtures: an in-memory SQLite database, a TestClient and small
factories for owners, apartments, rooms and bill payloads.
"""
import os

# Must be set before config/database are imported
os.environ["DATABASE_URL"] = "sqlite://"
os.environ.pop("LOG_FILE", None)

import pytest
from fastapi.testclient import TestClient

from database import SessionLocal, engine
from main import app
from models import Base


@pytest.fixture(autouse=True)
def _tables():
    """Fresh schema for every test."""
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def client():
    with TestClient(app) as c:
        yield c


@pytest.fixture
def db_session():
    session = SessionLocal()
    try:
        yield session
    finally:
        session.rollback()
        session.close()


@pytest.fixture
def make_owner(client):
    counter = {"n": 0}

    def _make(**overrides):
        counter["n"] += 1
        payload = {
            "name": f"Owner {counter['n']}",
            "address": "1 Silom Rd, Bangkok",
            "phone": "021234567",
            "tax_id": f"01055550000{counter['n']:02d}",
        }
        payload.update(overrides)
        response = client.post("/api/owners", json=payload)
        assert response.status_code == 201, response.text
        return response.json()

    return _make


@pytest.fixture
def make_apartment(client):
    def _make(name="Baan Suan", owner_ids=None):
        response = client.post(
            "/api/apartments",
            json={
                "name": name,
                "address": "12 Ratchada Rd, Bangkok",
                "phone": "029876543",
                "tax_id": "0105555999999",
                "owner_ids": owner_ids or [],
            },
        )
        assert response.status_code == 201, response.text
        return response.json()

    return _make


@pytest.fixture
def make_room(client):
    def _make(apartment_id, room_number="101"):
        response = client.post(
            "/api/rooms",
            json={"apartment_id": apartment_id, "room_number": room_number},
        )
        assert response.status_code == 201, response.text
        return response.json()

    return _make


@pytest.fixture
def bill_payload():
    """A valid bill body totalling 10750.00; keyword arguments override top-level keys."""

    def _payload(apartment_id, room_id, **overrides):
        payload = {
            "apartment_id": apartment_id,
            "room_id": room_id,
            "billing_date": "2024-03-01T09:00:00",
            "payment_due_date": "2024-03-05",
            "tenant_name": "Somchai Jaidee",
            "tenant_address": "99 Sukhumvit Rd, Bangkok",
            "tenant_phone": "0812345678",
            "tenant_tax_id": "1101700000001",
            "rental_period": {"from": "2024-03-01", "to": "2024-03-31"},
            "rent": 10000,
            "discounts": [{"description": "Loyalty", "amount": 500}],
            "electricity": {"start_meter": 100, "end_meter": 150, "rate": 7, "meter_fee": 50},
            "water": {"start_meter": 50, "end_meter": 70, "rate": 15, "meter_fee": 50},
            "aircon_fee": 300,
            "fridge_fee": 0,
            "other_fees": [{"description": "Cleaning", "amount": 200}],
        }
        payload.update(overrides)
        return payload

    return _payload


@pytest.fixture
def room_with_apartment(make_apartment, make_room):
    """(apartment, room) pair ready for billing."""
    apartment = make_apartment()
    room = make_room(apartment["id"])
    return apartment, room
