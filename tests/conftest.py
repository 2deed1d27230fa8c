"""Fixtures for API and service tests.

Every test gets a fresh in-memory SQLite database shared by the `db`
session fixture and the TestClient's request sessions.
"""
from datetime import datetime, timedelta

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app.database import Base, get_db
from app.main import app
from app.models import Customer, Product
from app.models_visit import VISIT_SCHEDULED, Visit


@pytest.fixture
def engine():
    """Yield an engine bound to a fresh in-memory database."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    try:
        yield engine
    finally:
        Base.metadata.drop_all(bind=engine)
        engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db(session_factory):
    """Yield a Session for direct service and repository calls."""
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def client(session_factory):
    """Yield a TestClient whose requests use the test database."""

    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


@pytest.fixture
def now():
    """Stable 'now' for deterministic rollover tests (mid-morning)."""
    return datetime(2024, 3, 15, 9, 30, 0)


@pytest.fixture
def today(now):
    return now.replace(hour=0, minute=0, second=0, microsecond=0)


@pytest.fixture
def make_customer(db):
    """Helper: insert a customer and return it."""

    def _make(**overrides):
        data = {
            "store_name": "Yıldız Market",
            "authorized_persons": ["Ahmet Yılmaz"],
            "phone": "05551234567",
            "address": "Atatürk Cad. No:1",
            "city": "İstanbul",
            "district": "Kadıköy",
            "routine_name": "Pazartesi Rutini",
            "initial_points": 0,
            "visit_frequency": 7,
        }
        data.update(overrides)
        customer = Customer(**data)
        db.add(customer)
        db.commit()
        db.refresh(customer)
        return customer

    return _make


@pytest.fixture
def make_product(db):
    """Helper: insert a product and return it."""

    def _make(**overrides):
        data = {"name": "Deterjan 5L", "price": 120.0, "stock": 50, "category": "Temizlik"}
        data.update(overrides)
        product = Product(**data)
        db.add(product)
        db.commit()
        db.refresh(product)
        return product

    return _make


@pytest.fixture
def make_visit(db):
    """Helper: insert a visit; next_visit_date defaults to visit_date + frequency."""

    def _make(customer, visit_date, next_visit_date=None, **overrides):
        if next_visit_date is None:
            next_visit_date = visit_date + timedelta(days=customer.visit_frequency)
        data = {
            "customer_id": customer.id,
            "visit_date": visit_date,
            "next_visit_date": next_visit_date,
            "status": VISIT_SCHEDULED,
        }
        data.update(overrides)
        visit = Visit(**data)
        db.add(visit)
        db.commit()
        db.refresh(visit)
        return visit

    return _make


def build_customer_payload(**overrides):
    """Valid request body for POST /api/customers."""
    payload = {
        "storeName": "Yıldız Market",
        "authorizedPersons": ["Ahmet Yılmaz", "Ayşe Demir"],
        "phone": "05551234567",
        "address": "Atatürk Cad. No:1",
        "city": "İstanbul",
        "district": "Kadıköy",
        "locationLink": "https://maps.google.com/?q=40.99,29.02",
        "routineName": "Pazartesi Rutini",
        "initialPoints": 10,
        "visitFrequency": 7,
    }
    payload.update(overrides)
    return payload


def build_product_payload(**overrides):
    """Valid request body for POST /api/products."""
    payload = {
        "name": "Deterjan 5L",
        "description": "Genel temizlik",
        "price": 120.0,
        "stock": 50,
        "category": "Temizlik",
    }
    payload.update(overrides)
    return payload


@pytest.fixture
def create_customer(client):
    """Helper: create a customer through the API and return its JSON."""

    def _create(**overrides):
        response = client.post("/api/customers", json=build_customer_payload(**overrides))
        assert response.status_code == 201, response.text
        return response.json()

    return _create


@pytest.fixture
def create_product(client):
    """Helper: create a product through the API and return its JSON."""

    def _create(**overrides):
        response = client.post("/api/products", json=build_product_payload(**overrides))
        assert response.status_code == 201, response.text
        return response.json()

    return _create


@pytest.fixture
def customer_payload():
    return build_customer_payload


@pytest.fixture
def product_payload():
    return build_product_payload
