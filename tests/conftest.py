from datetime import datetime, timezone

import pytest
from fastapi.testclient import TestClient

from api.vehicle_inspections.config import get_settings
from api.vehicle_inspections.db import get_connection, get_db
from api.vehicle_inspections.main import app
from api.vehicle_inspections.schemas import InspectionCreate, InspectorCreate, VehicleCreate
from api.vehicle_inspections.services import inspections, inspectors, vehicles
from db.run_sql import run_drop_all_sql, run_init_sql

TABLES = "inspection_items, inspections, inspectors, vehicles"


@pytest.fixture(scope="session")
def db_conn():
    if not get_settings().database_url:
        pytest.skip("DATABASE_URL not set; database tests need a disposable PostgreSQL database")
    conn = get_connection()
    run_drop_all_sql(conn)
    run_init_sql(conn)
    yield conn
    conn.close()


@pytest.fixture
def conn(db_conn):
    db_conn.execute(f"TRUNCATE {TABLES} RESTART IDENTITY CASCADE;")
    return db_conn


@pytest.fixture
def client(conn):
    app.dependency_overrides[get_db] = lambda: conn
    yield TestClient(app)
    app.dependency_overrides.pop(get_db, None)


@pytest.fixture
def offline_client():
    """Client for requests rejected before any handler touches storage."""
    app.dependency_overrides[get_db] = lambda: None
    yield TestClient(app)
    app.dependency_overrides.pop(get_db, None)


@pytest.fixture
def vehicle(conn):
    return vehicles.create_vehicle(
        conn,
        VehicleCreate(make="Toyota", model="Camry", year=2023, vin="1HGBH41JXMN109186", license_plate="ABC123"),
    )


@pytest.fixture
def inspector(conn):
    return inspectors.create_inspector(conn, InspectorCreate(name="John Smith", employee_id="EMP001"))


@pytest.fixture
def inspection(conn, vehicle, inspector):
    return inspections.create_inspection(
        conn,
        InspectionCreate(
            vehicle_id=vehicle["id"],
            inspector_id=inspector["id"],
            inspection_date=datetime(2024, 1, 15, 10, 0, tzinfo=timezone.utc),
        ),
    )


@pytest.fixture
def row_count(conn):
    def count(table: str) -> int:
        return conn.execute(f"SELECT COUNT(*) AS c FROM {table};").fetchone()["c"]

    return count


@pytest.fixture
def connect(conn):
    """Factory for extra connections to the test database, closed after the test."""
    opened = []

    def open_connection():
        extra = get_connection()
        opened.append(extra)
        return extra

    yield open_connection
    for extra in opened:
        extra.close()
