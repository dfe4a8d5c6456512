from datetime import datetime, timezone

import pytest

from api.vehicle_inspections.errors import ConflictError, NotFoundError, ReferentialIntegrityError
from api.vehicle_inspections.schemas import InspectionCreate, InspectorCreate, InspectorUpdate
from api.vehicle_inspections.services import inspections, inspectors


def test_create_inspector(conn):
    created = inspectors.create_inspector(conn, InspectorCreate(name="Jane Doe", employee_id="EMP100"))
    assert created["id"] == 1
    assert created["employee_id"] == "EMP100"
    assert inspectors.get_inspector_by_id(conn, created["id"]) == created


def test_create_inspector_duplicate_employee_id(conn, inspector, row_count):
    with pytest.raises(ConflictError, match=r"already exists"):
        inspectors.create_inspector(conn, InspectorCreate(name="Other", employee_id=inspector["employee_id"]))
    assert row_count("inspectors") == 1


def test_get_inspectors_sorted_by_name(conn):
    for name, employee_id in [("Zoe", "E3"), ("Adam", "E1"), ("Maria", "E2")]:
        inspectors.create_inspector(conn, InspectorCreate(name=name, employee_id=employee_id))
    assert [i["name"] for i in inspectors.get_inspectors(conn)] == ["Adam", "Maria", "Zoe"]


def test_get_inspector_by_id_missing(conn):
    assert inspectors.get_inspector_by_id(conn, 42) is None


def test_update_inspector_is_sparse(conn, inspector):
    updated = inspectors.update_inspector(conn, InspectorUpdate(id=inspector["id"], name="John A. Smith"))
    assert updated["name"] == "John A. Smith"
    assert updated["employee_id"] == inspector["employee_id"]
    assert updated["created_at"] == inspector["created_at"]
    assert updated["updated_at"] > inspector["updated_at"]


def test_update_inspector_keeps_own_employee_id(conn, inspector):
    updated = inspectors.update_inspector(
        conn, InspectorUpdate(id=inspector["id"], employee_id=inspector["employee_id"])
    )
    assert updated["employee_id"] == inspector["employee_id"]


def test_update_inspector_missing(conn):
    with pytest.raises(NotFoundError, match=r"Inspector with ID 99999 not found"):
        inspectors.update_inspector(conn, InspectorUpdate(id=99999, name="Nobody"))


def test_update_inspector_employee_id_conflict(conn, inspector):
    other = inspectors.create_inspector(conn, InspectorCreate(name="Other", employee_id="ANOTHER001"))
    with pytest.raises(ConflictError, match=r"Inspector with employee ID ANOTHER001 already exists"):
        inspectors.update_inspector(conn, InspectorUpdate(id=inspector["id"], employee_id=other["employee_id"]))


def test_delete_inspector_without_inspections(conn, inspector):
    assert inspectors.delete_inspector(conn, inspector["id"]) == {"success": True}
    assert inspectors.get_inspector_by_id(conn, inspector["id"]) is None


def test_delete_inspector_missing(conn):
    with pytest.raises(NotFoundError, match=r"Inspector with id 9999 not found"):
        inspectors.delete_inspector(conn, 9999)


def test_delete_inspector_with_inspections_reports_count(conn, vehicle, inspector, row_count):
    for day in (1, 2, 3):
        inspections.create_inspection(
            conn,
            InspectionCreate(
                vehicle_id=vehicle["id"],
                inspector_id=inspector["id"],
                inspection_date=datetime(2024, 3, day, tzinfo=timezone.utc),
            ),
        )
    with pytest.raises(
        ReferentialIntegrityError,
        match=r"Cannot delete inspector with id .+ because they have 3 associated inspection",
    ):
        inspectors.delete_inspector(conn, inspector["id"])
    assert row_count("inspectors") == 1
    assert row_count("inspections") == 3
