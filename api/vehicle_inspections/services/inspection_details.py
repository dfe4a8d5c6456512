"""Join-and-assemble reads: inspections enriched with vehicle, inspector and items.

Inspection rows are fetched joined to their vehicle and inspector, the items of
all fetched inspections come back in one batch query, and the two are zipped
together by ``inspection_id``.
"""
from collections import defaultdict
from typing import Any, Dict, List, Optional, Sequence

import psycopg

from .inspection_items import ITEM_COLUMNS

JOINED_COLUMNS = """
    i.id, i.vehicle_id, i.inspector_id, i.inspection_date, i.completed, i.notes,
    i.created_at, i.updated_at,
    v.make AS vehicle_make, v.model AS vehicle_model, v.year AS vehicle_year,
    v.vin AS vehicle_vin, v.license_plate AS vehicle_license_plate,
    v.created_at AS vehicle_created_at, v.updated_at AS vehicle_updated_at,
    ins.name AS inspector_name, ins.employee_id AS inspector_employee_id,
    ins.created_at AS inspector_created_at, ins.updated_at AS inspector_updated_at
"""

VEHICLE_FIELDS = ("make", "model", "year", "vin", "license_plate", "created_at", "updated_at")
INSPECTOR_FIELDS = ("name", "employee_id", "created_at", "updated_at")
INSPECTION_FIELDS = (
    "id", "vehicle_id", "inspector_id", "inspection_date", "completed", "notes", "created_at", "updated_at",
)


def _fetch_joined(cur, where: str = "", params: Sequence[Any] = (), order: str = "", limit: Optional[int] = None):
    sql = f"""
    SELECT {JOINED_COLUMNS}
    FROM inspections i
    JOIN vehicles v ON v.id = i.vehicle_id
    JOIN inspectors ins ON ins.id = i.inspector_id
    """
    params = list(params)
    if where:
        sql += f" WHERE {where}"
    if order:
        sql += f" ORDER BY {order}"
    if limit is not None:
        sql += " LIMIT %s"
        params.append(limit)
    cur.execute(sql, params)
    return cur.fetchall()


def _fetch_items_by_inspection(cur, inspection_ids: List[int]) -> Dict[int, List[Dict[str, Any]]]:
    grouped: Dict[int, List[Dict[str, Any]]] = defaultdict(list)
    if not inspection_ids:
        return grouped
    cur.execute(
        f"SELECT {ITEM_COLUMNS} FROM inspection_items WHERE inspection_id = ANY(%s) ORDER BY id;",
        (inspection_ids,),
    )
    for item in cur.fetchall():
        grouped[item["inspection_id"]].append(item)
    return grouped


def _build_inspection_payload(row: Dict[str, Any], items: List[Dict[str, Any]]) -> Dict[str, Any]:
    payload = {field: row[field] for field in INSPECTION_FIELDS}
    payload["vehicle"] = {"id": row["vehicle_id"], **{f: row[f"vehicle_{f}"] for f in VEHICLE_FIELDS}}
    payload["inspector"] = {"id": row["inspector_id"], **{f: row[f"inspector_{f}"] for f in INSPECTOR_FIELDS}}
    payload["items"] = items
    return payload


def assemble(cur, rows: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
    items = _fetch_items_by_inspection(cur, [row["id"] for row in rows])
    return [_build_inspection_payload(row, items.get(row["id"], [])) for row in rows]


def fetch_inspection_details(conn: psycopg.Connection, inspection_id: int) -> Optional[Dict[str, Any]]:
    with conn.cursor() as cur:
        rows = _fetch_joined(cur, where="i.id=%s", params=(inspection_id,))
        if not rows:
            return None
        return assemble(cur, rows)[0]


def fetch_vehicle_inspections(conn: psycopg.Connection, vehicle_id: int) -> List[Dict[str, Any]]:
    with conn.cursor() as cur:
        rows = _fetch_joined(
            cur,
            where="i.vehicle_id=%s",
            params=(vehicle_id,),
            order="i.inspection_date DESC, i.id DESC",
        )
        return assemble(cur, rows)


def fetch_recent_inspections(conn: psycopg.Connection, limit: int) -> List[Dict[str, Any]]:
    with conn.cursor() as cur:
        rows = _fetch_joined(cur, order="i.created_at DESC, i.id DESC", limit=limit)
        return assemble(cur, rows)
