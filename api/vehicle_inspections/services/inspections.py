import logging
from typing import Any, Dict, List, Optional

import psycopg

from ..errors import NotFoundError
from ..schemas import InspectionCreate, InspectionUpdate
from . import inspection_details

INSPECTION_COLUMNS = "id, vehicle_id, inspector_id, inspection_date, completed, notes, created_at, updated_at"
PATCHABLE_FIELDS = ("completed", "notes")

logger = logging.getLogger(__name__)


def create_inspection(conn: psycopg.Connection, payload: InspectionCreate) -> Dict[str, Any]:
    data = payload.model_dump()
    try:
        with conn.transaction(), conn.cursor() as cur:
            cur.execute("SELECT id FROM vehicles WHERE id=%s;", (data["vehicle_id"],))
            if not cur.fetchone():
                raise NotFoundError(f"Vehicle with id {data['vehicle_id']} does not exist")
            cur.execute("SELECT id FROM inspectors WHERE id=%s;", (data["inspector_id"],))
            if not cur.fetchone():
                raise NotFoundError(f"Inspector with id {data['inspector_id']} does not exist")

            # completed always starts out false; it only changes through update_inspection
            cur.execute(
                f"""
                INSERT INTO inspections (vehicle_id, inspector_id, inspection_date, completed, notes)
                VALUES (%(vehicle_id)s, %(inspector_id)s, %(inspection_date)s, FALSE, %(notes)s)
                RETURNING {INSPECTION_COLUMNS};
                """,
                {**data, "notes": data.get("notes") or None},
            )
            row = cur.fetchone()
    except psycopg.Error:
        logger.exception("inspection creation failed")
        raise
    logger.info("opened inspection %s for vehicle %s", row["id"], row["vehicle_id"])
    return row


def get_inspections(conn: psycopg.Connection) -> List[Dict[str, Any]]:
    with conn.cursor() as cur:
        cur.execute(f"SELECT {INSPECTION_COLUMNS} FROM inspections ORDER BY inspection_date DESC, id DESC;")
        return cur.fetchall()


def update_inspection(conn: psycopg.Connection, payload: InspectionUpdate) -> Dict[str, Any]:
    inspection_id = payload.id
    fields = {k: v for k, v in payload.model_dump(exclude_unset=True).items() if k in PATCHABLE_FIELDS}
    # completed is NOT NULL; notes may be cleared explicitly.
    if fields.get("completed", False) is None:
        del fields["completed"]

    set_sql = ", ".join([f"{column}=%({column})s" for column in fields] + ["updated_at=now()"])
    fields["inspection_id"] = inspection_id
    try:
        with conn.transaction(), conn.cursor() as cur:
            cur.execute(
                f"UPDATE inspections SET {set_sql} WHERE id=%(inspection_id)s RETURNING {INSPECTION_COLUMNS};",
                fields,
            )
            row = cur.fetchone()
            if not row:
                raise NotFoundError(f"Inspection with id {inspection_id} not found")
    except psycopg.Error:
        logger.exception("inspection %s update failed", inspection_id)
        raise
    return row


def get_inspection_details(conn: psycopg.Connection, inspection_id: int) -> Optional[Dict[str, Any]]:
    return inspection_details.fetch_inspection_details(conn, inspection_id)


def get_vehicle_inspections(conn: psycopg.Connection, vehicle_id: int) -> List[Dict[str, Any]]:
    return inspection_details.fetch_vehicle_inspections(conn, vehicle_id)
