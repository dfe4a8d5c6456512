import logging
from typing import Any, Dict, List, Optional

import psycopg
from psycopg.errors import ForeignKeyViolation, UniqueViolation

from ..errors import ConflictError, NotFoundError, ReferentialIntegrityError
from ..schemas import InspectorCreate, InspectorUpdate

INSPECTOR_COLUMNS = "id, name, employee_id, created_at, updated_at"
PATCHABLE_FIELDS = ("name", "employee_id")

logger = logging.getLogger(__name__)


def _employee_id_taken(employee_id: str) -> ConflictError:
    return ConflictError(f"Inspector with employee ID {employee_id} already exists")


def create_inspector(conn: psycopg.Connection, payload: InspectorCreate) -> Dict[str, Any]:
    data = payload.model_dump()
    try:
        with conn.transaction(), conn.cursor() as cur:
            cur.execute("SELECT id FROM inspectors WHERE employee_id=%s;", (data["employee_id"],))
            if cur.fetchone():
                raise _employee_id_taken(data["employee_id"])
            cur.execute(
                f"""
                INSERT INTO inspectors (name, employee_id)
                VALUES (%(name)s, %(employee_id)s)
                RETURNING {INSPECTOR_COLUMNS};
                """,
                data,
            )
            row = cur.fetchone()
    except UniqueViolation as exc:
        raise _employee_id_taken(data["employee_id"]) from exc
    except psycopg.Error:
        logger.exception("inspector creation failed")
        raise
    logger.info("created inspector %s (%s)", row["id"], row["employee_id"])
    return row


def get_inspectors(conn: psycopg.Connection) -> List[Dict[str, Any]]:
    with conn.cursor() as cur:
        cur.execute(f"SELECT {INSPECTOR_COLUMNS} FROM inspectors ORDER BY name, id;")
        return cur.fetchall()


def get_inspector_by_id(conn: psycopg.Connection, inspector_id: int) -> Optional[Dict[str, Any]]:
    with conn.cursor() as cur:
        cur.execute(f"SELECT {INSPECTOR_COLUMNS} FROM inspectors WHERE id=%s;", (inspector_id,))
        return cur.fetchone()


def update_inspector(conn: psycopg.Connection, payload: InspectorUpdate) -> Dict[str, Any]:
    inspector_id = payload.id
    fields = {
        k: v
        for k, v in payload.model_dump(exclude_unset=True).items()
        if k in PATCHABLE_FIELDS and v is not None
    }

    try:
        with conn.transaction(), conn.cursor() as cur:
            cur.execute("SELECT id FROM inspectors WHERE id=%s;", (inspector_id,))
            if not cur.fetchone():
                raise NotFoundError(f"Inspector with ID {inspector_id} not found")

            if "employee_id" in fields:
                cur.execute(
                    "SELECT id FROM inspectors WHERE employee_id=%s AND id<>%s;",
                    (fields["employee_id"], inspector_id),
                )
                if cur.fetchone():
                    raise _employee_id_taken(fields["employee_id"])

            set_sql = ", ".join([f"{column}=%({column})s" for column in fields] + ["updated_at=now()"])
            fields["inspector_id"] = inspector_id
            cur.execute(
                f"UPDATE inspectors SET {set_sql} WHERE id=%(inspector_id)s RETURNING {INSPECTOR_COLUMNS};",
                fields,
            )
            row = cur.fetchone()
    except UniqueViolation as exc:
        raise _employee_id_taken(fields.get("employee_id")) from exc
    except psycopg.Error:
        logger.exception("inspector %s update failed", inspector_id)
        raise
    return row


def delete_inspector(conn: psycopg.Connection, inspector_id: int) -> Dict[str, bool]:
    try:
        with conn.transaction(), conn.cursor() as cur:
            cur.execute("SELECT id FROM inspectors WHERE id=%s;", (inspector_id,))
            if not cur.fetchone():
                raise NotFoundError(f"Inspector with id {inspector_id} not found")

            cur.execute("SELECT COUNT(*) AS c FROM inspections WHERE inspector_id=%s;", (inspector_id,))
            referencing = cur.fetchone()["c"]
            if referencing > 0:
                raise ReferentialIntegrityError(
                    f"Cannot delete inspector with id {inspector_id} because they have "
                    f"{referencing} associated inspection(s)"
                )

            cur.execute("DELETE FROM inspectors WHERE id=%s;", (inspector_id,))
    except ForeignKeyViolation as exc:
        raise ReferentialIntegrityError(
            f"Cannot delete inspector with id {inspector_id} because they have associated inspection(s)"
        ) from exc
    except psycopg.Error:
        logger.exception("inspector %s deletion failed", inspector_id)
        raise
    logger.info("deleted inspector %s", inspector_id)
    return {"success": True}
