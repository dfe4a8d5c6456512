import logging
from typing import Any, Dict, List, Optional

import psycopg
from psycopg.errors import UniqueViolation

from ..errors import ConflictError, NotFoundError
from ..schemas import VehicleCreate, VehicleUpdate

VEHICLE_COLUMNS = "id, make, model, year, vin, license_plate, created_at, updated_at"
PATCHABLE_FIELDS = ("make", "model", "year", "vin", "license_plate")

logger = logging.getLogger(__name__)


def _violated_plate(exc: UniqueViolation) -> bool:
    return "license_plate" in (exc.diag.constraint_name or "")


def create_vehicle(conn: psycopg.Connection, payload: VehicleCreate) -> Dict[str, Any]:
    data = payload.model_dump()
    try:
        with conn.transaction(), conn.cursor() as cur:
            cur.execute(
                "SELECT vin, license_plate FROM vehicles WHERE vin=%(vin)s OR license_plate=%(license_plate)s;",
                data,
            )
            existing = cur.fetchall()
            # VIN collisions are reported before plate collisions.
            if any(row["vin"] == data["vin"] for row in existing):
                raise ConflictError(f"Vehicle with VIN {data['vin']} already exists")
            if existing:
                raise ConflictError(f"Vehicle with license plate {data['license_plate']} already exists")

            cur.execute(
                f"""
                INSERT INTO vehicles (make, model, year, vin, license_plate)
                VALUES (%(make)s, %(model)s, %(year)s, %(vin)s, %(license_plate)s)
                RETURNING {VEHICLE_COLUMNS};
                """,
                data,
            )
            row = cur.fetchone()
    except UniqueViolation as exc:
        if _violated_plate(exc):
            raise ConflictError(f"Vehicle with license plate {data['license_plate']} already exists") from exc
        raise ConflictError(f"Vehicle with VIN {data['vin']} already exists") from exc
    except psycopg.Error:
        logger.exception("vehicle creation failed")
        raise
    logger.info("created vehicle %s (VIN %s)", row["id"], row["vin"])
    return row


def get_vehicles(conn: psycopg.Connection) -> List[Dict[str, Any]]:
    with conn.cursor() as cur:
        cur.execute(f"SELECT {VEHICLE_COLUMNS} FROM vehicles ORDER BY created_at DESC, id DESC;")
        return cur.fetchall()


def get_vehicle_by_id(conn: psycopg.Connection, vehicle_id: int) -> Optional[Dict[str, Any]]:
    with conn.cursor() as cur:
        cur.execute(f"SELECT {VEHICLE_COLUMNS} FROM vehicles WHERE id=%s;", (vehicle_id,))
        return cur.fetchone()


def update_vehicle(conn: psycopg.Connection, payload: VehicleUpdate) -> Dict[str, Any]:
    vehicle_id = payload.id
    fields = {k: v for k, v in payload.model_dump(exclude_unset=True).items() if k in PATCHABLE_FIELDS}
    # year/vin/plate are NOT NULL columns; a null for them means "leave unchanged".
    fields = {k: v for k, v in fields.items() if v is not None}

    try:
        with conn.transaction(), conn.cursor() as cur:
            cur.execute("SELECT id FROM vehicles WHERE id=%s;", (vehicle_id,))
            if not cur.fetchone():
                raise NotFoundError(f"Vehicle with id {vehicle_id} not found")

            if "vin" in fields:
                cur.execute("SELECT id FROM vehicles WHERE vin=%s AND id<>%s;", (fields["vin"], vehicle_id))
                if cur.fetchone():
                    raise ConflictError(f"VIN {fields['vin']} is already in use by another vehicle")
            if "license_plate" in fields:
                cur.execute(
                    "SELECT id FROM vehicles WHERE license_plate=%s AND id<>%s;",
                    (fields["license_plate"], vehicle_id),
                )
                if cur.fetchone():
                    raise ConflictError(
                        f"License plate {fields['license_plate']} is already in use by another vehicle"
                    )

            set_sql = ", ".join([f"{column}=%({column})s" for column in fields] + ["updated_at=now()"])
            fields["vehicle_id"] = vehicle_id
            cur.execute(
                f"UPDATE vehicles SET {set_sql} WHERE id=%(vehicle_id)s RETURNING {VEHICLE_COLUMNS};",
                fields,
            )
            row = cur.fetchone()
    except UniqueViolation as exc:
        if _violated_plate(exc):
            raise ConflictError(
                f"License plate {fields.get('license_plate')} is already in use by another vehicle"
            ) from exc
        raise ConflictError(f"VIN {fields.get('vin')} is already in use by another vehicle") from exc
    except psycopg.Error:
        logger.exception("vehicle %s update failed", vehicle_id)
        raise
    return row


def delete_vehicle(conn: psycopg.Connection, vehicle_id: int) -> Dict[str, bool]:
    try:
        with conn.transaction(), conn.cursor() as cur:
            cur.execute("SELECT id FROM vehicles WHERE id=%s;", (vehicle_id,))
            if not cur.fetchone():
                raise NotFoundError(f"Vehicle with id {vehicle_id} not found")
            # inspections and their items go with the vehicle (ON DELETE CASCADE)
            cur.execute("DELETE FROM vehicles WHERE id=%s;", (vehicle_id,))
    except psycopg.Error:
        logger.exception("vehicle %s deletion failed", vehicle_id)
        raise
    logger.info("deleted vehicle %s", vehicle_id)
    return {"success": True}
