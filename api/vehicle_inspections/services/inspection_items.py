import logging
from typing import Any, Dict, List

import psycopg

from ..errors import NotFoundError
from ..schemas import InspectionItemsCreate, InspectionItemUpdate

ITEM_COLUMNS = "id, inspection_id, item_name, status, comments, created_at, updated_at"
PATCHABLE_FIELDS = ("status", "comments")

# Checklist names offered when filling in an inspection; item_name stays free text.
SUGGESTED_ITEM_NAMES = [
    "Engine",
    "Brakes",
    "Headlights",
    "Taillights",
    "Turn Signals",
    "Tires - Front Left",
    "Tires - Front Right",
    "Tires - Rear Left",
    "Tires - Rear Right",
    "Windshield",
    "Side Mirrors",
    "Seat Belts",
    "Horn",
    "Exhaust System",
    "Battery",
    "Wipers",
    "Interior Condition",
    "Body Condition",
    "Registration/Documentation",
]

logger = logging.getLogger(__name__)


def get_item_suggestions() -> List[str]:
    return list(SUGGESTED_ITEM_NAMES)


def create_inspection_items(conn: psycopg.Connection, payload: InspectionItemsCreate) -> List[Dict[str, Any]]:
    inspection_id = payload.inspection_id
    items = [item.model_dump(mode="json") for item in payload.items]

    try:
        with conn.transaction(), conn.cursor() as cur:
            cur.execute("SELECT id FROM inspections WHERE id=%s;", (inspection_id,))
            if not cur.fetchone():
                raise NotFoundError(f"Inspection with id {inspection_id} not found")
            if not items:
                return []

            # single multi-row INSERT so the batch is all-or-nothing
            values_sql = ", ".join(["(%s, %s, %s, %s)"] * len(items))
            params: List[Any] = []
            for item in items:
                params.extend([inspection_id, item["item_name"], item["status"], item.get("comments")])
            cur.execute(
                f"""
                INSERT INTO inspection_items (inspection_id, item_name, status, comments)
                VALUES {values_sql}
                RETURNING {ITEM_COLUMNS};
                """,
                params,
            )
            rows = cur.fetchall()
    except psycopg.Error:
        logger.exception("creating items for inspection %s failed", inspection_id)
        raise
    logger.info("added %d item(s) to inspection %s", len(rows), inspection_id)
    return rows


def update_inspection_item(conn: psycopg.Connection, payload: InspectionItemUpdate) -> Dict[str, Any]:
    item_id = payload.id
    fields = {k: v for k, v in payload.model_dump(mode="json", exclude_unset=True).items() if k in PATCHABLE_FIELDS}
    # status is NOT NULL; comments may be cleared explicitly.
    if fields.get("status", "") is None:
        del fields["status"]

    set_sql = ", ".join([f"{column}=%({column})s" for column in fields] + ["updated_at=now()"])
    fields["item_id"] = item_id
    try:
        with conn.transaction(), conn.cursor() as cur:
            cur.execute(
                f"UPDATE inspection_items SET {set_sql} WHERE id=%(item_id)s RETURNING {ITEM_COLUMNS};",
                fields,
            )
            row = cur.fetchone()
            if not row:
                raise NotFoundError(f"Inspection item with id {item_id} not found")
    except psycopg.Error:
        logger.exception("inspection item %s update failed", item_id)
        raise
    return row
