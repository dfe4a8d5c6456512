from typing import Any, Dict

import psycopg

from . import inspection_details

RECENT_LIMIT = 10


def get_inspection_report(conn: psycopg.Connection, recent_limit: int = RECENT_LIMIT) -> Dict[str, Any]:
    # counts and the recent list come from the same snapshot
    with conn.transaction():
        conn.execute("SET TRANSACTION ISOLATION LEVEL REPEATABLE READ;")
        with conn.cursor() as cur:
            cur.execute(
                """
                SELECT
                    COUNT(*) AS total,
                    COUNT(*) FILTER (WHERE completed) AS completed
                FROM inspections;
                """
            )
            counts = cur.fetchone()
        recent = inspection_details.fetch_recent_inspections(conn, recent_limit)

    total = counts["total"] or 0
    completed = counts["completed"] or 0
    return {
        "total_inspections": total,
        "completed_inspections": completed,
        "pending_inspections": total - completed,
        "recent_inspections": recent,
    }
