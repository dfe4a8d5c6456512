from typing import Iterator

import psycopg
from psycopg.rows import dict_row

from .config import get_settings


def get_connection() -> psycopg.Connection:
    """Open an autocommit connection; handlers group their statements with ``conn.transaction()``."""
    settings = get_settings()
    if not settings.database_url:
        raise RuntimeError("DATABASE_URL env var not set for host process")
    return psycopg.connect(
        settings.database_url,
        row_factory=dict_row,
        autocommit=True,
        connect_timeout=settings.connect_timeout,
        keepalives=1,
        keepalives_idle=30,
        keepalives_interval=10,
        keepalives_count=3,
    )


def get_db() -> Iterator[psycopg.Connection]:
    """Per-request connection, closed once the response has been produced."""
    conn = get_connection()
    try:
        yield conn
    finally:
        conn.close()
