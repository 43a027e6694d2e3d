from __future__ import annotations

import json
from typing import Any, Optional

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchone
from .repository import SnapshotRepository


class MySQLSnapshotRepository(SnapshotRepository):
    """Cloud sync: one JSON snapshot row per signed-in owner."""

    def __init__(self, conn_factory: DatabaseConnection, *, owner_id: str):
        self._conn_factory = conn_factory
        self._owner_id = owner_id

    def load(self) -> Optional[dict[str, Any]]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT payload FROM app_snapshots WHERE owner_id=%s", (self._owner_id,))
            r = fetchone(cur)
            if not r:
                return None
            return json.loads(r["payload"])

    def save(self, snapshot: dict[str, Any]) -> None:
        payload = json.dumps(snapshot, ensure_ascii=False)
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO app_snapshots(owner_id, payload)
                VALUES(%s,%s)
                ON DUPLICATE KEY UPDATE payload=VALUES(payload)
                """,
                (self._owner_id, payload),
            )
