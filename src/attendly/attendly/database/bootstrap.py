from __future__ import annotations

from typing import Iterable

import mysql.connector

from .connection import DBConfig

SCHEMA_SQL = """
CREATE TABLE IF NOT EXISTS app_snapshots (
    owner_id VARCHAR(128) NOT NULL PRIMARY KEY,
    payload LONGTEXT NOT NULL,
    updated_at TIMESTAMP NOT NULL DEFAULT CURRENT_TIMESTAMP ON UPDATE CURRENT_TIMESTAMP
) ENGINE=InnoDB DEFAULT CHARSET=utf8mb4;
"""


def _iter_sql_statements(sql: str) -> Iterable[str]:
    for stmt in sql.split(";"):
        stmt = stmt.strip()
        if stmt:
            yield stmt


def apply_schema(db_config: dict) -> None:
    """Create the database (if missing) and the snapshot table. Idempotent."""

    target = DBConfig.from_dict(db_config)
    conn = mysql.connector.connect(host=target.host, port=target.port, user=target.user, password=target.password)
    try:
        cur = conn.cursor()
        try:
            cur.execute(
                f"CREATE DATABASE IF NOT EXISTS `{target.database}` CHARACTER SET utf8mb4 COLLATE utf8mb4_unicode_ci"
            )
            cur.execute(f"USE `{target.database}`")
            for stmt in _iter_sql_statements(SCHEMA_SQL):
                cur.execute(stmt)
            conn.commit()
        finally:
            cur.close()
    finally:
        conn.close()


def list_tables(db_config: dict) -> list[str]:
    target = DBConfig.from_dict(db_config)
    conn = mysql.connector.connect(
        host=target.host,
        port=target.port,
        user=target.user,
        password=target.password,
        database=target.database,
    )
    try:
        cur = conn.cursor()
        try:
            cur.execute("SHOW TABLES")
            return [str(r[0]) for r in cur.fetchall()]
        finally:
            cur.close()
    finally:
        conn.close()
