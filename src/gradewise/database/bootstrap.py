from __future__ import annotations

import logging

import mysql.connector

from ..core.constants import DEMO_TEACHER_EMAIL, DEMO_TEACHER_NAME, DEMO_TEACHER_PASSWORD
from .connection import DatabaseConnection

logger = logging.getLogger(__name__)

KV_STORE_DDL = """
CREATE TABLE IF NOT EXISTS kv_store (
    store_key VARCHAR(64) NOT NULL PRIMARY KEY,
    store_value LONGTEXT NOT NULL,
    updated_at TIMESTAMP NOT NULL DEFAULT CURRENT_TIMESTAMP ON UPDATE CURRENT_TIMESTAMP
) ENGINE=InnoDB DEFAULT CHARSET=utf8mb4
"""


def apply_schema(conn_factory: DatabaseConnection) -> None:
    """Create the database and kv_store table if they are missing (idempotent)."""

    conn = conn_factory.connect(with_database=False)
    try:
        cur = conn.cursor()
        try:
            cur.execute(
                f"CREATE DATABASE IF NOT EXISTS `{conn_factory.database}` "
                "DEFAULT CHARACTER SET utf8mb4 COLLATE utf8mb4_unicode_ci"
            )
            cur.execute(f"USE `{conn_factory.database}`")
            cur.execute(KV_STORE_DDL)
            conn.commit()
        finally:
            cur.close()
    except mysql.connector.Error:
        conn.rollback()
        raise
    finally:
        conn.close()
    logger.info("kv_store schema ready in database %s", conn_factory.database)


def ensure_demo_teacher(user_service) -> None:
    """Create the demo teacher account when no account exists yet."""

    if user_service.list_users():
        return
    user_service.add_user(
        name=DEMO_TEACHER_NAME,
        email=DEMO_TEACHER_EMAIL,
        password=DEMO_TEACHER_PASSWORD,
    )
    logger.info("Seeded demo teacher account %s", DEMO_TEACHER_EMAIL)
