# ==============================================
# MySQLProfileStore
# ==============================================
#
# PURPOSE:
#   Profile store backed by a MySQL "usermeta" table, the same
#   layout WordPress uses for user meta:
#
#     umeta_id    BIGINT AUTO_INCREMENT PRIMARY KEY
#     user_id     VARCHAR(64)  NOT NULL
#     meta_key    VARCHAR(255) NOT NULL
#     meta_value  LONGTEXT
#     UNIQUE (user_id, meta_key)
#
#   The unique key turns every write into an upsert via
#   INSERT ... ON DUPLICATE KEY UPDATE.
#
# CLASS: MySQLProfileStore
# ------------------------
#   Stateful: holds connection to MySQL.
#
#   Constructor:
#   ------------
#   - __init__(host, port, user, password, database, table="usermeta")
#       Store connection params. Don't connect yet.
#
#   Methods:
#   --------
#   - connect() -> None
#       Establish connection. Create database if it doesn't exist.
#   - disconnect() -> None
#   - ensure_table() -> None
#       CREATE TABLE IF NOT EXISTS with the layout above.
#   - read / write / read_all  (see ProfileStore)
#
#   Context Manager:
#   ----------------
#   - __enter__ / __exit__
#
# ==============================================

import logging
import re
from typing import Any, Dict, Optional

import pymysql

from formsync.errors import StoreError
from .base import ProfileStore

logger = logging.getLogger(__name__)

_IDENTIFIER = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")


def _identifier(name: str) -> str:
    # Table/database names can't be bound as query parameters
    if not _IDENTIFIER.match(name or ""):
        raise StoreError(f"Invalid SQL identifier: {name!r}")
    return name


class MySQLProfileStore(ProfileStore):
    def __init__(self, host, port, user, password, database, table="usermeta"):
        self.host = host
        self.port = port
        self.user = user
        self.password = password
        self.database = _identifier(database)
        self.table = _identifier(table)
        self.connection = None

    def connect(self) -> None:
        try:
            self.connection = pymysql.connect(
                host=self.host,
                port=self.port,
                user=self.user,
                password=self.password,
                charset="utf8mb4",
                # Each statement is its own transaction so reads see other writers
                autocommit=True,
            )
            with self.connection.cursor() as cursor:
                cursor.execute(f"CREATE DATABASE IF NOT EXISTS {self.database}")
                cursor.execute(f"USE {self.database}")
        except pymysql.MySQLError as e:
            logger.error("Could not connect to MySQL: %s", e)
            raise StoreError(f"Could not connect to MySQL: {e}") from e
        logger.info("Connected to MySQL at %s:%s/%s", self.host, self.port, self.database)

    def disconnect(self) -> None:
        if self.connection:
            self.connection.close()
            self.connection = None
            logger.info("Disconnected from MySQL.")

    def _require_connection(self):
        if self.connection is None:
            raise StoreError("Not connected to MySQL.")
        return self.connection

    def ensure_table(self) -> None:
        connection = self._require_connection()
        create_query = (
            f"CREATE TABLE IF NOT EXISTS {self.table} ("
            "umeta_id BIGINT UNSIGNED NOT NULL AUTO_INCREMENT PRIMARY KEY, "
            "user_id VARCHAR(64) NOT NULL, "
            "meta_key VARCHAR(255) NOT NULL, "
            "meta_value LONGTEXT, "
            "UNIQUE KEY user_meta_key (user_id, meta_key)"
            ") DEFAULT CHARSET=utf8mb4"
        )
        try:
            with connection.cursor() as cursor:
                cursor.execute(create_query)
            connection.commit()
        except pymysql.MySQLError as e:
            raise StoreError(f"Could not create table {self.table}: {e}") from e

    def _read(self, user_id: str, key: str) -> Optional[Any]:
        connection = self._require_connection()
        try:
            with connection.cursor() as cursor:
                cursor.execute(
                    f"SELECT meta_value FROM {self.table} WHERE user_id = %s AND meta_key = %s",
                    (user_id, key),
                )
                row = cursor.fetchone()
        except pymysql.MySQLError as e:
            raise StoreError(f"MySQL read failed: {e}") from e
        return row[0] if row else None

    def _write(self, user_id: str, key: str, value: str) -> None:
        connection = self._require_connection()
        query = (
            f"INSERT INTO {self.table} (user_id, meta_key, meta_value) "
            "VALUES (%s, %s, %s) "
            "ON DUPLICATE KEY UPDATE meta_value = VALUES(meta_value)"
        )
        try:
            with connection.cursor() as cursor:
                cursor.execute(query, (user_id, key, value))
            connection.commit()
        except pymysql.MySQLError as e:
            connection.rollback()
            raise StoreError(f"MySQL write failed: {e}") from e

    def _read_all(self, user_id: str) -> Dict[str, Any]:
        connection = self._require_connection()
        try:
            with connection.cursor() as cursor:
                cursor.execute(
                    f"SELECT meta_key, meta_value FROM {self.table} "
                    "WHERE user_id = %s ORDER BY umeta_id",
                    (user_id,),
                )
                rows = cursor.fetchall()
        except pymysql.MySQLError as e:
            raise StoreError(f"MySQL read failed: {e}") from e
        return {str(key): value for key, value in rows}

    def __enter__(self):
        self.connect()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.disconnect()
