"""SQLite-based durable store for local development and tests."""

import sqlite3
import json
import uuid
import logging
from pathlib import Path
from typing import Optional, Any, Dict, List

from errors import StoreError
from schemas.contract import utc_now_iso
from .base_store import DurableStore, EXECUTIONS_TABLE, CONVERSATIONS_TABLE, MESSAGES_TABLE

logger = logging.getLogger(__name__)

# Columns per table; also the whitelist for filters and ordering
COLUMNS = {
    EXECUTIONS_TABLE: [
        "id", "conversation_id", "agent_id", "input", "output", "status",
        "error_message", "duration_ms", "created_at",
    ],
    CONVERSATIONS_TABLE: ["id", "user_id", "status", "created_at"],
    MESSAGES_TABLE: ["id", "conversation_id", "role", "content", "agent_id", "created_at"],
}

JSON_COLUMNS = {"input", "output"}


class SQLiteStore(DurableStore):
    """SQLite-backed store with the same tables as the hosted database."""

    def __init__(self, db_path: str = "data/agent_hub.db"):
        """
        Initialize SQLite store.

        Args:
            db_path: Path to SQLite database file
        """
        self.db_path = Path(db_path)
        self.db_path.parent.mkdir(parents=True, exist_ok=True)
        self._init_db()

    def _get_connection(self) -> sqlite3.Connection:
        """Get database connection with row factory."""
        conn = sqlite3.connect(self.db_path)
        conn.row_factory = sqlite3.Row
        conn.execute("PRAGMA foreign_keys = ON")
        return conn

    def _init_db(self):
        """Initialize database schema."""
        conn = self._get_connection()
        cursor = conn.cursor()

        cursor.execute("""
            CREATE TABLE IF NOT EXISTS conversations (
                id TEXT PRIMARY KEY,
                user_id TEXT NOT NULL,
                status TEXT NOT NULL CHECK(status IN ('active', 'completed', 'failed')),
                created_at TEXT NOT NULL
            )
        """)

        cursor.execute("""
            CREATE TABLE IF NOT EXISTS agent_executions (
                id TEXT PRIMARY KEY,
                conversation_id TEXT,
                agent_id TEXT NOT NULL,
                input TEXT,
                output TEXT,
                status TEXT NOT NULL CHECK(status IN ('running', 'success', 'error')),
                error_message TEXT,
                duration_ms INTEGER,
                created_at TEXT NOT NULL
            )
        """)

        cursor.execute("""
            CREATE TABLE IF NOT EXISTS messages (
                id TEXT PRIMARY KEY,
                conversation_id TEXT NOT NULL,
                role TEXT NOT NULL CHECK(role IN ('user', 'assistant', 'system')),
                content TEXT NOT NULL,
                agent_id TEXT,
                created_at TEXT NOT NULL,
                FOREIGN KEY (conversation_id) REFERENCES conversations(id)
            )
        """)

        # Indexes
        cursor.execute(
            "CREATE INDEX IF NOT EXISTS idx_messages_conversation ON messages(conversation_id)"
        )
        cursor.execute(
            "CREATE INDEX IF NOT EXISTS idx_conversations_user ON conversations(user_id, status)"
        )

        conn.commit()
        conn.close()
        logger.info(f"Database initialized at {self.db_path}")

    def _check_columns(self, table: str, columns) -> None:
        if table not in COLUMNS:
            raise StoreError(f"Unknown table: {table}")
        unknown = [c for c in columns if c not in COLUMNS[table]]
        if unknown:
            raise StoreError(f"Unknown column(s) for {table}: {', '.join(unknown)}")

    def _encode(self, row: Dict[str, Any]) -> Dict[str, Any]:
        return {
            k: json.dumps(v) if k in JSON_COLUMNS and v is not None else v
            for k, v in row.items()
        }

    def _decode(self, row: sqlite3.Row) -> Dict[str, Any]:
        data = dict(row)
        for column in JSON_COLUMNS:
            if data.get(column) is not None:
                data[column] = json.loads(data[column])
        return data

    def insert(self, table: str, row: Dict[str, Any]) -> Dict[str, Any]:
        """Insert one row, generating ``id`` and ``created_at`` when absent."""
        row = dict(row)
        row.setdefault("id", str(uuid.uuid4()))
        row.setdefault("created_at", utc_now_iso())
        self._check_columns(table, row.keys())

        columns = list(row.keys())
        placeholders = ", ".join("?" for _ in columns)
        encoded = self._encode(row)

        try:
            conn = self._get_connection()
            try:
                conn.execute(
                    f"INSERT INTO {table} ({', '.join(columns)}) VALUES ({placeholders})",
                    [encoded[c] for c in columns]
                )
                conn.commit()
                created = conn.execute(
                    f"SELECT * FROM {table} WHERE id = ?", (row["id"],)
                ).fetchone()
            finally:
                conn.close()
        except sqlite3.Error as e:
            raise StoreError(f"Insert into {table} failed: {e}") from e

        return self._decode(created)

    def update(
        self,
        table: str,
        row_id: str,
        fields: Dict[str, Any]
    ) -> Optional[Dict[str, Any]]:
        """Partially update one row by id."""
        self._check_columns(table, fields.keys())
        if not fields:
            raise StoreError("Update requires at least one field")

        columns = list(fields.keys())
        assignments = ", ".join(f"{c} = ?" for c in columns)
        encoded = self._encode(fields)

        try:
            conn = self._get_connection()
            try:
                cursor = conn.execute(
                    f"UPDATE {table} SET {assignments} WHERE id = ?",
                    [encoded[c] for c in columns] + [row_id]
                )
                conn.commit()
                if cursor.rowcount == 0:
                    return None
                updated = conn.execute(
                    f"SELECT * FROM {table} WHERE id = ?", (row_id,)
                ).fetchone()
            finally:
                conn.close()
        except sqlite3.Error as e:
            raise StoreError(f"Update of {table}/{row_id} failed: {e}") from e

        return self._decode(updated)

    def select(
        self,
        table: str,
        filters: Optional[Dict[str, Any]] = None,
        order_by: Optional[str] = None,
        descending: bool = False,
        limit: Optional[int] = None
    ) -> List[Dict[str, Any]]:
        """Select rows matching equality filters, insertion order by default."""
        filters = filters or {}
        self._check_columns(table, list(filters.keys()) + ([order_by] if order_by else []))

        sql = f"SELECT * FROM {table}"
        params: List[Any] = []
        if filters:
            sql += " WHERE " + " AND ".join(f"{c} = ?" for c in filters)
            params.extend(self._encode(filters)[c] for c in filters)

        direction = "DESC" if descending else "ASC"
        if order_by:
            # rowid breaks ties between rows created in the same instant
            sql += f" ORDER BY {order_by} {direction}, rowid {direction}"
        else:
            sql += f" ORDER BY rowid {direction}"

        if limit is not None:
            sql += " LIMIT ?"
            params.append(limit)

        try:
            conn = self._get_connection()
            try:
                rows = conn.execute(sql, params).fetchall()
            finally:
                conn.close()
        except sqlite3.Error as e:
            raise StoreError(f"Select from {table} failed: {e}") from e

        return [self._decode(row) for row in rows]
