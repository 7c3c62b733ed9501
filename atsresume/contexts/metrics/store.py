"""
Persistent SQLite store for usage counters.

Tracks distinct client identifiers and the number of PDFs produced. Each
operation opens its own connection so the store can be shared across request
threads.
"""

import os
import sqlite3
from contextlib import contextmanager
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

from atsresume.contexts.metrics.logger import _log_debug, _log_info
from atsresume.utils.timestamp import now_exact

load_dotenv()
METRICS_DB_PATH = Path(os.getenv("ATSRESUME_METRICS_DB", "outs/metrics.db"))

USERS_TOTAL = "users_total"
PDFS_TOTAL = "pdfs_total"


@dataclass
class MetricsSnapshot:
    """Aggregate counters as exposed by the metrics endpoint."""

    users_total: int = 0
    pdfs_total: int = 0


class MetricsStore:
    """
    SQLite-backed counters.

    Schema:
        clients(client_id PRIMARY KEY, first_seen)
        counters(name PRIMARY KEY, value)

    Example:
        store = MetricsStore(Path("outs/metrics.db"))
        counted = store.record_client("3f2b...")   # True on first sight
        store.increment_pdfs()
        snapshot = store.read_counters()
    """

    def __init__(self, db_path: Path = METRICS_DB_PATH):
        self.db_path = Path(db_path)
        self.db_path.parent.mkdir(parents=True, exist_ok=True)
        self._ensure_schema()

    @contextmanager
    def _connect(self):
        conn = sqlite3.connect(str(self.db_path), timeout=10)
        try:
            with conn:
                yield conn
        finally:
            conn.close()

    def _ensure_schema(self) -> None:
        with self._connect() as conn:
            conn.execute(
                """
                CREATE TABLE IF NOT EXISTS clients (
                    client_id TEXT PRIMARY KEY,
                    first_seen TEXT NOT NULL
                )
            """
            )
            conn.execute(
                """
                CREATE TABLE IF NOT EXISTS counters (
                    name TEXT PRIMARY KEY,
                    value INTEGER NOT NULL DEFAULT 0
                )
            """
            )
            conn.executemany(
                "INSERT OR IGNORE INTO counters (name, value) VALUES (?, 0)",
                [(USERS_TOTAL,), (PDFS_TOTAL,)],
            )

    def record_client(self, client_id: str) -> bool:
        """
        Record a client identifier.

        Idempotent: the users counter only moves the first time an identifier
        is seen.

        Returns:
            True if this call was the first sighting of client_id
        """
        with self._connect() as conn:
            cursor = conn.execute(
                "INSERT OR IGNORE INTO clients (client_id, first_seen) VALUES (?, ?)",
                (client_id, now_exact()),
            )
            first = cursor.rowcount == 1
            if first:
                conn.execute(
                    "UPDATE counters SET value = value + 1 WHERE name = ?", (USERS_TOTAL,)
                )

        if first:
            _log_info(f"New client recorded: {client_id}")
        else:
            _log_debug(f"Client already seen: {client_id}")
        return first

    def increment_pdfs(self) -> int:
        """Increment the PDFs-produced counter and return the new total."""
        with self._connect() as conn:
            conn.execute("UPDATE counters SET value = value + 1 WHERE name = ?", (PDFS_TOTAL,))
            row = conn.execute("SELECT value FROM counters WHERE name = ?", (PDFS_TOTAL,)).fetchone()
        return row[0]

    def read_counters(self) -> MetricsSnapshot:
        with self._connect() as conn:
            rows = dict(conn.execute("SELECT name, value FROM counters").fetchall())
        return MetricsSnapshot(
            users_total=rows.get(USERS_TOTAL, 0),
            pdfs_total=rows.get(PDFS_TOTAL, 0),
        )
