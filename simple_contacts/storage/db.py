from __future__ import annotations

import logging
import sqlite3
from dataclasses import dataclass
from pathlib import Path
from typing import Callable

from .. import config
from ..errors import MigrationError
from ..ids import PRIVATE_CONTACT_ID_FLOOR, PRIVATE_GROUP_ID_FLOOR

LOG = logging.getLogger(__name__)

CONTACTS_TABLE = "contacts"
GROUPS_TABLE = "groups"


def open_db(path: Path | str | None = None) -> sqlite3.Connection:
    """Open the contacts database, creating its directory if needed.

    `path` defaults to ``storage.path`` from the config; ``":memory:"`` is
    passed through untouched.
    """
    if path is None:
        path = config.db_path()
    if str(path) != ":memory:":
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
    conn = sqlite3.connect(path)
    conn.row_factory = sqlite3.Row

    # Pragmas: safe defaults for a single-process local store
    conn.execute("PRAGMA journal_mode=WAL;")
    conn.execute("PRAGMA busy_timeout=5000;")
    return conn


# -----------------------------------------------------------------------------
# Introspection helpers
# -----------------------------------------------------------------------------


def table_exists(conn: sqlite3.Connection, table: str) -> bool:
    row = conn.execute(
        "SELECT 1 FROM sqlite_master WHERE type='table' AND name=?", (table,)
    ).fetchone()
    return row is not None


def column_names(conn: sqlite3.Connection, table: str) -> set[str]:
    return {str(r[1]) for r in conn.execute(f'PRAGMA table_info("{table}")').fetchall()}


def _add_column(conn: sqlite3.Connection, table: str, column: str, decl: str) -> None:
    # SQLite has no ADD COLUMN IF NOT EXISTS
    if column not in column_names(conn, table):
        conn.execute(f'ALTER TABLE "{table}" ADD COLUMN "{column}" {decl}')


def seed_sequence(conn: sqlite3.Connection, table: str, floor: int) -> None:
    """Start `table`'s AUTOINCREMENT counter at `floor` (next id is floor + 1).

    Only applied while the table has never issued an id, so an existing
    counter is never moved.
    """
    row = conn.execute("SELECT seq FROM sqlite_sequence WHERE name=?", (table,)).fetchone()
    if row is not None:
        return
    conn.execute("INSERT INTO sqlite_sequence (name, seq) VALUES (?, ?)", (table, floor))
    LOG.debug("Seeded %s id sequence at %d", table, floor)


# -----------------------------------------------------------------------------
# Migrations
# -----------------------------------------------------------------------------


def _create_contacts(conn: sqlite3.Connection) -> None:
    conn.execute(
        f"""
        CREATE TABLE IF NOT EXISTS {CONTACTS_TABLE} (
          id INTEGER PRIMARY KEY AUTOINCREMENT,
          first_name TEXT,
          middle_name TEXT,
          surname TEXT,
          photo BLOB,
          phone_numbers TEXT,
          emails TEXT,
          events TEXT,
          starred INTEGER
        )
        """
    )
    seed_sequence(conn, CONTACTS_TABLE, PRIVATE_CONTACT_ID_FLOOR)


def _add_addresses_and_notes(conn: sqlite3.Connection) -> None:
    _add_column(conn, CONTACTS_TABLE, "addresses", "TEXT DEFAULT ''")
    _add_column(conn, CONTACTS_TABLE, "notes", "TEXT DEFAULT ''")


def _create_groups(conn: sqlite3.Connection) -> None:
    conn.execute(
        f'CREATE TABLE IF NOT EXISTS "{GROUPS_TABLE}" (id INTEGER PRIMARY KEY AUTOINCREMENT, title TEXT)'
    )
    seed_sequence(conn, GROUPS_TABLE, PRIVATE_GROUP_ID_FLOOR)
    _add_column(conn, CONTACTS_TABLE, "groups", "TEXT DEFAULT ''")


@dataclass(frozen=True)
class Migration:
    version: int
    name: str
    apply: Callable[[sqlite3.Connection], None]


# Append-only. Every step must be safe to re-run on a store where it was
# partially applied.
MIGRATIONS: list[Migration] = [
    Migration(1, "create_contacts", _create_contacts),
    Migration(2, "add_addresses_and_notes", _add_addresses_and_notes),
    Migration(3, "create_groups", _create_groups),
]

SCHEMA_VERSION = MIGRATIONS[-1].version


def schema_version(conn: sqlite3.Connection) -> int:
    if not table_exists(conn, "schema_migrations"):
        return 0
    row = conn.execute("SELECT COALESCE(MAX(version), 0) AS v FROM schema_migrations").fetchone()
    return int(row[0])


def ensure_schema(conn: sqlite3.Connection, *, target: int | None = None) -> int:
    """Bring the store up to `target` (default: latest) and return the new version.

    Steps at or below the stored version are skipped; the rest run in order
    and are recorded as they complete. Only the sequence seed and the
    version row share a transaction: sqlite3 commits CREATE/ALTER TABLE on
    its own, so a crash can leave a step half applied and every step has to
    be safe to run again.
    """
    conn.execute(
        "CREATE TABLE IF NOT EXISTS schema_migrations ("
        "version INTEGER PRIMARY KEY, "
        "name TEXT NOT NULL DEFAULT '', "
        "applied_at TEXT NOT NULL DEFAULT (strftime('%Y-%m-%dT%H:%M:%fZ','now')))"
    )
    current = schema_version(conn)
    target = SCHEMA_VERSION if target is None else target

    for step in MIGRATIONS:
        if step.version <= current or step.version > target:
            continue
        LOG.info("Applying migration %d (%s)", step.version, step.name)
        try:
            with conn:
                step.apply(conn)
                conn.execute(
                    "INSERT OR IGNORE INTO schema_migrations(version, name) VALUES (?, ?)",
                    (step.version, step.name),
                )
        except sqlite3.Error as e:
            raise MigrationError(step.version, step.name, e) from e
        current = step.version

    return current
