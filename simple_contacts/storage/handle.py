from __future__ import annotations

import logging
import sqlite3
from dataclasses import dataclass, field
from pathlib import Path

from ..ids import check_id_floors
from ..photos import PhotoIngestor
from .contacts import ContactStore
from .db import ensure_schema, open_db
from .groups import GroupMembership, GroupStore

LOG = logging.getLogger(__name__)


@dataclass
class Storage:
    """One open contacts database and the stores sharing its connection.

    Build it once at startup with `open_storage` and hand it to whoever needs
    it; nothing in the package keeps a module-level connection.
    """

    conn: sqlite3.Connection
    photos: PhotoIngestor = field(default_factory=PhotoIngestor)

    def __post_init__(self) -> None:
        self.groups = GroupStore(self.conn)
        self.contacts = ContactStore(self.conn, self.groups, self.photos)
        self.membership = GroupMembership(self.conn)

    def close(self) -> None:
        self.conn.close()


def open_storage(path: Path | str | None = None, *, photos: PhotoIngestor | None = None) -> Storage:
    check_id_floors()
    conn = open_db(path)
    version = ensure_schema(conn)
    LOG.debug("Contacts store %s at schema version %d", path or "(default)", version)
    return Storage(conn, photos or PhotoIngestor())
