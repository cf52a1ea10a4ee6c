from __future__ import annotations

import logging
import sqlite3
from typing import Iterable, Sequence

from ..errors import PhotoError
from ..models import Contact, ContactSource
from ..photos import PhotoIngestor, decode_photo
from .codec import (
    decode_addresses,
    decode_emails,
    decode_events,
    decode_group_ids,
    decode_phone_numbers,
    encode_addresses,
    encode_emails,
    encode_events,
    encode_group_ids,
    encode_phone_numbers,
)
from .db import CONTACTS_TABLE
from .groups import GroupStore

LOG = logging.getLogger(__name__)

_COLUMNS = (
    "id, first_name, middle_name, surname, phone_numbers, emails, events, starred, "
    'photo, addresses, notes, "groups"'
)


class ContactStore:
    """CRUD over the private ``contacts`` table.

    Every write is a full-row rewrite: nested phone numbers, emails,
    addresses and events are replaced, never patched. Rows read back are
    tagged ``ContactSource.PRIVATE``.
    """

    def __init__(
        self,
        conn: sqlite3.Connection,
        groups: GroupStore,
        photos: PhotoIngestor | None = None,
    ):
        self.conn = conn
        self.groups = groups
        self.photos = photos or PhotoIngestor()

    # ------------------------------------------------------------------
    # Writes
    # ------------------------------------------------------------------

    def _photo_bytes(self, contact: Contact) -> bytes | None:
        # A new reference wins; otherwise keep the in-memory image. Neither
        # means the photo was removed.
        if contact.photo_uri:
            return self.photos.ingest(contact.photo_uri)
        if contact.photo is not None:
            return self.photos.encode(contact.photo)
        return None

    def _values(self, contact: Contact, *, keep_stored_photo: bool = False) -> dict:
        values = {
            "first_name": contact.first_name,
            "middle_name": contact.middle_name,
            "surname": contact.surname,
            "phone_numbers": encode_phone_numbers(contact.phone_numbers),
            "emails": encode_emails(contact.emails),
            "addresses": encode_addresses(contact.addresses),
            "events": encode_events(contact.events),
            "starred": 1 if contact.starred else 0,
            "notes": contact.notes,
            "groups": encode_group_ids(contact.group_ids),
        }
        # The image read back from the row is the stored thumbnail; leave
        # the blob alone instead of re-encoding it on every edit.
        if not (keep_stored_photo and not contact.photo_uri and contact.photo is not None):
            values["photo"] = self._photo_bytes(contact)
        return values

    def insert_returning_id(self, contact: Contact) -> int | None:
        if not contact.is_private:
            LOG.warning("Refusing to store external contact %s", contact.id)
            return None
        try:
            values = self._values(contact)
        except PhotoError as e:
            LOG.warning("Contact not inserted: %s", e)
            return None

        cols = ", ".join(f'"{k}"' for k in values)
        marks = ", ".join(["?"] * len(values))
        with self.conn:
            cur = self.conn.execute(
                f"INSERT INTO {CONTACTS_TABLE}({cols}) VALUES ({marks})", tuple(values.values())
            )
        return int(cur.lastrowid) if cur.lastrowid else None

    def insert(self, contact: Contact) -> bool:
        return self.insert_returning_id(contact) is not None

    def update(self, contact: Contact) -> bool:
        if not contact.is_private:
            LOG.warning("Refusing to update external contact %s", contact.id)
            return False
        try:
            values = self._values(contact, keep_stored_photo=True)
        except PhotoError as e:
            LOG.warning("Contact %d not updated: %s", contact.id, e)
            return False

        assignments = ", ".join(f'"{k}"=?' for k in values)
        with self.conn:
            cur = self.conn.execute(
                f"UPDATE {CONTACTS_TABLE} SET {assignments} WHERE id=?",
                (*values.values(), contact.id),
            )
        return cur.rowcount == 1

    def delete(self, ids: Iterable[int]) -> None:
        ids = [int(i) for i in ids]
        if not ids:
            return
        placeholders = ",".join(["?"] * len(ids))
        with self.conn:
            self.conn.execute(f"DELETE FROM {CONTACTS_TABLE} WHERE id IN ({placeholders})", ids)

    def delete_contact(self, contact_id: int) -> None:
        self.delete([contact_id])

    def toggle_favorites(self, ids: Iterable[int], add_to_favorites: bool) -> None:
        ids = [int(i) for i in ids]
        if not ids:
            return
        placeholders = ",".join(["?"] * len(ids))
        with self.conn:
            self.conn.execute(
                f"UPDATE {CONTACTS_TABLE} SET starred=? WHERE id IN ({placeholders})",
                (1 if add_to_favorites else 0, *ids),
            )

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    def get_all(self, selection: str | None = None, selection_args: Sequence = ()) -> list[Contact]:
        """Return stored contacts, optionally filtered by a SQL WHERE clause.

        Group ids are resolved against the groups stored right now; ids of
        deleted groups are dropped.
        """
        stored_groups = self.groups.get_all()

        sql = f"SELECT {_COLUMNS} FROM {CONTACTS_TABLE}"
        if selection:
            sql += f" WHERE {selection}"
        rows = self.conn.execute(sql, tuple(selection_args)).fetchall()

        contacts: list[Contact] = []
        for r in rows:
            group_ids = decode_group_ids(r["groups"])
            contacts.append(
                Contact(
                    id=int(r["id"]),
                    first_name=r["first_name"] or "",
                    middle_name=r["middle_name"] or "",
                    surname=r["surname"] or "",
                    phone_numbers=decode_phone_numbers(r["phone_numbers"]),
                    emails=decode_emails(r["emails"]),
                    addresses=decode_addresses(r["addresses"]),
                    events=decode_events(r["events"]),
                    source=ContactSource.PRIVATE,
                    starred=bool(r["starred"]),
                    photo=decode_photo(r["photo"]),
                    notes=r["notes"] or "",
                    groups=[g for g in stored_groups if g.id in group_ids],
                )
            )
        return contacts

    def get_by_id(self, contact_id: int) -> Contact | None:
        found = self.get_all("id = ?", (contact_id,))
        return found[0] if found else None

    def get_favorites(self) -> list[Contact]:
        return self.get_all("starred = 1")
