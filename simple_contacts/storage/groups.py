"""Private groups and group membership.

Membership is denormalized: every private contact row carries the JSON list
of group ids it belongs to (``contacts.groups``). There is no join table and
no foreign key. Deleting a group leaves stale ids behind unless the caller
first removes the group from its members; readers drop ids that no longer
match a stored group.
"""

from __future__ import annotations

import logging
import sqlite3
from typing import Iterable, Sequence

from ..models import Contact, Group
from .codec import encode_group_ids
from .db import CONTACTS_TABLE, GROUPS_TABLE

LOG = logging.getLogger(__name__)


def _placeholders(n: int) -> str:
    return ",".join(["?"] * n)


class GroupStore:
    def __init__(self, conn: sqlite3.Connection):
        self.conn = conn

    def insert(self, title: str) -> Group | None:
        with self.conn:
            cur = self.conn.execute(f'INSERT INTO "{GROUPS_TABLE}"(title) VALUES (?)', (title,))
        if not cur.lastrowid:
            return None
        return Group(id=int(cur.lastrowid), title=title)

    def rename(self, group: Group) -> bool:
        with self.conn:
            cur = self.conn.execute(
                f'UPDATE "{GROUPS_TABLE}" SET title=? WHERE id=?', (group.title, group.id)
            )
        return cur.rowcount == 1

    def delete(self, ids: Iterable[int]) -> None:
        """Remove groups by id. Contact rows are left untouched."""
        ids = [int(i) for i in ids]
        if not ids:
            return
        with self.conn:
            self.conn.execute(
                f'DELETE FROM "{GROUPS_TABLE}" WHERE id IN ({_placeholders(len(ids))})', ids
            )

    def delete_group(self, group_id: int) -> None:
        self.delete([group_id])

    def get_all(self) -> list[Group]:
        rows = self.conn.execute(f'SELECT id, title FROM "{GROUPS_TABLE}"').fetchall()
        return [Group(id=int(r["id"]), title=str(r["title"] or "")) for r in rows]

    def get_by_id(self, group_id: int) -> Group | None:
        row = self.conn.execute(
            f'SELECT id, title FROM "{GROUPS_TABLE}" WHERE id=?', (group_id,)
        ).fetchone()
        if row is None:
            return None
        return Group(id=int(row["id"]), title=str(row["title"] or ""))


class GroupMembership:
    """Adds and removes private contacts to/from groups.

    Each contact is rewritten with its own UPDATE; a batch is not atomic.
    Batch calls return the ids of contacts whose rewrite did not land so the
    caller can decide what to do with them.
    """

    def __init__(self, conn: sqlite3.Connection):
        self.conn = conn

    def update_contact_groups(self, contact: Contact, group_ids: Iterable[int]) -> bool:
        if not contact.is_private:
            LOG.warning("Refusing to rewrite groups of external contact %s", contact.id)
            return False
        with self.conn:
            cur = self.conn.execute(
                f'UPDATE {CONTACTS_TABLE} SET "groups"=? WHERE id=?',
                (encode_group_ids(group_ids), contact.id),
            )
        return cur.rowcount == 1

    def _rewrite_each(self, contacts: Sequence[Contact], group_id: int, *, add: bool) -> list[int]:
        failed: list[int] = []
        for contact in contacts:
            ids = set(contact.group_ids)
            if add:
                ids.add(group_id)
            else:
                ids.discard(group_id)
            if not self.update_contact_groups(contact, ids):
                LOG.warning(
                    "Group %d membership not updated for contact %d", group_id, contact.id
                )
                failed.append(contact.id)
        return failed

    def add_contacts_to_group(self, contacts: Sequence[Contact], group_id: int) -> list[int]:
        return self._rewrite_each(contacts, group_id, add=True)

    def remove_contacts_from_group(self, contacts: Sequence[Contact], group_id: int) -> list[int]:
        return self._rewrite_each(contacts, group_id, add=False)

    @staticmethod
    def contacts_in_group(contacts: Iterable[Contact], group_id: int) -> list[Contact]:
        return [c for c in contacts if group_id in c.group_ids]
