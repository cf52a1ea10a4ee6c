"""Boundary with the system contacts directory.

The directory owns its own contacts and groups, numbered below the private
ID floors. This package never writes to it: external records are merged into
reads tagged ``ContactSource.EXTERNAL`` and deletes of external records are
handed back to the directory.
"""

from __future__ import annotations

import logging
from dataclasses import replace
from typing import Iterable, Protocol, Sequence

from .ids import is_private_contact_id, is_private_group_id
from .models import Contact, ContactSource, Group
from .storage import Storage

LOG = logging.getLogger(__name__)


class ContactsDirectory(Protocol):
    def get_contacts(self) -> list[Contact]: ...

    def get_groups(self) -> list[Group]: ...

    def delete_contacts(self, ids: Sequence[int]) -> None: ...

    def delete_group(self, group_id: int) -> None: ...

    def rename_group(self, group: Group) -> bool: ...


def tag_external(contacts: Iterable[Contact]) -> list[Contact]:
    return [replace(c, source=ContactSource.EXTERNAL) for c in contacts]


def merge_contacts(private: Iterable[Contact], external: Iterable[Contact]) -> list[Contact]:
    """Private and external contacts as one collection, external ones tagged."""
    merged = list(private)
    for c in tag_external(external):
        if is_private_contact_id(c.id):
            LOG.warning("Dropping external contact %d: id is inside the private range", c.id)
            continue
        merged.append(c)
    return merged


def merge_groups(private: Iterable[Group], external: Iterable[Group]) -> list[Group]:
    merged = list(private)
    for g in external:
        if is_private_group_id(g.id):
            LOG.warning("Dropping external group %d: id is inside the private range", g.id)
            continue
        merged.append(g)
    return merged


def get_all_contacts(storage: Storage, directory: ContactsDirectory | None = None) -> list[Contact]:
    private = storage.contacts.get_all()
    if directory is None:
        return private
    return merge_contacts(private, directory.get_contacts())


def get_all_groups(storage: Storage, directory: ContactsDirectory | None = None) -> list[Group]:
    private = storage.groups.get_all()
    if directory is None:
        return private
    return merge_groups(private, directory.get_groups())


def delete_contacts(
    storage: Storage, contacts: Iterable[Contact], directory: ContactsDirectory | None = None
) -> None:
    """Delete private contacts locally and hand external ones to the directory."""
    private_ids: list[int] = []
    external_ids: list[int] = []
    for c in contacts:
        (private_ids if c.is_private else external_ids).append(c.id)

    storage.contacts.delete(private_ids)
    if external_ids:
        if directory is None:
            LOG.warning("No directory available to delete external contacts %s", external_ids)
            return
        directory.delete_contacts(external_ids)
