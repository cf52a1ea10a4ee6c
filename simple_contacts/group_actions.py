"""Selection-driven actions over the groups list.

A list UI owns rendering, selection highlighting and confirmation prompts.
It hands the currently shown groups to `GroupActions` and calls the entry
points below; `refresh` is invoked with a tab mask whenever the visible
groups change.
"""

from __future__ import annotations

import logging
from typing import Callable

from .directory import ContactsDirectory
from .models import Group
from .storage import Storage

LOG = logging.getLogger(__name__)

CONTACTS_TAB_MASK = 1
FAVORITES_TAB_MASK = 2
GROUPS_TAB_MASK = 4

RefreshListener = Callable[[int], None]


class GroupActions:
    def __init__(
        self,
        storage: Storage,
        groups: list[Group],
        refresh: RefreshListener | None = None,
        directory: ContactsDirectory | None = None,
    ):
        self.storage = storage
        self.groups = list(groups)
        self.refresh = refresh
        self.directory = directory
        self.selected_positions: set[int] = set()

    # -- selection ---------------------------------------------------------

    def toggle_selection(self, position: int) -> None:
        if not 0 <= position < len(self.groups):
            raise IndexError(position)
        self.selected_positions ^= {position}

    def select_all(self) -> None:
        self.selected_positions = set(range(len(self.groups)))

    def clear_selection(self) -> None:
        self.selected_positions.clear()

    def is_one_item_selected(self) -> bool:
        return len(self.selected_positions) == 1

    def selected_groups(self) -> list[Group]:
        return [self.groups[p] for p in sorted(self.selected_positions)]

    def update_items(self, groups: list[Group]) -> None:
        self.groups = list(groups)
        self.clear_selection()

    def _notify(self) -> None:
        if self.refresh is not None:
            self.refresh(GROUPS_TAB_MASK)

    # -- actions -----------------------------------------------------------

    def edit_selected_group(self, new_title: str) -> bool:
        """Rename the single selected group."""
        if not self.is_one_item_selected():
            return False

        position = next(iter(self.selected_positions))
        group = self.groups[position]
        renamed = Group(id=group.id, title=new_title, contacts_count=group.contacts_count)

        if group.is_private_secret_group():
            ok = self.storage.groups.rename(renamed)
        elif self.directory is not None:
            ok = self.directory.rename_group(renamed)
        else:
            LOG.warning("No directory available to rename external group %d", group.id)
            ok = False

        if ok:
            self.groups[position] = renamed
            self.clear_selection()
            self._notify()
        return ok

    def delete_selected_groups(self) -> list[Group]:
        """Delete every selected group and return the ones removed from the list."""
        if not self.selected_positions:
            return []

        removed: list[Group] = []
        for position in sorted(self.selected_positions, reverse=True):
            group = self.groups[position]
            if group.is_private_secret_group():
                # Re-read each time: the previous iteration rewrote memberships.
                contacts = self.storage.contacts.get_all()
                members = self.storage.membership.contacts_in_group(contacts, group.id)
                self.storage.membership.remove_contacts_from_group(members, group.id)
                self.storage.groups.delete_group(group.id)
            elif self.directory is not None:
                self.directory.delete_group(group.id)
            else:
                LOG.warning("No directory available to delete external group %d", group.id)
                continue
            removed.append(group)

        removed_ids = {id(g) for g in removed}
        self.groups = [g for g in self.groups if id(g) not in removed_ids]
        self.clear_selection()
        self._notify()
        return removed
