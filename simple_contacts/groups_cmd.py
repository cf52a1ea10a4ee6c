"""`simple-contacts groups ...` commands."""

from __future__ import annotations

import json

from .group_actions import GroupActions
from .models import Group
from .storage import Storage, open_storage


def _find_group(groups: list[Group], name_or_id: str) -> int | None:
    """Position of the group matching an id or (case-insensitive) title."""
    for i, g in enumerate(groups):
        if str(g.id) == name_or_id:
            return i
    wanted = name_or_id.casefold()
    for i, g in enumerate(groups):
        if g.title.casefold() == wanted:
            return i
    return None


def _with_counts(storage: Storage) -> list[Group]:
    contacts = storage.contacts.get_all()
    groups = storage.groups.get_all()
    for g in groups:
        g.contacts_count = len(storage.membership.contacts_in_group(contacts, g.id))
    return sorted(groups, key=lambda g: g.title.casefold())


def _run(storage: Storage, args) -> int:
    cmd = args.groups_command

    if cmd == "create":
        group = storage.groups.insert(args.title)
        if group is None:
            print("✗ Failed to create group")
            return 1
        print(f"✓ Created group {group.id}: {group.title}")
        return 0

    groups = _with_counts(storage)

    if cmd == "list":
        if args.json:
            print(json.dumps(
                [{"id": g.id, "title": g.title, "contacts": g.contacts_count} for g in groups],
                indent=2, ensure_ascii=False,
            ))
            return 0
        if not groups:
            print("No groups found.")
            return 0
        for g in groups:
            print(f"{g.id}  {g.title} ({g.contacts_count})")
        return 0

    position = _find_group(groups, args.group)
    if position is None:
        print(f"✗ Group not found: {args.group}")
        return 1
    group = groups[position]

    if cmd == "rename":
        actions = GroupActions(storage, groups)
        actions.toggle_selection(position)
        if not actions.edit_selected_group(args.title):
            print(f"✗ Failed to rename group {group.title}")
            return 1
        print(f"✓ Renamed {group.title} → {args.title}")
        return 0

    if cmd == "delete":
        actions = GroupActions(storage, groups)
        actions.toggle_selection(position)
        actions.delete_selected_groups()
        print(f"✓ Deleted group: {group.title}")
        return 0

    if cmd in ("add", "remove"):
        contacts = [c for c in storage.contacts.get_all() if c.id in set(args.contact_ids)]
        missing = set(args.contact_ids) - {c.id for c in contacts}
        for contact_id in sorted(missing):
            print(f"✗ Contact not found: {contact_id}")
        if cmd == "add":
            failed = storage.membership.add_contacts_to_group(contacts, group.id)
        else:
            failed = storage.membership.remove_contacts_from_group(contacts, group.id)
        done = len(contacts) - len(failed)
        verb = "Added" if cmd == "add" else "Removed"
        print(f"✓ {verb} {done} contact(s) {'to' if cmd == 'add' else 'from'} {group.title}")
        return 1 if failed or missing else 0

    print(f"✗ Unknown groups command: {cmd}")
    return 2


def run(args) -> int:
    storage = open_storage(getattr(args, "db", None))
    try:
        return _run(storage, args)
    finally:
        storage.close()
