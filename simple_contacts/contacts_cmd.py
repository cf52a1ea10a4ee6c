"""`simple-contacts contacts ...` commands.

Text output by default, `--json` for scripts.
"""

from __future__ import annotations

import json

from .models import (
    ADDRESS_TYPE_HOME,
    EMAIL_TYPE_HOME,
    EVENT_TYPE_BIRTHDAY,
    PHONE_TYPE_MOBILE,
    Address,
    Contact,
    Email,
    Event,
    PhoneNumber,
)
from .storage import Storage, open_storage


def _contact_to_dict(c: Contact) -> dict:
    return {
        "id": c.id,
        "name": c.get_full_name(),
        "first_name": c.first_name,
        "middle_name": c.middle_name,
        "surname": c.surname,
        "phone_numbers": [p.to_dict() for p in c.phone_numbers],
        "emails": [e.to_dict() for e in c.emails],
        "addresses": [a.to_dict() for a in c.addresses],
        "events": [e.to_dict() for e in c.events],
        "starred": c.starred,
        "notes": c.notes,
        "groups": [{"id": g.id, "title": g.title} for g in c.groups],
        "has_photo": c.photo is not None,
        "source": c.source.value,
    }


def _apply_fields(contact: Contact, args) -> None:
    for attr in ("first_name", "middle_name", "surname", "notes"):
        value = getattr(args, attr, None)
        if value is not None:
            setattr(contact, attr, value)
    if getattr(args, "phone", None):
        contact.phone_numbers = [PhoneNumber(p, PHONE_TYPE_MOBILE) for p in args.phone]
    if getattr(args, "email", None):
        contact.emails = [Email(e, EMAIL_TYPE_HOME) for e in args.email]
    if getattr(args, "address", None):
        contact.addresses = [Address(a, ADDRESS_TYPE_HOME) for a in args.address]
    if getattr(args, "birthday", None):
        contact.events = [e for e in contact.events if e.type != EVENT_TYPE_BIRTHDAY]
        contact.events.append(Event(args.birthday, EVENT_TYPE_BIRTHDAY))
    if getattr(args, "photo", None):
        contact.photo_uri = args.photo
    if getattr(args, "remove_photo", False):
        contact.photo = None
        contact.photo_uri = ""
    if getattr(args, "star", False):
        contact.starred = True


def _print_contact(c: Contact) -> None:
    star = "★ " if c.starred else ""
    print(f"{c.id}  {star}{c.get_full_name() or '(no name)'}")
    for p in c.phone_numbers:
        print(f"    phone: {p.value}")
    for e in c.emails:
        print(f"    email: {e.value}")
    for a in c.addresses:
        print(f"    address: {a.value}")
    for e in c.events:
        print(f"    event: {e.value}")
    if c.groups:
        print(f"    groups: {', '.join(g.title for g in c.groups)}")
    if c.notes:
        print(f"    notes: {c.notes}")


def _run(storage: Storage, args) -> int:
    cmd = args.contacts_command

    if cmd == "list":
        contacts = storage.contacts.get_favorites() if args.favorites else storage.contacts.get_all()
        contacts.sort(key=lambda c: c.get_full_name().casefold())
        if args.json:
            print(json.dumps([_contact_to_dict(c) for c in contacts], indent=2, ensure_ascii=False))
            return 0
        if not contacts:
            print("No contacts found.")
            return 0
        for c in contacts:
            star = "★ " if c.starred else "  "
            print(f"{c.id}  {star}{c.get_full_name() or '(no name)'}")
        return 0

    if cmd == "show":
        c = storage.contacts.get_by_id(args.id)
        if c is None:
            print(f"✗ Contact not found: {args.id}")
            return 1
        if args.json:
            print(json.dumps(_contact_to_dict(c), indent=2, ensure_ascii=False))
        else:
            _print_contact(c)
        return 0

    if cmd == "add":
        contact = Contact()
        _apply_fields(contact, args)
        new_id = storage.contacts.insert_returning_id(contact)
        if new_id is None:
            print("✗ Failed to add contact")
            return 1
        print(f"✓ Added contact {new_id}")
        return 0

    if cmd == "edit":
        contact = storage.contacts.get_by_id(args.id)
        if contact is None:
            print(f"✗ Contact not found: {args.id}")
            return 1
        _apply_fields(contact, args)
        if not storage.contacts.update(contact):
            print(f"✗ Failed to update contact {args.id}")
            return 1
        print(f"✓ Updated contact {args.id}")
        return 0

    if cmd == "delete":
        storage.contacts.delete(args.ids)
        print(f"✓ Deleted {len(args.ids)} contact(s)")
        return 0

    if cmd in ("star", "unstar"):
        storage.contacts.toggle_favorites(args.ids, cmd == "star")
        print(f"✓ {'Starred' if cmd == 'star' else 'Unstarred'} {len(args.ids)} contact(s)")
        return 0

    print(f"✗ Unknown contacts command: {cmd}")
    return 2


def run(args) -> int:
    storage = open_storage(getattr(args, "db", None))
    try:
        return _run(storage, args)
    finally:
        storage.close()
