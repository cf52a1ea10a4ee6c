"""JSON encoding of the multi-valued contact columns.

Each composite field (phone numbers, emails, addresses, events, group ids)
lives in a single TEXT column. Reads never fail on a bad column: anything
that does not decode cleanly comes back empty so the rest of the contact
is still usable.
"""

from __future__ import annotations

import json
import logging
from typing import Iterable, Sequence, TypeVar

from ..models import Address, Email, Event, PhoneNumber

LOG = logging.getLogger(__name__)

T = TypeVar("T", PhoneNumber, Email, Address, Event)


def _encode_items(items: Sequence[T]) -> str:
    return json.dumps([item.to_dict() for item in items], ensure_ascii=False)


def _decode_items(raw: str | None, cls: type[T]) -> list[T]:
    if not raw:
        return []
    try:
        data = json.loads(raw)
    except (TypeError, ValueError):
        LOG.debug("Undecodable %s column: %r", cls.__name__, raw[:80])
        return []
    if not isinstance(data, list):
        return []

    out: list[T] = []
    for d in data:
        if not isinstance(d, dict):
            continue
        try:
            out.append(cls.from_dict(d))
        except (KeyError, TypeError, ValueError):
            # Skip the broken entry, keep the rest.
            continue
    return out


def encode_phone_numbers(items: Sequence[PhoneNumber]) -> str:
    return _encode_items(items)


def decode_phone_numbers(raw: str | None) -> list[PhoneNumber]:
    return _decode_items(raw, PhoneNumber)


def encode_emails(items: Sequence[Email]) -> str:
    return _encode_items(items)


def decode_emails(raw: str | None) -> list[Email]:
    return _decode_items(raw, Email)


def encode_addresses(items: Sequence[Address]) -> str:
    return _encode_items(items)


def decode_addresses(raw: str | None) -> list[Address]:
    return _decode_items(raw, Address)


def encode_events(items: Sequence[Event]) -> str:
    return _encode_items(items)


def decode_events(raw: str | None) -> list[Event]:
    return _decode_items(raw, Event)


def encode_group_ids(ids: Iterable[int]) -> str:
    return json.dumps(sorted({int(i) for i in ids}))


def decode_group_ids(raw: str | None) -> set[int]:
    if not raw:
        return set()
    try:
        data = json.loads(raw)
    except (TypeError, ValueError):
        LOG.debug("Undecodable groups column: %r", raw[:80])
        return set()
    if not isinstance(data, list):
        return set()
    # bool is an int subclass; a stray true/false is not a group id
    return {int(v) for v in data if isinstance(v, int) and not isinstance(v, bool)}
