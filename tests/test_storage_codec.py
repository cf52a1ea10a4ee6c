from __future__ import annotations

import pytest

from simple_contacts.models import (
    ADDRESS_TYPE_WORK,
    CUSTOM_TYPE,
    EMAIL_TYPE_WORK,
    EVENT_TYPE_BIRTHDAY,
    PHONE_TYPE_MOBILE,
    Address,
    Email,
    Event,
    PhoneNumber,
)
from simple_contacts.storage import codec


@pytest.mark.parametrize(
    "encode, decode, items",
    [
        (
            codec.encode_phone_numbers,
            codec.decode_phone_numbers,
            [PhoneNumber("+1 555 0100", PHONE_TYPE_MOBILE), PhoneNumber("0800", CUSTOM_TYPE, "Pager")],
        ),
        (codec.encode_emails, codec.decode_emails, [Email("ada@example.com", EMAIL_TYPE_WORK)]),
        (
            codec.encode_addresses,
            codec.decode_addresses,
            [Address("12 Rue de l'Église\n75001 Paris", ADDRESS_TYPE_WORK)],
        ),
        (codec.encode_events, codec.decode_events, [Event("1815-12-10", EVENT_TYPE_BIRTHDAY)]),
    ],
)
def test_composite_fields_round_trip(encode, decode, items):
    assert decode(encode(items)) == items
    assert decode(encode([])) == []


def test_round_trip_preserves_order():
    phones = [PhoneNumber(str(n), PHONE_TYPE_MOBILE) for n in (3, 1, 2)]
    assert [p.value for p in codec.decode_phone_numbers(codec.encode_phone_numbers(phones))] == ["3", "1", "2"]


@pytest.mark.parametrize("raw", [None, "", "not json", "{}", '"text"', "42"])
def test_bad_text_decodes_to_empty(raw):
    assert codec.decode_phone_numbers(raw) == []
    assert codec.decode_emails(raw) == []
    assert codec.decode_addresses(raw) == []
    assert codec.decode_events(raw) == []
    assert codec.decode_group_ids(raw) == set()


def test_broken_entries_are_skipped_not_fatal():
    raw = '[{"value": "1", "type": 2}, {"type": 2}, "junk", {"value": "3", "type": "x"}, {"value": "4", "type": 7}]'
    assert codec.decode_phone_numbers(raw) == [PhoneNumber("1", 2), PhoneNumber("4", 7)]


def test_legacy_entries_without_label_decode():
    assert codec.decode_emails('[{"value": "a@b.c", "type": 1}]') == [Email("a@b.c", 1)]


def test_group_ids_round_trip_as_set():
    ids = {1_000_003, 1_000_001, 1_000_002}
    encoded = codec.encode_group_ids(ids)
    assert encoded == "[1000001, 1000002, 1000003]"
    assert codec.decode_group_ids(encoded) == ids
    assert codec.decode_group_ids(codec.encode_group_ids(set())) == set()


def test_group_ids_are_deduplicated():
    assert codec.encode_group_ids([5, 5, 7]) == "[5, 7]"


def test_group_ids_ignore_non_integers():
    assert codec.decode_group_ids('[1, "x", true, 2.5, 2]') == {1, 2}
