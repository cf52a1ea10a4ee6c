from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING

from .ids import PRIVATE_GROUP_ID_FLOOR

if TYPE_CHECKING:
    from PIL import Image

# Type codes, shared with the system contacts provider.
PHONE_TYPE_HOME = 1
PHONE_TYPE_MOBILE = 2
PHONE_TYPE_WORK = 3
PHONE_TYPE_OTHER = 7

EMAIL_TYPE_HOME = 1
EMAIL_TYPE_WORK = 2
EMAIL_TYPE_OTHER = 3
EMAIL_TYPE_MOBILE = 4

ADDRESS_TYPE_HOME = 1
ADDRESS_TYPE_WORK = 2
ADDRESS_TYPE_OTHER = 3

EVENT_TYPE_ANNIVERSARY = 1
EVENT_TYPE_OTHER = 2
EVENT_TYPE_BIRTHDAY = 3

CUSTOM_TYPE = 0


class ContactSource(str, Enum):
    PRIVATE = "private"
    EXTERNAL = "external"


@dataclass
class _Field:
    """Labelled value nested inside a contact (phone, email, ...)."""

    value: str
    type: int
    label: str = ""

    def to_dict(self) -> dict:
        return {"value": self.value, "type": self.type, "label": self.label}

    @classmethod
    def from_dict(cls, d: dict):
        return cls(value=str(d["value"]), type=int(d["type"]), label=str(d.get("label") or ""))


@dataclass
class PhoneNumber(_Field):
    pass


@dataclass
class Email(_Field):
    pass


@dataclass
class Address(_Field):
    pass


@dataclass
class Event(_Field):
    """`value` is the date as stored by the provider, e.g. ``1990-05-17`` or ``--05-17``."""


@dataclass
class Group:
    id: int
    title: str
    contacts_count: int = 0

    def is_private_secret_group(self) -> bool:
        return self.id >= PRIVATE_GROUP_ID_FLOOR


@dataclass
class Contact:
    id: int = 0
    first_name: str = ""
    middle_name: str = ""
    surname: str = ""
    photo_uri: str = ""
    phone_numbers: list[PhoneNumber] = field(default_factory=list)
    emails: list[Email] = field(default_factory=list)
    addresses: list[Address] = field(default_factory=list)
    events: list[Event] = field(default_factory=list)
    source: ContactSource = ContactSource.PRIVATE
    starred: bool = False
    photo: "Image.Image | None" = None
    notes: str = ""
    groups: list[Group] = field(default_factory=list)

    @property
    def group_ids(self) -> set[int]:
        return {g.id for g in self.groups}

    @property
    def is_private(self) -> bool:
        return self.source == ContactSource.PRIVATE

    def get_full_name(self) -> str:
        parts = [p.strip() for p in (self.first_name, self.middle_name, self.surname)]
        name = " ".join(p for p in parts if p)
        if name:
            return name
        if self.emails:
            return self.emails[0].value
        if self.phone_numbers:
            return self.phone_numbers[0].value
        return ""
