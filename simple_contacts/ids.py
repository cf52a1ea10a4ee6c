"""ID-space partitioning between private and external records.

The external directory service numbers its contacts and groups from a small
integer range starting near zero. Private rows are numbered from a reserved
floor upwards so both spaces can live in one collection without collisions.
"""

from __future__ import annotations

from typing import Final

from .errors import StorageError

PRIVATE_CONTACT_ID_FLOOR: Final[int] = 1_000_000
PRIVATE_GROUP_ID_FLOOR: Final[int] = 1_000_000

# Highest ID the external directory is assumed to ever hand out.
EXTERNAL_ID_CEILING: Final[int] = 999_999


def check_id_floors(
    contact_floor: int = PRIVATE_CONTACT_ID_FLOOR,
    group_floor: int = PRIVATE_GROUP_ID_FLOOR,
    external_ceiling: int = EXTERNAL_ID_CEILING,
) -> None:
    """Fail fast if the private floors could overlap external IDs."""
    for name, floor in (("contact", contact_floor), ("group", group_floor)):
        if floor <= external_ceiling:
            raise StorageError(
                f"Private {name} ID floor {floor} must exceed the external ID ceiling {external_ceiling}"
            )


def is_private_contact_id(contact_id: int) -> bool:
    return contact_id >= PRIVATE_CONTACT_ID_FLOOR


def is_private_group_id(group_id: int) -> bool:
    return group_id >= PRIVATE_GROUP_ID_FLOOR
