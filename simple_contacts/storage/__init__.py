"""SQLite storage layer for simple-contacts.

Private contacts and groups live in one local database:
- schema creation + ordered, idempotent migrations (`db`)
- JSON codec for the multi-valued contact columns (`codec`)
- contact, group and membership stores sharing one connection

`open_storage()` builds the whole thing once; pass the result around.
"""

from .db import ensure_schema, open_db, schema_version  # noqa: F401
from .handle import Storage, open_storage  # noqa: F401
