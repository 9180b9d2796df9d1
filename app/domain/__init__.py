"""Domain package — all ORM models are imported here so create_tables() sees them.

Folder intent:
  kv_entry.py  — key/value rows behind the SQL storage gateway
  mixins.py    — Shared TimestampMixin
"""

from app.domain.kv_entry import KeyValueEntry

__all__ = [
    "KeyValueEntry",
]
