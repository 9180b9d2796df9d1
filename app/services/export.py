"""Bulk export of the loaded vendor list as a JSON document."""

from __future__ import annotations

import json
from collections.abc import Sequence
from datetime import date, datetime, timezone

from app.schemas.vendor import Vendor

EXPORT_FILENAME_PREFIX = "vendors"
EXPORT_MEDIA_TYPE = "application/json"


def serialize_vendors(vendors: Sequence[Vendor]) -> str:
    """Pretty-printed JSON array of *vendors*, in the order given."""
    return json.dumps(
        [v.to_record() for v in vendors],
        indent=2,
        ensure_ascii=False,
    )


def suggested_filename(on: date | None = None) -> str:
    """``vendors_YYYY-MM-DD.json`` for *on* (default: today, UTC)."""
    day = on or datetime.now(timezone.utc).date()
    if isinstance(day, datetime):
        day = day.date()
    return f"{EXPORT_FILENAME_PREFIX}_{day.isoformat()}.json"
