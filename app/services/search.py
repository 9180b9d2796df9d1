"""Directory search over already-loaded vendors."""

from __future__ import annotations

from collections.abc import Sequence

from app.schemas.vendor import Vendor


def matches(vendor: Vendor, query: str) -> bool:
    # phone is matched case-sensitively
    needle = query.lower()
    return (
        needle in vendor.name.lower()
        or needle in vendor.address.lower()
        or query in vendor.phone
    )


def filter_vendors(vendors: Sequence[Vendor], query: str) -> list[Vendor]:
    """Vendors whose name/address (case-insensitive) or phone contain *query*, in input order."""
    if not query:
        return list(vendors)
    return [v for v in vendors if matches(v, query)]
