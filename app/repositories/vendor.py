"""Vendor repository — key scheme, identity, timestamps and the load/sort pipeline.

Each vendor lives under its own key ``vendor:<id>`` as a JSON document with
camelCase fields. The repository never validates form input; callers go
through :func:`app.services.validator.ensure_valid` first.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable

import pydantic

from app.core.clock import clock as default_clock
from app.core.exceptions import ConflictError, MalformedRecordError, PersistenceError
from app.schemas.vendor import Vendor, VendorInput
from app.storage.gateway import StorageError, StorageGateway

logger = logging.getLogger(__name__)

KEY_PREFIX = "vendor:"
ID_PREFIX = "vendor_"

# Failures a gateway may raise; anything in here is reported as PersistenceError.
_GATEWAY_ERRORS = (StorageError, OSError)


def key_for(vendor_id: str) -> str:
    return f"{KEY_PREFIX}{vendor_id}"


def decode_vendor(key: str, raw: str) -> Vendor:
    """Decode a stored value into a Vendor or raise MalformedRecordError."""
    try:
        vendor = Vendor.model_validate_json(raw)
    except pydantic.ValidationError as exc:
        raise MalformedRecordError(key, f"{exc.error_count()} schema error(s)") from exc
    if key_for(vendor.id) != key:
        raise MalformedRecordError(key, f"id '{vendor.id}' does not match its key")
    return vendor


def encode_vendor(vendor: Vendor) -> str:
    return vendor.model_dump_json(by_alias=True, exclude_none=True)


class VendorRepository:
    def __init__(
        self,
        gateway: StorageGateway,
        *,
        clock: Callable[[], int] = default_clock,
        fetch_concurrency: int = 16,
        optimistic_concurrency: bool = False,
    ):
        self._gateway = gateway
        self._clock = clock
        self._fetch_concurrency = max(1, fetch_concurrency)
        self._optimistic = optimistic_concurrency

    # ------------------------------------------------------------------
    # Read
    # ------------------------------------------------------------------

    async def load_all(self) -> list[Vendor]:
        """Every readable vendor, most recently created first.

        Fetches run concurrently and may complete in any order; results are
        joined in key-list order and sorted once all have settled. Ties on
        createdAt keep key-list order.
        """
        try:
            keys = await self._gateway.list(KEY_PREFIX)
        except _GATEWAY_ERRORS as exc:
            logger.error("Listing vendor keys failed: %s", exc)
            raise PersistenceError(f"Could not list vendors: {exc}") from exc

        semaphore = asyncio.Semaphore(self._fetch_concurrency)

        async def fetch(key: str) -> Vendor | None:
            async with semaphore:
                return await self._fetch(key)

        # Every fetch settles before a failure is reported, so none is left unretrieved.
        results = await asyncio.gather(*(fetch(key) for key in keys), return_exceptions=True)
        for result in results:
            if isinstance(result, BaseException):
                raise result
        vendors = [v for v in results if v is not None]
        logger.debug("Loaded %d of %d vendor record(s)", len(vendors), len(keys))
        return sorted(vendors, key=lambda v: v.created_at, reverse=True)

    async def get(self, vendor_id: str) -> Vendor | None:
        return await self._fetch(key_for(vendor_id))

    async def _fetch(self, key: str) -> Vendor | None:
        try:
            raw = await self._gateway.get(key)
        except _GATEWAY_ERRORS as exc:
            logger.error("Reading %s failed: %s", key, exc)
            raise PersistenceError(f"Could not read '{key}': {exc}") from exc
        if raw is None:
            return None
        try:
            return decode_vendor(key, raw)
        except MalformedRecordError as exc:
            logger.warning("Skipping vendor record: %s", exc)
            return None

    # ------------------------------------------------------------------
    # Write
    # ------------------------------------------------------------------

    async def save(
        self,
        data: VendorInput,
        editing: Vendor | None = None,
        *,
        expected_updated_at: int | None = None,
    ) -> Vendor:
        """Persist *data* as a new vendor, or as an edit of *editing*.

        A new vendor gets ``id = vendor_<now>`` and ``createdAt = updatedAt``.
        An edit keeps the original id and createdAt and moves updatedAt
        strictly past the edited record's value.

        With optimistic concurrency on, an edit is rejected unless the stored
        updatedAt equals *expected_updated_at* (the value the caller loaded;
        defaults to ``editing.updated_at``).
        """
        now = self._clock()
        if editing is None:
            vendor = Vendor(
                id=f"{ID_PREFIX}{now}",
                name=data.name,
                address=data.address,
                phone=data.phone,
                image=data.image,
                created_at=now,
                updated_at=now,
            )
        else:
            if self._optimistic:
                expected = editing.updated_at if expected_updated_at is None else expected_updated_at
                await self._check_unchanged(editing.id, expected)
            vendor = Vendor(
                id=editing.id,
                name=data.name,
                address=data.address,
                phone=data.phone,
                image=data.image,
                created_at=editing.created_at,
                updated_at=max(now, editing.updated_at + 1),
            )

        key = key_for(vendor.id)
        try:
            await self._gateway.set(key, encode_vendor(vendor))
        except _GATEWAY_ERRORS as exc:
            logger.error("Writing %s failed: %s", key, exc)
            raise PersistenceError(f"Failed to save vendor: {exc}") from exc

        logger.info("%s vendor %s", "Updated" if editing else "Created", vendor.id)
        return vendor

    async def _check_unchanged(self, vendor_id: str, expected_updated_at: int) -> None:
        current = await self.get(vendor_id)
        if current is not None and current.updated_at != expected_updated_at:
            raise ConflictError(
                f"Vendor '{vendor_id}' was modified since it was loaded "
                f"(stored updatedAt {current.updated_at}, expected {expected_updated_at})"
            )

    async def remove(self, vendor_id: str) -> None:
        """Hard-delete a vendor. Removing a missing vendor is not an error."""
        key = key_for(vendor_id)
        try:
            await self._gateway.delete(key)
        except _GATEWAY_ERRORS as exc:
            logger.error("Deleting %s failed: %s", key, exc)
            raise PersistenceError(f"Failed to delete vendor: {exc}") from exc
        logger.info("Removed vendor %s", vendor_id)
