"""Vendor service — the operations the presentation layer calls.

Boundary operations:
  load_all, save, remove, filter, encode_image, serialize_for_export

Every method takes and returns immutable Vendor snapshots; the caller owns
the list it displays and replaces it with whatever comes back.

Rule: No SQLAlchemy / no FastAPI here. Pure Python business logic.
"""

from __future__ import annotations

from collections.abc import Sequence
from datetime import date

from app.core.config import settings
from app.core.exceptions import NotFoundError
from app.repositories.vendor import VendorRepository
from app.schemas.vendor import Vendor, VendorInput
from app.services import export, image_encoder, search
from app.services.validator import ensure_valid
from app.storage.gateway import StorageGateway


class VendorService:
    def __init__(self, gateway: StorageGateway, repository: VendorRepository | None = None):
        self._repo = repository or VendorRepository(
            gateway,
            fetch_concurrency=settings.storage_fetch_concurrency,
            optimistic_concurrency=settings.optimistic_concurrency,
        )

    async def load_all(self) -> list[Vendor]:
        return await self._repo.load_all()

    async def get_vendor(self, vendor_id: str) -> Vendor:
        vendor = await self._repo.get(vendor_id)
        if not vendor:
            raise NotFoundError("Vendor", vendor_id)
        return vendor

    async def save(self, form: VendorInput, editing: Vendor | None = None) -> Vendor:
        """Validate *form* and persist it; nothing is written when validation fails."""
        ensure_valid(form)
        return await self._repo.save(form, editing)

    async def create_vendor(self, form: VendorInput) -> Vendor:
        return await self.save(form)

    async def update_vendor(
        self, vendor_id: str, form: VendorInput, expected_updated_at: int | None = None
    ) -> Vendor:
        """Edit a stored vendor.

        *expected_updated_at* is the updatedAt the caller loaded; with
        OPTIMISTIC_CONCURRENCY on, a mismatch raises ConflictError.
        """
        ensure_valid(form)
        editing = await self.get_vendor(vendor_id)  # raises 404 if missing
        return await self._repo.save(form, editing, expected_updated_at=expected_updated_at)

    async def remove(self, vendor_id: str) -> None:
        await self._repo.remove(vendor_id)

    # ------------------------------------------------------------------
    # Pure helpers (no storage access)
    # ------------------------------------------------------------------

    @staticmethod
    def filter(vendors: Sequence[Vendor], query: str) -> list[Vendor]:
        return search.filter_vendors(vendors, query)

    @staticmethod
    async def encode_image(
        content: bytes, mime_type: str | None = None, filename: str | None = None
    ) -> str:
        return await image_encoder.encode_image(content, mime_type, filename)

    @staticmethod
    def serialize_for_export(vendors: Sequence[Vendor]) -> str:
        return export.serialize_vendors(vendors)

    @staticmethod
    def export_filename(on: date | None = None) -> str:
        return export.suggested_filename(on)
