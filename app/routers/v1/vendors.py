"""Vendor directory router.

Pattern:
  1. Declare a router with prefix and tags
  2. Inject the storage gateway via Depends
  3. Instantiate the service with the gateway
  4. Call service methods and wrap result in response envelope
"""

from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, Header, Query, Response, status

from app.core.exceptions import NotFoundError
from app.core.response import DataResponse, ListResponse, listed
from app.schemas.common import ErrorResponse
from app.schemas.vendor import Vendor, VendorInput
from app.services.export import EXPORT_MEDIA_TYPE
from app.services.image_encoder import decode_image
from app.services.vendor import VendorService
from app.storage import StorageGateway, get_storage

router = APIRouter(
    prefix="/vendors",
    tags=["Vendors"],
    responses={503: {"model": ErrorResponse, "description": "Storage gateway failure"}},
)


# ------------------------------------------------------------------
# Helper — instantiate service with the configured gateway
# ------------------------------------------------------------------

def _svc(gateway: StorageGateway) -> VendorService:
    return VendorService(gateway)


# ------------------------------------------------------------------
# Endpoints
# ------------------------------------------------------------------

@router.get("", response_model=ListResponse[Vendor])
async def list_vendors(
    q: str = Query(default="", description="Search name, address, or phone"),
    gateway: StorageGateway = Depends(get_storage),
):
    """List all vendors, newest first. Filter with ?q=."""
    svc = _svc(gateway)
    vendors = await svc.load_all()
    return listed(svc.filter(vendors, q), q)


@router.post(
    "",
    response_model=DataResponse[Vendor],
    status_code=status.HTTP_201_CREATED,
    responses={413: {"model": ErrorResponse}, 422: {"model": ErrorResponse}},
)
async def create_vendor(
    body: VendorInput,
    gateway: StorageGateway = Depends(get_storage),
):
    """Create a new vendor."""
    vendor = await _svc(gateway).create_vendor(body)
    return {"data": vendor}


@router.get("/export")
async def export_vendors(gateway: StorageGateway = Depends(get_storage)):
    """Download the full directory as a pretty-printed JSON array."""
    svc = _svc(gateway)
    document = svc.serialize_for_export(await svc.load_all())
    return Response(
        content=document,
        media_type=EXPORT_MEDIA_TYPE,
        headers={"Content-Disposition": f'attachment; filename="{svc.export_filename()}"'},
    )


@router.get("/{vendor_id}", response_model=DataResponse[Vendor])
async def get_vendor(
    vendor_id: str,
    gateway: StorageGateway = Depends(get_storage),
):
    vendor = await _svc(gateway).get_vendor(vendor_id)
    return {"data": vendor}


@router.put(
    "/{vendor_id}",
    response_model=DataResponse[Vendor],
    responses={
        404: {"model": ErrorResponse},
        409: {"model": ErrorResponse},
        413: {"model": ErrorResponse},
        422: {"model": ErrorResponse},
    },
)
async def update_vendor(
    vendor_id: str,
    body: VendorInput,
    if_match: Optional[int] = Header(
        default=None,
        alias="If-Match",
        description="updatedAt of the copy being edited; stale edits get 409 when optimistic concurrency is on",
    ),
    gateway: StorageGateway = Depends(get_storage),
):
    vendor = await _svc(gateway).update_vendor(vendor_id, body, expected_updated_at=if_match)
    return {"data": vendor}


@router.delete("/{vendor_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_vendor(
    vendor_id: str,
    gateway: StorageGateway = Depends(get_storage),
):
    await _svc(gateway).remove(vendor_id)


@router.get("/{vendor_id}/image")
async def get_vendor_image(
    vendor_id: str,
    gateway: StorageGateway = Depends(get_storage),
):
    """Serve the vendor's photo as raw bytes with its original MIME type."""
    vendor = await _svc(gateway).get_vendor(vendor_id)
    if not vendor.image:
        raise NotFoundError("Image for vendor", vendor_id)
    try:
        mime, content = decode_image(vendor.image)
    except ValueError as exc:
        raise NotFoundError("Image for vendor", vendor_id) from exc
    return Response(content=content, media_type=mime)
