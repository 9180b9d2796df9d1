"""Image attachment endpoint — turns an uploaded photo into a data URL.

The client attaches the returned string to the vendor form's ``image``
field before saving. File-type checks are an HTTP concern and stay here;
the size guard lives in :mod:`app.services.image_encoder`.
"""


import logging

from fastapi import APIRouter, File, HTTPException, UploadFile

from app.core.response import DataResponse
from app.schemas.common import ErrorResponse
from app.schemas.vendor import EncodedImage
from app.services.image_encoder import resolve_mime_type
from app.services.vendor import VendorService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/images", tags=["Images"])

_ALLOWED_EXTENSIONS = {".jpg", ".jpeg", ".png", ".gif", ".webp", ".bmp", ".svg"}


def _detect_mime_type(file: UploadFile) -> str:
    """Return the image MIME type, or raise 415 when the upload is not an image."""
    filename = (file.filename or "").lower()
    content_type = file.content_type or ""
    if content_type.startswith("image/"):
        return content_type
    if any(filename.endswith(ext) for ext in _ALLOWED_EXTENSIONS):
        return resolve_mime_type(None, filename)
    accepted = ", ".join(sorted(_ALLOWED_EXTENSIONS))
    raise HTTPException(
        status_code=415,
        detail=(
            f"Unsupported file type '{file.content_type}'. "
            f"Accepted formats: {accepted}"
        ),
    )


@router.post(
    "",
    response_model=DataResponse[EncodedImage],
    responses={413: {"model": ErrorResponse, "description": "Photo over the size cap"}},
)
async def encode_image(file: UploadFile = File(...)):
    """Upload a vendor photo (max 2MB by default) and receive it as a data URL."""
    mime = _detect_mime_type(file)
    contents = await file.read()
    if len(contents) == 0:
        raise HTTPException(status_code=400, detail="Uploaded file is empty.")

    data_url = await VendorService.encode_image(contents, mime_type=mime)
    logger.debug("Encoded %s upload of %d bytes", mime, len(contents))
    return {"data": EncodedImage(image=data_url)}
