"""Vendor photo encoding: raw upload bytes → size-checked inline data URL.

The data URL (``data:<mime>;base64,<payload>``) is what gets stored in the
vendor record's ``image`` field and can be dropped straight into an ``<img>``.
"""

from __future__ import annotations

import asyncio
import base64
import binascii
import logging
import mimetypes

from app.core.config import settings
from app.core.exceptions import SizeExceededError

logger = logging.getLogger(__name__)

DEFAULT_MIME_TYPE = "application/octet-stream"


def resolve_mime_type(mime_type: str | None = None, filename: str | None = None) -> str:
    if mime_type:
        return mime_type
    if filename:
        guessed, _ = mimetypes.guess_type(filename)
        if guessed:
            return guessed
    return DEFAULT_MIME_TYPE


def _to_data_url(content: bytes, mime_type: str) -> str:
    payload = base64.b64encode(content).decode("ascii")
    return f"data:{mime_type};base64,{payload}"


async def encode_image(
    content: bytes,
    mime_type: str | None = None,
    filename: str | None = None,
    *,
    max_bytes: int | None = None,
) -> str:
    """Return *content* as a data URL.

    Raises :class:`SizeExceededError` without encoding anything when
    *content* is larger than *max_bytes* (default ``MAX_IMAGE_SIZE_BYTES``).
    """
    limit = settings.max_image_size_bytes if max_bytes is None else max_bytes
    if len(content) > limit:
        logger.info("Rejected image of %d bytes (limit %d)", len(content), limit)
        raise SizeExceededError(len(content), limit)

    mime = resolve_mime_type(mime_type, filename)
    return await asyncio.to_thread(_to_data_url, content, mime)


def decode_image(data_url: str) -> tuple[str, bytes]:
    """Split a stored data URL into ``(mime_type, raw_bytes)``.

    Raises ValueError when *data_url* is not a base64 data URL.
    """
    if not data_url.startswith("data:"):
        raise ValueError("not a data URL")
    header, sep, payload = data_url[len("data:"):].partition(",")
    if not sep or not header.endswith(";base64"):
        raise ValueError("not a base64 data URL")
    mime = header[: -len(";base64")] or DEFAULT_MIME_TYPE
    try:
        return mime, base64.b64decode(payload, validate=True)
    except binascii.Error as exc:
        raise ValueError(f"invalid base64 payload: {exc}") from exc
