"""Form checks run before any vendor write."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel, Field

from app.core.config import settings
from app.core.exceptions import SizeExceededError, ValidationError
from app.schemas.vendor import VendorInput
from app.services.image_encoder import decode_image

REQUIRED_FIELDS: tuple[str, ...] = ("name", "address", "phone")


class ValidationResult(BaseModel):
    missing: list[str] = Field(default_factory=list)
    invalid: list[str] = Field(default_factory=list)
    image_bytes: int | None = None  # decoded photo size, when one is attached

    @property
    def ok(self) -> bool:
        return not self.missing and not self.invalid


def validate_vendor_input(data: VendorInput | Mapping[str, Any]) -> ValidationResult:
    """Report every required field that is absent or blank after trimming.

    ``image`` is never required, but when present it must be a base64 data URL.
    """
    if isinstance(data, Mapping):
        values = {f: data.get(f) for f in REQUIRED_FIELDS}
        image = data.get("image")
    else:
        values = {f: getattr(data, f, None) for f in REQUIRED_FIELDS}
        image = getattr(data, "image", None)

    missing = [
        field
        for field, value in values.items()
        if not isinstance(value, str) or not value.strip()
    ]

    invalid: list[str] = []
    image_bytes = None
    if image:
        try:
            if not isinstance(image, str):
                raise ValueError("image must be a string")
            _, content = decode_image(image)
        except ValueError:
            invalid.append("image")
        else:
            image_bytes = len(content)

    return ValidationResult(missing=missing, invalid=invalid, image_bytes=image_bytes)


def ensure_valid(data: VendorInput | Mapping[str, Any], *, max_image_bytes: int | None = None) -> None:
    """Raise ValidationError for missing/malformed fields, SizeExceededError for an oversized photo."""
    result = validate_vendor_input(data)
    if not result.ok:
        raise ValidationError(result.missing, result.invalid)

    limit = settings.max_image_size_bytes if max_image_bytes is None else max_image_bytes
    if result.image_bytes is not None and result.image_bytes > limit:
        raise SizeExceededError(result.image_bytes, limit)
