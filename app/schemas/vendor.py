"""Vendor Pydantic schemas (form input and persisted record)."""

from __future__ import annotations

from pydantic import Field, field_validator, model_validator

from app.schemas.common import CamelModel
from app.services.image_encoder import decode_image


class VendorInput(CamelModel):
    """Form data for a new or edited vendor.

    Blank values are allowed here; :mod:`app.services.validator` decides
    whether the form may be saved and reports every missing field at once.
    """

    name: str = ""
    address: str = ""
    phone: str = ""
    image: str | None = None

    @field_validator("image")
    @classmethod
    def _blank_image_is_absent(cls, value: str | None) -> str | None:
        return value or None


class Vendor(CamelModel):
    """Persisted vendor record, as an immutable snapshot.

    Serialized with camelCase keys (``createdAt``/``updatedAt``) both in the
    key-value store and in the export document. Decoding a stored value goes
    through this model, so anything that does not match the schema is
    rejected rather than trusted.
    """

    id: str = Field(min_length=1)
    name: str
    address: str
    phone: str
    image: str | None = None
    created_at: int = Field(ge=0)
    updated_at: int = Field(ge=0)

    model_config = {"frozen": True}

    @field_validator("name", "address", "phone")
    @classmethod
    def _required_text(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("must not be blank")
        return value

    @field_validator("image")
    @classmethod
    def _image_is_data_url(cls, value: str | None) -> str | None:
        if not value:
            return None
        decode_image(value)  # ValueError marks the record malformed
        return value

    @model_validator(mode="after")
    def _timestamps_ordered(self) -> "Vendor":
        if self.created_at > self.updated_at:
            raise ValueError("createdAt must not be later than updatedAt")
        return self

    def to_record(self) -> dict:
        """Plain dict in the stored/exported shape (``image`` omitted when absent)."""
        return self.model_dump(by_alias=True, exclude_none=True)


class EncodedImage(CamelModel):
    image: str
