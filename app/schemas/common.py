"""Shared Pydantic schema base with camelCase aliases, plus the health and error shapes."""

from __future__ import annotations

from pydantic import BaseModel
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """All schemas inherit from this: snake_case in Python, camelCase on the wire and in storage."""

    model_config = {
        "populate_by_name": True,
        "alias_generator": to_camel,
        "from_attributes": True,
    }


class HealthResponse(CamelModel):
    """Health-check response returned by /health.

    Reports which storage gateway is wired in and the photo cap clients
    should check before uploading.
    """
    status: str = "ok"
    app: str
    version: str
    env: str
    storage: str
    image_limit_bytes: int
    optimistic_concurrency: bool


class ErrorDetail(BaseModel):
    code: str
    message: str
    fields: list[str] | None = None  # only for VALIDATION_ERROR


class ErrorResponse(BaseModel):
    """`{ error: { code, message[, fields] } }` as written by the exception handlers."""

    error: ErrorDetail
