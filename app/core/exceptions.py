"""Application-level exceptions and FastAPI exception handlers."""


from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

class AppException(Exception):
    """Base application exception."""

    def __init__(self, message: str, status_code: int = 500, code: str = "INTERNAL_ERROR"):
        self.message = message
        self.status_code = status_code
        self.code = code
        super().__init__(message)

class NotFoundError(AppException):
    def __init__(self, entity: str, entity_id: str | None = None):
        msg = f"{entity} not found" if not entity_id else f"{entity} '{entity_id}' not found"
        super().__init__(msg, status_code=404, code="NOT_FOUND")

class ConflictError(AppException):
    def __init__(self, message: str):
        super().__init__(message, status_code=409, code="CONFLICT")

class ValidationError(AppException):
    """Vendor form fields are missing, blank or malformed. Nothing was written."""

    def __init__(self, missing: list[str], invalid: list[str] | None = None):
        self.missing = list(missing)
        self.invalid = list(invalid or [])
        self.fields = self.missing + self.invalid
        parts = []
        if self.missing:
            parts.append("Please fill in all required fields: " + ", ".join(self.missing))
        if self.invalid:
            parts.append("Invalid value for: " + ", ".join(self.invalid))
        super().__init__(". ".join(parts), status_code=422, code="VALIDATION_ERROR")

class SizeExceededError(AppException):
    """Raised when an attached image is larger than the configured cap."""

    def __init__(self, size: int, limit: int):
        self.size = size
        self.limit = limit
        msg = f"Image is {size} bytes; the limit is {limit} bytes."
        super().__init__(msg, status_code=413, code="SIZE_EXCEEDED")

class PersistenceError(AppException):
    """Raised when the storage gateway rejects a list/get/set/delete call."""

    def __init__(self, message: str):
        super().__init__(message, status_code=503, code="PERSISTENCE_ERROR")

class MalformedRecordError(Exception):
    """A stored vendor value failed to decode. Internal to the repository."""

    def __init__(self, key: str, reason: str):
        self.key = key
        self.reason = reason
        super().__init__(f"Malformed record at '{key}': {reason}")

# ---------------------------------------------------------------------------
# FastAPI exception handlers
# ---------------------------------------------------------------------------

def _error_body(code: str, message: str, fields: list[str] | None = None) -> dict:
    body: dict = {"code": code, "message": message}
    if fields:
        body["fields"] = fields
    return {"error": body}

def register_exception_handlers(app: FastAPI) -> None:
    """Attach all custom exception handlers to the FastAPI app."""

    @app.exception_handler(AppException)
    async def app_exception_handler(request: Request, exc: AppException) -> JSONResponse:
        return JSONResponse(
            status_code=exc.status_code,
            content=_error_body(exc.code, exc.message, getattr(exc, "fields", None)),
        )

    @app.exception_handler(404)
    async def not_found_handler(request: Request, exc: Exception) -> JSONResponse:
        return JSONResponse(
            status_code=404,
            content=_error_body("NOT_FOUND", "Resource not found"),
        )

    @app.exception_handler(500)
    async def internal_error_handler(request: Request, exc: Exception) -> JSONResponse:
        return JSONResponse(
            status_code=500,
            content=_error_body("INTERNAL_ERROR", "An unexpected error occurred"),
        )
