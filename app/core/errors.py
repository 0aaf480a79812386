# app/core/errors.py
"""
Domain error taxonomy shared by repositories, services and routers.

Repositories raise NotFoundError / StoreError, services add
InvalidArgumentError for their own validation, and routers let the
exception handlers in app.main render them with the matching status.
"""

import uuid

from fastapi import Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse


class CatalogError(Exception):
    """Base class for every error the service reports to callers."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    code: str = "INTERNAL"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class NotFoundError(CatalogError):
    """Entity absent by id."""

    status_code = status.HTTP_404_NOT_FOUND
    code = "NOT_FOUND"


class InvalidArgumentError(CatalogError):
    """Malformed id, empty required field or out-of-range number."""

    status_code = status.HTTP_400_BAD_REQUEST
    code = "INVALID_ARGUMENT"


class StoreError(CatalogError):
    """Underlying persistence failure, wrapped with entity context."""


class InternalError(CatalogError):
    """Unexpected failure during business logic."""


def catalog_error_handler(request: Request, exc: CatalogError) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content={"code": exc.code, "detail": exc.message},
    )


def validation_error_handler(
    request: Request,
    exc: RequestValidationError,
) -> JSONResponse:
    """
    Render body/query validation failures as INVALID_ARGUMENT (400)
    instead of FastAPI's default 422.
    """
    messages = []
    for err in exc.errors():
        loc = ".".join(str(part) for part in err.get("loc", ()) if part != "body")
        msg = err.get("msg", "invalid value")
        messages.append(f"{loc}: {msg}" if loc else msg)

    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={
            "code": InvalidArgumentError.code,
            "detail": "; ".join(messages) or "invalid request",
        },
    )


def parse_uuid(raw: str, entity: str) -> uuid.UUID:
    """
    Parse a wire id string, raising InvalidArgumentError on bad input.

    `entity` names the id in the message, e.g. "product" or "subscription plan".
    """
    try:
        return uuid.UUID(raw)
    except (ValueError, TypeError, AttributeError) as exc:
        raise InvalidArgumentError(f"invalid {entity} ID format: {exc}") from exc
