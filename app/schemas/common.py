"""Common response schemas shared across endpoints."""

from typing import Generic, TypeVar

from pydantic import BaseModel

T = TypeVar("T")


class ServiceResponse(BaseModel, Generic[T]):
    """Uniform result envelope.

    ``{"success": true, "data": ...}`` or
    ``{"success": false, "error": "<code>", "detail": "..."}``.
    ``error`` is a machine code; ``detail`` is diagnostic, not user-facing.
    """
    success: bool
    data: T | None = None
    error: str | None = None
    detail: str | None = None
