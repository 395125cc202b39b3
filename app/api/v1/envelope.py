# app/api/v1/envelope.py
"""
Response envelope shared by the v1 endpoints:

    {"status": "ok" | "error", "data": ..., "message": ..., "errors": [...]}
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel


class ApiResponse(BaseModel):
    status: str = "ok"
    data: Any = None
    message: str | None = None
    errors: list[dict[str, Any]] | None = None


def ok(data: Any = None, message: str | None = None) -> dict:
    return ApiResponse(data=data, message=message).model_dump(mode="json")


def error(message: str, errors: list[dict[str, Any]] | None = None) -> dict:
    return ApiResponse(status="error", message=message, errors=errors).model_dump(mode="json")


def paginated(items: list, total: int, limit: int, offset: int) -> dict:
    return ok(
        data={
            "items": items,
            "total": total,
            "limit": limit,
            "offset": offset,
            "has_more": (offset + limit) < total,
        }
    )
