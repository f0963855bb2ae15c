"""Unified API error envelope.

Error responses (and the auth endpoints) use this format:
{
    "code": 1001,        // 0=success, non-0=error code
    "message": "...",
    "data": null,
    "timestamp": "...",
    "request_id": "..."
}

Cash card resources are returned bare ({id, amount} or a JSON array), so
success_response is only used by the auth router.
"""

import uuid
from datetime import datetime, timezone
from typing import Any

from pydantic import BaseModel, Field


class ApiResponse(BaseModel):
    code: int = 0
    message: str = "success"
    data: Any = None
    timestamp: str = Field(default_factory=lambda: datetime.now(timezone.utc).isoformat())
    request_id: str = Field(default_factory=lambda: f"req_{uuid.uuid4().hex[:12]}")


def success_response(data: Any = None) -> ApiResponse:
    return ApiResponse(code=0, message="success", data=data)


def error_response(code: int, message: str) -> ApiResponse:
    return ApiResponse(code=code, message=message, data=None)
