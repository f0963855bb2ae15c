"""Pydantic request/response schemas for cc_gateway.

Responses are wrapped in ApiResponse at the router layer.
"""

from pydantic import BaseModel, Field


class LoginRequest(BaseModel):
    username: str = Field(..., min_length=1, max_length=64)
    password: str = Field(..., min_length=1, max_length=128)


class LoginResponse(BaseModel):
    access_token: str
    token_type: str = "Bearer"
    expires_in: int = 1800  # 30 minutes in seconds
    username: str
