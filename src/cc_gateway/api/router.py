"""Auth API router: login.

Returns ApiResponse. request_id is read from request.state
(injected by RequestLogMiddleware).
"""

from fastapi import APIRouter, Depends, Request, status
from sqlalchemy.ext.asyncio import AsyncSession

from config.settings import settings
from src.cc_common.database import get_db_session
from src.cc_common.response import ApiResponse, success_response
from src.cc_gateway.user.schemas import LoginRequest, LoginResponse
from src.cc_gateway.user.service import UserService

router = APIRouter(prefix="/auth", tags=["auth"])
_service = UserService()


def _get_request_id(request: Request) -> str:
    """Read request_id injected by RequestLogMiddleware, fallback if absent."""
    return getattr(request.state, "request_id", "req_unknown")


@router.post(
    "/login",
    status_code=status.HTTP_200_OK,
    response_model=ApiResponse,
    summary="User login",
)
async def login(
    request: Request,
    body: LoginRequest,
    db: AsyncSession = Depends(get_db_session),
) -> ApiResponse:
    user, access_token = await _service.login(body.username, body.password, db)

    data = LoginResponse(
        access_token=access_token,
        token_type="Bearer",
        expires_in=settings.JWT_EXPIRE_MINUTES * 60,
        username=user.username,
    )
    resp = success_response(data.model_dump())
    resp.request_id = _get_request_id(request)
    resp.message = "Login successful"
    return resp
