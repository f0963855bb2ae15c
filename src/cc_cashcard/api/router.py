"""cc_cashcard REST endpoints — all require a card-owner principal.

GET    /cashcards                — owner's cards, page/size/sort
GET    /cashcards/{card_id}      — single card
POST   /cashcards                — create, 201 + Location
PUT    /cashcards/{card_id}      — replace amount, 204
DELETE /cashcards/{card_id}      — delete, 204

Resources are returned bare, not wrapped in ApiResponse.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Query, Request, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from config.settings import settings
from src.cc_cashcard.application.schemas import CashCardRequest, CashCardResponse, parse_sort
from src.cc_cashcard.application.service import CashCardApplicationService
from src.cc_cashcard.domain.models import PageSpec
from src.cc_common.database import get_db_session
from src.cc_gateway.auth.dependencies import require_card_owner
from src.cc_gateway.user.db_models import UserModel

router = APIRouter(prefix="/cashcards", tags=["cashcards"])

_service = CashCardApplicationService()


@router.get("", response_model=list[CashCardResponse])
async def list_cash_cards(
    current_user: Annotated[UserModel, Depends(require_card_owner)],
    db: Annotated[AsyncSession, Depends(get_db_session)],
    page: int = Query(0, ge=0, description="0-based page index"),
    size: int | None = Query(None, ge=1, le=settings.PAGE_SIZE_MAX, description="Items per page"),
    sort: str | None = Query(None, description="<field>[,asc|desc], default amount,asc"),
) -> list[CashCardResponse]:
    sort_field, sort_direction = parse_sort(sort)
    page_spec = PageSpec(
        page_index=page,
        page_size=size or settings.PAGE_SIZE_DEFAULT,
        sort_field=sort_field,
        sort_direction=sort_direction,
    )
    return await _service.list_cards(db, current_user.username, page_spec)


@router.get("/{card_id}", response_model=CashCardResponse)
async def get_cash_card(
    card_id: int,
    current_user: Annotated[UserModel, Depends(require_card_owner)],
    db: Annotated[AsyncSession, Depends(get_db_session)],
) -> CashCardResponse:
    return await _service.get_card(db, card_id, current_user.username)


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_cash_card(
    body: CashCardRequest,
    request: Request,
    current_user: Annotated[UserModel, Depends(require_card_owner)],
    db: Annotated[AsyncSession, Depends(get_db_session)],
) -> Response:
    saved = await _service.create_card(db, current_user.username, body.amount)
    location = request.url_for("get_cash_card", card_id=saved.id).path
    return Response(status_code=status.HTTP_201_CREATED, headers={"Location": location})


@router.put("/{card_id}", status_code=status.HTTP_204_NO_CONTENT)
async def update_cash_card(
    card_id: int,
    body: CashCardRequest,
    current_user: Annotated[UserModel, Depends(require_card_owner)],
    db: Annotated[AsyncSession, Depends(get_db_session)],
) -> Response:
    await _service.update_card(db, card_id, current_user.username, body.amount)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.delete("/{card_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_cash_card(
    card_id: int,
    current_user: Annotated[UserModel, Depends(require_card_owner)],
    db: Annotated[AsyncSession, Depends(get_db_session)],
) -> Response:
    await _service.delete_card(db, card_id, current_user.username)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
