"""CashCardApplicationService — ownership-scoped CRUD over the repository.

Every single-record operation goes through an owner-scoped repository call;
a card that does not exist and a card owned by someone else both raise
CashCardNotFoundError.

Create, update and delete commit on success and roll back on any error.
Reads run without an explicit transaction.
"""

import logging

from sqlalchemy.ext.asyncio import AsyncSession

from src.cc_cashcard.application.schemas import CashCardResponse
from src.cc_cashcard.domain.models import CashCard, PageSpec
from src.cc_cashcard.domain.repository import CashCardRepositoryProtocol
from src.cc_cashcard.infrastructure.persistence import CashCardRepository
from src.cc_common.errors import CashCardNotFoundError

logger = logging.getLogger(__name__)


class CashCardApplicationService:
    def __init__(self, repo: CashCardRepositoryProtocol | None = None) -> None:
        self._repo: CashCardRepositoryProtocol = repo or CashCardRepository()

    async def get_card(
        self, db: AsyncSession, card_id: int, owner: str
    ) -> CashCardResponse:
        card = await self._repo.get_by_id_and_owner(db, card_id, owner)
        if card is None:
            logger.debug("Cash card %s not visible to %s", card_id, owner)
            raise CashCardNotFoundError(card_id)
        return CashCardResponse.from_domain(card)

    async def create_card(self, db: AsyncSession, owner: str, amount: float) -> CashCard:
        """Store a new card for owner. The id is always assigned by the store."""
        try:
            saved = await self._repo.save(db, CashCard(id=None, amount=amount, owner=owner))
            await db.commit()
        except Exception:
            await db.rollback()
            raise
        logger.info("Cash card created: id=%s owner=%s", saved.id, owner)
        return saved

    async def list_cards(
        self, db: AsyncSession, owner: str, page_spec: PageSpec
    ) -> list[CashCardResponse]:
        cards = await self._repo.find_all_by_owner(db, owner, page_spec)
        return [CashCardResponse.from_domain(c) for c in cards]

    async def update_card(
        self, db: AsyncSession, card_id: int, owner: str, amount: float
    ) -> None:
        """Replace the amount of an owned card; id and owner are preserved."""
        try:
            existing = await self._repo.get_by_id_and_owner(
                db, card_id, owner, for_update=True
            )
            if existing is None:
                raise CashCardNotFoundError(card_id)
            await self._repo.save(
                db, CashCard(id=existing.id, amount=amount, owner=existing.owner)
            )
            await db.commit()
        except Exception:
            await db.rollback()
            raise
        logger.info("Cash card updated: id=%s owner=%s", card_id, owner)

    async def delete_card(self, db: AsyncSession, card_id: int, owner: str) -> None:
        """Delete an owned card.

        A concurrent delete can remove the row between the ownership check and
        the DELETE; the loser sees zero rows removed and gets NotFound.
        """
        try:
            if not await self._repo.exists_by_id_and_owner(db, card_id, owner):
                raise CashCardNotFoundError(card_id)
            if not await self._repo.delete_by_id(db, card_id):
                raise CashCardNotFoundError(card_id)
            await db.commit()
        except Exception:
            await db.rollback()
            raise
        logger.info("Cash card deleted: id=%s owner=%s", card_id, owner)
