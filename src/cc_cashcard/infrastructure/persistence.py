"""CashCardRepository — concrete implementation of CashCardRepositoryProtocol.

Statements are built with SQLAlchemy Core against the cash_cards table and
return plain rows; no ORM identity map is involved.
Transactions are owned by the caller (application service).
"""

from typing import Any

from sqlalchemy import delete, exists, insert, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from src.cc_cashcard.domain.models import CashCard, PageSpec, SortDirection
from src.cc_cashcard.infrastructure.db_models import CashCardORM

_cards = CashCardORM.__table__
_COLUMNS = (_cards.c.id, _cards.c.amount, _cards.c.owner)


# ---------------------------------------------------------------------------
# Row mapper
# ---------------------------------------------------------------------------


def _row_to_card(row: Any) -> CashCard:
    return CashCard(id=row.id, amount=row.amount, owner=row.owner)


# ---------------------------------------------------------------------------
# Repository
# ---------------------------------------------------------------------------


class CashCardRepository:
    """Concrete repository over the cash_cards table."""

    async def get_by_id(self, db: AsyncSession, card_id: int) -> CashCard | None:
        result = await db.execute(select(*_COLUMNS).where(_cards.c.id == card_id))
        row = result.fetchone()
        return _row_to_card(row) if row else None

    async def get_by_id_and_owner(
        self,
        db: AsyncSession,
        card_id: int,
        owner: str,
        for_update: bool = False,
    ) -> CashCard | None:
        stmt = select(*_COLUMNS).where(
            _cards.c.id == card_id,
            _cards.c.owner == owner,
        )
        if for_update:
            stmt = stmt.with_for_update()
        result = await db.execute(stmt)
        row = result.fetchone()
        return _row_to_card(row) if row else None

    async def exists_by_id_and_owner(
        self, db: AsyncSession, card_id: int, owner: str
    ) -> bool:
        stmt = select(
            exists().where(_cards.c.id == card_id, _cards.c.owner == owner)
        )
        result = await db.execute(stmt)
        return bool(result.scalar())

    async def save(self, db: AsyncSession, card: CashCard) -> CashCard:
        """Insert a new card, or overwrite the amount of an existing one.

        A card with id=None gets a database-generated id. A card with an id
        that does not exist yet is inserted under that id. The owner of an
        existing row is never rewritten.
        """
        if card.id is None:
            result = await db.execute(
                insert(_cards)
                .values(amount=card.amount, owner=card.owner)
                .returning(*_COLUMNS)
            )
            return _row_to_card(result.one())

        result = await db.execute(
            update(_cards)
            .where(_cards.c.id == card.id)
            .values(amount=card.amount)
            .returning(*_COLUMNS)
        )
        row = result.fetchone()
        if row is None:
            result = await db.execute(
                insert(_cards)
                .values(id=card.id, amount=card.amount, owner=card.owner)
                .returning(*_COLUMNS)
            )
            row = result.one()
        return _row_to_card(row)

    async def delete_by_id(self, db: AsyncSession, card_id: int) -> bool:
        """Delete the card; return False when no row was removed."""
        result = await db.execute(
            delete(_cards).where(_cards.c.id == card_id).returning(_cards.c.id)
        )
        return result.fetchone() is not None

    async def find_all_by_owner(
        self, db: AsyncSession, owner: str, page_spec: PageSpec
    ) -> list[CashCard]:
        sort_column = _cards.c[page_spec.sort_field]
        order_by = [
            sort_column.desc()
            if page_spec.sort_direction is SortDirection.DESC
            else sort_column.asc()
        ]
        # Tie-break on id so repeated page requests see a stable order
        if page_spec.sort_field != "id":
            order_by.append(_cards.c.id.asc())

        stmt = (
            select(*_COLUMNS)
            .where(_cards.c.owner == owner)
            .order_by(*order_by)
            .limit(page_spec.page_size)
            .offset(page_spec.offset)
        )
        result = await db.execute(stmt)
        return [_row_to_card(row) for row in result.fetchall()]
