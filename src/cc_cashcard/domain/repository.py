# src/cc_cashcard/domain/repository.py
"""Repository Protocol — dependency inversion for testability.

Unit tests inject a mock that conforms to this Protocol.
Infrastructure layer provides the real implementation.

Ownership is part of the query contract: single-record reads and the
listing all take the owner, so callers never fetch-then-compare.
"""

from typing import Protocol

from sqlalchemy.ext.asyncio import AsyncSession

from src.cc_cashcard.domain.models import CashCard, PageSpec


class CashCardRepositoryProtocol(Protocol):
    async def get_by_id(self, db: AsyncSession, card_id: int) -> CashCard | None: ...

    async def get_by_id_and_owner(
        self,
        db: AsyncSession,
        card_id: int,
        owner: str,
        for_update: bool = False,
    ) -> CashCard | None: ...

    async def exists_by_id_and_owner(
        self, db: AsyncSession, card_id: int, owner: str
    ) -> bool: ...

    async def save(self, db: AsyncSession, card: CashCard) -> CashCard: ...

    async def delete_by_id(self, db: AsyncSession, card_id: int) -> bool: ...

    async def find_all_by_owner(
        self, db: AsyncSession, owner: str, page_spec: PageSpec
    ) -> list[CashCard]: ...
