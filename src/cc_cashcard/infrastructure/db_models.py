"""SQLAlchemy ORM model for the cash_cards table.

persistence.py issues Core statements against CashCardORM.__table__.
Alembic migration 002_create_cash_cards.py is the authoritative DDL source;
the test suite builds the same table from this mapping via create_all.
"""

from sqlalchemy import BigInteger, Double, Index, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from src.cc_common.database import Base


class CashCardORM(Base):
    __tablename__ = "cash_cards"
    __table_args__ = (
        Index("idx_cash_cards_owner_amount_id", "owner", "amount", "id"),
    )

    # SQLite only autoincrements INTEGER PRIMARY KEY
    id: Mapped[int] = mapped_column(
        BigInteger().with_variant(Integer, "sqlite"),
        primary_key=True,
        autoincrement=True,
    )
    amount: Mapped[float] = mapped_column(Double, nullable=False)
    owner: Mapped[str] = mapped_column(String(64), nullable=False)
