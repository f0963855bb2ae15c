"""002: create cash_cards table

Revision ID: 002
Revises: 001
Create Date: 2026-10-19
"""
from typing import Sequence, Union
from alembic import op

revision: str = "002"
down_revision: Union[str, None] = "001"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.execute("""
        CREATE TABLE cash_cards (
            id          BIGINT              GENERATED BY DEFAULT AS IDENTITY PRIMARY KEY,
            amount      DOUBLE PRECISION    NOT NULL,
            owner       VARCHAR(64)         NOT NULL
        );
    """)
    # Covers owner-scoped lookups and the default amount,id listing order
    op.execute(
        "CREATE INDEX idx_cash_cards_owner_amount_id ON cash_cards (owner, amount, id);"
    )
    op.execute("COMMENT ON TABLE cash_cards IS 'Cash cards — visible only to owner';")


def downgrade() -> None:
    op.execute("DROP TABLE IF EXISTS cash_cards CASCADE;")
