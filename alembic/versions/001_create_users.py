"""001: create users table

Revision ID: 001
Revises:
Create Date: 2026-10-19
"""
from typing import Sequence, Union
from alembic import op

revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.execute("""
        CREATE TABLE users (
            id              UUID            PRIMARY KEY DEFAULT gen_random_uuid(),
            username        VARCHAR(64)     NOT NULL,
            password_hash   VARCHAR(255)    NOT NULL,
            role            VARCHAR(32)     NOT NULL DEFAULT 'CARD-OWNER',
            is_active       BOOLEAN         NOT NULL DEFAULT TRUE,
            created_at      TIMESTAMPTZ     NOT NULL DEFAULT NOW(),
            CONSTRAINT uq_users_username    UNIQUE (username),
            CONSTRAINT ck_users_role        CHECK (role IN ('CARD-OWNER', 'NON-OWNER'))
        );
    """)
    op.execute("COMMENT ON TABLE users IS 'API principals — username is the cash card owner key';")


def downgrade() -> None:
    op.execute("DROP TABLE IF EXISTS users CASCADE;")
