"""004: create cards table and card_id_seq

Revision ID: 004
Revises: 003
Create Date: 2026-10-01
"""
from typing import Sequence, Union
from alembic import op

revision: str = "004"
down_revision: Union[str, None] = "003"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    # Card ids are global and never reused, even after a delete
    op.execute("CREATE SEQUENCE card_id_seq AS BIGINT START WITH 1 NO CYCLE;")
    op.execute("""
        CREATE TABLE cards (
            id                  BIGINT          PRIMARY KEY,
            owner_id            VARCHAR(64)     NOT NULL,
            sort_index          INTEGER         NOT NULL,
            name                VARCHAR(200)    NOT NULL,
            rarity              VARCHAR(64)     NOT NULL,
            purchase_price      DOUBLE PRECISION NOT NULL,
            discount_percent    DOUBLE PRECISION NOT NULL DEFAULT 0,
            payment_method      VARCHAR(16)     NOT NULL,
            country             VARCHAR(100)    NOT NULL DEFAULT '',
            league              VARCHAR(100)    NOT NULL DEFAULT '',
            club                VARCHAR(100)    NOT NULL DEFAULT '',
            age                 INTEGER         NOT NULL,
            version             VARCHAR(64)     NOT NULL DEFAULT '',
            season              VARCHAR(32)     NOT NULL DEFAULT '',
            position            VARCHAR(16)     NOT NULL,
            purchase_date       TIMESTAMPTZ,
            notes               TEXT            NOT NULL DEFAULT '',
            transaction_type    VARCHAR(16)     NOT NULL DEFAULT 'forSale',
            sale_price          DOUBLE PRECISION,
            sale_date           TIMESTAMPTZ,
            trade_given_ids     BIGINT[],
            trade_received_ids  BIGINT[],
            image_ref           VARCHAR(500),
            created_at          TIMESTAMPTZ     NOT NULL DEFAULT NOW(),
            updated_at          TIMESTAMPTZ     NOT NULL DEFAULT NOW(),
            CONSTRAINT ck_cards_purchase_price CHECK (purchase_price >= 0),
            CONSTRAINT ck_cards_discount       CHECK (discount_percent BETWEEN 0 AND 100),
            CONSTRAINT ck_cards_age            CHECK (age >= 0),
            CONSTRAINT ck_cards_sale_price     CHECK (sale_price IS NULL OR sale_price >= 0),
            CONSTRAINT ck_cards_payment_method CHECK (
                payment_method IN ('cash', 'eth', 'essence', 'trade')),
            CONSTRAINT ck_cards_position CHECK (
                position IN ('torwart', 'verteidiger', 'mittelfeld', 'sturm')),
            CONSTRAINT ck_cards_transaction_type CHECK (
                transaction_type IN ('forSale', 'sold', 'tradedGiven', 'tradedReceived'))
        );
    """)
    op.execute("CREATE INDEX idx_cards_owner_order ON cards (owner_id, sort_index, id);")
    op.execute("""
        CREATE TRIGGER trg_cards_updated_at
            BEFORE UPDATE ON cards
            FOR EACH ROW EXECUTE FUNCTION fn_touch_updated_at();
    """)


def downgrade() -> None:
    op.execute("DROP TABLE IF EXISTS cards;")
    op.execute("DROP SEQUENCE IF EXISTS card_id_seq;")
