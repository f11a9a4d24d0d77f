"""CardRepository: PostgreSQL implementation of CardRepositoryProtocol.

A user's collection is replaced as a whole: DELETE the owner's rows, then
upsert the new list with sort_index = list position. Upsert (not plain
INSERT) lets an admin transfer/swap move a row to a new owner before the
previous owner's list has been rewritten in the same transaction.

Transaction ownership: the CALLER (application service) holds the user's
write guard and commits or rolls back.
"""

from collections.abc import Sequence
from typing import Any

from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession

from src.cp_cards.domain.models import Card, TradeReference
from src.cp_common.enums import PaymentMethod, Position, TransactionType
from src.cp_common.errors import InternalError

# ---------------------------------------------------------------------------
# SQL statements
# ---------------------------------------------------------------------------

_SELECT_COLUMNS = """
    id, owner_id, name, rarity, purchase_price, discount_percent, payment_method,
    country, league, club, age, version, season, position, purchase_date, notes,
    transaction_type, sale_price, sale_date, trade_given_ids, trade_received_ids,
    image_ref
"""

_LIST_CARDS_SQL = text(f"""
    SELECT {_SELECT_COLUMNS}
    FROM cards
    WHERE owner_id = :owner_id
    ORDER BY sort_index ASC, id ASC
""")

_DELETE_OWNER_CARDS_SQL = text("DELETE FROM cards WHERE owner_id = :owner_id")

_UPSERT_CARD_SQL = text("""
    INSERT INTO cards (
        id, owner_id, sort_index, name, rarity, purchase_price, discount_percent,
        payment_method, country, league, club, age, version, season, position,
        purchase_date, notes, transaction_type, sale_price, sale_date,
        trade_given_ids, trade_received_ids, image_ref)
    VALUES (
        :id, :owner_id, :sort_index, :name, :rarity, :purchase_price, :discount_percent,
        :payment_method, :country, :league, :club, :age, :version, :season, :position,
        :purchase_date, :notes, :transaction_type, :sale_price, :sale_date,
        :trade_given_ids, :trade_received_ids, :image_ref)
    ON CONFLICT (id) DO UPDATE SET
        owner_id = EXCLUDED.owner_id,
        sort_index = EXCLUDED.sort_index,
        name = EXCLUDED.name,
        rarity = EXCLUDED.rarity,
        purchase_price = EXCLUDED.purchase_price,
        discount_percent = EXCLUDED.discount_percent,
        payment_method = EXCLUDED.payment_method,
        country = EXCLUDED.country,
        league = EXCLUDED.league,
        club = EXCLUDED.club,
        age = EXCLUDED.age,
        version = EXCLUDED.version,
        season = EXCLUDED.season,
        position = EXCLUDED.position,
        purchase_date = EXCLUDED.purchase_date,
        notes = EXCLUDED.notes,
        transaction_type = EXCLUDED.transaction_type,
        sale_price = EXCLUDED.sale_price,
        sale_date = EXCLUDED.sale_date,
        trade_given_ids = EXCLUDED.trade_given_ids,
        trade_received_ids = EXCLUDED.trade_received_ids,
        image_ref = EXCLUDED.image_ref,
        updated_at = NOW()
""")

_NEXT_CARD_ID_SQL = text("SELECT nextval('card_id_seq')")

_FIND_OWNER_SQL = text("SELECT owner_id FROM cards WHERE id = :card_id")


# ---------------------------------------------------------------------------
# Row mappers
# ---------------------------------------------------------------------------


def _row_to_card(row: Any) -> Card:
    reference = None
    if row.trade_given_ids is not None or row.trade_received_ids is not None:
        reference = TradeReference(
            given_cards=tuple(row.trade_given_ids or ()),
            received_cards=tuple(row.trade_received_ids or ()),
        )
    return Card(
        id=row.id,
        owner_id=row.owner_id,
        name=row.name,
        rarity=row.rarity,
        purchase_price=row.purchase_price,
        discount_percent=row.discount_percent,
        payment_method=PaymentMethod(row.payment_method),
        country=row.country,
        league=row.league,
        club=row.club,
        age=row.age,
        version=row.version,
        season=row.season,
        position=Position(row.position),
        purchase_date=row.purchase_date,
        notes=row.notes,
        transaction_type=TransactionType(row.transaction_type),
        sale_price=row.sale_price,
        sale_date=row.sale_date,
        trade_reference=reference,
        image_ref=row.image_ref,
    )


def _card_to_params(card: Card, owner_id: str, sort_index: int) -> dict[str, Any]:
    ref = card.trade_reference
    return {
        "id": card.id,
        "owner_id": owner_id,
        "sort_index": sort_index,
        "name": card.name,
        "rarity": card.rarity,
        "purchase_price": card.purchase_price,
        "discount_percent": card.discount_percent,
        "payment_method": card.payment_method.value,
        "country": card.country,
        "league": card.league,
        "club": card.club,
        "age": card.age,
        "version": card.version,
        "season": card.season,
        "position": card.position.value,
        "purchase_date": card.purchase_date,
        "notes": card.notes,
        "transaction_type": card.transaction_type.value,
        "sale_price": card.sale_price,
        "sale_date": card.sale_date,
        "trade_given_ids": list(ref.given_cards) if ref else None,
        "trade_received_ids": list(ref.received_cards) if ref else None,
        "image_ref": card.image_ref,
    }


class CardRepository:
    """Whole-list replace per owner."""

    async def list_cards(self, db: AsyncSession, owner_id: str) -> list[Card]:
        result = await db.execute(_LIST_CARDS_SQL, {"owner_id": owner_id})
        return [_row_to_card(row) for row in result.fetchall()]

    async def replace_cards(
        self, db: AsyncSession, owner_id: str, cards: Sequence[Card]
    ) -> None:
        await db.execute(_DELETE_OWNER_CARDS_SQL, {"owner_id": owner_id})
        if cards:
            await db.execute(
                _UPSERT_CARD_SQL,
                [_card_to_params(card, owner_id, i) for i, card in enumerate(cards)],
            )

    async def allocate_card_id(self, db: AsyncSession) -> int:
        result = await db.execute(_NEXT_CARD_ID_SQL)
        card_id = result.scalar_one_or_none()
        if card_id is None:
            raise InternalError("card_id_seq returned no value")
        return int(card_id)

    async def find_owner(self, db: AsyncSession, card_id: int) -> str | None:
        result = await db.execute(_FIND_OWNER_SQL, {"card_id": card_id})
        owner = result.scalar_one_or_none()
        return str(owner) if owner is not None else None
