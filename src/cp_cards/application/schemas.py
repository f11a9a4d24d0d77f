"""Pydantic schemas for cp_cards API."""

from datetime import datetime

from pydantic import BaseModel, Field

from src.cp_cards.domain.models import Card, CardAttributes
from src.cp_common.enums import PaymentMethod, Position
from src.cp_common.money import to_display
from src.cp_portfolio.domain.aggregation import effective_cost

# ---------------------------------------------------------------------------
# Request schemas
# ---------------------------------------------------------------------------


class CardAttributesRequest(BaseModel):
    name: str = Field(..., min_length=1, max_length=200)
    rarity: str = Field(..., max_length=50)
    purchase_price: float = Field(
        ..., ge=0, allow_inf_nan=False, description="Purchase price in EUR"
    )
    discount_percent: float = Field(0.0, ge=0, le=100, allow_inf_nan=False)
    payment_method: PaymentMethod
    country: str = Field("", max_length=100)
    league: str = Field("", max_length=100)
    club: str = Field("", max_length=100)
    age: int = Field(..., ge=0)
    version: str = Field("", max_length=50)
    season: str = Field("", max_length=20)
    position: Position
    purchase_date: datetime | None = None
    notes: str = Field("", max_length=2000)

    def to_domain(self) -> CardAttributes:
        return CardAttributes(
            name=self.name,
            rarity=self.rarity,
            purchase_price=self.purchase_price,
            discount_percent=self.discount_percent,
            payment_method=self.payment_method,
            country=self.country,
            league=self.league,
            club=self.club,
            age=self.age,
            version=self.version,
            season=self.season,
            position=self.position,
            purchase_date=self.purchase_date,
            notes=self.notes,
        )


class CreateCardRequest(CardAttributesRequest):
    image_ref: str | None = Field(None, max_length=500)


class UpdateCardRequest(CardAttributesRequest):
    pass


class SalePriceRequest(BaseModel):
    sale_price: float = Field(..., ge=0, allow_inf_nan=False)


class MarkSoldRequest(BaseModel):
    sale_price: float = Field(..., ge=0, allow_inf_nan=False)
    sale_date: datetime | None = Field(None, description="Defaults to now")


class TradeReferenceModel(BaseModel):
    given_cards: list[int]
    received_cards: list[int]


class RecordTradeRequest(BaseModel):
    given_card_ids: list[int] = Field(..., min_length=1)
    received_card_ids: list[int] = Field(default_factory=list)


class RevertTradeRequest(BaseModel):
    trade_reference: TradeReferenceModel | None = None


# ---------------------------------------------------------------------------
# Response schemas
# ---------------------------------------------------------------------------


class CardItem(BaseModel):
    id: int
    owner_id: str
    name: str
    rarity: str
    purchase_price: float
    purchase_price_display: str
    discount_percent: float
    effective_cost: float
    effective_cost_display: str
    payment_method: str
    country: str
    league: str
    club: str
    age: int
    version: str
    season: str
    position: str
    purchase_date: str | None
    notes: str
    transaction_type: str
    sale_price: float | None
    sale_price_display: str | None
    sale_date: str | None
    trade_reference: TradeReferenceModel | None
    image_ref: str | None

    @classmethod
    def from_domain(cls, card: Card) -> "CardItem":
        cost = effective_cost(card)
        ref = card.trade_reference
        return cls(
            id=card.id,
            owner_id=card.owner_id,
            name=card.name,
            rarity=card.rarity,
            purchase_price=card.purchase_price,
            purchase_price_display=to_display(card.purchase_price),
            discount_percent=card.discount_percent,
            effective_cost=cost,
            effective_cost_display=to_display(cost),
            payment_method=card.payment_method.value,
            country=card.country,
            league=card.league,
            club=card.club,
            age=card.age,
            version=card.version,
            season=card.season,
            position=card.position.value,
            purchase_date=card.purchase_date.isoformat() if card.purchase_date else None,
            notes=card.notes,
            transaction_type=card.transaction_type.value,
            sale_price=card.sale_price,
            sale_price_display=(
                to_display(card.sale_price) if card.sale_price is not None else None
            ),
            sale_date=card.sale_date.isoformat() if card.sale_date else None,
            trade_reference=(
                TradeReferenceModel(
                    given_cards=list(ref.given_cards),
                    received_cards=list(ref.received_cards),
                )
                if ref is not None
                else None
            ),
            image_ref=card.image_ref,
        )


class CardListResponse(BaseModel):
    items: list[CardItem]
    total: int


class DeleteCardResponse(BaseModel):
    card_id: int
    deleted: bool


class TradeResponse(BaseModel):
    given_card_ids: list[int]
    received_card_ids: list[int]
    skipped_card_ids: list[int]


class SuggestionsResponse(BaseModel):
    field: str
    values: list[str]
