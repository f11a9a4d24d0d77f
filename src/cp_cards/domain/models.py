"""Domain models for cp_cards: frozen dataclasses, no SQLAlchemy dependency.

Cards are immutable values: every mutation builds a new Card with
dataclasses.replace, so a list handed to a reader can never change under it.
"""

from dataclasses import dataclass, replace
from datetime import datetime

from src.cp_common.enums import PaymentMethod, Position, TransactionType
from src.cp_common.errors import InvalidCardAttributesError
from src.cp_common.money import validate_discount, validate_price


@dataclass(frozen=True)
class TradeReference:
    """Both sides of one trade event, attached to every card it touched."""

    given_cards: tuple[int, ...]
    received_cards: tuple[int, ...]


@dataclass(frozen=True)
class CardAttributes:
    """Fields a user sets on create and replaces on update."""

    name: str
    rarity: str
    purchase_price: float
    discount_percent: float
    payment_method: PaymentMethod
    country: str
    league: str
    club: str
    age: int
    version: str
    season: str
    position: Position
    purchase_date: datetime | None = None
    notes: str = ""

    def validate(self) -> None:
        try:
            validate_price(self.purchase_price)
            validate_discount(self.discount_percent)
        except ValueError as exc:
            raise InvalidCardAttributesError(str(exc)) from None
        if self.age < 0:
            raise InvalidCardAttributesError(f"Age must be >= 0, got {self.age}")
        if not self.name.strip():
            raise InvalidCardAttributesError("Name must not be blank")


@dataclass(frozen=True)
class Card:
    id: int
    owner_id: str
    name: str
    rarity: str
    purchase_price: float
    discount_percent: float
    payment_method: PaymentMethod
    country: str
    league: str
    club: str
    age: int
    version: str
    season: str
    position: Position
    purchase_date: datetime | None = None
    notes: str = ""
    transaction_type: TransactionType = TransactionType.FOR_SALE
    sale_price: float | None = None
    sale_date: datetime | None = None
    trade_reference: TradeReference | None = None
    image_ref: str | None = None

    @classmethod
    def create(
        cls,
        card_id: int,
        owner_id: str,
        attrs: CardAttributes,
        image_ref: str | None = None,
    ) -> "Card":
        """New card in the initial forSale state with no sale or trade data."""
        return cls(
            id=card_id,
            owner_id=owner_id,
            name=attrs.name,
            rarity=attrs.rarity,
            purchase_price=attrs.purchase_price,
            discount_percent=attrs.discount_percent,
            payment_method=attrs.payment_method,
            country=attrs.country,
            league=attrs.league,
            club=attrs.club,
            age=attrs.age,
            version=attrs.version,
            season=attrs.season,
            position=attrs.position,
            purchase_date=attrs.purchase_date,
            notes=attrs.notes,
            image_ref=image_ref,
        )

    def with_attributes(self, attrs: CardAttributes) -> "Card":
        """Replace user-editable fields; id, owner, lifecycle, sale and trade data stay."""
        return replace(
            self,
            name=attrs.name,
            rarity=attrs.rarity,
            purchase_price=attrs.purchase_price,
            discount_percent=attrs.discount_percent,
            payment_method=attrs.payment_method,
            country=attrs.country,
            league=attrs.league,
            club=attrs.club,
            age=attrs.age,
            version=attrs.version,
            season=attrs.season,
            position=attrs.position,
            purchase_date=attrs.purchase_date,
            notes=attrs.notes,
        )

    def attributes(self) -> CardAttributes:
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
