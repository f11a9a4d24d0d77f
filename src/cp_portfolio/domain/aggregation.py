"""Portfolio aggregation: pure functions over one user's current card list.

Nothing here is stored: every figure is recomputed from the live collection
on each read, so it always matches the cards as they are.

Cost rules:
  effective_cost = purchase_price * (1 - discount_percent / 100)
  essence cards cost 0 everywhere (crafted, not bought)
  invested capital counts cash and eth cards only (trade/essence never)
"""

from dataclasses import dataclass, field

from src.cp_cards.domain.models import Card
from src.cp_common.enums import PaymentMethod, TransactionType

INVESTED_METHODS: frozenset[PaymentMethod] = frozenset({PaymentMethod.CASH, PaymentMethod.ETH})


@dataclass(frozen=True)
class InvestmentTotals:
    total_cash_invested: float = 0.0
    total_eth_invested: float = 0.0

    @property
    def total(self) -> float:
        return self.total_cash_invested + self.total_eth_invested


@dataclass(frozen=True)
class TransactionSummary:
    for_sale_count: int = 0
    sold_count: int = 0
    traded_given_count: int = 0
    traded_received_count: int = 0


@dataclass(frozen=True)
class TransactionGroups:
    for_sale: list[Card] = field(default_factory=list)
    sold: list[Card] = field(default_factory=list)
    traded_given: list[Card] = field(default_factory=list)
    traded_received: list[Card] = field(default_factory=list)


@dataclass(frozen=True)
class PortfolioSnapshot:
    investment_totals: InvestmentTotals
    total_invested: float
    total_returns: float
    total_balance: float
    hold_balance: float
    total_return_balance: float
    all_cards: list[Card]


def effective_cost(card: Card) -> float:
    if card.payment_method == PaymentMethod.ESSENCE:
        return 0.0
    return card.purchase_price * (1 - card.discount_percent / 100)


def investment_totals(cards: list[Card]) -> InvestmentTotals:
    cash = sum(effective_cost(c) for c in cards if c.payment_method == PaymentMethod.CASH)
    eth = sum(effective_cost(c) for c in cards if c.payment_method == PaymentMethod.ETH)
    return InvestmentTotals(total_cash_invested=float(cash), total_eth_invested=float(eth))


def total_invested(cards: list[Card]) -> float:
    return investment_totals(cards).total


def _sold(cards: list[Card]) -> list[Card]:
    return [c for c in cards if c.transaction_type == TransactionType.SOLD]


def total_returns(cards: list[Card]) -> float:
    """Sum of sale prices of sold cards; a sold card without a price adds 0."""
    return float(sum(c.sale_price or 0.0 for c in _sold(cards)))


def total_balance(cards: list[Card]) -> float:
    return total_returns(cards) - total_invested(cards)


def sold_card_balance(cards: list[Card]) -> float:
    """Per-sold-card profit/loss summed; essence cards count their full sale price.

    Unlike total_balance this also charges trade-financed sold cards their cost.
    """
    return float(sum((c.sale_price or 0.0) - effective_cost(c) for c in _sold(cards)))


def hold_balance(cards: list[Card]) -> float:
    """Invested capital still tied up in cash/eth cards that are held for sale."""
    return float(sum(
        effective_cost(c)
        for c in cards
        if c.transaction_type == TransactionType.FOR_SALE and c.payment_method in INVESTED_METHODS
    ))


def transaction_summary(cards: list[Card]) -> TransactionSummary:
    groups = transaction_groups(cards)
    return TransactionSummary(
        for_sale_count=len(groups.for_sale),
        sold_count=len(groups.sold),
        traded_given_count=len(groups.traded_given),
        traded_received_count=len(groups.traded_received),
    )


def transaction_groups(cards: list[Card]) -> TransactionGroups:
    """Partition by lifecycle state, each list in collection order."""
    groups = TransactionGroups()
    buckets: dict[TransactionType, list[Card]] = {
        TransactionType.FOR_SALE: groups.for_sale,
        TransactionType.SOLD: groups.sold,
        TransactionType.TRADED_GIVEN: groups.traded_given,
        TransactionType.TRADED_RECEIVED: groups.traded_received,
    }
    for card in cards:
        buckets[card.transaction_type].append(card)
    return groups


def crafted_cards(cards: list[Card]) -> list[Card]:
    """Essence cards still held (not sold or traded away)."""
    return [
        c for c in cards
        if c.payment_method == PaymentMethod.ESSENCE
        and c.transaction_type == TransactionType.FOR_SALE
    ]


def portfolio_snapshot(cards: list[Card]) -> PortfolioSnapshot:
    totals = investment_totals(cards)
    returns = total_returns(cards)
    return PortfolioSnapshot(
        investment_totals=totals,
        total_invested=totals.total,
        total_returns=returns,
        total_balance=returns - totals.total,
        hold_balance=hold_balance(cards),
        total_return_balance=sold_card_balance(cards),
        all_cards=list(cards),
    )
