"""Pydantic schemas for cp_portfolio API. Every amount carries a *_display twin."""

from pydantic import BaseModel

from src.cp_cards.application.schemas import CardItem
from src.cp_cards.domain.models import Card
from src.cp_common.money import to_display
from src.cp_portfolio.domain.aggregation import (
    InvestmentTotals,
    PortfolioSnapshot,
    TransactionGroups,
    TransactionSummary,
)


class AmountResponse(BaseModel):
    amount: float
    amount_display: str

    @classmethod
    def of(cls, amount: float) -> "AmountResponse":
        return cls(amount=amount, amount_display=to_display(amount))


class InvestmentTotalsResponse(BaseModel):
    total_cash_invested: float
    total_cash_invested_display: str
    total_eth_invested: float
    total_eth_invested_display: str

    @classmethod
    def from_domain(cls, totals: InvestmentTotals) -> "InvestmentTotalsResponse":
        return cls(
            total_cash_invested=totals.total_cash_invested,
            total_cash_invested_display=to_display(totals.total_cash_invested),
            total_eth_invested=totals.total_eth_invested,
            total_eth_invested_display=to_display(totals.total_eth_invested),
        )


class TransactionSummaryResponse(BaseModel):
    for_sale_count: int
    sold_count: int
    traded_given_count: int
    traded_received_count: int

    @classmethod
    def from_domain(cls, summary: TransactionSummary) -> "TransactionSummaryResponse":
        return cls(
            for_sale_count=summary.for_sale_count,
            sold_count=summary.sold_count,
            traded_given_count=summary.traded_given_count,
            traded_received_count=summary.traded_received_count,
        )


def _items(cards: list[Card]) -> list[CardItem]:
    return [CardItem.from_domain(c) for c in cards]


class TransactionGroupsResponse(BaseModel):
    for_sale: list[CardItem]
    sold: list[CardItem]
    traded_given: list[CardItem]
    traded_received: list[CardItem]

    @classmethod
    def from_domain(cls, groups: TransactionGroups) -> "TransactionGroupsResponse":
        return cls(
            for_sale=_items(groups.for_sale),
            sold=_items(groups.sold),
            traded_given=_items(groups.traded_given),
            traded_received=_items(groups.traded_received),
        )


class CraftedCardsResponse(BaseModel):
    items: list[CardItem]
    count: int


class PortfolioSnapshotResponse(BaseModel):
    investment_totals: InvestmentTotalsResponse
    total_invested: float
    total_invested_display: str
    total_returns: float
    total_returns_display: str
    total_balance: float
    total_balance_display: str
    hold_balance: float
    hold_balance_display: str
    total_return_balance: float
    total_return_balance_display: str
    all_cards: list[CardItem]

    @classmethod
    def from_domain(cls, snap: PortfolioSnapshot) -> "PortfolioSnapshotResponse":
        return cls(
            investment_totals=InvestmentTotalsResponse.from_domain(snap.investment_totals),
            total_invested=snap.total_invested,
            total_invested_display=to_display(snap.total_invested),
            total_returns=snap.total_returns,
            total_returns_display=to_display(snap.total_returns),
            total_balance=snap.total_balance,
            total_balance_display=to_display(snap.total_balance),
            hold_balance=snap.hold_balance,
            hold_balance_display=to_display(snap.hold_balance),
            total_return_balance=snap.total_return_balance,
            total_return_balance_display=to_display(snap.total_return_balance),
            all_cards=_items(snap.all_cards),
        )
