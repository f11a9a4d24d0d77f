"""PortfolioService: read-only; recomputes every figure from the live collection."""

from sqlalchemy.ext.asyncio import AsyncSession

from src.cp_cards.application.schemas import CardItem
from src.cp_cards.domain.models import Card
from src.cp_cards.domain.repository import CardRepositoryProtocol
from src.cp_cards.infrastructure.persistence import CardRepository
from src.cp_portfolio.application.schemas import (
    AmountResponse,
    CraftedCardsResponse,
    InvestmentTotalsResponse,
    PortfolioSnapshotResponse,
    TransactionGroupsResponse,
    TransactionSummaryResponse,
)
from src.cp_portfolio.domain import aggregation


class PortfolioService:
    def __init__(self, repo: CardRepositoryProtocol | None = None) -> None:
        self._repo: CardRepositoryProtocol = repo or CardRepository()

    async def _cards(self, db: AsyncSession, user_id: str) -> list[Card]:
        return await self._repo.list_cards(db, user_id)

    async def snapshot(self, db: AsyncSession, user_id: str) -> PortfolioSnapshotResponse:
        cards = await self._cards(db, user_id)
        return PortfolioSnapshotResponse.from_domain(aggregation.portfolio_snapshot(cards))

    async def sold_card_balance(self, db: AsyncSession, user_id: str) -> AmountResponse:
        return AmountResponse.of(aggregation.sold_card_balance(await self._cards(db, user_id)))

    async def investment_totals(
        self, db: AsyncSession, user_id: str
    ) -> InvestmentTotalsResponse:
        cards = await self._cards(db, user_id)
        return InvestmentTotalsResponse.from_domain(aggregation.investment_totals(cards))

    async def total_invested(self, db: AsyncSession, user_id: str) -> AmountResponse:
        return AmountResponse.of(aggregation.total_invested(await self._cards(db, user_id)))

    async def total_returns(self, db: AsyncSession, user_id: str) -> AmountResponse:
        return AmountResponse.of(aggregation.total_returns(await self._cards(db, user_id)))

    async def total_balance(self, db: AsyncSession, user_id: str) -> AmountResponse:
        return AmountResponse.of(aggregation.total_balance(await self._cards(db, user_id)))

    async def transaction_summary(
        self, db: AsyncSession, user_id: str
    ) -> TransactionSummaryResponse:
        cards = await self._cards(db, user_id)
        return TransactionSummaryResponse.from_domain(aggregation.transaction_summary(cards))

    async def transaction_groups(
        self, db: AsyncSession, user_id: str
    ) -> TransactionGroupsResponse:
        cards = await self._cards(db, user_id)
        return TransactionGroupsResponse.from_domain(aggregation.transaction_groups(cards))

    async def crafted_cards(self, db: AsyncSession, user_id: str) -> CraftedCardsResponse:
        crafted = aggregation.crafted_cards(await self._cards(db, user_id))
        return CraftedCardsResponse(
            items=[CardItem.from_domain(c) for c in crafted], count=len(crafted)
        )
