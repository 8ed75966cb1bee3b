"""SQLAlchemy Price Override Repository Implementation"""

from datetime import date
from typing import List
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession
from src.app.repositories.price_override_repository import PriceOverrideRepository
from src.domain.price_override import PriceOverride


class SqlAlchemyPriceOverrideRepository(PriceOverrideRepository):
    """SQLAlchemy implementation of PriceOverrideRepository"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_starting_on_or_before(
        self, enrollment_id: int, period_end: date
    ) -> List[PriceOverride]:
        """
        Overrides of an enrollment starting on or before period_end

        Ordered by valid_from descending (ties by ID descending) so the most
        recent window comes first.
        """
        stmt = (
            select(PriceOverride)
            .where(PriceOverride.enrollment_id == enrollment_id)
            .where(PriceOverride.valid_from <= period_end)
            .order_by(PriceOverride.valid_from.desc(), PriceOverride.id.desc())
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def get_by_enrollment_id(self, enrollment_id: int) -> List[PriceOverride]:
        stmt = (
            select(PriceOverride)
            .where(PriceOverride.enrollment_id == enrollment_id)
            .order_by(PriceOverride.valid_from)
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def create(self, price_override: PriceOverride) -> PriceOverride:
        self.session.add(price_override)
        await self.session.flush()
        await self.session.refresh(price_override)
        return price_override
