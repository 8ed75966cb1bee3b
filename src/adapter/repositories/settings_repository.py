"""SQLAlchemy Billing Settings Repository Implementation"""

import logging
from typing import Optional
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession
from src.app.repositories.settings_repository import SettingsRepository
from src.domain.settings import BillingSettings, SETTINGS_SINGLETON_ID

logger = logging.getLogger(__name__)


class SqlAlchemySettingsRepository(SettingsRepository):
    """
    SQLAlchemy implementation of SettingsRepository

    The row is always read from the database; next_seq is never cached.
    """

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get(self, for_update: bool = False) -> Optional[BillingSettings]:
        """
        Retrieve the settings row with optional row-level locking

        Args:
            for_update: If True, locks the row with SELECT FOR UPDATE

        Returns:
            BillingSettings if initialized, None otherwise
        """
        stmt = select(BillingSettings).where(BillingSettings.id == SETTINGS_SINGLETON_ID)

        if for_update:
            stmt = stmt.with_for_update()

        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def update(self, settings: BillingSettings) -> BillingSettings:
        self.session.add(settings)
        await self.session.flush()
        await self.session.refresh(settings)
        return settings

    async def get_or_create(self) -> BillingSettings:
        settings = await self.get()
        if settings:
            return settings

        logger.info("Settings row missing, creating defaults")
        settings = BillingSettings(id=SETTINGS_SINGLETON_ID)
        self.session.add(settings)
        await self.session.flush()
        await self.session.refresh(settings)
        return settings
