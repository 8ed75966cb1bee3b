"""Billing Settings Repository Interface"""

from abc import ABC, abstractmethod
from typing import Optional
from src.domain.settings import BillingSettings


class SettingsRepository(ABC):
    """
    Repository interface for the singleton settings row

    The invoice counter lives here, so issuing reads it with
    ``for_update=True`` inside the numbering transaction.
    """

    @abstractmethod
    async def get(self, for_update: bool = False) -> Optional[BillingSettings]:
        """
        Retrieve the settings row

        Args:
            for_update: If True, lock the row until the transaction ends

        Returns:
            BillingSettings if the row exists, None otherwise
        """
        pass

    @abstractmethod
    async def update(self, settings: BillingSettings) -> BillingSettings:
        """Persist changes to the settings row"""
        pass

    @abstractmethod
    async def get_or_create(self) -> BillingSettings:
        """Retrieve the settings row, inserting the defaults if missing"""
        pass
