"""Price Override Repository Interface"""

from abc import ABC, abstractmethod
from datetime import date
from typing import List
from src.domain.price_override import PriceOverride


class PriceOverrideRepository(ABC):
    """Repository interface for PriceOverride persistence"""

    @abstractmethod
    async def get_starting_on_or_before(
        self, enrollment_id: int, period_end: date
    ) -> List[PriceOverride]:
        """
        Retrieve overrides of an enrollment with valid_from <= period_end

        Args:
            enrollment_id: Enrollment ID
            period_end: Last day of the billing period

        Returns:
            Overrides ordered by valid_from descending (most recent first)
        """
        pass

    @abstractmethod
    async def get_by_enrollment_id(self, enrollment_id: int) -> List[PriceOverride]:
        """Retrieve every override of an enrollment, ordered by valid_from"""
        pass

    @abstractmethod
    async def create(self, price_override: PriceOverride) -> PriceOverride:
        """
        Create a new price override

        Args:
            price_override: PriceOverride entity to persist

        Returns:
            Created PriceOverride with generated ID
        """
        pass
