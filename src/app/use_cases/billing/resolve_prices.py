"""Price resolution for enrollments

Computes the effective lesson and subscription prices of an enrollment
for one billing month.
"""

import logging
from decimal import Decimal
from typing import NamedTuple, Optional
from src.app.repositories.course_repository import CourseRepository
from src.app.repositories.price_override_repository import PriceOverrideRepository
from src.domain.enrollment import Enrollment
from src.domain.money import apply_discount
from .period import period_bounds

logger = logging.getLogger(__name__)


class ResolvedPrices(NamedTuple):
    lesson_price: Decimal
    subscription_price: Decimal
    course_name: str = ""


class PriceResolver:
    """
    Resolves enrollment prices for a period

    Rules:
    1. Base prices come from the course, each reduced by discount_pct
       and rounded to cents independently
    2. Among overrides with valid_from <= period end (newest first), the
       first one still valid at period start wins
    3. Non-null override prices replace the discounted ones; null fields
       keep them
    """

    def __init__(
        self,
        course_repo: CourseRepository,
        override_repo: PriceOverrideRepository,
    ):
        self.course_repo = course_repo
        self.override_repo = override_repo

    async def resolve(self, enrollment: Enrollment, year: int, month: int) -> Optional[ResolvedPrices]:
        """
        Resolve prices of an enrollment for a period

        Args:
            enrollment: Enrollment to price
            year: Period year
            month: Period month

        Returns:
            ResolvedPrices, or None if the enrollment's course is missing
        """
        course = await self.course_repo.get_by_id(enrollment.course_id)
        if course is None:
            logger.warning(
                f"Course {enrollment.course_id} of enrollment {enrollment.id} not found, "
                f"enrollment cannot be priced"
            )
            return None

        lesson_price = apply_discount(course.lesson_price, enrollment.discount_pct)
        subscription_price = apply_discount(course.subscription_price, enrollment.discount_pct)

        period_start, period_end = period_bounds(year, month)
        overrides = await self.override_repo.get_starting_on_or_before(enrollment.id, period_end)

        for override in overrides:
            if override.valid_to is None or override.valid_to >= period_start:
                if override.lesson_price is not None:
                    lesson_price = override.lesson_price
                if override.subscription_price is not None:
                    subscription_price = override.subscription_price
                break

        return ResolvedPrices(
            lesson_price=lesson_price,
            subscription_price=subscription_price,
            course_name=course.name,
        )
