"""Price Override Domain Entity

Time-bounded price exception for one enrollment.
"""

from datetime import date
from decimal import Decimal
from typing import Optional
from sqlmodel import Field, Column, Index
from sqlalchemy import Date, ForeignKey, Numeric
from src.domain.base import BaseModel, IdType


class PriceOverride(BaseModel, table=True):
    """
    Price Override - Replaces resolved enrollment prices for a date window

    Domain Rules:
    - valid_to = None means open-ended
    - A None price leaves the discounted course price in place
    - Windows of one enrollment must not overlap (checked on create)
    """

    __tablename__ = "price_overrides"
    __table_args__ = (
        Index("ix_price_overrides_enrollment_valid_from", "enrollment_id", "valid_from"),
    )

    id: Optional[int] = Field(
        default=None,
        sa_column=Column(IdType, primary_key=True, autoincrement=True),
    )

    enrollment_id: int = Field(
        sa_column=Column(IdType, ForeignKey("enrollments.id", ondelete="CASCADE"), nullable=False),
    )

    valid_from: date = Field(sa_column=Column(Date, nullable=False))

    valid_to: Optional[date] = Field(default=None, sa_column=Column(Date, nullable=True))

    lesson_price: Optional[Decimal] = Field(
        default=None, sa_column=Column(Numeric(12, 2), nullable=True)
    )

    subscription_price: Optional[Decimal] = Field(
        default=None, sa_column=Column(Numeric(12, 2), nullable=True)
    )

    def overlaps(self, valid_from: date, valid_to: Optional[date]) -> bool:
        """True if this window shares at least one day with [valid_from, valid_to]"""
        starts_before_other_ends = valid_to is None or self.valid_from <= valid_to
        ends_after_other_starts = self.valid_to is None or self.valid_to >= valid_from
        return starts_before_other_ends and ends_after_other_starts
