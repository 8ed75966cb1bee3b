"""Enrollment Domain Entity

Links a student to a course and says how the pair is billed.
"""

from decimal import Decimal
from enum import Enum
from typing import Optional
from sqlmodel import Field, Column, Index
from sqlalchemy import CheckConstraint, ForeignKey, Numeric, String
from src.domain.base import BaseModel, IdType


class BillingMode(str, Enum):
    """How an enrollment is charged"""
    PER_LESSON = "per_lesson"      # Lessons attended in the month * lesson price
    SUBSCRIPTION = "subscription"  # Flat monthly subscription price


class Enrollment(BaseModel, table=True):
    """
    Enrollment - Student in a course

    Domain Rules:
    - One enrollment per (student, course)
    - discount_pct is within [0, 100] and applies to both course prices
    - Never modified by the billing pipeline
    """

    __tablename__ = "enrollments"
    __table_args__ = (
        Index("ix_enrollments_student_course", "student_id", "course_id", unique=True),
        CheckConstraint(
            "discount_pct >= 0 AND discount_pct <= 100", name="discount_pct_in_range"
        ),
    )

    id: Optional[int] = Field(
        default=None,
        sa_column=Column(IdType, primary_key=True, autoincrement=True),
    )

    student_id: int = Field(
        sa_column=Column(IdType, ForeignKey("students.id", ondelete="CASCADE"), nullable=False),
    )

    course_id: int = Field(
        sa_column=Column(IdType, ForeignKey("courses.id", ondelete="CASCADE"), nullable=False),
    )

    billing_mode: BillingMode = Field(description="per_lesson or subscription")

    discount_pct: Decimal = Field(
        default=Decimal("0"),
        sa_column=Column(Numeric(5, 2), nullable=False, default=0),
        description="Percentage discount on course prices (0-100)",
    )

    note: str = Field(default="", sa_column=Column(String(500), nullable=False, default=""))
