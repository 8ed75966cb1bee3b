"""Course Domain Entity

Carries the base prices that enrollments are billed from.
"""

from decimal import Decimal
from enum import Enum
from typing import Optional
from sqlmodel import Field, Column
from sqlalchemy import Boolean, CheckConstraint, Numeric, String
from src.domain.base import BaseModel, IdType


class CourseType(str, Enum):
    """Course types"""
    GROUP = "group"
    INDIVIDUAL = "individual"


class Course(BaseModel, table=True):
    __tablename__ = "courses"
    __table_args__ = (
        CheckConstraint("lesson_price >= 0", name="course_lesson_price_non_negative"),
        CheckConstraint("subscription_price >= 0", name="course_subscription_price_non_negative"),
    )

    id: Optional[int] = Field(
        default=None,
        sa_column=Column(IdType, primary_key=True, autoincrement=True),
    )

    name: str = Field(sa_column=Column(String(255), nullable=False))

    course_type: CourseType = Field(default=CourseType.GROUP)

    lesson_price: Decimal = Field(
        default=Decimal("0.00"),
        sa_column=Column(Numeric(12, 2), nullable=False, default=0),
        description="Base price of one lesson",
    )

    subscription_price: Decimal = Field(
        default=Decimal("0.00"),
        sa_column=Column(Numeric(12, 2), nullable=False, default=0),
        description="Base monthly subscription price",
    )

    is_active: bool = Field(default=True, sa_column=Column(Boolean, nullable=False, default=True))
