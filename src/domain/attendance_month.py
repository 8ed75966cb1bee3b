"""Attendance Month Domain Entity

Monthly lesson counts per student and course. Owned by the attendance
subsystem; billing only reads ``lessons_count``.
"""

from typing import Optional
from sqlmodel import Field, Column, Index
from sqlalchemy import Boolean, CheckConstraint, Integer
from src.domain.base import BaseModel, IdType


class AttendanceMonth(BaseModel, table=True):
    __tablename__ = "attendance_months"
    __table_args__ = (
        Index(
            "ix_attendance_months_student_course_period",
            "student_id", "course_id", "year", "month",
            unique=True,
        ),
        CheckConstraint("lessons_count >= 0", name="lessons_count_non_negative"),
    )

    id: Optional[int] = Field(
        default=None,
        sa_column=Column(IdType, primary_key=True, autoincrement=True),
    )

    student_id: int = Field(sa_column=Column(IdType, nullable=False))
    course_id: int = Field(sa_column=Column(IdType, nullable=False))
    year: int = Field(sa_column=Column(Integer, nullable=False))
    month: int = Field(sa_column=Column(Integer, nullable=False))

    lessons_count: int = Field(default=0, sa_column=Column(Integer, nullable=False, default=0))

    locked: bool = Field(
        default=False,
        sa_column=Column(Boolean, nullable=False, default=False),
        description="Locked months are read-only for attendance editing",
    )
