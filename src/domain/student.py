"""Student Domain Entity

Students are maintained outside the billing core; billing only reads them.
"""

from typing import Optional
from sqlmodel import Field, Column
from sqlalchemy import Boolean, String
from src.domain.base import BaseModel, IdType


class Student(BaseModel, table=True):
    __tablename__ = "students"

    id: Optional[int] = Field(
        default=None,
        sa_column=Column(IdType, primary_key=True, autoincrement=True),
    )

    full_name: str = Field(sa_column=Column(String(255), nullable=False))
    phone: str = Field(default="", sa_column=Column(String(50), nullable=False, default=""))
    email: str = Field(default="", sa_column=Column(String(255), nullable=False, default=""))
    note: str = Field(default="", sa_column=Column(String(500), nullable=False, default=""))

    is_active: bool = Field(
        default=True,
        sa_column=Column(Boolean, nullable=False, default=True, index=True),
        description="Inactive students are left out of billing runs",
    )
