"""Billing Settings Domain Entity

Single-row table with organization details and the invoice number counter.
"""

from typing import Optional
from sqlmodel import Field, Column
from sqlalchemy import Boolean, CheckConstraint, Integer, String
from src.domain.base import BaseModel

SETTINGS_SINGLETON_ID = 1
DEFAULT_INVOICE_PREFIX = "LS"


class BillingSettings(BaseModel, table=True):
    """
    Billing Settings - Organization-wide configuration

    Domain Rules:
    - Exactly one row, id = 1
    - next_seq only changes inside the transaction that issues an invoice
    - next_seq is read fresh for every issue, never cached
    """

    __tablename__ = "settings"
    __table_args__ = (
        CheckConstraint(f"id = {SETTINGS_SINGLETON_ID}", name="settings_singleton"),
        CheckConstraint("next_seq >= 1", name="next_seq_positive"),
    )

    id: Optional[int] = Field(
        default=SETTINGS_SINGLETON_ID,
        sa_column=Column(Integer, primary_key=True, autoincrement=False),
    )

    org_name: str = Field(default="", sa_column=Column(String(255), nullable=False, default=""))
    address: str = Field(default="", sa_column=Column(String(500), nullable=False, default=""))

    invoice_prefix: str = Field(
        default=DEFAULT_INVOICE_PREFIX,
        sa_column=Column(String(20), nullable=False, default=DEFAULT_INVOICE_PREFIX),
    )

    next_seq: int = Field(
        default=1,
        sa_column=Column(Integer, nullable=False, default=1),
        description="Sequence used by the next issued invoice",
    )

    invoice_day_of_month: int = Field(
        default=1,
        sa_column=Column(Integer, nullable=False, default=1),
        description="Day of month from which the previous month is billed",
    )

    auto_issue: bool = Field(
        default=False,
        sa_column=Column(Boolean, nullable=False, default=False),
        description="Issue drafts right after the monthly generation run",
    )

    currency: str = Field(default="EUR", sa_column=Column(String(3), nullable=False, default="EUR"))
    locale: str = Field(default="lv-LV", sa_column=Column(String(20), nullable=False, default="lv-LV"))

    @property
    def effective_prefix(self) -> str:
        return self.invoice_prefix or DEFAULT_INVOICE_PREFIX
