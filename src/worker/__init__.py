"""Background workers for billing service"""
from .monthly_billing import MonthlyBillingWorker

__all__ = ["MonthlyBillingWorker"]
