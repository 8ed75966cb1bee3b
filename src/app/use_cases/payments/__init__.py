"""Payment use cases"""
from .create_payment import CreatePayment
from .delete_payment import DeletePayment
from .quick_cash import QuickCashPayment
from .list_student_payments import ListStudentPayments
from .student_balance import GetStudentBalance
from .list_debtors import ListDebtors
from .invoice_summary import GetInvoiceSummary
from .reconcile import recompute_invoice_status
from .dtos import (
    CreatePaymentCommandDTO,
    PaymentResponseDTO,
    StudentBalanceDTO,
    DebtorDTO,
    InvoiceSummaryDTO,
)

__all__ = [
    "CreatePayment",
    "DeletePayment",
    "QuickCashPayment",
    "ListStudentPayments",
    "GetStudentBalance",
    "ListDebtors",
    "GetInvoiceSummary",
    "recompute_invoice_status",
    "CreatePaymentCommandDTO",
    "PaymentResponseDTO",
    "StudentBalanceDTO",
    "DebtorDTO",
    "InvoiceSummaryDTO",
]
