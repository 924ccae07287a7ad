"""Billing domain use cases"""
from .get_payment_schedule import GetPaymentSchedule
from .get_financial_overview import GetFinancialOverview
from .record_manual_payment import RecordManualPayment
from .update_due_date import UpdateDueDate
from .open_initial_subscription import OpenInitialSubscription
from .get_client_summary import GetClientSummary
from .reconcile_billing_periods import ReconcileBillingPeriods
from .dtos import (
    ObligationDTO,
    PaymentScheduleResponseDTO,
    FinancialOverviewResponseDTO,
    ManualPaymentCommandDTO,
    PaymentDTO,
    ManualPaymentResponseDTO,
    UpdateDueDateCommandDTO,
    DueDateResponseDTO,
    InitialSubscriptionResponseDTO,
    LastPaymentDTO,
    ClientSummaryResponseDTO,
    LateObligationDTO,
    BillingReconciliationReportDTO,
)

__all__ = [
    "GetPaymentSchedule",
    "GetFinancialOverview",
    "RecordManualPayment",
    "UpdateDueDate",
    "OpenInitialSubscription",
    "GetClientSummary",
    "ReconcileBillingPeriods",
    "ObligationDTO",
    "PaymentScheduleResponseDTO",
    "FinancialOverviewResponseDTO",
    "ManualPaymentCommandDTO",
    "PaymentDTO",
    "ManualPaymentResponseDTO",
    "UpdateDueDateCommandDTO",
    "DueDateResponseDTO",
    "InitialSubscriptionResponseDTO",
    "LastPaymentDTO",
    "ClientSummaryResponseDTO",
    "LateObligationDTO",
    "BillingReconciliationReportDTO",
]
