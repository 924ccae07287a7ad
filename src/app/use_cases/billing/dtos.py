"""Data Transfer Objects for Billing Use Cases

Pydantic models for command inputs and response outputs.
All money values are integer cents.
"""

from datetime import date, datetime
from typing import Optional, Dict, Any, List
from pydantic import BaseModel, Field


class ObligationDTO(BaseModel):
    """
    One monthly obligation of a payment schedule

    Returned inside PaymentScheduleResponseDTO.
    """

    payment_id: Optional[int] = Field(
        default=None,
        description="ID of the matched payment (None when the month is unmatched)"
    )

    due_date: date = Field(
        ...,
        description="Due date of the month (ISO YYYY-MM-DD)"
    )

    amount_cents: int = Field(
        ...,
        description="Plan price in cents"
    )

    status: str = Field(
        ...,
        description="PAID, PENDING or LATE"
    )

    paid_at: Optional[datetime] = Field(
        default=None,
        description="Settlement timestamp of the matched payment"
    )

    provider: str = Field(
        ...,
        description="Provider of the matched payment, SCHEDULE when unmatched"
    )


class PaymentScheduleResponseDTO(BaseModel):
    """
    Response DTO for the monthly payments of a client

    Returned by GetPaymentSchedule use case.
    An empty list is a valid state (no subscription or no plan).
    """

    user_id: int = Field(
        ...,
        description="Client user ID"
    )

    year: Optional[int] = Field(
        default=None,
        description="Reconciled calendar year (None when there is no schedule)"
    )

    payments: List[ObligationDTO] = Field(
        default_factory=list,
        description="Twelve monthly obligations sorted by due date"
    )

    class Config:
        json_schema_extra = {
            "example": {
                "user_id": 42,
                "year": 2026,
                "payments": [
                    {
                        "payment_id": None,
                        "due_date": "2026-01-05",
                        "amount_cents": 10000,
                        "status": "LATE",
                        "paid_at": None,
                        "provider": "SCHEDULE"
                    }
                ]
            }
        }


class FinancialOverviewResponseDTO(BaseModel):
    """
    Response DTO for the portfolio overview of the current month

    Returned by GetFinancialOverview use case.
    Invariant: expected_cents == received_cents + pending_cents
    """

    month: int = Field(..., description="Calendar month (1-12)")
    year: int = Field(..., description="Calendar year")
    expected_cents: int = Field(..., description="Sum of plan prices of billable subscriptions")
    received_cents: int = Field(..., description="Sum of plan prices already paid this month")
    pending_cents: int = Field(..., description="expected_cents - received_cents")
    active_subscriptions: int = Field(..., description="Number of billable subscriptions")

    class Config:
        json_schema_extra = {
            "example": {
                "month": 3,
                "year": 2026,
                "expected_cents": 200,
                "received_cents": 100,
                "pending_cents": 100,
                "active_subscriptions": 2
            }
        }


class ManualPaymentCommandDTO(BaseModel):
    """
    Command DTO for marking a month as paid by an administrator

    Used as input to RecordManualPayment use case. Dates are raw strings
    (DD/MM/YYYY or ISO) and are parsed by the use case.
    """

    user_id: int = Field(
        ...,
        description="Client user ID"
    )

    reference_date: str = Field(
        ...,
        description="Any date inside the month being settled"
    )

    paid_at: Optional[str] = Field(
        default=None,
        description="Settlement date (defaults to now)"
    )


class PaymentDTO(BaseModel):
    """Recorded payment as exposed by the API"""

    id: int
    subscription_id: int
    amount_cents: int
    status: str
    provider: str
    transaction_id: str
    paid_at: Optional[datetime] = None
    period_year: Optional[int] = None
    period_month: Optional[int] = None
    raw_payload: Optional[Dict[str, Any]] = None
    created_at: datetime


class ManualPaymentResponseDTO(BaseModel):
    """
    Response DTO for manual payment recording

    Returned by RecordManualPayment use case.
    """

    payment: PaymentDTO = Field(
        ...,
        description="Created or updated payment"
    )

    created: bool = Field(
        ...,
        description="True when a new payment was created, False when an existing one was updated"
    )


class UpdateDueDateCommandDTO(BaseModel):
    """
    Command DTO for changing the anchor due date of a client

    Used as input to UpdateDueDate use case.
    """

    user_id: int = Field(..., description="Client user ID")
    due_date: str = Field(..., description="New anchor date (DD/MM/YYYY or ISO)")


class DueDateResponseDTO(BaseModel):
    """
    Response DTO for due date updates

    Returned by UpdateDueDate and OpenInitialSubscription use cases.
    """

    subscription_id: int = Field(..., description="Subscription ID")
    current_period_end: date = Field(..., description="Anchor due date")
    created: bool = Field(
        default=False,
        description="True when a subscription had to be opened"
    )


class InitialSubscriptionResponseDTO(BaseModel):
    """
    Response DTO for the initial subscription side flow of client onboarding

    secondary_error is set when the subscription could not be opened;
    the client created by the caller is kept either way.
    """

    user_id: int
    subscription: Optional[DueDateResponseDTO] = None
    secondary_error: Optional[str] = None


class LastPaymentDTO(BaseModel):
    """Most recent payment shown on the client summary"""

    amount_cents: int
    status: str
    paid_at: Optional[datetime] = None
    created_at: datetime


class ClientSummaryResponseDTO(BaseModel):
    """
    Response DTO for the client billing summary

    Returned by GetClientSummary use case.
    """

    user_id: int = Field(..., description="Client user ID")
    plan_name: str = Field(..., description="Plan display name")
    price_cents: int = Field(..., description="Plan price in cents")
    subscription_status: str = Field(..., description="Subscription status")
    current_period_end: date = Field(..., description="Anchor due date")
    last_payment: Optional[LastPaymentDTO] = Field(
        default=None,
        description="Most recent payment (None when nothing was recorded)"
    )

    class Config:
        json_schema_extra = {
            "example": {
                "user_id": 42,
                "plan_name": "Plano Mensal Padrão",
                "price_cents": 10000,
                "subscription_status": "ACTIVE",
                "current_period_end": "2026-01-05",
                "last_payment": {
                    "amount_cents": 10000,
                    "status": "PAID",
                    "paid_at": "2026-03-05T12:00:00",
                    "created_at": "2026-03-05T12:00:00"
                }
            }
        }


class LateObligationDTO(BaseModel):
    """A past-due month found by the reconciliation worker"""

    subscription_id: int
    user_id: int
    due_date: date
    amount_cents: int


class BillingReconciliationReportDTO(BaseModel):
    """
    Result of a billing reconciliation run

    Returned by ReconcileBillingPeriods use case.
    """

    overview: FinancialOverviewResponseDTO = Field(
        ...,
        description="Portfolio overview of the evaluated month"
    )

    subscriptions_checked: int = Field(
        ...,
        description="Number of billable subscriptions evaluated"
    )

    late_obligations: List[LateObligationDTO] = Field(
        default_factory=list,
        description="Past-due unpaid months of the evaluated year"
    )

    late_cents: int = Field(
        default=0,
        description="Sum of late obligations in cents"
    )

    reconciliation_time: datetime = Field(
        ...,
        description="Evaluation instant"
    )

    execution_time_ms: int = Field(
        ...,
        description="Execution time in milliseconds"
    )
