"""Payment Domain Entity

Recorded payment facts. Payments are created by a gateway confirmation or by
a manual override and are never deleted, only superseded by status updates.
"""

from datetime import datetime
from enum import Enum
from typing import Any, Dict, Optional, Tuple, TYPE_CHECKING
from sqlmodel import Field, Column, Index, Relationship
from sqlalchemy import DateTime, ForeignKey, Integer, JSON, String, UniqueConstraint
from src.domain.base import BaseModel, IdType
from src.domain.billing_dates import month_bucket

if TYPE_CHECKING:
    from src.domain.subscription import Subscription


class PaymentStatus(str, Enum):
    """Payment status types"""
    PAID = "PAID"
    PENDING = "PENDING"
    FAILED = "FAILED"
    REFUNDED = "REFUNDED"


class PaymentProvider(str, Enum):
    """Origin of a payment record"""
    MANUAL = "MANUAL"            # Admin override, bypasses the gateway
    SCHEDULE = "SCHEDULE"        # Placeholder for unmatched obligations
    STRIPE = "STRIPE"
    MERCADO_PAGO = "MERCADO_PAGO"


class Payment(BaseModel, table=True):
    """
    Payment - Recorded settlement of a subscription month

    Domain Rules:
    - amount_cents is an integer amount in the smallest currency unit
    - transaction_id is unique
    - (period_year, period_month) is the settlement bucket; at most one
      payment per subscription and bucket
    - When the bucket is not pinned it follows paid_at, else created_at
    """

    __tablename__ = "payments"
    __table_args__ = (
        UniqueConstraint(
            'subscription_id', 'period_year', 'period_month',
            name='uq_payments_subscription_period',
        ),
        Index('ix_payments_subscription_id', 'subscription_id'),
    )

    id: Optional[int] = Field(
        default=None,
        sa_column=Column(IdType, primary_key=True, autoincrement=True),
        description="Unique payment identifier (auto-increment)"
    )

    subscription_id: int = Field(
        sa_column=Column(IdType, ForeignKey("subscriptions.id", ondelete="CASCADE"), nullable=False),
        description="Foreign key to Subscription"
    )

    amount_cents: int = Field(
        sa_column=Column(Integer, nullable=False),
        description="Paid amount in cents"
    )

    status: PaymentStatus = Field(
        default=PaymentStatus.PENDING,
        description="Payment status"
    )

    provider: PaymentProvider = Field(
        description="Payment origin (gateway tag or MANUAL)"
    )

    transaction_id: str = Field(
        sa_column=Column(String(255), unique=True, nullable=False),
        description="Gateway or synthesized transaction identifier"
    )

    paid_at: Optional[datetime] = Field(
        default=None,
        sa_column=Column(DateTime, nullable=True),
        description="Settlement timestamp (None until paid)"
    )

    period_year: Optional[int] = Field(
        default=None,
        description="Settlement bucket year"
    )

    period_month: Optional[int] = Field(
        default=None,
        description="Settlement bucket month (1-12)"
    )

    raw_payload: Optional[Dict[str, Any]] = Field(
        default=None,
        sa_column=Column(JSON, nullable=True),
        description="Free-form metadata (gateway payload, manual annotations)"
    )

    created_at: datetime = Field(
        default_factory=datetime.now,
        sa_column=Column(DateTime, nullable=False),
        description="Record creation timestamp"
    )

    subscription: Optional["Subscription"] = Relationship(back_populates="payments")

    def settlement_date(self) -> datetime:
        return self.paid_at or self.created_at

    def settlement_bucket(self) -> Tuple[int, int]:
        """Return the (year, month) this payment settles."""
        if self.period_year is not None and self.period_month is not None:
            return self.period_year, self.period_month
        return month_bucket(self.settlement_date())

    def pin_bucket(self, year: int, month: int) -> None:
        self.period_year = year
        self.period_month = month

    class Config:
        """SQLModel configuration"""
        json_schema_extra = {
            "example": {
                "id": 1,
                "subscription_id": 1,
                "amount_cents": 10000,
                "status": "PAID",
                "provider": "MANUAL",
                "transaction_id": "manual-1-2026-3-4f1c...",
                "paid_at": "2026-03-05T12:00:00",
                "period_year": 2026,
                "period_month": 3,
                "raw_payload": {"manual": True, "reference_date": "05/03/2026"},
                "created_at": "2026-03-05T12:00:00"
            }
        }
