"""Obligation value object

A derived, non-persisted monthly payment expectation of a subscription.
"""

from datetime import date, datetime
from enum import Enum
from typing import Optional
from src.domain.base import BaseModel
from src.domain.payment import PaymentProvider


class ObligationStatus(str, Enum):
    PAID = "PAID"
    PENDING = "PENDING"
    LATE = "LATE"


class Obligation(BaseModel):
    due_date: date
    amount_cents: int
    status: ObligationStatus
    matched_payment_id: Optional[int] = None
    paid_at: Optional[datetime] = None
    provider: PaymentProvider = PaymentProvider.SCHEDULE
