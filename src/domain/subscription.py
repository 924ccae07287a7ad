"""Subscription Domain Entity

Links a user to a plan and carries the anchor due date.
"""

from datetime import datetime, date
from enum import Enum
from typing import List, Optional, TYPE_CHECKING
from sqlmodel import Field, Column, Index, Relationship
from sqlalchemy import Date, DateTime, ForeignKey
from src.domain.base import BaseModel, IdType

if TYPE_CHECKING:
    from src.domain.plan import Plan
    from src.domain.payment import Payment


class SubscriptionStatus(str, Enum):
    """Subscription status types"""
    ACTIVE = "ACTIVE"
    PENDING = "PENDING"
    SUSPENDED = "SUSPENDED"
    CANCELLED = "CANCELLED"
    EXPIRED = "EXPIRED"


# Statuses that still generate a monthly charge
BILLABLE_STATUSES = (
    SubscriptionStatus.ACTIVE,
    SubscriptionStatus.PENDING,
    SubscriptionStatus.SUSPENDED,
)


class Subscription(BaseModel, table=True):
    """
    Subscription - User subscription to a plan

    Domain Rules:
    - current_period_end is the anchor date; its day of month seeds the
      due date of every month in the reconciled year
    - A user may own several subscriptions; the most recently created one
      is the current subscription
    - Monthly obligations are derived on demand and never stored
    """

    __tablename__ = "subscriptions"
    __table_args__ = (
        Index('ix_subscriptions_user_id', 'user_id'),
        Index('ix_subscriptions_status', 'status'),
    )

    id: Optional[int] = Field(
        default=None,
        sa_column=Column(IdType, primary_key=True, autoincrement=True),
        description="Unique subscription identifier (auto-increment)"
    )

    user_id: int = Field(
        description="Owner user ID"
    )

    plan_id: Optional[int] = Field(
        default=None,
        sa_column=Column(IdType, ForeignKey("plans.id"), nullable=True),
        description="Foreign key to Plan"
    )

    status: SubscriptionStatus = Field(
        default=SubscriptionStatus.ACTIVE,
        description="Subscription status"
    )

    current_period_end: date = Field(
        sa_column=Column(Date, nullable=False),
        description="Anchor due date"
    )

    created_at: datetime = Field(
        default_factory=datetime.now,
        sa_column=Column(DateTime, nullable=False),
        description="Subscription creation timestamp"
    )

    updated_at: datetime = Field(
        default_factory=datetime.now,
        sa_column=Column(DateTime, nullable=False),
        description="Last update timestamp"
    )

    plan: Optional["Plan"] = Relationship(back_populates="subscriptions")
    payments: List["Payment"] = Relationship(back_populates="subscription")

    class Config:
        """SQLModel configuration"""
        json_schema_extra = {
            "example": {
                "id": 1,
                "user_id": 42,
                "plan_id": 1,
                "status": "ACTIVE",
                "current_period_end": "2026-01-05",
                "created_at": "2026-01-01T12:00:00",
                "updated_at": "2026-01-01T12:00:00"
            }
        }
