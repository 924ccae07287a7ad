"""Plan Domain Entity

Recurring price charged to every subscription of the plan.
"""

from datetime import datetime
from enum import Enum
from typing import List, Optional, TYPE_CHECKING
from sqlmodel import Field, Column, Relationship
from sqlalchemy import CheckConstraint, DateTime, Integer, String
from src.domain.base import BaseModel, IdType

if TYPE_CHECKING:
    from src.domain.subscription import Subscription


class Periodicity(str, Enum):
    """Billing periodicity (only monthly plans are billed)"""
    MONTHLY = "MONTHLY"


class Plan(BaseModel, table=True):
    """
    Plan - Recurring price definition

    Domain Rules:
    - price_cents is an integer amount in the smallest currency unit
    - price_cents must be non-negative
    - Only MONTHLY periodicity is modeled
    """

    __tablename__ = "plans"
    __table_args__ = (
        CheckConstraint('price_cents >= 0', name='price_cents_non_negative'),
    )

    id: Optional[int] = Field(
        default=None,
        sa_column=Column(IdType, primary_key=True, autoincrement=True),
        description="Unique plan identifier (auto-increment)"
    )

    name: str = Field(
        sa_column=Column(String(100), nullable=False),
        description="Display name of the plan"
    )

    description: Optional[str] = Field(
        default=None,
        sa_column=Column(String(255), nullable=True),
        description="Optional plan description"
    )

    price_cents: int = Field(
        sa_column=Column(Integer, nullable=False),
        description="Recurring price in cents (must be >= 0)"
    )

    periodicity: Periodicity = Field(
        default=Periodicity.MONTHLY,
        description="Billing periodicity"
    )

    created_at: datetime = Field(
        default_factory=datetime.now,
        sa_column=Column(DateTime, nullable=False),
        description="Plan creation timestamp"
    )

    subscriptions: List["Subscription"] = Relationship(back_populates="plan")

    class Config:
        """SQLModel configuration"""
        json_schema_extra = {
            "example": {
                "id": 1,
                "name": "Plano Mensal Padrão",
                "description": "Plano padrão criado automaticamente.",
                "price_cents": 10000,
                "periodicity": "MONTHLY",
                "created_at": "2026-01-01T12:00:00"
            }
        }
