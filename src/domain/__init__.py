from .base import BaseModel, generate_uuid
from .plan import Plan, Periodicity
from .subscription import Subscription, SubscriptionStatus, BILLABLE_STATUSES
from .payment import Payment, PaymentStatus, PaymentProvider
from .obligation import Obligation, ObligationStatus

__all__ = [
    "BaseModel",
    "generate_uuid",
    "Plan",
    "Periodicity",
    "Subscription",
    "SubscriptionStatus",
    "BILLABLE_STATUSES",
    "Payment",
    "PaymentStatus",
    "PaymentProvider",
    "Obligation",
    "ObligationStatus",
]
