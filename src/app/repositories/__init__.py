from .plan_repository import PlanRepository
from .subscription_repository import SubscriptionRepository
from .payment_repository import PaymentRepository

__all__ = [
    "PlanRepository",
    "SubscriptionRepository",
    "PaymentRepository",
]
