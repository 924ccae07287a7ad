from .plan_repository import SqlAlchemyPlanRepository
from .subscription_repository import SqlAlchemySubscriptionRepository
from .payment_repository import SqlAlchemyPaymentRepository

__all__ = [
    "SqlAlchemyPlanRepository",
    "SqlAlchemySubscriptionRepository",
    "SqlAlchemyPaymentRepository",
]
