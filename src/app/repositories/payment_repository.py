"""Payment Repository Interface

Defines the contract for payment persistence operations.
"""

from abc import ABC, abstractmethod
from typing import Optional
from src.domain.payment import Payment


class PaymentRepository(ABC):
    """
    Repository interface for Payment persistence

    Payments are never deleted, only created or updated.
    """

    @abstractmethod
    async def create(self, payment: Payment) -> Payment:
        """
        Create a new payment

        The settlement bucket is filled from paid_at (or created_at) when the
        payment does not pin one.

        Args:
            payment: Payment entity to persist

        Returns:
            Created Payment with generated ID

        Raises:
            IntegrityError: A payment already settles the same bucket
        """
        pass

    @abstractmethod
    async def update(self, payment: Payment) -> Payment:
        pass

    @abstractmethod
    async def get_latest_by_subscription_id(self, subscription_id: int) -> Optional[Payment]:
        """
        Retrieve the most recently created payment of a subscription

        Args:
            subscription_id: Subscription ID

        Returns:
            Payment if any exists, None otherwise
        """
        pass
