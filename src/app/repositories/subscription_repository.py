"""Subscription Repository Interface

Defines the contract for subscription persistence operations.
"""

from abc import ABC, abstractmethod
from typing import Optional, List
from src.domain.subscription import Subscription


class SubscriptionRepository(ABC):
    """
    Repository interface for Subscription persistence

    Read methods load the plan and the payment history together with the
    subscription, so the billing engine never triggers lazy loads.
    """

    @abstractmethod
    async def get_current_by_user_id(self, user_id: int) -> Optional[Subscription]:
        """
        Retrieve the current subscription of a user

        The current subscription is the most recently created one.

        Args:
            user_id: Owner user ID

        Returns:
            Subscription with plan and payments loaded, None if the user has none
        """
        pass

    @abstractmethod
    async def get_billable_subscriptions(self) -> List[Subscription]:
        """
        Retrieve every ACTIVE, PENDING or SUSPENDED subscription

        Used by the financial overview and the reconciliation worker.

        Returns:
            Subscriptions with plan and payments loaded
        """
        pass

    @abstractmethod
    async def create(self, subscription: Subscription) -> Subscription:
        """
        Create a new subscription

        Args:
            subscription: Subscription entity to persist

        Returns:
            Created Subscription with generated ID
        """
        pass

    @abstractmethod
    async def update(self, subscription: Subscription) -> Subscription:
        """
        Update an existing subscription

        Args:
            subscription: Subscription entity with updated values

        Returns:
            Updated Subscription
        """
        pass
