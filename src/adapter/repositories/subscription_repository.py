"""SQLAlchemy Subscription Repository Implementation

Implements subscription persistence using SQLAlchemy async session.
"""

from typing import Optional, List
from sqlalchemy.orm import selectinload
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession
from src.app.repositories.subscription_repository import SubscriptionRepository
from src.domain.subscription import BILLABLE_STATUSES, Subscription


class SqlAlchemySubscriptionRepository(SubscriptionRepository):
    """
    SQLAlchemy implementation of SubscriptionRepository

    Uses async session for database operations. Plan and payments are
    eager-loaded with selectinload (lazy loads are not allowed in async).
    """

    def __init__(self, session: AsyncSession):
        self.session = session

    def _with_billing_data(self, statement):
        # populate_existing reloads payments of subscriptions already in the identity map
        return statement.options(
            selectinload(Subscription.plan),
            selectinload(Subscription.payments),
        ).execution_options(populate_existing=True)

    async def get_current_by_user_id(self, user_id: int) -> Optional[Subscription]:
        """
        Retrieve the most recently created subscription of a user

        Args:
            user_id: Owner user ID

        Returns:
            Subscription if found, None otherwise
        """
        statement = (
            select(Subscription)
            .where(Subscription.user_id == user_id)
            .order_by(Subscription.created_at.desc(), Subscription.id.desc())
            .limit(1)
        )
        result = await self.session.execute(self._with_billing_data(statement))
        return result.scalar_one_or_none()

    async def get_billable_subscriptions(self) -> List[Subscription]:
        """
        Retrieve all ACTIVE, PENDING and SUSPENDED subscriptions

        Returns:
            List of subscriptions ordered by ID
        """
        statement = (
            select(Subscription)
            .where(Subscription.status.in_(BILLABLE_STATUSES))
            .order_by(Subscription.id)
        )
        result = await self.session.execute(self._with_billing_data(statement))
        return list(result.scalars().all())

    async def create(self, subscription: Subscription) -> Subscription:
        """
        Create a new subscription

        Args:
            subscription: Subscription entity to persist

        Returns:
            Created Subscription with generated ID
        """
        self.session.add(subscription)
        await self.session.flush()
        await self.session.refresh(subscription)
        return subscription

    async def update(self, subscription: Subscription) -> Subscription:
        """
        Update an existing subscription

        Not refreshed: the eager-loaded plan and payments stay usable.

        Args:
            subscription: Subscription entity with updated values

        Returns:
            Updated Subscription
        """
        self.session.add(subscription)
        await self.session.flush()
        return subscription
