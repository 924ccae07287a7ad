"""SQLAlchemy Payment Repository Implementation

Implements payment persistence using SQLAlchemy async session.
The table's unique constraint on (subscription_id, period_year, period_month)
keeps at most one payment per settlement bucket.
"""

from typing import Optional
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession
from src.app.repositories.payment_repository import PaymentRepository
from src.domain.payment import Payment


class SqlAlchemyPaymentRepository(PaymentRepository):
    """SQLAlchemy implementation of PaymentRepository"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def create(self, payment: Payment) -> Payment:
        """
        Create a new payment, filling its settlement bucket if missing

        Args:
            payment: Payment entity to persist

        Returns:
            Created Payment with generated ID
        """
        if payment.period_year is None or payment.period_month is None:
            year, month = payment.settlement_bucket()
            payment.pin_bucket(year, month)

        self.session.add(payment)
        await self.session.flush()
        await self.session.refresh(payment)
        return payment

    async def update(self, payment: Payment) -> Payment:
        self.session.add(payment)
        await self.session.flush()
        await self.session.refresh(payment)
        return payment

    async def get_latest_by_subscription_id(self, subscription_id: int) -> Optional[Payment]:
        statement = (
            select(Payment)
            .where(Payment.subscription_id == subscription_id)
            .order_by(Payment.created_at.desc(), Payment.id.desc())
            .limit(1)
        )
        result = await self.session.execute(statement)
        return result.scalar_one_or_none()
