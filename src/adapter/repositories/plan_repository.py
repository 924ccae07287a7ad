"""SQLAlchemy Plan Repository Implementation

Implements plan persistence using SQLAlchemy async session.
"""

import logging
from typing import Optional
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession
from config import ApplicationConfig
from src.app.repositories.plan_repository import PlanRepository
from src.domain.plan import Periodicity, Plan

logger = logging.getLogger(__name__)


class SqlAlchemyPlanRepository(PlanRepository):
    """SQLAlchemy implementation of PlanRepository"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_first(self) -> Optional[Plan]:
        statement = select(Plan).order_by(Plan.id).limit(1)
        result = await self.session.execute(statement)
        return result.scalar_one_or_none()

    async def create(self, plan: Plan) -> Plan:
        self.session.add(plan)
        await self.session.flush()
        await self.session.refresh(plan)
        return plan

    async def ensure_default_plan(self) -> Plan:
        """
        Return the first plan or create the default one

        The default plan name and price come from ApplicationConfig.
        The caller owns the commit.

        Returns:
            Existing or newly created Plan
        """
        plan = await self.get_first()
        if plan:
            return plan

        plan = await self.create(
            Plan(
                name=ApplicationConfig.DEFAULT_PLAN_NAME,
                description=ApplicationConfig.DEFAULT_PLAN_DESCRIPTION,
                price_cents=int(ApplicationConfig.DEFAULT_PLAN_PRICE_CENTS),
                periodicity=Periodicity.MONTHLY,
            )
        )
        logger.info(f"Default plan created (plan_id={plan.id}, price_cents={plan.price_cents})")
        return plan
