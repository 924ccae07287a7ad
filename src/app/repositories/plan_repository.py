"""Plan Repository Interface

Defines the contract for plan persistence operations.
"""

from abc import ABC, abstractmethod
from typing import Optional
from src.domain.plan import Plan


class PlanRepository(ABC):
    """Repository interface for Plan persistence"""

    @abstractmethod
    async def get_first(self) -> Optional[Plan]:
        """
        Retrieve the oldest plan

        Returns:
            Plan if any exists, None otherwise
        """
        pass

    @abstractmethod
    async def create(self, plan: Plan) -> Plan:
        pass

    @abstractmethod
    async def ensure_default_plan(self) -> Plan:
        """
        Return the first plan, creating the default monthly plan when none exists

        Idempotent: repeated calls return the same plan.

        Returns:
            Existing or newly created Plan
        """
        pass
