"""Get Client Summary Use Case

Retrieves the plan, subscription status and last payment of a client.
"""

from libs.result import Result, Return, Error
from src.app.repositories.payment_repository import PaymentRepository
from src.app.repositories.subscription_repository import SubscriptionRepository
from .dtos import ClientSummaryResponseDTO, LastPaymentDTO


class GetClientSummary:
    """
    Get Client Summary Use Case

    Read-only operation. A client without subscription or plan gets
    SUBSCRIPTION_NOT_FOUND instead of placeholder data.
    """

    def __init__(
        self,
        subscription_repo: SubscriptionRepository,
        payment_repo: PaymentRepository,
    ):
        self.subscription_repo = subscription_repo
        self.payment_repo = payment_repo

    async def execute(self, user_id: int) -> Result[ClientSummaryResponseDTO]:
        """
        Execute client summary retrieval

        Args:
            user_id: Client user ID

        Returns:
            Result[ClientSummaryResponseDTO]: Summary or error

        Errors:
            SUBSCRIPTION_NOT_FOUND: User has no subscription or the subscription has no plan
        """
        subscription = await self.subscription_repo.get_current_by_user_id(user_id)

        if not subscription or not subscription.plan:
            return Return.err(
                Error(
                    code="SUBSCRIPTION_NOT_FOUND",
                    message=f"No subscription found for user {user_id}",
                )
            )

        last_payment = await self.payment_repo.get_latest_by_subscription_id(subscription.id)

        return Return.ok(
            ClientSummaryResponseDTO(
                user_id=user_id,
                plan_name=subscription.plan.name,
                price_cents=subscription.plan.price_cents,
                subscription_status=subscription.status.value,
                current_period_end=subscription.current_period_end,
                last_payment=LastPaymentDTO(
                    amount_cents=last_payment.amount_cents,
                    status=last_payment.status.value,
                    paid_at=last_payment.paid_at,
                    created_at=last_payment.created_at,
                ) if last_payment else None,
            )
        )
