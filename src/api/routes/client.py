"""Client API Routes

FastAPI routes for the client area.
"""

from fastapi import APIRouter, Depends, Path, status
from sqlmodel.ext.asyncio.session import AsyncSession

from src.app.use_cases.billing.dtos import ClientSummaryResponseDTO
from src.app.use_cases.billing.get_client_summary import GetClientSummary
from src.adapter.repositories.payment_repository import SqlAlchemyPaymentRepository
from src.adapter.repositories.subscription_repository import SqlAlchemySubscriptionRepository
from src.depends import get_session
from src.api.error import ClientError

router = APIRouter(prefix="/client", tags=["Client"])


@router.get(
    "/summary/{user_id}",
    response_model=ClientSummaryResponseDTO,
    status_code=status.HTTP_200_OK,
    responses={
        404: {
            "description": "Client has no subscription",
            "content": {
                "application/json": {
                    "example": {
                        "error": {
                            "code": "SUBSCRIPTION_NOT_FOUND",
                            "message": "No subscription found for user 42"
                        }
                    }
                }
            }
        }
    }
)
async def get_summary(
    user_id: int = Path(..., gt=0),
    session: AsyncSession = Depends(get_session),
):
    """
    Plan, subscription status, anchor due date and last payment of a client.

    **Returns:**
    - 200: Client summary
    - 404: Client has no subscription or plan
    """
    use_case = GetClientSummary(
        SqlAlchemySubscriptionRepository(session),
        SqlAlchemyPaymentRepository(session),
    )
    result = await use_case.execute(user_id)

    if result.is_err():
        raise ClientError.from_error(result.error)

    return result.value
