"""Admin API Routes

FastAPI routes for the finance back office: portfolio overview, client
payment schedules, manual payment overrides and due dates.
"""

from typing import Optional
from fastapi import APIRouter, Depends, Path, Query, Response, status
from sqlmodel.ext.asyncio.session import AsyncSession

from src.api.schemas.billing_request import (
    DueDateRequestSchema,
    InitialSubscriptionRequestSchema,
    ManualPayRequestSchema,
)
from src.app.use_cases.billing.dtos import (
    DueDateResponseDTO,
    FinancialOverviewResponseDTO,
    InitialSubscriptionResponseDTO,
    ManualPaymentCommandDTO,
    ManualPaymentResponseDTO,
    PaymentScheduleResponseDTO,
    UpdateDueDateCommandDTO,
)
from src.app.use_cases.billing.get_financial_overview import GetFinancialOverview
from src.app.use_cases.billing.get_payment_schedule import GetPaymentSchedule
from src.app.use_cases.billing.open_initial_subscription import OpenInitialSubscription
from src.app.use_cases.billing.record_manual_payment import RecordManualPayment
from src.app.use_cases.billing.update_due_date import UpdateDueDate
from src.adapter.repositories.payment_repository import SqlAlchemyPaymentRepository
from src.adapter.repositories.plan_repository import SqlAlchemyPlanRepository
from src.adapter.repositories.subscription_repository import SqlAlchemySubscriptionRepository
from src.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from src.depends import get_session
from src.api.error import ClientError

router = APIRouter(prefix="/admin", tags=["Admin"])

INVALID_DATE_RESPONSE = {
    "description": "Invalid date or request parameters",
    "content": {
        "application/json": {
            "example": {
                "error": {
                    "code": "INVALID_DATE",
                    "message": "Invalid reference date: 31/02/2026",
                    "reason": "Expected DD/MM/YYYY or YYYY-MM-DD"
                }
            }
        }
    }
}


@router.get(
    "/overview",
    response_model=FinancialOverviewResponseDTO,
    status_code=status.HTTP_200_OK,
)
async def get_overview(session: AsyncSession = Depends(get_session)):
    """
    Financial summary of the current month.

    Every ACTIVE, PENDING or SUSPENDED subscription is expected to pay its
    plan price once; a subscription counts as received when a PAID payment
    settles the current month.

    **Returns:**
    - 200: expected, received and pending amounts in cents
    """
    use_case = GetFinancialOverview(SqlAlchemySubscriptionRepository(session))
    result = await use_case.execute()

    if result.is_err():
        raise ClientError.from_error(result.error)

    return result.value


@router.get(
    "/clients/{user_id}/payments",
    response_model=PaymentScheduleResponseDTO,
    status_code=status.HTTP_200_OK,
)
async def get_client_payments(
    user_id: int = Path(..., gt=0),
    year: Optional[int] = Query(default=None, ge=1, le=9999),
    session: AsyncSession = Depends(get_session),
):
    """
    Monthly payments (past and future) of a client.

    **Path parameters:**
    - `user_id` (required): Client user ID

    **Query parameters:**
    - `year` (optional): Calendar year, defaults to the year of the anchor due date

    **Returns:**
    - 200: Twelve obligations sorted by due date, or an empty list when the
      client has no subscription or plan
    """
    use_case = GetPaymentSchedule(SqlAlchemySubscriptionRepository(session))
    result = await use_case.execute(user_id, year=year)

    if result.is_err():
        raise ClientError.from_error(result.error)

    return result.value


@router.post(
    "/clients/{user_id}/payments/manual-pay",
    response_model=ManualPaymentResponseDTO,
    status_code=status.HTTP_200_OK,
    responses={
        201: {"description": "Payment created"},
        400: INVALID_DATE_RESPONSE,
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
async def manual_pay(
    request: ManualPayRequestSchema,
    response: Response,
    user_id: int = Path(..., gt=0),
    session: AsyncSession = Depends(get_session),
):
    """
    Mark a month of a client as paid, bypassing the payment gateway.

    The payment already settling the reference month is updated; otherwise
    a new one is created. Repeating the call for the same month never
    creates a second payment.

    **Request body:**
    - `reference_date` (required): Any date inside the month (DD/MM/YYYY or ISO)
    - `paid_at` (optional): Settlement date, defaults to now

    **Returns:**
    - 201: Payment created
    - 200: Existing payment updated
    - 400: Invalid date
    - 404: Client has no subscription
    """
    uow = SqlAlchemyUnitOfWork(session)
    subscription_repo = SqlAlchemySubscriptionRepository(session)
    payment_repo = SqlAlchemyPaymentRepository(session)

    command = ManualPaymentCommandDTO(
        user_id=user_id,
        reference_date=request.reference_date,
        paid_at=request.paid_at,
    )

    use_case = RecordManualPayment(uow, subscription_repo, payment_repo)
    result = await use_case.execute(command)

    if result.is_err():
        raise ClientError.from_error(result.error)

    if result.value.created:
        response.status_code = status.HTTP_201_CREATED

    return result.value


@router.patch(
    "/clients/{user_id}/due-date",
    response_model=DueDateResponseDTO,
    status_code=status.HTTP_200_OK,
    responses={400: INVALID_DATE_RESPONSE},
)
async def update_due_date(
    request: DueDateRequestSchema,
    user_id: int = Path(..., gt=0),
    session: AsyncSession = Depends(get_session),
):
    """
    Change the anchor due date of a client.

    A client without subscription gets an ACTIVE subscription on the
    default plan.

    **Request body:**
    - `due_date` (required): New anchor date (DD/MM/YYYY or ISO)

    **Returns:**
    - 200: Subscription ID and anchor date
    - 400: Invalid date
    """
    uow = SqlAlchemyUnitOfWork(session)
    subscription_repo = SqlAlchemySubscriptionRepository(session)
    plan_repo = SqlAlchemyPlanRepository(session)

    command = UpdateDueDateCommandDTO(user_id=user_id, due_date=request.due_date)

    use_case = UpdateDueDate(uow, subscription_repo, plan_repo)
    result = await use_case.execute(command)

    if result.is_err():
        raise ClientError.from_error(result.error)

    return result.value


@router.post(
    "/clients/{user_id}/initial-subscription",
    response_model=InitialSubscriptionResponseDTO,
    status_code=status.HTTP_201_CREATED,
)
async def open_initial_subscription(
    request: InitialSubscriptionRequestSchema,
    user_id: int = Path(..., gt=0),
    session: AsyncSession = Depends(get_session),
):
    """
    Open the first subscription of a newly registered client.

    Best effort: the client is kept even when the subscription cannot be
    opened, and the failure is reported in `secondary_error`.

    **Request body:**
    - `first_due_date` (optional): First due date (DD/MM/YYYY or ISO)

    **Returns:**
    - 201: Onboarding finished (check `secondary_error`)
    """
    uow = SqlAlchemyUnitOfWork(session)
    subscription_repo = SqlAlchemySubscriptionRepository(session)
    plan_repo = SqlAlchemyPlanRepository(session)

    use_case = OpenInitialSubscription(uow, subscription_repo, plan_repo)
    result = await use_case.execute(user_id, request.first_due_date)

    return result.value
