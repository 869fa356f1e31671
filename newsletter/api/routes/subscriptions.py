from fastapi import APIRouter, Depends, status

from newsletter.api.error import raise_for_error
from newsletter.app.services.unit_of_work import UnitOfWork
from newsletter.app.use_cases.subscriptions import (
    SubscribeCommand,
    SubscribeResponse,
    SubscribeUseCase,
)
from newsletter.depends import get_unit_of_work

router = APIRouter(prefix="/subscriptions", tags=["Subscriptions"])


@router.post("", status_code=status.HTTP_200_OK, response_model=SubscribeResponse)
async def subscribe(
    command: SubscribeCommand,
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Subscribe

    Stores the subscriber as pending confirmation.

    Raises:
        - 400 Bad Request: Invalid name or email address
        - 500 Internal Server Error: Storage failure
    """
    result = await SubscribeUseCase(uow).execute(command)

    if result.is_err():
        raise_for_error(result.error)

    return result.value
