"""
Admin API Routes - Authenticated Area

Every route under /admin requires a valid session cookie. Anonymous
requests are redirected to /login before any handler runs.
"""

from uuid import uuid4

from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import JSONResponse, RedirectResponse

from newsletter.adapter.services.password_hashing import PasswordHashingEngine
from newsletter.api.error import ServerError, raise_for_error
from newsletter.api.utils.flash import (
    LEVEL_ERROR,
    LEVEL_INFO,
    clear_flash,
    read_flash_messages,
    set_flash,
)
from newsletter.api.utils.saved_response import from_saved_response, to_saved_response
from newsletter.api.utils.session_cookie import SESSION_COOKIE_NAME
from newsletter.app.services.email_client import IEmailClient
from newsletter.app.services.idempotency import IdempotencyCoordinator, ReturnSavedResponse
from newsletter.app.services.unit_of_work import UnitOfWork
from newsletter.app.use_cases.auth import (
    ChangePasswordCommand,
    ChangePasswordUseCase,
    LogoutUseCase,
)
from newsletter.app.use_cases.newsletters import (
    PublishNewsletterCommand,
    PublishNewsletterUseCase,
)
from newsletter.app.use_cases.users import DashboardResponse, LoadDashboardUseCase
from newsletter.depends import (
    get_email_client,
    get_password_hashing_engine,
    get_unit_of_work,
    require_user_id,
)
from newsletter.domain.values import IdempotencyKey, UserId

router = APIRouter(prefix="/admin", tags=["Admin"], dependencies=[Depends(require_user_id)])


def _redirect_with_flash(url: str, message: str, level: str) -> RedirectResponse:
    response = RedirectResponse(url, status_code=status.HTTP_303_SEE_OTHER)
    set_flash(response, message, level=level)
    return response


@router.get("/dashboard", status_code=status.HTTP_200_OK, response_model=DashboardResponse)
async def dashboard(
    user_id: UserId = Depends(require_user_id),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    result = await LoadDashboardUseCase(uow).execute(user_id)

    if result.is_err():
        raise ServerError(result.error)

    return result.value


@router.get("/password", status_code=status.HTTP_200_OK)
async def change_password_form(request: Request):
    response = JSONResponse({"flash_messages": read_flash_messages(request)})
    clear_flash(response)
    return response


@router.post("/password", status_code=status.HTTP_303_SEE_OTHER)
async def change_password(
    command: ChangePasswordCommand,
    user_id: UserId = Depends(require_user_id),
    uow: UnitOfWork = Depends(get_unit_of_work),
    hashing_engine: PasswordHashingEngine = Depends(get_password_hashing_engine),
):
    """
    Change Password

    Every outcome except a server failure is a redirect back to the form
    with a flash message.

    Raises:
        - 500 Internal Server Error: Server error
    """
    result = await ChangePasswordUseCase(uow, hashing_engine).execute(user_id, command)

    if result.is_err():
        error = result.error
        if error.code in ("PASSWORD_MISMATCH", "INVALID_CURRENT_PASSWORD", "VALIDATION_ERROR"):
            return _redirect_with_flash("/admin/password", error.message, LEVEL_ERROR)
        raise ServerError(error)

    return _redirect_with_flash("/admin/password", "Your password has been changed.", LEVEL_INFO)


@router.post("/logout", status_code=status.HTTP_303_SEE_OTHER)
async def logout(request: Request, uow: UnitOfWork = Depends(get_unit_of_work)):
    result = await LogoutUseCase(uow).execute(request.state.session_id)

    if result.is_err():
        raise ServerError(result.error)

    response = _redirect_with_flash("/login", "You have successfully logged out.", LEVEL_INFO)
    response.delete_cookie(SESSION_COOKIE_NAME)
    return response


@router.get("/newsletters", status_code=status.HTTP_200_OK)
async def publish_newsletter_form(request: Request):
    """Publish form data: a fresh idempotency key for this submission."""
    response = JSONResponse(
        {
            "idempotency_key": str(uuid4()),
            "flash_messages": read_flash_messages(request),
        }
    )
    clear_flash(response)
    return response


@router.post("/newsletters", status_code=status.HTTP_303_SEE_OTHER)
async def publish_newsletter(
    command: PublishNewsletterCommand,
    user_id: UserId = Depends(require_user_id),
    uow: UnitOfWork = Depends(get_unit_of_work),
    email_client: IEmailClient = Depends(get_email_client),
):
    """
    Publish Newsletter Issue

    Retried submissions with the same idempotency key get the first
    response replayed verbatim; emails are sent once.

    Raises:
        - 400 Bad Request: Invalid idempotency key
        - 409 Conflict: Same key still being processed
        - 500 Internal Server Error: Storage or email delivery failure
    """
    key = IdempotencyKey.parse(command.idempotency_key)
    if key.is_err():
        raise_for_error(key.error)
    idempotency_key = key.value

    async with uow:
        coordinator = IdempotencyCoordinator(uow)

        next_action = await coordinator.try_processing(idempotency_key, user_id)
        if next_action.is_err():
            raise_for_error(next_action.error)

        action = next_action.value
        if isinstance(action, ReturnSavedResponse):
            return from_saved_response(action.response)

        published = await PublishNewsletterUseCase(action.uow, email_client).execute(command)
        if published.is_err():
            raise_for_error(published.error)

        response = _redirect_with_flash(
            "/admin/newsletters", "The newsletter issue has been published!", LEVEL_INFO
        )
        saved = await coordinator.save_response(
            idempotency_key, user_id, to_saved_response(response)
        )
        if saved.is_err():
            raise_for_error(saved.error)

        return response
