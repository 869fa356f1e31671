from datetime import timedelta
from urllib.parse import quote

from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import JSONResponse, RedirectResponse
from pydantic import BaseModel, Field

from config import ApplicationConfig
from newsletter.adapter.services.password_hashing import PasswordHashingEngine
from newsletter.api.error import raise_for_error
from newsletter.api.utils.flash import LEVEL_ERROR, clear_flash, read_flash_messages, set_flash
from newsletter.app.services.email_client import IEmailClient
from newsletter.app.services.unit_of_work import UnitOfWork
from newsletter.app.use_cases.auth import (
    ConfirmPasswordResetCommand,
    ConfirmPasswordResetUseCase,
    RequestPasswordResetResponse,
    RequestPasswordResetUseCase,
    VerifyPasswordResetTokenUseCase,
)
from newsletter.depends import get_email_client, get_password_hashing_engine, get_unit_of_work
from newsletter.domain.values import ResetToken

router = APIRouter(prefix="/password-reset", tags=["Password Reset"])


class RequestPasswordResetRequest(BaseModel):
    """Request password reset HTTP request payload"""

    email: str = Field(..., description="Email address of the account")


@router.get("", status_code=status.HTTP_200_OK)
async def request_password_reset_form(request: Request):
    response = JSONResponse({"flash_messages": read_flash_messages(request)})
    clear_flash(response)
    return response


@router.post(
    "", status_code=status.HTTP_200_OK, response_model=RequestPasswordResetResponse
)
async def request_password_reset(
    request: RequestPasswordResetRequest,
    uow: UnitOfWork = Depends(get_unit_of_work),
    email_client: IEmailClient = Depends(get_email_client),
):
    """
    Request Password Reset

    Emails a reset link when the address belongs to an account. The response
    is the same whether or not it does.

    Raises:
        - 400 Bad Request: Malformed email address
        - 500 Internal Server Error: Storage or email delivery failure
    """
    use_case = RequestPasswordResetUseCase(
        uow,
        email_client,
        base_url=ApplicationConfig.BASE_URL,
        token_length=ApplicationConfig.PASSWORD_RESET_TOKEN_LENGTH,
        token_ttl=timedelta(minutes=ApplicationConfig.PASSWORD_RESET_TOKEN_TTL_MINUTES),
    )
    result = await use_case.execute(request.email)

    if result.is_err():
        raise_for_error(result.error)

    return result.value


@router.get("/confirm", status_code=status.HTTP_200_OK)
async def confirm_password_reset_form(
    request: Request,
    token: str = "",
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    New password form data for a reset link.

    Raises:
        - 400 Bad Request: Malformed, invalid or expired password reset token
        - 500 Internal Server Error: Server error
    """
    result = await VerifyPasswordResetTokenUseCase(uow).execute(token)

    if result.is_err():
        raise_for_error(result.error)

    response = JSONResponse(
        {"token": result.value.token, "flash_messages": read_flash_messages(request)}
    )
    clear_flash(response)
    return response


@router.post("/confirm", status_code=status.HTTP_303_SEE_OTHER)
async def confirm_password_reset(
    command: ConfirmPasswordResetCommand,
    uow: UnitOfWork = Depends(get_unit_of_work),
    hashing_engine: PasswordHashingEngine = Depends(get_password_hashing_engine),
):
    """
    Confirm Password Reset

    Responses:
        - 303 See Other -> /login: password reset
        - 303 See Other -> confirm form with flash: mismatch or password policy
        - 400 Bad Request: Malformed, invalid, expired or used token
        - 500 Internal Server Error: Server error
    """
    # A malformed token is a bad request, not a form error to show again
    parsed_token = ResetToken.parse(command.token)
    if parsed_token.is_err():
        raise_for_error(parsed_token.error)

    result = await ConfirmPasswordResetUseCase(uow, hashing_engine).execute(command)

    if result.is_err():
        error = result.error
        if error.code in ("PASSWORD_MISMATCH", "VALIDATION_ERROR"):
            response = RedirectResponse(
                f"/password-reset/confirm?token={quote(command.token)}",
                status_code=status.HTTP_303_SEE_OTHER,
            )
            set_flash(response, error.message, level=LEVEL_ERROR)
            return response
        raise_for_error(error)

    response = RedirectResponse("/login", status_code=status.HTTP_303_SEE_OTHER)
    set_flash(response, "Your password has been reset.")
    return response
