from datetime import timedelta

from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import JSONResponse, RedirectResponse
from pydantic import BaseModel, Field, SecretStr

from config import ApplicationConfig
from newsletter.adapter.services.password_hashing import PasswordHashingEngine
from newsletter.api.error import ServerError
from newsletter.api.utils.flash import LEVEL_ERROR, clear_flash, read_flash_messages, set_flash
from newsletter.api.utils.session_cookie import SESSION_COOKIE_NAME, encode_session_cookie
from newsletter.app.services.authentication import Credentials
from newsletter.app.services.unit_of_work import UnitOfWork
from newsletter.app.use_cases.auth import LoginUseCase
from newsletter.depends import get_password_hashing_engine, get_unit_of_work

router = APIRouter(tags=["Authentication"])


class LoginRequest(BaseModel):
    """
    Login HTTP request payload

    Validates incoming login request.
    """

    username: str = Field(..., description="Username")
    password: SecretStr = Field(..., description="User password")


@router.get("/login", status_code=status.HTTP_200_OK)
async def login_form(request: Request):
    """Login form data: pending flash messages, consumed by this read."""
    response = JSONResponse({"flash_messages": read_flash_messages(request)})
    clear_flash(response)
    return response


@router.post("/login", status_code=status.HTTP_303_SEE_OTHER)
async def login(
    request: LoginRequest,
    uow: UnitOfWork = Depends(get_unit_of_work),
    hashing_engine: PasswordHashingEngine = Depends(get_password_hashing_engine),
):
    """
    User Login

    Validates credentials, opens a session and sets the signed session cookie.

    Responses:
        - 303 See Other -> /admin/dashboard: logged in
        - 303 See Other -> /login with flash: invalid credentials
        - 500 Internal Server Error: Server error
    """
    use_case = LoginUseCase(
        uow,
        hashing_engine,
        session_ttl=timedelta(hours=ApplicationConfig.SESSION_TTL_HOURS),
    )
    result = await use_case.execute(
        Credentials(username=request.username, password=request.password)
    )

    if result.is_err():
        error = result.error
        if error.code == "INVALID_CREDENTIALS":
            response = RedirectResponse("/login", status_code=status.HTTP_303_SEE_OTHER)
            set_flash(response, "Authentication failed", level=LEVEL_ERROR)
            return response
        raise ServerError(error)

    login_result = result.value
    response = RedirectResponse("/admin/dashboard", status_code=status.HTTP_303_SEE_OTHER)
    response.set_cookie(
        SESSION_COOKIE_NAME,
        encode_session_cookie(
            login_result.session_id, login_result.user_id, login_result.expires_at
        ),
        max_age=ApplicationConfig.SESSION_TTL_HOURS * 3600,
        httponly=True,
        secure=ApplicationConfig.SESSION_COOKIE_SECURE,
        samesite="lax",
    )
    return response
