from fastapi import Depends, Request
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlmodel.ext.asyncio.session import AsyncSession
from config import ApplicationConfig
from newsletter.adapter.services.blocking_pool import BlockingWorkPool
from newsletter.adapter.services.email_client import EmailClient
from newsletter.adapter.services.password_hashing import PasswordHashingEngine
from newsletter.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from newsletter.api.error import ServerError
from newsletter.api.utils.session_cookie import SESSION_COOKIE_NAME, decode_session_cookie
from newsletter.app.services.email_client import IEmailClient
from newsletter.app.services.unit_of_work import UnitOfWork
from newsletter.domain.clock import utc_now
from newsletter.domain.values import SubscriberEmail, UserId
from newsletter.result import Error

engine = create_async_engine(ApplicationConfig.DB_URI, echo=False, future=True)

AsyncSessionLocal = sessionmaker(
    engine, class_=AsyncSession, expire_on_commit=False, autoflush=False
)

blocking_pool = BlockingWorkPool(ApplicationConfig.BLOCKING_POOL_SIZE)

password_hashing_engine = PasswordHashingEngine(ApplicationConfig.PEPPER, blocking_pool)

email_client = EmailClient(
    base_url=ApplicationConfig.EMAIL_BASE_URL,
    sender=SubscriberEmail(ApplicationConfig.EMAIL_SENDER),
    authorization_token=ApplicationConfig.EMAIL_AUTHORIZATION_TOKEN,
    timeout=ApplicationConfig.EMAIL_TIMEOUT_MILLISECONDS / 1000,
)


class AnonymousUserError(Exception):
    """Raised when a protected route is hit without a valid session"""


async def get_unit_of_work():
    async with AsyncSessionLocal() as session:
        yield SqlAlchemyUnitOfWork(session)


def get_password_hashing_engine() -> PasswordHashingEngine:
    return password_hashing_engine


def get_email_client() -> IEmailClient:
    return email_client


async def require_user_id(
    request: Request, uow: UnitOfWork = Depends(get_unit_of_work)
) -> UserId:
    """
    Dependency gating protected routes on a valid session cookie.

    Missing cookie, bad signature, unknown, revoked or expired session all
    mean the request is anonymous: the handler never runs.

    Returns:
        UserId of the session owner. The session id is left on
        request.state.session_id for logout.

    Raises:
        AnonymousUserError: no valid session
        ServerError: session store unavailable
    """
    token = request.cookies.get(SESSION_COOKIE_NAME)
    if not token:
        raise AnonymousUserError()

    session_id = decode_session_cookie(token)
    if session_id is None:
        raise AnonymousUserError()

    try:
        async with uow:
            session = await uow.sessions.get_by_id(session_id)
            valid = (
                session is not None
                and not session.revoked
                and session.expires_at > utc_now()
            )
            user_id = session.user_id if valid else None
    except SQLAlchemyError as e:
        raise ServerError(Error("UNEXPECTED_ERROR", "Failed to load the session", e))

    if user_id is None:
        raise AnonymousUserError()

    request.state.session_id = session_id
    return UserId(user_id)
