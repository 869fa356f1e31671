"""
Login Use Case

Authenticates a user and opens a server-side session.
"""

from datetime import timedelta

from newsletter.adapter.services.password_hashing import PasswordHashingEngine
from newsletter.app.services.authentication import AuthenticationService, Credentials
from newsletter.app.services.unit_of_work import UnitOfWork
from newsletter.domain.clock import utc_now
from newsletter.domain.entities import Session
from newsletter.result import Result, Return
from .dtos import LoginResponse


class LoginUseCase:
    """
    Use case for user login.

    Business Rules:
    - Same error for unknown username and wrong password
    - Verification time does not depend on whether the username exists
    - Creates a new session row, valid for session_ttl
    """

    def __init__(
        self,
        uow: UnitOfWork,
        hashing_engine: PasswordHashingEngine,
        session_ttl: timedelta = timedelta(hours=12),
    ):
        self.uow = uow
        self.hashing_engine = hashing_engine
        self.session_ttl = session_ttl

    async def execute(self, credentials: Credentials) -> Result[LoginResponse]:
        """
        Execute login use case.

        Args:
            credentials: Username and plain text password

        Returns:
            Result with LoginResponse containing the session id, or Error
        """
        async with self.uow:
            auth_service = AuthenticationService(self.uow, self.hashing_engine)
            validation = await auth_service.validate_credentials(credentials)
            if validation.is_err():
                return Return.err(validation.error)

            user_id = validation.value

            session = Session(user_id=user_id, expires_at=utc_now() + self.session_ttl)
            await self.uow.sessions.create(session)

            # Commit transaction
            await self.uow.commit()

            return Return.ok(
                LoginResponse(
                    user_id=user_id, session_id=session.id, expires_at=session.expires_at
                )
            )
