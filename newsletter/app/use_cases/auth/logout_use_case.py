"""
Logout Use Case

Revokes the session backing the current login cookie.
"""

from uuid import UUID

from newsletter.app.services.unit_of_work import UnitOfWork
from newsletter.domain.clock import utc_now
from newsletter.result import Result, Return


class LogoutUseCase:
    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, session_id: UUID) -> Result[None]:
        async with self.uow:
            await self.uow.sessions.revoke_by_id(session_id, utc_now())
            await self.uow.commit()
            return Return.ok(None)
