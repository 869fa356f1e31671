"""
Load Dashboard Use Case

Loads what the admin dashboard shows for the logged-in user.
"""

from pydantic import BaseModel

from newsletter.app.services.unit_of_work import UnitOfWork
from newsletter.domain.values import UserId
from newsletter.result import Error, Result, Return


class DashboardResponse(BaseModel):
    """Response for load dashboard use case"""

    username: str


class LoadDashboardUseCase:
    """
    Use case for loading the admin dashboard.

    Business Rules:
    - Caller has already passed the session gate
    - A session pointing at a missing user is a server-side inconsistency
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, user_id: UserId) -> Result[DashboardResponse]:
        async with self.uow:
            user = await self.uow.users.get_by_id(user_id)
            if user is None:
                return Return.err(Error("UNEXPECTED_ERROR", "User not found"))

            return Return.ok(DashboardResponse(username=user.username))
