from typing import List, Optional
from uuid import UUID

from sqlalchemy.dialects.postgresql import insert as postgresql_insert
from sqlalchemy.dialects.sqlite import insert as sqlite_insert
from sqlmodel import select, update
from sqlmodel.ext.asyncio.session import AsyncSession

from newsletter.app.repositories.idempotency_repository import IIdempotencyRepository
from newsletter.domain.clock import utc_now
from newsletter.domain.entities import IdempotencyRecord


class IdempotencyRepository(IIdempotencyRepository):
    """IdempotencyRecord repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    def _insert(self):
        dialect = self.session.get_bind().dialect.name
        if dialect == "postgresql":
            return postgresql_insert(IdempotencyRecord)
        return sqlite_insert(IdempotencyRecord)

    async def insert_placeholder(self, user_id: UUID, idempotency_key: str) -> bool:
        """
        Insert a processing placeholder for (user_id, idempotency_key).

        Relies on the primary key to deduplicate. On PostgreSQL a concurrent
        insert of the same key waits for the first transaction to finish.
        """
        stmt = (
            self._insert()
            .values(user_id=user_id, idempotency_key=idempotency_key, created_at=utc_now())
            .on_conflict_do_nothing(index_elements=["user_id", "idempotency_key"])
        )
        result = await self.session.execute(stmt)
        return result.rowcount > 0

    async def get(self, user_id: UUID, idempotency_key: str) -> Optional[IdempotencyRecord]:
        """Get the record stored for (user_id, idempotency_key)"""
        stmt = (
            select(IdempotencyRecord)
            .where(
                IdempotencyRecord.user_id == user_id,
                IdempotencyRecord.idempotency_key == idempotency_key,
            )
            .execution_options(populate_existing=True)
        )
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def save_response(
        self,
        user_id: UUID,
        idempotency_key: str,
        status_code: int,
        headers: List[List[str]],
        body: bytes,
    ) -> None:
        """Complete a placeholder with the response to replay"""
        stmt = (
            update(IdempotencyRecord)
            .where(
                IdempotencyRecord.user_id == user_id,
                IdempotencyRecord.idempotency_key == idempotency_key,
            )
            .values(
                response_status_code=status_code,
                response_headers=headers,
                response_body=body,
            )
        )
        await self.session.execute(stmt)
        await self.session.flush()
