from abc import ABC, abstractmethod
from typing import List, Optional
from uuid import UUID

from newsletter.domain.entities import IdempotencyRecord


class IIdempotencyRepository(ABC):
    """IdempotencyRecord repository interface - application layer"""

    @abstractmethod
    async def insert_placeholder(self, user_id: UUID, idempotency_key: str) -> bool:
        """
        Insert a processing placeholder for (user_id, idempotency_key).

        Returns True if the row was inserted, False if one already existed.
        """
        pass

    @abstractmethod
    async def get(self, user_id: UUID, idempotency_key: str) -> Optional[IdempotencyRecord]:
        """Get the record stored for (user_id, idempotency_key)"""
        pass

    @abstractmethod
    async def save_response(
        self,
        user_id: UUID,
        idempotency_key: str,
        status_code: int,
        headers: List[List[str]],
        body: bytes,
    ) -> None:
        """Complete a placeholder with the response to replay"""
        pass
