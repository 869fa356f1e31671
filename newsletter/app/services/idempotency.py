"""
At-most-once execution of side-effecting POST requests.

The first request with a given (user, key) inserts a placeholder and keeps
the transaction open while its side effects run; save_response stores the
response and commits, so the receipt and the database-visible side effects
land together. Effects outside the database (an email already handed to
the provider) are not rolled back if the process dies before the commit.
"""

import logging
from dataclasses import dataclass, field
from typing import List, Tuple, Union
from uuid import UUID

from sqlalchemy.exc import SQLAlchemyError

from newsletter.app.services.unit_of_work import UnitOfWork
from newsletter.domain.values import IdempotencyKey
from newsletter.result import Error, Result, Return

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SavedResponse:
    """Transport independent copy of an HTTP response"""

    status_code: int
    headers: List[Tuple[str, str]] = field(default_factory=list)
    body: bytes = b""


@dataclass(frozen=True)
class StartProcessing:
    """No previous request: run the operation inside the open unit of work"""

    uow: UnitOfWork


@dataclass(frozen=True)
class ReturnSavedResponse:
    """A previous request completed: replay its response verbatim"""

    response: SavedResponse


NextAction = Union[StartProcessing, ReturnSavedResponse]


class IdempotencyCoordinator:
    """
    Deduplicates requests keyed by (user_id, idempotency_key).

    Business Rules:
    - Keys are scoped per user
    - The storage unique constraint is the only concurrency control
    - A placeholder without a response seen by another request => IDEMPOTENCY_CONFLICT
    - Completed records are never modified or deleted
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def try_processing(self, key: IdempotencyKey, user_id: UUID) -> Result[NextAction]:
        """
        Claim the key or fetch the saved response.

        Errors:
            - IDEMPOTENCY_CONFLICT: same key still being processed
            - UNEXPECTED_ERROR: storage failure
        """
        try:
            inserted = await self.uow.idempotency.insert_placeholder(user_id, str(key))
            if inserted:
                return Return.ok(StartProcessing(self.uow))

            record = await self.uow.idempotency.get(user_id, str(key))
        except SQLAlchemyError as e:
            logger.exception("Failed to claim idempotency key")
            return Return.err(
                Error("UNEXPECTED_ERROR", "Failed to claim idempotency key", e)
            )

        if record is None or record.response_status_code is None:
            logger.warning("Idempotency key %s is already being processed", key)
            return Return.err(
                Error(
                    "IDEMPOTENCY_CONFLICT",
                    "A request with this idempotency key is already being processed.",
                )
            )

        saved = SavedResponse(
            status_code=record.response_status_code,
            headers=[(name, value) for name, value in (record.response_headers or [])],
            body=record.response_body or b"",
        )
        return Return.ok(ReturnSavedResponse(saved))

    async def save_response(
        self, key: IdempotencyKey, user_id: UUID, response: SavedResponse
    ) -> Result[SavedResponse]:
        """
        Store the response for replay and commit the unit of work.

        Errors:
            - UNEXPECTED_ERROR: storage failure (nothing is committed)
        """
        try:
            await self.uow.idempotency.save_response(
                user_id,
                str(key),
                response.status_code,
                [[name, value] for name, value in response.headers],
                response.body,
            )
            await self.uow.commit()
        except SQLAlchemyError as e:
            logger.exception("Failed to save response for idempotency key")
            return Return.err(
                Error("UNEXPECTED_ERROR", "Failed to save idempotent response", e)
            )

        return Return.ok(response)
