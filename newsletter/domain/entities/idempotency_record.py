"""
IdempotencyRecord Entity

Receipt of a side-effecting request, keyed by (user, client key).
"""

from datetime import datetime
from typing import Optional
from uuid import UUID

from sqlalchemy import JSON, LargeBinary
from sqlmodel import Column, DateTime, Field, SQLModel

from newsletter.domain.clock import utc_now


class IdempotencyRecord(SQLModel, table=True):
    """
    IdempotencyRecord entity - cached HTTP response for a retried request.

    Business Rules:
    - Composite key (user_id, idempotency_key); the same key from two users
      never collides
    - response_status_code IS NULL marks a processing placeholder
    - Completed in the same transaction as the protected side effects
    - Never mutated after completion and never deleted
    """

    __tablename__ = "idempotency"

    user_id: UUID = Field(foreign_key="users.id", primary_key=True)
    idempotency_key: str = Field(primary_key=True, max_length=50)

    response_status_code: Optional[int] = Field(default=None)
    # List of [name, value] pairs, in response order
    response_headers: Optional[list] = Field(default=None, sa_column=Column(JSON))
    response_body: Optional[bytes] = Field(default=None, sa_column=Column(LargeBinary))

    created_at: datetime = Field(default_factory=utc_now, sa_column=Column(DateTime))
