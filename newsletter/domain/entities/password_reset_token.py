"""
PasswordResetToken Entity

Single-use, time-limited password reset tokens.
"""

from datetime import datetime
from typing import Optional
from uuid import UUID, uuid4

from sqlmodel import Column, DateTime, Field, Index, SQLModel

from newsletter.domain.clock import utc_now


class PasswordResetToken(SQLModel, table=True):
    """
    PasswordResetToken entity - secure password reset tokens.

    Business Rules:
    - Expires one hour after creation
    - Only the SHA-256 hex digest of the raw token is stored
    - Single-use: used_at is set exactly once, after the password changed
    - Several outstanding tokens per user are allowed
    - Rows are never deleted; expired and used tokens stay as an audit trail
    """

    __tablename__ = "password_resets"

    id: UUID = Field(default_factory=uuid4, primary_key=True)

    user_id: UUID = Field(foreign_key="users.id", index=True)
    token_hash: str = Field(max_length=64, unique=True)  # SHA-256 hex output

    # Timestamps
    created_at: datetime = Field(default_factory=utc_now, sa_column=Column(DateTime))
    expires_at: datetime = Field(sa_column=Column(DateTime, nullable=False))
    used_at: Optional[datetime] = Field(default=None, sa_column=Column(DateTime))

    __table_args__ = (Index("idx_password_reset_expires_at", "expires_at"),)
