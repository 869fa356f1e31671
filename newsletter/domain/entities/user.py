"""
User Entity

An account allowed to log into the admin area and publish newsletters.
"""

from datetime import datetime
from uuid import UUID, uuid4

from sqlmodel import Column, DateTime, Field, SQLModel

from newsletter.domain.clock import utc_now


class User(SQLModel, table=True):
    """
    User entity - an identity holding credentials.

    Business Rules:
    - Username must be unique across all users
    - Email is used to look up the account on password reset requests
    - Password stored as an Argon2id PHC string (salted and peppered)
    - Never deleted by the authentication core
    """

    __tablename__ = "users"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    username: str = Field(unique=True, index=True, max_length=255)
    email: str = Field(unique=True, index=True, max_length=255)
    password_hash: str = Field(max_length=255)

    created_at: datetime = Field(default_factory=utc_now, sa_column=Column(DateTime))
