"""
Newsletter Use Case DTOs (Data Transfer Objects)
"""

from pydantic import BaseModel, Field


class PublishNewsletterCommand(BaseModel):
    """Publish a newsletter issue to every confirmed subscriber"""

    title: str = Field(min_length=1)
    html_content: str = Field(min_length=1)
    text_content: str = Field(min_length=1)
    idempotency_key: str


class PublishNewsletterResponse(BaseModel):
    """Response for publish newsletter use case"""

    delivered: int
    skipped: int
