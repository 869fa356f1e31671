"""
Newsletter Use Cases

Publication of newsletter issues.
"""

from .publish_newsletter_use_case import PublishNewsletterUseCase
from .dtos import PublishNewsletterCommand, PublishNewsletterResponse

__all__ = [
    "PublishNewsletterUseCase",
    "PublishNewsletterCommand",
    "PublishNewsletterResponse",
]
