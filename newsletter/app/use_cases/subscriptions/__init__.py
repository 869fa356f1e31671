"""
Subscription Use Cases

Sign-up of new newsletter subscribers.
"""

from .subscribe_use_case import SubscribeUseCase
from .dtos import SubscribeCommand, SubscribeResponse

__all__ = [
    "SubscribeUseCase",
    "SubscribeCommand",
    "SubscribeResponse",
]
