"""
Newsletter Domain Entities

All domain entities organized by model.
Each entity in its own file for better maintainability.
"""

# Export all enums
from .enums import SubscriptionStatus

# Export all entities
from .user import User
from .password_reset_token import PasswordResetToken
from .session import Session
from .idempotency_record import IdempotencyRecord
from .subscription import Subscription

__all__ = [
    # Enums
    "SubscriptionStatus",
    # Entities
    "User",
    "PasswordResetToken",
    "Session",
    "IdempotencyRecord",
    "Subscription",
]
