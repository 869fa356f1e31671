"""
Newsletter Domain Enums

All enumeration types used across domain entities.
"""

from enum import Enum


class SubscriptionStatus(str, Enum):
    """Subscription lifecycle status"""

    pending_confirmation = "pending_confirmation"
    confirmed = "confirmed"
