"""
Use Cases

All use cases are organized into domain folders:
- auth/: Login, logout, password change and password reset
- users/: Dashboard for the logged-in user
- newsletters/: Newsletter publication
- subscriptions/: Newsletter sign-up

Import from subdirectories for better organization.
"""

from .auth import (
    LoginUseCase,
    LogoutUseCase,
    ChangePasswordUseCase,
    RequestPasswordResetUseCase,
    VerifyPasswordResetTokenUseCase,
    ConfirmPasswordResetUseCase,
)
from .users import LoadDashboardUseCase
from .newsletters import PublishNewsletterUseCase
from .subscriptions import SubscribeUseCase

__all__ = [
    # Auth
    "LoginUseCase",
    "LogoutUseCase",
    "ChangePasswordUseCase",
    "RequestPasswordResetUseCase",
    "VerifyPasswordResetTokenUseCase",
    "ConfirmPasswordResetUseCase",
    # Users
    "LoadDashboardUseCase",
    # Newsletters
    "PublishNewsletterUseCase",
    # Subscriptions
    "SubscribeUseCase",
]
