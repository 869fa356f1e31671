"""
Authentication Use Cases

All authentication-related business logic.
"""

from .login_use_case import LoginUseCase
from .logout_use_case import LogoutUseCase
from .change_password_use_case import ChangePasswordUseCase
from .request_password_reset_use_case import RequestPasswordResetUseCase
from .verify_password_reset_token_use_case import VerifyPasswordResetTokenUseCase
from .confirm_password_reset_use_case import ConfirmPasswordResetUseCase
from .dtos import (
    ChangePasswordCommand,
    ConfirmPasswordResetCommand,
    LoginResponse,
    RequestPasswordResetResponse,
    VerifyPasswordResetTokenResponse,
)

__all__ = [
    # Use Cases
    "LoginUseCase",
    "LogoutUseCase",
    "ChangePasswordUseCase",
    "RequestPasswordResetUseCase",
    "VerifyPasswordResetTokenUseCase",
    "ConfirmPasswordResetUseCase",
    # DTOs - Commands
    "ChangePasswordCommand",
    "ConfirmPasswordResetCommand",
    # DTOs - Responses
    "LoginResponse",
    "RequestPasswordResetResponse",
    "VerifyPasswordResetTokenResponse",
]
