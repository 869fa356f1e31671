"""
Authentication Use Case DTOs (Data Transfer Objects)

All Command and Response classes for auth domain.
Provides type safety and clear contracts between layers.
"""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, SecretStr


# ============================================================================
# Command DTOs
# ============================================================================


class ChangePasswordCommand(BaseModel):
    """Change password for an authenticated user"""

    current_password: SecretStr
    new_password: SecretStr
    new_password_check: SecretStr


class ConfirmPasswordResetCommand(BaseModel):
    """Set a new password using a reset token"""

    token: str
    new_password: SecretStr
    new_password_check: SecretStr


# ============================================================================
# Response DTOs
# ============================================================================


class LoginResponse(BaseModel):
    """Response for user login use case"""

    user_id: UUID
    session_id: UUID
    expires_at: datetime


class RequestPasswordResetResponse(BaseModel):
    """Response for request password reset use case"""

    status: str
    message: str


class VerifyPasswordResetTokenResponse(BaseModel):
    """Response for the reset link check"""

    token: str
