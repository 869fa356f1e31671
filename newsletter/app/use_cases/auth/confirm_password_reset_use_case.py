"""
Confirm Password Reset Use Case

Handles password reset confirmation with secure token validation.
"""

import logging

from newsletter.adapter.services.password_hashing import PasswordHashingEngine
from newsletter.app.services.authentication import AuthenticationService
from newsletter.app.services.password_reset_tokens import PasswordResetTokenManager
from newsletter.app.services.unit_of_work import UnitOfWork
from newsletter.domain.values import NewPassword, ResetToken
from newsletter.result import Error, Result, Return
from .dtos import ConfirmPasswordResetCommand

logger = logging.getLogger(__name__)


class ConfirmPasswordResetUseCase:
    """
    Use case for confirming password reset.

    Business Rules:
    - Token is validated by hashing and comparing with stored hash
    - Unknown, expired and used tokens all fail with INVALID_TOKEN
    - New password and its confirmation must match
    - New password must satisfy the password policy
    - Password change and marking the token used commit together
    """

    def __init__(self, uow: UnitOfWork, hashing_engine: PasswordHashingEngine):
        self.uow = uow
        self.hashing_engine = hashing_engine

    async def execute(self, command: ConfirmPasswordResetCommand) -> Result[None]:
        """
        Execute confirm password reset use case.

        Errors:
            - VALIDATION_ERROR: malformed token
            - INVALID_TOKEN: unknown, expired or used token
            - PASSWORD_MISMATCH: new password and confirmation differ
            - VALIDATION_ERROR: new password violates the policy
            - UNEXPECTED_ERROR: storage failure
        """
        parsed_token = ResetToken.parse(command.token)
        if parsed_token.is_err():
            return Return.err(parsed_token.error)

        async with self.uow:
            token_manager = PasswordResetTokenManager(self.uow)

            validation = await token_manager.validate(parsed_token.value)
            if validation.is_err():
                return Return.err(validation.error)
            user_id, token_hash = validation.value

            if command.new_password.get_secret_value() != command.new_password_check.get_secret_value():
                return Return.err(
                    Error(
                        "PASSWORD_MISMATCH",
                        "You entered two different new passwords - the field values must match.",
                    )
                )

            new_password = NewPassword.parse(command.new_password)
            if new_password.is_err():
                return Return.err(new_password.error)

            auth_service = AuthenticationService(self.uow, self.hashing_engine)
            changed = await auth_service.change_password(user_id, new_password.value)
            if changed.is_err():
                return Return.err(changed.error)

            # Only after the password change; rolls back with it on failure
            used = await token_manager.mark_used(token_hash)
            if used.is_err():
                return Return.err(used.error)

            # Commit transaction
            await self.uow.commit()
            logger.info("Password reset completed for user %s", user_id)

            return Return.ok(None)
