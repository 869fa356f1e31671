"""
Verify Password Reset Token Use Case

Checks a reset link before showing the new password form.
"""

from newsletter.app.services.password_reset_tokens import PasswordResetTokenManager
from newsletter.app.services.unit_of_work import UnitOfWork
from newsletter.domain.values import ResetToken
from newsletter.result import Result, Return
from .dtos import VerifyPasswordResetTokenResponse


class VerifyPasswordResetTokenUseCase:
    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, token: str) -> Result[VerifyPasswordResetTokenResponse]:
        """
        Errors:
            - VALIDATION_ERROR: malformed token
            - INVALID_TOKEN: unknown, expired or used token
            - UNEXPECTED_ERROR: storage failure
        """
        parsed = ResetToken.parse(token)
        if parsed.is_err():
            return Return.err(parsed.error)

        async with self.uow:
            validation = await PasswordResetTokenManager(self.uow).validate(parsed.value)
            if validation.is_err():
                return Return.err(validation.error)

        return Return.ok(VerifyPasswordResetTokenResponse(token=token))
