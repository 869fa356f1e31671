"""
Change Password Use Case

Lets an authenticated user replace their password.
"""

from newsletter.adapter.services.password_hashing import PasswordHashingEngine
from newsletter.app.services.authentication import AuthenticationService, Credentials
from newsletter.app.services.unit_of_work import UnitOfWork
from newsletter.domain.values import NewPassword, UserId
from newsletter.result import Error, Result, Return
from .dtos import ChangePasswordCommand


class ChangePasswordUseCase:
    """
    Use case for changing the password of the logged-in user.

    Business Rules:
    - New password and its confirmation must match
    - Current password must be re-entered and verified
    - New password must satisfy the password policy
    """

    def __init__(self, uow: UnitOfWork, hashing_engine: PasswordHashingEngine):
        self.uow = uow
        self.hashing_engine = hashing_engine

    async def execute(self, user_id: UserId, command: ChangePasswordCommand) -> Result[None]:
        """
        Execute change password use case.

        Errors:
            - PASSWORD_MISMATCH: new password and confirmation differ
            - INVALID_CURRENT_PASSWORD: current password is wrong
            - VALIDATION_ERROR: new password violates the policy
            - UNEXPECTED_ERROR: storage failure
        """
        if command.new_password.get_secret_value() != command.new_password_check.get_secret_value():
            return Return.err(
                Error(
                    "PASSWORD_MISMATCH",
                    "You entered two different new passwords - the field values must match.",
                )
            )

        async with self.uow:
            user = await self.uow.users.get_by_id(user_id)
            if user is None:
                return Return.err(Error("UNEXPECTED_ERROR", "User not found"))

            auth_service = AuthenticationService(self.uow, self.hashing_engine)
            validation = await auth_service.validate_credentials(
                Credentials(username=user.username, password=command.current_password)
            )
            if validation.is_err():
                if validation.error.code == "INVALID_CREDENTIALS":
                    return Return.err(
                        Error("INVALID_CURRENT_PASSWORD", "The current password is incorrect.")
                    )
                return Return.err(validation.error)

            new_password = NewPassword.parse(command.new_password)
            if new_password.is_err():
                return Return.err(new_password.error)

            changed = await auth_service.change_password(user_id, new_password.value)
            if changed.is_err():
                return Return.err(changed.error)

            # Commit transaction
            await self.uow.commit()

            return Return.ok(None)
