"""
Validated domain values.

Each type is built through `parse`, which returns a Result carrying a
VALIDATION_ERROR whose message is safe to show to the user.
"""

from typing import NewType
from uuid import UUID

from email_validator import EmailNotValidError, validate_email
from pydantic import SecretStr

from newsletter.result import Error, Result, Return

# Authenticated identity handed to protected handlers
UserId = NewType("UserId", UUID)

PASSWORD_MIN_LENGTH = 8
PASSWORD_MAX_LENGTH = 128

RESET_TOKEN_MIN_LENGTH = 16
RESET_TOKEN_MAX_LENGTH = 32

IDEMPOTENCY_KEY_MAX_LENGTH = 50

SUBSCRIBER_NAME_MAX_LENGTH = 256
SUBSCRIBER_NAME_FORBIDDEN_CHARACTERS = frozenset('/()"<>\\{}')


def _validation_error(message: str) -> Result:
    return Return.err(Error("VALIDATION_ERROR", message))


class SubscriberEmail:
    """Syntactically valid email address"""

    def __init__(self, value: str):
        self._value = value

    @classmethod
    def parse(cls, raw: str) -> Result["SubscriberEmail"]:
        if raw is None or not raw.strip():
            return _validation_error("Email address cannot be empty.")
        try:
            validate_email(raw, check_deliverability=False)
        except EmailNotValidError:
            return _validation_error(f"{raw} is not a valid email address.")
        return Return.ok(cls(raw))

    def __str__(self) -> str:
        return self._value

    def __repr__(self) -> str:
        return f"SubscriberEmail({self._value!r})"

    def __eq__(self, other) -> bool:
        return isinstance(other, SubscriberEmail) and other._value == self._value

    def __hash__(self) -> int:
        return hash(self._value)


class SubscriberName:
    """
    Display name given on subscription.

    Rules: not empty or whitespace only, at most 256 characters, none of
    SUBSCRIBER_NAME_FORBIDDEN_CHARACTERS.
    """

    def __init__(self, value: str):
        self._value = value

    @classmethod
    def parse(cls, raw: str) -> Result["SubscriberName"]:
        if (
            raw is None
            or not raw.strip()
            or len(raw) > SUBSCRIBER_NAME_MAX_LENGTH
            or any(c in SUBSCRIBER_NAME_FORBIDDEN_CHARACTERS for c in raw)
        ):
            return _validation_error(f"{raw} is not a valid subscriber name.")
        return Return.ok(cls(raw))

    def __str__(self) -> str:
        return self._value

    def __repr__(self) -> str:
        return f"SubscriberName({self._value!r})"


class NewPassword:
    """
    Password accepted by the password policy.

    Rules: not empty or whitespace only, ASCII only, 8 to 128 characters.
    """

    def __init__(self, secret: SecretStr):
        self._secret = secret

    @classmethod
    def parse(cls, raw: SecretStr) -> Result["NewPassword"]:
        value = raw.get_secret_value()
        if not value.strip():
            return _validation_error("Password cannot be empty or only whitespace.")
        if not value.isascii():
            return _validation_error("Password must contain ASCII characters only.")
        if len(value) < PASSWORD_MIN_LENGTH:
            return _validation_error(
                f"Password must be {PASSWORD_MIN_LENGTH} characters or longer."
            )
        if len(value) > PASSWORD_MAX_LENGTH:
            return _validation_error(
                f"Password must be {PASSWORD_MAX_LENGTH} characters or shorter."
            )
        return Return.ok(cls(raw))

    def expose(self) -> str:
        return self._secret.get_secret_value()

    def __repr__(self) -> str:
        return "NewPassword('**********')"


class ResetToken:
    """Raw password reset token as received from a reset link"""

    def __init__(self, value: str):
        self._value = value

    @classmethod
    def parse(cls, raw: str) -> Result["ResetToken"]:
        if raw is None or not raw.strip():
            return _validation_error("Password reset token cannot be empty.")
        if not (RESET_TOKEN_MIN_LENGTH <= len(raw) <= RESET_TOKEN_MAX_LENGTH):
            return _validation_error("Password reset token has an invalid length.")
        if not (raw.isascii() and raw.isalnum()):
            return _validation_error("Password reset token must be alphanumeric.")
        return Return.ok(cls(raw))

    def expose(self) -> str:
        return self._value

    def __repr__(self) -> str:
        return "ResetToken('**********')"


class IdempotencyKey:
    """Client supplied key scoping a retry-safe operation"""

    def __init__(self, value: str):
        self._value = value

    @classmethod
    def parse(cls, raw: str) -> Result["IdempotencyKey"]:
        if raw is None or not raw.strip():
            return _validation_error("The idempotency key cannot be empty.")
        if len(raw) > IDEMPOTENCY_KEY_MAX_LENGTH:
            return _validation_error(
                f"The idempotency key must be at most {IDEMPOTENCY_KEY_MAX_LENGTH} characters long."
            )
        return Return.ok(cls(raw))

    def __str__(self) -> str:
        return self._value

    def __repr__(self) -> str:
        return f"IdempotencyKey({self._value!r})"
