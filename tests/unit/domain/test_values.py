"""
Unit tests for validated domain values

Boundary tests for password, reset token, idempotency key and subscriber
name parsing.
"""
import pytest
from pydantic import SecretStr

from newsletter.domain.values import (
    IdempotencyKey,
    NewPassword,
    ResetToken,
    SubscriberEmail,
    SubscriberName,
)


# ============================================================================
# NewPassword
# ============================================================================


@pytest.mark.parametrize("length", [8, 64, 128])
def test_password_accepts_lengths_within_bounds(length):
    result = NewPassword.parse(SecretStr("a" * length))

    assert result.is_ok()
    assert result.value.expose() == "a" * length


@pytest.mark.parametrize(
    "raw, message",
    [
        ("a" * 7, "Password must be 8 characters or longer."),
        ("a" * 129, "Password must be 128 characters or shorter."),
        ("", "Password cannot be empty or only whitespace."),
        ("         ", "Password cannot be empty or only whitespace."),
        ("pässwörd-long", "Password must contain ASCII characters only."),
    ],
)
def test_password_rejects_policy_violations(raw, message):
    result = NewPassword.parse(SecretStr(raw))

    assert result.is_err()
    assert result.error.code == "VALIDATION_ERROR"
    assert result.error.message == message


def test_password_repr_does_not_leak_secret():
    password = NewPassword.parse(SecretStr("super-secret-value")).value

    assert "super-secret-value" not in repr(password)


# ============================================================================
# ResetToken
# ============================================================================


@pytest.mark.parametrize("length", [16, 25, 32])
def test_reset_token_accepts_boundary_lengths(length):
    raw = ("Ab3" * 11)[:length]

    result = ResetToken.parse(raw)

    assert result.is_ok()
    assert result.value.expose() == raw


@pytest.mark.parametrize(
    "raw",
    [
        "a" * 15,
        "a" * 33,
        "",
        " " * 20,
        "abcdefghijklmnop-",
        "abcdefgh ijklmnop",
        "abcdefghijklmnoé",
    ],
)
def test_reset_token_rejects_malformed_tokens(raw):
    result = ResetToken.parse(raw)

    assert result.is_err()
    assert result.error.code == "VALIDATION_ERROR"


# ============================================================================
# IdempotencyKey
# ============================================================================


def test_idempotency_key_accepts_max_length():
    result = IdempotencyKey.parse("k" * 50)

    assert result.is_ok()
    assert str(result.value) == "k" * 50


@pytest.mark.parametrize("raw", ["", "   ", "k" * 51])
def test_idempotency_key_rejects_empty_and_too_long(raw):
    result = IdempotencyKey.parse(raw)

    assert result.is_err()
    assert result.error.code == "VALIDATION_ERROR"


# ============================================================================
# SubscriberEmail
# ============================================================================


def test_subscriber_email_accepts_valid_address():
    result = SubscriberEmail.parse("ursula@example.com")

    assert result.is_ok()
    assert str(result.value) == "ursula@example.com"


@pytest.mark.parametrize("raw", ["", "ursula.example.com", "@example.com", "ursula@"])
def test_subscriber_email_rejects_invalid_address(raw):
    result = SubscriberEmail.parse(raw)

    assert result.is_err()
    assert result.error.code == "VALIDATION_ERROR"


# ============================================================================
# SubscriberName
# ============================================================================


def test_subscriber_name_accepts_valid_name():
    result = SubscriberName.parse("Ursula Le Guin")

    assert result.is_ok()
    assert str(result.value) == "Ursula Le Guin"


def test_subscriber_name_accepts_256_characters():
    assert SubscriberName.parse("ё" * 256).is_ok()


@pytest.mark.parametrize("raw", ["", " ", "a" * 257])
def test_subscriber_name_rejects_empty_or_too_long(raw):
    result = SubscriberName.parse(raw)

    assert result.is_err()
    assert result.error.code == "VALIDATION_ERROR"
    assert result.error.message == f"{raw} is not a valid subscriber name."


@pytest.mark.parametrize("character", ["/", "(", ")", '"', "<", ">", "\\", "{", "}"])
def test_subscriber_name_rejects_forbidden_characters(character):
    result = SubscriberName.parse(f"Ursula {character}")

    assert result.is_err()
    assert result.error.code == "VALIDATION_ERROR"
