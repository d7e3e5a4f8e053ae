"""
Unit tests for login input rules and the LoginAttempt model.
"""

import pytest
from portal_auth.domain.login import (
    LoginAttempt,
    LoginChallenge,
    LoginStep,
    is_valid_code,
    is_valid_identifier,
    looks_like_email,
    looks_like_username,
)


@pytest.mark.parametrize("identifier", [
    "alice@example.com",
    "a@b.",
    "first.last@corp.co.il",
    "alice",
    "bob_99",
    "x.y-z",
    "abc",
])
def test_identifier_accepted(identifier):
    """Emails (contain @ and .) and usernames (3+ of [A-Za-z0-9._-]) pass."""
    assert is_valid_identifier(identifier)


@pytest.mark.parametrize("identifier", [
    "",
    "ab",
    "alice@example",
    "has space",
    "bad!name",
    "נועה",
])
def test_identifier_rejected(identifier):
    """Everything else fails."""
    assert not is_valid_identifier(identifier)


def test_email_and_username_heuristics():
    """Test the two halves of the identifier check."""
    assert looks_like_email("x@y.z")
    assert not looks_like_email("x.y")
    assert looks_like_username("a.b")
    assert not looks_like_username("ab")
    assert not looks_like_username("abc\n")


@pytest.mark.parametrize("code,valid", [
    ("123456", True),
    ("000000", True),
    ("12345", False),
    ("1234567", False),
    ("abcdef", False),
    ("12a456", False),
    (" 12345", False),
    ("123456\n", False),
    ("١٢٣٤٥٦", False),  # Non-ASCII digits
    ("", False),
])
def test_code_must_be_six_ascii_digits(code, valid):
    """Only exactly six digits proceed."""
    assert is_valid_code(code) is valid


def test_return_to_credentials_clears_code():
    """Re-entering credentials drops the stale code."""
    attempt = LoginAttempt(identifier="alice", password="pw")
    attempt.enter_code_step(expiry_minutes=5, method="email_otp")
    attempt.otp_code = "123456"
    attempt.error = "invalid code"

    attempt.return_to_credentials()

    assert attempt.step == LoginStep.CREDENTIALS
    assert attempt.otp_code == ""
    assert attempt.error is None
    assert attempt.otp_expiry_minutes is None
    assert attempt.identifier == "alice"  # Kept for re-entry
    assert attempt.password == "pw"


def test_enter_code_step():
    """Entering the code step starts with a blank code."""
    attempt = LoginAttempt(otp_code="999999")
    attempt.enter_code_step(expiry_minutes=10, method="email_otp")

    assert attempt.step == LoginStep.ONE_TIME_CODE
    assert attempt.otp_code == ""
    assert attempt.otp_expiry_minutes == 10
    assert attempt.method == "email_otp"


def test_challenge_from_dict():
    """Test parsing the credential-exchange payload."""
    challenge = LoginChallenge.from_dict({"mfa_required": True, "method": "email_otp", "expires_in": 5})
    assert challenge.mfa_required is True
    assert challenge.expires_in_minutes == 5
    assert challenge.method == "email_otp"

    plain = LoginChallenge.from_dict({"message": "ok"})
    assert plain.mfa_required is False
    assert plain.expires_in_minutes is None

    odd = LoginChallenge.from_dict({"mfa_required": "yes", "expires_in": "soon"})
    assert odd.mfa_required is False
    assert odd.expires_in_minutes is None
