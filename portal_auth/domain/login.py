"""
Login Domain Model - Two-step login attempt and its input rules.
"""

import re
from dataclasses import dataclass
from enum import Enum
from typing import Dict, Any, Optional

USERNAME_PATTERN = re.compile(r"[A-Za-z0-9._-]{3,}")
OTP_PATTERN = re.compile(r"[0-9]{6}")


class LoginStep(Enum):
    """Login state machine states."""
    CREDENTIALS = "credentials"
    ONE_TIME_CODE = "otp"
    AUTHENTICATED = "authenticated"  # Terminal, left via redirect


@dataclass
class LoginAttempt:
    """
    Transient state of one login page visit.

    Domain rules:
    - otp_code only means something while step is ONE_TIME_CODE
    - going back to CREDENTIALS clears otp_code and error
    - identifier and password survive a failed attempt for re-entry
    """
    identifier: str = ""
    password: str = ""
    step: LoginStep = LoginStep.CREDENTIALS
    otp_code: str = ""
    otp_expiry_minutes: Optional[int] = None
    method: Optional[str] = None
    error: Optional[str] = None
    busy: bool = False

    def enter_code_step(self, expiry_minutes: Optional[int], method: Optional[str]):
        """Move to the one-time-code step with a blank code."""
        self.step = LoginStep.ONE_TIME_CODE
        self.otp_code = ""
        self.otp_expiry_minutes = expiry_minutes
        self.method = method
        self.error = None

    def return_to_credentials(self):
        """Back to the credentials step, dropping any code entered so far."""
        self.step = LoginStep.CREDENTIALS
        self.otp_code = ""
        self.otp_expiry_minutes = None
        self.method = None
        self.error = None


@dataclass(frozen=True)
class LoginChallenge:
    """Server answer to the credential exchange."""
    mfa_required: bool = False
    expires_in_minutes: Optional[int] = None
    method: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "LoginChallenge":
        """Deserialize from the credential-exchange payload."""
        return cls(
            mfa_required=data.get("mfa_required") is True,
            expires_in_minutes=_as_int(data.get("expires_in")),
            method=data.get("method"),
        )


def _as_int(value: Any) -> Optional[int]:
    if isinstance(value, bool) or value is None:
        return None
    try:
        return int(value)
    except (TypeError, ValueError):
        return None


def looks_like_email(value: str) -> bool:
    return "@" in value and "." in value


def looks_like_username(value: str) -> bool:
    return USERNAME_PATTERN.fullmatch(value) is not None


def is_valid_identifier(value: str) -> bool:
    """Presentation heuristic only; the server decides what the identifier means."""
    return looks_like_email(value) or looks_like_username(value)


def is_valid_code(value: str) -> bool:
    """Exactly six ASCII digits, nothing else."""
    return OTP_PATTERN.fullmatch(value) is not None
