"""
User-visible messages and the notice type flows report them with.
"""

from dataclasses import dataclass
from enum import Enum

from portal_auth.domain.result import Failure

# Login
FILL_REQUIRED = "Please fill in all required fields."
INVALID_IDENTIFIER = "Enter a valid email or username."
INVALID_CODE_FORMAT = "Enter the 6-digit code."
SIGN_IN_FAILED = "Sign-in failed."
INVALID_CODE = "Invalid code."

# Recovery
INVALID_EMAIL = "Please enter a valid email."
RESET_LINK_SENT = "If this email exists, a reset link has been sent."
MISSING_TOKEN = "Missing token."
WEAK_PASSWORD = "Please enter a stronger password."
RESET_DONE = "Password reset successfully. Redirecting to sign in..."
RESET_FAILED = "Reset failed. The link may have expired."

# Credential change
FILL_ALL = "Please fill all fields."
PASSWORD_MISMATCH = "New password and confirmation do not match."
PASSWORD_TOO_SHORT = "New password looks too short."
CHANGE_REQUESTED = "Check your email to confirm the change."
REQUEST_FAILED = "Request failed"

# Registration
REGISTRATION_INCOMPLETE = "Please complete the form."
REGISTERED = "Account created. A verification email has been sent."
REGISTRATION_FAILED = "Registration failed"

NETWORK_ERROR = "Network error. Please try again."


class NoticeLevel(Enum):
    SUCCESS = "success"
    ERROR = "error"


@dataclass(frozen=True)
class Notice:
    """A message shown next to a form."""
    level: NoticeLevel
    text: str

    @classmethod
    def success(cls, text: str) -> "Notice":
        return cls(level=NoticeLevel.SUCCESS, text=text)

    @classmethod
    def error(cls, text: str) -> "Notice":
        return cls(level=NoticeLevel.ERROR, text=text)

    @property
    def is_error(self) -> bool:
        return self.level == NoticeLevel.ERROR


def describe_failure(failure: Failure, fallback: str) -> str:
    """Server message verbatim when there is one, a fixed text otherwise."""
    if failure.is_transport:
        return NETWORK_ERROR
    return failure.message or fallback
