"""
Domain Models - Pure client-side entities.

No network or UI dependencies. Domain logic only.
"""

from portal_auth.domain.identity import Identity
from portal_auth.domain.session import (
    ProbeOutcome,
    GuardStatus,
    GuardPolicy,
    GuardMachine,
    GuardView,
    ProbeResolved,
    ViewKind,
)
from portal_auth.domain.login import LoginAttempt, LoginChallenge, LoginStep
from portal_auth.domain.result import Ok, Err, Failure, FailureKind, Result

__all__ = [
    "Identity",
    "ProbeOutcome",
    "GuardStatus",
    "GuardPolicy",
    "GuardMachine",
    "GuardView",
    "ProbeResolved",
    "ViewKind",
    "LoginAttempt",
    "LoginChallenge",
    "LoginStep",
    "Ok",
    "Err",
    "Failure",
    "FailureKind",
    "Result",
]
