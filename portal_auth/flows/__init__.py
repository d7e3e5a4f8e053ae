"""
Flows - Guards and form state machines built on the ports.
"""

from portal_auth.flows.guard import RouteGuard
from portal_auth.flows.login import LoginFlow
from portal_auth.flows.recovery import PasswordResetFlow, ResetLinkRequestFlow, token_from_url
from portal_auth.flows.credential_change import CredentialChangeFlow
from portal_auth.flows.registration import RegistrationFlow
from portal_auth.flows.signout import SignOutFlow
from portal_auth.flows.messages import Notice, NoticeLevel

__all__ = [
    "RouteGuard",
    "LoginFlow",
    "PasswordResetFlow",
    "ResetLinkRequestFlow",
    "token_from_url",
    "CredentialChangeFlow",
    "RegistrationFlow",
    "SignOutFlow",
    "Notice",
    "NoticeLevel",
]
