"""
In-Memory Account Server - Fake backend for tests and demos.
"""

import secrets
from dataclasses import dataclass
from typing import Dict, Any, List, Optional, Tuple

from portal_auth.domain.identity import Identity
from portal_auth.domain.login import LoginChallenge
from portal_auth.domain.result import Err, Failure, Ok, Result
from portal_auth.domain.session import ProbeOutcome
from portal_auth.ports.account_port import AccountGateway
from portal_auth.ports.session_port import SessionOracle


@dataclass
class Account:
    """Stored account (plaintext password, this is a fake)."""
    user_id: str
    username: str
    email: str
    password: str
    mfa_enabled: bool = True

    def identity(self) -> Identity:
        return Identity(user_id=self.user_id, username=self.username, email=self.email)


class InMemoryAccountServer(SessionOracle, AccountGateway):
    """
    In-process stand-in for the account backend.

    WARNING: Only for testing. Mimics the server's observable behavior:
    one active session (the "cookie"), email OTP with a fixed code,
    single-use reset tokens, and a generic answer to reset requests.

    Every call is recorded in ``calls`` so tests can assert that
    validation failures never reach the server. Set ``offline`` to make
    every call behave like a network failure.
    """

    def __init__(self, otp_code: str = "123456", otp_ttl_minutes: int = 10):
        """
        Initialize the fake server.

        Args:
            otp_code: Code accepted by the second login step
            otp_ttl_minutes: Value returned as expires_in
        """
        self.otp_code = otp_code
        self.otp_ttl_minutes = otp_ttl_minutes
        self.offline = False
        self.calls: List[Tuple[str, Dict[str, Any]]] = []
        self.sent_reset_links: List[str] = []
        self.pending_password_changes: Dict[str, str] = {}

        self._accounts: Dict[str, Account] = {}
        self._session: Optional[Account] = None
        self._challenge: Optional[Account] = None
        self._reset_tokens: Dict[str, str] = {}

    def add_account(
        self,
        username: str,
        email: str,
        password: str,
        mfa_enabled: bool = True,
    ) -> Account:
        """Seed an account."""
        account = Account(
            user_id=str(len(self._accounts) + 1),
            username=username,
            email=email,
            password=password,
            mfa_enabled=mfa_enabled,
        )
        self._accounts[account.user_id] = account
        return account

    def sign_in(self, account: Account):
        """Start a session directly, as if the cookie were already set."""
        self._session = account

    def issue_reset_token(self, email: str) -> str:
        """Create a reset token for an account, as the emailed link would carry."""
        account = self.find_account(email)
        if account is None:
            raise KeyError(email)
        token = secrets.token_urlsafe(32)
        self._reset_tokens[token] = account.user_id
        return token

    @property
    def signed_in(self) -> Optional[Account]:
        return self._session

    def calls_to(self, operation: str) -> List[Dict[str, Any]]:
        """Recorded payloads for one operation."""
        return [payload for name, payload in self.calls if name == operation]

    async def probe(self) -> ProbeOutcome:
        self.calls.append(("probe", {}))
        if self.offline or self._session is None:
            return ProbeOutcome.unauthenticated()
        return ProbeOutcome.authenticated(self._session.identity())

    async def login_with_credentials(
        self,
        identifier: str,
        password: str,
    ) -> Result[LoginChallenge]:
        self.calls.append(("login_with_credentials", {"id": identifier}))
        if self.offline:
            return Err(Failure.transport())

        account = self.find_account(identifier)
        if account is None or account.password != password:
            return Err(Failure.rejected("invalid credentials", status=401))

        if not account.mfa_enabled:
            self._session = account
            return Ok(LoginChallenge(mfa_required=False))

        self._challenge = account
        return Ok(LoginChallenge(
            mfa_required=True,
            expires_in_minutes=self.otp_ttl_minutes,
            method="email_otp",
        ))

    async def login_with_code(self, identifier: str, code: str) -> Result[Dict[str, Any]]:
        self.calls.append(("login_with_code", {"id": identifier, "code": code}))
        if self.offline:
            return Err(Failure.transport())

        account = self.find_account(identifier)
        if account is None or self._challenge is not account or code != self.otp_code:
            return Err(Failure.rejected("invalid code", status=401))

        self._challenge = None
        self._session = account
        return Ok({"message": "ok"})

    async def logout(self) -> Result[Dict[str, Any]]:
        self.calls.append(("logout", {}))
        if self.offline:
            return Err(Failure.transport())
        self._session = None
        return Ok({"message": "logged out"})

    async def request_password_reset(self, email: str) -> Result[Dict[str, Any]]:
        self.calls.append(("request_password_reset", {"email": email}))
        if self.offline:
            return Err(Failure.transport())

        account = self.find_account(email)
        if account is not None:
            self.sent_reset_links.append(self.issue_reset_token(account.email))
        return Ok({"message": "If this email exists, a reset link has been sent."})

    async def consume_password_reset(
        self,
        token: str,
        new_password: str,
    ) -> Result[Dict[str, Any]]:
        self.calls.append(("consume_password_reset", {"token": token}))
        if self.offline:
            return Err(Failure.transport())

        user_id = self._reset_tokens.pop(token, None)
        if user_id is None:
            return Err(Failure.rejected("invalid token", status=400))

        self._accounts[user_id].password = new_password
        return Ok({"message": "Password reset successfully"})

    async def change_password(
        self,
        old_password: str,
        new_password: str,
    ) -> Result[Dict[str, Any]]:
        self.calls.append(("change_password", {}))
        if self.offline:
            return Err(Failure.transport())
        if self._session is None:
            return Err(Failure.rejected("unauthorized", status=401))
        if self._session.password != old_password:
            return Err(Failure.rejected("current password is incorrect", status=400))

        # Applied only after the emailed confirmation
        self.pending_password_changes[self._session.user_id] = new_password
        return Ok({"message": "Check your email to confirm the change."})

    async def register(
        self,
        username: str,
        email: str,
        password: str,
    ) -> Result[Dict[str, Any]]:
        self.calls.append(("register", {"username": username, "email": email}))
        if self.offline:
            return Err(Failure.transport())
        if self.find_account(username) or self.find_account(email):
            return Err(Failure.rejected("username or email already in use", status=409))

        self.add_account(username=username, email=email, password=password)
        return Ok({"message": "registered"})

    def find_account(self, identifier: str) -> Optional[Account]:
        """Look up an account by email or username."""
        for account in self._accounts.values():
            if identifier in (account.email, account.username):
                return account
        return None
