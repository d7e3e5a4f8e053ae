"""
Account Port - Interface for account exchanges with the server.

Implementations:
- HttpAccountGateway: JSON over httpx
- InMemoryAccountServer: in-process fake (testing only)
"""

from abc import ABC, abstractmethod
from typing import Dict, Any
from portal_auth.domain.login import LoginChallenge
from portal_auth.domain.result import Result


class AccountGateway(ABC):
    """Port: Login, recovery, credential change and registration exchanges."""

    @abstractmethod
    async def login_with_credentials(
        self,
        identifier: str,
        password: str,
    ) -> Result[LoginChallenge]:
        """
        First login step.

        Args:
            identifier: Email or username, forwarded as given
            password: Password, forwarded verbatim

        Returns:
            Ok(LoginChallenge) telling whether a one-time code is required
        """
        pass

    @abstractmethod
    async def login_with_code(self, identifier: str, code: str) -> Result[Dict[str, Any]]:
        """
        Second login step.

        Args:
            identifier: Same identifier used in the first step
            code: Six-digit one-time code

        Returns:
            Ok on success (the server sets the session cookie)
        """
        pass

    @abstractmethod
    async def logout(self) -> Result[Dict[str, Any]]:
        """End the session. Callers treat this as best-effort."""
        pass

    @abstractmethod
    async def request_password_reset(self, email: str) -> Result[Dict[str, Any]]:
        """
        Ask for a reset link.

        The returned content is never inspected beyond Ok/Err.
        """
        pass

    @abstractmethod
    async def consume_password_reset(
        self,
        token: str,
        new_password: str,
    ) -> Result[Dict[str, Any]]:
        """
        Set a new password using a reset token.

        Args:
            token: Opaque token from the reset link, forwarded verbatim
            new_password: Replacement password
        """
        pass

    @abstractmethod
    async def change_password(
        self,
        old_password: str,
        new_password: str,
    ) -> Result[Dict[str, Any]]:
        """
        Change the password of the signed-in account.

        Requires an active session. The server confirms the change
        out-of-band (email) before it takes effect.
        """
        pass

    @abstractmethod
    async def register(
        self,
        username: str,
        email: str,
        password: str,
    ) -> Result[Dict[str, Any]]:
        """
        Create an account.

        Must not send the session cookie.
        """
        pass
