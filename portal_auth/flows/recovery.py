"""
Password Recovery - Request a reset link, then consume the emailed token.

Both exchanges are independent of the login state machine. The link
request never reveals whether the account exists: success, rejection
and network failure all end in the same notice.
"""

import logging
from typing import Optional
from urllib.parse import parse_qs, urlsplit

from portal_auth.config import DEFAULT_LOGIN_PATH, DEFAULT_REDIRECT_DELAY
from portal_auth.domain.result import Err
from portal_auth.flows import messages
from portal_auth.flows.base import FormFlow
from portal_auth.flows.messages import Notice
from portal_auth.ports.account_port import AccountGateway
from portal_auth.ports.navigation_port import Navigator

logger = logging.getLogger(__name__)


def token_from_url(url: str) -> Optional[str]:
    """
    Extract the reset token from a link or a bare query string.

    Returns:
        The first non-empty ``token`` parameter, or None
    """
    query = urlsplit(url).query if "?" in url or "://" in url else url.lstrip("?")
    for value in parse_qs(query).get("token", []):
        if value:
            return value
    return None


class ResetLinkRequestFlow(FormFlow):
    """Forgot-password form."""

    def __init__(self, gateway: AccountGateway, navigator: Navigator):
        super().__init__(navigator)
        self._gateway = gateway

    async def submit(self, email: str) -> Optional[Notice]:
        """
        Ask the server to email a reset link.

        Returns:
            The notice to display (None if ignored while busy)
        """
        if not self._begin():
            return None

        try:
            email = email.strip()
            if not email or "@" not in email:
                self.notice = Notice.error(messages.INVALID_EMAIL)
                return self.notice

            result = await self._gateway.request_password_reset(email)
            if isinstance(result, Err):
                logger.info("Reset link request failed (%s)", result.failure.kind.value)

            self.notice = Notice.success(messages.RESET_LINK_SENT)
            return self.notice
        finally:
            self._end()


class PasswordResetFlow(FormFlow):
    """
    Set-a-new-password form opened from the emailed link.

    Without a token the flow is terminal from the start: it shows an
    error and never contacts the server.
    """

    def __init__(
        self,
        gateway: AccountGateway,
        navigator: Navigator,
        token: Optional[str],
        login_path: str = DEFAULT_LOGIN_PATH,
        redirect_delay: float = DEFAULT_REDIRECT_DELAY,
    ):
        super().__init__(navigator)
        self._gateway = gateway
        self._token = token or None
        self._login_path = login_path
        self._redirect_delay = redirect_delay
        self.completed = False

        if self._token is None:
            self.notice = Notice.error(messages.MISSING_TOKEN)

    @classmethod
    def from_url(
        cls,
        gateway: AccountGateway,
        navigator: Navigator,
        url: str,
        **kwargs,
    ) -> "PasswordResetFlow":
        """Build the flow from the reset link the visitor landed on."""
        return cls(gateway, navigator, token_from_url(url), **kwargs)

    @property
    def has_token(self) -> bool:
        return self._token is not None

    @property
    def terminal(self) -> bool:
        """No token: nothing this form can do."""
        return self._token is None

    async def submit(self, new_password: str) -> Optional[Notice]:
        """
        Send the token and new password.

        Returns:
            The notice to display (None if ignored while busy, done or disposed)
        """
        if self.terminal:
            return self.notice
        if self.completed or not self._begin():
            return None

        try:
            if not new_password:
                self.notice = Notice.error(messages.WEAK_PASSWORD)
                return self.notice

            result = await self._gateway.consume_password_reset(self._token, new_password)
            if self.disposed:
                logger.debug("Reset answer arrived after the page was left")
                return None
            if isinstance(result, Err):
                self.notice = Notice.error(
                    messages.describe_failure(result.failure, messages.RESET_FAILED)
                )
                return self.notice

            self.completed = True
            self.notice = Notice.success(messages.RESET_DONE)
            self._schedule_redirect(self._login_path, self._redirect_delay)
            return self.notice
        finally:
            self._end()
