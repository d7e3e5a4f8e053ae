"""
Credential Change Flow - Change password while signed in.
"""

import logging
from typing import Optional

from portal_auth.config import DEFAULT_LANDING_PATH, DEFAULT_REDIRECT_DELAY
from portal_auth.domain.result import Err
from portal_auth.flows import messages
from portal_auth.flows.base import FormFlow
from portal_auth.flows.messages import Notice
from portal_auth.ports.account_port import AccountGateway
from portal_auth.ports.navigation_port import Navigator

logger = logging.getLogger(__name__)

MIN_PASSWORD_LENGTH = 10


def check_new_password(old: str, new: str, confirm: str) -> Optional[str]:
    """
    Client-side gate before the change request is sent.

    Not a substitute for the server's password policy.

    Returns:
        Error message, or None if the request may be sent
    """
    if not old or not new or not confirm:
        return messages.FILL_ALL
    if new != confirm:
        return messages.PASSWORD_MISMATCH
    if len(new) < MIN_PASSWORD_LENGTH:
        return messages.PASSWORD_TOO_SHORT
    return None


class CredentialChangeFlow(FormFlow):
    """
    Change-password form behind the authenticated-only guard.

    On success the server emails a confirmation link; the change only
    takes effect once it is followed. The flow reports the server's
    answer and returns to the landing page after a short delay.
    """

    def __init__(
        self,
        gateway: AccountGateway,
        navigator: Navigator,
        landing_path: str = DEFAULT_LANDING_PATH,
        redirect_delay: float = DEFAULT_REDIRECT_DELAY,
    ):
        super().__init__(navigator)
        self._gateway = gateway
        self._landing_path = landing_path
        self._redirect_delay = redirect_delay

    async def submit(self, old_password: str, new_password: str, confirm_password: str) -> Optional[Notice]:
        if not self._begin():
            return None

        try:
            problem = check_new_password(old_password, new_password, confirm_password)
            if problem:
                self.notice = Notice.error(problem)
                return self.notice

            result = await self._gateway.change_password(old_password, new_password)
            if self.disposed:
                logger.debug("Password change answer arrived after the page was left")
                return None
            if isinstance(result, Err):
                logger.info("Password change rejected (%s)", result.failure.kind.value)
                self.notice = Notice.error(
                    messages.describe_failure(result.failure, messages.REQUEST_FAILED)
                )
                return self.notice

            self.notice = Notice.success(result.value.get("message") or messages.CHANGE_REQUESTED)
            self._schedule_redirect(self._landing_path, self._redirect_delay)
            return self.notice
        finally:
            self._end()

    def cancel(self):
        """Back to the landing page without submitting."""
        self.dispose()
        self._navigator.navigate(self._landing_path)
