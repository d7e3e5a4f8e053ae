"""
Sign-out Flow - Best-effort logout, then back to the login page.
"""

import logging

from portal_auth.config import DEFAULT_LOGIN_PATH
from portal_auth.domain.result import Err
from portal_auth.ports.account_port import AccountGateway
from portal_auth.ports.navigation_port import Navigator

logger = logging.getLogger(__name__)


class SignOutFlow:
    """Logout never fails from the visitor's point of view."""

    def __init__(
        self,
        gateway: AccountGateway,
        navigator: Navigator,
        login_path: str = DEFAULT_LOGIN_PATH,
    ):
        self._gateway = gateway
        self._navigator = navigator
        self._login_path = login_path

    async def sign_out(self):
        result = await self._gateway.logout()
        if isinstance(result, Err):
            logger.info("Logout call failed (%s); continuing signed out", result.failure.kind.value)
        self._navigator.navigate(self._login_path, replace=True)
