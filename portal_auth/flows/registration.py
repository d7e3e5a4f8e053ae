"""
Registration Flow - Create an account from the public sign-up form.
"""

import logging
import re
from dataclasses import dataclass
from typing import Optional

from portal_auth.domain.result import Err
from portal_auth.flows import messages
from portal_auth.flows.base import FormFlow
from portal_auth.flows.messages import Notice
from portal_auth.ports.account_port import AccountGateway
from portal_auth.ports.navigation_port import Navigator

logger = logging.getLogger(__name__)

EMAIL_PATTERN = re.compile(r"[^\s@]+@[^\s@]+\.[^\s@]+")


@dataclass
class RegistrationForm:
    username: str = ""
    email: str = ""
    password: str = ""
    confirm: str = ""

    def is_complete(self) -> bool:
        """Basic checks only; the server enforces the password policy."""
        return bool(
            self.username.strip()
            and EMAIL_PATTERN.fullmatch(self.email)
            and self.password
            and self.confirm
            and self.password == self.confirm
        )


class RegistrationFlow(FormFlow):
    """Sign-up form. The form is cleared after a successful registration."""

    def __init__(self, gateway: AccountGateway, navigator: Navigator):
        super().__init__(navigator)
        self._gateway = gateway
        self.form = RegistrationForm()

    async def submit(self, username: str, email: str, password: str, confirm: str) -> Optional[Notice]:
        if not self._begin():
            return None

        try:
            self.form = RegistrationForm(username, email, password, confirm)
            if not self.form.is_complete():
                self.notice = Notice.error(messages.REGISTRATION_INCOMPLETE)
                return self.notice

            result = await self._gateway.register(
                self.form.username.strip(),
                self.form.email.strip(),
                self.form.password,
            )
            if isinstance(result, Err):
                logger.info("Registration rejected (%s)", result.failure.kind.value)
                self.notice = Notice.error(
                    messages.describe_failure(result.failure, messages.REGISTRATION_FAILED)
                )
                return self.notice

            self.form = RegistrationForm()
            self.notice = Notice.success(messages.REGISTERED)
            return self.notice
        finally:
            self._end()
