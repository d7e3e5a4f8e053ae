"""
Login Flow - Two-step login state machine (credentials, then one-time code).

    CREDENTIALS --submit ok, mfa_required--> ONE_TIME_CODE
    CREDENTIALS --submit ok, no mfa-------> AUTHENTICATED (redirect)
    ONE_TIME_CODE --submit ok-------------> AUTHENTICATED (redirect)
    ONE_TIME_CODE --back------------------> CREDENTIALS

Failed submissions stay in the current step with ``attempt.error`` set.
The code's expiry is display-only; the server decides when it lapses.
A flow disposed while an exchange is in flight drops the late answer.
"""

import logging

from portal_auth.config import DEFAULT_LANDING_PATH
from portal_auth.domain.login import (
    LoginAttempt,
    LoginStep,
    is_valid_code,
    is_valid_identifier,
)
from portal_auth.domain.result import Err
from portal_auth.errors import FlowStateError
from portal_auth.flows import messages
from portal_auth.ports.account_port import AccountGateway
from portal_auth.ports.navigation_port import Navigator

logger = logging.getLogger(__name__)


class LoginFlow:
    """Drives one login page visit."""

    def __init__(
        self,
        gateway: AccountGateway,
        navigator: Navigator,
        landing_path: str = DEFAULT_LANDING_PATH,
    ):
        self._gateway = gateway
        self._navigator = navigator
        self._landing_path = landing_path
        self._alive = True
        self.attempt = LoginAttempt()

    @property
    def step(self) -> LoginStep:
        return self.attempt.step

    @property
    def disposed(self) -> bool:
        return not self._alive

    def dispose(self):
        """The login page was left; answers still in flight are ignored."""
        self._alive = False

    @property
    def error(self):
        return self.attempt.error

    async def submit_credentials(self, identifier: str, password: str) -> LoginStep:
        """
        Submit the first step.

        Args:
            identifier: Email or username as typed
            password: Password as typed

        Returns:
            The step after the submission
        """
        self._require_step(LoginStep.CREDENTIALS)
        if self.attempt.busy or not self._alive:
            logger.debug("Credential submission ignored (busy or disposed)")
            return self.attempt.step

        identifier = identifier.strip()
        self.attempt.identifier = identifier
        self.attempt.password = password
        self.attempt.error = None

        if not identifier or not password.strip():
            self.attempt.error = messages.FILL_REQUIRED
            return self.attempt.step
        if not is_valid_identifier(identifier):
            self.attempt.error = messages.INVALID_IDENTIFIER
            return self.attempt.step

        self.attempt.busy = True
        try:
            result = await self._gateway.login_with_credentials(identifier, password)
        finally:
            self.attempt.busy = False

        if not self._alive:
            logger.debug("Credential answer arrived after the page was left")
            return self.attempt.step
        if isinstance(result, Err):
            self.attempt.error = messages.describe_failure(result.failure, messages.SIGN_IN_FAILED)
            logger.info("Credential step failed (%s)", result.failure.kind.value)
            return self.attempt.step

        challenge = result.value
        if challenge.mfa_required:
            self.attempt.enter_code_step(challenge.expires_in_minutes, challenge.method)
            logger.debug("Credential step passed, code required")
            return self.attempt.step

        self._complete()
        return self.attempt.step

    async def submit_code(self, code: str) -> LoginStep:
        """
        Submit the one-time code for the identifier given in step one.

        Returns:
            The step after the submission
        """
        self._require_step(LoginStep.ONE_TIME_CODE)
        if self.attempt.busy or not self._alive:
            logger.debug("Code submission ignored (busy or disposed)")
            return self.attempt.step

        self.attempt.otp_code = code
        self.attempt.error = None

        if not is_valid_code(code):
            self.attempt.error = messages.INVALID_CODE_FORMAT
            return self.attempt.step

        self.attempt.busy = True
        try:
            result = await self._gateway.login_with_code(self.attempt.identifier, code)
        finally:
            self.attempt.busy = False

        if not self._alive:
            logger.debug("Code answer arrived after the page was left")
            return self.attempt.step
        if isinstance(result, Err):
            self.attempt.error = messages.describe_failure(result.failure, messages.INVALID_CODE)
            logger.info("Code step failed (%s)", result.failure.kind.value)
            return self.attempt.step

        self._complete()
        return self.attempt.step

    def back(self) -> LoginStep:
        """Leave the code step; the entered code is discarded."""
        self._require_step(LoginStep.ONE_TIME_CODE)
        if self.attempt.busy:
            return self.attempt.step
        self.attempt.return_to_credentials()
        return self.attempt.step

    def _complete(self):
        self.attempt.step = LoginStep.AUTHENTICATED
        self.attempt.otp_code = ""
        self.attempt.password = ""
        logger.info("Login completed")
        self._navigator.navigate(self._landing_path)

    def _require_step(self, step: LoginStep):
        if self.attempt.step != step:
            raise FlowStateError(
                f"expected login step {step.value}, currently {self.attempt.step.value}"
            )
