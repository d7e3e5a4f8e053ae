"""
Portal Client - High-level SDK wiring guards and flows to the backend.

Simplifies the common page-level workflows for application developers.
"""

from typing import Callable, Optional, TypeVar

import httpx

from portal_auth.adapters.http_gateway import HttpAccountGateway
from portal_auth.adapters.memory_navigator import HistoryNavigator
from portal_auth.config import PortalConfig
from portal_auth.domain.session import GuardStatus, ProbeOutcome
from portal_auth.flows.credential_change import CredentialChangeFlow
from portal_auth.flows.guard import RouteGuard
from portal_auth.flows.login import LoginFlow
from portal_auth.flows.recovery import PasswordResetFlow, ResetLinkRequestFlow
from portal_auth.flows.registration import RegistrationFlow
from portal_auth.flows.signout import SignOutFlow
from portal_auth.ports.account_port import AccountGateway
from portal_auth.ports.navigation_port import Navigator
from portal_auth.ports.session_port import SessionOracle

F = TypeVar("F")


class PortalClient:
    """
    Page-level entry points for the account portal.

    Each ``open_*`` call mounts the right guard first and only builds
    the page's flow if the guard admits the visitor; otherwise the guard
    has already redirected and None is returned.

    Example:
        async with PortalClient.from_config() as portal:
            login = await portal.open_login()
            if login:
                await login.submit_credentials("alice", "s3cret-pass")
                await login.submit_code("123456")
    """

    def __init__(
        self,
        gateway: AccountGateway,
        oracle: Optional[SessionOracle] = None,
        navigator: Optional[Navigator] = None,
        config: Optional[PortalConfig] = None,
    ):
        """
        Initialize the client with adapters.

        Args:
            gateway: Account exchanges (required)
            oracle: Session probe (defaults to the gateway when it is one)
            navigator: Route changes (defaults to an in-memory history)
            config: Paths and delays (defaults to PortalConfig())
        """
        if oracle is None:
            if not isinstance(gateway, SessionOracle):
                raise TypeError("oracle is required when the gateway cannot probe sessions")
            oracle = gateway

        self._gateway = gateway
        self._oracle = oracle
        self.navigator = navigator or HistoryNavigator()
        self.config = config or PortalConfig()

    @classmethod
    def from_config(
        cls,
        config: Optional[PortalConfig] = None,
        navigator: Optional[Navigator] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> "PortalClient":
        """
        Build a client backed by HttpAccountGateway.

        Args:
            config: Settings (default: read from PORTAL_* environment)
            navigator: Route changes
            transport: Optional httpx transport (e.g. MockTransport in tests)
        """
        config = config or PortalConfig.from_env()
        gateway = HttpAccountGateway.from_config(config, transport=transport)
        return cls(gateway=gateway, navigator=navigator, config=config)

    async def aclose(self):
        if isinstance(self._gateway, HttpAccountGateway):
            await self._gateway.aclose()

    async def __aenter__(self) -> "PortalClient":
        return self

    async def __aexit__(self, exc_type, exc, tb):
        await self.aclose()

    async def whoami(self) -> ProbeOutcome:
        """Single session probe, no caching."""
        return await self._oracle.probe()

    def authenticated_guard(self) -> RouteGuard:
        return RouteGuard.authenticated_only(
            self._oracle, self.navigator, login_path=self.config.login_path
        )

    def anonymous_guard(self) -> RouteGuard:
        return RouteGuard.anonymous_only(
            self._oracle, self.navigator, landing_path=self.config.landing_path
        )

    async def open_dashboard(self) -> Optional[RouteGuard]:
        """Mount the landing page guard. The resolved guard carries the identity."""
        guard = self.authenticated_guard()
        await guard.mount()
        return guard if guard.status == GuardStatus.AUTHORIZED else None

    async def open_login(self) -> Optional[LoginFlow]:
        return await self._open(
            self.anonymous_guard(),
            lambda: LoginFlow(self._gateway, self.navigator, landing_path=self.config.landing_path),
        )

    async def open_registration(self) -> Optional[RegistrationFlow]:
        return await self._open(
            self.anonymous_guard(),
            lambda: RegistrationFlow(self._gateway, self.navigator),
        )

    async def open_forgot_password(self) -> Optional[ResetLinkRequestFlow]:
        return await self._open(
            self.anonymous_guard(),
            lambda: ResetLinkRequestFlow(self._gateway, self.navigator),
        )

    async def open_password_reset(self, url: str) -> Optional[PasswordResetFlow]:
        """
        Open the reset page for the link the visitor followed.

        Args:
            url: Link or query string carrying ``token``
        """
        return await self._open(
            self.anonymous_guard(),
            lambda: PasswordResetFlow.from_url(
                self._gateway,
                self.navigator,
                url,
                login_path=self.config.login_path,
                redirect_delay=self.config.redirect_delay,
            ),
        )

    async def open_credential_change(self) -> Optional[CredentialChangeFlow]:
        return await self._open(
            self.authenticated_guard(),
            lambda: CredentialChangeFlow(
                self._gateway,
                self.navigator,
                landing_path=self.config.landing_path,
                redirect_delay=self.config.redirect_delay,
            ),
        )

    async def sign_out(self):
        """Log out (best-effort) and go to the login page."""
        await SignOutFlow(self._gateway, self.navigator, login_path=self.config.login_path).sign_out()

    @staticmethod
    async def _open(guard: RouteGuard, build: Callable[[], F]) -> Optional[F]:
        await guard.mount()
        if guard.status != GuardStatus.AUTHORIZED:
            return None
        return build()
