"""
Route Guard - Renders a route subtree or redirects, based on one probe.
"""

import logging
from typing import Optional

from portal_auth.config import DEFAULT_LANDING_PATH, DEFAULT_LOGIN_PATH
from portal_auth.domain.identity import Identity
from portal_auth.domain.session import (
    GuardMachine,
    GuardPolicy,
    GuardStatus,
    GuardView,
    ProbeResolved,
)
from portal_auth.errors import FlowStateError
from portal_auth.ports.navigation_port import Navigator
from portal_auth.ports.session_port import SessionOracle

logger = logging.getLogger(__name__)


class RouteGuard:
    """
    One guard instance per mount of a guarded route.

    mount() probes the session once and feeds the outcome to a
    GuardMachine. Until it resolves, view() is LOADING. A denied visitor
    is redirected with history replaced. If unmount() ran while the probe
    was in flight, the stale outcome is dropped and nothing navigates.

    Example:
        guard = RouteGuard.authenticated_only(oracle, navigator)
        view = await guard.mount()
        if view.kind is ViewKind.CHILDREN:
            render_dashboard(guard.identity)
    """

    def __init__(
        self,
        oracle: SessionOracle,
        navigator: Navigator,
        policy: GuardPolicy,
    ):
        self._oracle = oracle
        self._navigator = navigator
        self._machine = GuardMachine(policy)
        self._mounted = False
        self._started = False

    @classmethod
    def authenticated_only(
        cls,
        oracle: SessionOracle,
        navigator: Navigator,
        login_path: str = DEFAULT_LOGIN_PATH,
    ) -> "RouteGuard":
        """Guard for pages that need a session; others go to login."""
        policy = GuardPolicy(require_authenticated=True, redirect_to=login_path)
        return cls(oracle, navigator, policy)

    @classmethod
    def anonymous_only(
        cls,
        oracle: SessionOracle,
        navigator: Navigator,
        landing_path: str = DEFAULT_LANDING_PATH,
    ) -> "RouteGuard":
        """Guard for login/register/forgot/reset; signed-in visitors go to landing."""
        policy = GuardPolicy(require_authenticated=False, redirect_to=landing_path)
        return cls(oracle, navigator, policy)

    @property
    def status(self) -> GuardStatus:
        return self._machine.status

    @property
    def identity(self) -> Optional[Identity]:
        return self._machine.identity

    @property
    def mounted(self) -> bool:
        return self._mounted

    def view(self) -> GuardView:
        return self._machine.view()

    async def mount(self) -> GuardView:
        """
        Probe the session and resolve the guard.

        Returns:
            The view after resolution, or LOADING if the guard was
            unmounted before the probe came back.

        Raises:
            FlowStateError: If this guard was already mounted once
        """
        if self._started:
            raise FlowStateError("a RouteGuard is mounted once; create a new one per navigation")
        self._started = True
        self._mounted = True

        outcome = await self._oracle.probe()

        if not self._mounted:
            logger.debug("Dropping probe result for unmounted guard")
            return self._machine.view()

        status = self._machine.handle(ProbeResolved(outcome))
        logger.debug(
            "Guard (require_authenticated=%s) resolved %s",
            self._machine.policy.require_authenticated,
            status.value,
        )

        view = self._machine.view()
        if status == GuardStatus.DENIED:
            self._navigator.navigate(view.redirect_to, replace=view.replace_history)
        return view

    def unmount(self):
        """The route was left; a late probe result must not navigate."""
        self._mounted = False
