"""
Shared plumbing for form flows: busy flag, notice, delayed redirect.
"""

import asyncio
import logging
from typing import Optional

from portal_auth.flows.messages import Notice
from portal_auth.ports.navigation_port import Navigator

logger = logging.getLogger(__name__)


class FormFlow:
    """
    Base for single-form flows.

    One submission at a time: ``busy`` is set while an exchange is in
    flight and a second submission is ignored rather than queued.

    Once ``dispose()`` has been called the flow is dead: an exchange
    that resolves afterwards never schedules a redirect.
    """

    def __init__(self, navigator: Navigator):
        self._navigator = navigator
        self._disposed = False
        self.busy = False
        self.notice: Optional[Notice] = None
        self.pending_redirect: Optional["asyncio.Task[None]"] = None

    @property
    def disposed(self) -> bool:
        return self._disposed

    def _begin(self) -> bool:
        """Claim the flow for a submission. False if busy or disposed."""
        if self._disposed:
            logger.debug("%s: submission ignored after dispose", type(self).__name__)
            return False
        if self.busy:
            logger.debug("%s: submission ignored while busy", type(self).__name__)
            return False
        self.busy = True
        self.notice = None
        return True

    def _end(self):
        self.busy = False

    def _schedule_redirect(self, path: str, delay: float):
        """Navigate to path after delay, unless disposed first."""
        if self._disposed:
            logger.debug("%s: redirect to %s dropped after dispose", type(self).__name__, path)
            return
        if self.pending_redirect is not None:
            self.pending_redirect.cancel()
        self.pending_redirect = asyncio.ensure_future(self._redirect_later(path, delay))
        self.pending_redirect.add_done_callback(self._redirect_done)

    async def _redirect_later(self, path: str, delay: float):
        await asyncio.sleep(delay)
        self._navigator.navigate(path)

    def _redirect_done(self, task: "asyncio.Task[None]"):
        if task.cancelled():
            return
        error = task.exception()
        if error is not None:
            logger.error(
                "%s: delayed redirect failed", type(self).__name__, exc_info=error,
            )

    def dispose(self):
        """Drop any scheduled redirect and ignore late answers (the page was left)."""
        self._disposed = True
        if self.pending_redirect is not None and not self.pending_redirect.done():
            self.pending_redirect.cancel()
        self.pending_redirect = None
