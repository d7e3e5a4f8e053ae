"""
History Navigator - In-memory route history.
"""

import logging
from typing import List, Optional

from portal_auth.ports.navigation_port import Navigator

logger = logging.getLogger(__name__)


class HistoryNavigator(Navigator):
    """
    Browser-like history stack kept in memory.

    Useful headless and in tests: ``entries`` shows exactly what the
    back button would walk through.
    """

    def __init__(self, start: str = "/"):
        self.entries: List[str] = [start]

    @property
    def current(self) -> str:
        return self.entries[-1]

    def navigate(self, path: str, replace: bool = False) -> None:
        """Push path, or overwrite the current entry when replace is set."""
        logger.debug("navigate %s -> %s (replace=%s)", self.current, path, replace)
        if replace:
            self.entries[-1] = path
        else:
            self.entries.append(path)

    def back(self) -> Optional[str]:
        """Pop one entry. Returns the new current path, or None at the start."""
        if len(self.entries) == 1:
            return None
        self.entries.pop()
        return self.current
