"""
Navigation Port - Interface for moving between routes.

Implementations:
- HistoryNavigator: in-memory history stack (headless use, tests)
"""

from abc import ABC, abstractmethod


class Navigator(ABC):
    """Port: Change the current route."""

    @abstractmethod
    def navigate(self, path: str, replace: bool = False) -> None:
        """
        Go to a route.

        Args:
            path: Target route, e.g. "/login"
            replace: Replace the current history entry instead of pushing,
                so back-navigation skips the page being left
        """
        pass
