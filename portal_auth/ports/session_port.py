"""
Session Port - Interface for the session oracle.

Implementations:
- HttpAccountGateway: probes GET /api/me over httpx
- InMemoryAccountServer: in-process fake (testing only)
"""

from abc import ABC, abstractmethod
from portal_auth.domain.session import ProbeOutcome


class SessionOracle(ABC):
    """Port: Ask the server who the current visitor is."""

    @abstractmethod
    async def probe(self) -> ProbeOutcome:
        """
        Probe the current session.

        Relies on the transport credential (cookie) attached by the
        network layer. The credential is never passed in or returned.

        Returns:
            Authenticated outcome with identity, or unauthenticated.
            Any failure, including network errors, is unauthenticated.
            Implementations must not raise and must not retry.
        """
        pass
