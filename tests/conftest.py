"""
Shared fixtures.
"""

import asyncio

import pytest

from portal_auth.adapters.memory_navigator import HistoryNavigator
from portal_auth.adapters.memory_server import InMemoryAccountServer
from portal_auth.domain.session import ProbeOutcome
from portal_auth.ports.session_port import SessionOracle


class DeferredOracle(SessionOracle):
    """Oracle whose probe stays pending until the test resolves it."""

    def __init__(self):
        self.calls = 0
        self._future = None

    async def probe(self) -> ProbeOutcome:
        self.calls += 1
        self._future = asyncio.get_running_loop().create_future()
        return await self._future

    def resolve(self, outcome: ProbeOutcome):
        self._future.set_result(outcome)


@pytest.fixture
def server():
    """Fake backend with alice (MFA) and bob (no MFA)."""
    server = InMemoryAccountServer(otp_code="123456", otp_ttl_minutes=5)
    server.add_account("alice", "alice@example.com", "correct-horse-1")
    server.add_account("bob", "bob@example.com", "bobs-password", mfa_enabled=False)
    return server


@pytest.fixture
def navigator():
    return HistoryNavigator(start="/")


@pytest.fixture
def deferred_oracle():
    return DeferredOracle()
