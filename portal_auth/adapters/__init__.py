"""
Adapters - Implementations of ports.

Session & Accounts:
- HttpAccountGateway: httpx client for the account backend
- InMemoryAccountServer: In-process fake backend (testing)

Navigation:
- HistoryNavigator: In-memory history stack
"""

from portal_auth.adapters.http_gateway import HttpAccountGateway
from portal_auth.adapters.memory_server import InMemoryAccountServer, Account
from portal_auth.adapters.memory_navigator import HistoryNavigator

__all__ = [
    "HttpAccountGateway",
    "InMemoryAccountServer",
    "Account",
    "HistoryNavigator",
]
