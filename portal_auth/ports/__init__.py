"""
Ports - Interfaces for session probing, account exchanges and navigation.

Hexagonal architecture: These define WHAT we need, not HOW.
Adapters provide the HOW.
"""

from portal_auth.ports.session_port import SessionOracle
from portal_auth.ports.account_port import AccountGateway
from portal_auth.ports.navigation_port import Navigator

__all__ = [
    "SessionOracle",
    "AccountGateway",
    "Navigator",
]
