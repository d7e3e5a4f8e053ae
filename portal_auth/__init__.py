"""
Portal Auth - Client-side session & authentication orchestration

Hexagonal architecture for the account portal's browser-side logic:
session probing, route guards, two-step login, password recovery and
password change. The server owns every credential; this package only
orchestrates around it.

Usage:
    from portal_auth import PortalClient, PortalConfig

    async with PortalClient.from_config(PortalConfig(api_url="http://localhost:8080")) as portal:
        # Gate a page
        dashboard = await portal.open_dashboard()

        # Log in
        login = await portal.open_login()
        await login.submit_credentials("alice@example.com", "password")
        await login.submit_code("123456")
"""

__version__ = "0.1.0"

from portal_auth.sdk.client import PortalClient
from portal_auth.config import PortalConfig
from portal_auth.domain.identity import Identity
from portal_auth.domain.session import ProbeOutcome

__all__ = [
    "PortalClient",
    "PortalConfig",
    "Identity",
    "ProbeOutcome",
]
