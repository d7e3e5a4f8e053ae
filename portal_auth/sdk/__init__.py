from portal_auth.sdk.client import PortalClient

__all__ = ["PortalClient"]
