"""
Exceptions for programmer and configuration mistakes.

Runtime outcomes of remote exchanges are Result values, not exceptions.
"""


class PortalAuthError(Exception):
    """Base error for portal_auth."""


class ConfigurationError(PortalAuthError):
    """Invalid configuration value."""


class FlowStateError(PortalAuthError):
    """Operation not valid in the flow's current state."""
