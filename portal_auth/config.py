"""
Client configuration.

Values come from keyword arguments or from PORTAL_* environment variables:

    PORTAL_API_URL         Backend base URL (default http://localhost:8080)
    PORTAL_TIMEOUT         Request timeout in seconds (default 10)
    PORTAL_REDIRECT_DELAY  Delay before post-success redirects (default 1.2)
    PORTAL_LOGIN_PATH      Login entry point (default /login)
    PORTAL_LANDING_PATH    Authenticated landing page (default /dashboard)
"""

import os
from dataclasses import dataclass
from typing import Mapping, Optional

from portal_auth.errors import ConfigurationError

DEFAULT_API_URL = "http://localhost:8080"
DEFAULT_TIMEOUT = 10.0
DEFAULT_REDIRECT_DELAY = 1.2
DEFAULT_LOGIN_PATH = "/login"
DEFAULT_LANDING_PATH = "/dashboard"


@dataclass(frozen=True)
class PortalConfig:
    """Settings shared by the gateway, guards and flows."""
    api_url: str = DEFAULT_API_URL
    timeout: float = DEFAULT_TIMEOUT
    redirect_delay: float = DEFAULT_REDIRECT_DELAY
    login_path: str = DEFAULT_LOGIN_PATH
    landing_path: str = DEFAULT_LANDING_PATH

    def __post_init__(self):
        if self.timeout <= 0:
            raise ConfigurationError(f"timeout must be positive, got {self.timeout}")
        if self.redirect_delay < 0:
            raise ConfigurationError(
                f"redirect_delay must not be negative, got {self.redirect_delay}"
            )
        for name in ("login_path", "landing_path"):
            if not getattr(self, name).startswith("/"):
                raise ConfigurationError(f"{name} must start with '/'")

    @classmethod
    def from_env(
        cls,
        environ: Optional[Mapping[str, str]] = None,
        prefix: str = "PORTAL_",
    ) -> "PortalConfig":
        """
        Build config from environment variables.

        Args:
            environ: Mapping to read from (default os.environ)
            prefix: Variable name prefix

        Raises:
            ConfigurationError: If a numeric value cannot be parsed
        """
        env = os.environ if environ is None else environ

        def read(name: str, default: str) -> str:
            value = env.get(f"{prefix}{name}")
            return value if value else default

        return cls(
            api_url=read("API_URL", DEFAULT_API_URL).rstrip("/"),
            timeout=_as_float(prefix + "TIMEOUT", read("TIMEOUT", str(DEFAULT_TIMEOUT))),
            redirect_delay=_as_float(
                prefix + "REDIRECT_DELAY",
                read("REDIRECT_DELAY", str(DEFAULT_REDIRECT_DELAY)),
            ),
            login_path=read("LOGIN_PATH", DEFAULT_LOGIN_PATH),
            landing_path=read("LANDING_PATH", DEFAULT_LANDING_PATH),
        )


def _as_float(name: str, raw: str) -> float:
    try:
        return float(raw)
    except ValueError:
        raise ConfigurationError(f"{name} must be a number, got {raw!r}")
