"""
Identity Domain Model - Who the server says the current visitor is.
"""

from dataclasses import dataclass
from typing import Dict, Any, Optional


@dataclass(frozen=True)
class Identity:
    """
    Identity entity - the account behind the current session.

    Domain rules:
    - Derived from the server on every probe, never persisted client-side
    - user_id and username are always present
    - email is optional (the probe endpoint may omit it)
    """
    user_id: str
    username: str
    email: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        """Serialize to dict."""
        return {
            "user_id": self.user_id,
            "username": self.username,
            "email": self.email,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Identity":
        """
        Deserialize from a probe payload.

        Accepts either ``user_id`` or ``id`` as the account key.

        Raises:
            ValueError: If the payload has no account key or username
        """
        user_id = data.get("user_id", data.get("id"))
        username = data.get("username")
        if user_id is None or not username:
            raise ValueError("identity payload requires user_id and username")

        return cls(
            user_id=str(user_id),
            username=str(username),
            email=data.get("email") or None,
        )
