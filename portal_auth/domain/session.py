"""
Session Domain Model - Probe outcomes and the route-guard state machine.

The session itself lives on the server. The client only ever sees the
outcome of a probe, and that outcome is used for exactly one guard
evaluation.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from portal_auth.domain.identity import Identity


@dataclass(frozen=True)
class ProbeOutcome:
    """
    Result of asking the server "am I authenticated, and as whom?".

    Authenticated when an identity is present, unauthenticated otherwise.
    """
    identity: Optional[Identity] = None

    @classmethod
    def authenticated(cls, identity: Identity) -> "ProbeOutcome":
        return cls(identity=identity)

    @classmethod
    def unauthenticated(cls) -> "ProbeOutcome":
        return cls(identity=None)

    @property
    def is_authenticated(self) -> bool:
        return self.identity is not None


class GuardStatus(Enum):
    """Route guard lifecycle states."""
    CHECKING = "checking"
    AUTHORIZED = "authorized"
    DENIED = "denied"


class ViewKind(Enum):
    """What a guarded route should show."""
    LOADING = "loading"
    CHILDREN = "children"
    REDIRECT = "redirect"


@dataclass(frozen=True)
class GuardPolicy:
    """
    Decides route accessibility from a probe outcome.

    require_authenticated=True admits signed-in visitors (dashboard and
    friends); False admits anonymous visitors (login, register, forgot,
    reset). Visitors who are not admitted go to redirect_to.
    """
    require_authenticated: bool
    redirect_to: str

    def admits(self, outcome: ProbeOutcome) -> bool:
        return outcome.is_authenticated == self.require_authenticated


@dataclass(frozen=True)
class ProbeResolved:
    """Event: the session probe for this guard finished."""
    outcome: ProbeOutcome


@dataclass(frozen=True)
class GuardView:
    """Rendering decision for a guard."""
    kind: ViewKind
    redirect_to: Optional[str] = None
    replace_history: bool = False


class GuardMachine:
    """
    Pure route-guard state machine.

    Checking -> Authorized | Denied, driven by a single ProbeResolved
    event. Resolved states are final; later events are ignored.
    """

    def __init__(self, policy: GuardPolicy):
        self.policy = policy
        self.status = GuardStatus.CHECKING
        self.identity: Optional[Identity] = None

    def handle(self, event: ProbeResolved) -> GuardStatus:
        """Apply an event and return the resulting status."""
        if self.status != GuardStatus.CHECKING:
            return self.status

        self.identity = event.outcome.identity
        if self.policy.admits(event.outcome):
            self.status = GuardStatus.AUTHORIZED
        else:
            self.status = GuardStatus.DENIED
        return self.status

    def view(self) -> GuardView:
        """Current rendering decision."""
        if self.status == GuardStatus.AUTHORIZED:
            return GuardView(kind=ViewKind.CHILDREN)
        if self.status == GuardStatus.DENIED:
            return GuardView(
                kind=ViewKind.REDIRECT,
                redirect_to=self.policy.redirect_to,
                replace_history=True,
            )
        return GuardView(kind=ViewKind.LOADING)
