"""
Result Types - Explicit outcomes for remote exchanges.

Gateway operations return ``Ok`` or ``Err`` instead of raising, so flows
branch on the value they receive.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Generic, Optional, TypeVar, Union

T = TypeVar("T")


class FailureKind(Enum):
    """Why an exchange did not succeed."""
    TRANSPORT = "transport"    # Network failure, timeout, unreadable response
    REJECTED = "rejected"      # Server answered with a non-success status


@dataclass(frozen=True)
class Failure:
    """
    Failure details carried by ``Err``.

    The message is whatever the server said, verbatim. It is None for
    transport failures and for rejections without a readable message.
    """
    kind: FailureKind
    message: Optional[str] = None
    status: Optional[int] = None

    @classmethod
    def transport(cls) -> "Failure":
        return cls(kind=FailureKind.TRANSPORT)

    @classmethod
    def rejected(cls, message: Optional[str] = None, status: Optional[int] = None) -> "Failure":
        return cls(kind=FailureKind.REJECTED, message=message, status=status)

    @property
    def is_transport(self) -> bool:
        return self.kind == FailureKind.TRANSPORT


@dataclass(frozen=True)
class Ok(Generic[T]):
    """Successful exchange."""
    value: T


@dataclass(frozen=True)
class Err:
    """Failed exchange."""
    failure: Failure


Result = Union[Ok[T], Err]

