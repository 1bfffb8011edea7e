"""Tagged results returned by endpoints.

An endpoint reports a business failure as a normal return value
(:class:`Failure`) rather than by raising, so the transport can tell it
apart from a failure of the transport itself.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, Protocol, TypeVar, Union, runtime_checkable

T = TypeVar("T")


@runtime_checkable
class Failer(Protocol):
    """Anything that can say whether it represents a failed call."""

    def failed(self) -> Exception | None: ...


@dataclass(frozen=True)
class Success(Generic[T]):
    value: T

    def failed(self) -> Exception | None:
        return None


@dataclass(frozen=True)
class Failure:
    error: Exception

    def failed(self) -> Exception | None:
        return self.error


Result = Union[Success[T], Failure]
