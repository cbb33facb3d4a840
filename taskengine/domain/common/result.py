from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, Optional, TypeVar

from taskengine.domain.common.errors import DomainError

T = TypeVar("T")


@dataclass(frozen=True)
class Outcome(Generic[T]):
    """
    Tagged result of a check chain: either a value or the first error hit.

    Engine functions return these instead of raising so the order of checks
    stays visible to callers. `unwrap()` converts back to exception flow.
    """

    value: Optional[T] = None
    error: Optional[DomainError] = None

    @classmethod
    def success(cls, value: T) -> "Outcome[T]":
        return cls(value=value)

    @classmethod
    def failure(cls, error: DomainError) -> "Outcome[T]":
        return cls(error=error)

    @property
    def ok(self) -> bool:
        return self.error is None

    def unwrap(self) -> T:
        if self.error is not None:
            raise self.error
        return self.value
