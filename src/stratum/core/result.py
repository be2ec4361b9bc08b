"""Tagged success/failure values for call sites that must not unwind."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, Optional, TypeVar

from stratum.core.exceptions import StratumError

T = TypeVar("T")


@dataclass(frozen=True, slots=True)
class Result(Generic[T]):
    """Outcome of a fallible operation.

    Attributes:
        success: Whether the operation succeeded
        value: The produced value when successful
        error: The error that would have been raised otherwise
    """

    success: bool
    value: Optional[T] = None
    error: Optional[StratumError] = None

    @classmethod
    def ok(cls, value: T) -> "Result[T]":
        return cls(success=True, value=value)

    @classmethod
    def fail(cls, error: StratumError) -> "Result[T]":
        return cls(success=False, error=error)

    def unwrap(self) -> T:
        """Return the value, raising the carried error on failure."""
        if not self.success:
            if self.error is None:
                raise StratumError("Result failed without an error")
            raise self.error
        return self.value  # type: ignore[return-value]

    def unwrap_or(self, default: T) -> T:
        return self.value if self.success else default  # type: ignore[return-value]


__all__ = ["Result"]
