"""Success/failure result type for best-effort lookups."""

from dataclasses import dataclass
from typing import Any, Generic, TypeVar

T = TypeVar("T")
E = TypeVar("E")

_UNSET: Any = object()


@dataclass(frozen=True)
class Result(Generic[T, E]):
    """Either a value (``Result.ok``) or an error (``Result.err``)."""

    _value: Any = _UNSET
    _error: Any = _UNSET

    @classmethod
    def ok(cls, value: T) -> "Result[T, E]":
        return cls(_value=value)

    @classmethod
    def err(cls, error: E) -> "Result[T, E]":
        return cls(_error=error)

    @property
    def is_ok(self) -> bool:
        return self._error is _UNSET

    @property
    def is_err(self) -> bool:
        return not self.is_ok

    @property
    def value(self) -> T:
        if self.is_err:
            raise ValueError("Called value on Result.err")
        return self._value

    @property
    def error(self) -> E:
        if self.is_ok:
            raise ValueError("Called error on Result.ok")
        return self._error

    def unwrap_or(self, default: T) -> T:
        """Return the value, or ``default`` for an error result."""
        return self._value if self.is_ok else default
