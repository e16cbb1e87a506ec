from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Generic, Optional, Type, TypeVar

from .errors import ConfigError

__all__ = ["DataResult"]

T = TypeVar("T")
R = TypeVar("R")


@dataclass(frozen=True)
class DataResult(Generic[T]):
    """Outcome of a codec call: a value, or a diagnostic message.

    Expected failures travel through this object instead of exceptions.
    ``error_type`` records which :class:`ConfigError` subclass the message
    should become once it reaches a raising boundary.
    """

    value: Optional[T] = None
    message: Optional[str] = None
    error_type: Type[ConfigError] = ConfigError

    @classmethod
    def success(cls, value: T) -> "DataResult[T]":
        return cls(value=value)

    @classmethod
    def error(
        cls, message: str, error_type: Type[ConfigError] = ConfigError
    ) -> "DataResult[Any]":
        return cls(message=message, error_type=error_type)

    @property
    def is_success(self) -> bool:
        return self.message is None

    def map(self, fn: Callable[[T], R]) -> "DataResult[R]":
        if not self.is_success:
            return self  # type: ignore[return-value]
        return DataResult.success(fn(self.value))  # type: ignore[arg-type]

    def flat_map(self, fn: Callable[[T], "DataResult[R]"]) -> "DataResult[R]":
        if not self.is_success:
            return self  # type: ignore[return-value]
        return fn(self.value)  # type: ignore[arg-type]

    def get_or_raise(self, prefix: str | None = None) -> T:
        """Return the value or raise ``error_type`` with the diagnostic."""
        if self.is_success:
            return self.value  # type: ignore[return-value]
        message = f"{prefix}: {self.message}" if prefix else self.message
        raise self.error_type(message)
