from dataclasses import dataclass
from enum import Enum
from typing import Callable, Generic, Optional, TypeVar

T = TypeVar("T")
U = TypeVar("U")


@dataclass
class Result(Generic[T]):
    """Outcome of an adapter call that is expected to fail now and then."""

    ok: bool
    value: Optional[T] = None
    error: Optional[str] = None
    error_code: Optional[str] = None

    @staticmethod
    def success(value: T) -> "Result[T]":
        return Result(ok=True, value=value)

    @staticmethod
    def failure(error: str, code: str = "unknown") -> "Result[T]":
        return Result(ok=False, error=error, error_code=code)

    def unwrap_or(self, default: T) -> T:
        return self.value if self.ok else default

    def map(self, fn: Callable[[T], U]) -> "Result[U]":
        if not self.ok:
            return Result(ok=False, error=self.error, error_code=self.error_code)
        return Result.success(fn(self.value))


class ResultSource(str, Enum):
    REMOTE = "remote"
    FALLBACK = "fallback"


@dataclass(frozen=True)
class Resolved(Generic[T]):
    """A value tagged with the path that produced it."""

    value: T
    source: ResultSource

    @staticmethod
    def remote(value: T) -> "Resolved[T]":
        return Resolved(value=value, source=ResultSource.REMOTE)

    @staticmethod
    def fallback(value: T) -> "Resolved[T]":
        return Resolved(value=value, source=ResultSource.FALLBACK)

    @property
    def is_fallback(self) -> bool:
        return self.source == ResultSource.FALLBACK
