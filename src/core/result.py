from dataclasses import dataclass
from typing import Generic, TypeVar

from fastapi import HTTPException

from core.errors import ServiceError

T = TypeVar("T")


@dataclass(frozen=True)
class Result(Generic[T]):
    """Either a value or a ServiceError, returned across service boundaries."""

    value: T | None = None
    error: ServiceError | None = None

    @classmethod
    def ok(cls, value: T) -> "Result[T]":
        return cls(value=value)

    @classmethod
    def fail(cls, error: ServiceError) -> "Result[T]":
        return cls(error=error)

    @property
    def is_ok(self) -> bool:
        return self.error is None

    def unwrap(self) -> T:
        """Return the value, or raise the matching HTTPException."""
        if self.error is not None:
            raise HTTPException(status_code=self.error.status_code, detail=self.error.message)
        return self.value
