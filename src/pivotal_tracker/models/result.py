"""Result types returned by every API operation."""

from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Generic, Literal, TypeVar, Union

T = TypeVar("T")

FALLBACK_ERROR = "Request failed without an error message"


@dataclass(frozen=True)
class Confirmation:
    """Confirmation message returned by a delete."""

    message: str | None = None


@dataclass(frozen=True)
class Success(Generic[T]):
    """Successful operation carrying the response payload."""

    value: T
    success: Literal[True] = field(default=True, init=False)

    @property
    def errors(self) -> tuple[str, ...]:
        """Always empty for a success."""
        return ()


@dataclass(frozen=True)
class Failure:
    """Failed operation carrying the service's error messages."""

    errors: tuple[str, ...] = (FALLBACK_ERROR,)
    success: Literal[False] = field(default=False, init=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "errors", tuple(self.errors))

    @classmethod
    def from_errors(cls, errors: Sequence[str] | str | None) -> "Failure":
        """Build a Failure, falling back to a generic message when empty."""
        if isinstance(errors, str):
            errors = [errors]
        messages = tuple(str(e) for e in errors or () if e is not None and str(e).strip())
        return cls(messages or (FALLBACK_ERROR,))

    @property
    def error_count(self) -> int:
        """Number of error messages."""
        return len(self.errors)


Result = Union[Success[T], Failure]
