"""
Type definitions for valchain.

`try_validate` reports its outcome as an `Ok` or an `Err` instead of raising.
The aliases below are shared by the error model and the validators.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Callable, Generic, NoReturn, TypeVar

if TYPE_CHECKING:
    from .errors import ValidationError

T = TypeVar("T")

# Type aliases
Step = Callable[[Any], Any]
Predicate = Callable[[Any], Any]
PathSegment = str | int
Path = tuple[PathSegment, ...]
MessageTemplate = str | Callable[[str], str]


@dataclass(frozen=True, slots=True)
class Ok(Generic[T]):
    """The validated (possibly transformed) value."""

    value: T

    def is_ok(self) -> bool:
        return True

    def is_err(self) -> bool:
        return False

    def unwrap(self) -> T:
        return self.value

    def value_or(self, default: Any) -> T:
        return self.value


@dataclass(frozen=True, slots=True)
class Err:
    """
    A rejected value. `message` and `path` read through to the error.

    Usage:
        result = User.try_validate(payload)
        if result.is_err():
            log(result.path, result.message)
    """

    error: ValidationError

    def is_ok(self) -> bool:
        return False

    def is_err(self) -> bool:
        return True

    @property
    def message(self) -> str:
        return self.error.message

    @property
    def path(self) -> list[PathSegment]:
        return self.error.path

    def unwrap(self) -> NoReturn:
        """Re-raise the rejection, with `validate`'s traceback."""
        raise self.error

    def value_or(self, default: Any) -> Any:
        return default
