"""
Discriminated results returned by the calculators.

A calculator either succeeds with a value or fails with the input errors it
collected, in field declaration order. Callers branch on ``ok`` and pass the
failure along rather than catching exceptions.
"""

from dataclasses import dataclass
from typing import Generic, TypeVar, Union

from .inputs import InputError

T = TypeVar("T")


@dataclass(frozen=True)
class Success(Generic[T]):
    """A step that computed cleanly."""

    value: T

    @property
    def ok(self) -> bool:
        return True

    def unwrap(self) -> T:
        return self.value


@dataclass(frozen=True)
class Failure:
    """A step rejected because one or more fields did not validate."""

    errors: tuple[InputError, ...]

    def __post_init__(self):
        if not self.errors:
            raise ValueError("Failure needs at least one error")

    @classmethod
    def of(cls, *errors: InputError) -> "Failure":
        return cls(errors=tuple(errors))

    @property
    def ok(self) -> bool:
        return False

    @property
    def error(self) -> InputError:
        """The first offending field, which is the one to report."""
        return self.errors[0]

    @property
    def field(self):
        return self.error.field

    def unwrap(self):
        raise self.error


Outcome = Union[Success[T], Failure]
