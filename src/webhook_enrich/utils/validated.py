"""Validation results that accumulate error messages instead of raising."""

from dataclasses import dataclass
from typing import Generic, Tuple, TypeVar, Union

T = TypeVar("T")


@dataclass(frozen=True)
class Valid(Generic[T]):
    value: T


@dataclass(frozen=True)
class Invalid:
    """One or more error messages, in the order they were produced."""

    errors: Tuple[str, ...]

    def __post_init__(self) -> None:
        if not self.errors:
            raise ValueError("Invalid requires at least one error message")


Validated = Union[Valid[T], Invalid]


def invalid(*errors: str) -> Invalid:
    return Invalid(tuple(errors))
