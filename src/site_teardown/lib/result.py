"""Result type for error handling without exceptions.

Finalizers and lib helpers return one of these; callers pattern match:

    match delete_certificate(ctx, arn, confirm):
        case Ok(outcome):
            ...
        case Err(error):
            ...
"""

from dataclasses import dataclass
from typing import Generic, TypeVar

T = TypeVar("T")
E = TypeVar("E")


@dataclass(frozen=True, slots=True)
class Ok(Generic[T]):
    """Success case containing a value."""

    value: T


@dataclass(frozen=True, slots=True)
class Err(Generic[E]):
    """Error case containing an error."""

    error: E


type Result[T, E] = Ok[T] | Err[E]
