"""
Result type for explicit error reporting.

Every public fastaseek operation returns a Result (similar to Rust's
Result<T, E>) instead of raising, so callers decide whether to retry
(e.g. re-open) or abort.

Usage:
    >>> result = session.get_sequence(0, 10, 19)
    >>> if result.is_ok():
    ...     region = result.unwrap()
    >>> else:
    ...     error = result.unwrap_err()

    >>> match session.get_length(0):
    ...     case Ok(length):
    ...         print(f"{length} bp")
    ...     case Err(error):
    ...         print(f"{error.kind}: {error}")
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import TypeVar, Generic, Callable, Union, Any

from fastaseek.core.errors import FastaError, IoError

T = TypeVar("T")  # Success type
E = TypeVar("E")  # Error type
U = TypeVar("U")  # Transformed type


@dataclass(frozen=True, slots=True)
class Ok(Generic[T]):
    """Successful result holding a value."""

    value: T

    def is_ok(self) -> bool:
        return True

    def is_err(self) -> bool:
        return False

    def unwrap(self) -> T:
        return self.value

    def unwrap_or(self, default: T) -> T:
        return self.value

    def unwrap_err(self) -> Any:
        raise ValueError("Called unwrap_err on Ok value")

    def map(self, fn: Callable[[T], U]) -> Ok[U]:
        return Ok(fn(self.value))

    def map_err(self, fn: Callable[[Any], Any]) -> Ok[T]:
        return self

    def and_then(self, fn: Callable[[T], Result[U, Any]]) -> Result[U, Any]:
        """Chains another Result-returning function."""
        return fn(self.value)

    def __repr__(self) -> str:
        return f"Ok({self.value!r})"


@dataclass(frozen=True, slots=True)
class Err(Generic[E]):
    """Failed result holding an error (normally a FastaError)."""

    error: E

    def is_ok(self) -> bool:
        return False

    def is_err(self) -> bool:
        return True

    def unwrap(self) -> Any:
        """Raises ValueError carrying the error message."""
        raise ValueError(f"Called unwrap on Err: {self.error}")

    def unwrap_or(self, default: T) -> T:
        return default

    def unwrap_err(self) -> E:
        return self.error

    def map(self, fn: Callable[[Any], Any]) -> Err[E]:
        return self

    def map_err(self, fn: Callable[[E], U]) -> Err[U]:
        return Err(fn(self.error))

    def and_then(self, fn: Callable[[Any], Any]) -> Err[E]:
        """Short-circuits: the error is passed through untouched."""
        return self

    def __repr__(self) -> str:
        return f"Err({self.error!r})"


Result = Union[Ok[T], Err[E]]


def try_fasta(fn: Callable[..., T], *args, **kwargs) -> Result[T, FastaError]:
    """
    Run fn and fold failures into a Result.

    FastaError subclasses raised by fn are returned as they are; OSError
    from the operating system boundary becomes an IoError.

    Args:
        fn: Function to call
        *args: Positional arguments for fn
        **kwargs: Keyword arguments for fn

    Returns:
        Ok(fn(...)) on success, Err(FastaError) on failure
    """
    try:
        return Ok(fn(*args, **kwargs))
    except FastaError as e:
        return Err(e)
    except OSError as e:
        return Err(IoError(f"{type(e).__name__}: {e}"))


def collect_results(results: list[Result[T, E]]) -> Result[list[T], E]:
    """
    Collect a list of Results into a Result of list.

    Returns the first Err encountered, otherwise Ok with all values in order.
    """
    values = []
    for result in results:
        if result.is_err():
            return result  # type: ignore
        values.append(result.unwrap())
    return Ok(values)
