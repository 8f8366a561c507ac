from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
import functools
from typing import TYPE_CHECKING, Any, Never

from .errors import NoneValueError, UnwrapError
from .logging import logger

if TYPE_CHECKING:
    from .async_result import AsyncResult


log = logger()


@dataclass(frozen=True)
class Unit:
    """Success payload for operations that have nothing to return."""

    def __repr__(self):
        return "unit"


unit = Unit()


class Result[S, F]:
    """Either a `Success` holding a value of type `S`, or a `Failure` holding
    an error of type `F`.

    `fold` is the only place where the two variants are told apart; every
    other operation is written in terms of it.
    """

    def fold[W](self, on_success: Callable[[S], W], on_failure: Callable[[F], W]) -> W:
        match self:
            case Success(value):
                return on_success(value)
            case Failure(error):
                return on_failure(error)
        raise TypeError(f"Not a `Success` or `Failure`: {self!r}")

    def map[W](self, fn: Callable[[S], W]) -> Result[W, F]:
        return self.fold(lambda s: Success(fn(s)), Failure)

    def map_error[W](self, fn: Callable[[F], W]) -> Result[S, W]:
        return self.fold(Success, lambda f: Failure(fn(f)))

    def flat_map[R](self, fn: Callable[[S], R]) -> R | Failure[F]:
        """Returns whatever `fn` returns for a success; for the asynchronous
        layer that may be an awaitable of a `Result`."""
        return self.fold(fn, Failure)

    def flat_map_error[R](self, fn: Callable[[F], R]) -> Success[S] | R:
        return self.fold(Success, fn)

    def recover[R](self, fn: Callable[[F], R]) -> Success[S] | R:
        return self.flat_map_error(fn)

    def pure[W](self, value: W) -> Result[W, F]:
        return self.map(lambda _: value)

    def pure_error[W](self, error: W) -> Result[S, W]:
        return self.map_error(lambda _: error)

    def swap(self) -> Result[F, S]:
        return self.fold(Failure, Success)

    def get_or_none(self) -> S | None:
        return self.fold(lambda s: s, lambda _: None)

    def exception_or_none(self) -> F | None:
        return self.fold(lambda _: None, lambda f: f)

    def is_success(self) -> bool:
        return self.fold(lambda _: True, lambda _: False)

    def is_error(self) -> bool:
        return self.fold(lambda _: False, lambda _: True)

    def get_or_raise(self) -> S:
        """Return the success value, or raise the failure.

        An error payload that is an exception is raised as it is, anything
        else gets wrapped in an `UnwrapError`.
        """
        return self.fold(lambda s: s, _raise)

    def get_or_else(self, fn: Callable[[F], S]) -> S:
        return self.fold(lambda s: s, fn)

    def get_or_default(self, default: S) -> S:
        return self.fold(lambda s: s, lambda _: default)

    def on_success(self, fn: Callable[[S], Any]) -> Result[S, F]:
        self.fold(fn, lambda _: None)
        return self

    def on_failure(self, fn: Callable[[F], Any]) -> Result[S, F]:
        self.fold(lambda _: None, fn)
        return self

    def to_async_result(self) -> AsyncResult[S, F]:
        from .async_result import AsyncResult
        return AsyncResult.from_result(self)


def _raise(error: Any) -> Never:
    log.debug("raising from failed result `%r`", error)
    if isinstance(error, BaseException):
        raise error
    raise UnwrapError(error)


@dataclass(frozen=True)
class Success[S](Result[S, Any]):
    value: S

    def __post_init__(self):
        if self.value is None:
            raise NoneValueError("Success")

    def __bool__(self):
        return True


@dataclass(frozen=True)
class Failure[F](Result[Any, F]):
    value: F

    def __post_init__(self):
        if self.value is None:
            raise NoneValueError("Failure")

    def __bool__(self):
        return False


def catching[**P, S](*exceptions: type[Exception]) -> Callable[[Callable[P, S | None]], Callable[P, Result[S, Exception]]]:
    """Turn a function that raises into one that returns a `Result`.

    Any of the given exception types is captured as a `Failure`, other
    exceptions propagate. A function returning `None` succeeds with `unit`.
    """
    def decorator(fn: Callable[P, S | None]) -> Callable[P, Result[S, Exception]]:
        @functools.wraps(fn)
        def run(*args: P.args, **kwargs: P.kwargs) -> Result[S, Exception]:
            try:
                value = fn(*args, **kwargs)
            except exceptions as e:
                log.debug("`%s` failed: %s", fn.__name__, e)
                return Failure(e)
            return Success(unit if value is None else value)

        return run

    return decorator
