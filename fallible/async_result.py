from __future__ import annotations

from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field
from types import TracebackType
import asyncio
import functools
import inspect
from typing import Any

from .result import Failure, Result, Success


type MaybeAwaitable[T] = T | Awaitable[T]


async def _settle[T](value: MaybeAwaitable[T]) -> T:
    if inspect.isawaitable(value):
        return await value
    return value


def _rewrap(variant: type[Result]) -> Callable[[Any], Awaitable[Result]]:
    async def rewrap(value):
        return variant(await _settle(value))
    return rewrap


def _forward(result: Result) -> Result:
    return result


@dataclass(eq=False)
class AsyncResult[S, F]:
    """A suspended computation that yields a `Result[S, F]` when awaited.

    Nothing runs until the first `await`. The thunk is then evaluated exactly
    once; later awaits (concurrent or not) get the same `Result` object, or
    the same exception if the thunk raised.

    Every combinator returns a new `AsyncResult` that refers back to its
    receiver. Awaiting walks these links with an explicit stack, so chains
    and recursive `async_result` functions of any length resolve without
    nesting awaits. When a step produces another `AsyncResult`, this one
    forwards to it (trampoline).

    Callbacks may be plain or `async` functions: whatever they return is
    awaited if it is awaitable. Exceptions raised by callbacks are never
    turned into a `Failure`.
    """
    _thunk: Callable[[], MaybeAwaitable[Result[S, F] | AsyncResult[S, F]]] | None = None
    _source: AsyncResult | None = field(default=None, repr=False)
    _step: Callable[[Result], Any] | None = field(default=None, repr=False)
    _lock: asyncio.Lock = field(default_factory=asyncio.Lock, repr=False)
    _result: Result[S, F] | None = field(default=None, repr=False)
    _error: Exception | None = field(default=None, repr=False)
    _traceback: TracebackType | None = field(default=None, repr=False)

    def __await__(self):
        return self._resolve().__await__()

    @property
    def _done(self) -> bool:
        return self._result is not None or self._error is not None

    def _outcome(self) -> Result[S, F]:
        if self._error is not None:
            raise self._error.with_traceback(self._traceback)
        assert self._result is not None
        return self._result

    async def _resolve(self) -> Result[S, F]:
        stack: list[AsyncResult] = [self]
        while stack:
            node = stack[-1]
            if node._done:
                stack.pop()
                continue

            source = node._source
            if source is not None and not source._done:
                stack.append(source)
                continue

            async with node._lock:
                if not node._done and node._source is source:
                    await node._advance()

        return self._outcome()

    async def _advance(self):
        """Evaluate the thunk, or the step on the resolved source. Either
        settles this node, or points it at another `AsyncResult` to forward."""
        if self._source is not None and self._source._error is not None:
            self._error, self._traceback = self._source._error, self._source._traceback
            return

        try:
            if self._source is None:
                assert self._thunk is not None
                value = self._thunk()
            else:
                assert self._step is not None
                value = self._step(self._source._outcome())

            while True:
                match value:
                    case AsyncResult() as other:
                        self._thunk, self._source, self._step = None, other, _forward
                        return
                    case Result():
                        self._result = value
                        return
                    case _ if inspect.isawaitable(value):
                        value = await value
                    case _:
                        raise TypeError(f"Expected a `Result`, got: {value!r}")

        except Exception as e:
            self._error, self._traceback = e, e.__traceback__

    @staticmethod
    def from_result(result: Result[S, F]) -> AsyncResult[S, F]:
        return AsyncResult(lambda: result)

    @staticmethod
    def from_awaitable(awaitable: Awaitable[Result[S, F]]) -> AsyncResult[S, F]:
        """Wrap a coroutine, task or future. It is awaited only once.

        Cancellation is not handled: if the first awaiter is cancelled while
        the coroutine runs, awaiting again raises `RuntimeError` because a
        coroutine can not be resumed by a second `await`. Wrap it in a task
        with `asyncio.ensure_future` if that matters.
        """
        return AsyncResult(lambda: awaitable)

    @staticmethod
    def success(value: S) -> AsyncResult[S, Any]:
        return AsyncResult.from_result(Success(value))

    @staticmethod
    def failure(error: F) -> AsyncResult[Any, F]:
        return AsyncResult.from_result(Failure(error))

    def _then[W, E](self, fn: Callable[[Result[S, F]], Any]) -> AsyncResult[W, E]:
        return AsyncResult(_source=self, _step=fn)

    def flat_map[W](self, fn: Callable[[S], MaybeAwaitable[Result[W, F]]]) -> AsyncResult[W, F]:
        return self._then(lambda result: result.flat_map(fn))

    def flat_map_error[W](self, fn: Callable[[F], MaybeAwaitable[Result[S, W]]]) -> AsyncResult[S, W]:
        return self._then(lambda result: result.flat_map_error(fn))

    def map[W](self, fn: Callable[[S], MaybeAwaitable[W]]) -> AsyncResult[W, F]:
        return self._then(lambda result: result.map(fn).fold(_rewrap(Success), Failure))

    def map_error[W](self, fn: Callable[[F], MaybeAwaitable[W]]) -> AsyncResult[S, W]:
        return self._then(lambda result: result.map_error(fn).fold(Success, _rewrap(Failure)))

    def pure[W](self, value: W) -> AsyncResult[W, F]:
        return self._then(lambda result: result.pure(value))

    def pure_error[W](self, error: W) -> AsyncResult[S, W]:
        return self.map_error(lambda _: error)

    def swap(self) -> AsyncResult[F, S]:
        return self._then(lambda result: result.swap())

    def recover[R](self, fn: Callable[[F], MaybeAwaitable[Result[S, R]]]) -> AsyncResult[S, R]:
        return self._then(lambda result: result.recover(fn))

    def on_success(self, fn: Callable[[S], Any]) -> AsyncResult[S, F]:
        async def effect(result: Result[S, F]) -> Result[S, F]:
            await _settle(result.fold(fn, lambda _: None))
            return result
        return self._then(effect)

    def on_failure(self, fn: Callable[[F], Any]) -> AsyncResult[S, F]:
        async def effect(result: Result[S, F]) -> Result[S, F]:
            await _settle(result.fold(lambda _: None, fn))
            return result
        return self._then(effect)

    async def fold[W](self, on_success: Callable[[S], MaybeAwaitable[W]], on_failure: Callable[[F], MaybeAwaitable[W]]) -> W:
        return await _settle((await self).fold(on_success, on_failure))

    async def get_or_none(self) -> S | None:
        return (await self).get_or_none()

    async def exception_or_none(self) -> F | None:
        return (await self).exception_or_none()

    async def is_success(self) -> bool:
        return (await self).is_success()

    async def is_error(self) -> bool:
        return (await self).is_error()

    async def get_or_raise(self) -> S:
        return (await self).get_or_raise()

    async def get_or_else(self, fn: Callable[[F], MaybeAwaitable[S]]) -> S:
        return await _settle((await self).get_or_else(fn))

    async def get_or_default(self, default: S) -> S:
        return (await self).get_or_default(default)


def async_result[**P, S, F](coroutine: Callable[P, Awaitable[Result[S, F] | AsyncResult[S, F]]]) -> Callable[P, AsyncResult[S, F]]:
    """Transform a coroutine function returning a `Result` into a function
    returning an `AsyncResult`. Calling it does not start the coroutine; that
    happens on the first `await`.

    If the coroutine returns another `AsyncResult`, the result forwards to
    it, so a function may return a call to itself without growing the stack.
    """
    @functools.wraps(coroutine)
    def run(*args: P.args, **kwargs: P.kwargs) -> AsyncResult[S, F]:
        return AsyncResult(functools.partial(coroutine, *args, **kwargs))

    return run
