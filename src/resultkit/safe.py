"""Turn raising operations into Results.

- run_safely: await an operation, capturing any exception as a Failure
- ensure_safe: await a declared-safe operation, rescuing it if it raises anyway
- call_safely: synchronous counterpart of run_safely
- safe: decorator making a function return Results instead of raising

None of these raise for ``Exception`` subclasses. ``asyncio.CancelledError``,
``KeyboardInterrupt`` and ``SystemExit`` are not failures of the operation and
propagate unchanged.

Example:
    >>> async def get_value_later() -> int:
    ...     raise Rejection("The value is undefined")
    >>>
    >>> resp = await run_safely(get_value_later)
    >>> if is_error(resp):
    ...     print(f"Unable to get the value. Reason: {resp.error}")
    Unable to get the value. Reason: The value is undefined
"""

from __future__ import annotations

import inspect
import logging
from collections.abc import Awaitable
from functools import partial, wraps
from typing import Callable, ParamSpec, TypeVar, overload

from .errors import describe_payload, payload_of
from .logging import get_logger
from .result import Failure, Success
from .settings import get_settings

V = TypeVar("V")
E = TypeVar("E")
F = TypeVar("F")
P = ParamSpec("P")

_log = get_logger("resultkit.safe")


class _Unset:
    """Marker for an omitted fallback; ``None`` is a legitimate fallback error."""

    __slots__ = ()

    def __repr__(self) -> str:
        return "UNSET"


UNSET = _Unset()


async def _settle(operation: Awaitable[V] | Callable[[], Awaitable[V] | V]) -> V:
    """Resolve a thunk or awaitable to its value. Raises whatever the operation raises."""
    pending = operation() if callable(operation) and not inspect.isawaitable(operation) else operation
    return await pending if inspect.isawaitable(pending) else pending  # type: ignore[return-value]


def _operation_name(operation: object) -> str:
    if isinstance(operation, partial):
        operation = operation.func
    return getattr(operation, "__qualname__", None) or type(operation).__name__


def _report(level: int, event: str, operation: object, payload: object, **kw: object) -> None:
    """Log a captured failure. Errors from settings, rendering or the payload's repr stay here."""
    try:
        settings = get_settings()
        wanted = settings.log_contract_violations if level >= logging.WARNING else settings.log_captured_failures
        if wanted and _log.is_enabled_for(level):
            _log.log(level, event, operation=_operation_name(operation), error=describe_payload(payload), **kw)
    except Exception:  # noqa: BLE001
        pass


# ─────────────────────────────────────────────────────────────────────────────
# Async
# ─────────────────────────────────────────────────────────────────────────────


async def run_safely(
    operation: Awaitable[V] | Callable[[], Awaitable[V]],
) -> Success[V] | Failure[object]:
    """Await ``operation`` and return its outcome as a Result. Never raises.

    Args:
        operation: An awaitable, or a zero-argument callable returning one.
            A callable that returns a plain value succeeds with that value.

    Returns:
        ``Success(value)`` on completion. ``Failure(payload)`` if it raised,
        where the payload is the exception object itself, or the payload of
        a ``Rejection``. A returned Result is nested as-is, never flattened.
    """
    try:
        return Success(await _settle(operation))
    except Exception as e:
        payload = payload_of(e)
        _report(logging.DEBUG, "operation failed", operation, payload)
        return Failure(payload)


@overload
async def ensure_safe(operation: Awaitable[Success[V] | Failure[E]]) -> Success[V] | Failure[E | object]: ...
@overload
async def ensure_safe(operation: Awaitable[Success[V] | Failure[E]], fallback_error: F) -> Success[V] | Failure[E | F]: ...
async def ensure_safe(
    operation: Awaitable[Success[V] | Failure[E]] | Callable[[], Awaitable[Success[V] | Failure[E]]],
    fallback_error: object = UNSET,
) -> Success[V] | Failure[object]:
    """Await a declared-safe operation, rescuing it if it raises anyway. Never raises.

    Lets callers compose operations typed as safe while defending against one
    that breaks the contract, e.g. a third-party coroutine that still raises.

    Args:
        operation: An awaitable (or thunk producing one) that by contract
            resolves to a Result.
        fallback_error: Error to report if the operation raises. When omitted
            the raised payload is reported instead. ``None`` counts as given.

    Returns:
        The operation's Result unchanged, or ``Failure(fallback_error)`` /
        ``Failure(payload)`` if it raised.
    """
    try:
        return await _settle(operation)
    except Exception as e:
        payload = payload_of(e)
        _report(logging.WARNING, "safe operation raised", operation, payload, fallback=fallback_error is not UNSET)
        return Failure(payload if fallback_error is UNSET else fallback_error)


# ─────────────────────────────────────────────────────────────────────────────
# Sync & Decorator
# ─────────────────────────────────────────────────────────────────────────────


def call_safely(fn: Callable[P, V], *args: P.args, **kwargs: P.kwargs) -> Success[V] | Failure[object]:
    """Call ``fn`` and return its outcome as a Result. Never raises.

    Example:
        >>> call_safely(int, "42")
        Success(value=42)
        >>> call_safely(int, "forty-two")
        Failure(error=ValueError("invalid literal for int() with base 10: 'forty-two'"))
    """
    try:
        return Success(fn(*args, **kwargs))
    except Exception as e:
        payload = payload_of(e)
        _report(logging.DEBUG, "operation failed", fn, payload)
        return Failure(payload)


def safe(func: Callable[P, V]) -> Callable[P, object]:
    """Decorator: calls return a Result instead of raising.

    Coroutine functions become coroutine functions returning Results via
    run_safely; plain functions go through call_safely. A plain function
    that returns an awaitable (a functools.partial of a coroutine function,
    a wrapper handing back a task) yields a coroutine to await for the Result.

    Example:
        >>> @safe
        ... async def fetch(user_id: int) -> dict:
        ...     return await client.get_user(user_id)
        >>>
        >>> match await fetch(7):
        ...     case Success(user): render(user)
        ...     case Failure(err): show_error(err)
    """
    if inspect.iscoroutinefunction(func):
        @wraps(func)
        async def async_wrapper(*args: P.args, **kwargs: P.kwargs) -> Success[object] | Failure[object]:
            return await run_safely(partial(func, *args, **kwargs))  # type: ignore[arg-type]
        return async_wrapper

    @wraps(func)
    def wrapper(*args: P.args, **kwargs: P.kwargs) -> object:
        result = call_safely(func, *args, **kwargs)
        if isinstance(result, Success) and inspect.isawaitable(result.value):
            return run_safely(result.value)
        return result
    return wrapper
