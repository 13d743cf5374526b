"""Exception types for resultkit.

The library itself never raises from its async entry points. These types
exist so callers can fail with arbitrary payloads and so log events can
describe what was captured.
"""

from __future__ import annotations


class ResultKitError(Exception):
    """Base class for resultkit exceptions."""


class Rejection(ResultKitError):
    """Fail with an arbitrary, non-exception payload.

    Python can only raise exceptions, so a rejection carrying a string, a
    dict or a Result is expressed by raising this. The safe helpers unpack
    it and store ``payload`` unchanged in the Failure.

    Example:
        >>> async def lookup() -> int:
        ...     raise Rejection("The value is undefined")
        >>> await run_safely(lookup)
        Failure(error='The value is undefined')
    """

    __slots__ = ("payload",)

    def __init__(self, payload: object) -> None:
        super().__init__(payload)
        self.payload = payload

    def __repr__(self) -> str:
        return f"Rejection({self.payload!r})"


def payload_of(exc: BaseException) -> object:
    """Failure payload for a captured exception: the Rejection payload, else the exception itself."""
    return exc.payload if isinstance(exc, Rejection) else exc


def describe_payload(payload: object) -> str:
    """Short description of a failure payload for log events. Never raises."""
    name = type(payload).__name__
    try:
        match payload:
            case BaseException():
                msg = str(payload)
                return f"{name}: {msg}" if msg else name
            case _:
                text = repr(payload)
    except Exception:  # noqa: BLE001
        return f"<{name}, unprintable>"
    return text if len(text) <= 200 else f"{text[:197]}..."
