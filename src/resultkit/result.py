"""Result type: a success carrying ``value`` or a failure carrying ``error``.

The two variants are told apart by which field they carry, not by a tag.
Predicates check for their own field only, so a value carrying neither
(an ill-formed Result) reports False for both.

Plain mappings in the ``{"value": v}`` / ``{"error": e}`` shape are accepted
by the predicates and by ``unwrap``, so Results decoded from JSON need no
conversion.

Example:
    >>> r = make_result(21)
    >>> is_result(r), is_error(r)
    (True, False)
    >>> unwrap(r) * 2
    42
    >>> match make_error("boom"):
    ...     case Success(value): print("ok", value)
    ...     case Failure(error): print("failed", error)
    failed boom
"""

from __future__ import annotations

from collections.abc import Awaitable, Mapping
from dataclasses import dataclass
from typing import Generic, TypeAlias, TypeGuard, TypeVar, Union

V = TypeVar("V")
E = TypeVar("E")

_VALUE = "value"
_ERROR = "error"


@dataclass(frozen=True, slots=True)
class Success(Generic[V]):
    """Successful result."""

    value: V

    def to_dict(self) -> dict[str, V]:
        """Plain ``{"value": v}`` form."""
        return {_VALUE: self.value}


@dataclass(frozen=True, slots=True)
class Failure(Generic[E]):
    """Failed result. ``error`` is whatever the failing side supplied."""

    error: E

    def to_dict(self) -> dict[str, E]:
        """Plain ``{"error": e}`` form."""
        return {_ERROR: self.error}


Result: TypeAlias = Union[Success[V], Failure[E]]

# Awaitable that by contract always completes with a Result and never raises.
# Nothing enforces this at runtime; ensure_safe rescues operations that break it.
SafeAwaitable: TypeAlias = Awaitable[Union[Success[V], Failure[E]]]


# ═══════════════════════════════════════════════════════════════════════════════
# Constructors
# ═══════════════════════════════════════════════════════════════════════════════


def make_result(value: V) -> Success[V]:
    """Construct the success variant. No validation, ``None`` is a valid value."""
    return Success(value)


def make_error(error: E) -> Failure[E]:
    """Construct the failure variant. No validation."""
    return Failure(error)


def from_mapping(data: Mapping[str, object]) -> Success[object] | Failure[object]:
    """Rebuild a variant from its plain mapping form.

    Raises:
        TypeError: if the mapping carries neither field or both.
    """
    has_value, has_error = _VALUE in data, _ERROR in data
    if has_value == has_error:
        raise TypeError(f"Ill-formed result mapping, expected exactly one of 'value'/'error': {dict(data)!r}")
    return Success(data[_VALUE]) if has_value else Failure(data[_ERROR])


# ═══════════════════════════════════════════════════════════════════════════════
# Predicates & Extraction
# ═══════════════════════════════════════════════════════════════════════════════


def _has(result: object, name: str) -> bool:
    if isinstance(result, Mapping):
        return name in result
    return hasattr(result, name)


def _get(result: object, name: str) -> object:
    return result[name] if isinstance(result, Mapping) else getattr(result, name)


def is_result(result: Success[V] | Failure[E] | object) -> TypeGuard[Success[V]]:
    """True iff ``result`` carries a ``value`` field."""
    return _has(result, _VALUE)


def is_error(result: Success[V] | Failure[E] | object) -> TypeGuard[Failure[E]]:
    """True iff ``result`` carries an ``error`` field."""
    return _has(result, _ERROR)


def unwrap(result: Success[V] | Failure[E]) -> V | E:
    """Return whichever payload is present, value first.

    Does not say which kind it was; branch on ``is_error`` first if that matters.

    Raises:
        TypeError: if ``result`` carries neither field.
    """
    if _has(result, _VALUE):
        return _get(result, _VALUE)  # type: ignore[return-value]
    if _has(result, _ERROR):
        return _get(result, _ERROR)  # type: ignore[return-value]
    raise TypeError(f"unwrap() on ill-formed result: {result!r}")
