"""Results instead of exceptions for asynchronous code.

Provides a two-variant Result type and helpers that never let an awaited
operation's failure escape as an exception:
- Success/Failure variants told apart by which field they carry
- run_safely: capture any failure of an awaitable as a Failure
- ensure_safe: rescue a declared-safe awaitable that raises anyway
- call_safely / safe: the same for plain calls and decorated functions

Example:
    >>> from resultkit import is_error, run_safely
    >>>
    >>> resp = await run_safely(fetch_price("ACME"))
    >>> if is_error(resp):
    ...     print(f"Unable to get the price. Reason: {resp.error}")
    ... else:
    ...     print(resp.value * 2)
"""

from .errors import Rejection, ResultKitError, describe_payload
from .logging import configure_logging, get_logger
from .result import (
    Failure,
    Result,
    SafeAwaitable,
    Success,
    from_mapping,
    is_error,
    is_result,
    make_error,
    make_result,
    unwrap,
)
from .safe import UNSET, call_safely, ensure_safe, run_safely, safe
from .settings import ResultKitSettings, clear_settings_cache, get_settings

__version__ = "1.0.0"

__all__ = [
    # Core types
    "Result", "Success", "Failure", "SafeAwaitable",
    # Constructors & predicates
    "make_result", "make_error", "is_result", "is_error", "unwrap", "from_mapping",
    # Safety helpers
    "run_safely", "ensure_safe", "call_safely", "safe", "UNSET",
    # Errors
    "ResultKitError", "Rejection", "describe_payload",
    # Configuration & logging
    "ResultKitSettings", "get_settings", "clear_settings_cache",
    "configure_logging", "get_logger",
]
