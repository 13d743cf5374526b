"""Structured logging for captured failures and contract violations.

Events are an event name plus key=value context, rendered for humans on a
console or as JSON lines for log aggregation. The safe helpers log through
this module; applications configure it once at startup or through the
RESULTKIT_LOG_* environment variables.

Quick Start:
    >>> from resultkit.logging import configure_logging, get_logger
    >>> configure_logging(format="json", level="DEBUG")
    >>> log = get_logger("checkout", order_id=17)
    >>> log.warning("payment provider unreachable", attempt=2)
"""

from __future__ import annotations

import logging
import sys
import time
from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import Any, Protocol, TextIO, runtime_checkable

from .settings import get_settings

JsonDict = dict[str, Any]


@dataclass(slots=True)
class BoundLogger:
    """Structured logger with bound context. bind() returns a new logger with merged context.

    The threshold is looked up at emit time, so configure_logging() also
    applies to loggers created before it ran.

    Example:
        >>> log = get_logger("resultkit.safe")
        >>> log.warning("safe operation raised", error="ValueError: boom")
        # => 10:30:45.120 [warning] safe operation raised error="ValueError: boom" logger="resultkit.safe"
    """

    context: JsonDict = field(default_factory=dict)

    def bind(self, **kw: Any) -> BoundLogger:
        return BoundLogger(context={**self.context, **kw})

    def is_enabled_for(self, level: int) -> bool:
        return level >= _active()[1]

    def log(self, level: int, event: str, **kw: Any) -> None:
        renderer, threshold = _active()
        if level >= threshold:
            renderer.render(LogEntry(time.time(), logging.getLevelName(level).lower(), event, {**self.context, **kw}))

    def debug(self, event: str, **kw: Any) -> None: self.log(logging.DEBUG, event, **kw)
    def info(self, event: str, **kw: Any) -> None: self.log(logging.INFO, event, **kw)
    def warning(self, event: str, **kw: Any) -> None: self.log(logging.WARNING, event, **kw)
    def error(self, event: str, **kw: Any) -> None: self.log(logging.ERROR, event, **kw)


@dataclass(slots=True)
class LogEntry:
    timestamp: float
    level: str
    event: str
    context: JsonDict

    def when(self) -> datetime:
        return datetime.fromtimestamp(self.timestamp, tz=UTC)


# ─────────────────────────────────────────────────────────────────────────────
# Renderers
# ─────────────────────────────────────────────────────────────────────────────


@runtime_checkable
class LogRenderer(Protocol):
    """Protocol for log output renderers."""

    def render(self, entry: LogEntry) -> None: ...


_ANSI = {"reset": "\033[0m", "dim": "\033[2m", "key": "\033[36m", "debug": "\033[2m", "warning": "\033[33m"}


@dataclass(slots=True)
class ConsoleRenderer:
    """One line per event: ``HH:MM:SS.mmm [level] event key=value ...``, keys sorted."""

    output: TextIO = field(default_factory=lambda: sys.stderr)
    colors: bool | None = None  # None = colour only when output is a TTY

    def __post_init__(self) -> None:
        if self.colors is None:
            self.colors = bool(getattr(self.output, "isatty", lambda: False)())

    def _paint(self, text: str, style: str) -> str:
        return f"{_ANSI[style]}{text}{_ANSI['reset']}" if self.colors and style in _ANSI else text

    def render(self, entry: LogEntry) -> None:
        stamp = entry.when().strftime("%H:%M:%S.%f")[:-3]
        fields = " ".join(f"{self._paint(k, 'key')}={_console_value(v)}" for k, v in sorted(entry.context.items()))
        head = f"{self._paint(stamp, 'dim')} {self._paint(f'[{entry.level}]', entry.level)} {entry.event}"
        print(f"{head} {fields}" if fields else head, file=self.output)


@dataclass(slots=True)
class JsonRenderer:
    """JSON Lines output. Values orjson cannot encode are written as their repr()."""

    output: TextIO = field(default_factory=lambda: sys.stdout)

    def render(self, entry: LogEntry) -> None:
        import orjson
        record = {"timestamp": entry.when().isoformat(), "level": entry.level, "event": entry.event, **entry.context}
        print(orjson.dumps(record, default=repr, option=orjson.OPT_NON_STR_KEYS).decode(), file=self.output)


@dataclass(slots=True)
class NoOpRenderer:
    """Discards everything."""

    def render(self, entry: LogEntry) -> None:
        pass


def _console_value(v: object) -> str:
    match v:
        case bool(): return "true" if v else "false"
        case str(): return f'"{v}"'
        case int() | float(): return str(v)
        case _: return repr(v)


# ─────────────────────────────────────────────────────────────────────────────
# Global Configuration
# ─────────────────────────────────────────────────────────────────────────────


_config: tuple[LogRenderer, int] | None = None


def configure_logging(
    format: str = "console",  # noqa: A002
    level: str = "WARNING",
    *,
    output: TextIO | None = None,
    colors: bool | None = None,
) -> LogRenderer:
    """Configure global structured logging. Format: "console" (human), "json" (machine), "none"."""
    global _config
    match format:
        case "console": renderer: LogRenderer = ConsoleRenderer(output=output or sys.stderr, colors=colors)
        case "json": renderer = JsonRenderer(output=output or sys.stdout)
        case "none": renderer = NoOpRenderer()
        case _: raise ValueError(f"Unknown format: {format}. Use 'console', 'json', or 'none'")
    _config = (renderer, getattr(logging, level.upper(), logging.WARNING))
    return renderer


def reset_logging() -> None:
    """Drop explicit configuration; the next event re-reads settings."""
    global _config
    _config = None


def get_logger(name: str | None = None, **initial_context: Any) -> BoundLogger:
    """Get a structured logger with optional initial context. Name is added to context as 'logger'."""
    return BoundLogger(context={**initial_context, **({"logger": name} if name else {})})


def _active() -> tuple[LogRenderer, int]:
    if _config is None:
        settings = get_settings()
        configure_logging(settings.logging.format, settings.effective_log_level, colors=settings.logging.colors)
    return _config  # type: ignore[return-value]
