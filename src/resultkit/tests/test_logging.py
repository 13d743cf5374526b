"""Tests for structured logging, settings and payload descriptions."""

from __future__ import annotations

import io

import orjson
import pytest

from resultkit import Rejection, describe_payload, get_logger
from resultkit.logging import (
    ConsoleRenderer,
    JsonRenderer,
    NoOpRenderer,
    configure_logging,
    reset_logging,
)
from resultkit.settings import ResultKitSettings, clear_settings_cache, get_settings


@pytest.fixture(autouse=True)
def clean_config() -> object:
    """Reset logging and settings before each test."""
    reset_logging()
    clear_settings_cache()
    yield
    reset_logging()
    clear_settings_cache()


# ═════════════════════════════════════════════════════════════════════════════
# Logger
# ═════════════════════════════════════════════════════════════════════════════


def test_console_output() -> None:
    out = io.StringIO()
    configure_logging("console", "INFO", output=out, colors=False)

    get_logger("svc", region="eu").info("request done", status=200, cached=True)
    line = out.getvalue().strip()
    assert "[info] request done" in line
    assert 'logger="svc"' in line
    assert 'region="eu"' in line
    assert "status=200" in line
    assert "cached=true" in line


def test_level_filtering() -> None:
    out = io.StringIO()
    configure_logging("console", "WARNING", output=out, colors=False)

    log = get_logger()
    log.info("hidden")
    log.error("shown")
    assert "hidden" not in out.getvalue()
    assert "shown" in out.getvalue()


def test_configure_after_logger_creation() -> None:
    """Loggers pick up configuration made after they were created."""
    log = get_logger("early")
    out = io.StringIO()
    configure_logging("console", "DEBUG", output=out, colors=False)

    log.debug("late config applies")
    assert "late config applies" in out.getvalue()


def test_bind_is_immutable() -> None:
    base = get_logger("svc")
    bound = base.bind(user_id=1)
    assert "user_id" not in base.context
    assert bound.context == {"logger": "svc", "user_id": 1}


def test_json_output() -> None:
    out = io.StringIO()
    configure_logging("json", "INFO", output=out)

    get_logger("svc").warning("safe operation raised", error=ValueError("boom"))
    record = orjson.loads(out.getvalue())
    assert record["level"] == "warning"
    assert record["event"] == "safe operation raised"
    assert record["logger"] == "svc"
    assert record["error"] == "ValueError('boom')"
    assert "timestamp" in record


def test_console_colors() -> None:
    out = io.StringIO()
    configure_logging("console", "DEBUG", output=out, colors=True)

    get_logger().warning("tinted", n=1)
    assert "\033[33m[warning]\033[0m tinted" in out.getvalue()


def test_configure_returns_renderer() -> None:
    assert isinstance(configure_logging("console", output=io.StringIO()), ConsoleRenderer)
    assert isinstance(configure_logging("json", output=io.StringIO()), JsonRenderer)
    assert isinstance(configure_logging("none"), NoOpRenderer)


def test_configure_unknown_format() -> None:
    with pytest.raises(ValueError, match="Unknown format"):
        configure_logging("xml")


# ═════════════════════════════════════════════════════════════════════════════
# Settings
# ═════════════════════════════════════════════════════════════════════════════


def test_settings_defaults() -> None:
    settings = ResultKitSettings()
    assert settings.debug is False
    assert settings.log_contract_violations is True
    assert settings.log_captured_failures is True
    assert settings.logging.level == "WARNING"
    assert settings.logging.format == "console"
    assert settings.effective_log_level == "WARNING"


def test_settings_from_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("RESULTKIT_LOG_LEVEL", "debug")
    monkeypatch.setenv("RESULTKIT_LOG_FORMAT", "JSON")
    monkeypatch.setenv("RESULTKIT_LOG_CAPTURED_FAILURES", "false")

    settings = get_settings()
    assert settings.logging.level == "DEBUG"
    assert settings.logging.format == "json"
    assert settings.log_captured_failures is False


def test_settings_debug_forces_debug_level(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("RESULTKIT_DEBUG", "true")
    assert get_settings().effective_log_level == "DEBUG"


def test_settings_cached() -> None:
    assert get_settings() is get_settings()


def test_unconfigured_logging_follows_settings(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("RESULTKIT_LOG_FORMAT", "none")
    monkeypatch.setenv("RESULTKIT_LOG_LEVEL", "DEBUG")

    log = get_logger()
    assert log.is_enabled_for(10)
    log.debug("rendered by the no-op renderer")


# ═════════════════════════════════════════════════════════════════════════════
# Payload Descriptions
# ═════════════════════════════════════════════════════════════════════════════


def test_describe_exception() -> None:
    assert describe_payload(ValueError("boom")) == "ValueError: boom"
    assert describe_payload(TimeoutError()) == "TimeoutError"


def test_describe_plain_values() -> None:
    assert describe_payload("foo") == "'foo'"
    assert describe_payload({"code": 500}) == "{'code': 500}"


def test_describe_truncates() -> None:
    text = describe_payload("x" * 500)
    assert len(text) == 200
    assert text.endswith("...")


def test_rejection_carries_payload() -> None:
    payload = {"error": "foo"}
    exc = Rejection(payload)
    assert exc.payload is payload
    assert repr(exc) == "Rejection({'error': 'foo'})"


def test_describe_unprintable_payload() -> None:
    class Opaque:
        def __repr__(self) -> str:
            raise RuntimeError("no repr")

    class Mute(Exception):
        def __str__(self) -> str:
            raise RuntimeError("no str")

    assert describe_payload(Opaque()) == "<Opaque, unprintable>"
    assert describe_payload(Mute()) == "<Mute, unprintable>"
