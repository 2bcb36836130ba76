"""Configuration loading from environment variables."""

from __future__ import annotations

import os

from regwatch.models.config import (
    LogConfig,
    NotificationConfig,
    RegistryConfig,
    RegwatchConfig,
    StateConfig,
    WatchConfig,
)

WATCH_SOURCES = ("json-file", "csv-file", "csv-url", "query")
REGISTRY_LANGUAGES = ("de", "fr", "it", "en")


class ConfigurationError(RuntimeError):
    """Raised when configuration values are missing or invalid."""


def _env(key: str, default: str = "") -> str:
    return os.environ.get(f"REGWATCH_{key}", default)


def _env_bool(key: str, default: bool = False) -> bool:
    val = _env(key, str(default).lower())
    return val.lower() in ("true", "1", "yes")


def _env_float(key: str, default: float, min_val: float | None = None, max_val: float | None = None) -> float:
    val = float(_env(key, str(default)))
    if min_val is not None:
        val = max(val, min_val)
    if max_val is not None:
        val = min(val, max_val)
    return val


def _validate_choice(name: str, value: str, valid: tuple[str, ...]) -> str:
    if value.lower() not in valid:
        raise ConfigurationError(f"Invalid {name}: {value}. Must be one of {valid}")
    return value.lower()


def load_config() -> RegwatchConfig:
    """Load configuration from REGWATCH_* environment variables."""
    return RegwatchConfig(
        registry=RegistryConfig(
            endpoint=_env("ENDPOINT", "https://www.zefix.admin.ch/ZefixPublicREST").rstrip("/"),
            username=_env("USERNAME", ""),
            password=_env("PASSWORD", ""),
            timeout_seconds=_env_float("REGISTRY_TIMEOUT", 30.0, min_val=1.0, max_val=120.0),
            language=_validate_choice("registry language", _env("REGISTRY_LANGUAGE", "en"), REGISTRY_LANGUAGES),
        ),
        watch=WatchConfig(
            source=_validate_choice("watch source", _env("WATCH_SOURCE", "json-file"), WATCH_SOURCES),
            location=_env("WATCH_LOCATION", "watch_list.json"),
        ),
        state=StateConfig(
            path=_env("STATE_PATH", "watch_state.json"),
        ),
        notifications=NotificationConfig(
            email_secret_ref=_env("NOTIFICATIONS_EMAIL_SECRET_REF", ""),
            email_to=_env("NOTIFICATIONS_EMAIL_TO", ""),
            webhook_secret_ref=_env("NOTIFICATIONS_WEBHOOK_SECRET_REF", ""),
            console=_env_bool("NOTIFICATIONS_CONSOLE", True),
        ),
        log=LogConfig(
            level=_validate_choice("log level", _env("LOG_LEVEL", "info"), ("debug", "info", "warning", "error")),
            format=_validate_choice("log format", _env("LOG_FORMAT", "json"), ("json", "console")),
        ),
    )


def validate_config(config: RegwatchConfig) -> None:
    """Raise ConfigurationError naming every required value that is blank.

    Called once at process start, before the watch list is read.
    """
    missing: list[str] = []
    if not config.registry.endpoint.strip():
        missing.append("REGWATCH_ENDPOINT")
    if not config.registry.username.strip():
        missing.append("REGWATCH_USERNAME")
    if not config.registry.password.strip():
        missing.append("REGWATCH_PASSWORD")
    if not config.watch.location.strip():
        missing.append("REGWATCH_WATCH_LOCATION")
    if not config.state.path.strip():
        missing.append("REGWATCH_STATE_PATH")

    if missing:
        raise ConfigurationError(f"Missing configuration for: {', '.join(sorted(missing))}")

    _validate_choice("watch source", config.watch.source, WATCH_SOURCES)
