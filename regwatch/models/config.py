"""Configuration data structures."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass
class RegistryConfig:
    """Upstream company registry connection."""

    endpoint: str = "https://www.zefix.admin.ch/ZefixPublicREST"
    username: str = ""
    password: str = ""
    timeout_seconds: float = 30.0
    language: str = "en"


@dataclass
class WatchConfig:
    """Where the watch list comes from.

    ``source`` is one of ``json-file``, ``csv-file``, ``csv-url`` or ``query``.
    ``location`` is a path, a URL or a company name, depending on the source.
    """

    source: str = "json-file"
    location: str = "watch_list.json"


@dataclass
class StateConfig:
    """Persisted fingerprint state."""

    path: str = "watch_state.json"


@dataclass
class NotificationConfig:
    """Notification sink configuration."""

    email_secret_ref: str = ""
    email_to: str = ""
    webhook_secret_ref: str = ""
    console: bool = True


@dataclass
class LogConfig:
    """Logging configuration."""

    level: str = "info"
    format: str = "json"


@dataclass
class RegwatchConfig:
    """Top-level regwatch configuration."""

    registry: RegistryConfig = field(default_factory=RegistryConfig)
    watch: WatchConfig = field(default_factory=WatchConfig)
    state: StateConfig = field(default_factory=StateConfig)
    notifications: NotificationConfig = field(default_factory=NotificationConfig)
    log: LogConfig = field(default_factory=LogConfig)
