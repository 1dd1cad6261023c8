"""TOML config loading and profiles."""

from __future__ import annotations

import logging
import tomllib
from pathlib import Path
from typing import Any

from predash.ingestion.kalshi.client import KALSHI_API_BASE
from predash.ingestion.polymarket.gamma import GAMMA_API_BASE
from predash.models.config import ProviderConfig

# Default config search path (project root or cwd)
_CONFIG_DIR = Path(__file__).resolve().parent.parent.parent.parent / "config"
_CWD_CONFIG = Path.cwd() / "config"


def _load_toml(path: Path) -> dict[str, Any]:
    with open(path, "rb") as f:
        return tomllib.load(f)


def _deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """Recursively merge override into base. Override values take precedence."""
    result = dict(base)
    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = _deep_merge(result[key], value)
        else:
            result[key] = value
    return result


def _find_config_dir(config_dir: Path | None = None) -> Path:
    if config_dir is not None:
        return config_dir
    if _CWD_CONFIG.exists():
        return _CWD_CONFIG
    return _CONFIG_DIR


def load_config(profile: str | None = None, config_dir: Path | None = None) -> dict[str, Any]:
    """Load merged config from default.toml and optional profile overlay."""
    config_dir = _find_config_dir(config_dir)
    default_path = config_dir / "default.toml"
    if not default_path.exists():
        return {}
    base = _load_toml(default_path)
    if profile:
        profile_path = config_dir / f"{profile}.toml"
        if profile_path.exists():
            overlay = _load_toml(profile_path)
            base = _deep_merge(base, overlay)
    return base


def get_settings(profile: str | None = None, config_dir: Path | None = None) -> Settings:
    """Return Settings instance from merged config."""
    raw = load_config(profile, config_dir)
    return Settings.from_dict(raw)


class Settings:
    """Application settings from TOML config."""

    def __init__(
        self,
        *,
        kalshi: dict[str, Any] | None = None,
        polymarket: dict[str, Any] | None = None,
        aggregator: dict[str, Any] | None = None,
        dashboard: dict[str, Any] | None = None,
        relay: dict[str, Any] | None = None,
        api: dict[str, Any] | None = None,
        logging: dict[str, Any] | None = None,
    ):
        self.kalshi = kalshi or {}
        self.polymarket = polymarket or {}
        self.aggregator = aggregator or {}
        self.dashboard = dashboard or {}
        self.relay = relay or {}
        self.api = api or {}
        self.logging = logging or {}

    @classmethod
    def from_dict(cls, raw: dict[str, Any]) -> Settings:
        return cls(
            kalshi=raw.get("kalshi"),
            polymarket=raw.get("polymarket"),
            aggregator=raw.get("aggregator"),
            dashboard=raw.get("dashboard"),
            relay=raw.get("relay"),
            api=raw.get("api"),
            logging=raw.get("logging"),
        )

    # Convenience accessors with defaults
    @property
    def kalshi_api_base(self) -> str:
        return self.kalshi.get("api_base", KALSHI_API_BASE)

    @property
    def gamma_api_base(self) -> str:
        return self.polymarket.get("gamma_api_base", GAMMA_API_BASE)

    @property
    def kalshi_config(self) -> ProviderConfig:
        return ProviderConfig(
            base_url=self.kalshi_api_base,
            api_key=self.kalshi.get("api_key") or None,
            use_mock=bool(self.kalshi.get("use_mock", False)),
            mock_fallback=bool(self.kalshi.get("mock_fallback", True)),
            timeout_sec=float(self.kalshi.get("timeout_sec", 10.0)),
        )

    @property
    def polymarket_config(self) -> ProviderConfig:
        return ProviderConfig(
            base_url=self.gamma_api_base,
            use_mock=bool(self.polymarket.get("use_mock", False)),
            mock_fallback=bool(self.polymarket.get("mock_fallback", True)),
            timeout_sec=float(self.polymarket.get("timeout_sec", 10.0)),
        )

    @property
    def provider_timeout_sec(self) -> float:
        return float(self.aggregator.get("provider_timeout_sec", 10.0))

    @property
    def fetch_limit(self) -> int:
        return int(self.aggregator.get("fetch_limit", 100))

    @property
    def refresh_interval_sec(self) -> int:
        return int(self.dashboard.get("refresh_interval_sec", 60))

    @property
    def stale_sec(self) -> float:
        return float(self.dashboard.get("stale_sec", 30.0))

    @property
    def relay_host(self) -> str:
        return self.relay.get("host", "127.0.0.1")

    @property
    def relay_port(self) -> int:
        return int(self.relay.get("port", 3001))

    @property
    def api_host(self) -> str:
        return self.api.get("host", "127.0.0.1")

    @property
    def api_port(self) -> int:
        return int(self.api.get("port", 8000))

    @property
    def logging_level(self) -> str:
        return self.logging.get("level", "INFO").upper()

    @property
    def logging_format(self) -> str:
        return self.logging.get("format", "console")

    @property
    def logging_level_num(self) -> int:
        return getattr(logging, self.logging_level, logging.INFO)

    def with_mock(self) -> Settings:
        """Copy of these settings with both providers forced into mock mode."""
        raw = {
            "kalshi": {**self.kalshi, "use_mock": True},
            "polymarket": {**self.polymarket, "use_mock": True},
            "aggregator": self.aggregator,
            "dashboard": self.dashboard,
            "relay": self.relay,
            "api": self.api,
            "logging": self.logging,
        }
        return Settings.from_dict(raw)


def configure_logging(settings: Settings) -> None:
    """Configure structlog with settings. Call once at application entry."""
    import structlog

    processors = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
    ]
    if settings.logging_format == "json":
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer())

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(settings.logging_level_num),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=True,
    )
