"""
Runtime configuration for Pulse.

Configuration priority (highest to lowest):
1. Environment variables (PULSE_* prefix)
2. Defaults

Usage:
    from pulse.config.runtime import get_runtime_config

    config = get_runtime_config()
    factory = get_metric_factory(namespace=config.namespace)
"""

from __future__ import annotations

import os
from dataclasses import dataclass


@dataclass(frozen=True)
class RuntimeConfig:
    """Process-level settings for metrics and logging."""

    log_level: str = "INFO"
    json_logging: bool = False
    namespace: str = ""
    metrics_path: str = "/metrics"
    metrics_enabled: bool = True
    definitions_file: str | None = None

    def to_env_dict(self) -> dict[str, str]:
        """Render the configuration as ``PULSE_*`` environment variables."""
        env = {
            "PULSE_LOG_LEVEL": self.log_level,
            "PULSE_JSON_LOGGING": "1" if self.json_logging else "0",
            "PULSE_NAMESPACE": self.namespace,
            "PULSE_METRICS_PATH": self.metrics_path,
            "PULSE_METRICS_ENABLED": "1" if self.metrics_enabled else "0",
        }
        if self.definitions_file:
            env["PULSE_DEFINITIONS_FILE"] = self.definitions_file
        return env


def _get_env_str(key: str, default: str) -> str:
    return os.environ.get(key, default)


def _get_env_bool(key: str, default: bool) -> bool:
    val = os.environ.get(key)
    if val is None:
        return default
    return val.lower() in ("1", "true", "yes", "on")


def get_runtime_config() -> RuntimeConfig:
    """Build the runtime configuration from the environment.

    Recognized variables: ``PULSE_LOG_LEVEL``, ``PULSE_JSON_LOGGING``,
    ``PULSE_NAMESPACE``, ``PULSE_METRICS_PATH``, ``PULSE_METRICS_ENABLED``,
    ``PULSE_DEFINITIONS_FILE``.
    """
    defaults = RuntimeConfig()
    metrics_path = _get_env_str("PULSE_METRICS_PATH", defaults.metrics_path)
    if not metrics_path.startswith("/"):
        metrics_path = f"/{metrics_path}"
    return RuntimeConfig(
        log_level=_get_env_str("PULSE_LOG_LEVEL", defaults.log_level).upper(),
        json_logging=_get_env_bool("PULSE_JSON_LOGGING", defaults.json_logging),
        namespace=_get_env_str("PULSE_NAMESPACE", defaults.namespace),
        metrics_path=metrics_path,
        metrics_enabled=_get_env_bool("PULSE_METRICS_ENABLED", defaults.metrics_enabled),
        definitions_file=os.environ.get("PULSE_DEFINITIONS_FILE") or None,
    )
