from __future__ import annotations

import os
from dataclasses import dataclass


@dataclass(frozen=True)
class ViewerConfig:
    # Fetch settings
    timeout: float
    user_agent: str
    verify_ssl: bool
    # Logging
    log_level: str


def _env_flag(name: str, default: str) -> bool:
    return os.environ.get(name, default).strip().lower() not in ("0", "false", "no", "off")


def _env_float(name: str, default: str) -> float:
    raw = os.environ.get(name, default)
    try:
        return float(raw)
    except ValueError:
        raise ValueError(f"Invalid {name}='{raw}': expected a number of seconds") from None


def load_config_from_env() -> ViewerConfig:
    timeout = _env_float("CLASHVIEW_TIMEOUT", "10.0")
    user_agent = os.environ.get("CLASHVIEW_USER_AGENT", "clashview/1.0")
    verify_ssl = _env_flag("CLASHVIEW_VERIFY_SSL", "1")
    log_level = os.environ.get("CLASHVIEW_LOG_LEVEL", "WARNING").strip().upper()

    return ViewerConfig(
        timeout=timeout,
        user_agent=user_agent,
        verify_ssl=verify_ssl,
        log_level=log_level,
    )
