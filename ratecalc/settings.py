"""
Process-level configuration from environment variables.

Environment Variables
---------------------
RATECALC_MAX_WORKERS : int
    Worker threads used by a calculation run (default: 4).
RATECALC_LOG_LEVEL : str
    Logging level (DEBUG, INFO, WARNING, ERROR).
RATECALC_LOG_JSON : bool
    Render log lines as JSON instead of console text.
RATECALC_REPORTING_CURRENCY : str
    Default reporting currency of the GraphQL service (unset: no conversion).

Per-calculation configuration lives in `CalculationRules`, not here.
"""

from __future__ import annotations

import os
from functools import lru_cache
from typing import Any, Optional


def _get_env(key: str, default: Any, value_type: type = str) -> Any:
    """Read RATECALC_<key>, converted to `value_type`; malformed values fall back to `default`."""
    env_value = os.environ.get(f"RATECALC_{key.upper()}")
    if env_value is None or env_value == "":
        return default
    try:
        if value_type == bool:
            return env_value.lower() in ("true", "1", "yes", "on")
        if value_type == int:
            return int(env_value)
        return env_value
    except ValueError:
        return default


class Settings:
    """Configuration loaded from `RATECALC_*` environment variables."""

    def __init__(self) -> None:
        self.max_workers: int = max(1, _get_env("MAX_WORKERS", 4, int))
        self.log_level: str = _get_env("LOG_LEVEL", "INFO", str).upper()
        self.log_json: bool = _get_env("LOG_JSON", False, bool)
        self.reporting_currency: Optional[str] = _get_env("REPORTING_CURRENCY", None, str)

    def __repr__(self) -> str:
        return (
            f"Settings(max_workers={self.max_workers}, log_level={self.log_level!r}, "
            f"log_json={self.log_json}, reporting_currency={self.reporting_currency!r})"
        )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return the cached settings instance (call `get_settings.cache_clear()` after changing env)."""
    return Settings()
