"""Environment-driven defaults for calendars built by datekit.

DATEKIT_TIMEZONE       zone name used by the shared and current calendars
                       (unset: the host's local zone)
DATEKIT_FIRST_WEEKDAY  default first weekday, 1 = Sunday ... 7 = Saturday
DATEKIT_SETTINGS_LOG   log a one-line summary when settings are loaded
"""
from __future__ import annotations

import logging
import os
import threading
from dataclasses import dataclass
from typing import Mapping, Optional

__all__ = ["DateSettings", "get_settings", "DEFAULT_FIRST_WEEKDAY", "MINIMUM_DAYS_IN_FIRST_WEEK"]

logger = logging.getLogger(__name__)

# Sunday, as in the en_US locale.
DEFAULT_FIRST_WEEKDAY = 1
MINIMUM_DAYS_IN_FIRST_WEEK = 4


@dataclass(slots=True)
class DateSettings:
    timezone: Optional[str] = None
    first_weekday: int = DEFAULT_FIRST_WEEKDAY
    log_summary: bool = False

    @classmethod
    def from_env(cls, env: Mapping[str, str] | None = None) -> DateSettings:
        e = env if env is not None else os.environ

        def _bool(name: str, default: bool = False) -> bool:
            return e.get(name, str(int(default))).lower() in ("1", "true", "yes", "on")

        def _weekday(name: str, default: int) -> int:
            try:
                value = int(e.get(name, default))
            except (TypeError, ValueError):
                return default
            return value if 1 <= value <= 7 else default

        settings = cls(
            timezone=e.get("DATEKIT_TIMEZONE") or None,
            first_weekday=_weekday("DATEKIT_FIRST_WEEKDAY", DEFAULT_FIRST_WEEKDAY),
            log_summary=_bool("DATEKIT_SETTINGS_LOG", False),
        )
        if settings.log_summary:
            logger.info(
                "datekit.settings timezone=%s first_weekday=%s min_days_first_week=%s",
                settings.timezone or "local", settings.first_weekday,
                MINIMUM_DAYS_IN_FIRST_WEEK,
            )
        return settings


_settings_lock = threading.Lock()
_settings_singleton: DateSettings | None = None


def get_settings(force_reload: bool = False) -> DateSettings:
    global _settings_singleton
    if _settings_singleton is not None and not force_reload:
        return _settings_singleton
    with _settings_lock:
        if _settings_singleton is None or force_reload:
            _settings_singleton = DateSettings.from_env()
    return _settings_singleton
