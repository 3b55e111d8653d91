# scratchr/core/config.py
from __future__ import annotations
from typing import Any
from PySide6.QtCore import QSettings
from app_config import apply_qsettings_org, DEFAULTS
from scratchr.core.logging import get_logger

class Settings:
    """
    Thin wrapper over QSettings with defaults and simple dict-like get/set.
    Keys are "group/name" and fall back to DEFAULTS when nothing is stored.
    """
    def __init__(self, qsettings: QSettings | None = None):
        apply_qsettings_org()
        self._qs = qsettings if qsettings is not None else QSettings()
        self._log = get_logger(__name__)

    @staticmethod
    def default(key: str, fallback: Any = None) -> Any:
        group, _, name = key.partition("/")
        values = DEFAULTS.get(group)
        if isinstance(values, dict) and name in values:
            return values[name]
        return fallback

    def get(self, key: str, default: Any = None) -> Any:
        if default is None:
            default = self.default(key)
        val = self._qs.value(key, default)
        return val if val is not None else default

    def get_int(self, key: str, default: int | None = None) -> int:
        """QSettings hands back strings on some backends; coerce, falling back on garbage."""
        fallback = default if default is not None else self.default(key, 0)
        raw = self.get(key, fallback)
        try:
            return int(raw)
        except (TypeError, ValueError):
            self._log.warning("Setting %s=%r is not an integer; using %s", key, raw, fallback)
            return int(fallback)

    def set(self, key: str, value: Any) -> None:
        self._qs.setValue(key, value)
        self._qs.sync()

def get_settings() -> Settings:
    return Settings()
