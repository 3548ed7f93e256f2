"""Application configuration manager wrapping QSettings."""

import logging
from pathlib import Path
from typing import Any

from PySide6.QtCore import QObject, Signal, Slot, QSettings

from claude_history_viewer.utils.path_codec import claude_home

logger = logging.getLogger(__name__)

# Default values
DEFAULTS = {
    "general/claudeDir": "",  # Empty means ~/.claude
    "search/maxResults": 100,
    "search/contextBefore": 30,
    "search/contextAfter": 70,
    "pricing/inputPerMillion": 3.0,
    "pricing/outputPerMillion": 15.0,
    "git/timeout": 10,
    "advanced/debugLogging": False,
}


class ConfigManager(QObject):
    """Persistent settings for data location, search, pricing and git lookups.

    Values come back typed; a stored value that cannot be converted falls back
    to its default.
    """

    settings_changed = Signal(str)  # key

    def __init__(self, parent=None):
        super().__init__(parent)
        self._settings = QSettings()

    def _value(self, key: str, fallback: Any) -> Any:
        return self._settings.value(key, DEFAULTS.get(key, fallback))

    def _store(self, key: str, value: Any):
        self._settings.setValue(key, value)
        logger.debug("Setting %s changed", key)
        self.settings_changed.emit(key)

    @Slot(str, result=str)
    def get_string(self, key: str) -> str:
        return str(self._value(key, ""))

    @Slot(str, result=int)
    def get_int(self, key: str) -> int:
        try:
            return int(self._value(key, 0))
        except (ValueError, TypeError):
            return int(DEFAULTS.get(key, 0))

    @Slot(str, result=float)
    def get_float(self, key: str) -> float:
        try:
            return float(self._value(key, 0.0))
        except (ValueError, TypeError):
            return float(DEFAULTS.get(key, 0.0))

    @Slot(str, result=bool)
    def get_bool(self, key: str) -> bool:
        val = self._value(key, False)
        # INI storage returns "true"/"false" strings
        if isinstance(val, str):
            return val.lower() in ("true", "1", "yes")
        return bool(val)

    @Slot(str, str)
    def set_string(self, key: str, value: str):
        self._store(key, value)

    @Slot(str, int)
    def set_int(self, key: str, value: int):
        self._store(key, value)

    @Slot(str, float)
    def set_float(self, key: str, value: float):
        self._store(key, value)

    @Slot(str, bool)
    def set_bool(self, key: str, value: bool):
        self._store(key, value)

    def claude_dir(self) -> Path:
        """Configured Claude data directory, falling back to ~/.claude.

        Raises HomeDirectoryNotFound when no override is set and the home
        directory cannot be determined.
        """
        return claude_home(self.get_string("general/claudeDir"))
