"""Persistence for user editor preferences.

Preferences live in a JSON file in the OS-appropriate config directory and
survive restarts. Any problem reading or writing the file is logged and the
editor carries on with defaults.
"""

from __future__ import annotations

import json
import logging
from dataclasses import asdict, dataclass, fields
from pathlib import Path
from typing import Any, Dict, Optional

import platformdirs

from .constants import EditorConstants

logger = logging.getLogger(__name__)


@dataclass
class EditorSettings:
    show_line_numbers: bool = True
    tab_width: int = EditorConstants.TAB_WIDTH

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "EditorSettings":
        """Build settings from a dict, ignoring unknown or mistyped keys."""
        settings = cls()
        for f in fields(cls):
            if f.name not in data:
                continue
            value = data[f.name]
            default = getattr(settings, f.name)
            if type(value) is not type(default):
                logger.warning(f"Ignoring setting {f.name}={value!r}: expected {type(default).__name__}")
                continue
            setattr(settings, f.name, value)
        if settings.tab_width < 1:
            settings.tab_width = EditorConstants.TAB_WIDTH
        return settings


class SettingsStore:
    """Loads and saves ``EditorSettings`` as JSON."""

    def __init__(self, config_dir: Optional[Path] = None):
        self._config_dir = Path(config_dir) if config_dir else Path(platformdirs.user_config_dir("splitpad"))
        self._settings_file = self._config_dir / "settings.json"

    @property
    def path(self) -> Path:
        return self._settings_file

    def _ensure_config_dir(self) -> None:
        try:
            self._config_dir.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            logger.warning(f"Could not create config directory {self._config_dir}: {e}")

    def load(self) -> EditorSettings:
        if not self._settings_file.exists():
            return EditorSettings()

        try:
            with open(self._settings_file, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except (json.JSONDecodeError, OSError) as e:
            logger.warning(f"Could not load settings from {self._settings_file}: {e}")
            return EditorSettings()

        if not isinstance(data, dict):
            logger.warning("Settings file has invalid format (not a dict), ignoring")
            return EditorSettings()

        return EditorSettings.from_dict(data)

    def save(self, settings: EditorSettings) -> bool:
        """Write settings atomically. Returns True on success."""
        self._ensure_config_dir()
        temp_file = self._settings_file.with_suffix(EditorConstants.ATOMIC_SAVE_SUFFIX)

        try:
            with open(temp_file, 'w', encoding='utf-8') as f:
                json.dump(asdict(settings), f, indent=2)
            temp_file.replace(self._settings_file)
            return True
        except OSError as e:
            logger.warning(f"Could not save settings to {self._settings_file}: {e}")
            try:
                if temp_file.exists():
                    temp_file.unlink()
            except OSError:
                pass
            return False
