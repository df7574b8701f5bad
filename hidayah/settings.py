# hidayah/settings.py
import copy
import json
import os
import sys
from typing import Any, Dict, Optional

from colorama import Fore

from .pagination import DEFAULT_PAGE_SIZE
from .registry import DEFAULT_COLLECTION
from .utils import user_dir

PREF_FILENAME = "Hidayah-Settings.json"

DEFAULT_PREFERENCES: Dict[str, Any] = {
    "theme_color": "green",
    "page_size": DEFAULT_PAGE_SIZE,
    "reading_config": {
        "show_arabic": True,
        "show_english": True,
        "show_urdu": True,
    },
    "last_collection": DEFAULT_COLLECTION,
    "chapter_api_url": "",
    "webhook_url": "",
    "request_timeout": 10,
}


class Settings:
    """User preferences kept in a small JSON file."""

    def __init__(self, preferences_file: Optional[str] = None):
        if preferences_file is None:
            try:
                preferences_file = os.path.join(user_dir("config"), PREF_FILENAME)
            except OSError as e_path:
                print(f"{Fore.RED}Critical Error determining preferences path: {e_path}", file=sys.stderr)
                print(f"{Fore.YELLOW}Preferences will not be saved.", file=sys.stderr)
        self.preferences_file = preferences_file
        self.preferences = self._load_preferences()

    def _load_preferences(self) -> Dict[str, Any]:
        """Load preferences, falling back to defaults for anything missing."""
        prefs = copy.deepcopy(DEFAULT_PREFERENCES)
        if not self.preferences_file:
            return prefs
        try:
            with open(self.preferences_file, 'r', encoding='utf-8') as f:
                stored = json.load(f)
        except FileNotFoundError:
            return prefs
        except json.JSONDecodeError:
            print(Fore.YELLOW + f"Preferences file '{self.preferences_file}' is corrupted, resetting.", file=sys.stderr)
            return prefs
        except OSError as e:
            print(Fore.RED + f"Error loading preferences from '{self.preferences_file}': {e}", file=sys.stderr)
            return prefs

        if not isinstance(stored, dict):
            print(Fore.YELLOW + f"Preferences file '{self.preferences_file}' is corrupted, resetting.", file=sys.stderr)
            return prefs

        for key, value in stored.items():
            if isinstance(prefs.get(key), dict) and isinstance(value, dict):
                prefs[key].update(value)
            else:
                prefs[key] = value
        return prefs

    def save(self) -> bool:
        if not self.preferences_file:
            print(Fore.RED + "Error: Preferences file path not determined. Cannot save.", file=sys.stderr)
            return False
        try:
            pref_dir = os.path.dirname(self.preferences_file)
            if pref_dir:
                os.makedirs(pref_dir, exist_ok=True)
            json_data = json.dumps(self.preferences, ensure_ascii=False, indent=2)
            with open(self.preferences_file, 'w', encoding='utf-8') as f:
                f.write(json_data)
            return True
        except (OSError, TypeError) as e:
            print(Fore.RED + f"Error saving preferences to '{self.preferences_file}': {e}", file=sys.stderr)
            return False

    def get(self, key: str, default: Any = None) -> Any:
        return self.preferences.get(key, default)

    def set(self, key: str, value: Any, save: bool = True):
        self.preferences[key] = value
        if save:
            self.save()

    # --- Typed accessors ---
    @property
    def page_size(self) -> int:
        try:
            size = int(self.preferences.get("page_size", DEFAULT_PAGE_SIZE))
        except (TypeError, ValueError):
            return DEFAULT_PAGE_SIZE
        return size if size > 0 else DEFAULT_PAGE_SIZE

    @property
    def request_timeout(self) -> float:
        try:
            return float(self.preferences.get("request_timeout", 10))
        except (TypeError, ValueError):
            return 10.0

    @property
    def reading_config(self) -> Dict[str, bool]:
        return self.preferences.get("reading_config", {})

    def toggle_reading(self, key: str) -> bool:
        config = self.preferences.setdefault("reading_config", {})
        config[key] = not config.get(key, True)
        self.save()
        return config[key]
