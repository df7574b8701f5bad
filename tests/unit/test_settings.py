"""
Unit tests for the JSON preferences file.
"""

import json

import pytest

from hidayah.settings import DEFAULT_PREFERENCES, Settings


@pytest.fixture
def pref_path(tmp_path):
    return str(tmp_path / "config" / "Hidayah-Settings.json")


def test_missing_file_gives_defaults(pref_path):
    settings = Settings(pref_path)
    assert settings.preferences == DEFAULT_PREFERENCES
    assert settings.page_size == 5


def test_save_and_reload(pref_path):
    settings = Settings(pref_path)
    settings.set("webhook_url", "https://hooks.example.org/lookup")
    settings.toggle_reading("show_urdu")

    reloaded = Settings(pref_path)
    assert reloaded.get("webhook_url") == "https://hooks.example.org/lookup"
    assert reloaded.reading_config == {"show_arabic": True, "show_english": True, "show_urdu": False}


def test_nested_keys_merge_with_defaults(tmp_path):
    path = tmp_path / "prefs.json"
    path.write_text(json.dumps({"reading_config": {"show_english": False}, "theme_color": "cyan"}), encoding="utf-8")

    settings = Settings(str(path))

    assert settings.get("theme_color") == "cyan"
    assert settings.reading_config["show_english"] is False
    assert settings.reading_config["show_arabic"] is True


@pytest.mark.parametrize("content", ["{not json", "[1, 2, 3]"])
def test_corrupt_file_resets(tmp_path, capsys, content):
    path = tmp_path / "prefs.json"
    path.write_text(content, encoding="utf-8")

    settings = Settings(str(path))

    assert settings.preferences == DEFAULT_PREFERENCES
    assert "corrupted" in capsys.readouterr().err


@pytest.mark.parametrize("value", [0, -2, "five", None])
def test_invalid_page_size_falls_back(pref_path, value):
    settings = Settings(pref_path)
    settings.set("page_size", value, save=False)
    assert settings.page_size == 5


def test_defaults_are_not_shared(pref_path):
    first = Settings(pref_path)
    first.toggle_reading("show_arabic")
    assert DEFAULT_PREFERENCES["reading_config"]["show_arabic"] is True
