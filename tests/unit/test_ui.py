"""
Unit tests for terminal rendering helpers.
"""

import os

import pytest

from hidayah.app import parse_command
from hidayah.models import Hadith, PagedView, SurahData, SurahInfo, Verse, WebhookRecord
from hidayah.notifications import Notifier
from hidayah.ui import UI, fix_arabic_text
from hidayah.utils import strip_ansi, wrap_text


@pytest.fixture
def ui():
    return UI(term_size=os.terminal_size((80, 24)))


def hadith(**fields):
    base = dict(hadith_number=7, book="Sahih al-Bukhari", english_text="Islam is built upon five")
    base.update(fields)
    return Hadith(**base)


def test_fix_arabic_text_empty():
    assert fix_arabic_text("") == ""


def test_fix_arabic_text_latin_passthrough():
    assert fix_arabic_text("Book 1") == "Book 1"


def test_strip_ansi():
    assert strip_ansi("\x1b[31mred\x1b[0m") == "red"


def test_wrap_text():
    wrapped = wrap_text("one two three four five six", 10)
    assert all(len(line) <= 10 for line in wrapped.split("\n"))
    assert wrapped.replace("\n", " ") == "one two three four five six"


class TestHadithPage:
    def test_no_results_for_query(self, ui, bukhari, capsys):
        view = PagedView(page=1, page_size=5, total_pages=0, total_matches=0, records=[])
        ui.display_hadith_page(view, bukhari, "zakat")
        assert 'No hadiths found matching "zakat"' in strip_ansi(capsys.readouterr().out)

    def test_records_rendered(self, ui, bukhari, capsys):
        view = PagedView(page=2, page_size=5, total_pages=3, total_matches=12,
                         records=[hadith(reference="Book 2, Hadith 1", grade="Sahih", narrator="Ibn 'Umar")])
        ui.display_hadith_page(view, bukhari)
        out = strip_ansi(capsys.readouterr().out)

        assert "Page 2 of 3" in out
        assert "Hadith #7" in out
        assert "Book 2, Hadith 1" in out
        assert "Narrator: Ibn 'Umar" in out
        assert "Islam is built upon five" in out

    def test_hidden_language(self, capsys):
        ui = UI(reading_config={"show_english": False}, term_size=os.terminal_size((80, 24)))
        ui.display_single_hadith(hadith())
        assert "English Translation" not in capsys.readouterr().out


def test_webhook_empty_record(ui, capsys):
    ui.display_webhook_record(WebhookRecord())
    assert "empty record" in capsys.readouterr().out


def test_verse_page_marks_playing_ayah(ui, capsys):
    data = SurahData(
        info=SurahInfo(number=1, name="", english_name="Al-Faatiha", english_name_translation="The Opening",
                       number_of_ayahs=2, revelation_type="Meccan"),
        verses=[Verse(number=1, english="In the name of God"), Verse(number=2, english="All praise")],
    )
    ui.display_verse_page(data, page=1, page_size=5, playing_ayah=2)
    out = strip_ansi(capsys.readouterr().out)

    assert "Page 1/1" in out
    assert "[2] 🔊" in out
    assert "[1] 🔊" not in out


@pytest.mark.parametrize("state,ayah,expected", [
    ("playing", 3, "Reciting ayah 3/7"),
    ("paused", None, "paused"),
    ("finished", None, "finished"),
    ("idle", None, "stopped"),
])
def test_audio_status(ui, state, ayah, expected):
    assert expected in ui.audio_status(state, ayah, 7)


def test_audio_status_shows_progress_while_reciting(ui):
    status = strip_ansi(ui.audio_status("playing", 2, 7, progress="00:03/00:09"))
    assert status.endswith("Reciting ayah 2/7  00:03/00:09")
    assert "00:03" not in ui.audio_status("paused", None, 7, progress="00:03/00:09")


def test_notifier_prints(capsys):
    notifier = Notifier()
    notifier.error("Audio error", "Failed to load audio for ayah 2")
    out = strip_ansi(capsys.readouterr().out)
    assert "✗ Audio error" in out
    assert "Failed to load audio for ayah 2" in out
    assert notifier.last.variant == "destructive"


@pytest.mark.parametrize("line,expected", [
    ("", ("", "")),
    ("  Search  Abu Huraira ", ("search", "Abu Huraira")),
    ("JUZ 30", ("juz", "30")),
    ("q", ("q", "")),
])
def test_parse_command(line, expected):
    assert parse_command(line) == expected
