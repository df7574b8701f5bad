"""
Unit tests for the HTTP clients: parallel fetching, error mapping and the webhook.
"""

import pytest
import requests

from hidayah.api_client import JSONAPIClient
from hidayah.exceptions import HadithAPIError, QuranAPIError, WebhookError
from hidayah.hadith_api_client import HadithAPIClient
from hidayah.quran_api_client import QuranAPIClient
from hidayah.webhook_client import WebhookClient

WEBHOOK = "https://hooks.example.org/lookup"


class TestFetchAll:
    def test_results_in_input_order(self, fake_session):
        urls = [f"https://api.example.org/{n}" for n in range(6)]
        for n, url in enumerate(urls):
            fake_session.add(url, {"n": n})
        client = JSONAPIClient(session=fake_session, show_progress=False)

        assert client.fetch_all(urls) == [{"n": n} for n in range(6)]

    def test_one_failure_fails_everything(self, fake_session):
        fake_session.add("https://api.example.org/a", {"ok": True})
        fake_session.add("https://api.example.org/c", {"ok": True})
        client = HadithAPIClient(session=fake_session, show_progress=False)

        with pytest.raises(HadithAPIError):
            client.fetch_all(["https://api.example.org/a", "https://api.example.org/b", "https://api.example.org/c"])

        # Every request still went out
        assert len(fake_session.get_calls) == 3

    def test_connection_error_is_wrapped(self, fake_session):
        fake_session.add("https://api.example.org/down", error=requests.exceptions.ConnectionError("refused"))
        client = HadithAPIClient(session=fake_session, show_progress=False)

        with pytest.raises(HadithAPIError, match="Request failed"):
            client.get_json("https://api.example.org/down")

    def test_invalid_json_is_wrapped(self, fake_session):
        fake_session.add("https://api.example.org/html", invalid_json=True)
        client = QuranAPIClient(session=fake_session, show_progress=False)

        with pytest.raises(QuranAPIError, match="Invalid JSON"):
            client.get_json("https://api.example.org/html")

    def test_empty_url_list(self, fake_session):
        assert JSONAPIClient(session=fake_session, show_progress=False).fetch_all([]) == []


def test_default_session_has_user_agent():
    client = JSONAPIClient(show_progress=False)
    assert client.session.headers["User-Agent"].startswith("HidayahClient/")
    assert client.timeout == JSONAPIClient.TIMEOUT


def test_hadith_edition_urls():
    client = HadithAPIClient(session=object(), show_progress=False)
    assert client.edition_url("eng-muslim") == (
        "https://cdn.jsdelivr.net/gh/fawazahmed0/hadith-api@1/editions/eng-muslim.json"
    )


def test_chapter_number_must_be_positive(fake_session, bukhari):
    client = HadithAPIClient(session=fake_session, chapter_api_url="https://hadith.example.org/api",
                             show_progress=False)
    with pytest.raises(HadithAPIError):
        client.fetch_chapter(bukhari, 0)
    assert fake_session.get_calls == []


class TestQuranClient:
    def test_surah_urls(self):
        client = QuranAPIClient(session=object(), show_progress=False)
        assert client.surah_urls(2) == [
            "https://api.alquran.cloud/v1/surah/2",
            "https://api.alquran.cloud/v1/surah/2/en.asad",
            "https://api.alquran.cloud/v1/surah/2/ur.ahmedali",
            "https://api.alquran.cloud/v1/surah/2/ar.alafasy",
        ]

    @pytest.mark.parametrize("number", [0, 115])
    def test_out_of_range(self, fake_session, number):
        client = QuranAPIClient(session=fake_session, show_progress=False)
        with pytest.raises(QuranAPIError):
            client.fetch_surah(number)
        assert fake_session.get_calls == []

    def test_fetch_surah(self, fatiha_session):
        data = QuranAPIClient(session=fatiha_session, show_progress=False).fetch_surah(1)
        assert data.info.number_of_ayahs == 3
        assert data.info.revelation_type == "Meccan"
        assert len(data.audio_urls) == 3


class TestWebhook:
    def test_hadith_lookup_body(self, fake_session):
        fake_session.add(WEBHOOK, {"text": "Actions are by intentions", "reference": "Bukhari 1",
                                   "narrator": "'Umar", "grade": "Sahih"})
        record = WebhookClient(WEBHOOK, session=fake_session).lookup_hadith("bukhari", "intentions")

        assert fake_session.post_calls == [
            (WEBHOOK, {"type": "hadith", "collection": "bukhari", "query": "intentions"})
        ]
        assert record.text == "Actions are by intentions"
        assert record.grade == "Sahih"
        assert record.chain is None

    def test_verse_lookup_body(self, fake_session):
        fake_session.add(WEBHOOK, [{"text": "In the name of God", "reference": 1}, {"text": "ignored"}])
        record = WebhookClient(WEBHOOK, session=fake_session).lookup_verse(1, 1)

        assert fake_session.post_calls[0][1] == {"type": "quran", "surah": 1, "verse": 1}
        assert record.text == "In the name of God"
        assert record.reference == "1"

    def test_not_configured(self, fake_session):
        client = WebhookClient("", session=fake_session)
        assert not client.enabled
        with pytest.raises(WebhookError):
            client.lookup_verse(1, 1)
        assert fake_session.post_calls == []

    @pytest.mark.parametrize("payload", ["plain text", 42])
    def test_unexpected_shape(self, fake_session, payload):
        fake_session.add(WEBHOOK, payload)
        with pytest.raises(WebhookError):
            WebhookClient(WEBHOOK, session=fake_session).lookup_hadith("muslim", "1")

    def test_http_error(self, fake_session):
        fake_session.add(WEBHOOK, status_code=502)
        with pytest.raises(WebhookError):
            WebhookClient(WEBHOOK, session=fake_session).lookup_hadith("muslim", "1")
