"""
Shared fixtures and test doubles for Hidayah tests.

No test touches the network or the sound card: HTTP goes through FakeSession
and audio through RecordingBackend.
"""

import pytest
import requests

from hidayah.registry import get_collection

HADITH_EDITIONS = "https://cdn.jsdelivr.net/gh/fawazahmed0/hadith-api@1/editions/"
QURAN_API = "https://api.alquran.cloud/v1/surah/"


class FakeResponse:
    def __init__(self, status_code=200, payload=None, invalid_json=False):
        self.status_code = status_code
        self._payload = payload
        self._invalid_json = invalid_json

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.exceptions.HTTPError(f"{self.status_code} Error", response=self)

    def json(self):
        if self._invalid_json:
            raise ValueError("Expecting value: line 1 column 1 (char 0)")
        return self._payload


class FakeSession:
    """Minimal stand-in for requests.Session keyed by URL; unknown URLs are 404."""

    def __init__(self, routes=None):
        self.routes = dict(routes or {})
        self.headers = {}
        self.get_calls = []
        self.post_calls = []

    def add(self, url, payload=None, status_code=200, invalid_json=False, error=None):
        self.routes[url] = error or FakeResponse(status_code, payload, invalid_json)

    def _respond(self, url):
        route = self.routes.get(url)
        if route is None:
            return FakeResponse(404, None)
        if isinstance(route, Exception):
            raise route
        return route

    def get(self, url, timeout=None):
        self.get_calls.append(url)
        return self._respond(url)

    def post(self, url, json=None, timeout=None):
        self.post_calls.append((url, json))
        return self._respond(url)


class RecordingBackend:
    """Clip backend that only records; tests finish or fail clips by hand."""

    def __init__(self, fail_urls=(), raise_urls=()):
        self.played = []
        self.stops = 0
        self.fail_urls = set(fail_urls)
        self.raise_urls = set(raise_urls)
        self._on_complete = None
        self._on_error = None

    def play(self, url, on_complete, on_error):
        self.played.append(url)
        if url in self.raise_urls:
            raise RuntimeError(f"cannot open {url}")
        self._on_complete = on_complete
        self._on_error = on_error
        if url in self.fail_urls:
            on_error(RuntimeError(f"404 for {url}"))

    def stop(self):
        self.stops += 1

    def complete(self):
        callback, self._on_complete = self._on_complete, None
        callback()

    def fail(self):
        callback = self._on_error
        callback(RuntimeError("network error"))


def edition(hadiths, sections=None):
    doc = {"hadiths": hadiths}
    if sections is not None:
        doc["metadata"] = {"sections": sections}
    return doc


def surah_edition(ayahs, number=1, english_name="Al-Faatiha"):
    return {
        "code": 200,
        "data": {
            "number": number,
            "name": "سُورَةُ ٱلْفَاتِحَةِ",
            "englishName": english_name,
            "englishNameTranslation": "The Opening",
            "numberOfAyahs": len(ayahs),
            "revelationType": "Meccan",
            "ayahs": ayahs,
        },
    }


@pytest.fixture
def bukhari():
    return get_collection("bukhari")


@pytest.fixture
def fake_session():
    return FakeSession()


@pytest.fixture
def backend():
    return RecordingBackend()


@pytest.fixture
def bukhari_editions():
    """Arabic, English and Urdu editions sharing hadith numbers 1-3, delivered out of order."""
    arabic = edition([
        {"hadithnumber": 3, "text": "حديث ثلاثة", "reference": {"book": 1, "hadith": 3}},
        {"hadithnumber": 1, "text": "إنما الأعمال بالنيات", "reference": {"book": 1, "hadith": 1}},
        {"hadithnumber": 2, "text": "حديث اثنان", "reference": {"book": 1, "hadith": 2}},
    ])
    english = edition(
        [
            {"hadithnumber": 1, "text": "Narrated 'Umar bin Al-Khattab: I heard Allah's Messenger saying...",
             "reference": {"book": 1, "hadith": 1},
             "grades": [{"name": "Darussalam", "grade": "Sahih"}]},
            {"hadithnumber": 2, "text": "Narrated 'Aisha: Al-Harith bin Hisham asked...",
             "reference": {"book": 1, "hadith": 2}, "grades": []},
            {"hadithnumber": 3, "text": "Narrated Ibn 'Abbas: The Prophet used to...",
             "reference": {"book": 2, "hadith": 1}, "grades": []},
        ],
        sections={"1": "Revelation", "2": "Belief"},
    )
    urdu = edition([
        {"hadithnumber": 2, "text": "ہم سے عبداللہ نے بیان کیا"},
        {"hadithnumber": 1, "text": "اعمال کا دارومدار نیتوں پر ہے"},
        {"hadithnumber": 3, "text": "ہم سے یحییٰ نے بیان کیا"},
    ])
    return arabic, english, urdu


@pytest.fixture
def bukhari_session(fake_session, bukhari_editions):
    arabic, english, urdu = bukhari_editions
    fake_session.add(HADITH_EDITIONS + "ara-bukhari.json", arabic)
    fake_session.add(HADITH_EDITIONS + "eng-bukhari.json", english)
    fake_session.add(HADITH_EDITIONS + "urd-bukhari.json", urdu)
    return fake_session


@pytest.fixture
def fatiha_session(fake_session):
    """alquran.cloud responses for a three-ayah surah 1."""
    base = QURAN_API + "1"
    fake_session.add(base, surah_edition([
        {"number": 1, "numberInSurah": 1, "text": "بِسْمِ ٱللَّهِ ٱلرَّحْمَٰنِ ٱلرَّحِيمِ"},
        {"number": 2, "numberInSurah": 2, "text": "ٱلْحَمْدُ لِلَّهِ رَبِّ ٱلْعَٰلَمِينَ"},
        {"number": 3, "numberInSurah": 3, "text": "ٱلرَّحْمَٰنِ ٱلرَّحِيمِ"},
    ]))
    fake_session.add(base + "/en.asad", surah_edition([
        {"numberInSurah": 1, "text": "In the name of God, The Most Gracious, The Dispenser of Grace:"},
        {"numberInSurah": 2, "text": "All praise is due to God alone, the Sustainer of all the worlds,"},
        {"numberInSurah": 3, "text": "the Most Gracious, the Dispenser of Grace,"},
    ]))
    fake_session.add(base + "/ur.ahmedali", surah_edition([
        {"numberInSurah": 1, "text": "شروع الله کا نام لے کر جو بڑا مہربان نہایت رحم والا ہے"},
        {"numberInSurah": 2, "text": "سب تعریفیں الله کے لیے ہیں"},
        {"numberInSurah": 3, "text": "بڑا مہربان نہایت رحم والا"},
    ]))
    fake_session.add(base + "/ar.alafasy", surah_edition([
        {"numberInSurah": 1, "audio": "https://cdn.islamic.network/quran/audio/128/ar.alafasy/1.mp3"},
        {"numberInSurah": 2, "audio": "https://cdn.islamic.network/quran/audio/128/ar.alafasy/2.mp3"},
        {"numberInSurah": 3, "audio": "https://cdn.islamic.network/quran/audio/128/ar.alafasy/3.mp3"},
    ]))
    return fake_session


@pytest.fixture
def make_backend():
    return RecordingBackend


@pytest.fixture
def make_edition():
    return edition


@pytest.fixture
def make_response():
    return FakeResponse
