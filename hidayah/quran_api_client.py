# hidayah/quran_api_client.py
from typing import Any

from .api_client import JSONAPIClient
from .exceptions import QuranAPIError
from .hadith_merger import extract_audio_ayahs, extract_audio_urls, merge_verses
from .models import SurahData, SurahInfo
from .registry import TOTAL_SURAHS


class QuranAPIClient(JSONAPIClient):
    BASE_URL = "https://api.alquran.cloud/v1/surah/"
    ENGLISH_EDITION = "en.asad"
    URDU_EDITION = "ur.ahmedali"
    AUDIO_EDITION = "ar.alafasy"
    error_class = QuranAPIError

    def surah_urls(self, surah_number: int) -> list:
        base = f"{self.BASE_URL}{surah_number}"
        return [
            base,
            f"{base}/{self.ENGLISH_EDITION}",
            f"{base}/{self.URDU_EDITION}",
            f"{base}/{self.AUDIO_EDITION}",
        ]

    def fetch_surah(self, surah_number: int) -> SurahData:
        """
        Load the Arabic text, both translations and the recitation of a surah.

        All four editions must load; the Arabic edition also has to carry the
        surah metadata, otherwise QuranAPIError is raised.
        """
        if not 1 <= surah_number <= TOTAL_SURAHS:
            raise QuranAPIError(f"Invalid surah number: {surah_number}")

        arabic, english, urdu, audio = self.fetch_all(
            self.surah_urls(surah_number), desc=f"Loading Surah {surah_number}"
        )

        for payload in (arabic, english, urdu):
            if not isinstance(payload, dict) or not isinstance(payload.get("data"), dict):
                raise QuranAPIError("Failed to fetch complete verse data")

        info = self._surah_info(surah_number, arabic["data"])
        return SurahData(
            info=info,
            verses=merge_verses(arabic, english, urdu),
            audio_urls=extract_audio_urls(audio),
            audio_ayahs=extract_audio_ayahs(audio),
            tafsir=self._tafsir_summary(info),
        )

    @staticmethod
    def _surah_info(surah_number: int, data: Any) -> SurahInfo:
        try:
            return SurahInfo(
                number=data.get("number", surah_number),
                name=data.get("name") or "",
                english_name=data.get("englishName") or f"Surah {surah_number}",
                english_name_translation=data.get("englishNameTranslation") or "",
                number_of_ayahs=data.get("numberOfAyahs") or len(data.get("ayahs") or []),
                revelation_type=data.get("revelationType") or "",
            )
        except ValueError as e:
            raise QuranAPIError(f"Unexpected surah metadata: {e}")

    @staticmethod
    def _tafsir_summary(info: SurahInfo) -> str:
        return (f"Surah {info.english_name} ({info.name}) - {info.english_name_translation}. "
                f"This Surah contains {info.number_of_ayahs} verses and was revealed in {info.revelation_type}.")
