# hidayah/models.py
from pydantic import BaseModel, ConfigDict
from typing import List, Optional


class Collection(BaseModel):
    model_config = ConfigDict(frozen=True)

    value: str              # e.g., "bukhari"
    label: str              # e.g., "Sahih al-Bukhari"
    ara_edition: str        # edition code on the hadith editions API
    eng_edition: str
    urd_edition: str
    chapter_book: str       # book key on the per-chapter API


class SurahEntry(BaseModel):
    model_config = ConfigDict(frozen=True)

    number: int
    label: str              # e.g., "1. Al-Fatiha"
    juz: int                # juz in which the surah begins


class Hadith(BaseModel):
    hadith_number: int
    book: str               # collection label
    section: str = ""
    arabic_text: str = ""
    english_text: str = ""
    urdu_text: str = ""
    narrator: Optional[str] = None
    grade: Optional[str] = None
    reference: Optional[str] = None   # "Book 1, Hadith 1"

    def has_text(self) -> bool:
        return bool(self.arabic_text or self.english_text or self.urdu_text)


class PagedView(BaseModel):
    page: int
    page_size: int
    total_pages: int
    total_matches: int
    records: List[Hadith]

    @property
    def has_next(self) -> bool:
        return self.page < self.total_pages

    @property
    def has_previous(self) -> bool:
        return self.page > 1


class Verse(BaseModel):
    number: int             # number in surah
    arabic: str = ""
    english: str = ""
    urdu: str = ""


class SurahInfo(BaseModel):
    number: int
    name: str               # Arabic name
    english_name: str
    english_name_translation: str
    number_of_ayahs: int
    revelation_type: str    # "Meccan" or "Medinan"


class SurahData(BaseModel):
    info: SurahInfo
    verses: List[Verse]
    audio_urls: List[str] = []
    audio_ayahs: List[int] = []     # numberInSurah of each audio_urls entry
    tafsir: str = ""


class WebhookRecord(BaseModel):
    text: Optional[str] = None
    reference: Optional[str] = None
    narrator: Optional[str] = None
    chain: Optional[str] = None
    grade: Optional[str] = None


class Notification(BaseModel):
    title: str
    description: str = ""
    variant: str = "default"    # "default" or "destructive"
