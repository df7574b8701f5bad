# hidayah/registry.py
import difflib
from typing import List, Optional

from .models import Collection, SurahEntry

TOTAL_SURAHS = 114
TOTAL_JUZ = 30

# Hadith collections and their addressing on the editions / chapter APIs
COLLECTIONS: List[Collection] = [
    Collection(value="bukhari", label="Sahih al-Bukhari", ara_edition="ara-bukhari",
               eng_edition="eng-bukhari", urd_edition="urd-bukhari", chapter_book="sahih-bukhari"),
    Collection(value="muslim", label="Sahih Muslim", ara_edition="ara-muslim",
               eng_edition="eng-muslim", urd_edition="urd-muslim", chapter_book="sahih-muslim"),
    Collection(value="tirmidhi", label="Jami' at-Tirmidhi", ara_edition="ara-tirmidhi",
               eng_edition="eng-tirmidhi", urd_edition="urd-tirmidhi", chapter_book="al-tirmidhi"),
    Collection(value="abudawud", label="Sunan Abu Dawud", ara_edition="ara-abudawud",
               eng_edition="eng-abudawud", urd_edition="urd-abudawud", chapter_book="abu-dawood"),
    Collection(value="nasai", label="Sunan an-Nasa'i", ara_edition="ara-nasai",
               eng_edition="eng-nasai", urd_edition="urd-nasai", chapter_book="sunan-nasai"),
    Collection(value="ibnmajah", label="Sunan Ibn Majah", ara_edition="ara-ibnmajah",
               eng_edition="eng-ibnmajah", urd_edition="urd-ibnmajah", chapter_book="ibn-e-majah"),
]

DEFAULT_COLLECTION = "bukhari"

# (number, name, juz in which the surah begins)
_SURAH_TABLE = [
    (1, "Al-Fatiha", 1),
    (2, "Al-Baqarah", 1),
    (3, "Ali 'Imran", 3),
    (4, "An-Nisa", 4),
    (5, "Al-Ma'idah", 6),
    (6, "Al-An'am", 7),
    (7, "Al-A'raf", 8),
    (8, "Al-Anfal", 9),
    (9, "At-Tawbah", 10),
    (10, "Yunus", 11),
    (11, "Hud", 11),
    (12, "Yusuf", 12),
    (13, "Ar-Ra'd", 13),
    (14, "Ibrahim", 13),
    (15, "Al-Hijr", 14),
    (16, "An-Nahl", 14),
    (17, "Al-Isra", 15),
    (18, "Al-Kahf", 15),
    (19, "Maryam", 16),
    (20, "Ta-Ha", 16),
    (21, "Al-Anbya", 17),
    (22, "Al-Hajj", 17),
    (23, "Al-Mu'minun", 18),
    (24, "An-Nur", 18),
    (25, "Al-Furqan", 18),
    (26, "Ash-Shu'ara", 19),
    (27, "An-Naml", 19),
    (28, "Al-Qasas", 20),
    (29, "Al-'Ankabut", 20),
    (30, "Ar-Rum", 21),
    (31, "Luqman", 21),
    (32, "As-Sajdah", 21),
    (33, "Al-Ahzab", 21),
    (34, "Saba", 22),
    (35, "Fatir", 22),
    (36, "Ya-Sin", 22),
    (37, "As-Saffat", 23),
    (38, "Sad", 23),
    (39, "Az-Zumar", 23),
    (40, "Ghafir", 24),
    (41, "Fussilat", 24),
    (42, "Ash-Shuraa", 25),
    (43, "Az-Zukhruf", 25),
    (44, "Ad-Dukhan", 25),
    (45, "Al-Jathiyah", 25),
    (46, "Al-Ahqaf", 26),
    (47, "Muhammad", 26),
    (48, "Al-Fath", 26),
    (49, "Al-Hujurat", 26),
    (50, "Qaf", 26),
    (51, "Adh-Dhariyat", 27),
    (52, "At-Tur", 27),
    (53, "An-Najm", 27),
    (54, "Al-Qamar", 27),
    (55, "Ar-Rahman", 27),
    (56, "Al-Waqi'ah", 27),
    (57, "Al-Hadid", 27),
    (58, "Al-Mujadila", 28),
    (59, "Al-Hashr", 28),
    (60, "Al-Mumtahanah", 28),
    (61, "As-Saf", 28),
    (62, "Al-Jumu'ah", 28),
    (63, "Al-Munafiqun", 28),
    (64, "At-Taghabun", 28),
    (65, "At-Talaq", 28),
    (66, "At-Tahrim", 28),
    (67, "Al-Mulk", 29),
    (68, "Al-Qalam", 29),
    (69, "Al-Haqqah", 29),
    (70, "Al-Ma'arij", 29),
    (71, "Nuh", 29),
    (72, "Al-Jinn", 29),
    (73, "Al-Muzzammil", 29),
    (74, "Al-Muddaththir", 29),
    (75, "Al-Qiyamah", 29),
    (76, "Al-Insan", 29),
    (77, "Al-Mursalat", 29),
    (78, "An-Naba", 30),
    (79, "An-Nazi'at", 30),
    (80, "'Abasa", 30),
    (81, "At-Takwir", 30),
    (82, "Al-Infitar", 30),
    (83, "Al-Mutaffifin", 30),
    (84, "Al-Inshiqaq", 30),
    (85, "Al-Buruj", 30),
    (86, "At-Tariq", 30),
    (87, "Al-A'la", 30),
    (88, "Al-Ghashiyah", 30),
    (89, "Al-Fajr", 30),
    (90, "Al-Balad", 30),
    (91, "Ash-Shams", 30),
    (92, "Al-Layl", 30),
    (93, "Ad-Duhaa", 30),
    (94, "Ash-Sharh", 30),
    (95, "At-Tin", 30),
    (96, "Al-'Alaq", 30),
    (97, "Al-Qadr", 30),
    (98, "Al-Bayyinah", 30),
    (99, "Az-Zalzalah", 30),
    (100, "Al-'Adiyat", 30),
    (101, "Al-Qari'ah", 30),
    (102, "At-Takathur", 30),
    (103, "Al-'Asr", 30),
    (104, "Al-Humazah", 30),
    (105, "Al-Fil", 30),
    (106, "Quraysh", 30),
    (107, "Al-Ma'un", 30),
    (108, "Al-Kawthar", 30),
    (109, "Al-Kafirun", 30),
    (110, "An-Nasr", 30),
    (111, "Al-Masad", 30),
    (112, "Al-Ikhlas", 30),
    (113, "Al-Falaq", 30),
    (114, "An-Nas", 30),
]

SURAHS: List[SurahEntry] = [
    SurahEntry(number=num, label=f"{num}. {name}", juz=juz) for num, name, juz in _SURAH_TABLE
]

_COLLECTIONS_BY_VALUE = {c.value: c for c in COLLECTIONS}


def get_collection(value: str) -> Optional[Collection]:
    """Look up a hadith collection by its user-facing id (case-insensitive)."""
    if not value:
        return None
    return _COLLECTIONS_BY_VALUE.get(value.strip().lower())


def get_surah(number: int) -> Optional[SurahEntry]:
    if 1 <= number <= TOTAL_SURAHS:
        return SURAHS[number - 1]
    return None


def first_surah_in_juz(juz: int) -> Optional[SurahEntry]:
    """
    Return the first surah whose starting juz equals `juz`.

    Juz that begin in the middle of a long surah (e.g. juz 2 inside Al-Baqarah)
    have no entry and yield None, same as the reader's juz selector.
    """
    for surah in SURAHS:
        if surah.juz == juz:
            return surah
    return None


def find_surahs_by_name(query: str, limit: int = 5) -> List[SurahEntry]:
    """Fuzzy match a surah name, e.g. 'rahman' -> Ar-Rahman."""
    names = {name.lower(): num for num, name, _ in _SURAH_TABLE}
    query = query.strip().lower()
    if not query:
        return []
    # Exact substring hits first, then difflib's close matches
    hits = [num for name, num in names.items() if query in name]
    for match in difflib.get_close_matches(query, names.keys(), n=limit, cutoff=0.5):
        if names[match] not in hits:
            hits.append(names[match])
    return [SURAHS[num - 1] for num in hits[:limit]]
