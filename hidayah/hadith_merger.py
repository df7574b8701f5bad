# hidayah/hadith_merger.py
from typing import Any, Dict, Iterable, List, Optional, Tuple

from .models import Collection, Hadith, Verse
from .narrator import extract_narrator


def _is_number(value: Any) -> bool:
    # bool is an int subclass, JSON true/false is not a hadith number
    return isinstance(value, int) and not isinstance(value, bool)


def _entries(payload: Any, key: str) -> list:
    """Return payload[key] if it is a list, otherwise an empty list."""
    if not isinstance(payload, dict):
        return []
    entries = payload.get(key)
    return entries if isinstance(entries, list) else []


def index_by_number(entries: Iterable[Any], key: str = "hadithnumber") -> Dict[int, dict]:
    """Index entries by their numeric id. A repeated id overwrites the earlier entry."""
    indexed: Dict[int, dict] = {}
    for entry in entries:
        if isinstance(entry, dict) and _is_number(entry.get(key)):
            indexed[entry[key]] = entry
    return indexed


def _text(entry: Optional[dict], key: str = "text") -> str:
    if not entry:
        return ""
    value = entry.get(key)
    return value if isinstance(value, str) else ""


def _first_reference(*entries: Optional[dict]) -> Optional[dict]:
    for entry in entries:
        if entry and isinstance(entry.get("reference"), dict):
            return entry["reference"]
    return None


def format_reference(reference: Optional[dict]) -> Optional[str]:
    """Render as 'Book 1, Hadith 5'; None unless both parts are present."""
    if not reference or reference.get("book") is None or reference.get("hadith") is None:
        return None
    return f"Book {reference.get('book')}, Hadith {reference.get('hadith')}"


def format_grades(*entries: Optional[dict]) -> Optional[str]:
    """Join the grade labels of the first source that has a non-empty grade list."""
    grades: list = []
    for entry in entries:
        if entry and isinstance(entry.get("grades"), list) and entry["grades"]:
            grades = entry["grades"]
            break

    labels = []
    for grade in grades:
        if not isinstance(grade, dict):
            continue
        label = grade.get("grade") or grade.get("name")
        if label:
            labels.append(str(label))
    return ", ".join(labels) or None


def merge_editions(collection: Collection, arabic: Any, english: Any, urdu: Any) -> List[Hadith]:
    """
    Merge the Arabic, English and Urdu edition documents of one collection.

    Each document looks like {"metadata": {"sections": {...}}, "hadiths": [...]},
    where every hadith has a "hadithnumber", a "text" and optionally
    "reference" and "grades". The result has one Hadith per distinct number,
    sorted by number, regardless of the order entries arrived in. Any field of
    the wrong shape is treated as missing.
    """
    ara_by = index_by_number(_entries(arabic, "hadiths"))
    eng_by = index_by_number(_entries(english, "hadiths"))
    urd_by = index_by_number(_entries(urdu, "hadiths"))

    sections: Dict[str, Any] = {}
    if isinstance(english, dict) and isinstance(english.get("metadata"), dict):
        raw_sections = english["metadata"].get("sections")
        if isinstance(raw_sections, dict):
            sections = raw_sections

    merged: List[Hadith] = []
    for number in sorted(set(eng_by) | set(ara_by) | set(urd_by)):
        e, a, u = eng_by.get(number), ara_by.get(number), urd_by.get(number)

        reference = _first_reference(e, a, u)
        section = ""
        if reference and reference.get("book") is not None:
            section = sections.get(str(reference["book"])) or ""

        english_text = _text(e)
        hadith = Hadith(
            hadith_number=number,
            book=collection.label,
            section=str(section),
            arabic_text=_text(a),
            english_text=english_text,
            urdu_text=_text(u),
            narrator=extract_narrator(english_text) if english_text else None,
            grade=format_grades(e, a, u),
            reference=format_reference(reference),
        )
        if hadith.has_text():
            merged.append(hadith)
    return merged


def normalize_chapter(collection: Collection, payload: Any) -> List[Hadith]:
    """
    Normalize a per-chapter document into the same Hadith shape.

    Accepts a bare list, {"hadiths": [...]} or the paginated
    {"hadiths": {"data": [...]}} form. Entries carry their own narrator and
    status; the narrator heuristic only fills in when the source has none.
    """
    entries: list = []
    if isinstance(payload, list):
        entries = payload
    elif isinstance(payload, dict):
        inner = payload.get("hadiths")
        if isinstance(inner, list):
            entries = inner
        elif isinstance(inner, dict):
            entries = _entries(inner, "data")

    by_number: Dict[int, dict] = {}
    for entry in entries:
        if not isinstance(entry, dict):
            continue
        number = entry.get("hadithNumber")
        if isinstance(number, str) and number.strip().isdigit():
            number = int(number.strip())
        if _is_number(number):
            by_number[number] = entry

    records: List[Hadith] = []
    for number in sorted(by_number):
        entry = by_number[number]
        english_text = _text(entry, "hadithEnglish")
        chapter = entry.get("chapter") if isinstance(entry.get("chapter"), dict) else {}
        narrator = _text(entry, "englishNarrator").strip() or extract_narrator(english_text)
        hadith = Hadith(
            hadith_number=number,
            book=collection.label,
            section=_text(chapter, "chapterEnglish"),
            arabic_text=_text(entry, "hadithArabic"),
            english_text=english_text,
            urdu_text=_text(entry, "hadithUrdu"),
            narrator=narrator or None,
            grade=_text(entry, "status") or None,
            reference=_text(entry, "reference") or None,
        )
        if hadith.has_text():
            records.append(hadith)
    return records


def _ayahs(payload: Any) -> list:
    if isinstance(payload, dict) and isinstance(payload.get("data"), dict):
        return _entries(payload["data"], "ayahs")
    return []


def merge_verses(arabic: Any, english: Any, urdu: Any) -> List[Verse]:
    """Merge three alquran.cloud surah editions by numberInSurah."""
    ara_by = index_by_number(_ayahs(arabic), key="numberInSurah")
    eng_by = index_by_number(_ayahs(english), key="numberInSurah")
    urd_by = index_by_number(_ayahs(urdu), key="numberInSurah")

    verses: List[Verse] = []
    for number in sorted(set(ara_by) | set(eng_by) | set(urd_by)):
        verse = Verse(
            number=number,
            arabic=_text(ara_by.get(number)),
            english=_text(eng_by.get(number)),
            urdu=_text(urd_by.get(number)),
        )
        if verse.arabic or verse.english or verse.urdu:
            verses.append(verse)
    return verses


def _audio_tracks(audio: Any) -> List[Tuple[int, str]]:
    ayahs = sorted(
        index_by_number(_ayahs(audio), key="numberInSurah").items()
    )
    return [(number, entry["audio"]) for number, entry in ayahs
            if isinstance(entry.get("audio"), str) and entry["audio"]]


def extract_audio_urls(audio: Any) -> List[str]:
    """Audio URLs of an audio edition, in ayah order, skipping ayahs without one."""
    return [url for _, url in _audio_tracks(audio)]


def extract_audio_ayahs(audio: Any) -> List[int]:
    """Ayah numbers matching extract_audio_urls position by position."""
    return [number for number, _ in _audio_tracks(audio)]
