# hidayah/narrator.py
import re
from typing import Callable, List, Optional

# Stops at either an ASCII or a full-width colon
_NAME = r"([^:：]+?)"
_TAIL = r"(?:\s+said)?\s*[:：]"

NARRATOR_PATTERNS: List[re.Pattern] = [
    re.compile(r"^Narrated\s+" + _NAME + _TAIL, re.IGNORECASE),
    re.compile(r"^It was narrated (?:that )?" + _NAME + _TAIL, re.IGNORECASE),
    re.compile(r"^Reported\s+by\s+" + _NAME + _TAIL, re.IGNORECASE),
    re.compile(r"^From\s+" + _NAME + _TAIL, re.IGNORECASE),
    re.compile(r"^On the authority of\s+" + _NAME + _TAIL, re.IGNORECASE),
]

COLON_WINDOW = 60


def _match_prefix_patterns(text: str) -> Optional[str]:
    for pattern in NARRATOR_PATTERNS:
        match = pattern.match(text)
        if match:
            return match.group(1).strip()
    return None


def _match_leading_colon(text: str) -> Optional[str]:
    """Everything before a colon that shows up early in the text."""
    idx = text.find(":")
    if 0 < idx < COLON_WINDOW:
        return text[:idx].strip()
    return None


# Evaluated in order, first non-empty answer wins
RULES: List[Callable[[str], Optional[str]]] = [
    _match_prefix_patterns,
    _match_leading_colon,
]


def extract_narrator(text: Optional[str]) -> Optional[str]:
    """
    Pull a narrator attribution off the start of an English hadith text.

    "Narrated Abu Huraira: The Prophet said..." -> "Abu Huraira"

    This is a heuristic. It returns None when nothing looks like an attribution.
    """
    if not text:
        return None
    for rule in RULES:
        narrator = rule(text)
        if narrator:
            return narrator
    return None
