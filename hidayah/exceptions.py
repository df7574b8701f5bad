# hidayah/exceptions.py


class HidayahError(Exception):
    """Base exception for Hidayah errors"""


class HadithAPIError(HidayahError):
    """Raised when a hadith edition or chapter could not be fetched"""


class QuranAPIError(HidayahError):
    """Raised when a surah edition could not be fetched"""


class WebhookError(HidayahError):
    """Raised when the lookup webhook fails or returns garbage"""


class NoResultsError(HidayahError):
    """All sources answered but nothing displayable came back"""


class AudioUnavailableError(HidayahError):
    """Playback requested for an empty audio queue"""
