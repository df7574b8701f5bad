# hidayah/quran_reader.py
from typing import Optional

from .audio_player import ClipBackend, PlayerState, SequentialAudioPlayer
from .exceptions import AudioUnavailableError, QuranAPIError
from .models import SurahData
from .notifications import Notifier
from .quran_api_client import QuranAPIClient
from .registry import first_surah_in_juz, get_surah
from .request_guard import RequestGuard


class QuranReader:
    """State behind the Qur'an screen: selected surah/juz, verses and recitation."""

    def __init__(self, client: QuranAPIClient, backend: ClipBackend, notifier: Optional[Notifier] = None):
        self.client = client
        self.notifier = notifier or Notifier()
        self.guard = RequestGuard()
        self.player = SequentialAudioPlayer(backend, on_clip_error=self._on_clip_error)
        self.selected_surah: Optional[int] = None
        self.selected_juz: Optional[int] = None
        self.data: Optional[SurahData] = None

    def select_surah(self, number: int) -> bool:
        if get_surah(number) is None:
            self.notifier.error("Invalid Surah", "Enter a number between 1-114")
            return False
        self.selected_surah = number
        self.selected_juz = None
        return self._load(number)

    def select_juz(self, juz: int) -> bool:
        """Jump to the first surah that starts in `juz`."""
        surah = first_surah_in_juz(juz)
        self.selected_juz = juz
        self.selected_surah = None
        if surah is None:
            self.notifier.error("No Surah starts in this Juz", f"Juz {juz} begins inside a longer Surah")
            return False
        return self._load(surah.number)

    def _load(self, number: int) -> bool:
        token = self.guard.issue()
        # Old recitation stops before the new surah is fetched
        self.player.reset()
        try:
            data = self.client.fetch_surah(number)
        except QuranAPIError:
            if self.guard.is_current(token):
                self.notifier.error("Error loading Surah", "Please check your connection and try again")
            return False

        if not self.guard.is_current(token):
            return False
        self.data = data
        self.player.load(data.audio_urls)
        self.notifier.success(
            "Surah loaded successfully",
            f"{data.info.english_name} - {data.info.number_of_ayahs} verses",
        )
        return True

    # --- Recitation ---
    def toggle_audio(self) -> PlayerState:
        try:
            self.player.toggle()
        except AudioUnavailableError:
            self.notifier.error("Audio not available", "This Surah does not have audio")
        return self.player.state

    def stop_audio(self):
        if self.data:
            self.player.load(self.data.audio_urls)
        else:
            self.player.reset()

    @property
    def playing_ayah(self) -> Optional[int]:
        """Number in surah of the ayah being recited, if any."""
        if self.player.state != PlayerState.PLAYING:
            return None
        return self._ayah_number(self.player.index)

    def _ayah_number(self, index: int) -> int:
        # Ayahs without a recitation are left out of the queue
        ayahs = self.data.audio_ayahs if self.data else []
        return ayahs[index] if index < len(ayahs) else index + 1

    def _on_clip_error(self, index: int, error: Optional[Exception]):
        self.notifier.error("Audio error", f"Failed to load audio for ayah {self._ayah_number(index)}")
