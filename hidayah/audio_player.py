# hidayah/audio_player.py
import threading
from enum import Enum
from functools import partial
from typing import Callable, List, Optional, Protocol

from .exceptions import AudioUnavailableError


class PlayerState(Enum):
    IDLE = "idle"
    PLAYING = "playing"
    PAUSED = "paused"
    FINISHED = "finished"


class ClipBackend(Protocol):
    """Plays one clip at a time and reports back exactly once per clip."""

    def play(self, url: str, on_complete: Callable[[], None],
             on_error: Callable[[Exception], None]) -> None: ...

    def stop(self) -> None: ...


class SequentialAudioPlayer:
    """
    Plays an ordered queue of clips back to back.

    PLAYING(i) moves on to PLAYING(i+1) when clip i ends or fails to load.
    Past the last clip the player is FINISHED and the index goes back to 0.
    Pausing stops the clip in flight; resuming replays the same clip.
    Callbacks from a clip that has since been stopped are ignored.
    """

    def __init__(self, backend: ClipBackend,
                 on_clip_error: Optional[Callable[[int, Exception], None]] = None):
        self.backend = backend
        self.on_clip_error = on_clip_error
        self.urls: List[str] = []
        self.index = 0
        self.state = PlayerState.IDLE
        self._token = 0
        self._lock = threading.RLock()
        self._dispatching = False
        self._deferred: Optional[int] = None

    # --- Queue lifecycle ---
    def load(self, urls: List[str]):
        """Replace the queue. Whatever was playing is torn down first."""
        with self._lock:
            self._teardown()
            self.urls = list(urls)

    def reset(self):
        """Forced teardown to IDLE with an empty queue."""
        with self._lock:
            self._teardown()
            self.urls = []

    def _teardown(self):
        self._token += 1
        if self.state == PlayerState.PLAYING:
            self.backend.stop()
        self.index = 0
        self._set_state(PlayerState.IDLE)

    # --- User actions ---
    def start(self):
        with self._lock:
            if not self.urls:
                raise AudioUnavailableError("This Surah does not have audio")
            if self.state == PlayerState.PLAYING:
                return
            if self.state == PlayerState.PAUSED:
                self.resume()
                return
            self._play_from(self.index)

    def pause(self):
        with self._lock:
            if self.state != PlayerState.PLAYING:
                return
            self._token += 1
            self.backend.stop()
            self._set_state(PlayerState.PAUSED)

    def resume(self):
        with self._lock:
            if self.state != PlayerState.PAUSED:
                return
            self._play_from(self.index)

    def toggle(self):
        """Play/pause button: pause while playing, otherwise start or resume."""
        with self._lock:
            if self.state == PlayerState.PLAYING:
                self.pause()
            else:
                self.start()

    # --- Queue driving ---
    @property
    def is_playing(self) -> bool:
        return self.state == PlayerState.PLAYING

    @property
    def current_url(self) -> Optional[str]:
        if self.state in (PlayerState.PLAYING, PlayerState.PAUSED) and self.index < len(self.urls):
            return self.urls[self.index]
        return None

    def _play_from(self, index: int):
        # Iterative so a run of clips failing synchronously cannot recurse
        next_index: Optional[int] = index
        while next_index is not None:
            if next_index >= len(self.urls):
                self._finish()
                return
            self._token += 1
            token = self._token
            self.index = next_index
            self._set_state(PlayerState.PLAYING)

            self._deferred = None
            self._dispatching = True
            try:
                self.backend.play(
                    self.urls[next_index],
                    on_complete=partial(self._clip_completed, token, next_index),
                    on_error=partial(self._clip_failed, token, next_index),
                )
            except Exception as e:
                self._clip_failed(token, next_index, e)
            finally:
                self._dispatching = False
            next_index = self._deferred

    def _advance(self, token: int, index: int):
        if token != self._token or self.state != PlayerState.PLAYING:
            return
        if self._dispatching:
            self._deferred = index + 1
        else:
            self._play_from(index + 1)

    def _clip_completed(self, token: int, index: int):
        with self._lock:
            self._advance(token, index)

    def _clip_failed(self, token: int, index: int, error: Optional[Exception] = None):
        with self._lock:
            if token != self._token or self.state != PlayerState.PLAYING:
                return
            if self.on_clip_error:
                self.on_clip_error(index, error)
            self._advance(token, index)

    def _finish(self):
        self.index = 0
        self._set_state(PlayerState.FINISHED)

    def _set_state(self, state: PlayerState):
        self.state = state
