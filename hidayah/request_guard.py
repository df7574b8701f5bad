# hidayah/request_guard.py
import threading


class RequestGuard:
    """
    Hands out increasing request tokens.

    A view takes a token before it starts a load and only applies the result
    if the token is still the latest one when the load finishes. Anything that
    invalidates the current selection (new collection, new surah) calls
    `invalidate()` so an older load in flight gets dropped.
    """

    def __init__(self):
        self._lock = threading.Lock()
        self._latest = 0

    def issue(self) -> int:
        with self._lock:
            self._latest += 1
            return self._latest

    def invalidate(self) -> None:
        self.issue()

    def is_current(self, token: int) -> bool:
        with self._lock:
            return token == self._latest

    @property
    def latest(self) -> int:
        return self._latest
