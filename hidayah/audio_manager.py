# hidayah/audio_manager.py
import asyncio
import os
import shutil
import sys
import threading
import time
from pathlib import Path
from typing import Callable, Optional
from urllib.parse import urlparse

import aiofiles
import aiohttp
import pygame
from colorama import Fore, Style
from mutagen.mp3 import MP3

from .utils import user_dir


class AudioManager:
    """
    Clip backend for SequentialAudioPlayer.

    Each clip is downloaded into the user cache directory, checked with
    mutagen, then played through pygame's mixer. A worker thread watches the
    mixer and reports completion or failure exactly once per clip.
    """
    DOWNLOAD_TIMEOUT = 30

    def __init__(self, audio_dir: Optional[Path] = None):
        self.audio_dir = audio_dir
        if self.audio_dir is None:
            try:
                self.audio_dir = Path(user_dir("cache", "audio_cache"))
            except OSError as e_path:
                print(f"{Fore.RED}Critical Error determining audio cache path: {e_path}", file=sys.stderr)
                print(f"{Fore.YELLOW}Audio download/playback may not work correctly.", file=sys.stderr)

        # --- Pygame init ---
        try:
            pygame.mixer.init()
        except pygame.error as e:
            print(f"{Fore.RED}Error initializing pygame mixer: {e}", file=sys.stderr)
            print(f"{Fore.YELLOW}Audio playback will be disabled.", file=sys.stderr)
            self.mixer_initialized = False
        else:
            self.mixer_initialized = True

        self.current_audio: Optional[Path] = None
        self.duration = 0.0
        self.start_time = 0.0
        self._worker: Optional[threading.Thread] = None
        self._stop_event = threading.Event()
        self._mixer_lock = threading.Lock()

    def get_audio_path(self, url: str) -> Optional[Path]:
        """Cache path for a clip URL, e.g. .../ar.alafasy/1.mp3 -> ar.alafasy_1.mp3"""
        if not self.audio_dir:
            return None
        parts = [p for p in urlparse(url).path.split('/') if p]
        name = "_".join(parts[-2:]) if parts else "clip.mp3"
        safe_name = "".join(c for c in name if c.isalnum() or c in ('.', '_', '-'))
        if not safe_name.endswith('.mp3'):
            safe_name += '.mp3'
        return self.audio_dir / safe_name

    async def download_clip(self, url: str) -> Path:
        """Download a clip unless a valid copy is already cached."""
        filename = self.get_audio_path(url)
        if filename is None:
            raise RuntimeError("Audio directory not set. Cannot download audio.")

        if filename.exists() and filename.stat().st_size > 0:
            try:
                MP3(filename)
                return filename
            except Exception:
                filename.unlink(missing_ok=True)

        temp_file = filename.with_suffix('.tmp')
        headers = {'User-Agent': 'Mozilla/5.0', 'Accept': '*/*', 'Accept-Encoding': 'identity'}
        timeout = aiohttp.ClientTimeout(total=self.DOWNLOAD_TIMEOUT)
        try:
            async with aiohttp.ClientSession(timeout=timeout) as session:
                async with session.get(url, headers=headers) as response:
                    response.raise_for_status()
                    async with aiofiles.open(temp_file, mode='wb') as f:
                        async for chunk in response.content.iter_chunked(8192):
                            await f.write(chunk)

            if temp_file.stat().st_size == 0:
                raise ValueError("Download resulted in empty file.")
            MP3(temp_file)
            temp_file.replace(filename)
            return filename
        except Exception:
            temp_file.unlink(missing_ok=True)
            raise

    # --- ClipBackend ---
    def play(self, url: str, on_complete: Callable[[], None], on_error: Callable[[Exception], None]) -> None:
        if not self.mixer_initialized:
            on_error(RuntimeError("Audio system not initialized. Cannot play."))
            return
        self.stop()
        self._stop_event = threading.Event()
        self._worker = threading.Thread(
            target=self._run_clip, args=(url, on_complete, on_error, self._stop_event), daemon=True
        )
        self._worker.start()

    def _run_clip(self, url: str, on_complete, on_error, stop_event: threading.Event):
        try:
            file_path = asyncio.run(self.download_clip(url))
            duration = MP3(str(file_path)).info.length
            with self._mixer_lock:
                # stop() sets the event before taking the lock
                if stop_event.is_set():
                    return
                pygame.mixer.music.load(str(file_path))
                pygame.mixer.music.play()
                self.duration = duration
                self.current_audio = file_path
                self.start_time = time.time()
        except Exception as e:
            if not stop_event.is_set():
                on_error(e)
            return

        # Poll until the mixer goes quiet or we are told to stop
        while not stop_event.is_set():
            if not pygame.mixer.music.get_busy():
                break
            time.sleep(0.1)

        if stop_event.is_set():
            with self._mixer_lock:
                if self._stop_event is stop_event:
                    try:
                        pygame.mixer.music.stop()
                    except pygame.error as e:
                        print(f"{Fore.YELLOW}Note: Pygame mixer error during stop: {e}", file=sys.stderr)
            return
        on_complete()

    def stop(self) -> None:
        """Stop the clip in flight, if any. Its callbacks will not fire."""
        self._stop_event.set()
        if not self.mixer_initialized:
            return
        with self._mixer_lock:
            try:
                pygame.mixer.music.stop()
                pygame.mixer.music.unload()
            except pygame.error as e:
                print(f"{Fore.YELLOW}Note: Pygame mixer error during stop/unload: {e}", file=sys.stderr)
        if self._worker and self._worker.is_alive() and self._worker is not threading.current_thread():
            self._worker.join(timeout=0.5)
        self._worker = None
        self.current_audio = None
        self.duration = 0.0

    @property
    def position(self) -> float:
        if not self.current_audio:
            return 0.0
        return min(time.time() - self.start_time, self.duration)

    def format_time(self, seconds: float) -> str:
        """Format seconds to MM:SS"""
        if seconds < 0:
            seconds = 0
        return f"{int(seconds // 60):02d}:{int(seconds % 60):02d}"

    def get_progress_bar(self, width: int = 30) -> str:
        if not self.duration:
            return Style.DIM + "--:--"
        progress = min(self.position / self.duration, 1.0)
        filled = int(width * progress)
        bar = Fore.GREEN + "█" * filled + Fore.WHITE + "░" * (width - filled) + Style.RESET_ALL
        return f"{bar} {self.format_time(self.position)}/{self.format_time(self.duration)}"

    def clear_cache(self) -> int:
        """Delete downloaded clips. Returns the number of files removed."""
        if not self.audio_dir or not self.audio_dir.exists():
            return 0
        self.stop()
        removed = 0
        for entry in os.listdir(self.audio_dir):
            path = self.audio_dir / entry
            if path.is_file():
                path.unlink()
                removed += 1
            elif path.is_dir():
                shutil.rmtree(path)
        return removed
