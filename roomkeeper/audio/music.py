"""
Music player wrapper for pygame.mixer.music.
Handles BGM playback and fade-out-then-play crossfades, and reports
whether a fade is still running so room transitions can wait on it.
"""

from __future__ import annotations

import logging
import pygame
from typing import Optional


logger = logging.getLogger(__name__)


class MusicPlayer:
    """
    Background music on pygame's single music channel.

    Features:
    - Streaming playback (OGG/MP3/WAV)
    - Volume control
    - Crossfading (fade out, then fade the next track in)
    - ``is_active`` while any fade is in flight
    """

    def __init__(self):
        self._volume: float = 1.0
        self._current_track: str = ""

        # Fade bookkeeping, in pygame ticks (ms)
        self._fade_until: int = 0
        self._next_track: Optional[tuple[str, int]] = None  # (path, fade_in_ms)

    @property
    def volume(self) -> float:
        return self._volume

    @volume.setter
    def volume(self, value: float) -> None:
        self._volume = max(0.0, min(1.0, value))
        if pygame.mixer.get_init():
            pygame.mixer.music.set_volume(self._volume)

    @property
    def current_track(self) -> str:
        return self._current_track

    @property
    def is_active(self) -> bool:
        """True while music is fading out, fading in, or waiting to switch tracks."""
        return self._next_track is not None or pygame.time.get_ticks() < self._fade_until

    def play(self, track_path: str, loops: int = -1, fade_ms: int = 0) -> None:
        """
        Play a music track.

        Args:
            track_path: Path to the music file
            loops: Number of loops (-1 for infinite)
            fade_ms: Fade in duration in milliseconds
        """
        if not pygame.mixer.get_init():
            logger.warning("Audio system not initialized, cannot play music.")
            return

        try:
            pygame.mixer.music.load(track_path)
            pygame.mixer.music.play(loops=loops, fade_ms=fade_ms)
            pygame.mixer.music.set_volume(self._volume)
        except pygame.error as e:
            logger.error(f"Failed to load music '{track_path}': {e}")
            return

        self._current_track = track_path
        self._fade_until = pygame.time.get_ticks() + fade_ms
        logger.info(f"Playing BGM: {track_path}")

    def stop(self, fade_ms: int = 0) -> None:
        """Stop playback, optionally fading out."""
        self._next_track = None
        if not pygame.mixer.get_init():
            return

        if fade_ms > 0:
            pygame.mixer.music.fadeout(fade_ms)
            self._fade_until = pygame.time.get_ticks() + fade_ms
        else:
            pygame.mixer.music.stop()
            self._fade_until = 0
        self._current_track = ""

    def crossfade(self, track_path: str, duration_sec: float = 1.0) -> None:
        """
        Fade the current track out, then fade ``track_path`` in.

        pygame has one music channel, so the tracks don't overlap; each
        half of the fade takes half of ``duration_sec``. Call update()
        every frame to start the second half.
        """
        half_ms = int(duration_sec * 500)
        if not self.is_playing() or not self._current_track:
            self.play(track_path, fade_ms=half_ms)
            return

        pygame.mixer.music.fadeout(half_ms)
        self._fade_until = pygame.time.get_ticks() + half_ms
        self._next_track = (track_path, half_ms)

    def update(self) -> None:
        """Start the queued track once the fade-out has finished."""
        if self._next_track is None or pygame.time.get_ticks() < self._fade_until:
            return
        track_path, fade_in_ms = self._next_track
        self._next_track = None
        self.play(track_path, fade_ms=fade_in_ms)

    def is_playing(self) -> bool:
        return bool(pygame.mixer.get_init() and pygame.mixer.music.get_busy())
