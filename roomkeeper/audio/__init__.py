"""
Audio module - background music with fade tracking.
"""

from roomkeeper.audio.music import MusicPlayer

__all__ = [
    "MusicPlayer",
]
