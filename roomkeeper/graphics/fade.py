"""
Screen fade used for room transitions.

Tracks fade progress only; drawing the overlay is up to the renderer,
which reads ``progress`` and ``color`` each frame.
"""

from __future__ import annotations

from enum import Enum, auto


class FadeDirection(Enum):
    NONE = auto()
    OUT = auto()   # scene -> color
    IN = auto()    # color -> scene


class ScreenFade:
    """
    Timed fade to and from a solid color.

    Usage:
        fade = ScreenFade(duration=0.5)
        fade.begin_fade_out()
        # each frame
        fade.update(dt)
        if not fade.is_active:
            ...
    """

    def __init__(self, duration: float = 0.5, color: tuple[float, float, float] = (0.0, 0.0, 0.0)):
        if duration <= 0:
            raise ValueError(f"Fade duration must be positive: {duration}")
        self.duration = duration
        self.color = color
        self.progress = 0.0  # 0 = no fade, 1 = fully faded
        self._direction = FadeDirection.NONE

    @property
    def is_active(self) -> bool:
        """True while a fade is still moving."""
        return self._direction is not FadeDirection.NONE

    @property
    def direction(self) -> FadeDirection:
        return self._direction

    def begin_fade_out(self) -> None:
        self._direction = FadeDirection.OUT

    def begin_fade_in(self) -> None:
        self._direction = FadeDirection.IN

    def update(self, dt: float) -> None:
        """Advance the fade. Stops itself once it reaches the end."""
        if self._direction is FadeDirection.OUT:
            self.progress = min(1.0, self.progress + dt / self.duration)
            if self.progress >= 1.0:
                self._direction = FadeDirection.NONE
        elif self._direction is FadeDirection.IN:
            self.progress = max(0.0, self.progress - dt / self.duration)
            if self.progress <= 0.0:
                self._direction = FadeDirection.NONE
