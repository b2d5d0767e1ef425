"""
Scene transition coordinator.

Moving to another room runs in this order:
1. save the outgoing room into the temp record
2. start the screen fade-out
3. wait, one poll every ``poll_interval`` seconds, until neither the
   screen fade nor the music fade is active
4. ask the scene loader for the new room

The wait is a generator advanced from the frame loop through
``update(dt)``, so rendering and audio keep running while it waits and
tests can drive it with synthetic time.
"""

from __future__ import annotations

import logging
from enum import Enum, auto
from typing import TYPE_CHECKING, Generator, Optional, Protocol

from roomkeeper.core.events import EventBus, TransitionEvent

if TYPE_CHECKING:
    from roomkeeper.save.sync import SaveSynchronizer


logger = logging.getLogger(__name__)


class FadeSignal(Protocol):
    """Visual fade the coordinator starts and then waits on."""

    @property
    def is_active(self) -> bool: ...

    def begin_fade_out(self) -> None: ...


class AudioFadeSignal(Protocol):
    """Music fade the coordinator only waits on."""

    @property
    def is_active(self) -> bool: ...


class SceneLoader(Protocol):
    def load(self, name: str) -> None: ...


class TransitionState(Enum):
    IDLE = auto()
    FADING = auto()
    SWITCH_REQUESTED = auto()


class TransitionCoordinator:
    """
    Sequences save, fade and scene switch for room changes.

    A request can't be cancelled and has no timeout: a fade that never
    finishes holds the transition forever.

    Usage:
        coordinator = TransitionCoordinator(sync, fade, music, scene_manager)
        coordinator.request_scene("Aviary")
        # each frame
        coordinator.update(dt)
    """

    def __init__(
        self,
        sync: SaveSynchronizer,
        fade: FadeSignal,
        audio: AudioFadeSignal,
        loader: SceneLoader,
        event_bus: Optional[EventBus] = None,
        poll_interval: float = 0.05,
    ):
        if poll_interval <= 0:
            raise ValueError(f"Poll interval must be positive: {poll_interval}")
        self.sync = sync
        self.fade = fade
        self.audio = audio
        self.loader = loader
        self.event_bus = event_bus
        self.poll_interval = poll_interval

        self._state = TransitionState.IDLE
        self._pending_scene: Optional[str] = None
        self._waiter: Optional[Generator[None, float, None]] = None

    @property
    def state(self) -> TransitionState:
        return self._state

    @property
    def pending_scene(self) -> Optional[str]:
        """Scene waiting for the fades to finish, if any."""
        return self._pending_scene

    @property
    def is_busy(self) -> bool:
        return self._state is not TransitionState.IDLE

    def request_scene(self, name: str) -> bool:
        """
        Save the current room and start moving to ``name``.

        Returns:
            False if another transition is already running
        """
        if self.is_busy:
            logger.warning(
                f"Ignoring request for '{name}', already moving to '{self._pending_scene}'"
            )
            return False

        self.sync.save_scene()

        self.fade.begin_fade_out()
        self._state = TransitionState.FADING
        self._pending_scene = name
        if self.event_bus:
            self.event_bus.publish(TransitionEvent.FADE_STARTED, scene=name)

        self._waiter = self._wait_for_fade(name)
        self._advance(None)
        return True

    def update(self, dt: float) -> None:
        """Feed frame time to the wait loop. Call once per frame."""
        if self._waiter is not None:
            self._advance(dt)

    def _advance(self, dt: Optional[float]) -> None:
        try:
            self._waiter.send(dt)
        except StopIteration:
            self._waiter = None

    def _fades_active(self) -> bool:
        return self.fade.is_active or self.audio.is_active

    def _wait_for_fade(self, name: str) -> Generator[None, float, None]:
        while self._fades_active():
            elapsed = 0.0
            while elapsed < self.poll_interval:
                elapsed += yield

        self._state = TransitionState.SWITCH_REQUESTED
        if self.event_bus:
            self.event_bus.publish(TransitionEvent.SCENE_SWITCH_REQUESTED, scene=name)
        logger.info(f"Switching scene to {name}")
        self.loader.load(name)

        self._pending_scene = None
        self._state = TransitionState.IDLE
