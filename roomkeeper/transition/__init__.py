"""
Transition module - save, fade, then switch scenes.
"""

from roomkeeper.transition.coordinator import (
    TransitionCoordinator,
    TransitionState,
    FadeSignal,
    AudioFadeSignal,
    SceneLoader,
)

__all__ = [
    "TransitionCoordinator",
    "TransitionState",
    "FadeSignal",
    "AudioFadeSignal",
    "SceneLoader",
]
