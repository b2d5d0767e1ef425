import pytest
from unittest.mock import MagicMock
from roomkeeper.core.events import TransitionEvent
from roomkeeper.transition.coordinator import TransitionCoordinator, TransitionState

class Signal:
    """Stand-in for a fade whose activity the test flips by hand."""

    def __init__(self, active=False):
        self.is_active = active
        self.started = 0

    def begin_fade_out(self):
        self.started += 1

@pytest.fixture
def parts():
    calls = []
    sync = MagicMock()
    sync.save_scene.side_effect = lambda: calls.append("save")
    fade = Signal()
    fade.begin_fade_out = lambda: (calls.append("fade"), setattr(fade, "is_active", True))
    audio = Signal()
    loader = MagicMock()
    loader.load.side_effect = lambda name: calls.append(f"load:{name}")
    return sync, fade, audio, loader, calls

def make(parts, event_bus=None):
    sync, fade, audio, loader, _ = parts
    return TransitionCoordinator(sync, fade, audio, loader, event_bus=event_bus)

def test_save_happens_before_fade(parts):
    coordinator = make(parts)
    *_, calls = parts

    coordinator.request_scene("Room2")

    assert calls == ["save", "fade"]
    assert coordinator.state is TransitionState.FADING
    assert coordinator.pending_scene == "Room2"

def test_waits_for_visual_fade(parts):
    _, fade, audio, loader, _ = parts
    coordinator = make(parts)

    coordinator.request_scene("Room2")
    for _ in range(10):
        coordinator.update(0.05)
    loader.load.assert_not_called()

    fade.is_active = False
    coordinator.update(0.05)

    loader.load.assert_called_once_with("Room2")
    assert coordinator.state is TransitionState.IDLE
    assert coordinator.pending_scene is None

def test_waits_for_audio_fade(parts):
    _, fade, audio, loader, _ = parts
    audio.is_active = True
    coordinator = make(parts)

    coordinator.request_scene("Room2")
    fade.is_active = False
    coordinator.update(0.05)
    loader.load.assert_not_called()

    audio.is_active = False
    coordinator.update(0.05)
    loader.load.assert_called_once_with("Room2")

def test_polls_on_interval_not_every_frame(parts):
    _, fade, _, loader, _ = parts
    coordinator = make(parts)
    coordinator.request_scene("Room2")
    fade.is_active = False

    coordinator.update(0.02)
    coordinator.update(0.02)
    loader.load.assert_not_called()

    coordinator.update(0.02)
    loader.load.assert_called_once_with("Room2")

def test_no_active_fade_switches_immediately():
    sync, loader = MagicMock(), MagicMock()
    fade = Signal()  # begin_fade_out leaves it inactive
    coordinator = TransitionCoordinator(sync, fade, Signal(), loader)

    coordinator.request_scene("Room2")

    loader.load.assert_called_once_with("Room2")
    assert coordinator.state is TransitionState.IDLE

def test_second_request_is_rejected(parts):
    sync, fade, _, loader, _ = parts
    coordinator = make(parts)

    assert coordinator.request_scene("Room2")
    assert not coordinator.request_scene("Room3")

    fade.is_active = False
    coordinator.update(0.05)
    loader.load.assert_called_once_with("Room2")
    assert sync.save_scene.call_count == 1

def test_update_when_idle_is_harmless(parts):
    coordinator = make(parts)
    coordinator.update(0.05)
    assert coordinator.state is TransitionState.IDLE

def test_events(parts, event_bus):
    _, fade, _, _, _ = parts
    seen = []
    for event_type in TransitionEvent:
        event_bus.subscribe(event_type, lambda e: seen.append((e.type, e["scene"])), weak=False)
    coordinator = make(parts, event_bus)

    coordinator.request_scene("Room2")
    fade.is_active = False
    coordinator.update(0.05)

    assert seen == [
        (TransitionEvent.FADE_STARTED, "Room2"),
        (TransitionEvent.SCENE_SWITCH_REQUESTED, "Room2"),
    ]

def test_invalid_poll_interval(parts):
    sync, fade, audio, loader, _ = parts
    with pytest.raises(ValueError):
        TransitionCoordinator(sync, fade, audio, loader, poll_interval=0)
