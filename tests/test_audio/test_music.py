import pytest
from roomkeeper.audio.music import MusicPlayer

# All tests here need the mock_pygame fixture from conftest
pytestmark = pytest.mark.usefixtures("mock_pygame")

def set_ticks(ms):
    import pygame
    pygame.time.get_ticks.return_value = ms

def test_idle_player_is_not_active():
    assert not MusicPlayer().is_active

def test_fade_out_is_active_until_deadline():
    import pygame
    player = MusicPlayer()
    player.play("zoo.ogg")

    player.stop(fade_ms=500)
    pygame.mixer.music.fadeout.assert_called_once_with(500)
    assert player.is_active

    set_ticks(499)
    assert player.is_active
    set_ticks(500)
    assert not player.is_active

def test_crossfade_starts_next_track_after_fade_out():
    import pygame
    player = MusicPlayer()
    player.play("day.ogg")
    pygame.mixer.music.get_busy.return_value = True

    player.crossfade("night.ogg", duration_sec=1.0)
    assert player.is_active
    assert player.current_track == "day.ogg"

    set_ticks(200)
    player.update()
    assert player.current_track == "day.ogg"

    set_ticks(500)
    player.update()
    assert player.current_track == "night.ogg"
    pygame.mixer.music.load.assert_called_with("night.ogg")
    assert player.is_active  # fading in

    set_ticks(1000)
    assert not player.is_active

def test_immediate_stop_clears_fade():
    player = MusicPlayer()
    player.stop(fade_ms=500)
    player.stop()
    assert not player.is_active

def test_volume_clamped():
    player = MusicPlayer()
    player.volume = 3.0
    assert player.volume == 1.0
