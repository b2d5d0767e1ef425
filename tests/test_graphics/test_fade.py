import pytest
from roomkeeper.graphics.fade import ScreenFade, FadeDirection

def test_fade_out_runs_to_completion():
    fade = ScreenFade(duration=0.5)
    assert not fade.is_active

    fade.begin_fade_out()
    fade.update(0.25)
    assert fade.is_active
    assert fade.progress == pytest.approx(0.5)

    fade.update(0.25)
    assert not fade.is_active
    assert fade.progress == 1.0

def test_fade_in_returns_to_clear():
    fade = ScreenFade(duration=1.0)
    fade.progress = 1.0

    fade.begin_fade_in()
    fade.update(2.0)

    assert fade.progress == 0.0
    assert fade.direction is FadeDirection.NONE

def test_invalid_duration():
    with pytest.raises(ValueError):
        ScreenFade(duration=0)
