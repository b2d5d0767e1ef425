"""
Graphics module - transition visuals.
"""

from roomkeeper.graphics.fade import ScreenFade, FadeDirection

__all__ = [
    "ScreenFade",
    "FadeDirection",
]
