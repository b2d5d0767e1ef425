"""
World module - game-side collaborators of the save engine.

Fragment kinds live in roomkeeper.world.kinds and are imported by the
game that uses them, which is what registers them.
"""

from roomkeeper.world.days import DayCounter

__all__ = [
    "DayCounter",
]
