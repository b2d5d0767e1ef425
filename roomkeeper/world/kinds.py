"""
Fragment kinds for a small zoo: animals and enclosure gates.
"""

from __future__ import annotations

from pydantic import Field

from roomkeeper.save.fragments import Saveable, register_fragment


@register_fragment
class AnimalState(Saveable):
    """An animal's needs and mood."""

    fragment_kind = "animal"
    day_counters = ("days_since_fed", "days_since_cleaned")

    name: str = ""
    hunger: int = Field(default=0, ge=0, le=100)
    happiness: int = Field(default=50, ge=0, le=100)
    days_since_fed: int = 0
    days_since_cleaned: int = 0
    mood: str = "content"

    def refresh_before_save(self) -> None:
        # mood is derived, keep it in step with the needs it summarises
        if self.hunger > 70 or self.days_since_fed > 2:
            self.mood = "hungry"
        elif self.happiness < 30 or self.days_since_cleaned > 3:
            self.mood = "grumpy"
        else:
            self.mood = "content"


@register_fragment
class GateState(Saveable):
    """Whether an enclosure gate is open."""

    fragment_kind = "gate"

    gate_id: str = ""
    is_open: bool = False
