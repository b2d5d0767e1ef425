"""
Component base class for data-only components.

Components hold the state an entity carries between frames. Save
fragments are components too (see roomkeeper.save.fragments), which is
what lets the save directory dump and restore them without per-type
code.

Usage:
    class Position(Component):
        x: float = 0.0
        y: float = 0.0
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict


class Component(BaseModel):
    """
    Base class for all components.

    Pydantic gives us validation on assignment and a stable dump format,
    both of which the save directory relies on.
    """

    model_config = ConfigDict(
        arbitrary_types_allowed=True,
        validate_assignment=True,
        extra='forbid',
    )

    # Owning entity, set by Entity.add
    _entity_id: int | None = None

    @property
    def entity_id(self) -> int | None:
        return self._entity_id
