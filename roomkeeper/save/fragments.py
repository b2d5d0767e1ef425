"""
Save fragments - the per-entity state that goes into a save directory.

A fragment kind is a Saveable component class. Registering it lets a
fresh directory reserve a slot for it and lets the day pass find its
"days since" counters.

Usage:
    @register_fragment
    class AnimalState(Saveable):
        fragment_kind = "animal"
        day_counters = ("days_since_fed",)

        name: str = ""
        hunger: int = 0
        days_since_fed: int = 0
"""

from __future__ import annotations

import logging
from typing import Any, ClassVar

from pydantic import ValidationError

from roomkeeper.core.component import Component


logger = logging.getLogger(__name__)


class Saveable(Component):
    """
    Component whose fields are persisted across scenes.

    Class attributes:
        fragment_kind: Directory key for this kind (defaults to class name)
        day_counters: Integer fields advanced by one on every new day
    """

    fragment_kind: ClassVar[str] = ""
    day_counters: ClassVar[tuple[str, ...]] = ()

    @classmethod
    def kind(cls) -> str:
        return cls.fragment_kind or cls.__name__

    def refresh_before_save(self) -> None:
        """
        Bring derived fields up to date before a save or load pass.

        Override when a kind caches values that must be consistent with
        its other fields before they are written out.
        """

    def to_fragment(self) -> dict[str, Any]:
        """Field map written into the directory."""
        return self.model_dump(mode="json")

    def apply_fragment(self, fragment: dict[str, Any]) -> None:
        """
        Overwrite live fields from a stored fragment.

        Keys this kind doesn't declare are skipped, and a value that
        fails validation leaves the live field alone.
        """
        fields = type(self).model_fields
        for name, value in fragment.items():
            if name not in fields:
                logger.debug(f"{self.kind()}: ignoring unknown field '{name}'")
                continue
            try:
                setattr(self, name, value)
            except ValidationError as e:
                logger.warning(f"{self.kind()}: keeping live '{name}', stored value invalid: {e}")


_fragment_registry: dict[str, type[Saveable]] = {}


def register_fragment(cls: type[Saveable]) -> type[Saveable]:
    """Decorator registering a Saveable kind."""
    _fragment_registry[cls.kind()] = cls
    return cls


def get_fragment_type(kind: str) -> type[Saveable] | None:
    return _fragment_registry.get(kind)


def registered_kinds() -> list[str]:
    """Registered kinds, in registration order."""
    return list(_fragment_registry)
