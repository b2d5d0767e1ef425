"""
Save directory - every entity's fragment plus process-wide scalars.

Fragments are grouped by kind into ordered lists. A live entity is
matched to its fragment by (kind, position among the instances of that
kind seen so far in the pass). Lists only grow: surplus fragments from
entities that are not in the current scene stay as they are.
"""

from __future__ import annotations

from typing import Any, Iterable

from pydantic import BaseModel, Field

from roomkeeper.core.entity import Entity
from roomkeeper.save.fragments import Saveable, get_fragment_type, registered_kinds


class SaveDirectory(BaseModel):
    """Aggregate persisted as one save record."""

    version: str = "1.0"
    day: int = 0
    fragments: dict[str, list[dict[str, Any]]] = Field(default_factory=dict)

    def set_initial_references(self, kinds: Iterable[str] | None = None) -> None:
        """
        Reserve an empty slot list for each kind.

        Call once on a freshly built directory. Defaults to every
        registered kind.
        """
        for kind in (registered_kinds() if kinds is None else kinds):
            self.fragments.setdefault(kind, [])

    def slots(self, kind: str) -> list[dict[str, Any]]:
        """Fragments stored for ``kind`` (empty list if none)."""
        return self.fragments.get(kind, [])

    def fragment(self, kind: str, index: int) -> dict[str, Any] | None:
        slots = self.slots(kind)
        return slots[index] if index < len(slots) else None

    def put(self, kind: str, index: int, fragment: dict[str, Any]) -> None:
        """Replace the fragment at ``index``, appending if the list is shorter."""
        slots = self.fragments.setdefault(kind, [])
        if index < len(slots):
            slots[index] = fragment
        else:
            slots.append(fragment)


class FragmentCursor:
    """
    Hands out per-kind instance indices during one save or load pass.

    Use one cursor per pass so the second lion in a scene maps to the
    second "animal" fragment.
    """

    def __init__(self):
        self._seen: dict[str, int] = {}

    def next_index(self, kind: str) -> int:
        index = self._seen.get(kind, 0)
        self._seen[kind] = index + 1
        return index

    def skip(self, entity: Entity) -> None:
        """Consume the indices of ``entity`` without touching its fragments."""
        for component in entity.components_of(Saveable):
            self.next_index(component.kind())

    @classmethod
    def positioned_at(cls, entity: Entity) -> FragmentCursor:
        """
        Cursor at ``entity``'s place in its world's discovery order.

        Raises:
            ValueError: If the entity is not an active member of a world
        """
        world = entity.world
        if world is None:
            raise ValueError(f"{entity!r} is not in a world, pass a FragmentCursor")

        cursor = cls()
        for other in world.get_entities_with_base(Saveable):
            if other is entity:
                return cursor
            cursor.skip(other)
        raise ValueError(f"{entity!r} is not an active entity of its world")


def save_all(
    entity: Entity,
    directory: SaveDirectory,
    cursor: FragmentCursor | None = None,
) -> SaveDirectory:
    """
    Return a copy of ``directory`` with ``entity``'s fragments written in.

    The input directory is not modified. Pass the same cursor for every
    entity in a pass; without one the entity is placed by its position
    among the saveable entities of its world.
    """
    components = entity.components_of(Saveable)
    updated = directory.model_copy(deep=True)
    if not components:
        return updated

    cursor = cursor or FragmentCursor.positioned_at(entity)
    for component in components:
        kind = component.kind()
        updated.put(kind, cursor.next_index(kind), component.to_fragment())

    return updated


def load_all(
    entity: Entity,
    directory: SaveDirectory,
    cursor: FragmentCursor | None = None,
) -> None:
    """
    Overwrite ``entity``'s saveable fields from ``directory``.

    Components with no stored fragment keep their constructed values.
    Without a cursor the entity is placed as in save_all.
    """
    components = entity.components_of(Saveable)
    if not components:
        return

    cursor = cursor or FragmentCursor.positioned_at(entity)
    for component in components:
        fragment = directory.fragment(component.kind(), cursor.next_index(component.kind()))
        if fragment is not None:
            component.apply_fragment(fragment)


def increment_all_day_since_data(
    directory: SaveDirectory,
    entities: Iterable[Entity],
) -> SaveDirectory:
    """
    Advance every "days since" counter by one day.

    Counters are bumped both in the stored fragments and on the live
    components, otherwise the next scene save would write the old live
    values back over the directory.
    """
    for kind, slots in directory.fragments.items():
        kind_type = get_fragment_type(kind)
        if kind_type is None:
            continue
        for fragment in slots:
            for counter in kind_type.day_counters:
                if isinstance(fragment.get(counter), int):
                    fragment[counter] += 1

    for entity in entities:
        for component in entity.components_of(Saveable):
            for counter in component.day_counters:
                setattr(component, counter, getattr(component, counter) + 1)

    return directory
