"""
Entity class - a container for components.

Usage:
    entity = Entity("Lion")
    entity.add(AnimalState(name="Leo"))

    state = entity.get(AnimalState)
"""

from __future__ import annotations

from typing import TypeVar, Iterator, Any
import itertools

from roomkeeper.core.component import Component


C = TypeVar('C', bound=Component)


class Entity:
    """
    A named bag of components.

    Entities are identified by unique IDs. Component insertion order is
    kept, which the save pass uses as the order fragments are visited.
    """

    _id_counter = itertools.count(1)

    def __init__(self, name: str = ""):
        self._id = next(Entity._id_counter)
        self._name = name or f"Entity_{self._id}"
        self._components: dict[type[Component], Component] = {}
        self._active = True
        self._world = None  # Set by World when added

    @property
    def id(self) -> int:
        """Unique entity identifier."""
        return self._id

    @property
    def name(self) -> str:
        return self._name

    @property
    def active(self) -> bool:
        """Inactive entities are skipped by save and load passes."""
        return self._active

    @active.setter
    def active(self, value: bool) -> None:
        self._active = value

    @property
    def world(self) -> Any:
        """The World this entity belongs to."""
        return self._world

    def add(self, component: C) -> C:
        """
        Attach a component.

        Raises:
            ValueError: If the entity already has this component type
        """
        comp_type = type(component)

        if comp_type in self._components:
            raise ValueError(
                f"Entity {self._name} already has component {comp_type.__name__}"
            )

        component._entity_id = self._id
        self._components[comp_type] = component

        if self._world:
            self._world._on_component_added(self, component)

        return component

    def remove(self, component_type: type[C]) -> C | None:
        """Detach a component, returning it (or None if absent)."""
        component = self._components.pop(component_type, None)

        if component:
            component._entity_id = None
            if self._world:
                self._world._on_component_removed(self, component)

        return component

    def get(self, component_type: type[C]) -> C:
        """
        Get a component by type.

        Raises:
            KeyError: If component not found
        """
        if component_type not in self._components:
            raise KeyError(
                f"Entity {self._name} does not have component {component_type.__name__}"
            )
        return self._components[component_type]  # type: ignore

    def try_get(self, component_type: type[C]) -> C | None:
        return self._components.get(component_type)  # type: ignore

    def has(self, *component_types: type[Component]) -> bool:
        """Check if entity has all specified component types."""
        return all(ct in self._components for ct in component_types)

    def components_of(self, base: type[C]) -> list[C]:
        """All components that are instances of ``base``, in insertion order."""
        return [c for c in self._components.values() if isinstance(c, base)]

    @property
    def components(self) -> Iterator[Component]:
        return iter(self._components.values())

    def __repr__(self) -> str:
        components = ", ".join(c.__name__ for c in self._components.keys())
        return f"Entity({self._name}, id={self._id}, components=[{components}])"

    def __hash__(self) -> int:
        return hash(self._id)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Entity):
            return self._id == other._id
        return False
