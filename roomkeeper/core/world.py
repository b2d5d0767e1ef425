"""
World container for the entities of one scene.

Each Scene owns one World. The save engine walks ``World.entities`` in
insertion order, so that order is what "discovery order" means for
fragment matching.

Usage:
    world = World()
    lion = world.create_entity("Lion")
    lion.add(AnimalState(name="Leo"))
"""

from __future__ import annotations

from typing import Iterator, TypeVar

from roomkeeper.core.entity import Entity
from roomkeeper.core.component import Component
from roomkeeper.core.events import EventBus, EngineEvent


C = TypeVar('C', bound=Component)


class World:
    """
    Container for entities.

    Provides:
    - Entity management (create, destroy, query)
    - A component index for fast queries
    - Event bus integration
    """

    def __init__(self, event_bus: EventBus | None = None):
        self.event_bus = event_bus or EventBus()

        self._entities: dict[int, Entity] = {}
        self._entities_by_name: dict[str, Entity] = {}
        self._entities_to_destroy: list[int] = []

        # component_type -> entity ids
        self._component_index: dict[type[Component], set[int]] = {}

    # Entity Management

    def create_entity(self, name: str = "") -> Entity:
        """Create a new entity in this world."""
        entity = Entity(name)
        self._add_entity(entity)
        return entity

    def add_entity(self, entity: Entity) -> Entity:
        """
        Add an existing entity to this world.

        Raises:
            ValueError: If the entity is already in this world
        """
        if entity.id in self._entities:
            raise ValueError(f"Entity {entity.id} already in world")

        self._add_entity(entity)
        return entity

    def _add_entity(self, entity: Entity) -> None:
        entity._world = self
        self._entities[entity.id] = entity
        self._entities_by_name[entity.name] = entity

        for component in entity.components:
            self._index_component(entity, type(component))

        self.event_bus.publish(EngineEvent.ENTITY_CREATED, entity=entity)

    def destroy_entity(self, entity: Entity | int) -> None:
        """
        Mark an entity for destruction.

        The entity is removed on the next ``update``.
        """
        entity_id = entity.id if isinstance(entity, Entity) else entity

        if entity_id not in self._entities:
            return

        if entity_id not in self._entities_to_destroy:
            self._entities_to_destroy.append(entity_id)

    def _process_destroyed_entities(self) -> None:
        for entity_id in self._entities_to_destroy:
            entity = self._entities.pop(entity_id, None)
            if entity is None:
                continue

            for component in entity.components:
                self._unindex_component(entity, type(component))

            if self._entities_by_name.get(entity.name) is entity:
                del self._entities_by_name[entity.name]

            entity._world = None
            self.event_bus.publish(EngineEvent.ENTITY_DESTROYED, entity=entity)

        self._entities_to_destroy.clear()

    def get_entity_by_name(self, name: str) -> Entity | None:
        return self._entities_by_name.get(name)

    @property
    def entities(self) -> Iterator[Entity]:
        """Iterate over all entities in insertion order."""
        return iter(self._entities.values())

    @property
    def entity_count(self) -> int:
        return len(self._entities)

    # Component indexing

    def _index_component(self, entity: Entity, component_type: type[Component]) -> None:
        self._component_index.setdefault(component_type, set()).add(entity.id)

    def _unindex_component(self, entity: Entity, component_type: type[Component]) -> None:
        if component_type in self._component_index:
            self._component_index[component_type].discard(entity.id)

    def _on_component_added(self, entity: Entity, component: Component) -> None:
        self._index_component(entity, type(component))
        self.event_bus.publish(
            EngineEvent.COMPONENT_ADDED,
            entity=entity,
            component=component
        )

    def _on_component_removed(self, entity: Entity, component: Component) -> None:
        self._unindex_component(entity, type(component))
        self.event_bus.publish(
            EngineEvent.COMPONENT_REMOVED,
            entity=entity,
            component=component
        )

    # Queries

    def get_entities_with(self, *component_types: type[Component]) -> list[Entity]:
        """
        Entities that have ALL specified components, in insertion order.
        """
        if not component_types:
            return []

        candidate_ids: set[int] | None = None
        for comp_type in component_types:
            ids = self._component_index.get(comp_type, set())
            candidate_ids = ids.copy() if candidate_ids is None else candidate_ids & ids

        return [e for e in self._entities.values() if e.id in candidate_ids]

    def get_entities_with_base(self, base: type[C]) -> list[Entity]:
        """
        Active entities holding at least one component derived from ``base``.

        Subclass matches can't use the exact-type index, so this scans in
        insertion order.
        """
        return [
            e for e in self._entities.values()
            if e.active and e.components_of(base)
        ]

    def update(self, dt: float) -> None:
        """Flush entities destroyed during this frame."""
        self._process_destroyed_entities()

    def clear(self) -> None:
        """Remove all entities."""
        for entity_id in list(self._entities.keys()):
            self.destroy_entity(entity_id)
        self._process_destroyed_entities()
        self._component_index.clear()
