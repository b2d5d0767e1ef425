import pytest
from pydantic import ValidationError
from roomkeeper.core.entity import Entity
from roomkeeper.core.component import Component
from roomkeeper.core.events import EngineEvent
from roomkeeper.world.kinds import AnimalState, GateState
from roomkeeper.save.fragments import Saveable

class Position(Component):
    x: float = 0.0
    y: float = 0.0

def test_entity_creation():
    e = Entity()
    assert e.id > 0
    assert e.active is True

def test_add_get_component():
    e = Entity()
    p = e.add(Position(x=10, y=20))

    assert e.get(Position) is p
    assert p.entity_id == e.id

def test_duplicate_component_rejected():
    e = Entity()
    e.add(Position())
    with pytest.raises(ValueError):
        e.add(Position())

def test_remove_component():
    e = Entity()
    e.add(Position())
    e.remove(Position)

    assert not e.has(Position)
    assert e.try_get(Position) is None

def test_component_validation():
    with pytest.raises(ValidationError):
        Position(x={"invalid": "type"})

def test_components_of_matches_subclasses():
    e = Entity()
    e.add(Position())
    animal = e.add(AnimalState(name="Leo"))
    gate = e.add(GateState(gate_id="north"))

    assert e.components_of(Saveable) == [animal, gate]

def test_world_entity_management(world):
    e = Entity()
    e.add(Position())
    world.add_entity(e)

    assert world.entity_count == 1
    assert world.get_entities_with(Position) == [e]

def test_world_rejects_duplicate_entity(world):
    e = world.create_entity()
    with pytest.raises(ValueError):
        world.add_entity(e)

def test_saveable_query_keeps_insertion_order(world):
    first = world.create_entity("first")
    first.add(AnimalState(name="a"))
    world.create_entity("plain").add(Position())
    second = world.create_entity("second")
    second.add(GateState())
    third = world.create_entity("third")
    third.add(AnimalState(name="c"))

    assert world.get_entities_with_base(Saveable) == [first, second, third]

def test_saveable_query_skips_inactive(world):
    e = world.create_entity()
    e.add(AnimalState())
    e.active = False

    assert world.get_entities_with_base(Saveable) == []

def test_world_cleanup_publishes(world, event_bus):
    destroyed = []
    event_bus.subscribe(EngineEvent.ENTITY_DESTROYED, lambda ev: destroyed.append(ev["entity"]), weak=False)

    e = world.create_entity()
    world.destroy_entity(e)
    world.update(0.1)

    assert world.entity_count == 0
    assert destroyed == [e]
