import pytest
from roomkeeper.core.events import EngineEvent
from roomkeeper.core.scene import Scene, SceneManager

class CountingScene(Scene):
    def __init__(self, name):
        super().__init__(name)
        self.updates = 0

    def update(self, dt):
        self.updates += 1

def test_load_switches_on_next_update(event_bus):
    manager = SceneManager(event_bus)
    manager.register("Savanna", lambda: CountingScene("Savanna"))

    manager.load("Savanna")
    assert manager.current is None

    manager.update(0.016)
    assert manager.current.name == "Savanna"
    assert manager.current.is_active
    assert manager.current.updates == 1

def test_load_unknown_scene():
    manager = SceneManager()
    with pytest.raises(KeyError):
        manager.load("Nowhere")

def test_switch_publishes_and_destroys_old(event_bus):
    switched = []
    event_bus.subscribe(EngineEvent.SCENE_SWITCHED, lambda e: switched.append(e["scene"].name), weak=False)

    manager = SceneManager(event_bus)
    old = CountingScene("Entrance")
    old.world.create_entity("visitor")
    manager.switch(old)
    manager.update(0.016)

    manager.switch(CountingScene("Aviary"))
    manager.update(0.016)

    assert switched == ["Entrance", "Aviary"]
    assert not old.is_active
    assert old.world.entity_count == 0

def test_push_pop(event_bus):
    manager = SceneManager(event_bus)
    base = CountingScene("Park")
    menu = CountingScene("Menu")

    manager.push(base)
    manager.push(menu)
    manager.update(0.016)
    assert manager.current is menu
    assert not base.is_active

    manager.pop()
    manager.update(0.016)
    assert manager.current is base
    assert base.is_active
