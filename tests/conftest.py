import os
import sys
import pytest
from unittest.mock import MagicMock, patch

# Ensure roomkeeper can be imported without installing
sys.path.append(os.getcwd())

@pytest.fixture(autouse=True)
def mock_pygame():
    """
    Global mock for pygame to allow headless testing.
    Autoused for all tests so no mixer or window is ever opened.
    """
    with patch('pygame.init'), \
         patch('pygame.display'), \
         patch('pygame.event'), \
         patch('pygame.time'), \
         patch('pygame.mixer'):

        import pygame
        pygame.time.get_ticks = MagicMock(return_value=0)

        yield

@pytest.fixture
def event_bus():
    """Fresh EventBus for each test."""
    from roomkeeper.core.events import EventBus
    return EventBus()

@pytest.fixture
def world(event_bus):
    """Fresh World for each test."""
    from roomkeeper.core.world import World
    return World(event_bus)

@pytest.fixture
def store(tmp_path):
    """File byte store rooted in a temp directory."""
    from roomkeeper.storage.byte_store import FileByteStore
    return FileByteStore(tmp_path / "saves")

@pytest.fixture
def days():
    from roomkeeper.world.days import DayCounter
    return DayCounter()

@pytest.fixture
def sync(store, days, event_bus, world):
    """Synchronizer wired to the temp store, a day counter and the world."""
    from roomkeeper.save.sync import SaveSynchronizer
    return SaveSynchronizer(store=store, day_counter=days, event_bus=event_bus, world=world)

@pytest.fixture
def add_animal(world):
    """Factory adding an animal entity to the world."""
    from roomkeeper.world.kinds import AnimalState

    def _add(name: str, **fields):
        entity = world.create_entity(name)
        entity.add(AnimalState(name=name, **fields))
        return entity

    return _add
