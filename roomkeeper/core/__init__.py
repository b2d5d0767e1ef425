"""
Core runtime module.

Exports:
- Component: Pydantic component base
- Entity: Component container
- World: Per-scene entity container
- Scene, SceneManager: Scene stack and named scene loader
- EventBus, Event, EngineEvent, SaveEvent, TransitionEvent: Event system
"""

from roomkeeper.core.component import Component
from roomkeeper.core.entity import Entity
from roomkeeper.core.events import (
    EventBus,
    Event,
    EngineEvent,
    SaveEvent,
    TransitionEvent,
)
from roomkeeper.core.world import World
from roomkeeper.core.scene import Scene, SceneManager

__all__ = [
    "Component",
    "Entity",
    "World",
    "Scene",
    "SceneManager",
    "EventBus",
    "Event",
    "EngineEvent",
    "SaveEvent",
    "TransitionEvent",
]
