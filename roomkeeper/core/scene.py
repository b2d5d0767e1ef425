"""
Scene management system.

Scenes are the rooms of the game. The SceneManager keeps a stack of
them and also acts as the named scene loader used by the transition
coordinator:
- Push: Add a new scene on top (e.g., open menu over gameplay)
- Pop: Remove the top scene
- Switch: Replace the current scene entirely
- Load: Switch to a scene registered under a name
"""

from __future__ import annotations

import logging
from typing import Any, Callable

import pygame

from roomkeeper.core.events import EventBus, EngineEvent
from roomkeeper.core.world import World


logger = logging.getLogger(__name__)

SceneFactory = Callable[[], "Scene"]


class Scene:
    """
    Base class for game scenes.

    Each scene owns a World holding the entities that live in that room.

    Lifecycle:
        1. __init__: Called when scene is created
        2. on_enter: Called when scene becomes active
        3. update: Called each frame while active
        4. on_exit: Called when scene is removed or covered
        5. on_destroy: Called when scene is permanently removed
    """

    def __init__(self, name: str, world: World | None = None):
        self.name = name
        self.world: World = world or World()
        self._is_active = False
        self._blocks_update = True    # If True, scene below doesn't update

    @property
    def is_active(self) -> bool:
        """Whether this scene is currently the top scene."""
        return self._is_active

    @property
    def blocks_update(self) -> bool:
        return self._blocks_update

    def on_enter(self) -> None:
        self._is_active = True

    def on_exit(self) -> None:
        self._is_active = False

    def on_destroy(self) -> None:
        self.world.clear()

    def update(self, dt: float) -> None:
        """
        Update scene logic.

        Args:
            dt: Delta time in seconds
        """
        pass

    def handle_event(self, event: pygame.event.Event) -> bool:
        """
        Handle a pygame event.

        Returns:
            True if the event was consumed (don't propagate)
        """
        return False


class SceneManager:
    """
    Manages a stack of scenes.

    Operations are queued and applied at the start of the next update,
    so a scene can request a switch from inside its own update.
    """

    def __init__(self, event_bus: EventBus | None = None):
        self.event_bus = event_bus or EventBus()
        self._stack: list[Scene] = []
        self._pending_operations: list[tuple[str, Any]] = []
        self._factories: dict[str, SceneFactory] = {}

    @property
    def current(self) -> Scene | None:
        """Get the current (top) scene."""
        return self._stack[-1] if self._stack else None

    @property
    def scenes(self) -> list[Scene]:
        """Scenes on the stack, bottom first."""
        return list(self._stack)

    @property
    def is_empty(self) -> bool:
        return len(self._stack) == 0

    # Named scenes

    def register(self, name: str, factory: SceneFactory) -> None:
        """Register a factory building the scene called ``name``."""
        self._factories[name] = factory

    def load(self, name: str) -> None:
        """
        Switch to the scene registered as ``name``.

        Fire-and-forget: the switch happens on the next update.

        Raises:
            KeyError: If no scene is registered under that name
        """
        if name not in self._factories:
            raise KeyError(f"No scene registered as '{name}'")
        logger.info(f"Loading scene: {name}")
        self.switch(self._factories[name]())

    # Stack operations

    def push(self, scene: Scene) -> None:
        self._pending_operations.append(("push", scene))

    def pop(self) -> None:
        self._pending_operations.append(("pop", None))

    def switch(self, scene: Scene) -> None:
        self._pending_operations.append(("switch", scene))

    def clear(self) -> None:
        self._pending_operations.append(("clear", None))

    def update(self, dt: float) -> None:
        """Apply queued operations, then update scenes that should run."""
        self._process_pending()

        for scene in self._get_update_list():
            scene.update(dt)
            scene.world.update(dt)

    def handle_event(self, event: pygame.event.Event) -> None:
        """Pass event to the current scene."""
        if self.current:
            self.current.handle_event(event)

    def _process_pending(self) -> None:
        while self._pending_operations:
            op, arg = self._pending_operations.pop(0)

            if op == "push":
                self._do_push(arg)
            elif op == "pop":
                self._do_pop()
            elif op == "switch":
                self._do_switch(arg)
            elif op == "clear":
                self._do_clear()

    def _do_push(self, scene: Scene) -> None:
        if self._stack:
            self._stack[-1].on_exit()
        self._stack.append(scene)
        scene.on_enter()
        self.event_bus.publish(EngineEvent.SCENE_PUSHED, scene=scene)

    def _do_pop(self) -> None:
        if self._stack:
            scene = self._stack.pop()
            scene.on_exit()
            scene.on_destroy()

            if self._stack:
                self._stack[-1].on_enter()
            self.event_bus.publish(EngineEvent.SCENE_POPPED, scene=scene)

    def _do_switch(self, scene: Scene) -> None:
        if self._stack:
            old_scene = self._stack.pop()
            old_scene.on_exit()
            old_scene.on_destroy()

        self._stack.append(scene)
        scene.on_enter()
        self.event_bus.publish(EngineEvent.SCENE_SWITCHED, scene=scene)

    def _do_clear(self) -> None:
        while self._stack:
            scene = self._stack.pop()
            scene.on_exit()
            scene.on_destroy()

    def _get_update_list(self) -> list[Scene]:
        """Scenes to update, bottom to top."""
        result: list[Scene] = []
        for scene in reversed(self._stack):
            result.insert(0, scene)
            if scene.blocks_update:
                break
        return result
