"""
Typed event bus for decoupled communication.

Uses Enums for event types to prevent magic strings.

Usage:
    event_bus.subscribe(SaveEvent.SAVE_COMMITTED, on_committed)
    event_bus.publish(SaveEvent.SAVE_COMMITTED, key="permanent")
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Any, Callable
from weakref import WeakMethod, ref


logger = logging.getLogger(__name__)


class EngineEvent(Enum):
    """Built-in engine events."""
    # Scene
    SCENE_PUSHED = auto()
    SCENE_POPPED = auto()
    SCENE_SWITCHED = auto()

    # Entity
    ENTITY_CREATED = auto()
    ENTITY_DESTROYED = auto()
    COMPONENT_ADDED = auto()
    COMPONENT_REMOVED = auto()


class SaveEvent(Enum):
    """Save synchronization events."""
    STORAGE_ENSURED = auto()
    BOOTSTRAP_SYNCED = auto()
    SCENE_SAVED = auto()
    SCENE_LOADED = auto()
    SAVE_COMMITTED = auto()
    SAVE_RESET = auto()
    DAYS_ADVANCED = auto()
    STORAGE_FAULT = auto()
    NO_SAVEABLES = auto()


class TransitionEvent(Enum):
    """Scene transition events."""
    FADE_STARTED = auto()
    SCENE_SWITCH_REQUESTED = auto()


@dataclass
class Event:
    """
    Event data container.

    Attributes:
        type: The event type (Enum member)
        data: Dictionary of event-specific data
        consumed: Whether the event has been handled
    """
    type: Enum
    data: dict[str, Any] = field(default_factory=dict)
    consumed: bool = False

    def consume(self) -> None:
        """Mark event as consumed (stops propagation)."""
        self.consumed = True

    def get(self, key: str, default: Any = None) -> Any:
        return self.data.get(key, default)

    def __getitem__(self, key: str) -> Any:
        return self.data[key]


EventHandler = Callable[[Event], None]


class EventBus:
    """
    Central event bus for publish/subscribe messaging.

    Features:
    - Typed events (Enum-based)
    - Priority ordering
    - Weak references (auto-cleanup when handlers are deleted)
    - One-shot handlers
    - Event consumption (stops propagation)
    """

    def __init__(self):
        # event type -> [(priority, handler, one_shot)]
        self._handlers: dict[Enum, list[tuple[int, Any, bool]]] = {}
        # Events published while a dispatch is running
        self._event_queue: list[Event] = []
        self._is_publishing = False

    def subscribe(
        self,
        event_type: Enum,
        handler: EventHandler,
        priority: int = 0,
        one_shot: bool = False,
        weak: bool = True,
    ) -> None:
        """
        Subscribe to an event type.

        Args:
            event_type: The event type to listen for
            handler: Callback function(event: Event)
            priority: Higher priority handlers are called first (default 0)
            one_shot: If True, handler is removed after first call
            weak: If True, use weak reference (handler auto-removed if deleted)
        """
        if weak:
            if hasattr(handler, '__self__'):
                handler_ref = WeakMethod(handler)
            else:
                handler_ref = ref(handler)
        else:
            handler_ref = handler

        handlers = self._handlers.setdefault(event_type, [])

        insert_idx = len(handlers)
        for i, (p, _, _) in enumerate(handlers):
            if priority > p:
                insert_idx = i
                break

        handlers.insert(insert_idx, (priority, handler_ref, one_shot))

    def unsubscribe(self, event_type: Enum, handler: EventHandler) -> None:
        if event_type not in self._handlers:
            return

        self._handlers[event_type] = [
            (p, h, o) for p, h, o in self._handlers[event_type]
            if self._get_handler(h) != handler
        ]

    def publish(self, event_type: Enum, **data: Any) -> Event:
        """
        Publish an event.

        Returns:
            The Event object (check .consumed to see if it was handled)
        """
        event = Event(type=event_type, data=data)

        if self._is_publishing:
            self._event_queue.append(event)
        else:
            self._dispatch(event)

        return event

    def clear(self, event_type: Enum | None = None) -> None:
        if event_type is None:
            self._handlers.clear()
        else:
            self._handlers.pop(event_type, None)

    def _dispatch(self, event: Event) -> None:
        if event.type not in self._handlers:
            return

        self._is_publishing = True
        handlers = self._handlers[event.type]
        to_remove = []

        for i, (priority, handler_ref, one_shot) in enumerate(handlers):
            handler = self._get_handler(handler_ref)

            if handler is None:
                to_remove.append(i)
                continue

            try:
                handler(event)
            except Exception:
                logger.exception("Error in event handler for %s", event.type)

            if one_shot:
                to_remove.append(i)

            if event.consumed:
                break

        for i in reversed(to_remove):
            handlers.pop(i)

        self._is_publishing = False

        while self._event_queue:
            self._dispatch(self._event_queue.pop(0))

    def _get_handler(self, handler_ref: Any) -> EventHandler | None:
        if isinstance(handler_ref, (ref, WeakMethod)):
            return handler_ref()
        return handler_ref
