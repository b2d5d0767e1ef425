"""
Save synchronization engine.

Keeps two records in step:
- temp: the play session since the last real save, rewritten on every
  scene transition
- permanent: what the player explicitly committed

Reconciliation points:
- boot: create missing records, then copy permanent over temp
- scene save/load: read-modify-write temp
- commit: save the scene, then copy temp over permanent
- reset: delete both records and start over

This is the only code that talks to the byte store. Storage and decode
failures are logged and degrade to "entities keep their current values";
nothing here ends the session.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Optional

from roomkeeper.config import SaveConfig
from roomkeeper.core.events import Event, EventBus, EngineEvent, SaveEvent
from roomkeeper.core.entity import Entity
from roomkeeper.save.directory import (
    FragmentCursor,
    SaveDirectory,
    increment_all_day_since_data,
    load_all,
    save_all,
)
from roomkeeper.save.fragments import Saveable
from roomkeeper.storage.byte_store import ByteStore, FileByteStore
from roomkeeper.storage.codec import Codec
from roomkeeper.storage.exceptions import StorageAlreadyExists, StorageError
from roomkeeper.world.days import DayCounter

if TYPE_CHECKING:
    from roomkeeper.core.scene import SceneManager
    from roomkeeper.core.world import World


logger = logging.getLogger(__name__)


class NoEntitiesInScene(UserWarning):
    """A save or load pass found no saveable entities in the scene."""


@dataclass
class SyncState:
    """State that lives for one process run and survives scene loads."""
    bootstrapped: bool = False


class SaveSynchronizer:
    """
    Reconciles the temp and permanent save records.

    Usage:
        sync = SaveSynchronizer(FileByteStore("game/saves"), day_counter=days)
        sync.attach(scene_manager)
        sync.boot()

        sync.save_scene()     # before leaving a room
        sync.commit_save()    # player went to bed
    """

    def __init__(
        self,
        store: Optional[ByteStore] = None,
        config: Optional[SaveConfig] = None,
        codec: Optional[Codec[SaveDirectory]] = None,
        day_counter: Optional[DayCounter] = None,
        event_bus: Optional[EventBus] = None,
        state: Optional[SyncState] = None,
        world: Optional[World] = None,
    ):
        self.config = config or SaveConfig()
        self.store = store or FileByteStore(self.config.save_path, self.config.suffix)
        self.codec = codec or Codec(SaveDirectory)
        self.day_counter = day_counter or DayCounter()
        self.event_bus = event_bus
        self.state = state or SyncState()
        self.world = world
        self.scene_manager: Optional[SceneManager] = None

    @property
    def permanent_key(self) -> str:
        return self.config.permanent_key

    @property
    def temp_key(self) -> str:
        return self.config.temp_key

    def set_world(self, world: Optional[World]) -> None:
        """Set the world whose entities take part in save/load passes."""
        self.world = world

    def attach(self, scene_manager: SceneManager) -> None:
        """
        Follow ``scene_manager``'s scene stack.

        Save and load passes then cover every scene on the stack, bottom
        first, and each scene that becomes active has its own entities
        loaded from temp. Popping needs no reload: the scenes underneath
        were never unloaded.
        """
        self.scene_manager = scene_manager
        self.event_bus = scene_manager.event_bus
        self.event_bus.subscribe(EngineEvent.SCENE_SWITCHED, self._on_scene_entered, weak=False)
        self.event_bus.subscribe(EngineEvent.SCENE_PUSHED, self._on_scene_entered, weak=False)

    def _on_scene_entered(self, event: Event) -> None:
        scene = event.get("scene")
        if scene is None:
            return
        self.set_world(scene.world)
        if event.type is EngineEvent.SCENE_PUSHED and not scene.world.get_entities_with_base(Saveable):
            # overlays such as menus hold nothing to restore
            return
        self.load_scene(only=scene.world)

    # Entry points

    def ensure_storage(self) -> None:
        """
        Create whichever records are missing.

        temp starts with a slot per registered kind; permanent starts
        completely empty until the first commit. Records that already
        exist are left untouched.
        """
        created = []

        if not self.store.exists(self.temp_key):
            directory = SaveDirectory()
            directory.set_initial_references()
            if self._create(self.temp_key, directory):
                created.append(self.temp_key)

        if not self.store.exists(self.permanent_key):
            if self._create(self.permanent_key, SaveDirectory()):
                created.append(self.permanent_key)

        if created:
            logger.info(f"Created save records: {', '.join(created)}")
        self._publish(SaveEvent.STORAGE_ENSURED, created=created)

    def bootstrap_sync(self) -> bool:
        """
        Start the session from the last committed save.

        Runs once per process: ensures storage, then copies permanent
        over temp so leftovers from a crash or quit are discarded.

        Returns:
            True if the copy ran on this call
        """
        if self.state.bootstrapped:
            return False
        self.state.bootstrapped = True

        self.ensure_storage()

        directory = self._read(self.permanent_key)
        if directory is None:
            logger.warning("Permanent save unreadable, starting from a fresh save")
            directory = SaveDirectory()
            directory.set_initial_references()
            self._write(self.temp_key, directory)
        else:
            self._copy(self.permanent_key, self.temp_key)

        self.day_counter.set_day(directory.day)
        logger.info(f"Bootstrapped temp save from permanent (day {directory.day})")
        self._publish(SaveEvent.BOOTSTRAP_SYNCED, day=directory.day)
        return True

    def save_scene(self) -> bool:
        """
        Fold every saveable entity in the current scene into temp.

        A scene with nothing saveable leaves temp untouched.

        Returns:
            True if temp was written
        """
        entities = self.saveable_entities()
        if not entities:
            self._warn_no_entities("save")
            return False

        directory = self._read(self.temp_key)
        if directory is None:
            directory = SaveDirectory()
            directory.set_initial_references()

        cursor = FragmentCursor()
        for entity in entities:
            self._refresh(entity)
            directory = save_all(entity, directory, cursor)

        directory.day = self.day_counter.day

        if not self._write(self.temp_key, directory):
            return False

        logger.debug(f"Saved {len(entities)} entities to {self.temp_key}")
        self._publish(SaveEvent.SCENE_SAVED, count=len(entities))
        return True

    def load_scene(self, only: Optional[World] = None) -> bool:
        """
        Restore every saveable entity in the current scene from temp.

        Args:
            only: Restore just the entities of this world. Entities of the
                other stacked scenes still hold their fragment positions.

        Returns:
            True if entities were loaded
        """
        entities = self.saveable_entities()
        targets = [e for e in entities if only is None or e.world is only]
        if not targets:
            self._warn_no_entities("load")
            return False

        directory = self._read(self.temp_key)
        if directory is None:
            return False

        cursor = FragmentCursor()
        for entity in entities:
            if only is not None and entity.world is not only:
                cursor.skip(entity)
                continue
            self._refresh(entity)
            load_all(entity, directory, cursor)

        logger.debug(f"Loaded {len(targets)} entities from {self.temp_key}")
        self._publish(SaveEvent.SCENE_LOADED, count=len(targets))
        return True

    def commit_save(self) -> bool:
        """
        Make the current session permanent.

        Saves the current scene into temp first so the room the player is
        standing in is included, then copies temp over permanent.

        Returns:
            True if permanent was written
        """
        self.save_scene()

        if not self._copy(self.temp_key, self.permanent_key):
            return False

        logger.info(f"Committed save (day {self.day_counter.day})")
        self._publish(SaveEvent.SAVE_COMMITTED, day=self.day_counter.day)
        return True

    def reset_all(self) -> None:
        """
        Delete both records and recreate them fresh.

        Also puts the day counter back to 0, since it lives outside the
        records and deleting them doesn't touch it.
        """
        self._delete(self.permanent_key)
        self._delete(self.temp_key)
        self.ensure_storage()
        self.day_counter.set_day(0)

        logger.info("Save data deleted")
        self._publish(SaveEvent.SAVE_RESET)

    def increment_days_since(self) -> bool:
        """
        Advance "days since" counters in temp and on live entities.

        Returns:
            True if temp was written
        """
        directory = self._read(self.temp_key)
        if directory is None:
            return False

        increment_all_day_since_data(directory, self.saveable_entities())
        directory.day = self.day_counter.day

        if not self._write(self.temp_key, directory):
            return False

        self._publish(SaveEvent.DAYS_ADVANCED, day=directory.day)
        return True

    def boot(self, reset_first: bool = False) -> None:
        """
        Process start-up sequence.

        Args:
            reset_first: Wipe save data before anything is loaded
        """
        if reset_first:
            self.reset_all()
        self.bootstrap_sync()
        self.load_scene()

    # Queries

    def worlds(self) -> list[World]:
        """Worlds taking part in save/load passes, bottom of the stack first."""
        if self.scene_manager is None:
            return [self.world] if self.world is not None else []

        worlds: list[World] = []
        for scene in self.scene_manager.scenes:
            if not any(w is scene.world for w in worlds):
                worlds.append(scene.world)
        return worlds

    def saveable_entities(self) -> list[Entity]:
        """Active entities carrying saveable state, in discovery order."""
        entities: list[Entity] = []
        for world in self.worlds():
            entities.extend(world.get_entities_with_base(Saveable))
        return entities

    def read_directory(self, key: str) -> SaveDirectory | None:
        """Decode a record for inspection; None if missing or corrupt."""
        return self._read(key)

    # Storage helpers

    def _refresh(self, entity: Entity) -> None:
        for component in entity.components_of(Saveable):
            component.refresh_before_save()

    def _create(self, key: str, directory: SaveDirectory) -> bool:
        try:
            self.store.create(key)
        except StorageAlreadyExists as e:
            logger.error(f"Tried to create a save record twice: {e}")
            return False
        except StorageError as e:
            self._fault(e)
            return False
        return self._write(key, directory)

    def _delete(self, key: str) -> None:
        try:
            self.store.delete(key)
        except StorageError as e:
            self._fault(e)

    def _read(self, key: str) -> SaveDirectory | None:
        try:
            return self.codec.decode(self.store.read(key), key)
        except StorageError as e:
            self._fault(e)
            return None

    def _write(self, key: str, directory: SaveDirectory) -> bool:
        try:
            self.store.write(key, self.codec.encode(directory))
        except StorageError as e:
            self._fault(e)
            return False
        return True

    def _copy(self, source: str, dest: str) -> bool:
        """Copy a record byte for byte, refusing to spread a corrupt one."""
        try:
            data = self.store.read(source)
            self.codec.decode(data, source)
            self.store.write(dest, data)
        except StorageError as e:
            self._fault(e)
            return False
        return True

    def _fault(self, error: StorageError) -> None:
        logger.warning(f"Save storage fault, keeping in-memory state: {error}")
        self._publish(SaveEvent.STORAGE_FAULT, key=error.key, error=str(error))

    def _warn_no_entities(self, operation: str) -> None:
        warning = NoEntitiesInScene(f"No saveable entities in this scene, {operation} pass skipped")
        logger.warning(str(warning))
        self._publish(SaveEvent.NO_SAVEABLES, operation=operation, warning=warning)

    def _publish(self, event_type: SaveEvent, **data) -> None:
        if self.event_bus:
            self.event_bus.publish(event_type, **data)
