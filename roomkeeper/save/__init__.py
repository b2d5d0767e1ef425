"""
Save module - two-tier save synchronization.

Provides:
- Saveable components and the fragment kind registry
- SaveDirectory and the save_all / load_all merge passes
- SaveSynchronizer: temp/permanent reconciliation
- SaveDebugTriggers: per-frame debug requests
"""

from roomkeeper.save.fragments import (
    Saveable,
    register_fragment,
    get_fragment_type,
    registered_kinds,
)
from roomkeeper.save.directory import (
    SaveDirectory,
    FragmentCursor,
    save_all,
    load_all,
    increment_all_day_since_data,
)
from roomkeeper.save.sync import SaveSynchronizer, SyncState, NoEntitiesInScene
from roomkeeper.save.debug import SaveDebugTriggers

__all__ = [
    "Saveable",
    "register_fragment",
    "get_fragment_type",
    "registered_kinds",
    "SaveDirectory",
    "FragmentCursor",
    "save_all",
    "load_all",
    "increment_all_day_since_data",
    "SaveSynchronizer",
    "SyncState",
    "NoEntitiesInScene",
    "SaveDebugTriggers",
]
