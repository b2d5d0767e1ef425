"""
Debug save triggers.

Flags a debug overlay or test harness can set; the frame loop hands
them to the synchronizer once per frame.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from roomkeeper.save.sync import SaveSynchronizer


logger = logging.getLogger(__name__)


@dataclass
class SaveDebugTriggers:
    """
    One-shot requests, cleared as soon as they run.

    Order within a frame: reset, save, load, commit.
    """
    save_scene: bool = False
    load_scene: bool = False
    commit: bool = False
    reset: bool = False

    def process(self, sync: SaveSynchronizer) -> list[str]:
        """Run and clear every raised flag. Returns the names that ran."""
        ran = []

        if self.reset:
            self.reset = False
            sync.reset_all()
            ran.append("reset")
        if self.save_scene:
            self.save_scene = False
            sync.save_scene()
            ran.append("save_scene")
        if self.load_scene:
            self.load_scene = False
            sync.load_scene()
            ran.append("load_scene")
        if self.commit:
            self.commit = False
            sync.commit_save()
            ran.append("commit")

        if ran:
            logger.debug(f"Debug save triggers ran: {ran}")
        return ran
