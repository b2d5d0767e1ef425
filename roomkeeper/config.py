"""
Save system configuration.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, fields
from pathlib import Path


@dataclass
class SaveConfig:
    """
    Where records live and how transitions are paced.

    Usage:
        config = SaveConfig(save_path="game/saves")
        config = SaveConfig.from_file("game/data/save_config.json")
    """
    # Records
    save_path: str = "game/saves"
    permanent_key: str = "permanent"
    temp_key: str = "temp"
    suffix: str = ".dat"

    # Transitions
    poll_interval: float = 0.05  # seconds between fade checks
    fade_duration: float = 0.5

    @classmethod
    def from_file(cls, path: str | Path) -> SaveConfig:
        """
        Load overrides from a JSON file.

        Expected format:
        {
            "save_path": "game/saves",
            "poll_interval": 0.05
        }

        Missing keys keep their defaults.

        Raises:
            ValueError: If the file contains keys SaveConfig doesn't have
        """
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)

        known = {f.name for f in fields(cls)}
        unknown = set(data) - known
        if unknown:
            raise ValueError(f"Unknown save config keys: {sorted(unknown)}")

        return cls(**data)
