from __future__ import annotations

import logging
import os
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any, Dict, Optional, Union

import yaml

from .exceptions import ConfigError

logger = logging.getLogger(__name__)

# Smallest grid step accepted; anything below is clamped to avoid dividing by ~0.
MIN_GRID_SIZE = 0.01


@dataclass
class VillageConfig:
    """Configuration knobs for the village core.

    Defaults are sensible if external config is not present.

    Attributes:
        starting_balance: Balance of a fresh ledger and the value restored by reset.
        grid_size: Step used when snapping placement positions (x and y axes).
        autosave_interval: Seconds between unconditional autosaves.
        message_duration: Seconds a user-facing message stays visible.
        save_dir: Directory holding the save document. None uses the platform
            user data dir (or VILLAGE_SAVE_DIR when set).
        save_filename: File name of the save document inside save_dir.
        catalog_path: Catalog YAML document. None uses the embedded catalog.
    """

    starting_balance: int = 100
    grid_size: float = 0.5
    autosave_interval: float = 20.0
    message_duration: float = 2.5
    save_dir: Optional[Path] = None
    save_filename: str = "village.json"
    catalog_path: Optional[Path] = None

    def __post_init__(self) -> None:
        if self.starting_balance < 0:
            raise ConfigError("starting_balance cannot be negative")
        self.starting_balance = int(self.starting_balance)
        self.grid_size = max(MIN_GRID_SIZE, float(self.grid_size))
        if self.autosave_interval <= 0:
            raise ConfigError("autosave_interval must be positive")
        if self.message_duration <= 0:
            raise ConfigError("message_duration must be positive")
        if self.save_dir is not None:
            self.save_dir = Path(self.save_dir)
        if self.catalog_path is not None:
            self.catalog_path = Path(self.catalog_path)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "VillageConfig":
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            logger.warning("Ignoring unknown config keys: %s", ", ".join(unknown))
        try:
            return cls(**{k: v for k, v in data.items() if k in known})
        except (TypeError, ValueError) as e:
            raise ConfigError(f"Invalid config value: {e}") from e


def load_config(path: Optional[Union[str, Path]] = None) -> VillageConfig:
    """Load a VillageConfig from YAML.

    A missing file (or no path at all) yields the defaults. VILLAGE_SAVE_DIR,
    when set, overrides the save directory from the file.
    """
    cfg_data: Dict[str, Any] = {}
    if path is not None:
        path = Path(path)
        if not path.exists():
            logger.warning("Village config not found at %s; using defaults", path)
        else:
            try:
                raw = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
            except yaml.YAMLError as e:
                raise ConfigError(f"Failed to parse config {path}: {e}") from e
            if not isinstance(raw, dict):
                raise ConfigError(f"Config {path} must be a mapping, got {type(raw).__name__}")
            cfg_data = dict(raw)
            logger.info("Loaded village config from %s", path)

    env_dir = os.getenv("VILLAGE_SAVE_DIR")
    if env_dir:
        cfg_data["save_dir"] = env_dir
    return VillageConfig.from_dict(cfg_data)
