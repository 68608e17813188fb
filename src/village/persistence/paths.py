from __future__ import annotations

import logging
import os
from pathlib import Path

from platformdirs import PlatformDirs

logger = logging.getLogger(__name__)

APP_NAME = "VillageCore"
APP_AUTHOR = "VillageCore"


def default_save_dir() -> Path:
    """Directory for save documents.

    VILLAGE_SAVE_DIR wins when set; otherwise the platform user data dir
    (e.g. ~/.local/share/VillageCore/saves on Linux).
    """
    env = os.getenv("VILLAGE_SAVE_DIR")
    if env:
        return Path(env)
    d = PlatformDirs(appname=APP_NAME, appauthor=APP_AUTHOR)
    return Path(d.user_data_dir) / "saves"


def ensure_dir(path: Path) -> Path:
    path.mkdir(parents=True, exist_ok=True)
    return path
