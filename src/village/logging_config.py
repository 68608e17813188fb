import logging
import os

LOG_FORMAT = "[%(asctime)s] [%(levelname)s] %(name)s: %(message)s"


def level_for_verbosity(verbosity: int) -> int:
    """Map a -v count to a level: none -> WARNING, -v -> INFO, -vv -> DEBUG."""
    if verbosity >= 2:
        return logging.DEBUG
    if verbosity == 1:
        return logging.INFO
    return logging.WARNING


def configure_logging(verbosity: int = 0) -> int:
    """Configure the root logger for the village CLI and host apps.

    VILLAGE_LOG_LEVEL, when set to a level name, wins over the verbosity count.
    Returns the level applied.
    """
    level = level_for_verbosity(verbosity)
    level_name = os.getenv("VILLAGE_LOG_LEVEL")
    if level_name:
        level = getattr(logging, level_name.upper(), level)
    logging.basicConfig(level=level, format=LOG_FORMAT)
    logging.getLogger().setLevel(level)
    return level
