from __future__ import annotations

import logging
import os
import tempfile
from pathlib import Path
from typing import Optional, Union

from ..exceptions import CorruptSaveData, PersistenceWriteFailure
from .codec import decode_save, encode_save
from .models import SaveRecord
from .paths import default_save_dir, ensure_dir

logger = logging.getLogger(__name__)

DEFAULT_SAVE_FILENAME = "village.json"


class SaveManager:
    """Reads and writes the single village save document.

    Writes are atomic: the document goes to a temp file in the same
    directory, is flushed and fsynced, then replaces the final file. If
    anything fails, the previous file is left as it was.
    """

    def __init__(self, save_dir: Optional[Union[str, Path]] = None, filename: str = DEFAULT_SAVE_FILENAME) -> None:
        self.save_dir = Path(save_dir) if save_dir is not None else default_save_dir()
        self.path = self.save_dir / filename

    def write(self, record: SaveRecord) -> Path:
        text = encode_save(record)
        try:
            ensure_dir(self.save_dir)
            self._atomic_write(text)
        except OSError as e:
            logger.error("Failed to write save %s: %s", self.path, e)
            raise PersistenceWriteFailure(f"Unable to write save to {self.path}: {e}") from e
        logger.info("Saved village (balance=%s, objects=%d) to %s", record.balance, len(record.objects), self.path)
        return self.path

    def read(self) -> Optional[SaveRecord]:
        """Return the saved record, or None when no save exists.

        Raises CorruptSaveData if the file cannot be read or decoded.
        """
        try:
            text = self.path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return None
        except (OSError, UnicodeDecodeError) as e:
            raise CorruptSaveData(f"Unable to read save {self.path}: {e}") from e
        return decode_save(text)

    def _atomic_write(self, text: str) -> None:
        fd, tmp_name = tempfile.mkstemp(prefix=self.path.name, suffix=".tmp", dir=self.save_dir)
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(text)
                f.flush()
                os.fsync(f.fileno())
            os.replace(tmp_name, self.path)
        finally:
            if os.path.exists(tmp_name):
                try:
                    os.remove(tmp_name)
                except OSError:
                    logger.debug("Could not remove temp file %s", tmp_name, exc_info=True)
