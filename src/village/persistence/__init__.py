"""Persistence subsystem for the village core.

This package provides:
- The SaveRecord model (ledger balance plus placed objects)
- Encoding/decoding to the stable JSON save document, validated by schema
- A SaveManager that handles atomic disk I/O
- VillagePersistence, which snapshots and restores the live ledger and world
"""

from .models import LoadReport, SaveRecord
from .codec import decode_save, encode_save
from .manager import SaveManager
from .paths import default_save_dir
from .service import VillagePersistence

__all__ = [
    "LoadReport",
    "SaveRecord",
    "decode_save",
    "encode_save",
    "SaveManager",
    "default_save_dir",
    "VillagePersistence",
]
