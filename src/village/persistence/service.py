from __future__ import annotations

import logging

from ..catalog import Catalog
from ..economy.ledger import Ledger
from ..exceptions import CorruptSaveData
from ..world import WorldState
from .manager import SaveManager
from .models import LoadReport, SaveRecord

logger = logging.getLogger(__name__)


class VillagePersistence:
    """Snapshots the live ledger and world into the save document and back."""

    def __init__(self, manager: SaveManager, ledger: Ledger, world: WorldState, catalog: Catalog) -> None:
        self.manager = manager
        self.ledger = ledger
        self.world = world
        self.catalog = catalog

    def snapshot(self) -> SaveRecord:
        return SaveRecord(balance=self.ledger.balance, objects=self.world.snapshot())

    def save(self) -> None:
        """Write the current state. Raises PersistenceWriteFailure on I/O errors."""
        self.manager.write(self.snapshot())

    def load(self) -> LoadReport:
        """Replace the live state with the saved one.

        No save file: nothing changes. Corrupt file: the ledger is reset to its
        starting balance and the world emptied; the report carries the error.
        Records whose catalog id is unknown, or whose price paid is not
        positive, are skipped.
        """
        report = LoadReport()
        try:
            record = self.manager.read()
        except CorruptSaveData as e:
            logger.warning("Corrupt save at %s (%s); starting fresh", self.manager.path, e)
            self.world.clear()
            self.ledger.reset()
            report.found = True
            report.corrupt = True
            report.error = str(e)
            report.balance = self.ledger.balance
            return report

        if record is None:
            logger.info("No save found at %s; fresh start", self.manager.path)
            report.balance = self.ledger.balance
            return report

        report.found = True
        kept = []
        for obj in record.objects:
            if obj.catalog_id not in self.catalog:
                logger.warning("Skipping saved object with unknown catalog id '%s'", obj.catalog_id)
                report.skipped.append(obj.catalog_id)
                continue
            if obj.original_cost <= 0:
                logger.warning(
                    "Skipping saved '%s' with non-positive originalCost %s", obj.catalog_id, obj.original_cost
                )
                report.skipped.append(obj.catalog_id)
                continue
            kept.append(obj)

        self.world.replace_all(kept)
        self.ledger.set(record.balance, reason="load")
        report.balance = self.ledger.balance
        report.loaded = len(kept)
        logger.info(
            "Loaded village from %s (balance=%s, objects=%d, skipped=%d)",
            self.manager.path,
            report.balance,
            report.loaded,
            len(report.skipped),
        )
        return report
