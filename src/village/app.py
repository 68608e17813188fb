from __future__ import annotations

import logging
from typing import Optional

from .catalog import Catalog, load_catalog
from .config import VillageConfig
from .economy.ledger import Ledger
from .messages import MessageCenter, Severity
from .persistence.manager import SaveManager
from .persistence.models import LoadReport
from .persistence.service import VillagePersistence
from .placement import PlacementController
from .orchestrator import VillageOrchestrator
from .scheduler import ScheduledCall, Scheduler
from .world import WorldState

logger = logging.getLogger(__name__)


class VillageApp:
    """
    Top-level context owning the village core.

    Responsibilities:
    - Build the ledger, catalog, world, scheduler and persistence once and
      pass them down explicitly
    - Load the save on start and arm the autosave timer
    - Save on the host's suspend and exit signals

    The host loop (GUI or headless) drives time by calling update(dt).
    """

    def __init__(self, config: Optional[VillageConfig] = None, catalog: Optional[Catalog] = None) -> None:
        self.config = config or VillageConfig()
        self.catalog = catalog if catalog is not None else load_catalog(self.config.catalog_path)
        self.ledger = Ledger(self.config.starting_balance)
        self.world = WorldState()
        self.scheduler = Scheduler()
        self.messages = MessageCenter(self.scheduler, duration=self.config.message_duration)
        self.save_manager = SaveManager(self.config.save_dir, filename=self.config.save_filename)
        self.persistence = VillagePersistence(self.save_manager, self.ledger, self.world, self.catalog)
        self.orchestrator = VillageOrchestrator(
            catalog=self.catalog,
            ledger=self.ledger,
            world=self.world,
            placement=PlacementController(self.config.grid_size),
            messages=self.messages,
            persistence=self.persistence,
        )
        self._autosave: Optional[ScheduledCall] = None
        self._started = False

    @property
    def running(self) -> bool:
        return self._started

    def start(self) -> LoadReport:
        """Load the saved village and start autosaving.

        Safe to call multiple times; subsequent calls only reload. A pending
        deletion selection is dropped first since reloaded objects get new ids.
        """
        self.orchestrator.clear_selection()
        report = self.persistence.load()
        if report.corrupt:
            self.messages.show("Save data was corrupt; starting a fresh village", Severity.WARNING)
        elif report.skipped:
            self.messages.show(
                f"{len(report.skipped)} saved object(s) could not be restored",
                Severity.WARNING,
            )
        if self._autosave is None:
            self._autosave = self.scheduler.call_every(self.config.autosave_interval, self.autosave)
        self._started = True
        logger.info("VillageApp started (autosave every %.1fs)", self.config.autosave_interval)
        return report

    def update(self, dt: float) -> None:
        self.scheduler.advance(dt)

    def autosave(self) -> bool:
        logger.debug("Autosave at t=%.2f", self.scheduler.now)
        return self.orchestrator.persist()

    def on_suspend(self) -> bool:
        logger.info("Host suspending; saving village")
        return self.orchestrator.persist()

    def on_exit(self) -> bool:
        """Save and drop every pending timer. Safe to call more than once."""
        self._autosave = None
        self.scheduler.cancel_all()
        if not self._started:
            return False
        self._started = False
        logger.info("Host exiting; saving village")
        return self.orchestrator.persist()
