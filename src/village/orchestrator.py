from __future__ import annotations

import logging
from typing import Optional

from .catalog import Catalog
from .deletion import DeletionCandidate, DeletionFlow
from .economy.ledger import Ledger
from .exceptions import PersistenceWriteFailure
from .messages import MessageCenter, Severity
from .persistence.service import VillagePersistence
from .placement import PlacementController, PlacementSession, Vector3
from .world import PlacedObject, WorldState

logger = logging.getLogger(__name__)


class VillageOrchestrator:
    """Coordinates catalog, ledger, placement and deletion for the village.

    Affordability is checked before a placement starts; the ledger is only
    charged when the placement is confirmed. Every outcome the player should
    see goes through the MessageCenter.
    """

    def __init__(
        self,
        catalog: Catalog,
        ledger: Ledger,
        world: WorldState,
        placement: PlacementController,
        messages: MessageCenter,
        persistence: Optional[VillagePersistence] = None,
    ) -> None:
        self.catalog = catalog
        self.ledger = ledger
        self.world = world
        self.placement = placement
        self.messages = messages
        self.persistence = persistence
        self.last_save_failed = False
        self.deletion = DeletionFlow(ledger, world, catalog, on_change=self.persist)

    # --- Purchase / placement ---
    def request_purchase(self, catalog_id: str, spawn_position: Vector3) -> Optional[PlacementSession]:
        """Start placing catalog_id if the player can afford it.

        Returns the new session, or None when the balance is too low (no
        session is created in that case).
        """
        entry = self.catalog.require(catalog_id)
        if not self.ledger.can_afford(entry.cost):
            self.messages.show(
                f"Not enough coins for {entry.display_name}: need {entry.cost}, have {self.ledger.balance}",
                Severity.WARNING,
            )
            return None
        session = self.placement.begin(entry.id, spawn_position)
        self.messages.show(f"Place your {entry.display_name}", Severity.INFO)
        return session

    def reposition(self, raw_position: Vector3) -> Vector3:
        return self.placement.reposition(raw_position)

    def confirm_placement(self) -> Optional[PlacedObject]:
        session = self.placement.confirm()
        entry = self.catalog.require(session.catalog_id)
        try:
            if not self.ledger.spend(entry.cost, reason="purchase"):
                logger.warning(
                    "Spend of %s for '%s' failed at confirmation (balance=%s); placement discarded",
                    entry.cost,
                    entry.id,
                    self.ledger.balance,
                )
                self.messages.show(
                    f"Purchase failed: {entry.display_name} costs {entry.cost}, you have {self.ledger.balance}",
                    Severity.ERROR,
                )
                return None
        finally:
            self.placement.clear()

        obj = self.world.add(
            PlacedObject(
                catalog_id=entry.id,
                position=session.position,
                original_cost=entry.cost,
                rotation=session.rotation,
                scale_x=session.scale_x,
                scale_y=session.scale_y,
            )
        )
        logger.info("Placed %s (%s) at %s for %s", obj.instance_id, entry.id, obj.position, entry.cost)
        if self.persist():
            self.messages.show(f"{entry.display_name} built for {entry.cost} coins", Severity.SUCCESS)
        return obj

    def cancel_placement(self) -> None:
        session = self.placement.cancel()
        logger.info("Placement of '%s' cancelled", session.catalog_id)
        self.messages.show("Placement cancelled", Severity.INFO)

    # --- Deletion ---
    def notify_object_selected(self, instance_id: str) -> DeletionCandidate:
        candidate = self.deletion.select(instance_id)
        self.messages.show(
            f"Remove {candidate.display_name}? Refund: {candidate.refund} coins",
            Severity.INFO,
        )
        return candidate

    def clear_selection(self) -> None:
        self.deletion.clear_selection()

    def confirm_delete(self) -> Optional[DeletionCandidate]:
        candidate = self.deletion.confirm_delete()
        if candidate is not None and not self.last_save_failed:
            self.messages.show(
                f"{candidate.display_name} removed, {candidate.refund} coins refunded",
                Severity.SUCCESS,
            )
        return candidate

    # --- Persistence ---
    def persist(self) -> bool:
        """Save now; a write failure is reported to the player, not raised.

        Returns False only when a save was attempted and failed.
        """
        self.last_save_failed = False
        if self.persistence is None:
            return True
        try:
            self.persistence.save()
        except PersistenceWriteFailure as e:
            logger.error("Save failed: %s", e)
            self.last_save_failed = True
            self.messages.show("Could not save your village", Severity.ERROR)
            return False
        return True
