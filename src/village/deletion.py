from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Optional

from .catalog import Catalog
from .economy.ledger import Ledger
from .world import ObjectState, WorldState

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DeletionCandidate:
    instance_id: str
    catalog_id: str
    display_name: str
    original_cost: int
    refund: int


class DeletionFlow:
    """Select a placed object, show its refund, and remove it on confirmation.

    The refund is floor(original_cost * refund_ratio): the price the object was
    actually bought at, with the catalog's current ratio. Confirmation either
    refunds and removes the object, or leaves both untouched.
    """

    def __init__(
        self,
        ledger: Ledger,
        world: WorldState,
        catalog: Catalog,
        on_change: Optional[Callable[[], None]] = None,
    ) -> None:
        self.ledger = ledger
        self.world = world
        self.catalog = catalog
        self.on_change = on_change
        self._candidate: Optional[DeletionCandidate] = None

    @property
    def candidate(self) -> Optional[DeletionCandidate]:
        return self._candidate

    def select(self, instance_id: str) -> DeletionCandidate:
        obj = self.world.require(instance_id)
        entry = self.catalog.require(obj.catalog_id)
        if self._candidate is not None and self._candidate.instance_id != instance_id:
            self._release(self._candidate.instance_id)
        obj.state = ObjectState.PENDING_DELETION
        self._candidate = DeletionCandidate(
            instance_id=obj.instance_id,
            catalog_id=obj.catalog_id,
            display_name=entry.display_name,
            original_cost=obj.original_cost,
            refund=entry.refund_for(obj.original_cost),
        )
        logger.debug("Deletion candidate: %s", self._candidate)
        return self._candidate

    def clear_selection(self) -> None:
        if self._candidate is not None:
            self._release(self._candidate.instance_id)
            self._candidate = None

    def _release(self, instance_id: str) -> None:
        obj = self.world.get(instance_id)
        if obj is not None and obj.state is ObjectState.PENDING_DELETION:
            obj.state = ObjectState.PLACED

    def confirm_delete(self) -> Optional[DeletionCandidate]:
        """Refund and remove the selected object. No-op without a selection."""
        candidate = self._candidate
        if candidate is None:
            return None

        obj, index = self.world.remove(candidate.instance_id)
        try:
            # Credit rejects zero, so a refund that rounds down to nothing skips the ledger
            if candidate.refund > 0:
                self.ledger.credit(candidate.refund, reason="refund")
        except Exception:
            self.world.insert(index, obj)
            logger.exception("Refund of %s failed; deletion rolled back", candidate.instance_id)
            raise

        self._candidate = None
        logger.info(
            "Deleted %s (%s); refunded %s of %s",
            candidate.instance_id,
            candidate.catalog_id,
            candidate.refund,
            candidate.original_cost,
        )
        if self.on_change is not None:
            self.on_change()
        return candidate
