from __future__ import annotations

import logging
from typing import Any, Dict

from .economy.ledger import Ledger

logger = logging.getLogger(__name__)


class BalanceDisplay:
    """
    Coin counter fed by ledger notifications.

    attach() on creation of the owning view, detach() on teardown; a detached
    display keeps its last value but stops following the ledger.
    """

    def __init__(self, ledger: Ledger, label: str = "Coins") -> None:
        self.ledger = ledger
        self.label = label
        self._balance = ledger.balance
        self._attached = False

    @property
    def attached(self) -> bool:
        return self._attached

    def attach(self) -> None:
        if not self._attached:
            self.ledger.subscribe(self._on_balance_changed)
            self._attached = True
            self._balance = self.ledger.balance

    def detach(self) -> None:
        if self._attached:
            self.ledger.unsubscribe(self._on_balance_changed)
            self._attached = False

    def _on_balance_changed(self, balance: int) -> None:
        logger.debug("BalanceDisplay received balance %s", balance)
        self._balance = balance

    @property
    def text(self) -> str:
        return f"{self.label}: {self._balance}"

    def get_display_data(self) -> Dict[str, Any]:
        """Return a snapshot of the user-facing data for testing/UI binding."""
        return {"balance": self._balance, "text": self.text}
