import logging
from typing import Callable, List

from ..exceptions import InvalidAmount

logger = logging.getLogger(__name__)

BalanceObserver = Callable[[int], None]


def _require_positive(amount: int) -> int:
    if isinstance(amount, bool) or not isinstance(amount, int):
        raise InvalidAmount(f"Amount must be an integer, got {amount!r}")
    if amount <= 0:
        raise InvalidAmount(f"Amount must be positive, got {amount}")
    return amount


class Ledger:
    """Owns the single spendable balance of the village.

    The balance never drops below zero; every mutator enforces it. Observers
    registered via subscribe() are called synchronously, in registration order,
    with the new balance after each successful mutation. Observers must not call
    back into a ledger mutator while being notified.

    credit/debit are the lenient adjustments used by mini-games (debit floors at
    zero). spend is the all-or-nothing purchase used by the placement and
    deletion flows.
    """

    def __init__(self, starting_balance: int = 0) -> None:
        if starting_balance < 0:
            raise InvalidAmount("Starting balance cannot be negative")
        self._starting_balance = int(starting_balance)
        self._balance = self._starting_balance
        self._observers: List[BalanceObserver] = []

    @property
    def balance(self) -> int:
        return self._balance

    @property
    def starting_balance(self) -> int:
        return self._starting_balance

    # --- Observers ---
    def subscribe(self, observer: BalanceObserver) -> None:
        if observer not in self._observers:
            self._observers.append(observer)
            logger.debug("Ledger observer added: %s", observer)

    def unsubscribe(self, observer: BalanceObserver) -> None:
        if observer in self._observers:
            self._observers.remove(observer)
            logger.debug("Ledger observer removed: %s", observer)

    @property
    def observer_count(self) -> int:
        return len(self._observers)

    def _notify(self) -> None:
        balance = self._balance
        for cb in list(self._observers):
            try:
                cb(balance)
            except Exception as exc:
                logger.exception("Ledger observer %s failed: %s", cb, exc)

    def _apply(self, new_balance: int, reason: str) -> None:
        old = self._balance
        self._balance = new_balance
        logger.debug("Balance changed (reason=%s): old=%s new=%s", reason, old, new_balance)
        self._notify()

    # --- Queries ---
    def can_afford(self, amount: int) -> bool:
        return self._balance >= amount

    # --- Mutators ---
    def credit(self, amount: int, reason: str = "reward") -> int:
        _require_positive(amount)
        self._apply(self._balance + amount, reason)
        return self._balance

    def debit(self, amount: int, reason: str = "penalty") -> int:
        """Remove up to amount; the balance floors at zero instead of failing."""
        _require_positive(amount)
        self._apply(max(0, self._balance - amount), reason)
        return self._balance

    def spend(self, amount: int, reason: str = "purchase") -> bool:
        """Debit exactly amount if affordable; otherwise leave the balance untouched.

        Returns True on success. Insufficient funds is an expected outcome and is
        reported through the return value, not an exception.
        """
        _require_positive(amount)
        if self._balance < amount:
            logger.debug("Spend rejected (reason=%s): need %s, have %s", reason, amount, self._balance)
            return False
        self._apply(self._balance - amount, reason)
        return True

    def set(self, amount: int, reason: str = "load") -> int:
        self._apply(max(0, int(amount)), reason)
        return self._balance

    def reset(self) -> int:
        self._apply(self._starting_balance, "reset")
        return self._balance
