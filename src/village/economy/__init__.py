from .ledger import BalanceObserver, Ledger

__all__ = [
    "BalanceObserver",
    "Ledger",
]
