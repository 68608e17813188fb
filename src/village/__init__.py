"""
Village core package root.

Holds the economy (ledger), catalog, placement and deletion flows, and the
persistence layer of the village builder. Rendering and input handling live
outside of this package; they talk to it through VillageApp and the
VillageOrchestrator.
"""

__version__ = "0.1.0"

__all__ = [
    "__version__",
]
