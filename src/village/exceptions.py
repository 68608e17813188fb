class VillageError(Exception):
    """Base error for village core domain exceptions."""


class InvalidAmount(VillageError):
    """Raised when a ledger operand is not a positive integer."""


class UnknownCatalogEntry(VillageError):
    """Raised when a catalog id is not defined in the catalog."""


class CatalogError(VillageError):
    """Raised when a catalog document is malformed."""


class SessionAlreadyActive(VillageError):
    """Raised when beginning a placement while another one is in progress."""


class NoActiveSession(VillageError):
    """Raised when confirming, cancelling or moving without a placement in progress."""


class InvalidSessionState(VillageError):
    """Raised when a placement session is driven after reaching a terminal state."""


class UnknownPlacedObject(VillageError):
    """Raised when selecting an instance id that is not in the world."""


class CorruptSaveData(VillageError):
    """Raised when a save document cannot be parsed or does not match the schema."""


class PersistenceWriteFailure(VillageError):
    """Raised when the save document cannot be written to disk."""


class ConfigError(VillageError):
    """Raised when the configuration file exists but cannot be used."""
