from .models import (
    # Instrument tagging
    InstrumentKind,
    RoundingMode,
    AssetClass,
    BOND_SYMBOL_LENGTH,
    classify_instrument,
    # Snapshot models
    Position,
    Account,
    Client,
)
from .exceptions import (
    SnapshotError,
    SnapshotLoadError,
)

__version__ = "1.0.0"

__all__ = [
    "InstrumentKind",
    "RoundingMode",
    "AssetClass",
    "BOND_SYMBOL_LENGTH",
    "classify_instrument",
    "Position",
    "Account",
    "Client",
    "SnapshotError",
    "SnapshotLoadError",
    "__version__",
]
