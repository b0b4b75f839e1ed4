from .calculator import RebalanceCalculator, apply_rounding
from .models import (
    RebalanceRow,
    PositionRebalance,
    CashRebalance,
    AccountRebalance,
    ClientRebalance,
    CASH_SYMBOL,
)
from .editing import set_target_pct, set_goal_value, sanitize_numeric, apply_quote
from .classification import ClassificationResult, classify_position, classify_account
from .analytics import (
    StateExposure,
    PortfolioComposition,
    client_value,
    asset_distribution,
    sector_exposure,
    geo_concentration,
    portfolio_composition,
)

__version__ = "1.0.0"

__all__ = [
    "RebalanceCalculator",
    "apply_rounding",
    "RebalanceRow",
    "PositionRebalance",
    "CashRebalance",
    "AccountRebalance",
    "ClientRebalance",
    "CASH_SYMBOL",
    "set_target_pct",
    "set_goal_value",
    "sanitize_numeric",
    "apply_quote",
    "ClassificationResult",
    "classify_position",
    "classify_account",
    "client_value",
    "asset_distribution",
    "sector_exposure",
    "StateExposure",
    "PortfolioComposition",
    "geo_concentration",
    "portfolio_composition",
    "__version__",
]
