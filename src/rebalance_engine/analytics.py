"""Client level aggregates: total value, asset class mix, sectors, muni states and composition"""

import re
from typing import Dict, List, Optional, Tuple
from pydantic import BaseModel
from portfolio_models import AssetClass, Client
from .calculator import RebalanceCalculator

UNCLASSIFIED_SECTOR = "Unclassified"

OPTION_PATTERN = re.compile(r"\b(CALL|PUT)S?\b")

EQUITY_CLASSES = (AssetClass.US_EQUITY, AssetClass.NON_US_EQUITY)
FIXED_INCOME_CLASSES = (AssetClass.FIXED_INCOME, AssetClass.MUNI_BOND)


class StateExposure(BaseModel):
    state_code: str
    value: float
    percent: float  # of the municipal bond total


class PortfolioComposition(BaseModel):
    """Weights in percent of the client total (positions plus account cash)"""
    total_value: float
    equity_pct: float
    fixed_income_pct: float
    cash_pct: float
    options_pct: float


def client_value(client: Client, calculator: Optional[RebalanceCalculator] = None) -> float:
    """Sum of every account's position market values plus cash"""
    calculator = calculator or RebalanceCalculator()
    return calculator.portfolio_value(client)


def _sorted_totals(totals: Dict) -> List[Tuple]:
    return sorted(totals.items(), key=lambda item: item[1], reverse=True)


def asset_distribution(client: Client,
                       calculator: Optional[RebalanceCalculator] = None) -> List[Tuple[AssetClass, float]]:
    """Dollar value per asset class, largest first. Account cash counts as CASH."""
    calculator = calculator or RebalanceCalculator()
    totals: Dict[AssetClass, float] = {}

    for account in client.accounts:
        for pos in account.positions:
            asset_class = pos.asset_class or AssetClass.OTHER
            totals[asset_class] = totals.get(asset_class, 0.0) + calculator.market_value(pos)
        if account.cash:
            totals[AssetClass.CASH] = totals.get(AssetClass.CASH, 0.0) + account.cash

    return _sorted_totals(totals)


def sector_exposure(client: Client, limit: int = 6,
                    calculator: Optional[RebalanceCalculator] = None) -> List[Tuple[str, float]]:
    """Dollar value per sector for non-cash holdings, top `limit` sectors"""
    calculator = calculator or RebalanceCalculator()
    totals: Dict[str, float] = {}

    for account in client.accounts:
        for pos in account.positions:
            if pos.asset_class == AssetClass.CASH:
                continue
            sector = pos.sector or UNCLASSIFIED_SECTOR
            totals[sector] = totals.get(sector, 0.0) + calculator.market_value(pos)

    return _sorted_totals(totals)[:limit]


def geo_concentration(client: Client, limit: int = 5,
                      calculator: Optional[RebalanceCalculator] = None) -> List[StateExposure]:
    """Municipal bond value per state, top `limit` states. Empty without muni holdings."""
    calculator = calculator or RebalanceCalculator()
    totals: Dict[str, float] = {}

    for account in client.accounts:
        for pos in account.positions:
            if pos.asset_class == AssetClass.MUNI_BOND and pos.state_code:
                totals[pos.state_code] = totals.get(pos.state_code, 0.0) + calculator.market_value(pos)

    muni_total = sum(totals.values())
    if not muni_total:
        return []

    return [
        StateExposure(state_code=state, value=value, percent=value / muni_total * 100)
        for state, value in _sorted_totals(totals)[:limit]
    ]


def portfolio_composition(client: Client,
                          calculator: Optional[RebalanceCalculator] = None) -> PortfolioComposition:
    """
    Equity, fixed income, cash and options weights of the client.

    Options are positions whose description names a CALL or PUT; they are also
    counted in their asset class, so the weights need not sum to 100.
    """
    calculator = calculator or RebalanceCalculator()
    equity = fixed_income = cash = options = 0.0

    for account in client.accounts:
        cash += account.cash
        for pos in account.positions:
            value = calculator.market_value(pos)
            if pos.asset_class in EQUITY_CLASSES:
                equity += value
            elif pos.asset_class in FIXED_INCOME_CLASSES:
                fixed_income += value
            elif pos.asset_class == AssetClass.CASH:
                cash += value
            if OPTION_PATTERN.search(pos.description.upper()):
                options += value

    total = calculator.portfolio_value(client)
    return PortfolioComposition(
        total_value=total,
        equity_pct=calculator.weight(equity, total),
        fixed_income_pct=calculator.weight(fixed_income, total),
        cash_pct=calculator.weight(cash, total),
        options_pct=calculator.weight(options, total),
    )
