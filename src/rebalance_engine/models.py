from typing import List
from pydantic import BaseModel, Field
from portfolio_models import InstrumentKind, RoundingMode

CASH_SYMBOL = "CASH"


class RebalanceRow(BaseModel):
    """Derived display values shared by position rows and the cash row.

    Signs follow the trade direction: positive = buy, negative = sell.
    """
    symbol: str
    price: float
    market_value: float
    weight_pct: float
    goal_pct: float
    goal_value: float
    diff_value: float  # goal_value - market_value, before rounding
    trade_quantity: float
    trade_value: float


class PositionRebalance(RebalanceRow):
    """Rebalance result for one holding"""
    position_id: str
    instrument_kind: InstrumentKind
    rounding_mode: RoundingMode
    raw_trade_quantity: float
    drift_pct: float  # goal_pct - weight_pct
    within_threshold: bool


class CashRebalance(RebalanceRow):
    """Cash sweep row; absorbs whatever the positions do not target"""
    symbol: str = CASH_SYMBOL
    price: float = 1.0


class AccountRebalance(BaseModel):
    """Rebalance result for one account"""
    account_id: str
    account_name: str
    total_portfolio_value: float
    positions: List[PositionRebalance]
    cash: CashRebalance
    positions_value: float
    account_value: float
    total_target_pct: float
    is_over_allocated: bool
    warnings: List[str] = Field(default_factory=list)

    @property
    def rows(self) -> List[RebalanceRow]:
        """Position rows followed by the cash row"""
        return [*self.positions, self.cash]

    def find_position(self, position_id: str) -> PositionRebalance | None:
        for row in self.positions:
            if row.position_id == position_id:
                return row
        return None


class ClientRebalance(BaseModel):
    """Rebalance results for every account of a client"""
    client_id: str
    client_name: str
    total_portfolio_value: float
    accounts: List[AccountRebalance]

    @property
    def warnings(self) -> List[str]:
        return [warning for account in self.accounts for warning in account.warnings]
