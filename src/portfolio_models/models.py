from enum import Enum
from typing import List, Optional
from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel

# CUSIP-style identifiers are nine characters; everything else is a ticker
BOND_SYMBOL_LENGTH = 9


class InstrumentKind(str, Enum):
    """How a position is priced and sized"""
    EQUITY = "equity"
    BOND = "bond"


class RoundingMode(str, Enum):
    """Policy for turning a fractional trade size into an order size"""
    NEAREST = "nearest"
    DOWN = "down"
    UP = "up"
    EXACT = "exact"


class AssetClass(str, Enum):
    US_EQUITY = "US_EQUITY"
    NON_US_EQUITY = "NON_US_EQUITY"
    FIXED_INCOME = "FIXED_INCOME"
    MUNI_BOND = "MUNI_BOND"
    OTHER = "OTHER"
    CASH = "CASH"


def classify_instrument(symbol: str) -> InstrumentKind:
    """Bond if the symbol is a nine character CUSIP, equity/ETF otherwise"""
    if len(symbol) == BOND_SYMBOL_LENGTH:
        return InstrumentKind.BOND
    return InstrumentKind.EQUITY


class SnapshotModel(BaseModel):
    """Base for dashboard snapshot models; accepts camelCase keys from stored JSON"""
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
    )


class Position(SnapshotModel):
    """One holding within an account"""
    id: str
    symbol: str
    description: str = ""
    quantity: float = 0.0
    price: float = 0.0  # per share for equities, percent of par for bonds
    current_value: float = 0.0
    yield_pct: float = Field(default=0.0, alias="yield")
    target_pct: float = 0.0
    rounding_mode: RoundingMode = RoundingMode.NEAREST
    instrument_kind: InstrumentKind

    # Classification fields, filled by an external classifier
    asset_class: Optional[AssetClass] = None
    sector: Optional[str] = None
    state_code: Optional[str] = None
    logo_ticker: Optional[str] = None

    @model_validator(mode="before")
    @classmethod
    def resolve_instrument_kind(cls, data):
        """Tag the instrument kind once, at entry, from the symbol"""
        if not isinstance(data, dict):
            return data
        if data.get("instrument_kind") is None and data.get("instrumentKind") is None:
            symbol = data.get("symbol")
            if isinstance(symbol, str):
                data = {**data, "instrument_kind": classify_instrument(symbol)}
        return data

    @property
    def is_bond(self) -> bool:
        return self.instrument_kind == InstrumentKind.BOND


class Account(SnapshotModel):
    """Named collection of positions plus a cash sweep balance"""
    id: str
    name: str
    type: str = "Taxable"  # e.g. Taxable, IRA, Roth
    positions: List[Position] = Field(default_factory=list)
    cash: float = 0.0

    def find_position(self, position_id: str) -> Optional[Position]:
        for position in self.positions:
            if position.id == position_id:
                return position
        return None


class Client(SnapshotModel):
    """Named collection of accounts"""
    id: str
    name: str
    last_updated: int = 0  # epoch milliseconds
    accounts: List[Account] = Field(default_factory=list)

    def find_account(self, account_id: str) -> Optional[Account]:
        for account in self.accounts:
            if account.id == account_id:
                return account
        return None
