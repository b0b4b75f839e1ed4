"""Host-side edits that feed back into the rebalance calculation.

target_pct is the only stored allocation field. Goal dollars are always
derived from it, so a dollar edit is converted back into a percentage.
Every function returns a new snapshot and leaves its input untouched.
"""

import logging
import math
import time
from typing import Any, Optional

from portfolio_models import Account, Client, Position
from .calculator import RebalanceCalculator

logger = logging.getLogger(__name__)


def sanitize_numeric(raw: Any, default: float = 0.0) -> float:
    """Parse a user-entered number, falling back to default for blank or garbage input"""
    if isinstance(raw, bool):
        return default
    if isinstance(raw, (int, float)):
        value = float(raw)
    elif isinstance(raw, str):
        try:
            value = float(raw.strip().replace(",", ""))
        except ValueError:
            return default
    else:
        return default

    if math.isnan(value) or math.isinf(value):
        return default
    return value


def _update_position(account: Account, position_id: str, **updates: Any) -> Account:
    position = account.find_position(position_id)
    if position is None:
        logger.warning(f"Position {position_id} not found in account {account.name}, edit ignored")
        return account

    positions = [
        pos.model_copy(update=updates) if pos.id == position_id else pos
        for pos in account.positions
    ]
    return account.model_copy(update={"positions": positions})


def set_target_pct(account: Account, position_id: str, pct: float) -> Account:
    """Store a new goal percentage for a position"""
    return _update_position(account, position_id, target_pct=pct)


def set_goal_value(account: Account, position_id: str, dollars: float,
                   total_portfolio_value: float) -> Account:
    """Store a goal dollar amount by back-solving the equivalent goal percentage"""
    if not total_portfolio_value:
        logger.warning(
            f"Cannot convert goal ${dollars:,.2f} for position {position_id} to a percentage "
            f"of an empty portfolio, edit ignored"
        )
        return account

    pct = dollars / total_portfolio_value * 100
    return set_target_pct(account, position_id, pct)


def apply_quote(client: Client, symbol: str, price: float, description: Optional[str] = None,
                yield_pct: Optional[float] = None,
                calculator: Optional[RebalanceCalculator] = None) -> Client:
    """
    Apply a market data quote to every position holding symbol, in all accounts.

    current_value is refreshed with the instrument-aware market value. Returns
    the same client object when no position changed.
    """
    calculator = calculator or RebalanceCalculator()
    changed = False
    accounts = []

    for account in client.accounts:
        positions = []
        for pos in account.positions:
            if pos.symbol == symbol and _quote_differs(pos, price, description, yield_pct):
                updates: dict[str, Any] = {"price": price}
                if description is not None:
                    updates["description"] = description
                if yield_pct is not None:
                    updates["yield_pct"] = yield_pct
                updated = pos.model_copy(update=updates)
                updated = updated.model_copy(update={"current_value": calculator.market_value(updated)})
                positions.append(updated)
                changed = True
            else:
                positions.append(pos)
        accounts.append(account.model_copy(update={"positions": positions}))

    if not changed:
        return client

    logger.debug(f"Applied quote {symbol} @ {price} to client {client.name}")
    return client.model_copy(update={"accounts": accounts, "last_updated": int(time.time() * 1000)})


def _quote_differs(pos: Position, price: float, description: Optional[str],
                   yield_pct: Optional[float]) -> bool:
    if pos.price != price:
        return True
    if description is not None and pos.description != description:
        return True
    return yield_pct is not None and pos.yield_pct != yield_pct
