"""Rebalance calculation: market value, weights, goal dollars and trade sizing"""

from typing import List, Optional
import logging
import math
from portfolio_models import Account, Client, Position, RoundingMode
from rebalancer_config import EngineConfig, get_config
from .models import AccountRebalance, CashRebalance, ClientRebalance, PositionRebalance


def apply_rounding(raw_quantity: float, mode: RoundingMode) -> float:
    """Resolve a fractional trade size according to the position's rounding mode"""
    if mode == RoundingMode.DOWN:
        return float(math.floor(raw_quantity))
    if mode == RoundingMode.UP:
        return float(math.ceil(raw_quantity))
    if mode == RoundingMode.NEAREST:
        # Halves go up (2.5 -> 3, -2.5 -> -2), not to even
        return float(math.floor(raw_quantity + 0.5))
    return raw_quantity


def _loaded_engine_config() -> EngineConfig:
    """Engine section of the loaded configuration, defaults when nothing is loaded"""
    try:
        return get_config().engine
    except RuntimeError:
        return EngineConfig()


class RebalanceCalculator:
    """Calculate the derived rebalance view of accounts and clients.

    Every method is a pure function of its arguments. Degenerate input (zero
    prices, zero portfolio value, over-allocated targets) produces zero or
    sign-carrying numbers instead of exceptions.
    """

    def __init__(self, config: Optional[EngineConfig] = None, logger: Optional[logging.Logger] = None):
        self.logger = logger or logging.getLogger(__name__)
        self.config = config or _loaded_engine_config()

    def price_factor(self, position: Position) -> float:
        """Dollar price of one unit: bonds are quoted in percent of par"""
        if position.is_bond:
            return position.price / 100
        return position.price

    def market_value(self, position: Position) -> float:
        return position.quantity * self.price_factor(position)

    def weight(self, value: float, total_portfolio_value: float) -> float:
        """Percent of the portfolio, 0 for an empty portfolio"""
        if not total_portfolio_value:
            return 0.0
        return value / total_portfolio_value * 100

    def goal_value(self, target_pct: float, total_portfolio_value: float) -> float:
        return total_portfolio_value * target_pct / 100

    def portfolio_value(self, client: Client) -> float:
        """Positions plus cash across every account of the client"""
        return sum(self.account_value(account) for account in client.accounts)

    def account_value(self, account: Account) -> float:
        return sum(self.market_value(pos) for pos in account.positions) + account.cash

    def calculate_position(self, position: Position, total_portfolio_value: float) -> PositionRebalance:
        """Size the trade that moves one position to its target weight"""
        market_value = self.market_value(position)
        weight_pct = self.weight(market_value, total_portfolio_value)
        goal_value = self.goal_value(position.target_pct, total_portfolio_value)
        diff_value = goal_value - market_value

        price_factor = self.price_factor(position)
        if price_factor > 0:
            raw_quantity = diff_value / price_factor
            trade_quantity = apply_rounding(raw_quantity, position.rounding_mode)
            trade_value = trade_quantity * price_factor
        else:
            raw_quantity = trade_quantity = trade_value = 0.0

        drift_pct = position.target_pct - weight_pct

        self.logger.debug(
            f"{position.symbol}: value ${market_value:,.2f} ({weight_pct:.2f}%), "
            f"goal ${goal_value:,.2f} ({position.target_pct:.2f}%), "
            f"trade {trade_quantity:+,.4f} units / ${trade_value:+,.2f} [{position.rounding_mode.value}]"
        )

        return PositionRebalance(
            position_id=position.id,
            symbol=position.symbol,
            instrument_kind=position.instrument_kind,
            rounding_mode=position.rounding_mode,
            price=position.price,
            market_value=market_value,
            weight_pct=weight_pct,
            goal_pct=position.target_pct,
            goal_value=goal_value,
            diff_value=diff_value,
            raw_trade_quantity=raw_quantity,
            trade_quantity=trade_quantity,
            trade_value=trade_value,
            drift_pct=drift_pct,
            within_threshold=abs(drift_pct) < self.config.drift_threshold_percent,
        )

    def calculate_cash(self, account: Account, total_portfolio_value: float) -> CashRebalance:
        """Cash row: targets whatever percentage the positions leave over.

        The implied target is not clamped, so an over-allocated account shows
        a negative cash goal.
        """
        goal_pct = 100 - self.total_target_pct(account)
        goal_value = self.goal_value(goal_pct, total_portfolio_value)
        diff_value = goal_value - account.cash

        return CashRebalance(
            market_value=account.cash,
            weight_pct=self.weight(account.cash, total_portfolio_value),
            goal_pct=goal_pct,
            goal_value=goal_value,
            diff_value=diff_value,
            # Cash is priced at 1.00, so units and dollars coincide
            trade_quantity=diff_value,
            trade_value=diff_value,
        )

    def total_target_pct(self, account: Account) -> float:
        return sum(pos.target_pct for pos in account.positions)

    def calculate_account(self, account: Account, total_portfolio_value: float) -> AccountRebalance:
        """
        Calculate every position row and the cash row of an account.
        total_portfolio_value spans the whole client, not just this account.
        """
        warnings: List[str] = []

        rows = [self.calculate_position(pos, total_portfolio_value) for pos in account.positions]
        cash_row = self.calculate_cash(account, total_portfolio_value)
        total_target_pct = self.total_target_pct(account)
        positions_value = sum(row.market_value for row in rows)

        for pos in account.positions:
            if pos.price <= 0:
                warnings.append(f"{pos.symbol} has no usable price (${pos.price}); no trade sized")
                self.logger.warning(f"No usable price for {pos.symbol} in account {account.name}, trade left at 0")

        is_over_allocated = total_target_pct > 100 + self.config.over_allocation_tolerance_percent
        if is_over_allocated:
            warnings.append(
                f"Account {account.name} targets {total_target_pct:.2f}% in positions; "
                f"cash goal is {cash_row.goal_pct:.2f}%"
            )
            self.logger.warning(
                f"Account {account.name} over-allocated: targets sum to {total_target_pct:.2f}% "
                f"(cash goal ${cash_row.goal_value:,.2f})"
            )

        return AccountRebalance(
            account_id=account.id,
            account_name=account.name,
            total_portfolio_value=total_portfolio_value,
            positions=rows,
            cash=cash_row,
            positions_value=positions_value,
            account_value=positions_value + account.cash,
            total_target_pct=total_target_pct,
            is_over_allocated=is_over_allocated,
            warnings=warnings,
        )

    def calculate_client(self, client: Client) -> ClientRebalance:
        """Rebalance every account against the client-wide portfolio value"""
        total_portfolio_value = self.portfolio_value(client)
        self.logger.debug(f"Client {client.name}: total portfolio value ${total_portfolio_value:,.2f}")

        return ClientRebalance(
            client_id=client.id,
            client_name=client.name,
            total_portfolio_value=total_portfolio_value,
            accounts=[self.calculate_account(account, total_portfolio_value) for account in client.accounts],
        )
