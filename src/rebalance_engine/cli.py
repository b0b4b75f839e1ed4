"""
Command line entry point.

Usage:
  python -m rebalance_engine print-rebalance clients.json
  python -m rebalance_engine print-rebalance clients.json --config config.yaml
  python -m rebalance_engine print-rebalance clients.json --client demo-1 --account acc-1
  python -m rebalance_engine print-rebalance clients.json --classify
"""
import argparse
import json
import sys
from pathlib import Path
from typing import List, Optional

from pydantic import TypeAdapter, ValidationError

from portfolio_models import Client, SnapshotLoadError
from rebalancer_config import AnalyticsConfig, AppConfig, load_config
from .analytics import asset_distribution, geo_concentration, portfolio_composition, sector_exposure
from .calculator import RebalanceCalculator
from .classification import classify_account
from .context import clear_current_context, set_current_context
from .logger import AppLogger, configure_root_logger
from .models import AccountRebalance, ClientRebalance

app_logger = AppLogger(__name__)

_clients_adapter = TypeAdapter(List[Client])


def load_snapshot(path: str | Path) -> List[Client]:
    """Load clients from a dashboard JSON export (one client object or a list)"""
    path = Path(path)
    try:
        with open(path, 'r', encoding='utf-8') as f:
            raw = json.load(f)
    except (OSError, ValueError) as e:
        raise SnapshotLoadError(f"Cannot read snapshot {path}: {e}") from e

    if isinstance(raw, dict):
        raw = [raw]

    try:
        return _clients_adapter.validate_python(raw)
    except ValidationError as e:
        raise SnapshotLoadError(f"Invalid snapshot {path}: {e}") from e


def _format_quantity(quantity: float) -> str:
    if float(quantity).is_integer():
        return f"{quantity:+,.0f}"
    return f"{quantity:+,.4f}"


def _log_account(result: AccountRebalance) -> None:
    app_logger.log_info(
        f"Account {result.account_name}: value ${result.account_value:,.2f}, "
        f"targets {result.total_target_pct:.2f}%"
    )
    for row in result.positions:
        marker = " (on target)" if row.within_threshold else ""
        app_logger.log_info(
            f"  {row.symbol:<10} ${row.market_value:>14,.2f} {row.weight_pct:6.2f}% -> "
            f"{row.goal_pct:6.2f}% ${row.goal_value:>14,.2f} | "
            f"trade {_format_quantity(row.trade_quantity)} (${row.trade_value:+,.2f}){marker}"
        )
    cash = result.cash
    app_logger.log_info(
        f"  {cash.symbol:<10} ${cash.market_value:>14,.2f} {cash.weight_pct:6.2f}% -> "
        f"{cash.goal_pct:6.2f}% ${cash.goal_value:>14,.2f} | diff ${cash.diff_value:+,.2f}"
    )
    for warning in result.warnings:
        app_logger.log_warning(warning)


def print_rebalance(client: Client, calculator: RebalanceCalculator,
                    account_id: Optional[str] = None) -> ClientRebalance:
    """Calculate and log the rebalance of a client (dry run, nothing is stored)"""
    result = calculator.calculate_client(client)
    set_current_context(client.id)
    try:
        app_logger.log_info(
            f"Rebalance for client {client.name}: total portfolio value ${result.total_portfolio_value:,.2f}"
        )
        for account_result in result.accounts:
            if account_id and account_result.account_id != account_id:
                continue
            set_current_context(client.id, account_result.account_id)
            _log_account(account_result)
    finally:
        clear_current_context()
    return result


def log_exposure(client: Client, calculator: RebalanceCalculator, analytics: AnalyticsConfig) -> None:
    total = calculator.portfolio_value(client)

    def pct(value: float) -> float:
        return value / total * 100 if total else 0.0

    app_logger.log_info(f"Asset classes for client {client.name}:")
    for asset_class, value in asset_distribution(client, calculator):
        app_logger.log_info(f"  {asset_class.value:<14} ${value:>14,.2f} {pct(value):6.2f}%")
    app_logger.log_info(f"Top {analytics.top_sectors} sectors for client {client.name}:")
    for sector, value in sector_exposure(client, analytics.top_sectors, calculator):
        app_logger.log_info(f"  {sector:<22} ${value:>14,.2f} {pct(value):6.2f}%")

    states = geo_concentration(client, analytics.top_states, calculator)
    if states:
        app_logger.log_info(f"Municipal bond states for client {client.name}:")
        for state in states:
            app_logger.log_info(f"  {state.state_code:<4} ${state.value:>14,.2f} {state.percent:6.2f}% of munis")

    mix = portfolio_composition(client, calculator)
    app_logger.log_info(
        f"Composition: equity {mix.equity_pct:.2f}%, fixed income {mix.fixed_income_pct:.2f}%, "
        f"cash {mix.cash_pct:.2f}%, options {mix.options_pct:.2f}%"
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="rebalance-dashboard", description="Portfolio rebalance calculations")
    subparsers = parser.add_subparsers(dest="command", required=True)

    print_parser = subparsers.add_parser("print-rebalance", help="Log the trades that rebalance each account")
    print_parser.add_argument("snapshot", help="Client snapshot JSON (one client or a list)")
    print_parser.add_argument("--config", help="Configuration YAML file")
    print_parser.add_argument("--client", dest="client_id", help="Only this client id")
    print_parser.add_argument("--account", dest="account_id", help="Only this account id")
    print_parser.add_argument("--classify", action="store_true",
                              help="Fill missing classifications and log asset class/sector exposure")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    try:
        config = load_config(args.config) if args.config else AppConfig()
    except (FileNotFoundError, ValueError) as e:
        configure_root_logger()
        app_logger.log_error(f"Failed to load configuration: {e}")
        return 1

    configure_root_logger(config.logging)

    try:
        clients = load_snapshot(args.snapshot)
    except SnapshotLoadError as e:
        app_logger.log_error(str(e))
        return 1

    if args.client_id:
        clients = [c for c in clients if c.id == args.client_id]
        if not clients:
            app_logger.log_error(f"Client {args.client_id} not found in {args.snapshot}")
            return 1

    calculator = RebalanceCalculator(config.engine)
    for client in clients:
        if args.classify:
            client = client.model_copy(update={"accounts": [classify_account(a) for a in client.accounts]})
        print_rebalance(client, calculator, args.account_id)
        if args.classify:
            log_exposure(client, calculator, config.analytics)

    return 0


if __name__ == "__main__":
    sys.exit(main())
