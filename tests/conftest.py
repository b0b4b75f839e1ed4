"""Shared fixtures: the dashboard demo client and a calculator."""

import logging

import pytest

from portfolio_models import Account, Client, Position
from rebalance_engine import RebalanceCalculator
from rebalancer_config import EngineConfig, reset_config

from .factories import make_position


@pytest.fixture
def aapl() -> Position:
    return make_position("AAPL", 150, 185.50, 25, id="pos-1", description="Apple Inc.", yield_pct=0.5)


@pytest.fixture
def vti() -> Position:
    return make_position("VTI", 400, 240.20, 75, id="pos-2", description="Vanguard Total Stock Market",
                         yield_pct=1.4)


@pytest.fixture
def demo_account(aapl, vti) -> Account:
    return Account(id="acc-1", name="Schwab IRA", type="IRA", cash=5000, positions=[aapl, vti])


@pytest.fixture
def demo_client(demo_account) -> Client:
    return Client(id="demo-1", name="Tom's Retirement", accounts=[demo_account])


@pytest.fixture
def calculator() -> RebalanceCalculator:
    return RebalanceCalculator(EngineConfig())


@pytest.fixture(autouse=True)
def clean_config():
    reset_config()
    yield
    reset_config()


@pytest.fixture
def preserve_root_logger():
    """Restore root logger handlers/level after code that reconfigures logging."""
    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    yield root
    root.handlers[:] = handlers
    root.setLevel(level)
