"""Tests for the fallback holding classifier."""

import pytest

from portfolio_models import Account, AssetClass
from rebalance_engine import classify_account, classify_position

from .factories import make_position


def classify(symbol: str, description: str):
    return classify_position(make_position(symbol, 1, 1, description=description))


class TestClassifyPosition:

    @pytest.mark.parametrize("symbol,description", [
        ("CASH", ""),
        ("USD", "US Dollar"),
        ("SWVXX", "Schwab Value Advantage Money Fund Sweep"),
        ("FDRXX", "Fidelity Cash Reserves"),
    ])
    def test_cash(self, symbol, description):
        result = classify(symbol, description)

        assert result.asset_class == AssetClass.CASH
        assert result.sector == "Cash & Equivalents"

    def test_muni_bond_extracts_state(self):
        result = classify("64966QAA8", "New York City NY GO Bonds 5% 2030")

        assert result.asset_class == AssetClass.MUNI_BOND
        assert result.sector == "Municipal"
        assert result.state_code == "NY"

    def test_muni_without_state(self):
        result = classify("12345ABC9", "Water Authority REV Bonds")

        assert result.asset_class == AssetClass.MUNI_BOND
        assert result.state_code is None

    def test_corporate_bond_guesses_logo_ticker(self):
        result = classify("037833DX5", "Apple Inc 3.25% 2029")

        assert result.asset_class == AssetClass.FIXED_INCOME
        assert result.sector == "Corporate/Govt"
        assert result.logo_ticker == "APPL"

    def test_treasury_has_no_logo(self):
        result = classify("912828ZT0", "United States Treasury Note 0.25% 2025")

        assert result.asset_class == AssetClass.FIXED_INCOME
        assert result.logo_ticker is None

    def test_bond_keyword_without_cusip(self):
        assert classify("BND", "Vanguard Total Bond Market ETF").asset_class == AssetClass.FIXED_INCOME

    @pytest.mark.parametrize("description", [
        "Vanguard FTSE Developed Markets Intl",
        "iShares Core MSCI Emerging Markets",
        "Vanguard FTSE Europe ETF",
    ])
    def test_international_equity(self, description):
        result = classify("VXUS", description)

        assert result.asset_class == AssetClass.NON_US_EQUITY
        assert result.sector == "International Equity"

    @pytest.mark.parametrize("description,sector", [
        ("Technology Select Sector SPDR", "Technology"),
        ("Microsoft Corp Software", "Technology"),
        ("UnitedHealth Group", "Healthcare"),
        ("JPMorgan Chase Bank", "Financials"),
        ("Exxon Mobil Oil", "Energy"),
        ("Vanguard Real Estate REIT ETF", "Real Estate"),
        ("Vanguard Total Stock Market", "US Equity"),
    ])
    def test_us_equity_sectors(self, description, sector):
        result = classify("XYZ", description)

        assert result.asset_class == AssetClass.US_EQUITY
        assert result.sector == sector


class TestClassifyAccount:

    def test_fills_only_unclassified_positions(self, demo_account):
        manual = demo_account.positions[1].model_copy(update={
            "asset_class": AssetClass.OTHER, "sector": "Hand Picked",
        })
        account = demo_account.model_copy(update={"positions": [demo_account.positions[0], manual]})

        classified = classify_account(account)

        aapl, vti = classified.positions
        assert aapl.asset_class == AssetClass.US_EQUITY
        assert aapl.sector == "US Equity"
        assert vti.asset_class == AssetClass.OTHER
        assert vti.sector == "Hand Picked"
        assert account.positions[0].asset_class is None

    def test_empty_account(self):
        account = Account(id="a", name="Empty")

        assert classify_account(account).positions == []
