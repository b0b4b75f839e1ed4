"""Keyword heuristics that classify holdings when no AI classification is available"""

import logging
import re
from typing import Optional
from pydantic import BaseModel
from portfolio_models import Account, AssetClass, BOND_SYMBOL_LENGTH, Position

logger = logging.getLogger(__name__)

STATE_CODE_PATTERN = re.compile(
    r"\b(AL|AK|AZ|AR|CA|CO|CT|DE|FL|GA|HI|ID|IL|IN|IA|KS|KY|LA|ME|MD|MA|MI|MN|MS|MO|MT|NE|NV|NH|NJ|"
    r"NM|NY|NC|ND|OH|OK|OR|PA|RI|SC|SD|TN|TX|UT|VT|VA|WA|WV|WI|WY)\b"
)

# First match wins
EQUITY_SECTOR_KEYWORDS = [
    ("Technology", ("TECH", "SOFTWARE", "SEMICONDUCTOR")),
    ("Healthcare", ("HEALTH", "PHARMA", "BIO")),
    ("Financials", ("BANK", "FINANCE", "INSURANCE")),
    ("Energy", ("ENERGY", "OIL", "GAS")),
    ("Real Estate", ("REIT", "REAL ESTATE")),
]


class ClassificationResult(BaseModel):
    asset_class: AssetClass
    sector: str
    state_code: Optional[str] = None
    logo_ticker: Optional[str] = None


def _contains_any(text: str, keywords) -> bool:
    return any(keyword in text for keyword in keywords)


def classify_position(position: Position) -> ClassificationResult:
    """Guess asset class and sector from the symbol and description"""
    desc = position.description.upper()
    sym = position.symbol.upper()

    if sym in ("CASH", "USD") or _contains_any(desc, ("CASH", "SWEEP")):
        return ClassificationResult(asset_class=AssetClass.CASH, sector="Cash & Equivalents")

    if len(sym) == BOND_SYMBOL_LENGTH or _contains_any(desc, ("BOND", "NOTE", "TREASURY")):
        if _contains_any(desc, ("MUNI", "GO ", "REV ")):
            match = STATE_CODE_PATTERN.search(desc)
            return ClassificationResult(
                asset_class=AssetClass.MUNI_BOND,
                sector="Municipal",
                state_code=match.group(1) if match else None,
            )

        # Rough issuer guess for corporate bond logos
        logo_ticker = None
        if "TREASURY" not in desc and desc:
            logo_ticker = desc.split(" ")[0][:4] or None
        return ClassificationResult(
            asset_class=AssetClass.FIXED_INCOME,
            sector="Corporate/Govt",
            logo_ticker=logo_ticker,
        )

    if _contains_any(desc, ("INTL", "EMERGING", "EUROPE", "ASIA")):
        return ClassificationResult(asset_class=AssetClass.NON_US_EQUITY, sector="International Equity")

    for sector, keywords in EQUITY_SECTOR_KEYWORDS:
        if _contains_any(desc, keywords):
            return ClassificationResult(asset_class=AssetClass.US_EQUITY, sector=sector)
    return ClassificationResult(asset_class=AssetClass.US_EQUITY, sector="US Equity")


def classify_account(account: Account) -> Account:
    """Fill in classification for positions that have none; classified positions are kept"""
    positions = []
    classified = 0
    for pos in account.positions:
        if pos.asset_class is None:
            result = classify_position(pos)
            pos = pos.model_copy(update=result.model_dump())
            classified += 1
        positions.append(pos)

    if classified:
        logger.info(f"Classified {classified} position(s) in account {account.name} with fallback heuristics")
    return account.model_copy(update={"positions": positions})
