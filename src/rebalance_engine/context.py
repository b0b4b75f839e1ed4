"""
Rebalance context management using ContextVar so log records carry the
client and account currently being processed.
"""

from contextvars import ContextVar
from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class RebalanceContext:
    client_id: str
    account_id: Optional[str] = None


current_context: ContextVar[Optional[RebalanceContext]] = ContextVar('current_context', default=None)


def set_current_context(client_id: str, account_id: Optional[str] = None) -> None:
    """Set the client/account being processed."""
    current_context.set(RebalanceContext(client_id=client_id, account_id=account_id))


def get_current_context() -> Optional[RebalanceContext]:
    """Get the client/account being processed."""
    return current_context.get()


def clear_current_context() -> None:
    """Clear the current client/account."""
    current_context.set(None)
