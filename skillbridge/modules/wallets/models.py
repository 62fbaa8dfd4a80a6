"""Domain models for ledger operations."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional

TRANSACTION_TYPES = frozenset({"teaching", "learning", "purchase", "bonus", "refund"})


@dataclass(slots=True)
class WalletSnapshot:
    user_id: str
    balance: int
    total_earned: int
    total_spent: int
    updated_at: Optional[datetime] = None


@dataclass(slots=True)
class WalletTransactionRecord:
    id: int
    user_id: str
    type: str
    amount: int
    description: str
    meeting_id: Optional[str]
    counterparty_id: Optional[str]
    created_at: datetime


@dataclass(slots=True)
class LedgerEntryResult:
    """Outcome of a single earn/spend: the appended entry and the balance after it."""

    transaction: WalletTransactionRecord
    balance: int


@dataclass(slots=True)
class MonthlyStats:
    earned: int = 0
    spent: int = 0


@dataclass(slots=True)
class WalletSummary:
    wallet: WalletSnapshot
    monthly: MonthlyStats


@dataclass(slots=True)
class BalanceCheck:
    balance: int
    session_cost: int
    can_afford_session: bool


@dataclass(slots=True)
class TransactionPage:
    transactions: list[WalletTransactionRecord] = field(default_factory=list)
    total: int = 0
    has_more: bool = False
