"""Ledger: wallet balances and the credit transaction log."""

from .exceptions import InsufficientCreditsError, InvalidAmountError
from .models import (
    TRANSACTION_TYPES,
    BalanceCheck,
    LedgerEntryResult,
    MonthlyStats,
    TransactionPage,
    WalletSnapshot,
    WalletSummary,
    WalletTransactionRecord,
)
from .service import WalletService

__all__ = [
    "TRANSACTION_TYPES",
    "BalanceCheck",
    "InsufficientCreditsError",
    "InvalidAmountError",
    "LedgerEntryResult",
    "MonthlyStats",
    "TransactionPage",
    "WalletService",
    "WalletSnapshot",
    "WalletSummary",
    "WalletTransactionRecord",
]
