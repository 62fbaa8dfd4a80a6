"""Repository protocol for ledger operations."""

from __future__ import annotations

from datetime import datetime
from typing import Protocol, Sequence

from skillbridge.db.models import CreditTransaction as CreditTransactionModel, Wallet as WalletModel


class WalletRepository(Protocol):
    async def get_wallet(self, user_id: str) -> WalletModel | None:
        ...

    async def create_wallet(self, user_id: str, opening_balance: int) -> tuple[WalletModel, bool]:
        ...

    async def credit(self, user_id: str, amount: int) -> WalletModel | None:
        ...

    async def debit(self, user_id: str, amount: int) -> WalletModel | None:
        ...

    async def add_transaction(
        self,
        *,
        user_id: str,
        type: str,
        amount: int,
        description: str,
        meeting_id: str | None,
        counterparty_id: str | None,
    ) -> CreditTransactionModel:
        ...

    async def list_transactions(self, user_id: str, limit: int, offset: int) -> Sequence[CreditTransactionModel]:
        ...

    async def count_transactions(self, user_id: str) -> int:
        ...

    async def sum_since(self, user_id: str, since: datetime) -> tuple[int, int]:
        ...

    async def transaction_total(self, user_id: str) -> int:
        ...
