"""Ledger service: wallet balances and the append-only transaction log."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional

from sqlalchemy.ext.asyncio import AsyncSession

from skillbridge.core.config import Settings, get_settings
from skillbridge.db.models import CreditTransaction as CreditTransactionModel, Wallet as WalletModel
from skillbridge.infrastructure.database.repositories.wallet_repository import SqlWalletRepository
from skillbridge.modules.common.clock import start_of_month

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
from .repository import WalletRepository

logger = logging.getLogger(__name__)

WELCOME_BONUS_DESCRIPTION = "Welcome bonus credits"


@dataclass(slots=True)
class WalletService:
    """Earn/spend operations over a user's wallet.

    Every earn or spend is exactly one conditional wallet UPDATE plus one
    transaction INSERT issued on the caller's session, so both land in the
    same database transaction. The sufficiency check for a spend is part of
    the UPDATE itself (``balance >= amount``), which keeps concurrent spends
    from driving a balance negative.
    """

    repository: WalletRepository
    settings: Settings = field(default_factory=get_settings)

    @classmethod
    def with_session(cls, session: AsyncSession, settings: Settings | None = None) -> "WalletService":
        return cls(SqlWalletRepository(session), settings or get_settings())

    async def get_or_create_wallet(self, user_id: str) -> WalletSnapshot:
        return self._to_snapshot(await self._ensure_wallet(user_id))

    async def earn(
        self,
        user_id: str,
        amount: int,
        description: str,
        *,
        meeting_id: Optional[str] = None,
        counterparty_id: Optional[str] = None,
        kind: str = "teaching",
    ) -> LedgerEntryResult:
        self._validate(amount, kind)
        await self._ensure_wallet(user_id)
        wallet = await self.repository.credit(user_id, amount)
        if wallet is None:
            raise RuntimeError(f"wallet for {user_id} vanished during credit")
        tx = await self.repository.add_transaction(
            user_id=user_id,
            type=kind,
            amount=amount,
            description=description,
            meeting_id=meeting_id,
            counterparty_id=counterparty_id,
        )
        logger.info("Credited %s with %s credits (%s), balance=%s", user_id, amount, kind, wallet.balance)
        return LedgerEntryResult(transaction=self._to_transaction(tx), balance=wallet.balance)

    async def spend(
        self,
        user_id: str,
        amount: int,
        description: str,
        *,
        meeting_id: Optional[str] = None,
        counterparty_id: Optional[str] = None,
        kind: str = "learning",
    ) -> LedgerEntryResult:
        self._validate(amount, kind)
        await self._ensure_wallet(user_id)
        wallet = await self.repository.debit(user_id, amount)
        if wallet is None:
            current = await self.repository.get_wallet(user_id)
            available = current.balance if current is not None else 0
            logger.info("Rejected spend of %s for %s: balance=%s", amount, user_id, available)
            raise InsufficientCreditsError(required=amount, available=available)
        tx = await self.repository.add_transaction(
            user_id=user_id,
            type=kind,
            amount=-amount,
            description=description,
            meeting_id=meeting_id,
            counterparty_id=counterparty_id,
        )
        logger.info("Debited %s by %s credits (%s), balance=%s", user_id, amount, kind, wallet.balance)
        return LedgerEntryResult(transaction=self._to_transaction(tx), balance=wallet.balance)

    async def get_monthly_stats(self, user_id: str, now: datetime | None = None) -> MonthlyStats:
        earned, spent = await self.repository.sum_since(user_id, start_of_month(now))
        return MonthlyStats(earned=earned, spent=spent)

    async def get_summary(self, user_id: str) -> WalletSummary:
        wallet = await self.get_or_create_wallet(user_id)
        monthly = await self.get_monthly_stats(user_id)
        return WalletSummary(wallet=wallet, monthly=monthly)

    async def check_balance(self, user_id: str) -> BalanceCheck:
        wallet = await self.get_or_create_wallet(user_id)
        cost = self.settings.session_cost
        return BalanceCheck(balance=wallet.balance, session_cost=cost, can_afford_session=wallet.balance >= cost)

    async def list_transactions(self, user_id: str, limit: int = 20, offset: int = 0) -> TransactionPage:
        limit = max(int(limit), 0)
        offset = max(int(offset), 0)
        rows = await self.repository.list_transactions(user_id, limit, offset)
        total = await self.repository.count_transactions(user_id)
        return TransactionPage(
            transactions=[self._to_transaction(row) for row in rows],
            total=total,
            has_more=offset + len(rows) < total,
        )

    async def verify_integrity(self, user_id: str) -> bool:
        """Check the wallet against its transaction log."""
        wallet = await self.repository.get_wallet(user_id)
        if wallet is None:
            return await self.repository.count_transactions(user_id) == 0
        total = await self.repository.transaction_total(user_id)
        return wallet.balance >= 0 and total == wallet.balance == wallet.total_earned - wallet.total_spent

    async def _ensure_wallet(self, user_id: str) -> WalletModel:
        wallet = await self.repository.get_wallet(user_id)
        if wallet is not None:
            return wallet

        opening = self.settings.starting_balance
        wallet, created = await self.repository.create_wallet(user_id, opening)
        if created and opening > 0:
            await self.repository.add_transaction(
                user_id=user_id,
                type="bonus",
                amount=opening,
                description=WELCOME_BONUS_DESCRIPTION,
                meeting_id=None,
                counterparty_id=None,
            )
            logger.info("Opened wallet for %s with %s welcome credits", user_id, opening)
        return wallet

    @staticmethod
    def _validate(amount: int, kind: str) -> None:
        if isinstance(amount, bool) or not isinstance(amount, int) or amount <= 0:
            raise InvalidAmountError(f"amount must be a positive integer, got {amount!r}")
        if kind not in TRANSACTION_TYPES:
            raise InvalidAmountError(f"unknown transaction type: {kind}")

    @staticmethod
    def _to_snapshot(model: WalletModel) -> WalletSnapshot:
        return WalletSnapshot(
            user_id=model.user_id,
            balance=model.balance,
            total_earned=model.total_earned,
            total_spent=model.total_spent,
            updated_at=model.updated_at,
        )

    @staticmethod
    def _to_transaction(model: CreditTransactionModel) -> WalletTransactionRecord:
        return WalletTransactionRecord(
            id=model.id,
            user_id=model.user_id,
            type=model.type,
            amount=model.amount,
            description=model.description,
            meeting_id=model.meeting_id,
            counterparty_id=model.counterparty_id,
            created_at=model.created_at,
        )
