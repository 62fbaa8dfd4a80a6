"""SQLAlchemy implementation for the ledger."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import case, desc, func, insert, select, update
from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.ext.asyncio import AsyncSession

from skillbridge.db.models import CreditTransaction, Wallet


class SqlWalletRepository:
    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def get_wallet(self, user_id: str) -> Wallet | None:
        stmt = (
            select(Wallet)
            .where(Wallet.user_id == user_id)
            .execution_options(populate_existing=True)
        )
        result = await self.session.execute(stmt)
        return result.scalars().first()

    async def create_wallet(self, user_id: str, opening_balance: int) -> tuple[Wallet, bool]:
        """Insert the wallet unless another request got there first.

        Returns the wallet and whether this call created it.
        """
        values = {
            "user_id": user_id,
            "balance": opening_balance,
            "total_earned": opening_balance,
            "total_spent": 0,
        }
        dialect = self.session.bind.dialect.name if self.session.bind is not None else ""
        if dialect == "sqlite":
            stmt = sqlite.insert(Wallet).values(**values).on_conflict_do_nothing(index_elements=[Wallet.user_id])
        elif dialect == "postgresql":
            stmt = postgresql.insert(Wallet).values(**values).on_conflict_do_nothing(index_elements=[Wallet.user_id])
        else:
            stmt = insert(Wallet).values(**values)
        result = await self.session.execute(stmt.returning(Wallet.user_id))
        created = result.scalar_one_or_none() is not None

        wallet = await self.get_wallet(user_id)
        if wallet is None:
            raise RuntimeError(f"wallet for {user_id} could not be created")
        return wallet, created

    async def credit(self, user_id: str, amount: int) -> Wallet | None:
        stmt = (
            update(Wallet)
            .where(Wallet.user_id == user_id)
            .values(
                balance=Wallet.balance + amount,
                total_earned=Wallet.total_earned + amount,
            )
            .execution_options(synchronize_session="fetch", populate_existing=True)
            .returning(Wallet)
        )
        result = await self.session.execute(stmt)
        return result.scalars().first()

    async def debit(self, user_id: str, amount: int) -> Wallet | None:
        """Debit only when the balance covers ``amount``; ``None`` means it did not."""
        stmt = (
            update(Wallet)
            .where(Wallet.user_id == user_id, Wallet.balance >= amount)
            .values(
                balance=Wallet.balance - amount,
                total_spent=Wallet.total_spent + amount,
            )
            .execution_options(synchronize_session="fetch", populate_existing=True)
            .returning(Wallet)
        )
        result = await self.session.execute(stmt)
        return result.scalars().first()

    async def add_transaction(
        self,
        *,
        user_id: str,
        type: str,
        amount: int,
        description: str,
        meeting_id: str | None,
        counterparty_id: str | None,
    ) -> CreditTransaction:
        tx = CreditTransaction(
            user_id=user_id,
            type=type,
            amount=amount,
            description=description,
            meeting_id=meeting_id,
            counterparty_id=counterparty_id,
        )
        self.session.add(tx)
        await self.session.flush()
        return tx

    async def list_transactions(self, user_id: str, limit: int, offset: int) -> list[CreditTransaction]:
        stmt = (
            select(CreditTransaction)
            .where(CreditTransaction.user_id == user_id)
            .order_by(desc(CreditTransaction.created_at), desc(CreditTransaction.id))
            .offset(offset)
            .limit(limit)
            .execution_options(populate_existing=True)
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def count_transactions(self, user_id: str) -> int:
        stmt = select(func.count()).select_from(CreditTransaction).where(CreditTransaction.user_id == user_id)
        result = await self.session.execute(stmt)
        return int(result.scalar_one())

    async def sum_since(self, user_id: str, since: datetime) -> tuple[int, int]:
        stmt = select(
            func.coalesce(func.sum(case((CreditTransaction.amount > 0, CreditTransaction.amount), else_=0)), 0),
            func.coalesce(func.sum(case((CreditTransaction.amount < 0, -CreditTransaction.amount), else_=0)), 0),
        ).where(
            CreditTransaction.user_id == user_id,
            CreditTransaction.created_at >= since,
        )
        result = await self.session.execute(stmt)
        earned, spent = result.one()
        return int(earned or 0), int(spent or 0)

    async def transaction_total(self, user_id: str) -> int:
        stmt = select(func.coalesce(func.sum(CreditTransaction.amount), 0)).where(
            CreditTransaction.user_id == user_id
        )
        result = await self.session.execute(stmt)
        return int(result.scalar_one() or 0)
