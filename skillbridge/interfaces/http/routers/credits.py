"""Ledger read endpoints."""
from fastapi import APIRouter, Depends, Query

from skillbridge.core.security import get_current_user
from skillbridge.interfaces.http.deps import get_wallet_service
from skillbridge.modules.users import User
from skillbridge.modules.wallets import WalletService
from skillbridge.schemas import (
    BalanceCheckResponse,
    MonthlyStatsResponse,
    TransactionListResponse,
    TransactionResponse,
    WalletResponse,
)

router = APIRouter()


@router.get("/wallet", response_model=WalletResponse, summary="Balance, lifetime totals and this month's flow")
async def read_wallet(
    user: User = Depends(get_current_user),
    service: WalletService = Depends(get_wallet_service),
) -> WalletResponse:
    summary = await service.get_summary(user.id)
    return WalletResponse(
        balance=summary.wallet.balance,
        total_earned=summary.wallet.total_earned,
        total_spent=summary.wallet.total_spent,
        monthly=MonthlyStatsResponse.model_validate(summary.monthly),
    )


@router.get("/transactions", response_model=TransactionListResponse, summary="Transaction history, newest first")
async def list_transactions(
    limit: int = Query(20, ge=1, le=100),
    offset: int = Query(0, ge=0),
    user: User = Depends(get_current_user),
    service: WalletService = Depends(get_wallet_service),
) -> TransactionListResponse:
    page = await service.list_transactions(user.id, limit=limit, offset=offset)
    return TransactionListResponse(
        transactions=[TransactionResponse.model_validate(tx) for tx in page.transactions],
        total=page.total,
        has_more=page.has_more,
    )


@router.get("/check-balance", response_model=BalanceCheckResponse, summary="Whether a session can be afforded")
async def check_balance(
    user: User = Depends(get_current_user),
    service: WalletService = Depends(get_wallet_service),
) -> BalanceCheckResponse:
    return BalanceCheckResponse.model_validate(await service.check_balance(user.id))
