import asyncio
from datetime import datetime, timezone

import pytest

from skillbridge.modules.wallets import InsufficientCreditsError, InvalidAmountError, WalletService


async def test_wallet_opens_once_with_welcome_bonus(session, make_user):
    user = await make_user("Ada")
    wallets = WalletService.with_session(session)

    first = await wallets.get_or_create_wallet(user.id)
    second = await wallets.get_or_create_wallet(user.id)

    assert first.balance == second.balance == 100
    assert first.total_earned == 100
    assert first.total_spent == 0
    page = await wallets.list_transactions(user.id)
    assert page.total == 1
    assert page.transactions[0].type == "bonus"
    assert page.transactions[0].amount == 100


async def test_earn_and_spend_keep_balance_equal_to_log(session, make_user):
    user = await make_user("Grace")
    wallets = WalletService.with_session(session)

    earned = await wallets.earn(user.id, 25, "Teaching session with Linus")
    spent = await wallets.spend(user.id, 40, "Learning session with Linus")
    await wallets.spend(user.id, 10, "Learning session with Linus")

    assert earned.balance == 125
    assert earned.transaction.amount == 25
    assert spent.balance == 85
    assert spent.transaction.amount == -40

    wallet = await wallets.get_or_create_wallet(user.id)
    assert wallet.balance == 75
    assert wallet.total_earned == 125
    assert wallet.total_spent == 50
    assert await wallets.verify_integrity(user.id)


async def test_spend_beyond_balance_leaves_state_untouched(session, make_user):
    user = await make_user("Barbara")
    wallets = WalletService.with_session(session)
    await wallets.get_or_create_wallet(user.id)

    with pytest.raises(InsufficientCreditsError) as excinfo:
        await wallets.spend(user.id, 150, "Too expensive")

    assert excinfo.value.required == 150
    assert excinfo.value.available == 100
    assert "Required: 150, available: 100" in str(excinfo.value)
    wallet = await wallets.get_or_create_wallet(user.id)
    assert wallet.balance == 100
    assert wallet.total_spent == 0
    assert (await wallets.list_transactions(user.id)).total == 1


@pytest.mark.parametrize("amount", [0, -5, True, 2.5])
async def test_non_positive_or_non_integer_amounts_are_rejected(session, make_user, amount):
    user = await make_user()
    wallets = WalletService.with_session(session)

    with pytest.raises(InvalidAmountError):
        await wallets.earn(user.id, amount, "bad")
    with pytest.raises(InvalidAmountError):
        await wallets.spend(user.id, amount, "bad")


async def test_unknown_transaction_kind_is_rejected(session, make_user):
    user = await make_user()
    with pytest.raises(InvalidAmountError):
        await WalletService.with_session(session).earn(user.id, 5, "gift", kind="gift")


async def test_transactions_are_listed_newest_first_with_paging(session, make_user):
    user = await make_user()
    wallets = WalletService.with_session(session)
    for amount in (1, 2, 3, 4):
        await wallets.earn(user.id, amount, f"earn {amount}")

    first = await wallets.list_transactions(user.id, limit=3, offset=0)
    second = await wallets.list_transactions(user.id, limit=3, offset=3)

    assert first.total == 5
    assert [tx.amount for tx in first.transactions] == [4, 3, 2]
    assert first.has_more is True
    assert [tx.amount for tx in second.transactions] == [1, 100]
    assert second.has_more is False


async def test_monthly_stats_and_balance_check(session, make_user):
    user = await make_user()
    wallets = WalletService.with_session(session)
    await wallets.earn(user.id, 25, "taught")
    await wallets.spend(user.id, 110, "learned")

    stats = await wallets.get_monthly_stats(user.id)
    assert stats.earned == 125
    assert stats.spent == 110

    future = await wallets.get_monthly_stats(user.id, now=datetime(2999, 1, 15, tzinfo=timezone.utc))
    assert future.earned == 0 and future.spent == 0

    check = await wallets.check_balance(user.id)
    assert check.balance == 15
    assert check.session_cost == 25
    assert check.can_afford_session is False


async def test_concurrent_spends_never_overdraw(session_maker, session, make_user):
    user = await make_user()
    await WalletService.with_session(session).get_or_create_wallet(user.id)
    await session.commit()

    async def attempt() -> bool:
        async with session_maker() as own:
            try:
                await WalletService.with_session(own).spend(user.id, 100, "all in")
            except InsufficientCreditsError:
                await own.rollback()
                return False
            await own.commit()
            return True

    results = await asyncio.gather(*(attempt() for _ in range(5)))

    assert results.count(True) == 1
    assert results.count(False) == 4
    async with session_maker() as fresh:
        wallets = WalletService.with_session(fresh)
        wallet = await wallets.get_or_create_wallet(user.id)
        assert wallet.balance == 0
        assert (await wallets.list_transactions(user.id)).total == 2
        assert await wallets.verify_integrity(user.id)
