import logging
from typing import Dict, Iterable, List, Optional, Tuple
from sqlalchemy.ext.asyncio import AsyncSession
from app.core.config import settings
from app.core.ledger import (
    Balance,
    BreakdownEntry,
    LedgerExpense,
    UserSummary,
    aggregate_balances,
    build_breakdown,
    rollup_summary,
    summarize_group,
    user_balance,
)
from app.models.expense import Currency
from app.models.group import Group
from app.services.ledger_reader import get_group_or_404, get_user_or_404, list_expenses_for_group, list_groups_for_user

logger = logging.getLogger(__name__)


def _warn_mixed_currencies(group_id: int, expenses: List[LedgerExpense]):
    currencies = {e.currency for e in expenses}
    if len(currencies) > 1:
        logger.warning(
            "Group %s mixes currencies %s; balances carry the last one seen per user",
            group_id, sorted(currencies)
        )


async def compute_group_balances(db: AsyncSession, group_id: int) -> Dict[int, Balance]:
    group = await get_group_or_404(db, group_id)
    return await balances_for_group(db, group)


async def balances_for_group(db: AsyncSession, group: Group) -> Dict[int, Balance]:
    expenses = await list_expenses_for_group(db, group.id)
    _warn_mixed_currencies(group.id, expenses)

    return aggregate_balances(expenses)


async def compute_user_balance_in_group(
    db: AsyncSession,
    group_id: int,
    user_id: int
) -> Tuple[Balance, List[BreakdownEntry]]:
    await get_group_or_404(db, group_id)

    expenses = await list_expenses_for_group(db, group_id)
    _warn_mixed_currencies(group_id, expenses)

    balance = user_balance(expenses, user_id, settings.DEFAULT_CURRENCY)
    return balance, build_breakdown(expenses, user_id)


async def compute_user_summary(
    db: AsyncSession,
    user_id: int,
    groups: Optional[Iterable[Group]] = None
) -> UserSummary:
    user = await get_user_or_404(db, user_id)
    currency = Currency(user.default_currency).value

    if groups is None:
        groups = await list_groups_for_user(db, user_id)

    per_group = []
    for group in groups:
        expenses = await list_expenses_for_group(db, group.id)
        _warn_mixed_currencies(group.id, expenses)
        per_group.append(summarize_group(group.id, group.name, expenses, user_id, currency))

    return rollup_summary(user_id, per_group, currency)
