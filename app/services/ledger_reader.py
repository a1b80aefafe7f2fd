from decimal import Decimal
from typing import List
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload
from app.core.exceptions import GroupNotFound, UserNotFound
from app.core.ledger import LedgerExpense, LedgerSplit
from app.core.utils import qround
from app.db.base import Expense, ExpenseSplit, Group, GroupMember, User


def _currency_code(currency) -> str:
    return getattr(currency, "value", currency)


def to_ledger_expense(expense: Expense) -> LedgerExpense:
    return LedgerExpense(
        id=expense.id,
        title=expense.title,
        amount=qround(Decimal(str(expense.amount))),
        currency=_currency_code(expense.currency),
        paid_by=expense.paid_by,
        payer_name=expense.payer.name if expense.payer else None,
        date=expense.date,
        splits=tuple(
            LedgerSplit(
                user_id=s.user_id,
                amount=qround(Decimal(str(s.amount))),
                user_name=s.user.name if s.user else None,
            )
            for s in expense.splits
        ),
    )


async def get_group_or_404(db: AsyncSession, group_id: int) -> Group:
    res = await db.execute(select(Group).where(Group.id == group_id))
    group = res.scalar_one_or_none()

    if not group:
        raise GroupNotFound(f"Group {group_id} not found")

    return group


async def get_user_or_404(db: AsyncSession, user_id: int) -> User:
    res = await db.execute(select(User).where(User.id == user_id))
    user = res.scalar_one_or_none()

    if not user:
        raise UserNotFound(f"User {user_id} not found")

    return user


async def list_group_members(db: AsyncSession, group_id: int) -> List[User]:
    q = (
        select(User)
        .join(GroupMember, User.id == GroupMember.user_id)
        .where(GroupMember.group_id == group_id)
        .order_by(GroupMember.id)
    )
    res = await db.execute(q)
    return list(res.scalars().all())


async def list_groups_for_user(db: AsyncSession, user_id: int) -> List[Group]:
    q = (
        select(Group)
        .join(GroupMember, Group.id == GroupMember.group_id)
        .where(GroupMember.user_id == user_id)
        .order_by(Group.id)
    )
    res = await db.execute(q)
    return list(res.scalars().all())


async def load_group_expenses(db: AsyncSession, group_id: int, newest_first: bool = False) -> List[Expense]:
    order = (Expense.date.desc(), Expense.id.desc()) if newest_first else (Expense.date, Expense.id)
    q = (
        select(Expense)
        .where(
            Expense.group_id == group_id,
            Expense.is_personal == False,  # noqa: E712
        )
        .options(
            selectinload(Expense.payer),
            selectinload(Expense.splits).selectinload(ExpenseSplit.user),
        )
        .order_by(*order)
    )
    res = await db.execute(q)
    return list(res.scalars().all())


async def list_expenses_for_group(db: AsyncSession, group_id: int) -> List[LedgerExpense]:
    expenses = await load_group_expenses(db, group_id)
    return [to_ledger_expense(e) for e in expenses]
