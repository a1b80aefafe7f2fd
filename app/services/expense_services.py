import logging
from datetime import datetime, timezone
from typing import List
from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload
from app.core.exceptions import ExpenseNotFound, InvalidParticipant
from app.core.splits import allocate_splits
from app.db.base import Expense, ExpenseSplit
from app.models.expense import Currency, SplitType
from app.schemas.expense import ExpenseCreate, PersonalExpenseCreate
from app.services.ledger_reader import get_group_or_404, get_user_or_404, list_group_members, load_group_expenses

logger = logging.getLogger(__name__)


async def create_expense_with_splits(db: AsyncSession, group_id: int, data: ExpenseCreate) -> Expense:
    # validate and allocate first, then write expense and splits in one commit
    await get_group_or_404(db, group_id)

    members = await list_group_members(db, group_id)
    member_ids = [m.id for m in members]

    if data.paid_by not in member_ids:
        raise InvalidParticipant(f"Payer {data.paid_by} is not a group member")

    allocation = allocate_splits(data.split_type, data.amount, member_ids, data.splits)

    currency = data.currency or Currency(members[0].default_currency)

    try:
        expense = Expense(
            title=data.title,
            amount=data.amount,
            currency=currency,
            date=data.date or datetime.now(timezone.utc),
            paid_by=data.paid_by,
            group_id=group_id,
            split_type=data.split_type,
            is_personal=False
        )
        db.add(expense)
        await db.flush()  # gives expense.id

        db.add_all([
            ExpenseSplit(expense_id=expense.id, user_id=user_id, amount=share)
            for user_id, share in allocation
        ])

        await db.commit()
    except SQLAlchemyError:
        await db.rollback()
        logger.exception("Rolled back expense %r in group %s", data.title, group_id)
        raise

    logger.info(
        "Created %s expense %s in group %s: %s %s across %d splits",
        data.split_type.value, expense.id, group_id, data.amount, currency.value, len(allocation)
    )

    return await get_expense_by_id(db, expense.id)


async def create_personal_expense(db: AsyncSession, user_id: int, data: PersonalExpenseCreate) -> Expense:
    user = await get_user_or_404(db, user_id)

    expense = Expense(
        title=data.title,
        amount=data.amount,
        currency=data.currency or Currency(user.default_currency),
        date=data.date or datetime.now(timezone.utc),
        paid_by=user_id,
        group_id=None,
        split_type=SplitType.EQUAL,
        is_personal=True
    )
    db.add(expense)
    await db.commit()
    await db.refresh(expense)

    logger.info("Created personal expense %s for user %s", expense.id, user_id)
    return expense


async def list_personal_expenses(db: AsyncSession, user_id: int) -> List[Expense]:
    await get_user_or_404(db, user_id)

    q = (
        select(Expense)
        .where(
            Expense.paid_by == user_id,
            Expense.is_personal == True,  # noqa: E712
        )
        .order_by(Expense.date.desc(), Expense.id.desc())
    )

    res = await db.execute(q)
    return list(res.scalars().all())


async def list_group_expenses(db: AsyncSession, group_id: int) -> List[Expense]:
    await get_group_or_404(db, group_id)
    return await load_group_expenses(db, group_id, newest_first=True)


async def get_expense_by_id(db: AsyncSession, expense_id: int) -> Expense:
    q = (
        select(Expense)
        .where(Expense.id == expense_id)
        .options(
            selectinload(Expense.payer),
            selectinload(Expense.splits).selectinload(ExpenseSplit.user),
        )
        .execution_options(populate_existing=True)
    )

    res = await db.execute(q)
    expense = res.scalar_one_or_none()

    if not expense:
        raise ExpenseNotFound(f"Expense {expense_id} not found")

    return expense
