from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession
from app.db.session import get_db
from app.schemas.balances import BalanceOut, BreakdownEntryOut, GroupBalancesOut, UserGroupBalanceOut
from app.schemas.expense import ExpenseCreate, ExpenseOut
from app.schemas.group import MemberOut
from app.services.balance_services import balances_for_group, compute_user_balance_in_group
from app.services.expense_services import create_expense_with_splits, list_group_expenses
from app.services.ledger_reader import get_group_or_404, list_group_members

router = APIRouter()

@router.get("/{group_id}/balances", response_model=GroupBalancesOut)
async def group_balances(group_id: int, db: AsyncSession = Depends(get_db)):
    group = await get_group_or_404(db, group_id)
    balances = await balances_for_group(db, group)

    return GroupBalancesOut(
        group_id=group.id,
        group_name=group.name,
        balances=[BalanceOut.model_validate(b) for b in balances.values()]
    )

@router.get("/{group_id}/balances/{user_id}", response_model=UserGroupBalanceOut)
async def user_balance_in_group(group_id: int, user_id: int, db: AsyncSession = Depends(get_db)):
    balance, breakdown = await compute_user_balance_in_group(db, group_id, user_id)

    return UserGroupBalanceOut(
        group_id=group_id,
        user_id=balance.user_id,
        name=balance.name,
        owes=balance.owes,
        owed=balance.owed,
        net=balance.net,
        currency=balance.currency,
        breakdown=[BreakdownEntryOut.model_validate(e) for e in breakdown]
    )

@router.get("/{group_id}/members", response_model=list[MemberOut])
async def group_members(group_id: int, db: AsyncSession = Depends(get_db)):
    await get_group_or_404(db, group_id)
    return await list_group_members(db, group_id)

@router.get("/{group_id}/expenses", response_model=list[ExpenseOut], description="get all expenses of the group")
async def fetch_expenses(group_id: int, db: AsyncSession = Depends(get_db)):
    return await list_group_expenses(db, group_id)

@router.post("/{group_id}/expenses", response_model=ExpenseOut, status_code=201)
async def add_expense(group_id: int, data: ExpenseCreate, db: AsyncSession = Depends(get_db)):
    return await create_expense_with_splits(db, group_id, data)
