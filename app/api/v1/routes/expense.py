from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession
from app.db.session import get_db
from app.schemas.expense import ExpenseOut
from app.services.expense_services import get_expense_by_id

router = APIRouter()

@router.get("/{expense_id}", response_model=ExpenseOut)
async def fetch(
    expense_id: int,
    db: AsyncSession = Depends(get_db),
):
    return await get_expense_by_id(db, expense_id=expense_id)
