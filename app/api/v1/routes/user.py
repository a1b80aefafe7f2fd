from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession
from app.db.session import get_db
from app.schemas.expense import PersonalExpenseCreate, PersonalExpenseOut
from app.services.expense_services import create_personal_expense, list_personal_expenses

router = APIRouter()

@router.post("/{user_id}/expenses/personal", response_model=PersonalExpenseOut, status_code=201)
async def add_personal_expense(user_id: int, data: PersonalExpenseCreate, db: AsyncSession = Depends(get_db)):
    return await create_personal_expense(db, user_id, data)

@router.get("/{user_id}/expenses/personal", response_model=list[PersonalExpenseOut])
async def personal_expenses(user_id: int, db: AsyncSession = Depends(get_db)):
    return await list_personal_expenses(db, user_id)
