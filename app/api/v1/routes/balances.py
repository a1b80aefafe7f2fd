from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession
from app.db.session import get_db
from app.schemas.balances import SummaryOut
from app.services.balance_services import compute_user_summary

router = APIRouter()

@router.get("/summary/{user_id}", response_model=SummaryOut)
async def balance_summary(
    user_id: int,
    db: AsyncSession = Depends(get_db)
):
    summary = await compute_user_summary(db, user_id)
    return SummaryOut.model_validate(summary)
