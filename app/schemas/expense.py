from datetime import datetime
from decimal import Decimal
from pydantic import BaseModel, ConfigDict, Field
from typing import List
from app.models.expense import Currency, SplitType

class SplitInput(BaseModel):
    user_id: int
    amount: Decimal = Field(ge=0, max_digits=10, decimal_places=2)

class ExpenseCreate(BaseModel):
    title: str = Field(min_length=1)
    amount: Decimal = Field(ge=0, max_digits=10, decimal_places=2)
    paid_by: int
    currency: Currency | None = None
    date: datetime | None = None
    split_type: SplitType = SplitType.EQUAL
    splits: List[SplitInput] = []

class PersonalExpenseCreate(BaseModel):
    title: str = Field(min_length=1)
    amount: Decimal = Field(ge=0, max_digits=10, decimal_places=2)
    currency: Currency | None = None
    date: datetime | None = None

class UserRef(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str

class SplitOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    user_id: int
    amount: Decimal
    user: UserRef | None = None

class ExpenseOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    title: str
    amount: Decimal
    currency: Currency
    date: datetime
    group_id: int | None = None
    paid_by: int
    split_type: SplitType
    is_personal: bool
    payer: UserRef | None = None
    splits: List[SplitOut] = []

class PersonalExpenseOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    title: str
    amount: Decimal
    currency: Currency
    date: datetime
    is_personal: bool
