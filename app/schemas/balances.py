from decimal import Decimal
from pydantic import BaseModel, ConfigDict
from typing import List
from app.core.ledger import Direction

class BalanceOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    user_id: int
    name: str | None = None
    owes: Decimal
    owed: Decimal
    net: Decimal
    currency: str

class BreakdownEntryOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    expense_id: int
    expense_title: str
    other_user_id: int
    other_user_name: str | None = None
    amount: Decimal
    direction: Direction
    currency: str

class GroupBalancesOut(BaseModel):
    group_id: int
    group_name: str
    balances: List[BalanceOut]

class UserGroupBalanceOut(BalanceOut):
    group_id: int
    breakdown: List[BreakdownEntryOut]

class GroupSummaryOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    group_id: int
    group_name: str
    owes: Decimal
    owed: Decimal
    net: Decimal
    currency: str
    breakdown: List[BreakdownEntryOut]

class SummaryOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    user_id: int
    total_owed: Decimal
    total_owes: Decimal
    net_balance: Decimal
    currency: str
    by_group: List[GroupSummaryOut]
