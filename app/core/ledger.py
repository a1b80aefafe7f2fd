import enum
from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from typing import Dict, Iterable, List, Optional, Tuple
from app.core.utils import ZERO


class Direction(str, enum.Enum):
    OWED = "owed"  # counterparty owes the target user
    OWES = "owes"  # target user owes the counterparty


@dataclass(frozen=True)
class LedgerSplit:
    user_id: int
    amount: Decimal
    user_name: Optional[str] = None


@dataclass(frozen=True)
class LedgerExpense:
    id: int
    title: str
    amount: Decimal
    currency: str
    paid_by: int
    payer_name: Optional[str] = None
    date: Optional[datetime] = None
    splits: Tuple[LedgerSplit, ...] = ()


@dataclass
class Balance:
    user_id: int
    currency: str
    name: Optional[str] = None
    owed: Decimal = ZERO
    owes: Decimal = ZERO

    @property
    def net(self) -> Decimal:
        return self.owed - self.owes


@dataclass(frozen=True)
class BreakdownEntry:
    expense_id: int
    expense_title: str
    other_user_id: int
    other_user_name: Optional[str]
    amount: Decimal
    direction: Direction
    currency: str


@dataclass
class GroupSummary:
    group_id: int
    group_name: str
    owes: Decimal
    owed: Decimal
    currency: str
    breakdown: List[BreakdownEntry] = field(default_factory=list)

    @property
    def net(self) -> Decimal:
        return self.owed - self.owes


@dataclass
class UserSummary:
    user_id: int
    currency: str
    total_owed: Decimal = ZERO
    total_owes: Decimal = ZERO
    by_group: List[GroupSummary] = field(default_factory=list)

    @property
    def net_balance(self) -> Decimal:
        return self.total_owed - self.total_owes


def _touch(balances: Dict[int, Balance], user_id: int, currency: str, name: Optional[str]) -> Balance:
    balance = balances.get(user_id)
    if balance is None:
        balance = balances[user_id] = Balance(user_id=user_id, currency=currency, name=name)
    else:
        # one currency per accumulator, the last expense seen wins
        balance.currency = currency
        if balance.name is None:
            balance.name = name
    return balance


def aggregate_balances(expenses: Iterable[LedgerExpense]) -> Dict[int, Balance]:
    # absent users had no activity in these expenses
    balances: Dict[int, Balance] = {}

    for expense in expenses:
        payer = _touch(balances, expense.paid_by, expense.currency, expense.payer_name)
        payer.owed += expense.amount

        for split in expense.splits:
            member = _touch(balances, split.user_id, expense.currency, split.user_name)
            member.owes += split.amount

            if split.user_id == expense.paid_by:
                payer.owed -= split.amount

    return balances


def user_balance(expenses: Iterable[LedgerExpense], user_id: int, default_currency: str) -> Balance:
    balance = aggregate_balances(expenses).get(user_id)
    if balance is None:
        return Balance(user_id=user_id, currency=default_currency)
    return balance


def build_breakdown(expenses: Iterable[LedgerExpense], user_id: int) -> List[BreakdownEntry]:
    breakdown: List[BreakdownEntry] = []

    for expense in expenses:
        is_payer = expense.paid_by == user_id

        for split in expense.splits:
            if is_payer and split.user_id != user_id:
                breakdown.append(BreakdownEntry(
                    expense_id=expense.id,
                    expense_title=expense.title,
                    other_user_id=split.user_id,
                    other_user_name=split.user_name,
                    amount=split.amount,
                    direction=Direction.OWED,
                    currency=expense.currency,
                ))
            elif not is_payer and split.user_id == user_id:
                breakdown.append(BreakdownEntry(
                    expense_id=expense.id,
                    expense_title=expense.title,
                    other_user_id=expense.paid_by,
                    other_user_name=expense.payer_name,
                    amount=split.amount,
                    direction=Direction.OWES,
                    currency=expense.currency,
                ))

    return breakdown


def summarize_group(group_id: int, group_name: str, expenses: List[LedgerExpense], user_id: int, default_currency: str) -> GroupSummary:
    balance = user_balance(expenses, user_id, default_currency)
    return GroupSummary(
        group_id=group_id,
        group_name=group_name,
        owes=balance.owes,
        owed=balance.owed,
        currency=balance.currency,
        breakdown=build_breakdown(expenses, user_id),
    )


def rollup_summary(user_id: int, groups: Iterable[GroupSummary], currency: str) -> UserSummary:
    # totals add up across groups without looking at their currencies
    summary = UserSummary(user_id=user_id, currency=currency)

    for group in groups:
        summary.total_owed += group.owed
        summary.total_owes += group.owes
        summary.by_group.append(group)

    return summary
