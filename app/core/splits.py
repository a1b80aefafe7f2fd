from decimal import Decimal
from typing import Iterable, List, Optional, Sequence, Tuple
from app.core.exceptions import DuplicateParticipant, InvalidParticipant, SplitMismatch
from app.core.utils import SPLIT_TOLERANCE, qround, to_decimal
from app.models.expense import SplitType

Allocation = List[Tuple[int, Decimal]]


def allocate_equal(amount: Decimal, member_ids: Sequence[int]) -> Allocation:
    # rounded share stored as is, no remainder correction
    if not member_ids:
        raise InvalidParticipant("Cannot split an expense in a group without members")

    share = qround(to_decimal(amount) / len(member_ids))
    return [(member_id, share) for member_id in member_ids]


def allocate_exact(amount: Decimal, splits: Iterable, member_ids: Sequence[int]) -> Allocation:
    members = set(member_ids)
    seen = set()
    allocation: Allocation = []

    for s in splits:
        if s.user_id not in members:
            raise InvalidParticipant(f"User {s.user_id} is not a group member")
        if s.user_id in seen:
            raise DuplicateParticipant(f"User {s.user_id} appears more than once in splits")
        seen.add(s.user_id)
        allocation.append((s.user_id, qround(s.amount)))

    total = sum((share for _, share in allocation), Decimal("0"))
    expected = qround(amount)
    if abs(total - expected) > SPLIT_TOLERANCE:
        raise SplitMismatch(expected=expected, actual=total)

    return allocation


def allocate_splits(
    split_type: SplitType,
    amount: Decimal,
    member_ids: Sequence[int],
    splits: Optional[Iterable] = None,
) -> Allocation:
    if split_type == SplitType.EQUAL:
        return allocate_equal(amount, member_ids)
    return allocate_exact(amount, splits or [], member_ids)
