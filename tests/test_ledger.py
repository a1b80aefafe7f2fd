from decimal import Decimal

import pytest

from app.core.ledger import (
    Balance,
    Direction,
    GroupSummary,
    LedgerExpense,
    LedgerSplit,
    aggregate_balances,
    build_breakdown,
    rollup_summary,
    summarize_group,
    user_balance,
)

NAMES = {1: "Alice", 2: "Bob", 3: "Carol", 4: "Dave"}


def expense(id, payer, amount, shares, currency="INR", title=None):
    return LedgerExpense(
        id=id,
        title=title or f"Expense {id}",
        amount=Decimal(amount),
        currency=currency,
        paid_by=payer,
        payer_name=NAMES[payer],
        splits=tuple(LedgerSplit(user_id=u, amount=Decimal(a), user_name=NAMES[u]) for u, a in shares.items()),
    )


@pytest.fixture
def dinner():
    return expense(1, 1, "90.00", {1: "30.00", 2: "30.00", 3: "30.00"}, title="Dinner")


def test_dinner_split_nets_out_payer_share(dinner):
    balances = aggregate_balances([dinner])

    alice, bob, carol = balances[1], balances[2], balances[3]
    assert (alice.owed, alice.owes, alice.net) == (Decimal("60.00"), Decimal("30.00"), Decimal("30.00"))
    assert (bob.owed, bob.owes, bob.net) == (0, Decimal("30.00"), Decimal("-30.00"))
    assert carol.net == Decimal("-30.00")
    # the payer's own share lands in both owed and owes
    assert sum(b.net for b in balances.values()) == -Decimal("30.00")


def test_nets_sum_to_minus_payers_own_shares():
    expenses = [
        expense(1, 1, "90.00", {1: "30.00", 2: "30.00", 3: "30.00"}),
        expense(2, 2, "45.50", {1: "20.00", 3: "25.50"}),
        expense(3, 3, "12.00", {3: "12.00"}),
        expense(4, 1, "60.00", {2: "60.00"}),
    ]
    balances = aggregate_balances(expenses)
    own_shares = sum(
        (s.amount for e in expenses for s in e.splits if s.user_id == e.paid_by),
        Decimal("0"),
    )

    assert own_shares == Decimal("42.00")
    assert sum(b.net for b in balances.values()) + own_shares == 0
    assert balances[1].net == Decimal("70.00")
    assert balances[2].net == Decimal("-44.50")
    assert balances[3].net == Decimal("-67.50")


def test_nets_sum_to_zero_when_payers_hold_no_share():
    expenses = [
        expense(1, 4, "90.00", {1: "30.00", 2: "30.00", 3: "30.00"}),
        expense(2, 2, "45.50", {1: "20.00", 3: "25.50"}),
    ]
    assert sum(b.net for b in aggregate_balances(expenses).values()) == 0


def test_equal_split_rounding_slack_is_bounded():
    # 100 / 3 stored as 33.33 each
    expenses = [expense(1, 4, "100.00", {1: "33.33", 2: "33.33", 3: "33.33"})]
    total = sum(b.net for b in aggregate_balances(expenses).values())

    assert total == Decimal("0.01")
    assert abs(total) <= Decimal("0.01") * 3 * len(expenses)


def test_payer_outside_the_split_is_owed_everything():
    balances = aggregate_balances([expense(1, 4, "40.00", {1: "10.00", 2: "30.00"})])

    assert balances[4].owed == Decimal("40.00")
    assert balances[4].owes == 0
    assert balances[4].net == Decimal("40.00")


def test_users_without_activity_are_absent(dinner):
    assert 4 not in aggregate_balances([dinner])
    assert aggregate_balances([]) == {}


def test_user_balance_defaults_to_zero_for_absent_user(dinner):
    balance = user_balance([dinner], 4, "GBP")

    assert balance == Balance(user_id=4, currency="GBP")
    assert balance.net == 0


def test_balances_carry_names(dinner):
    balances = aggregate_balances([dinner])
    assert {uid: b.name for uid, b in balances.items()} == {1: "Alice", 2: "Bob", 3: "Carol"}


def test_last_seen_currency_wins_per_user():
    expenses = [
        expense(1, 1, "10.00", {1: "5.00", 2: "5.00"}, currency="INR"),
        expense(2, 2, "8.00", {1: "4.00", 2: "4.00"}, currency="USD"),
    ]
    balances = aggregate_balances(expenses)

    assert balances[1].currency == "USD"
    assert balances[2].currency == "USD"
    # amounts are added as they are, whatever the currency
    assert (balances[1].owed, balances[1].owes) == (Decimal("5.00"), Decimal("9.00"))


def test_breakdown_for_payer_lists_who_owes_them(dinner):
    entries = build_breakdown([dinner], 1)

    assert [(e.other_user_id, e.other_user_name, e.amount, e.direction) for e in entries] == [
        (2, "Bob", Decimal("30.00"), Direction.OWED),
        (3, "Carol", Decimal("30.00"), Direction.OWED),
    ]
    assert all(e.expense_id == 1 and e.expense_title == "Dinner" for e in entries)


def test_breakdown_for_participant_points_at_payer(dinner):
    entries = build_breakdown([dinner], 2)

    assert len(entries) == 1
    entry = entries[0]
    assert (entry.other_user_id, entry.other_user_name) == (1, "Alice")
    assert entry.direction == Direction.OWES
    assert entry.amount == Decimal("30.00")
    assert entry.currency == "INR"


def test_breakdown_never_references_the_user_themself():
    expenses = [
        expense(1, 1, "90.00", {1: "30.00", 2: "30.00", 3: "30.00"}),
        expense(2, 1, "12.00", {1: "12.00"}),
        expense(3, 2, "20.00", {1: "10.00", 2: "10.00"}),
    ]
    for user_id in (1, 2, 3):
        assert all(e.other_user_id != user_id for e in build_breakdown(expenses, user_id))


def test_breakdown_follows_expense_order():
    expenses = [
        expense(5, 2, "10.00", {1: "10.00"}),
        expense(2, 1, "20.00", {3: "20.00"}),
        expense(9, 3, "6.00", {1: "3.00", 3: "3.00"}),
    ]
    entries = build_breakdown(expenses, 1)

    assert [e.expense_id for e in entries] == [5, 2, 9]
    assert [e.direction for e in entries] == [Direction.OWES, Direction.OWED, Direction.OWES]


def test_breakdown_explains_net_balance_apart_from_own_shares():
    expenses = [
        expense(1, 1, "90.00", {1: "30.00", 2: "30.00", 3: "30.00"}),
        expense(2, 2, "45.50", {1: "20.00", 3: "25.50"}),
    ]
    entries = build_breakdown(expenses, 1)
    explained = sum(e.amount if e.direction == Direction.OWED else -e.amount for e in entries)

    # Alice also owes her own 30.00 share of the dinner she paid for
    assert explained == Decimal("40.00")
    assert explained - Decimal("30.00") == aggregate_balances(expenses)[1].net


def test_breakdown_is_empty_without_activity(dinner):
    assert build_breakdown([dinner], 4) == []


def test_reads_are_idempotent(dinner):
    expenses = [dinner, expense(2, 2, "10.00", {1: "5.00", 2: "5.00"})]

    assert aggregate_balances(expenses) == aggregate_balances(expenses)
    assert build_breakdown(expenses, 1) == build_breakdown(expenses, 1)


def test_summarize_group_uses_user_balance(dinner):
    summary = summarize_group(10, "Goa Trip", [dinner], 2, "INR")

    assert (summary.group_id, summary.group_name) == (10, "Goa Trip")
    assert (summary.owed, summary.owes, summary.net) == (0, Decimal("30.00"), Decimal("-30.00"))
    assert len(summary.breakdown) == 1


def test_summarize_group_without_activity_uses_default_currency(dinner):
    summary = summarize_group(10, "Goa Trip", [dinner], 4, "EUR")

    assert summary.net == 0
    assert summary.currency == "EUR"
    assert summary.breakdown == []


def test_rollup_adds_groups_regardless_of_currency():
    groups = [
        GroupSummary(group_id=1, group_name="Trip", owes=Decimal("30.00"), owed=Decimal("60.00"), currency="INR"),
        GroupSummary(group_id=2, group_name="Flat", owes=Decimal("12.50"), owed=Decimal("0"), currency="USD"),
    ]
    summary = rollup_summary(1, groups, "INR")

    assert summary.total_owed == Decimal("60.00")
    assert summary.total_owes == Decimal("42.50")
    assert summary.net_balance == Decimal("17.50")
    assert [g.group_id for g in summary.by_group] == [1, 2]
    assert summary.by_group[1].net == Decimal("-12.50")


def test_rollup_without_groups_is_zero():
    summary = rollup_summary(1, [], "INR")

    assert (summary.total_owed, summary.total_owes, summary.net_balance) == (0, 0, 0)
    assert summary.by_group == []
