"""How much to set aside each month, for savings goals and for upcoming bills.

Everything here depends on the current date, which is always passed in by the
caller.
"""

from __future__ import annotations

import datetime
from collections.abc import Iterable
from decimal import Decimal

from attrs import define

from famplan.budget.model import Expense, RecurrenceType, SavingsGoal
from famplan.budget.spec import ENGLISH_MONTHS, Month, MonthTable

ZERO = Decimal("0")


def months_remaining(target: datetime.date, today: datetime.date) -> int:
    """Whole calendar months from today until the target, never less than 1."""
    return max(1, Month.from_datetime(target) - Month.from_datetime(today))


def goal_contribution(goal: SavingsGoal, today: datetime.date) -> Decimal:
    if goal.monthly_saving is not None:
        return goal.monthly_saving
    if goal.target_amount is not None and goal.target_date is not None:
        remaining = max(ZERO, goal.target_amount - goal.current_amount)
        return remaining / months_remaining(goal.target_date, today)
    return ZERO


def savings_contribution(goals: Iterable[SavingsGoal], today: datetime.date) -> Decimal:
    """Total monthly amount to put towards all savings goals."""
    return sum((goal_contribution(goal, today) for goal in goals), ZERO)


@define(frozen=True)
class ReserveItem:
    """An upcoming periodic bill and what to put aside for it each month."""

    expense: Expense
    months_until_due: int
    monthly_saving: Decimal


def reserve_item(
    expense: Expense, today: datetime.date, months: MonthTable = ENGLISH_MONTHS
) -> ReserveItem | None:
    current = Month.from_datetime(today).index

    if expense.type is RecurrenceType.YEARLY:
        if expense.due_month is None:
            return None
        due = months.index(expense.due_month)
        until_due = (due - current) % 12
        saving = expense.amount / until_due if until_due else expense.amount
        return ReserveItem(expense, until_due, saving)
    elif expense.type is RecurrenceType.QUARTERLY:
        since_start = current - months.index(expense.start_month)
        return ReserveItem(expense, 3 - since_start % 3, expense.amount / 3)

    return None


def reserve_plan(
    expenses: Iterable[Expense],
    today: datetime.date,
    months: MonthTable = ENGLISH_MONTHS,
) -> list[ReserveItem]:
    """Quarterly and yearly bills, soonest first, with a monthly amount to reserve.

    Unlike the projection, which books each bill in the month it is paid, this
    spreads each bill over the months leading up to it.
    """
    items = [reserve_item(e, today, months) for e in expenses]
    return sorted(
        (i for i in items if i is not None), key=lambda i: i.months_until_due
    )


def recommended_reserve(expenses: Iterable[Expense]) -> Decimal:
    """A flat monthly amount that covers a year of quarterly and yearly bills."""
    periodic = (
        e.amount
        for e in expenses
        if e.type in (RecurrenceType.QUARTERLY, RecurrenceType.YEARLY)
    )
    return sum(periodic, ZERO) / 12
