"""Decides which expenses fall due in a given month, and for how much.

This is the "actual cash outflow" view of expenses: periodic expenses are booked
in full in the months they are paid. Spreading them over the months before they
fall due is the job of `famplan.budget.savings`.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from decimal import Decimal

from attrs import define, field

from famplan.budget.model import Expense, RecurrenceType
from famplan.budget.spec import ENGLISH_MONTHS, MonthTable

logger = logging.getLogger(__name__)

ZERO = Decimal("0")

# average calendar days and weeks per month
DAYS_PER_MONTH = Decimal("30.44")
WEEKS_PER_MONTH = Decimal("4.33")


def monthly_equivalent(expense: Expense) -> Decimal:
    """The amount a regular expense costs over an average month."""
    if expense.type is RecurrenceType.DAILY:
        return expense.amount * DAYS_PER_MONTH
    elif expense.type is RecurrenceType.WEEKLY:
        return expense.amount * WEEKS_PER_MONTH
    return expense.amount


def is_due(expense: Expense, month_index: int, months: MonthTable = ENGLISH_MONTHS):
    start = months.index(expense.start_month)
    if month_index < start:
        return False
    since_start = month_index - start

    if expense.type.is_regular:
        return True
    elif expense.type is RecurrenceType.QUARTERLY:
        return since_start % 3 == 0
    elif expense.type is RecurrenceType.YEARLY:
        if expense.due_month is None:
            logger.debug("Yearly expense %s has no due month, skipping", expense.id)
            return False
        return month_index == months.index(expense.due_month)
    elif expense.type is RecurrenceType.CUSTOM:
        period = expense.custom_period_months
        if not period or period < 0 or expense.due_month is None:
            logger.debug("Custom expense %s is missing its period", expense.id)
            return False
        return since_start % period == 0 and month_index == months.index(
            expense.due_month
        )
    raise ValueError(f"Unknown recurrence type {expense.type}")


def expense_contribution(
    expense: Expense, month_index: int, months: MonthTable = ENGLISH_MONTHS
) -> Decimal:
    """How much the expense adds to the given month (0 = first month of the year).

    Malformed recurrence settings contribute nothing rather than raising, so one
    bad record can't break a whole projection.
    """
    if not is_due(expense, month_index, months):
        return ZERO
    if expense.type.is_regular:
        return monthly_equivalent(expense)
    return expense.amount


def regular_expenses(expenses: Iterable[Expense]) -> Decimal:
    """The flat monthly baseline of daily, weekly and monthly expenses.

    This is the same for every month of the projection; start months only
    affect the per-month breakdown.
    """
    return sum(
        (monthly_equivalent(e) for e in expenses if e.type.is_regular),
        ZERO,
    )


def planned_expenses(
    expenses: Iterable[Expense],
    month_index: int,
    months: MonthTable = ENGLISH_MONTHS,
) -> Decimal:
    """Quarterly, yearly and custom expenses paid in the given month."""
    return sum(
        (
            expense_contribution(e, month_index, months)
            for e in expenses
            if e.type.is_planned
        ),
        ZERO,
    )


@define(frozen=True)
class MonthExpenses:
    """The itemised expenses paid in a single month."""

    month_name: str
    month_index: int
    items: list[tuple[Expense, Decimal]] = field(factory=list)

    @property
    def total(self) -> Decimal:
        return sum((amount for _, amount in self.items), ZERO)


def monthly_breakdown(
    expenses: Iterable[Expense],
    month_index: int,
    months: MonthTable = ENGLISH_MONTHS,
) -> list[tuple[Expense, Decimal]]:
    return [
        (expense, expense_contribution(expense, month_index, months))
        for expense in expenses
        if is_due(expense, month_index, months)
    ]


def yearly_calendar(
    expenses: Iterable[Expense], months: MonthTable = ENGLISH_MONTHS
) -> list[MonthExpenses]:
    expenses = list(expenses)
    return [
        MonthExpenses(name, i, monthly_breakdown(expenses, i, months))
        for i, name in enumerate(months)
    ]
