from __future__ import annotations

import datetime
from collections.abc import Iterable, Sequence
from decimal import Decimal

from attrs import define

from famplan.budget.model import Expense, FamilyMember, SavingsGoal
from famplan.budget.recurrence import planned_expenses, regular_expenses
from famplan.budget.savings import savings_contribution
from famplan.budget.spec import ENGLISH_MONTHS, MonthTable

ZERO = Decimal("0")


def is_earning(
    member: FamilyMember, month_index: int, months: MonthTable = ENGLISH_MONTHS
) -> bool:
    if member.start_month is None:
        return True
    return months.index(member.start_month) <= month_index


def monthly_income(
    members: Iterable[FamilyMember],
    month_index: int,
    months: MonthTable = ENGLISH_MONTHS,
) -> Decimal:
    """Combined income of every member who has started earning by the given month."""
    return sum(
        (m.monthly_income for m in members if is_earning(m, month_index, months)),
        ZERO,
    )


@define(frozen=True)
class BudgetMonth:
    """The projected totals for one month of the year.

    Income and the savings contribution are usually positive, as are all expense
    figures. Balance is what is left over, and is negative in a deficit month.

    Governed by the equation balance = income - (regular + planned + savings)
    """

    month_name: str
    month_index: int
    total_income: Decimal
    regular_expenses: Decimal
    planned_expenses: Decimal
    savings_goals: Decimal

    @property
    def total_expenses(self) -> Decimal:
        return self.regular_expenses + self.planned_expenses + self.savings_goals

    @property
    def balance(self) -> Decimal:
        return self.total_income - self.total_expenses

    @property
    def is_deficit(self) -> bool:
        return self.balance < ZERO


def project_yearly_budget(
    members: Iterable[FamilyMember],
    expenses: Iterable[Expense],
    goals: Iterable[SavingsGoal],
    today: datetime.date,
    months: MonthTable = ENGLISH_MONTHS,
) -> list[BudgetMonth]:
    """Project income, expenses and balance for each month of the year.

    The savings goal contribution is worked out once, as of `today`, and applied
    to every month, even for goals that will be reached part way through the year.
    """
    members = list(members)
    expenses = list(expenses)

    regular = regular_expenses(expenses)
    savings = savings_contribution(goals, today)

    return [
        BudgetMonth(
            month_name=name,
            month_index=index,
            total_income=monthly_income(members, index, months),
            regular_expenses=regular,
            planned_expenses=planned_expenses(expenses, index, months),
            savings_goals=savings,
        )
        for index, name in enumerate(months)
    ]


def deficit_months(projection: Sequence[BudgetMonth]) -> list[BudgetMonth]:
    return [month for month in projection if month.is_deficit]
