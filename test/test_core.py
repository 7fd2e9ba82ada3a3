import datetime
from decimal import Decimal

import pytest

from famplan.budget.core import (
    BudgetMonth,
    deficit_months,
    monthly_income,
    project_yearly_budget,
)
from famplan.budget.model import FamilyMember, SavingsGoal
from famplan.budget.spec import MonthTable

ZERO = Decimal("0")


def member(income, start_month=None, id=None):
    return FamilyMember(
        id=id or f"member-{income}",
        name="Member",
        monthly_income=income,
        start_month=start_month,
    )


class TestMonthlyIncome:
    def test_no_members(self):
        assert monthly_income([], 5) == ZERO

    def test_members_without_start_always_earn(self):
        members = [member(80000), member(50000)]
        assert all(monthly_income(members, m) == Decimal("130000") for m in range(12))

    def test_start_month_is_inclusive(self):
        members = [member(80000), member(50000, start_month="March")]
        assert monthly_income(members, 1) == Decimal("80000")
        assert monthly_income(members, 2) == Decimal("130000")
        assert monthly_income(members, 11) == Decimal("130000")

    def test_more_members_never_earn_less(self):
        members = []
        previous = ZERO
        for income, start in [(100, None), (200, "June"), (0, "May"), (50, None)]:
            members.append(member(income, start, id=f"m{len(members)}"))
            total = monthly_income(members, 7)
            assert total >= previous
            previous = total


class TestBudgetMonth:
    def test_balance_identity(self):
        month = BudgetMonth(
            "January",
            0,
            total_income=Decimal("1000"),
            regular_expenses=Decimal("300.5"),
            planned_expenses=Decimal("200"),
            savings_goals=Decimal("100.25"),
        )
        assert month.total_expenses == Decimal("600.75")
        assert month.balance == Decimal("399.25")
        assert not month.is_deficit


class TestProjectYearlyBudget:
    def test_simple_household(self, make_expense, today):
        members = [member(80000)]
        expenses = [make_expense("monthly", 20000)]
        projection = project_yearly_budget(members, expenses, [], today)

        assert len(projection) == 12
        for month in projection:
            assert month.total_income == Decimal("80000")
            assert month.regular_expenses == Decimal("20000")
            assert month.planned_expenses == ZERO
            assert month.savings_goals == ZERO
            assert month.total_expenses == Decimal("20000")
            assert month.balance == Decimal("60000")

    def test_months_in_order(self, today):
        projection = project_yearly_budget([], [], [], today)
        assert [m.month_index for m in projection] == list(range(12))
        assert projection[0].month_name == "January"
        assert projection[11].month_name == "December"

    def test_localised_month_names(self, today):
        months = MonthTable.for_locale("ru_RU")
        projection = project_yearly_budget([], [], [], today, months)
        assert projection[0].month_name == "Январь"

    def test_savings_applied_to_every_month(self, today):
        goals = [SavingsGoal(id="g", title="Holiday", monthly_saving=5000)]
        projection = project_yearly_budget([], [], goals, today)
        assert all(m.savings_goals == Decimal("5000") for m in projection)

    def test_balance_identity_every_month(self, make_expense, today):
        members = [member(1000), member(500, start_month="April")]
        expenses = [
            make_expense("daily", "3.5"),
            make_expense("weekly", 40),
            make_expense("quarterly", 300, start_month="February"),
            make_expense("yearly", 1200, due_month="June"),
            make_expense("custom", 700, custom_period_months=2, due_month="May"),
        ]
        goals = [
            SavingsGoal(
                id="g",
                title="Car",
                target_amount=10000,
                target_date=datetime.date(2027, 10, 1),
            )
        ]
        for month in project_yearly_budget(members, expenses, goals, today):
            assert month.balance == month.total_income - (
                month.regular_expenses + month.planned_expenses + month.savings_goals
            )

    def test_repeatable(self, make_expense, today):
        members = [member(1000)]
        expenses = [make_expense("quarterly", 300)]
        first = project_yearly_budget(members, expenses, [], today)
        second = project_yearly_budget(members, expenses, [], today)
        assert first == second

    def test_accepts_generators(self, make_expense, today):
        projection = project_yearly_budget(
            (m for m in [member(100)]),
            (e for e in [make_expense("quarterly", 30)]),
            (g for g in []),
            today,
        )
        assert projection[3].planned_expenses == Decimal("30")
        assert projection[11].total_income == Decimal("100")


@pytest.mark.spec_file("household.yml")
@pytest.mark.store_file("household.json")
class TestSampleHousehold:
    @pytest.fixture
    def projection(self, spec, snapshot, today):
        return project_yearly_budget(
            snapshot.members, snapshot.expenses, snapshot.goals, today, spec.months
        )

    def test_income(self, projection):
        assert projection[0].total_income == Decimal("80000")
        assert projection[1].total_income == Decimal("80000")
        assert projection[2].total_income == Decimal("130000")

    def test_regular_baseline(self, projection):
        # 20000 + 200 * 30.44 + 2000 * 4.33
        assert all(m.regular_expenses == Decimal("34748") for m in projection)

    def test_planned(self, projection):
        planned = [m.planned_expenses for m in projection]
        assert planned == [
            ZERO,
            Decimal("9000"),
            ZERO,
            ZERO,
            Decimal("33000"),
            ZERO,
            Decimal("15000"),
            Decimal("9000"),
            ZERO,
            ZERO,
            Decimal("9000"),
            ZERO,
        ]

    def test_savings(self, projection):
        assert all(m.savings_goals == Decimal("15000") for m in projection)

    def test_balances(self, projection):
        assert projection[0].balance == Decimal("30252")
        assert projection[4].balance == Decimal("47252")

    def test_no_deficit(self, projection):
        assert deficit_months(projection) == []


def test_deficit_months(make_expense, today):
    expenses = [make_expense("yearly", 5000, due_month="March")]
    projection = project_yearly_budget([member(1000)], expenses, [], today)
    assert [m.month_name for m in deficit_months(projection)] == ["March"]
