from __future__ import annotations

import datetime
import json
import uuid
from decimal import Decimal
from pathlib import Path

from attrs import evolve

from famplan.budget.core import BudgetMonth, deficit_months, project_yearly_budget
from famplan.budget.model import (
    Expense,
    FamilyMember,
    HouseholdSnapshot,
    RecurrenceType,
    SavingsGoal,
)
from famplan.budget.recurrence import MonthExpenses, yearly_calendar
from famplan.budget.savings import ReserveItem, recommended_reserve, reserve_plan
from famplan.budget.spec import HouseholdSpec
from famplan.budget.store import (
    HouseholdRepository,
    JsonHouseholdStore,
    backup_filename,
    export_snapshot,
)

ZERO = Decimal("0")


class Budget:
    """Combines the household settings, stored records and projection engine.

    All edits go through here: records are checked before they are stored, every
    change is saved straight away, and projections are recalculated on demand.
    """

    def __init__(self, spec: HouseholdSpec, repository: HouseholdRepository):
        self.spec = spec
        self.months = spec.months
        self._repository = repository
        self._snapshot = repository.load()
        # only the most recent projection is kept
        self._projection: tuple[datetime.date, list[BudgetMonth]] | None = None

    @classmethod
    def from_config(cls, spec_path: Path | str) -> Budget:
        spec_path = Path(spec_path)
        with spec_path.open("r", encoding="utf-8") as spec_f:
            spec = HouseholdSpec.load(spec_f)
        store = JsonHouseholdStore(spec.resolve_storage(spec_path.parent))
        return cls(spec, store)

    @property
    def snapshot(self) -> HouseholdSnapshot:
        return self._snapshot

    @property
    def members(self) -> tuple[FamilyMember, ...]:
        return self._snapshot.members

    @property
    def expenses(self) -> tuple[Expense, ...]:
        return self._snapshot.expenses

    @property
    def goals(self) -> tuple[SavingsGoal, ...]:
        return self._snapshot.goals

    def reload(self):
        self._snapshot = self._repository.load()
        self._projection = None

    def _commit(self, **collections):
        self._snapshot = evolve(self._snapshot, **collections)
        self._projection = None
        self._repository.save(self._snapshot)

    # validation

    def _check_month(self, name: str | None, what: str, required=False):
        if name is None:
            if required:
                raise ValueError(f"{what} is required")
            return
        if not self.months.is_known(name):
            raise ValueError(f"Unknown month '{name}' for {what}")

    @staticmethod
    def _check_amount(amount: Decimal | None, what: str):
        if amount is not None and amount < ZERO:
            raise ValueError(f"{what} can't be negative")

    def check_member(self, member: FamilyMember):
        self._check_amount(member.monthly_income, "Monthly income")
        self._check_month(member.start_month, "start month")

    def check_expense(self, expense: Expense):
        self._check_amount(expense.amount, "Expense amount")
        self._check_month(expense.start_month, "start month", required=True)
        needs_due = expense.type in (RecurrenceType.YEARLY, RecurrenceType.CUSTOM)
        self._check_month(expense.due_month, "due month", required=needs_due)
        if expense.type is RecurrenceType.CUSTOM:
            period = expense.custom_period_months
            if period is None or period < 1:
                raise ValueError("Custom expenses need a period of at least 1 month")

    def check_goal(self, goal: SavingsGoal):
        self._check_amount(goal.target_amount, "Target amount")
        self._check_amount(goal.monthly_saving, "Monthly saving")
        self._check_amount(goal.current_amount, "Current amount")

    # family members

    def add_member(self, **values) -> FamilyMember:
        member = FamilyMember(id=str(uuid.uuid4()), **values)
        self.check_member(member)
        self._commit(members=self.members + (member,))
        return member

    def update_member(self, member_id: str, **updates) -> FamilyMember:
        member = evolve(self._find(self.members, member_id, "family member"), **updates)
        self.check_member(member)
        self._commit(members=self._replaced(self.members, member))
        return member

    def delete_member(self, member_id: str):
        self._find(self.members, member_id, "family member")
        self._commit(members=[m for m in self.members if m.id != member_id])

    # expenses

    def add_expense(self, **values) -> Expense:
        expense = Expense(id=str(uuid.uuid4()), **values)
        self.check_expense(expense)
        self._commit(expenses=self.expenses + (expense,))
        return expense

    def update_expense(self, expense_id: str, **updates) -> Expense:
        expense = evolve(self._find(self.expenses, expense_id, "expense"), **updates)
        self.check_expense(expense)
        self._commit(expenses=self._replaced(self.expenses, expense))
        return expense

    def delete_expense(self, expense_id: str):
        self._find(self.expenses, expense_id, "expense")
        self._commit(expenses=[e for e in self.expenses if e.id != expense_id])

    # savings goals

    def add_goal(self, **values) -> SavingsGoal:
        goal = SavingsGoal(id=str(uuid.uuid4()), **values)
        self.check_goal(goal)
        self._commit(goals=self.goals + (goal,))
        return goal

    def update_goal(self, goal_id: str, **updates) -> SavingsGoal:
        goal = evolve(self._find(self.goals, goal_id, "savings goal"), **updates)
        self.check_goal(goal)
        self._commit(goals=self._replaced(self.goals, goal))
        return goal

    def delete_goal(self, goal_id: str):
        self._find(self.goals, goal_id, "savings goal")
        self._commit(goals=[g for g in self.goals if g.id != goal_id])

    @staticmethod
    def _find(records, record_id: str, kind: str):
        for record in records:
            if record.id == record_id:
                return record
        raise KeyError(f"No {kind} with id {record_id}")

    @staticmethod
    def _replaced(records, new):
        return [new if r.id == new.id else r for r in records]

    # derived views

    def projection(self, today: datetime.date) -> list[BudgetMonth]:
        if self._projection is None or self._projection[0] != today:
            self._projection = (
                today,
                project_yearly_budget(
                    self.members, self.expenses, self.goals, today, self.months
                ),
            )
        return self._projection[1]

    def deficit_months(self, today: datetime.date) -> list[BudgetMonth]:
        return deficit_months(self.projection(today))

    def calendar(self) -> list[MonthExpenses]:
        return yearly_calendar(self.expenses, self.months)

    def reserve_plan(self, today: datetime.date) -> list[ReserveItem]:
        return reserve_plan(self.expenses, today, self.months)

    @property
    def recommended_reserve(self) -> Decimal:
        return recommended_reserve(self.expenses)

    def export(self, now: datetime.datetime) -> dict:
        return export_snapshot(self._snapshot, now)

    def write_backup(self, directory: Path, now: datetime.datetime) -> Path:
        path = directory / backup_filename(self.spec.name, now.date())
        with path.open("w", encoding="utf-8") as backup_f:
            json.dump(self.export(now), backup_f, indent=2, ensure_ascii=False)
        return path
