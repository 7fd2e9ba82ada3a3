from .budget import Budget
from .core import BudgetMonth, project_yearly_budget
from .model import Expense, ExpenseCategory, FamilyMember, RecurrenceType, SavingsGoal
from .spec import HouseholdSpec, Month, MonthTable

__all__ = [
    "Budget",
    "BudgetMonth",
    "Expense",
    "ExpenseCategory",
    "FamilyMember",
    "HouseholdSpec",
    "Month",
    "MonthTable",
    "RecurrenceType",
    "SavingsGoal",
    "project_yearly_budget",
]
