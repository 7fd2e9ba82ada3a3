import datetime

from textual.app import App

from famplan.budget import Budget, BudgetMonth, HouseholdSpec


# for better type hinting of self.app without circular imports
class FamPlanAppInterface(App):
    budget: Budget
    spec: HouseholdSpec
    today: datetime.date
    projection: list[BudgetMonth] | None
