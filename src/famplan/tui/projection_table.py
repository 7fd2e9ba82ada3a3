import gettext
from collections.abc import Sequence

from rich.text import Text
from textual.widgets import DataTable

from famplan.budget import BudgetMonth, HouseholdSpec
from famplan.tui.interface import FamPlanAppInterface

_ = gettext.gettext

COLUMNS = [
    _("Month"),
    _("Income"),
    _("Obligatory"),
    _("Planned"),
    _("Goals"),
    _("Total"),
    _("Balance"),
]


def projection_rows(
    projection: Sequence[BudgetMonth], spec: HouseholdSpec, current_index: int
) -> list[tuple[Text, ...]]:
    """One row of formatted cells per projected month."""
    rows = []
    for month in projection:
        name_style = "bold" if month.month_index == current_index else ""
        balance_style = "red" if month.is_deficit else "green"
        amounts = [
            month.total_income,
            month.regular_expenses,
            month.planned_expenses,
            month.savings_goals,
            month.total_expenses,
        ]
        rows.append(
            (
                Text(month.month_name, style=name_style),
                *(
                    Text(spec.format_currency(a), justify="right")
                    for a in amounts
                ),
                Text(
                    spec.format_currency(month.balance),
                    style=balance_style,
                    justify="right",
                ),
            )
        )
    return rows


class ProjectionTable(DataTable):
    app: FamPlanAppInterface

    def on_mount(self):
        self.cursor_type = "row"
        self.zebra_stripes = True
        self.add_columns(*COLUMNS)
        self.watch(self.app, "projection", self.app_watch_projection)

    def app_watch_projection(self, new: list[BudgetMonth] | None):
        self.clear()
        if new is None:
            return
        current_index = self.app.today.month - 1
        for row in projection_rows(new, self.app.spec, current_index):
            self.add_row(*row)
        self.move_cursor(row=current_index)
