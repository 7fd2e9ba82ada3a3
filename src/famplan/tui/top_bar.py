import gettext

from textual.app import ComposeResult
from textual.widget import Widget
from textual.widgets import Digits, Static

from famplan.budget import BudgetMonth
from famplan.tui.interface import FamPlanAppInterface

_ = gettext.gettext


def current_month(app: FamPlanAppInterface) -> BudgetMonth | None:
    if app.projection is None:
        return None
    return app.projection[app.today.month - 1]


class MonthSummary(Widget):
    app: FamPlanAppInterface

    def on_mount(self):
        self.watch(self.app, "projection", self.app_watch_projection)

    def app_watch_projection(self, new):
        month = current_month(self.app)
        if month is None:
            return
        fmt = self.app.spec.format_currency
        self.query_one("#income", Static).update(fmt(month.total_income))
        self.query_one("#regular", Static).update(fmt(month.regular_expenses))
        self.query_one("#planned", Static).update(fmt(month.planned_expenses))
        self.query_one("#goals", Static).update(fmt(month.savings_goals))

    def compose(self) -> ComposeResult:
        yield Static(_("Income"), classes="key")
        yield Static("...", classes="value", id="income")
        yield Static(_("Obligatory"), classes="key")
        yield Static("...", classes="value", id="regular")
        yield Static(_("Planned"), classes="key")
        yield Static("...", classes="value", id="planned")
        yield Static(_("Goals"), classes="key")
        yield Static("...", classes="value", id="goals")


class Balance(Widget):
    app: FamPlanAppInterface

    def on_mount(self):
        self.watch(self.app, "projection", self.app_watch_projection)

    def app_watch_projection(self, new):
        month = current_month(self.app)
        if month is None:
            return
        if month.is_deficit:
            self.add_class("negative")
        else:
            self.remove_class("negative")
        self.query_one("#balance-digits", Digits).update(
            self.app.spec.format_currency(month.balance, symbol_override=False)
        )

    def compose(self) -> ComposeResult:
        yield Static(_("Left over"), id="balance-label")
        yield Digits("...", id="balance-digits")


class SummaryBar(Widget):
    def compose(self) -> ComposeResult:
        yield MonthSummary()
        yield Balance()
