import argparse
import datetime
import gettext
import logging
from pathlib import Path

from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.logging import TextualHandler
from textual.reactive import reactive
from textual.widgets import Footer, Header, Static

from famplan.budget import Budget, BudgetMonth, HouseholdSpec
from famplan.tui.projection_table import ProjectionTable
from famplan.tui.top_bar import SummaryBar

_ = gettext.gettext


class FamPlanApp(App):
    TITLE = "FamPlan"
    CSS_PATH = "famplan.tcss"

    BINDINGS = [
        Binding("r", "reload", _("Reload"), tooltip=_("Reload household data.")),
        Binding("q", "quit", _("Quit"), tooltip=_("Quit the planner.")),
    ]

    budget: Budget
    spec: HouseholdSpec
    today: datetime.date

    projection: reactive[list[BudgetMonth] | None] = reactive(None)

    def __init__(self, budget: Budget, today: datetime.date | None = None):
        super().__init__()
        self.budget = budget
        self.spec = budget.spec
        self.today = today or datetime.date.today()
        self.sub_title = f"{self.spec.name} [{self.spec.currency}]"
        if self.spec.theme:
            self.theme = self.spec.theme

    def on_mount(self):
        self.projection = self.budget.projection(self.today)

    def action_reload(self):
        self.budget.reload()
        self.projection = self.budget.projection(self.today)
        # the new projection may compare equal to the old one
        self.mutate_reactive(FamPlanApp.projection)

    def compose(self) -> ComposeResult:
        yield Header()
        yield SummaryBar()
        yield Static(id="spacer")
        yield ProjectionTable()
        yield Footer()


def main(argv=None):
    parser = argparse.ArgumentParser(
        prog="famplan", description=_("Family budget planner.")
    )
    parser.add_argument("config_file", type=Path)
    parser.add_argument("-v", "--verbose", action="store_true")
    args = parser.parse_args(argv)
    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, handlers=[TextualHandler()])

    FamPlanApp(Budget.from_config(args.config_file)).run()


if __name__ == "__main__":
    main()
