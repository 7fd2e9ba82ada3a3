from decimal import Decimal

import pytest

from famplan.budget.core import project_yearly_budget
from famplan.budget.model import FamilyMember
from famplan.tui.projection_table import COLUMNS, projection_rows


@pytest.mark.spec_file("household-en.yml")
class TestProjectionRows:
    @pytest.fixture
    def projection(self, make_expense, today):
        members = [FamilyMember("m1", "Anna", Decimal("1000"))]
        expenses = [
            make_expense("monthly", 400),
            make_expense("yearly", 900, due_month="March"),
        ]
        return project_yearly_budget(members, expenses, [], today)

    def test_one_row_per_month(self, spec, projection):
        rows = projection_rows(projection, spec, current_index=9)
        assert len(rows) == 12
        assert all(len(row) == len(COLUMNS) for row in rows)
        assert [row[0].plain for row in rows][:2] == ["January", "February"]

    def test_formats_amounts(self, spec, projection):
        january = projection_rows(projection, spec, current_index=0)[0]
        assert [cell.plain for cell in january[1:]] == [
            "$1,000.00",
            "$400.00",
            "$0.00",
            "$0.00",
            "$400.00",
            "$600.00",
        ]

    def test_highlights_deficit_and_current_month(self, spec, projection):
        rows = projection_rows(projection, spec, current_index=9)
        assert rows[2][-1].plain == "-$300.00"
        assert rows[2][-1].style == "red"
        assert rows[0][-1].style == "green"
        assert rows[9][0].style == "bold"
        assert rows[8][0].style == ""
