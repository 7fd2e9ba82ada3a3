import datetime
import shutil
from decimal import Decimal
from pathlib import Path

import pytest

from famplan.budget.budget import Budget
from famplan.budget.model import Expense, ExpenseCategory, RecurrenceType
from famplan.budget.spec import HouseholdSpec
from famplan.budget.store import JsonHouseholdStore


@pytest.fixture
def data_dir():
    path = Path(__file__).parent / "data"
    return path.resolve()


@pytest.fixture
def today():
    return datetime.date(2026, 10, 19)


@pytest.fixture
def spec(request, data_dir):
    filename = request.node.get_closest_marker("spec_file").args[0]
    with (data_dir / filename).open("r", encoding="utf-8") as spec_f:
        return HouseholdSpec.load(spec_f)


@pytest.fixture
def snapshot(request, data_dir):
    filename = request.node.get_closest_marker("store_file").args[0]
    return JsonHouseholdStore(data_dir / filename).load()


@pytest.fixture
def budget(data_dir, tmp_path):
    # work on copies so edits don't touch the checked-in data
    shutil.copy(data_dir / "household.yml", tmp_path)
    shutil.copy(data_dir / "household.json", tmp_path)
    return Budget.from_config(tmp_path / "household.yml")


@pytest.fixture
def make_expense():
    def make(type, amount, start_month="January", **kwargs):
        kwargs.setdefault("category", ExpenseCategory.OTHER)
        return Expense(
            id=kwargs.pop("id", f"{type}-{amount}"),
            title=kwargs.pop("title", str(type)),
            amount=Decimal(str(amount)),
            type=RecurrenceType(type),
            start_month=start_month,
            **kwargs,
        )

    return make
