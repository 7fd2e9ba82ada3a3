from __future__ import annotations

import datetime
import enum
from decimal import Decimal

from attrs import define, field

MemberId = str
ExpenseId = str
GoalId = str


def to_decimal(value) -> Decimal:
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


def to_optional_decimal(value) -> Decimal | None:
    if value is None:
        return None
    return to_decimal(value)


class RecurrenceType(str, enum.Enum):
    """How often an expense recurs."""

    DAILY = "daily"
    WEEKLY = "weekly"
    MONTHLY = "monthly"
    QUARTERLY = "quarterly"
    YEARLY = "yearly"
    CUSTOM = "custom"

    @property
    def is_regular(self) -> bool:
        """Regular expenses form a flat monthly baseline."""
        return self in (
            RecurrenceType.DAILY,
            RecurrenceType.WEEKLY,
            RecurrenceType.MONTHLY,
        )

    @property
    def is_planned(self) -> bool:
        return not self.is_regular


class ExpenseCategory(str, enum.Enum):
    FOOD = "Еда"
    AUTO = "Авто"
    UTILITIES = "Коммунальные"
    ENTERTAINMENT = "Развлечения"
    GIFTS = "Подарки"
    OTHER = "Прочее"


@define(frozen=True)
class FamilyMember:
    """A household member contributing a fixed monthly income.

    Members without a start month earn from January onwards.
    """

    id: MemberId
    name: str
    monthly_income: Decimal = field(converter=to_decimal)
    start_month: str | None = None


@define(frozen=True)
class Expense:
    """A recurring household expense.

    The meaning of `amount` depends on `type`: a per-day figure for daily
    expenses, per-week for weekly, and the full payment for everything else.
    `day_of_week` is descriptive only.
    """

    id: ExpenseId
    title: str
    amount: Decimal = field(converter=to_decimal)
    category: ExpenseCategory = field(converter=ExpenseCategory)
    type: RecurrenceType = field(converter=RecurrenceType)
    start_month: str
    due_month: str | None = None
    custom_period_months: int | None = None
    day_of_week: str | None = None


@define(frozen=True)
class SavingsGoal:
    """Something the household is saving towards.

    An explicit `monthly_saving` overrides any figure derived from the target
    amount and date.
    """

    id: GoalId
    title: str
    target_amount: Decimal | None = field(default=None, converter=to_optional_decimal)
    monthly_saving: Decimal | None = field(default=None, converter=to_optional_decimal)
    target_date: datetime.date | None = None
    current_amount: Decimal = field(default=Decimal("0"), converter=to_decimal)


@define(frozen=True)
class HouseholdSnapshot:
    """A consistent view of all household records at one point in time."""

    members: tuple[FamilyMember, ...] = field(default=(), converter=tuple)
    expenses: tuple[Expense, ...] = field(default=(), converter=tuple)
    goals: tuple[SavingsGoal, ...] = field(default=(), converter=tuple)
