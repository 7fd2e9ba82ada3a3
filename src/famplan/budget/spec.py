from __future__ import annotations

import datetime
import logging
import typing
from decimal import Decimal
from pathlib import Path

import babel
import babel.numbers
import yaml
from attrs import define, field
from cattrs import Converter

logger = logging.getLogger(__name__)

spec_converter = Converter()


@define(frozen=True)
class Month:
    """Represents a month of a given year."""

    month: int = field()
    year: int = field()

    @month.validator  # type: ignore
    def check_month(self, attribute, month: int):
        if not 1 <= month <= 12:
            raise ValueError("Month must be between 1 and 12")

    @classmethod
    def from_datetime(cls, in_datetime: datetime.datetime | datetime.date):
        return Month(in_datetime.month, in_datetime.year)

    @property
    def index(self) -> int:
        """Zero-based position within the year, as used by the projection."""
        return self.month - 1

    def __sub__(self, other: Month) -> int:
        """Number of whole calendar months from other to self."""
        return 12 * (self.year - other.year) + self.month - other.month


@define(frozen=True)
class MonthTable:
    """The 12 canonical month names, in calendar order.

    Records refer to months by name, so every lookup from a record goes through
    a table. Unknown names resolve to January rather than raising; callers that
    need strict checking use `is_known` first.
    """

    names: tuple[str, ...] = field(converter=tuple)

    @names.validator  # type: ignore
    def check_names(self, attribute, names: tuple[str, ...]):
        if len(names) != 12:
            raise ValueError(f"Expected 12 month names, got {len(names)}")
        if len(set(names)) != 12:
            raise ValueError("Month names must be unique")

    @classmethod
    def for_locale(cls, locale: babel.Locale | str) -> MonthTable:
        if isinstance(locale, str):
            locale = babel.Locale.parse(locale)
        wide = locale.months["stand-alone"]["wide"]
        return cls(wide[i][:1].upper() + wide[i][1:] for i in range(1, 13))

    def index(self, name: str | None) -> int:
        try:
            return self.names.index(name)  # type: ignore
        except ValueError:
            logger.debug("Unknown month name %r, using %s", name, self.names[0])
            return 0

    def name(self, index: int) -> str:
        return self.names[index]

    def is_known(self, name: str | None) -> bool:
        return name in self.names

    def __iter__(self) -> typing.Iterator[str]:
        return iter(self.names)

    def __len__(self) -> int:
        return len(self.names)


ENGLISH_MONTHS = MonthTable(
    [
        "January",
        "February",
        "March",
        "April",
        "May",
        "June",
        "July",
        "August",
        "September",
        "October",
        "November",
        "December",
    ]
)


@spec_converter.register_structure_hook
def parse_path(val: str, _) -> Path:
    return Path(val)


@define(frozen=True)
class HouseholdSpec:
    """Defines the name, storage location and locale settings of a household budget.

    Does not contain any members, expenses or goals itself, just the settings used
    to load, project and display them.

    This is loaded from a config file, and is immutable while the program is running.
    """

    name: str
    storage: Path
    currency: str = field(default="RUB")
    locale: str = field(default="ru_RU")
    theme: str | None = None

    @classmethod
    def load(cls, fp: typing.IO) -> HouseholdSpec:
        data = yaml.safe_load(fp)
        return spec_converter.structure(data, cls)

    @currency.validator  # type: ignore
    def check_currency(self, _, currency: str):
        if not babel.numbers.is_currency(currency):
            raise ValueError(f"Unknown currency {currency}")

    @locale.validator  # type: ignore
    def check_locale(self, _, locale: str):
        try:
            babel.Locale.parse(locale)
        except (ValueError, babel.UnknownLocaleError) as e:
            raise ValueError(f"Unknown locale {locale}") from e

    @property
    def text_locale(self) -> babel.Locale:
        return babel.Locale.parse(self.locale)

    @property
    def months(self) -> MonthTable:
        return MonthTable.for_locale(self.text_locale)

    def resolve_storage(self, base: Path) -> Path:
        if self.storage.is_absolute():
            return self.storage
        return base / self.storage

    def format_currency(self, amount: Decimal, symbol_override=True) -> str:
        if symbol_override:
            return babel.numbers.format_currency(
                amount, self.currency, locale=self.text_locale
            )
        return babel.numbers.format_decimal(
            amount, format="#,##0.00", locale=self.text_locale
        )
