from __future__ import annotations

import datetime
import json
import logging
import typing
from decimal import Decimal
from pathlib import Path

from attrs import define, fields
from cattrs.gen import make_dict_structure_fn, make_dict_unstructure_fn, override
from slugify import slugify

from famplan.budget.model import (
    Expense,
    FamilyMember,
    HouseholdSnapshot,
    SavingsGoal,
)
from famplan.budget.spec import spec_converter

logger = logging.getLogger(__name__)

# names of the three collections in stored and exported documents
COLLECTION_NAMES = {
    "members": "familyMembers",
    "expenses": "expenses",
    "goals": "savingsGoals",
}


class HouseholdRepository(typing.Protocol):
    """Somewhere household records are kept between runs."""

    def load(self) -> HouseholdSnapshot: ...

    def save(self, snapshot: HouseholdSnapshot) -> None: ...


def camel_case(name: str) -> str:
    first, *rest = name.split("_")
    return first + "".join(part.title() for part in rest)


def _register_record(
    converter, cls, renames: dict[str, str] | None = None, omit_defaults=True
):
    renames = renames or {a.name: camel_case(a.name) for a in fields(cls)}
    overrides = {name: override(rename=rename) for name, rename in renames.items()}
    converter.register_structure_hook(
        cls, make_dict_structure_fn(cls, converter, **overrides)
    )
    converter.register_unstructure_hook(
        cls,
        make_dict_unstructure_fn(
            cls, converter, _cattrs_omit_if_default=omit_defaults, **overrides
        ),
    )


def make_store_converter():
    # build on spec_converter for built-in month etc conversion
    store_converter = spec_converter.copy()

    # amounts are written as strings to keep every digit, but older files and
    # hand-written ones may hold plain JSON numbers
    store_converter.register_structure_hook(Decimal, lambda v, _: Decimal(str(v)))
    store_converter.register_unstructure_hook(Decimal, str)
    store_converter.register_structure_hook(
        datetime.date, lambda v, _: datetime.date.fromisoformat(v[:10])
    )
    store_converter.register_unstructure_hook(datetime.date, lambda d: d.isoformat())

    for cls in (FamilyMember, Expense, SavingsGoal):
        _register_record(store_converter, cls)
    # always write all three collections, even when empty
    _register_record(
        store_converter, HouseholdSnapshot, COLLECTION_NAMES, omit_defaults=False
    )

    return store_converter


store_converter = make_store_converter()


@define
class JsonHouseholdStore:
    """Keeps the household in a single JSON file.

    A missing file is treated as an empty household, and is created on first save.
    """

    path: Path

    def load(self) -> HouseholdSnapshot:
        if not self.path.exists():
            logger.info("No household data at %s, starting empty", self.path)
            return HouseholdSnapshot()
        with self.path.open("r", encoding="utf-8") as store_f:
            data = json.load(store_f)
        snapshot = store_converter.structure(data, HouseholdSnapshot)
        logger.info(
            "Loaded %d members, %d expenses and %d goals from %s",
            len(snapshot.members),
            len(snapshot.expenses),
            len(snapshot.goals),
            self.path,
        )
        return snapshot

    def save(self, snapshot: HouseholdSnapshot) -> None:
        data = store_converter.unstructure(snapshot)
        tempfile = self.path.parent / f"{self.path.name}.write"
        with tempfile.open("w", encoding="utf-8") as write_f:
            json.dump(data, write_f, indent=2, ensure_ascii=False)
        tempfile.replace(self.path)
        logger.info("Saved household data to %s", self.path)


def export_snapshot(snapshot: HouseholdSnapshot, exported_at: datetime.datetime):
    """A full backup document: all three collections plus when it was taken."""
    data = store_converter.unstructure(snapshot)
    data["exportDate"] = exported_at.isoformat()
    return data


def import_snapshot(data: dict) -> HouseholdSnapshot:
    """Read a backup document made by `export_snapshot`.

    Backups from the browser version of the planner hold each collection as an
    embedded JSON string (or null when it was never saved), so those are decoded
    first.
    """
    collections = {}
    for key in COLLECTION_NAMES.values():
        value = data.get(key)
        if value is None:
            value = []
        elif isinstance(value, str):
            value = json.loads(value) or []
        collections[key] = value
    return store_converter.structure(collections, HouseholdSnapshot)


def backup_filename(name: str, day: datetime.date) -> str:
    return f"{slugify(name)}-backup-{day.isoformat()}.json"
