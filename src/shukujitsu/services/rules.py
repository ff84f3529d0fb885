"""Domain representations for holiday rules and the loaders for the bundled tables."""

from __future__ import annotations

import csv
import logging
from datetime import date
from enum import IntEnum
from functools import lru_cache
from importlib import resources
from importlib.resources.abc import Traversable
from types import MappingProxyType
from typing import Any, Mapping, NamedTuple

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator, model_validator

from shukujitsu.core.errors import DataError

logger = logging.getLogger(__name__)

DATA_PACKAGE = "shukujitsu.services.data"
SCHEDULE_RESOURCE = "base.csv"
EQUINOX_RESOURCE = "equinox_base_dates.csv"

SCHEDULE_COLUMNS = ("name", "date", "is_relative", "condition")
EQUINOX_COLUMNS = ("year", "spring", "autumn")


class Month(IntEnum):
    JANUARY = 1
    FEBRUARY = 2
    MARCH = 3
    APRIL = 4
    MAY = 5
    JUNE = 6
    JULY = 7
    AUGUST = 8
    SEPTEMBER = 9
    OCTOBER = 10
    NOVEMBER = 11
    DECEMBER = 12

    @classmethod
    def parse(cls, value: str) -> Month:
        """Parse ``"September"``, ``"sep"``, ``" SEP "`` and so on."""
        try:
            return _MONTH_NAMES[value.strip().lower()]
        except KeyError:
            raise ValueError(f"unknown month name {value!r}") from None


class Weekday(IntEnum):
    """Weekday numbered like ``date.weekday()``."""

    MONDAY = 0
    TUESDAY = 1
    WEDNESDAY = 2
    THURSDAY = 3
    FRIDAY = 4
    SATURDAY = 5
    SUNDAY = 6

    @classmethod
    def parse(cls, value: str) -> Weekday:
        try:
            return _WEEKDAY_NAMES[value.strip().lower()]
        except KeyError:
            raise ValueError(f"unknown weekday name {value!r}") from None


def _name_table(members: Any) -> dict[str, Any]:
    table: dict[str, Any] = {}
    for member in members:
        full_name = member.name.lower()
        table[full_name] = member
        table[full_name[:3]] = member
    return table


_MONTH_NAMES: dict[str, Month] = _name_table(Month)
_WEEKDAY_NAMES: dict[str, Weekday] = _name_table(Weekday)


class MonthDay(NamedTuple):
    month: int
    day: int

    @classmethod
    def parse(cls, value: str) -> MonthDay:
        """Parse an ``MM-DD`` cell."""
        month_text, separator, day_text = value.strip().partition("-")
        if not separator:
            raise ValueError(f"expected MM-DD, got {value!r}")
        month, day = int(month_text), int(day_text)
        # Checked against a leap year; whether the day exists in a given year is decided on resolution.
        date(2000, month, day)
        return cls(month, day)

    def on(self, year: int) -> date:
        return date(year, self.month, self.day)

    def __str__(self) -> str:
        return f"{self.month:02d}-{self.day:02d}"


class RelativeCondition(BaseModel):
    """The ``occurrence``-th ``weekday`` of ``month``."""

    model_config = ConfigDict(frozen=True)

    month: Month
    weekday: Weekday
    occurrence: int = Field(gt=0)

    @classmethod
    def parse(cls, value: str) -> RelativeCondition:
        """Parse a ``Month:N:Weekday`` cell such as ``January:2:Monday``."""
        parts = value.split(":")
        if len(parts) != 3:
            raise ValueError(f"expected Month:N:Weekday, got {value!r}")
        month_text, occurrence_text, weekday_text = parts
        occurrence = int(occurrence_text.strip())
        if occurrence < 1:
            raise ValueError(f"occurrence must be positive, got {occurrence}")
        return cls(
            month=Month.parse(month_text),
            weekday=Weekday.parse(weekday_text),
            occurrence=occurrence,
        )


class HolidayRule(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str = Field(min_length=1)
    relative: bool
    fixed_date: MonthDay | None = None
    condition: RelativeCondition | None = None

    @field_validator("fixed_date", mode="before")
    @classmethod
    def parse_fixed_date(cls, value: Any) -> Any:
        if value == "":
            return None
        if isinstance(value, str):
            return MonthDay.parse(value)
        return value

    @field_validator("condition", mode="before")
    @classmethod
    def parse_condition(cls, value: Any) -> Any:
        if value == "":
            return None
        if isinstance(value, str):
            return RelativeCondition.parse(value)
        return value

    @model_validator(mode="after")
    def validate_resolution_mode(self) -> "HolidayRule":
        if self.relative:
            if self.condition is None or self.fixed_date is not None:
                raise ValueError("relative rule needs a condition and no fixed date")
        elif self.fixed_date is None or self.condition is not None:
            raise ValueError("fixed rule needs a date and no condition")
        return self


class EquinoxRecord(BaseModel):
    """Published vernal and autumnal equinox days for one year."""

    model_config = ConfigDict(frozen=True)

    year: int
    spring_date: MonthDay
    autumn_date: MonthDay

    @field_validator("spring_date", "autumn_date", mode="before")
    @classmethod
    def parse_month_day(cls, value: Any) -> Any:
        if isinstance(value, str):
            return MonthDay.parse(value)
        return value

    @model_validator(mode="after")
    def validate_months(self) -> "EquinoxRecord":
        if self.spring_date.month != Month.MARCH:
            raise ValueError("vernal equinox must fall in March")
        if self.autumn_date.month != Month.SEPTEMBER:
            raise ValueError("autumnal equinox must fall in September")
        return self


def _describe(exc: ValidationError) -> str:
    return "; ".join(
        f"{'.'.join(str(part) for part in error['loc']) or 'row'}: {error['msg']}"
        for error in exc.errors()
    )


def _read_rows(source: Traversable, columns: tuple[str, ...]) -> list[tuple[int, dict[str, str]]]:
    """Return ``(line number, row)`` pairs with every cell stripped."""
    try:
        with source.open("r", encoding="utf-8", newline="") as handle:
            reader = csv.DictReader(handle)
            missing = [column for column in columns if column not in (reader.fieldnames or ())]
            if missing:
                raise DataError(f"{source.name}: missing columns {', '.join(missing)}")
            return [
                (
                    reader.line_num,
                    {key: (value or "").strip() for key, value in row.items() if key is not None},
                )
                for row in reader
            ]
    except (OSError, UnicodeDecodeError, csv.Error) as exc:
        raise DataError(f"{source.name}: cannot read table") from exc


def read_schedule(source: Traversable) -> tuple[HolidayRule, ...]:
    """Parse a base schedule table; any malformed row aborts the whole load."""
    rules = []
    for line_no, row in _read_rows(source, SCHEDULE_COLUMNS):
        try:
            rule = HolidayRule.model_validate(
                {
                    "name": row["name"],
                    "relative": row["is_relative"],
                    "fixed_date": row["date"],
                    "condition": row["condition"],
                }
            )
        except ValidationError as exc:
            raise DataError(f"{source.name} line {line_no}: {_describe(exc)}") from exc
        rules.append(rule)
    logger.debug("Loaded %d holiday rules from %s", len(rules), source.name)
    return tuple(rules)


def read_equinox_table(source: Traversable) -> tuple[EquinoxRecord, ...]:
    records = []
    seen: set[int] = set()
    for line_no, row in _read_rows(source, EQUINOX_COLUMNS):
        try:
            record = EquinoxRecord.model_validate(
                {"year": row["year"], "spring_date": row["spring"], "autumn_date": row["autumn"]}
            )
        except ValidationError as exc:
            raise DataError(f"{source.name} line {line_no}: {_describe(exc)}") from exc
        if record.year in seen:
            raise DataError(f"{source.name} line {line_no}: duplicate year {record.year}")
        seen.add(record.year)
        records.append(record)
    logger.debug("Loaded %d equinox records from %s", len(records), source.name)
    return tuple(records)


def _bundled(resource: str) -> Traversable:
    return resources.files(DATA_PACKAGE).joinpath(resource)


@lru_cache(maxsize=1)
def load_schedule() -> tuple[HolidayRule, ...]:
    """Return the holiday rules bundled with the package."""

    return read_schedule(_bundled(SCHEDULE_RESOURCE))


@lru_cache(maxsize=1)
def load_equinox_table() -> tuple[EquinoxRecord, ...]:
    """Return the bundled equinox predictions (2020-2050)."""

    return read_equinox_table(_bundled(EQUINOX_RESOURCE))


def index_equinox_table(records: tuple[EquinoxRecord, ...]) -> Mapping[int, EquinoxRecord]:
    return MappingProxyType({record.year: record for record in records})


@lru_cache(maxsize=1)
def load_equinox_index() -> Mapping[int, EquinoxRecord]:
    return index_equinox_table(load_equinox_table())
