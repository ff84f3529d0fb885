"""Japanese national holidays for a single year.

The computation runs in four steps: every rule of the base schedule is
resolved to a date, the published equinox days are merged in, substitute
holidays (振替休日) are inserted for holidays falling on a Sunday, and the
result is ordered by date.
"""

from __future__ import annotations

import calendar
import logging
from dataclasses import dataclass
from datetime import date, timedelta
from operator import attrgetter
from typing import Iterable, Mapping, Sequence

from shukujitsu.core.errors import DataError, ResolutionError
from shukujitsu.services.rules import (
    EquinoxRecord,
    HolidayRule,
    Weekday,
    load_equinox_index,
    load_schedule,
)

logger = logging.getLogger(__name__)

# Range covered by the published equinox predictions.
EQUINOX_FIRST_YEAR = 2020
EQUINOX_LAST_YEAR = 2050

VERNAL_EQUINOX_DAY = "春分の日"
AUTUMNAL_EQUINOX_DAY = "秋分の日"
SUBSTITUTE_HOLIDAY = "振替休日({name})"


@dataclass(frozen=True)
class Holiday:
    """A holiday observed on a concrete date."""

    name: str
    date: date
    is_substitute: bool = False


def resolve_relative_date(year: int, month: int, weekday: int, occurrence: int) -> date:
    """Return the ``occurrence``-th ``weekday`` of ``month`` in ``year`` (1-indexed)."""

    try:
        days_in_month = calendar.monthrange(year, month)[1]
        matches = [
            day
            for day in (date(year, month, number) for number in range(1, days_in_month + 1))
            if day.weekday() == weekday
        ]
    except ValueError as exc:
        raise ResolutionError(f"cannot enumerate {year}-{month:02d}") from exc

    if not 1 <= occurrence <= len(matches):
        raise ResolutionError(
            f"{year}-{month:02d} has {len(matches)} {Weekday(weekday).name.title()}s, "
            f"occurrence {occurrence} requested"
        )
    return matches[occurrence - 1]


def _resolve_rule(rule: HolidayRule, year: int) -> date:
    if rule.relative:
        condition = rule.condition
        return resolve_relative_date(year, condition.month, condition.weekday, condition.occurrence)
    try:
        return rule.fixed_date.on(year)
    except ValueError as exc:
        raise ResolutionError(f"{rule.name}: {rule.fixed_date} does not exist in {year}") from exc


def equinox_holidays(year: int, equinox_table: Mapping[int, EquinoxRecord]) -> list[Holiday]:
    """Vernal and autumnal equinox days, or nothing outside the published range."""

    if not EQUINOX_FIRST_YEAR <= year <= EQUINOX_LAST_YEAR:
        return []
    record = equinox_table.get(year)
    if record is None:
        raise DataError(f"equinox table has no entry for {year}")
    return [
        Holiday(VERNAL_EQUINOX_DAY, record.spring_date.on(year)),
        Holiday(AUTUMNAL_EQUINOX_DAY, record.autumn_date.on(year)),
    ]


def build_schedule(
    year: int,
    rules: Sequence[HolidayRule] | None = None,
    equinox_table: Mapping[int, EquinoxRecord] | None = None,
) -> list[Holiday]:
    """Expand every rule for ``year``. The result is in rule order, not date order."""

    if rules is None:
        rules = load_schedule()
    if equinox_table is None:
        equinox_table = load_equinox_index()

    holidays = [Holiday(rule.name, _resolve_rule(rule, year)) for rule in rules]
    holidays.extend(equinox_holidays(year, equinox_table))
    return holidays


def adjust_substitutes(holidays: list[Holiday]) -> None:
    """Append a substitute holiday for every Sunday holiday, in place.

    ``holidays`` must already be ordered by date. A Sunday holiday starts a
    block of holidays on consecutive days; the substitute goes to the first
    free day after the block and is named after the block's last holiday.
    Appended substitutes are not scanned themselves.
    """

    occupied = {item.date for item in holidays}
    base_count = len(holidays)
    index = 0
    while index < base_count:
        if holidays[index].date.weekday() == Weekday.SUNDAY:
            while (
                index + 1 < base_count
                and holidays[index + 1].date == holidays[index].date + timedelta(days=1)
            ):
                index += 1
            last = holidays[index]

            substitute_date = last.date + timedelta(days=1)
            while substitute_date in occupied:
                substitute_date += timedelta(days=1)

            substitute = Holiday(
                SUBSTITUTE_HOLIDAY.format(name=last.name), substitute_date, is_substitute=True
            )
            holidays.append(substitute)
            occupied.add(substitute_date)
            logger.debug("Substitute holiday %s on %s", substitute.name, substitute_date)
        index += 1


def finalize(holidays: Iterable[Holiday]) -> list[Holiday]:
    """Order holidays by date; entries sharing a date keep their insertion order."""

    return sorted(holidays, key=attrgetter("date"))


def holiday(
    year: int,
    *,
    rules: Sequence[HolidayRule] | None = None,
    equinox_table: Mapping[int, EquinoxRecord] | None = None,
) -> list[Holiday]:
    """Return the national holidays of ``year`` ordered by date.

    Raises ``DataError`` when the bundled tables are unusable and
    ``ResolutionError`` when a rule has no date in ``year``.
    """

    holidays = finalize(build_schedule(year, rules, equinox_table))
    adjust_substitutes(holidays)
    holidays = finalize(holidays)
    logger.debug("Computed %d holidays for %d", len(holidays), year)
    return holidays
