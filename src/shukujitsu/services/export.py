"""Text renderings of a holiday list (JSON, YAML, CSV)."""

from __future__ import annotations

import csv
import io
import json
import logging
from enum import Enum
from typing import Any, Iterable

import yaml

from shukujitsu.core.errors import HolidayError
from shukujitsu.services.holidays import Holiday, holiday

logger = logging.getLogger(__name__)

CSV_HEADER = ("name", "date", "substitute")


class OutputFormat(str, Enum):
    JSON = "json"
    CSV = "csv"
    YAML = "yaml"

    @classmethod
    def parse(cls, value: str | None) -> OutputFormat:
        """Map a selector string to a format; anything unrecognised means JSON."""
        try:
            return cls((value or "").strip().lower())
        except ValueError:
            return cls.JSON

    @property
    def media_type(self) -> str:
        return _MEDIA_TYPES[self]


_MEDIA_TYPES = {
    OutputFormat.JSON: "application/json",
    OutputFormat.CSV: "text/csv",
    OutputFormat.YAML: "application/yaml",
}


def _records(holidays: Iterable[Holiday]) -> list[dict[str, Any]]:
    return [
        {"name": item.name, "date": item.date, "substitute": item.is_substitute}
        for item in holidays
    ]


def to_json(holidays: Iterable[Holiday]) -> str:
    payload = [
        {**record, "date": record["date"].isoformat()} for record in _records(holidays)
    ]
    return json.dumps(payload, indent=2, ensure_ascii=False)


def to_yaml(holidays: Iterable[Holiday]) -> str:
    return yaml.safe_dump(
        _records(holidays),
        allow_unicode=True,
        sort_keys=False,
        default_flow_style=False,
        indent=2,
    )


def to_csv(holidays: Iterable[Holiday]) -> str:
    buffer = io.StringIO()
    writer = csv.writer(buffer, lineterminator="\n")
    writer.writerow(CSV_HEADER)
    for item in holidays:
        writer.writerow([item.name, item.date.isoformat(), str(item.is_substitute).lower()])
    return buffer.getvalue()


_RENDERERS = {
    OutputFormat.JSON: to_json,
    OutputFormat.CSV: to_csv,
    OutputFormat.YAML: to_yaml,
}


def render(holidays: Iterable[Holiday], output_format: OutputFormat) -> str:
    return _RENDERERS[output_format](holidays)


def render_holidays(year: int, output_format: str | OutputFormat = OutputFormat.JSON) -> str | None:
    """Compute and render ``year``; failures are logged and reported as ``None``."""

    if not isinstance(output_format, OutputFormat):
        output_format = OutputFormat.parse(output_format)
    try:
        return render(holiday(year), output_format)
    except HolidayError:
        logger.exception("Holiday computation failed for %s", year)
        return None
