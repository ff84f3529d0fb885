import logging

import pytest

from shukujitsu.core.errors import DataError
from shukujitsu.services import export
from shukujitsu.services.export import OutputFormat, render, render_holidays, to_csv, to_json, to_yaml

from .factories import HOLIDAYS_2024, build_holidays_2024

EXPECTED_JSON_HEAD = """[
  {
    "name": "元旦",
    "date": "2024-01-01",
    "substitute": false
  },
  {
    "name": "成人の日",
    "date": "2024-01-08",
    "substitute": false
  },
  {
    "name": "建国記念の日",
    "date": "2024-02-11",
    "substitute": false
  },
  {
    "name": "振替休日(建国記念の日)",
    "date": "2024-02-12",
    "substitute": true
  },
"""

EXPECTED_YAML_HEAD = """- name: 元旦
  date: 2024-01-01
  substitute: false
- name: 成人の日
  date: 2024-01-08
  substitute: false
- name: 建国記念の日
  date: 2024-02-11
  substitute: false
- name: 振替休日(建国記念の日)
  date: 2024-02-12
  substitute: true
"""


def _expected_csv() -> str:
    rows = [f"{name},{day.isoformat()},{str(flag).lower()}" for name, day, flag in HOLIDAYS_2024]
    return "name,date,substitute\n" + "".join(f"{row}\n" for row in rows)


def test_to_json() -> None:
    output = to_json(build_holidays_2024())

    assert output.startswith(EXPECTED_JSON_HEAD)
    assert output.endswith('    "name": "勤労感謝の日",\n    "date": "2024-11-23",\n    "substitute": false\n  }\n]')
    assert output.count('"name"') == 21


def test_to_yaml() -> None:
    output = to_yaml(build_holidays_2024())

    assert output.startswith(EXPECTED_YAML_HEAD)
    assert output.endswith("- name: 勤労感謝の日\n  date: 2024-11-23\n  substitute: false\n")
    assert output.count("- name: ") == 21


def test_to_csv() -> None:
    assert to_csv(build_holidays_2024()) == _expected_csv()


def test_empty_list_renders() -> None:
    assert to_json([]) == "[]"
    assert to_csv([]) == "name,date,substitute\n"


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        ("json", OutputFormat.JSON),
        ("csv", OutputFormat.CSV),
        ("yaml", OutputFormat.YAML),
        ("YAML", OutputFormat.YAML),
        (" csv ", OutputFormat.CSV),
        ("xml", OutputFormat.JSON),
        ("", OutputFormat.JSON),
        (None, OutputFormat.JSON),
    ],
)
def test_output_format_parse(value, expected: OutputFormat) -> None:
    assert OutputFormat.parse(value) is expected


def test_render_dispatches_on_format() -> None:
    holidays = build_holidays_2024()

    assert render(holidays, OutputFormat.CSV) == to_csv(holidays)
    assert render(holidays, OutputFormat.YAML) == to_yaml(holidays)
    assert render(holidays, OutputFormat.JSON) == to_json(holidays)


def test_render_holidays_2024() -> None:
    assert render_holidays(2024, "csv") == _expected_csv()
    assert render_holidays(2024, "yaml").startswith(EXPECTED_YAML_HEAD)
    assert render_holidays(2024, "toml") == render_holidays(2024)


def test_render_holidays_returns_none_on_failure(monkeypatch, caplog) -> None:
    def _broken(year: int):
        raise DataError("base.csv line 3: broken")

    monkeypatch.setattr(export, "holiday", _broken)

    with caplog.at_level(logging.ERROR, logger="shukujitsu.services.export"):
        assert render_holidays(2024, "json") is None

    assert "Holiday computation failed for 2024" in caplog.text
