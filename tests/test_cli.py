import pytest

from shukujitsu import cli

from .factories import HOLIDAYS_2024


def test_cli_prints_csv(capsys) -> None:
    assert cli.main(["2024", "--format", "csv"]) == 0

    lines = capsys.readouterr().out.splitlines()
    assert lines[0] == "name,date,substitute"
    assert lines[1:] == [
        f"{name},{day.isoformat()},{str(flag).lower()}" for name, day, flag in HOLIDAYS_2024
    ]


def test_cli_defaults_to_json(capsys) -> None:
    assert cli.main(["2019"]) == 0

    output = capsys.readouterr().out
    assert output.startswith("[\n  {\n")
    assert "春分の日" not in output


def test_cli_reports_failure(monkeypatch, capsys) -> None:
    monkeypatch.setattr(cli, "render_holidays", lambda year, output_format: None)

    assert cli.main(["2024"]) == 1
    assert capsys.readouterr().out == ""


@pytest.mark.parametrize("year", ["abc", "0", "10000"])
def test_cli_rejects_invalid_year(year: str) -> None:
    with pytest.raises(SystemExit) as excinfo:
        cli.main([year])

    assert excinfo.value.code == 2
