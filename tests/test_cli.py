import json

import pytest

from wage_engine.cli import EXIT_SETTINGS_UNAVAILABLE, main
from wage_engine.rules import RATES_VERSION

PERIOD = ["--start", "2024-05-01", "--end", "2024-05-31"]


def test_calculate_prints_result(fixture_path, capsys):
    code = main(["calculate", "--data", str(fixture_path), "--staff", "drv-001", *PERIOD])
    assert code == 0
    result = json.loads(capsys.readouterr().out)
    assert result["gross_pay"] == 2625.0
    assert result["net_pay"] == 2272.65


def test_calculate_missing_settings_exits_2(fixture_path, capsys):
    code = main(
        ["calculate", "--data", str(fixture_path), "--staff", "drv-002", "--frequency", "weekly", *PERIOD]
    )
    assert code == EXIT_SETTINGS_UNAVAILABLE
    assert json.loads(capsys.readouterr().out)["missing"] == ["tax_settings"]


def test_run_prints_summary(fixture_path, capsys):
    assert main(["run", "--data", str(fixture_path), *PERIOD]) == 0
    summary = json.loads(capsys.readouterr().out)
    assert len(summary["calculated"]) == 1
    assert summary["skipped"] == {"drv-002": "missing tax_settings"}


def test_rules_command(capsys):
    assert main(["rules"]) == 0
    assert json.loads(capsys.readouterr().out)["rates_version"] == RATES_VERSION


@pytest.mark.parametrize(
    "argv",
    [
        ["calculate", "--data", "x.json", "--staff", "s", "--start", "2024-13-01", "--end", "2024-05-31"],
        ["run", "--data", "x.json", "--start", "2024-05-31", "--end", "2024-05-01"],
        ["run", "--data", "does-not-exist.json", "--start", "2024-05-01", "--end", "2024-05-31"],
    ],
)
def test_bad_arguments_exit_with_usage_error(argv):
    with pytest.raises(SystemExit) as excinfo:
        main(argv)
    assert excinfo.value.code == 2
