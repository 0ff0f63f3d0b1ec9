import logging
from pathlib import Path

from wage_engine import config


def test_defaults(monkeypatch):
    for name in ("HGV_WAGES_DATA", "HGV_WAGES_PAY_FREQUENCY", "HGV_WAGES_ROUNDING", "SERVICE_ENV", "ENVIRONMENT"):
        monkeypatch.delenv(name, raising=False)
    assert config.data_path() is None
    assert config.default_pay_frequency() == "monthly"
    assert config.rounding_policy_path().name == "rounding.yaml"
    assert config.service_env() == "local"


def test_overrides(monkeypatch, tmp_path):
    monkeypatch.setenv("HGV_WAGES_DATA", str(tmp_path / "payroll.json"))
    monkeypatch.setenv("HGV_WAGES_PAY_FREQUENCY", " Weekly ")
    monkeypatch.setenv("SERVICE_ENV", "staging")
    assert config.data_path() == Path(tmp_path / "payroll.json").resolve()
    assert config.default_pay_frequency() == "weekly"
    assert config.service_env() == "staging"


def test_invalid_frequency_falls_back_to_monthly(monkeypatch, caplog):
    monkeypatch.setenv("HGV_WAGES_PAY_FREQUENCY", "fortnightly")
    with caplog.at_level(logging.WARNING, logger="wage_engine.config"):
        assert config.default_pay_frequency() == "monthly"
    assert "fortnightly" in caplog.text
