import pytest
from pydantic import ValidationError
from rich.console import Console

from sharedcell import config
from sharedcell.reporter import print_summary
from sharedcell.scenarios.abstract import ScenarioResult


def test_get_settings_defaults():
    settings = config.get_settings()
    assert settings.log_level == "INFO"
    assert settings.log_json is False
    assert settings.record_id == "ConfigItem"
    assert settings.record_initial_value == 10
    assert settings.record_updated_value == 25
    assert settings.scenario_owners == 2


def test_get_settings_is_cached():
    assert config.get_settings() is config.get_settings()


def test_settings_read_environment(monkeypatch: pytest.MonkeyPatch):
    monkeypatch.setenv("LOG_LEVEL", "DEBUG")
    monkeypatch.setenv("LOG_JSON", "true")
    monkeypatch.setenv("SCENARIO_OWNERS", "4")
    settings = config.Settings()
    assert settings.log_level == "DEBUG"
    assert settings.log_json is True
    assert settings.scenario_owners == 4


def test_settings_accept_field_names():
    settings = config.Settings(record_id="Direct", scenario_owners=1)
    assert settings.record_id == "Direct"
    assert settings.scenario_owners == 1


def test_settings_reject_zero_owners(monkeypatch: pytest.MonkeyPatch):
    monkeypatch.setenv("SCENARIO_OWNERS", "0")
    with pytest.raises(ValidationError):
        config.Settings()


def test_print_summary_renders_rows():
    console = Console(record=True, width=200)
    result = ScenarioResult(
        scenario="nominal",
        record_id="ConfigItem",
        owners=3,
        owner_counts=[1, 2, 3],
        initial_value=10,
        final_value=26,
        observed_values={"B": 26, "A": 26, "original": 26},
        destroyed=True,
    )

    print_summary([result], console=console)

    text = console.export_text()
    assert "Shared Ownership Summary" in text
    assert "nominal" in text
    assert "1 → 2 → 3" in text
    assert "10 → 26" in text
    assert "B=26, A=26, original=26" in text


def test_print_summary_handles_empty_results():
    console = Console(record=True, width=80)
    print_summary([], console=console)
    assert "No results to display." in console.export_text()
