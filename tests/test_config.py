import pytest

from flowlog_tagger.core.config import Settings, load_settings
from flowlog_tagger.exceptions import ConfigurationError


def test_defaults():
    settings = Settings()
    assert settings.default_output_path == "output.txt"
    assert settings.skip_malformed is False
    assert settings.sort_report is False
    assert settings.lookup_row_limit == 10_000


def test_environment_overrides(monkeypatch):
    monkeypatch.setenv("FLOWLOG_TAGGER_SORT_REPORT", "true")
    monkeypatch.setenv("FLOWLOG_TAGGER_LOG_LEVEL", "debug")
    settings = load_settings()
    assert settings.sort_report is True
    assert settings.log_level == "DEBUG"


def test_yaml_file_and_overrides(write_file):
    path = write_file(
        "settings.yaml", "skip_malformed: true\ndefault_output_path: report.txt\n"
    )
    settings = load_settings(path, sort_report=True, skip_malformed=None)
    assert settings.skip_malformed is True
    assert settings.sort_report is True
    assert settings.default_output_path == "report.txt"


def test_json_file(write_file):
    path = write_file("settings.json", '{"lookup_row_limit": 50}')
    assert load_settings(path).lookup_row_limit == 50


def test_empty_yaml_file(write_file):
    path = write_file("settings.yml", "")
    assert load_settings(path).default_output_path == "output.txt"


@pytest.mark.parametrize(
    "name, text",
    [
        ("settings.toml", "x = 1"),
        ("settings.yaml", "- just\n- a list\n"),
        ("settings.yaml", "log_level: LOUD\n"),
        ("settings.json", "{broken"),
    ],
)
def test_bad_config_files(write_file, name, text):
    path = write_file(name, text)
    with pytest.raises(ConfigurationError):
        load_settings(path)


def test_missing_config_file(tmp_path):
    with pytest.raises(ConfigurationError):
        load_settings(tmp_path / "missing.yaml")
