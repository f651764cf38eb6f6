"""Tests for configuration loading, validation and defaults."""

import logging

import pytest
import yaml

from config_loader import TZFormatter, get_sample_config, load_config


def _write(tmp_path, data):
    path = tmp_path / "config.yaml"
    path.write_text(yaml.safe_dump(data))
    return str(path)


def test_defaults_applied(tmp_path):
    config = load_config(_write(tmp_path, {"huebridge": {"bridges": [["https://bridge", "key"]]}}))

    assert config["huebridge"]["timeout"] == 10
    assert config["huebridge"]["room_assignments"] == []
    assert config["huebridge"]["debug"] is False
    assert config["polling"]["interval_seconds"] == 60
    assert config["api"] == {"enabled": True, "host": "0.0.0.0", "port": 8000}
    assert config["logging"]["timezone"] == "UTC"


def test_explicit_values_kept(tmp_path):
    config = load_config(_write(tmp_path, {
        "huebridge": {
            "bridges": [["https://bridge", "key"]],
            "timeout": 3,
            "room_assignments": [["Flur", "Motion sensor"]],
            "debug": True,
        },
        "polling": {"interval_seconds": 15},
    }))

    assert config["huebridge"]["timeout"] == 3
    assert config["huebridge"]["room_assignments"] == [["Flur", "Motion sensor"]]
    assert config["polling"]["interval_seconds"] == 15


def test_bridge_shape_not_checked_at_load(tmp_path):
    # Empty lists and malformed entries fail at poll time instead
    config = load_config(_write(tmp_path, {"huebridge": {"bridges": [["only-url"]]}}))
    assert config["huebridge"]["bridges"] == [["only-url"]]

    config = load_config(_write(tmp_path, {"huebridge": {}}))
    assert config["huebridge"]["bridges"] == []


def test_empty_sections_get_defaults(tmp_path):
    path = tmp_path / "config.yaml"
    path.write_text(
        "huebridge:\n"
        "  bridges: [[\"https://bridge\", \"key\"]]\n"
        "polling:\n"
        "api:\n"
        "logging:\n"
    )

    config = load_config(str(path))

    assert config["polling"]["interval_seconds"] == 60
    assert config["api"] == {"enabled": True, "host": "0.0.0.0", "port": 8000}
    assert config["logging"]["level"] == "INFO"


def test_empty_huebridge_section_has_no_bridges(tmp_path):
    path = tmp_path / "config.yaml"
    path.write_text("huebridge:\n")

    config = load_config(str(path))

    assert config["huebridge"]["bridges"] == []


@pytest.mark.parametrize("section", ["huebridge", "polling", "api", "logging"])
def test_non_mapping_section_rejected(tmp_path, section):
    data = {"huebridge": {}, section: 5}
    with pytest.raises(ValueError, match=section):
        load_config(_write(tmp_path, data))


def test_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_config(str(tmp_path / "missing.yaml"))


@pytest.mark.parametrize("data", [
    {},
    {"polling": {"interval_seconds": 10}},
    {"huebridge": {"bridges": "https://bridge"}},
    {"huebridge": {"timeout": 0}},
    {"huebridge": {"timeout": "10"}},
    {"huebridge": {"room_assignments": ["Flur"]}},
    {"huebridge": {"room_assignments": [["Flur", 1]]}},
    {"huebridge": {}, "polling": {"interval_seconds": -1}},
])
def test_invalid_config_rejected(tmp_path, data):
    with pytest.raises(ValueError):
        load_config(_write(tmp_path, data))


def test_sample_config_is_loadable(tmp_path):
    config = load_config(_write(tmp_path, get_sample_config()))
    assert len(config["huebridge"]["bridges"]) == 1


def test_tz_formatter():
    formatter = TZFormatter("%(asctime)s %(message)s", "Europe/Berlin")
    record = logging.LogRecord("test", logging.INFO, __file__, 1, "hello", None, None)
    record.created = 1704164645.0   # 2024-01-02 03:04:05 UTC
    assert formatter.format(record) == "2024-01-02 04:04:05 CET hello"
