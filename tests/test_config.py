"""Tests for the configuration registry and settings resolution."""

import pytest

from epost.config import (
    REGISTRY,
    ConfigType,
    load_settings,
    parse_value,
    resolve_entry,
    serialize_value,
)


def test_registry_keys_are_unique():
    keys = [e.key for e in REGISTRY]
    assert len(keys) == len(set(keys))


def test_resolve_entry():
    entry = resolve_entry("api.endpoint")
    assert entry is not None
    assert entry.type is ConfigType.STRING
    assert resolve_entry("nope") is None


def test_access_token_is_secret():
    assert resolve_entry("api.access_token").secret is True


@pytest.mark.parametrize(
    "key,raw,expected",
    [
        ("api.timeout", "12.5", 12.5),
        ("letter.test_environment", "yes", True),
        ("letter.test_environment", "off", False),
        ("api.endpoint", "https://x", "https://x"),
    ],
)
def test_parse_value(key, raw, expected):
    assert parse_value(resolve_entry(key), raw) == expected


def test_parse_invalid_float():
    with pytest.raises(ValueError):
        parse_value(resolve_entry("api.timeout"), "soon")


def test_serialize_bool():
    entry = resolve_entry("letter.test_environment")
    assert serialize_value(entry, True) == "true"
    assert serialize_value(entry, False) == "false"


def test_defaults():
    settings = load_settings(environ={})

    assert settings.endpoint == "https://api.epost.docuguide.com"
    assert settings.timeout == 30.0
    assert settings.access_token == ""
    assert settings.test_email == ""
    assert settings.test_environment is False
    assert set(settings.sources.values()) == {"default"}


def test_ini_file(tmp_path):
    ini = tmp_path / "epost.ini"
    ini.write_text(
        "[api]\n"
        "ENDPOINT = https://sandbox.example\n"
        "TIMEOUT = 5\n"
        "\n"
        "[letter]\n"
        "TEST_EMAIL = qa@example.com\n"
        "\n"
        "[unrelated]\n"
        "FOO = bar\n"
    )

    settings = load_settings(ini, environ={})

    assert settings.endpoint == "https://sandbox.example"
    assert settings.timeout == 5.0
    assert settings.test_email == "qa@example.com"
    assert settings.sources["api.endpoint"] == "ini"
    assert settings.sources["api.access_token"] == "default"


def test_environment_overrides_ini(tmp_path):
    ini = tmp_path / "epost.ini"
    ini.write_text("[api]\nENDPOINT = https://from-ini\n")

    settings = load_settings(ini, environ={"EPOST_ENDPOINT": "https://from-env"})

    assert settings.endpoint == "https://from-env"
    assert settings.sources["api.endpoint"] == "env"


def test_reads_process_environment(monkeypatch):
    monkeypatch.setenv("EPOST_ACCESS_TOKEN", "abc")
    assert load_settings().access_token == "abc"


def test_missing_ini_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_settings(tmp_path / "missing.ini", environ={})
