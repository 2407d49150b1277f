"""Configuration registry and type system.

Every configurable setting is declared here with its key, type, default,
description, and whether it contains a secret.  The registry is the single
source of truth for what settings exist.

Effective values are resolved from, lowest to highest precedence: the
registry default, an INI file, and ``EPOST_*`` environment variables.
"""

import configparser
import os
from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path

from epost.backends.http import DEFAULT_ENDPOINT


class ConfigType(Enum):
    STRING = "string"
    FLOAT = "float"
    BOOL = "bool"


@dataclass(frozen=True, slots=True)
class ConfigEntry:
    key: str
    type: ConfigType
    default: str | int | float | bool
    description: str
    secret: bool = False


# ---------------------------------------------------------------------------
# Registry -- every known setting
# ---------------------------------------------------------------------------

REGISTRY: list[ConfigEntry] = [
    # -- api --
    ConfigEntry("api.endpoint", ConfigType.STRING, DEFAULT_ENDPOINT, "E-POST API base URL"),
    ConfigEntry("api.timeout", ConfigType.FLOAT, 30.0, "HTTP timeout in seconds"),
    ConfigEntry(
        "api.access_token", ConfigType.STRING, "", "OAuth bearer token for the API", secret=True
    ),
    # -- letter --
    ConfigEntry(
        "letter.test_email", ConfigType.STRING, "", "Route letters to this address as test sends"
    ),
    ConfigEntry(
        "letter.test_environment", ConfigType.BOOL, False, "Mark letters as test environment"
    ),
]

# Fast lookup by key
_REGISTRY_MAP: dict[str, ConfigEntry] = {e.key: e for e in REGISTRY}


def resolve_entry(key: str) -> ConfigEntry | None:
    """Look up a registry entry by key."""
    return _REGISTRY_MAP.get(key)


# ---------------------------------------------------------------------------
# Value parsing / serialization
# ---------------------------------------------------------------------------


def parse_value(entry: ConfigEntry, raw: str) -> str | int | float | bool:
    """Parse a raw string value according to the entry's type."""
    match entry.type:
        case ConfigType.STRING:
            return raw
        case ConfigType.FLOAT:
            return float(raw)
        case ConfigType.BOOL:
            return raw.lower() in ("true", "1", "yes", "on")


def serialize_value(entry: ConfigEntry, value: str | int | float | bool) -> str:
    """Serialize a typed value to a string for display."""
    match entry.type:
        case ConfigType.BOOL:
            return "true" if value else "false"
        case _:
            return str(value)


# ---------------------------------------------------------------------------
# Environment variable / INI section mapping -> registry key
# ---------------------------------------------------------------------------

ENV_MAP: dict[str, str] = {
    "EPOST_ENDPOINT": "api.endpoint",
    "EPOST_TIMEOUT": "api.timeout",
    "EPOST_ACCESS_TOKEN": "api.access_token",
    "EPOST_TEST_EMAIL": "letter.test_email",
    "EPOST_TEST_ENVIRONMENT": "letter.test_environment",
}

INI_MAP: dict[tuple[str, str], str] = {
    ("api", "ENDPOINT"): "api.endpoint",
    ("api", "TIMEOUT"): "api.timeout",
    ("api", "ACCESS_TOKEN"): "api.access_token",
    ("letter", "TEST_EMAIL"): "letter.test_email",
    ("letter", "TEST_ENVIRONMENT"): "letter.test_environment",
}


# ---------------------------------------------------------------------------
# Effective settings
# ---------------------------------------------------------------------------


@dataclass
class Settings:
    values: dict[str, str | int | float | bool] = field(default_factory=dict)
    sources: dict[str, str] = field(default_factory=dict)

    def __getitem__(self, key: str) -> str | int | float | bool:
        return self.values[key]

    @property
    def endpoint(self) -> str:
        return str(self.values["api.endpoint"])

    @property
    def timeout(self) -> float:
        return float(self.values["api.timeout"])

    @property
    def access_token(self) -> str:
        return str(self.values["api.access_token"])

    @property
    def test_email(self) -> str:
        return str(self.values["letter.test_email"])

    @property
    def test_environment(self) -> bool:
        return bool(self.values["letter.test_environment"])


def load_settings(
    ini_file: str | Path | None = None,
    environ: Mapping[str, str] | None = None,
) -> Settings:
    """Resolve every registry entry to its effective value."""
    if environ is None:
        environ = os.environ

    settings = Settings()
    for entry in REGISTRY:
        settings.values[entry.key] = entry.default
        settings.sources[entry.key] = "default"

    if ini_file is not None:
        cfg = configparser.ConfigParser()
        if not cfg.read(ini_file):
            raise FileNotFoundError(f"Config file not found: {ini_file}")
        for section in cfg.sections():
            for ini_key, raw in cfg.items(section):
                registry_key = INI_MAP.get((section, ini_key.upper()))
                if registry_key is None:
                    continue
                entry = _REGISTRY_MAP[registry_key]
                settings.values[registry_key] = parse_value(entry, raw)
                settings.sources[registry_key] = "ini"

    for env_key, registry_key in ENV_MAP.items():
        raw = environ.get(env_key)
        if raw is None:
            continue
        entry = _REGISTRY_MAP[registry_key]
        settings.values[registry_key] = parse_value(entry, raw)
        settings.sources[registry_key] = "env"

    return settings
