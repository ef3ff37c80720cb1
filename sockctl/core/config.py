"""Configuration loading and validation for the YAML settings file."""

from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass, field
from importlib import resources
from pathlib import Path
from typing import Any

import yaml
from jsonschema import ValidationError, validators

from sockctl.core.errors import ConfigError
from sockctl.core.transmitter import DEFAULT_REPEAT_TRANSMIT

LOGGER = logging.getLogger(__name__)

CONFIG_ENV_VAR = "SOCKCTL_CONFIG"
DEFAULT_BACKEND = "rpi"
# BCM 17 is wiringPi pin 0 / header pin 11
DEFAULT_PIN = 17
DEFAULT_PROTOCOL = "1"
DEFAULT_ENCODING = "A"


class UniqueKeyLoader(yaml.SafeLoader):
    """YAML loader that rejects duplicate mapping keys and keeps on/off as strings."""


UniqueKeyLoader.yaml_implicit_resolvers = {
    key: list(value) for key, value in yaml.SafeLoader.yaml_implicit_resolvers.items()
}

for first_char, mappings in list(UniqueKeyLoader.yaml_implicit_resolvers.items()):
    UniqueKeyLoader.yaml_implicit_resolvers[first_char] = [
        (tag, regexp)
        for tag, regexp in mappings
        if tag != "tag:yaml.org,2002:bool"
    ]


def _construct_mapping(loader: UniqueKeyLoader, node: yaml.Node, deep: bool = False) -> dict[str, Any]:
    mapping: dict[str, Any] = {}
    for key_node, value_node in node.value:
        key = loader.construct_object(key_node, deep=deep)
        if key in mapping:
            raise ConfigError(f"Duplicate key '{key}' in YAML document")
        mapping[key] = loader.construct_object(value_node, deep=deep)
    return mapping


UniqueKeyLoader.add_constructor(
    yaml.resolver.BaseResolver.DEFAULT_MAPPING_TAG,
    _construct_mapping,
)


@dataclass(frozen=True)
class Settings:
    backend: str = DEFAULT_BACKEND
    pin: int = DEFAULT_PIN
    protocol: str = DEFAULT_PROTOCOL
    encoding: str = DEFAULT_ENCODING
    repeat_transmit: int = DEFAULT_REPEAT_TRANSMIT
    protocols: dict[str, dict[str, Any]] = field(default_factory=dict)
    source: Path | None = None


def default_config_path() -> Path:
    override = os.environ.get(CONFIG_ENV_VAR)
    if override:
        return Path(override)
    xdg_config = Path(os.environ.get("XDG_CONFIG_HOME", Path.home() / ".config"))
    return xdg_config / "sockctl/config.yaml"


def _load_schema_validator() -> Any:
    schema_text = resources.files("sockctl.schemas").joinpath("config.schema.json").read_text(
        encoding="utf-8"
    )
    schema = json.loads(schema_text)
    validator_cls = validators.validator_for(schema)
    validator_cls.check_schema(schema)
    return validator_cls(schema)


def _read_yaml(path: Path) -> dict[str, Any]:
    try:
        content = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise ConfigError(f"Could not read config file {path}: {exc}") from exc

    try:
        loaded = yaml.load(content, Loader=UniqueKeyLoader)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Invalid YAML in {path}: {exc}") from exc

    if loaded is None:
        return {}
    if not isinstance(loaded, dict):
        raise ConfigError(f"Config file {path} must contain a mapping at root")
    return loaded


def _normalize_bool(value: Any, *, context: str) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in ("true", "yes", "on"):
            return True
        if lowered in ("false", "no", "off"):
            return False
    raise ConfigError(f"{context} must be boolean true/false")


def _build_settings(doc: dict[str, Any], source: Path) -> Settings:
    # Protocol names such as `6:` come back from YAML as integers.
    if isinstance(doc.get("protocols"), dict):
        doc = {**doc, "protocols": {str(k): v for k, v in doc["protocols"].items()}}

    validator = _load_schema_validator()
    try:
        validator.validate(doc)
    except ValidationError as exc:
        path = ".".join(str(p) for p in exc.path)
        where = f" ({path})" if path else ""
        raise ConfigError(f"Schema validation failed for {source}{where}: {exc.message}") from exc

    protocols: dict[str, dict[str, Any]] = {}
    for name, spec in doc.get("protocols", {}).items():
        protocols[name] = {
            **spec,
            "inverted": _normalize_bool(
                spec.get("inverted", False),
                context=f"protocols.{name}.inverted",
            ),
        }

    return Settings(
        backend=doc.get("backend", DEFAULT_BACKEND),
        pin=int(doc.get("pin", DEFAULT_PIN)),
        protocol=str(doc.get("protocol", DEFAULT_PROTOCOL)),
        encoding=str(doc.get("encoding", DEFAULT_ENCODING)).upper(),
        repeat_transmit=int(doc.get("repeat_transmit", DEFAULT_REPEAT_TRANSMIT)),
        protocols=protocols,
        source=source,
    )


def load_settings(path: Path | None = None) -> Settings:
    """Load settings from `path`, or from the default location if it exists.

    An explicitly given path must exist; the default one is optional.
    """
    explicit = path is not None or bool(os.environ.get(CONFIG_ENV_VAR))
    config_path = path or default_config_path()
    if not config_path.exists():
        if explicit:
            raise ConfigError(f"Config file {config_path} does not exist")
        LOGGER.debug("No config file at %s, using defaults", config_path)
        return Settings()

    LOGGER.debug("Loading config from %s", config_path)
    return _build_settings(_read_yaml(config_path), config_path)
