from __future__ import annotations

from pathlib import Path

import pytest

from sockctl.core.config import CONFIG_ENV_VAR, Settings, load_settings
from sockctl.core.errors import ConfigError


@pytest.fixture(autouse=True)
def isolated_config(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> Path:
    monkeypatch.delenv(CONFIG_ENV_VAR, raising=False)
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "cfg"))
    return tmp_path / "cfg" / "sockctl" / "config.yaml"


def _write_config(path: Path, content: str) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")


def test_missing_default_config_gives_defaults() -> None:
    settings = load_settings()
    assert settings == Settings()
    assert settings.backend == "rpi"
    assert settings.pin == 17
    assert settings.protocol == "1"
    assert settings.repeat_transmit == 10


def test_missing_explicit_config_rejected(tmp_path: Path) -> None:
    with pytest.raises(ConfigError, match="does not exist"):
        load_settings(tmp_path / "nope.yaml")


def test_full_config_loads(isolated_config: Path) -> None:
    _write_config(
        isolated_config,
        """
backend: sysfs
pin: 27
protocol: 2
encoding: a
repeat_transmit: 4
protocols:
  6:
    pulse_length: 700
    sync: [1, 81]
    zero: [1, 2]
    one: [2, 1]
    inverted: true
""",
    )

    settings = load_settings()
    assert settings.backend == "sysfs"
    assert settings.pin == 27
    assert settings.protocol == "2"
    assert settings.encoding == "A"
    assert settings.repeat_transmit == 4
    assert settings.protocols["6"]["inverted"] is True
    assert settings.source == isolated_config


def test_env_var_selects_config(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    path = tmp_path / "other.yaml"
    _write_config(path, "backend: dry-run\n")
    monkeypatch.setenv(CONFIG_ENV_VAR, str(path))
    assert load_settings().backend == "dry-run"


def test_empty_config_gives_defaults(isolated_config: Path) -> None:
    _write_config(isolated_config, "")
    assert load_settings().pin == 17


@pytest.mark.parametrize(
    "content",
    [
        "repeat_transmit: 0\n",
        "backend: arduino\n",
        "pin: -1\n",
        "colour: blue\n",
        "protocols:\n  x:\n    pulse_length: 300\n    sync: [1]\n    zero: [1, 3]\n    one: [3, 1]\n",
        "protocols:\n  x:\n    pulse_length: 300\n    zero: [1, 3]\n    one: [3, 1]\n",
    ],
)
def test_schema_violations_rejected(isolated_config: Path, content: str) -> None:
    _write_config(isolated_config, content)
    with pytest.raises(ConfigError, match="Schema validation failed"):
        load_settings()


def test_duplicate_keys_rejected(isolated_config: Path) -> None:
    _write_config(isolated_config, "pin: 17\npin: 27\n")
    with pytest.raises(ConfigError, match="Duplicate key 'pin'"):
        load_settings()


def test_invalid_yaml_rejected(isolated_config: Path) -> None:
    _write_config(isolated_config, "pin: [17\n")
    with pytest.raises(ConfigError, match="Invalid YAML"):
        load_settings()


def test_non_mapping_root_rejected(isolated_config: Path) -> None:
    _write_config(isolated_config, "- 17\n")
    with pytest.raises(ConfigError, match="mapping at root"):
        load_settings()


def test_non_boolean_inverted_rejected(isolated_config: Path) -> None:
    _write_config(
        isolated_config,
        "protocols:\n  x:\n    pulse_length: 300\n    sync: [1, 31]\n    zero: [1, 3]\n"
        "    one: [3, 1]\n    inverted: maybe\n",
    )
    with pytest.raises(ConfigError, match="must be boolean"):
        load_settings()
