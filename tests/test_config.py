"""Tests for configuration loading and generic options."""

import json
from pathlib import Path

import pytest

from ecadmin.config import AdminConfig, load_config, parse_generic_options
from ecadmin.errors import ConfigError


def test_defaults() -> None:
    config = load_config()
    assert config.default_fs == "ecfs://localhost"
    assert config.working_dir == "/"
    assert config.log_file is None
    assert config.state_file == Path("~/.ecadmin/namespace.json").expanduser()


def test_parse_generic_options_stops_at_command() -> None:
    options, remaining = parse_generic_options(
        ["-D", "working_dir=/user", "-Dlog_file=/tmp/ec.log", "-getPolicy", "-path", "/a"]
    )
    assert options.overrides == {"working_dir": "/user", "log_file": "/tmp/ec.log"}
    assert options.conf_path is None
    assert remaining == ["-getPolicy", "-path", "/a"]


def test_parse_generic_options_conf_and_fs(tmp_path: Path) -> None:
    conf = tmp_path / "ec.json"
    options, remaining = parse_generic_options(
        ["-conf", str(conf), "-fs", "ecfs://nn1", "-listPolicies"]
    )
    assert options.conf_path == conf
    assert options.overrides == {"default_fs": "ecfs://nn1"}
    assert remaining == ["-listPolicies"]


def test_parse_generic_options_later_definition_wins() -> None:
    options, _ = parse_generic_options(["-D", "working_dir=/a", "-D", "working_dir=/b"])
    assert options.overrides == {"working_dir": "/b"}


def test_parse_generic_options_without_value_raises() -> None:
    with pytest.raises(ConfigError, match="-conf requires an argument"):
        parse_generic_options(["-conf"])


def test_parse_generic_options_malformed_definition_raises() -> None:
    with pytest.raises(ConfigError, match="key=value"):
        parse_generic_options(["-D", "novalue", "-listPolicies"])


def test_load_config_file_then_overrides(tmp_path: Path) -> None:
    conf = tmp_path / "ec.json"
    conf.write_text(
        json.dumps({"default_fs": "ecfs://nn1", "working_dir": "/from-file"}),
        encoding="utf-8",
    )

    config = load_config(conf, {"working_dir": "/from-cli"})

    assert config.default_fs == "ecfs://nn1"
    assert config.working_dir == "/from-cli"


def test_load_config_from_env_var(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    conf = tmp_path / "ec.json"
    conf.write_text(json.dumps({"working_dir": "/env"}), encoding="utf-8")
    monkeypatch.setenv("ECADMIN_CONF", str(conf))

    assert load_config().working_dir == "/env"


def test_load_config_missing_file(tmp_path: Path) -> None:
    with pytest.raises(ConfigError, match="Could not read configuration file"):
        load_config(tmp_path / "missing.json")


def test_load_config_invalid_json(tmp_path: Path) -> None:
    conf = tmp_path / "ec.json"
    conf.write_text("[1, 2", encoding="utf-8")
    with pytest.raises(ConfigError, match="Invalid configuration JSON"):
        load_config(conf)


def test_load_config_non_object(tmp_path: Path) -> None:
    conf = tmp_path / "ec.json"
    conf.write_text("[1, 2]", encoding="utf-8")
    with pytest.raises(ConfigError, match="must be an object"):
        load_config(conf)


@pytest.mark.parametrize(
    "overrides",
    [
        {"unknown_key": "x"},
        {"default_fs": "localhost"},
        {"working_dir": "relative"},
    ],
)
def test_load_config_rejects_invalid_values(overrides: dict[str, str]) -> None:
    with pytest.raises(ConfigError, match="Invalid configuration"):
        load_config(None, overrides)


def test_state_file_expands_home(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.setenv("HOME", str(tmp_path))
    config = AdminConfig(state_file=Path("~/ns.json"))
    assert config.state_file == tmp_path / "ns.json"
