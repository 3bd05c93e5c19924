"""Configuration model, generic options, and config file loading."""

from __future__ import annotations

import json
import os
from collections.abc import Sequence
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, ValidationError, field_validator

from .constants import (
    CONF_ENV_VAR,
    DEFAULT_FS,
    DEFAULT_STATE_FILE,
    DEFAULT_WORKING_DIR,
)
from .errors import ConfigError

GENERIC_USAGE = """\
Generic options supported are:
-conf <configuration file>    specify an application configuration file
-D <key=value>                define a value for a given property
-fs <uri>                     specify the default filesystem URI, overrides
                              the 'default_fs' property from configurations

The general command line syntax is:
ecadmin [genericOptions] [COMMAND]"""

_OPT_CONF = "-conf"
_OPT_DEFINE = "-D"
_OPT_FS = "-fs"


class AdminConfig(BaseModel):
    model_config = ConfigDict(extra="forbid", validate_default=True)

    default_fs: str = DEFAULT_FS
    state_file: Path = Path(DEFAULT_STATE_FILE)
    working_dir: str = DEFAULT_WORKING_DIR
    log_file: Path | None = None

    @field_validator("default_fs")
    @classmethod
    def _fs_is_uri(cls, value: str) -> str:
        scheme, sep, _rest = value.partition("://")
        if not sep or not scheme:
            raise ValueError(f"default_fs must be a URI like {DEFAULT_FS}")
        return value

    @field_validator("working_dir")
    @classmethod
    def _working_dir_absolute(cls, value: str) -> str:
        if not value.startswith("/"):
            raise ValueError("working_dir must be an absolute namespace path")
        return value

    @field_validator("state_file", "log_file")
    @classmethod
    def _expand_home(cls, value: Path | None) -> Path | None:
        if value is None:
            return None
        return value.expanduser()


@dataclass
class GenericOptions:
    conf_path: Path | None = None
    overrides: dict[str, str] = field(default_factory=dict)


def parse_generic_options(argv: Sequence[str]) -> tuple[GenericOptions, list[str]]:
    """Split leading generic options from the command and its arguments.

    Parsing stops at the first token that is not a generic option.
    """
    options = GenericOptions()
    args = list(argv)

    i = 0
    while i < len(args):
        token = args[i]
        if token in (_OPT_CONF, _OPT_DEFINE, _OPT_FS):
            if i + 1 >= len(args):
                raise ConfigError(f"{token} requires an argument.")
            value = args[i + 1]
            if token == _OPT_CONF:
                options.conf_path = Path(value).expanduser()
            elif token == _OPT_FS:
                options.overrides["default_fs"] = value
            else:
                _add_property(options, value)
            i += 2
        elif token.startswith(_OPT_DEFINE) and len(token) > len(_OPT_DEFINE):
            _add_property(options, token[len(_OPT_DEFINE):])
            i += 1
        else:
            break

    return options, args[i:]


def load_config(
    conf_path: Path | None = None,
    overrides: dict[str, str] | None = None,
) -> AdminConfig:
    """Build the effective configuration.

    Precedence: defaults, then the config file (``conf_path``, else the file
    named by $ECADMIN_CONF), then ``overrides``.
    """
    if conf_path is None:
        env_value = os.environ.get(CONF_ENV_VAR)
        if env_value:
            conf_path = Path(env_value).expanduser()

    data: dict[str, Any] = {}
    if conf_path is not None:
        data.update(_read_config_file(conf_path))
    if overrides:
        data.update(overrides)

    try:
        return AdminConfig.model_validate(data)
    except ValidationError as exc:
        raise ConfigError(f"Invalid configuration: {_first_error(exc)}") from exc


def _read_config_file(conf_path: Path) -> dict[str, Any]:
    try:
        text = conf_path.read_text(encoding="utf-8")
    except OSError as exc:
        raise ConfigError(f"Could not read configuration file: {conf_path}") from exc

    try:
        loaded = json.loads(text)
    except json.JSONDecodeError as exc:
        raise ConfigError(f"Invalid configuration JSON: {conf_path}") from exc

    if not isinstance(loaded, dict):
        raise ConfigError(f"Configuration JSON must be an object: {conf_path}")
    return loaded


def _add_property(options: GenericOptions, definition: str) -> None:
    key, sep, value = definition.partition("=")
    key = key.strip()
    if not sep or not key:
        raise ConfigError(f"Property definition must be key=value: {definition}")
    options.overrides[key] = value


def _first_error(exc: ValidationError) -> str:
    error = exc.errors()[0]
    location = ".".join(str(part) for part in error["loc"])
    if location:
        return f"{location}: {error['msg']}"
    return error["msg"]
